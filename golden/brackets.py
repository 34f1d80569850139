"""
Bracket matching: each opening bracket is popped by its closing partner.
"""


def bracket_rules():
    return pairs("([{<", ")]}>")

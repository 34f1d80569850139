"""
Structured tokens: elements are dicts, matched by deep equality.
"""


def token_rules():
    def kw(value):
        return {"type": "KEYWORD", "value": value}

    return rule_list([
        (kw("begin"), [kw("end"), kw("end.")]),
        (kw("if"), [kw("then")]),
        (kw("while"), [kw("do")]),
    ])

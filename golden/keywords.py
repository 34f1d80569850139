"""
Block keywords of a Pascal-like language, as plain strings.

- `begin` closes with `end` (nested block) or `end.` (program end).
- `if` closes with `then`.
- `repeat` closes with `until`.
- `case` closes with `end`.
"""


def keyword_rules():
    return [
        rule("begin", "end", "end."),
        rule("if", "then"),
        rule("repeat", "until"),
        rule("case", "end"),
    ]

"""Keyword-nesting example.

A toy tokenizer front end tracks ``begin ... end`` and ``if ... then`` nesting
with a counterweight stack. ``walkthrough()`` replays the session step by
step and returns the trace; run this file (or ``cwstack demo``) to print it.
"""

from __future__ import annotations

from dataclasses import dataclass

from cwstack.helpers import rule
from cwstack.rules import CounterweightRule
from cwstack.stack import CounterweightStack


@dataclass(frozen=True)
class Token:
    type: str
    value: str


BEGIN = Token("KEYWORD", "begin")
END = Token("KEYWORD", "end")
END_DOT = Token("KEYWORD", "end.")
IF = Token("KEYWORD", "if")
THEN = Token("KEYWORD", "then")
IDENT = Token("IDENTIFIER", "myVar")


def keyword_rules() -> list[CounterweightRule[Token]]:
    """``begin`` closes with ``end`` or ``end.``; ``if`` closes with ``then``."""
    return [
        rule(BEGIN, END, END_DOT),
        rule(IF, THEN),
    ]


@dataclass(frozen=True)
class TraceStep:
    op: str
    arg: Token | None
    outcome: object
    size: int
    top: Token | None

    def describe(self) -> str:
        arg = f"({self.arg.value})" if self.arg is not None else "()"
        top = self.top.value if self.top is not None else "—"
        match self.outcome:
            case None if self.op == "pop":
                result = "rejected"
            case Token(value=v):
                result = f"-> {v}"
            case bool(b):
                result = f"-> {b}"
            case _:
                result = "ok"
        return f"{self.op}{arg:<9} {result:<10} size={self.size} top={top}"


def walkthrough() -> list[TraceStep]:
    """Push/pop session showing accepted and rejected pops.

    The identifier token has no rule, so once it is on top nothing can be
    popped until ``clear()``.
    """
    stack: CounterweightStack[Token] = CounterweightStack(keyword_rules())
    trace: list[TraceStep] = []

    def record(op: str, arg: Token | None, outcome: object) -> None:
        trace.append(TraceStep(op, arg, outcome, stack.size(), stack.peek()))

    stack.push(BEGIN)
    record("push", BEGIN, None)
    stack.push(IF)
    record("push", IF, None)
    record("pop", BEGIN, stack.pop(BEGIN))
    record("pop", THEN, stack.pop(THEN))
    stack.push(IDENT)
    record("push", IDENT, None)
    record("pop", END, stack.pop(END))
    record("pop", END_DOT, stack.pop(END_DOT))
    stack.clear()
    record("clear", None, None)
    stack.push(BEGIN)
    record("push", BEGIN, None)
    record("pop", END, stack.pop(END))
    record("is_empty", None, stack.is_empty())
    return trace


if __name__ == "__main__":
    for step in walkthrough():
        print(step.describe())

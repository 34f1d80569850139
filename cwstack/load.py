from __future__ import annotations

import re
from typing import Any

from cwstack.rules import CounterweightRule


def _is_rule_list(obj: object) -> bool:
    return isinstance(obj, (list, tuple)) and all(
        isinstance(r, CounterweightRule) for r in obj
    )


def load_rules_from_file(path: str) -> list[CounterweightRule[Any]] | str:
    """Load a .py file, locate the ``*_rules()`` entry-point, and return its rules.

    The function searches the executed module's namespace for:

    1. Any callable whose name ends in ``_rules``.
    2. Falls back to any callable that, when called with no arguments, returns
       a list of :class:`~cwstack.rules.CounterweightRule`.

    Returns the rule list on success, or an error string on any failure.
    """
    try:
        with open(path) as f:
            source = f.read()
    except OSError as e:
        return f"Could not read file: {e}"

    namespace: dict[str, Any] = {}
    try:
        exec("from cwstack import *", namespace)
        exec("from cwstack.helpers import *", namespace)
    except Exception as e:
        return f"Failed to import cwstack builtins: {e}"
    preloaded = dict(namespace)

    try:
        exec(compile(source, path, "exec"), namespace)
    except Exception as e:
        return f"Code execution failed: {e}"

    # 1. Prefer functions whose name ends in _rules.
    candidates = [
        (name, obj)
        for name, obj in namespace.items()
        if callable(obj)
        and re.search(r"_rules$", name)
        and not name.startswith("_")
        and preloaded.get(name) is not obj
    ]

    # 2. If nothing matches the naming convention, probe every callable the
    # file itself defined.
    if not candidates:
        candidates = [
            (name, obj)
            for name, obj in namespace.items()
            if callable(obj)
            and not name.startswith("_")
            and preloaded.get(name) is not obj
            and not isinstance(obj, type)
        ]

    if not candidates:
        return "No callable rules-factory function found in file"

    # Try each candidate in order; return the first rule list we get back.
    last_err = ""
    for name, fn in candidates:
        try:
            result = fn()
        except Exception as e:
            last_err = f"'{name}()' raised: {e}"
            continue
        if _is_rule_list(result):
            return list(result)
        last_err = f"'{name}()' returned {type(result).__name__}, expected a list of CounterweightRule"

    return last_err or "No suitable rules-factory function found"

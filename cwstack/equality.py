"""Structural equality for stack elements.

Rules and lookups are defined by value, not by reference: a token built twice
from the same fields must match a rule written with a third copy of it.
``deep_equal`` delegates the structural walk to ``DeepDiff``, so:

  - values of different types are never equal (``1``, ``1.0`` and ``True``
    are three different elements; so are ``[1]`` and ``(1,)``)
  - mappings, sequences, sets, dataclasses, ``__dict__`` and ``__slots__``
    objects compare field by field, recursively
  - custom ``__eq__`` methods are not consulted; inject ``eq=`` for that

Objects that carry no state at all (``object()`` sentinels, locks and other
opaque handles) have nothing to compare structurally. They are
*identity-only*: equal to themselves and to nothing else.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from deepdiff import DeepDiff

type Comparator[T] = Callable[[T, T], bool]


def slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__"))
    return names


def is_identity_only(obj: object) -> bool:
    """True for objects with no comparable state and no custom ``__eq__``."""
    cls = type(obj)
    return (
        cls.__eq__ is object.__eq__
        and not hasattr(obj, "__dict__")
        and not slot_names(cls)
    )


def deep_equal(a: Any, b: Any) -> bool:
    """Return True if ``a`` and ``b`` are structurally equal."""
    if a is b:
        return True
    if is_identity_only(a) or is_identity_only(b):
        return False
    return not DeepDiff(a, b)

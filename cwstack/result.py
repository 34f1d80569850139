"""Result type for operations that report failure instead of raising.

Used by ``CounterweightStack.try_pop`` (the error explains a rejected pop)
and by the CLI settings loader.
"""

from dataclasses import dataclass
from typing import TypeVar, Generic

T = TypeVar("T")
E = TypeVar("E", bound=Exception)
D = TypeVar("D")

@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

type Result[T, E] = Ok[T] | Err[E]


def unwrap_or(result: "Result[T, E]", default: D) -> T | D:
    """The ``Ok`` value, or ``default`` for any ``Err``."""
    match result:
        case Ok(value):
            return value
        case Err(_):
            return default

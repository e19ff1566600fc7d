"""
Result envelope for list operations that may decline to act.

A mutating call that declines to act leaves the list untouched. A silent
no-op would leave the caller unable to tell "nothing to remove" from
"allocation failed", so every mutating call returns ``Ok(value)`` or
``Err(error)``. Ignoring the return value gives plain no-op behavior.

Manifesto:
    - **Explicit over Implicit:** The outcome is a value, not a guess
    - **Non-breaking:** Returning a Result costs callers nothing if ignored
    - **Matchable:** ``match`` on ``Ok(value)`` / ``Err(error)``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Result[T]                                │
        ├──────────────────────────────┬──────────────────────────────┤
        │     Ok[T]                    │     Err[T]                   │
        │ • value: T                   │ • error: Exception           │
        │ • flat_map()                 │ • flat_map() passes through  │
        │ • unwrap()                   │ • unwrap() raises error      │
        └──────────────────────────────┴──────────────────────────────┘

Examples:
    >>> from sllist.core.result import Ok, Err
    >>> lst.insert_end(b"\\x05\\x00\\x00\\x00")
    Ok(0)
    >>> match lst.remove_at_index(9):
    ...     case Ok(payload):
    ...         print(payload)
    ...     case Err(error):
    ...         print(error.category.value)
    BOUNDS

Tags:
    result-pattern, error-handling, sllist

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful result containing a value.

    Examples:
        >>> Ok(3).unwrap()
        3
        >>> Ok(3).is_err()
        False
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result containing an error.

    The list that produced it is unchanged.

    Examples:
        >>> Err(ValueError("bad")).unwrap_or(0)
        0
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


__all__ = [
    "Result",
    "Ok",
    "Err",
]

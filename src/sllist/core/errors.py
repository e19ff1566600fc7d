"""
Structured error types for the sllist engine.

Every way a list operation can decline to act has its own error type. The
engine never lets these escape by default: mutating calls return them inside
an ``Err`` (see :mod:`sllist.core.result`) and leave the list untouched. The
types still matter, because callers can tell an empty-list removal from an
out-of-bounds index from an allocator refusing a block.

Manifesto:
    - **Typed hierarchy:** One class per failure class, not a bare ``ValueError``
    - **Categorized:** Each error carries an ``ErrorCategory`` for routing/logging
    - **Rich context:** Operation name, index, length, sizes travel with the error
    - **Error chaining:** The underlying exception (e.g. ``MemoryError``) is kept

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       SllistError                                │
        │             (category, context, cause)                           │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  AllocationError     InvalidArgumentError    IndexOutOfBounds    │
        │  (ALLOCATION)        (ARGUMENT)              (BOUNDS)            │
        │                           │                                      │
        │                      PayloadSizeError                            │
        │                                                                  │
        │  EmptyListError      ListDestroyedError      DoubleReleaseError  │
        │  (EMPTY)             (LIFECYCLE)             (INTERNAL)          │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = IndexOutOfBoundsError("insert_at_index", index=8, length=3)
    >>> error.category
    <ErrorCategory.BOUNDS: 'BOUNDS'>
    >>> error.to_dict()["context"]
    {'operation': 'insert_at_index', 'index': 8, 'length': 3}

    Adding context fluently:

    >>> EmptyListError("remove_end").with_context(element_size=4).context.element_size
    4

Guardrails:
    ❌ DON'T: Raise these from mutating calls unless ``raise_on_noop`` is set
    ✅ DO: Return them wrapped in ``Err``

    ❌ DON'T: Drop the allocator's underlying exception
    ✅ DO: Pass it as ``cause=``

Tags:
    error-handling, exception-hierarchy, error-context, sllist

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and logging.

    Attributes:
        ALLOCATION: Allocator could not satisfy a block
        ARGUMENT: Absent or malformed argument (list, data, index)
        BOUNDS: Index has no position in the chain
        EMPTY: Removal from a list with no nodes
        LIFECYCLE: Use of a destroyed list
        INTERNAL: Broken invariant (double release, etc.)
        UNKNOWN: Uncategorized errors
    """

    ALLOCATION = "ALLOCATION"
    ARGUMENT = "ARGUMENT"
    BOUNDS = "BOUNDS"
    EMPTY = "EMPTY"
    LIFECYCLE = "LIFECYCLE"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only the fields that are set show up in ``to_dict()``, so a log line for
    an empty-list removal does not carry a meaningless ``index=None``.

    Attributes:
        operation: Engine operation that declined to act (``"insert_end"``...)
        index: Index argument, for positional operations
        length: Chain length at the time of the call
        element_size: The list's configured element size
        data_size: Size in bytes of the caller's data
        metadata: Additional key-value pairs
    """

    operation: str | None = None
    index: int | None = None
    length: int | None = None
    element_size: int | None = None
    data_size: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["operation", "index", "length", "element_size", "data_size"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class SllistError(Exception):
    """
    Base exception for all sllist errors.

    Subclasses set ``default_category``; everything else is per-instance.

    Examples:
        >>> error = SllistError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> try:
        ...     raise MemoryError()
        ... except MemoryError as e:
        ...     error = SllistError("Out of memory", cause=e)
        >>> error.cause
        MemoryError()
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> SllistError:
        """
        Add context to this error (fluent API).

        Usage:
            return Err(EmptyListError("remove_front").with_context(element_size=4))
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = repr(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# ALLOCATION ERRORS
# =============================================================================


class AllocationError(SllistError):
    """The allocator could not provide a block."""

    default_category = ErrorCategory.ALLOCATION

    def __init__(self, message: str = "Allocation failed", *, kind: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.kind = kind
        if kind is not None:
            self.context.metadata.setdefault("block_kind", kind)


class DoubleReleaseError(SllistError):
    """A block was released a second time."""

    default_category = ErrorCategory.INTERNAL

    def __init__(self, block_id: int, kind: str):
        self.block_id = block_id
        self.kind = kind
        super().__init__(
            f"Block {block_id} ({kind}) released twice",
            context=ErrorContext(metadata={"block_id": block_id, "block_kind": kind}),
        )


# =============================================================================
# ARGUMENT ERRORS
# =============================================================================


class InvalidArgumentError(SllistError):
    """
    Absent or malformed argument.

    Covers a missing list handle, missing data, data without the buffer
    protocol, and indexes or sizes that are not non-negative integers.
    """

    default_category = ErrorCategory.ARGUMENT

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


class PayloadSizeError(InvalidArgumentError):
    """Caller data is shorter than the list's element size."""

    def __init__(self, operation: str, *, element_size: int, data_size: int):
        super().__init__(
            f"{operation}: data holds {data_size} bytes, element size is {element_size}",
            field="data",
            context=ErrorContext(
                operation=operation, element_size=element_size, data_size=data_size
            ),
        )


# =============================================================================
# POSITIONAL ERRORS
# =============================================================================


class IndexOutOfBoundsError(SllistError):
    """No position exists in the chain for the requested index."""

    default_category = ErrorCategory.BOUNDS

    def __init__(self, operation: str, *, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(
            f"{operation}: index {index} out of bounds for length {length}",
            context=ErrorContext(operation=operation, index=index, length=length),
        )


class EmptyListError(SllistError):
    """Removal requested on a list with no nodes."""

    default_category = ErrorCategory.EMPTY

    def __init__(self, operation: str, *, index: int | None = None):
        super().__init__(
            f"{operation}: list is empty",
            context=ErrorContext(operation=operation, index=index, length=0),
        )


# =============================================================================
# LIFECYCLE ERRORS
# =============================================================================


class ListDestroyedError(SllistError):
    """The list was already destroyed."""

    default_category = ErrorCategory.LIFECYCLE

    def __init__(self, operation: str):
        super().__init__(
            f"{operation}: list has been destroyed",
            context=ErrorContext(operation=operation),
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, SllistError):
        return error.category
    if isinstance(error, MemoryError):
        return ErrorCategory.ALLOCATION
    if isinstance(error, IndexError):
        return ErrorCategory.BOUNDS
    if isinstance(error, (TypeError, ValueError)):
        return ErrorCategory.ARGUMENT
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "SllistError",
    "AllocationError",
    "DoubleReleaseError",
    "InvalidArgumentError",
    "PayloadSizeError",
    "IndexOutOfBoundsError",
    "EmptyListError",
    "ListDestroyedError",
    "categorize_error",
]

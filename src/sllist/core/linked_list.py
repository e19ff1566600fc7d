"""
The list engine: a singly linked chain of fixed-size byte payloads.

A list is created for one ``element_size`` and stores independent copies of
the first ``element_size`` bytes of whatever the caller inserts. Positional
insertion and removal walk the chain from the head; length is recounted on
every call. Calls that cannot act leave the chain exactly as it was and
return ``Err(...)`` describing why, unless ``raise_on_noop`` is set.

Architecture:
    ::

        SinglyLinkedList ──owns──> LIST block
              │
              └── _head ──> Node ──> Node ──> Node ──> None
                             │
                             ├── NODE block
                             └── PAYLOAD block (element_size bytes)

Bounds policy:
    ==========================  =========================================
    insert_at_index(d, i)       i == 0 → front; i == len → end;
                                i > len → IndexOutOfBoundsError (no clamp)
    remove_at_index(i)          empty → EmptyListError;
                                i >= len → IndexOutOfBoundsError
    ==========================  =========================================

Examples:
    >>> from sllist.core.codecs import INT32
    >>> lst = SinglyLinkedList(INT32.element_size)
    >>> for value in (5, 10, 15):
    ...     _ = lst.insert_end(INT32.encode(value))
    >>> lst.insert_at_index(INT32.encode(20), 3)
    Ok(3)
    >>> lst.insert_at_index(INT32.encode(99), 42).is_err()
    True
    >>> [INT32.decode(p) for p in lst.snapshot()]
    [5, 10, 15, 20]
    >>> lst.print_list(INT32.visitor(lambda v: print(v, end=" -> ")))
    5 -> 10 -> 15 -> 20 -> NULL
    Ok(4)
    >>> lst.destroy()

Tags:
    linked-list, data-structure, engine, sllist

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import sys
from typing import Any, Callable, TextIO

from sllist.core.allocator import Allocator, BlockKind, HeapAllocator
from sllist.core.errors import (
    EmptyListError,
    ErrorContext,
    IndexOutOfBoundsError,
    InvalidArgumentError,
    ListDestroyedError,
    PayloadSizeError,
    SllistError,
)
from sllist.core.logging import get_logger
from sllist.core.node import Node
from sllist.core.result import Err, Ok, Result
from sllist.core.settings import SllistSettings, get_settings


logger = get_logger(__name__)

Payload = bytes | bytearray | memoryview
Visitor = Callable[[bytes], Any]


class SinglyLinkedList:
    """Singly linked list of fixed-size byte payloads.

    Args:
        element_size: Bytes per element, fixed for the list's lifetime. Zero is allowed.
        allocator: Block allocator (defaults to a fresh :class:`HeapAllocator`)
        settings: Settings override (defaults to :func:`get_settings`)
        raise_on_noop: Raise instead of returning ``Err`` (defaults to settings)

    Raises:
        InvalidArgumentError: ``element_size`` is not a non-negative integer.
        AllocationError: The allocator refused the list block.
    """

    def __init__(
        self,
        element_size: int,
        *,
        allocator: Allocator | None = None,
        settings: SllistSettings | None = None,
        raise_on_noop: bool | None = None,
    ):
        if isinstance(element_size, bool) or not isinstance(element_size, int) or element_size < 0:
            raise InvalidArgumentError(
                "element_size must be a non-negative integer",
                field="element_size",
                value=element_size,
                context=ErrorContext(operation="create"),
            )
        self._settings = settings or get_settings()
        self._raise_on_noop = (
            self._settings.raise_on_noop if raise_on_noop is None else raise_on_noop
        )
        self._allocator: Allocator = allocator or HeapAllocator()
        self._block = self._allocator.allocate(BlockKind.LIST)
        self._element_size = element_size
        self._head: Node | None = None
        self._destroyed = False
        logger.debug("list_created", element_size=element_size, block_id=self._block.block_id)

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def element_size(self) -> int:
        return self._element_size

    @property
    def allocator(self) -> Allocator:
        return self._allocator

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def is_empty(self) -> bool:
        self._ensure_alive("is_empty")
        return self._head is None

    # ------------------------------------------------------------------ #
    # Insertion
    # ------------------------------------------------------------------ #

    def insert_front(self, data: Payload | None) -> Result[int]:
        """Insert a copy of ``data`` as the first element."""
        operation = "insert_front"
        self._ensure_alive(operation)
        match self._coerce(data, operation).flat_map(self._new_node):
            case Err(error):
                return self._decline(error, operation)
            case Ok(node):
                node.next = self._head
                self._head = node
                return Ok(0)

    def insert_end(self, data: Payload | None) -> Result[int]:
        """Append a copy of ``data`` after the last element. O(n)."""
        operation = "insert_end"
        self._ensure_alive(operation)
        match self._coerce(data, operation).flat_map(self._new_node):
            case Err(error):
                return self._decline(error, operation)
            case Ok(node):
                if self._head is None:
                    self._head = node
                    return Ok(0)
                index = 1
                current = self._head
                while current.next is not None:
                    current = current.next
                    index += 1
                current.next = node
                return Ok(index)

    def insert_at_index(self, data: Payload | None, index: int) -> Result[int]:
        """Insert a copy of ``data`` so it becomes the element at ``index``.

        ``index`` may equal the current length (append) but not exceed it.
        """
        operation = "insert_at_index"
        self._ensure_alive(operation)
        match self._coerce(data, operation):
            case Err(error):
                return self._decline(error, operation)
            case Ok(payload):
                pass
        match self._coerce_index(index, operation):
            case Err(error):
                return self._decline(error, operation)

        prev: Node | None = None
        if index > 0:
            prev = self._node_before(index)
            if prev is None:
                return self._decline(
                    IndexOutOfBoundsError(operation, index=index, length=self.length()),
                    operation,
                )

        match self._new_node(payload):
            case Err(error):
                return self._decline(error, operation)
            case Ok(node):
                if prev is None:
                    node.next = self._head
                    self._head = node
                else:
                    node.next = prev.next
                    prev.next = node
                return Ok(index)

    # ------------------------------------------------------------------ #
    # Removal
    # ------------------------------------------------------------------ #

    def remove_front(self) -> Result[bytes]:
        """Remove the first element and return its payload."""
        operation = "remove_front"
        self._ensure_alive(operation)
        head = self._head
        if head is None:
            return self._decline(EmptyListError(operation), operation)
        self._head = head.next
        return Ok(self._release(head))

    def remove_end(self) -> Result[bytes]:
        """Remove the last element and return its payload. O(n)."""
        operation = "remove_end"
        self._ensure_alive(operation)
        head = self._head
        if head is None:
            return self._decline(EmptyListError(operation), operation)
        if head.next is None:
            self._head = None
            return Ok(self._release(head))

        current = head
        while current.next.next is not None:
            current = current.next
        tail = current.next
        current.next = None
        return Ok(self._release(tail))

    def remove_at_index(self, index: int) -> Result[bytes]:
        """Remove the element at ``index`` and return its payload."""
        operation = "remove_at_index"
        self._ensure_alive(operation)
        match self._coerce_index(index, operation):
            case Err(error):
                return self._decline(error, operation)
        if self._head is None:
            return self._decline(EmptyListError(operation, index=index), operation)
        if index == 0:
            return self.remove_front()

        prev = self._node_before(index)
        if prev is None or prev.next is None:
            return self._decline(
                IndexOutOfBoundsError(operation, index=index, length=self.length()),
                operation,
            )
        victim = prev.next
        prev.next = victim.next
        return Ok(self._release(victim))

    # ------------------------------------------------------------------ #
    # Queries and traversal
    # ------------------------------------------------------------------ #

    def length(self) -> int:
        """Count nodes by walking the chain. O(n), never cached."""
        self._ensure_alive("length")
        count = 0
        current = self._head
        while current is not None:
            count += 1
            current = current.next
        return count

    def __len__(self) -> int:
        return self.length()

    def traverse(self, visit: Visitor) -> Result[int]:
        """Call ``visit`` with a copy of each payload, first to last.

        Returns the number of elements visited.
        """
        operation = "traverse"
        self._ensure_alive(operation)
        if not callable(visit):
            return self._decline(
                InvalidArgumentError(
                    f"{operation}: visit must be callable",
                    field="visit",
                    value=type(visit).__name__,
                    context=ErrorContext(operation=operation),
                ),
                operation,
            )
        count = 0
        current = self._head
        while current is not None:
            visit(current.read())
            count += 1
            current = current.next
        return Ok(count)

    def print_list(
        self,
        display: Visitor,
        *,
        stream: TextIO | None = None,
        terminator: str | None = None,
    ) -> Result[int]:
        """Traverse with ``display``, then write the terminator token and a newline.

        The terminator is written even for an empty list.
        """
        result = self.traverse(display)
        if result.is_ok():
            out = stream if stream is not None else sys.stdout
            token = terminator if terminator is not None else self._settings.terminator
            out.write(f"{token}\n")
        return result

    def snapshot(self) -> list[bytes]:
        """Payload copies in chain order."""
        payloads: list[bytes] = []
        self.traverse(payloads.append)
        return payloads

    # ------------------------------------------------------------------ #
    # Teardown
    # ------------------------------------------------------------------ #

    def clear(self) -> int:
        """Release every node but keep the list usable. Returns the node count released."""
        self._ensure_alive("clear")
        released = self._release_chain()
        logger.debug("list_cleared", nodes_released=released)
        return released

    def destroy(self) -> None:
        """Release every node and the list's own block.

        The list cannot be used afterwards; any further call raises
        :class:`ListDestroyedError`.
        """
        self._ensure_alive("destroy")
        released = self._release_chain()
        self._allocator.release(self._block)
        self._destroyed = True
        logger.debug("list_destroyed", nodes_released=released, block_id=self._block.block_id)

    def __enter__(self) -> SinglyLinkedList:
        return self

    def __exit__(self, *args) -> None:
        if not self._destroyed:
            self.destroy()

    def __repr__(self) -> str:
        if self._destroyed:
            return f"SinglyLinkedList(element_size={self._element_size}, destroyed)"
        return f"SinglyLinkedList(element_size={self._element_size}, length={self.length()})"

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _ensure_alive(self, operation: str) -> None:
        if self._destroyed:
            raise ListDestroyedError(operation)

    def _decline(self, error: SllistError, operation: str) -> Err:
        error.with_context(operation=error.context.operation or operation)
        if error.context.element_size is None:
            error.with_context(element_size=self._element_size)
        logger.debug("operation_ignored", **error.to_dict())
        if self._raise_on_noop:
            raise error
        return Err(error)

    def _coerce(self, data: Any, operation: str) -> Result[bytes]:
        """Copy the first ``element_size`` bytes of ``data``."""
        if data is None:
            return Err(
                InvalidArgumentError(
                    f"{operation}: data is required",
                    field="data",
                    context=ErrorContext(operation=operation),
                )
            )
        try:
            raw = memoryview(data).tobytes()
        except TypeError:
            return Err(
                InvalidArgumentError(
                    f"{operation}: data must support the buffer protocol",
                    field="data",
                    value=type(data).__name__,
                    context=ErrorContext(operation=operation),
                )
            )
        if len(raw) < self._element_size:
            return Err(
                PayloadSizeError(operation, element_size=self._element_size, data_size=len(raw))
            )
        return Ok(raw[: self._element_size])

    @staticmethod
    def _coerce_index(index: Any, operation: str) -> Result[int]:
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            return Err(
                InvalidArgumentError(
                    f"{operation}: index must be a non-negative integer",
                    field="index",
                    value=index,
                    context=ErrorContext(operation=operation),
                )
            )
        return Ok(index)

    def _new_node(self, payload: bytes) -> Result[Node]:
        return Node.allocate(self._allocator, payload)

    def _node_before(self, index: int) -> Node | None:
        """Node at ``index - 1``, or None when the chain is shorter. Requires index >= 1."""
        current = self._head
        for _ in range(index - 1):
            if current is None:
                return None
            current = current.next
        return current

    def _release(self, node: Node) -> bytes:
        payload = node.read()
        node.release(self._allocator)
        return payload

    def _release_chain(self) -> int:
        released = 0
        current = self._head
        self._head = None
        while current is not None:
            next_node = current.next
            current.release(self._allocator)
            current = next_node
            released += 1
        return released


__all__ = [
    "Payload",
    "SinglyLinkedList",
    "Visitor",
]

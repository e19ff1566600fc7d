"""
Block allocators backing list, node and payload storage.

A list takes one ``LIST`` block at creation. Every node takes a ``NODE``
block and a ``PAYLOAD`` block of ``element_size`` bytes. Each block is
released exactly once: by a removal, by ``clear()``, or by ``destroy()``.
Routing storage through an allocator makes the ownership rules checkable.
A second release raises, and :class:`CountingAllocator` can show that a
torn-down list left nothing outstanding.

Architecture:
    ::

        Allocator (Protocol)
        ├── HeapAllocator      - bytearray blocks, MemoryError → AllocationError
        └── CountingAllocator  - HeapAllocator + per-kind counters
                                 + failure injection (budget, fail_kinds)

        API: allocate(kind, size=0) → Block      (raises AllocationError)
             release(block)                      (raises DoubleReleaseError)

Examples:
    >>> allocator = CountingAllocator()
    >>> block = allocator.allocate(BlockKind.PAYLOAD, 4)
    >>> allocator.outstanding
    1
    >>> allocator.release(block)
    >>> allocator.outstanding
    0

    Making the next payload allocation fail:

    >>> allocator = CountingAllocator(fail_kinds={BlockKind.PAYLOAD})

Tags:
    allocator, memory, ownership, instrumentation, sllist

Doc-Types:
    - API Reference
    - Testing Guide
"""

from __future__ import annotations

import itertools
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Protocol

from sllist.core.errors import AllocationError, DoubleReleaseError


class BlockKind(str, Enum):
    """What a block stores."""

    LIST = "list"
    NODE = "node"
    PAYLOAD = "payload"


@dataclass(eq=False)
class Block:
    """One allocated storage unit.

    Attributes:
        block_id: Unique id within the issuing allocator
        kind: What the block stores
        size: Requested size in bytes
        data: The backing buffer (``size`` bytes)
        released: Set once the block has been handed back
    """

    block_id: int
    kind: BlockKind
    size: int
    data: bytearray
    released: bool = False


class Allocator(Protocol):
    """Protocol for block allocators.

    Implementations:
        - :class:`HeapAllocator` - plain bytearray blocks
        - :class:`CountingAllocator` - instrumented, with failure injection
    """

    def allocate(self, kind: BlockKind, size: int = 0) -> Block:
        """Allocate a block.

        Raises:
            AllocationError: If the block cannot be provided.
        """
        ...

    def release(self, block: Block) -> None:
        """Hand a block back.

        Raises:
            DoubleReleaseError: If the block was already released.
        """
        ...


class HeapAllocator:
    """Allocator backed by Python ``bytearray`` objects."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)

    def allocate(self, kind: BlockKind, size: int = 0) -> Block:
        """Allocate a zero-filled block of ``size`` bytes."""
        try:
            data = bytearray(size)
        except MemoryError as exc:
            raise AllocationError(
                f"Cannot allocate {size} bytes for {kind.value} block",
                kind=kind.value,
                cause=exc,
            ) from exc
        return Block(block_id=next(self._ids), kind=kind, size=size, data=data)

    def release(self, block: Block) -> None:
        """Mark a block released and drop its buffer."""
        if block.released:
            raise DoubleReleaseError(block.block_id, block.kind.value)
        block.released = True
        block.data = bytearray()


class CountingAllocator(HeapAllocator):
    """Instrumented allocator that records every allocation and release.

    Attributes:
        budget: Maximum number of successful allocations (``None`` → unlimited)
        fail_kinds: Kinds whose allocations always fail

    Example:
        allocator = CountingAllocator()
        lst = SinglyLinkedList(4, allocator=allocator)
        lst.insert_end(b"abcd")
        lst.destroy()
        assert allocator.outstanding == 0
    """

    def __init__(
        self,
        *,
        budget: int | None = None,
        fail_kinds: Iterable[BlockKind] | None = None,
    ) -> None:
        super().__init__()
        self.budget = budget
        self.fail_kinds: set[BlockKind] = set(fail_kinds or ())
        self.allocated: Counter[BlockKind] = Counter()
        self.released: Counter[BlockKind] = Counter()
        self.failed: Counter[BlockKind] = Counter()
        self._live: dict[int, Block] = {}

    def allocate(self, kind: BlockKind, size: int = 0) -> Block:
        if kind in self.fail_kinds:
            self.failed[kind] += 1
            raise AllocationError(f"Injected failure for {kind.value} block", kind=kind.value)
        if self.budget is not None and self.total_allocated >= self.budget:
            self.failed[kind] += 1
            raise AllocationError(
                f"Allocation budget of {self.budget} blocks exhausted", kind=kind.value
            )
        block = super().allocate(kind, size)
        self.allocated[kind] += 1
        self._live[block.block_id] = block
        return block

    def release(self, block: Block) -> None:
        super().release(block)
        self.released[block.kind] += 1
        self._live.pop(block.block_id, None)

    @property
    def total_allocated(self) -> int:
        return sum(self.allocated.values())

    @property
    def outstanding(self) -> int:
        """Number of blocks allocated and not yet released."""
        return len(self._live)

    def live_blocks(self, kind: BlockKind | None = None) -> list[Block]:
        """Blocks not yet released, optionally filtered by kind, in allocation order."""
        return [b for b in self._live.values() if kind is None or b.kind == kind]

    def stats(self) -> dict[str, Any]:
        """Per-kind counters for logging or assertions."""
        return {
            kind.value: {
                "allocated": self.allocated[kind],
                "released": self.released[kind],
                "failed": self.failed[kind],
            }
            for kind in BlockKind
        } | {"outstanding": self.outstanding}


__all__ = [
    "Allocator",
    "Block",
    "BlockKind",
    "CountingAllocator",
    "HeapAllocator",
]

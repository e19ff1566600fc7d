"""Node storage unit for the singly linked chain."""

from __future__ import annotations

from sllist.core.allocator import Allocator, Block, BlockKind
from sllist.core.errors import AllocationError
from sllist.core.result import Err, Ok, Result


class Node:
    """One element: a node block, a payload block, and the link to the next node.

    Nodes are owned by exactly one list and never handed to callers.
    """

    __slots__ = ("block", "payload", "next")

    def __init__(self, block: Block, payload: Block) -> None:
        self.block = block
        self.payload = payload
        self.next: Node | None = None

    @classmethod
    def allocate(cls, allocator: Allocator, payload: bytes) -> Result[Node]:
        """Allocate a node holding a copy of ``payload``.

        If the payload block cannot be allocated the node block is released
        before returning, so a failed call leaves nothing outstanding.
        """
        try:
            block = allocator.allocate(BlockKind.NODE)
        except AllocationError as exc:
            return Err(exc)
        try:
            payload_block = allocator.allocate(BlockKind.PAYLOAD, len(payload))
        except AllocationError as exc:
            allocator.release(block)
            return Err(exc)
        payload_block.data[:] = payload
        return Ok(cls(block, payload_block))

    def read(self) -> bytes:
        """Copy of the payload bytes."""
        return bytes(self.payload.data)

    def release(self, allocator: Allocator) -> None:
        """Release payload then node block and unlink."""
        allocator.release(self.payload)
        allocator.release(self.block)
        self.next = None

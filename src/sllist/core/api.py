"""
Handle-style boundary functions over :class:`SinglyLinkedList`.

A flat function surface (``create``, ``insert_front``, ..., ``print_list``)
for callers that pass the list around as a handle. Every function accepts
an absent (``None``) handle.

    ====================  ==========================================
    absent handle         behavior
    ====================  ==========================================
    mutators              ``Err(InvalidArgumentError)``
    length                0
    traverse / destroy    nothing happens
    print_list            only the terminator line
    ====================  ==========================================

``create`` is the one call whose failure is a distinct result: ``Err`` with
an :class:`AllocationError` or :class:`InvalidArgumentError` instead of a
list.

Examples:
    >>> from sllist import create, insert_end, length, destroy
    >>> lst = create(4).unwrap()
    >>> insert_end(lst, b"\\x01\\x00\\x00\\x00")
    Ok(0)
    >>> length(lst)
    1
    >>> destroy(lst)
"""

from __future__ import annotations

import sys
from typing import TextIO

from sllist.core.allocator import Allocator
from sllist.core.errors import ErrorContext, InvalidArgumentError, SllistError
from sllist.core.linked_list import Payload, SinglyLinkedList, Visitor
from sllist.core.logging import get_logger
from sllist.core.result import Err, Ok, Result
from sllist.core.settings import SllistSettings, get_settings


logger = get_logger(__name__)


def _absent(operation: str) -> Err:
    error = InvalidArgumentError(
        f"{operation}: list is required",
        field="list",
        context=ErrorContext(operation=operation),
    )
    logger.debug("operation_ignored", **error.to_dict())
    if get_settings().raise_on_noop:
        raise error
    return Err(error)


def create(
    element_size: int,
    *,
    allocator: Allocator | None = None,
    settings: SllistSettings | None = None,
) -> Result[SinglyLinkedList]:
    """Create an empty list for elements of ``element_size`` bytes."""
    try:
        return Ok(SinglyLinkedList(element_size, allocator=allocator, settings=settings))
    except SllistError as exc:
        logger.warning("list_create_failed", **exc.to_dict())
        return Err(exc)


def insert_front(lst: SinglyLinkedList | None, data: Payload | None) -> Result[int]:
    if lst is None:
        return _absent("insert_front")
    return lst.insert_front(data)


def insert_end(lst: SinglyLinkedList | None, data: Payload | None) -> Result[int]:
    if lst is None:
        return _absent("insert_end")
    return lst.insert_end(data)


def insert_at_index(
    lst: SinglyLinkedList | None, data: Payload | None, index: int
) -> Result[int]:
    if lst is None:
        return _absent("insert_at_index")
    return lst.insert_at_index(data, index)


def remove_front(lst: SinglyLinkedList | None) -> Result[bytes]:
    if lst is None:
        return _absent("remove_front")
    return lst.remove_front()


def remove_end(lst: SinglyLinkedList | None) -> Result[bytes]:
    if lst is None:
        return _absent("remove_end")
    return lst.remove_end()


def remove_at_index(lst: SinglyLinkedList | None, index: int) -> Result[bytes]:
    if lst is None:
        return _absent("remove_at_index")
    return lst.remove_at_index(index)


def length(lst: SinglyLinkedList | None) -> int:
    if lst is None:
        return 0
    return lst.length()


def traverse(lst: SinglyLinkedList | None, visit: Visitor) -> None:
    if lst is None:
        return
    lst.traverse(visit)


def print_list(
    lst: SinglyLinkedList | None,
    display: Visitor,
    *,
    stream: TextIO | None = None,
) -> None:
    """Print-flavored traversal: ``display`` per element, then the terminator line."""
    if lst is None:
        out = stream if stream is not None else sys.stdout
        out.write(f"{get_settings().terminator}\n")
        return
    lst.print_list(display, stream=stream)


def destroy(lst: SinglyLinkedList | None) -> None:
    """Release the list and every node. ``None`` is ignored."""
    if lst is None:
        return
    lst.destroy()


__all__ = [
    "create",
    "insert_front",
    "insert_end",
    "insert_at_index",
    "remove_front",
    "remove_end",
    "remove_at_index",
    "length",
    "traverse",
    "print_list",
    "destroy",
]

"""sllist Core -- the list engine and its supporting primitives.

Manifesto:
    A list configured for one element size, owning independent copies of
    whatever bytes it is given, with positional insert/remove, an uncached
    length, and a print traversal that ends in a terminator token. Calls
    that cannot act change nothing and say so through a ``Result``.

Architecture::

    Layer 1 -- Type System & Errors
        errors.py          Structured error hierarchy (SllistError, categories)
        result.py          Result[T] envelope (Ok / Err)

    Layer 2 -- Storage
        allocator.py       Allocator protocol, HeapAllocator, CountingAllocator
        node.py            Node (node block + payload block + next link)

    Layer 3 -- Engine
        linked_list.py     SinglyLinkedList
        api.py             Handle-style boundary functions (create, insert_*, ...)
        codecs.py          StructCodec for typed payloads

    Layer 4 -- Cross-Cutting Concerns
        settings.py        SllistSettings (pydantic-settings, SLLIST_ prefix)
        logging.py         Structured logging (structlog)

Tags:
    sllist, linked-list, package-overview, module-index

Doc-Types:
    package-overview, architecture-map, module-index
"""

from sllist.core.allocator import (
    Allocator,
    Block,
    BlockKind,
    CountingAllocator,
    HeapAllocator,
)
from sllist.core.api import (
    create,
    destroy,
    insert_at_index,
    insert_end,
    insert_front,
    length,
    print_list,
    remove_at_index,
    remove_end,
    remove_front,
    traverse,
)
from sllist.core.codecs import FLOAT64, INT32, INT64, UINT32, StructCodec
from sllist.core.errors import (
    AllocationError,
    DoubleReleaseError,
    EmptyListError,
    ErrorCategory,
    ErrorContext,
    IndexOutOfBoundsError,
    InvalidArgumentError,
    ListDestroyedError,
    PayloadSizeError,
    SllistError,
    categorize_error,
)
from sllist.core.linked_list import SinglyLinkedList
from sllist.core.logging import configure_logging, get_logger
from sllist.core.result import Err, Ok, Result
from sllist.core.settings import SllistSettings, get_settings

__all__ = [
    # Errors
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
    # Result
    "Result",
    "Ok",
    "Err",
    # Storage
    "Allocator",
    "Block",
    "BlockKind",
    "HeapAllocator",
    "CountingAllocator",
    # Engine
    "SinglyLinkedList",
    "StructCodec",
    "INT32",
    "UINT32",
    "INT64",
    "FLOAT64",
    # Boundary API
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
    # Cross-cutting
    "SllistSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
]

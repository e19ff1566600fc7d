"""
sllist - Singly linked list of fixed-size byte payloads.

The implementation lives in ``sllist.core``; this package re-exports it so
``from sllist import create, SinglyLinkedList`` works.
"""

__version__ = "0.1.0"

from sllist.core import *  # noqa

"""
Shared pytest fixtures and configuration for sllist tests.

This module provides:
- Settings cache isolation between tests
- A CountingAllocator fixture for ownership assertions
- An int32 list factory seeded with values

Usage:
    Fixtures are auto-discovered by pytest; take them as test arguments.
"""

import sys
from pathlib import Path
from typing import Callable, Generator

import pytest

# Ensure sllist package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sllist.core.allocator import CountingAllocator
from sllist.core.codecs import INT32
from sllist.core.linked_list import SinglyLinkedList
from sllist.core.settings import clear_settings_cache


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark every test without an explicit marker as a unit test."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Re-read settings from the (monkeypatched) environment in every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def counting_allocator() -> CountingAllocator:
    return CountingAllocator()


@pytest.fixture
def int_list(counting_allocator: CountingAllocator) -> Callable[..., SinglyLinkedList]:
    """Factory for int32 lists backed by the shared counting allocator.

    Example:
        def test_something(int_list):
            lst = int_list(5, 10, 15)
    """

    def _make(*values: int) -> SinglyLinkedList:
        lst = SinglyLinkedList(INT32.element_size, allocator=counting_allocator)
        for value in values:
            lst.insert_end(INT32.encode(value))
        return lst

    return _make


def values_of(lst: SinglyLinkedList) -> list[int]:
    """Decode an int32 list into Python ints."""
    return [INT32.decode(payload) for payload in lst.snapshot()]


@pytest.fixture
def decode() -> Callable[[SinglyLinkedList], list[int]]:
    return values_of

"""Tests for sllist.core.errors module."""

import pytest

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


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_create_empty_context(self):
        ctx = ErrorContext()
        assert ctx.operation is None
        assert ctx.metadata == {}
        assert ctx.to_dict() == {}

    def test_to_dict_includes_set_fields(self):
        ctx = ErrorContext(operation="insert_end", index=0, metadata={"list_name": "jobs"})
        d = ctx.to_dict()
        assert d == {"operation": "insert_end", "index": 0, "list_name": "jobs"}
        assert "length" not in d


class TestSllistError:
    """Test SllistError base class."""

    def test_default_category(self):
        error = SllistError("boom")
        assert error.category == ErrorCategory.INTERNAL
        assert str(error) == "boom"

    def test_with_context_sets_known_fields(self):
        error = SllistError("boom").with_context(operation="remove_end", length=3)
        assert error.context.operation == "remove_end"
        assert error.context.length == 3

    def test_with_context_unknown_keys_go_to_metadata(self):
        error = SllistError("boom").with_context(list_name="jobs", metadata="x")
        assert error.context.metadata == {"list_name": "jobs", "metadata": "x"}

    def test_cause_is_chained(self):
        cause = MemoryError("no room")
        error = SllistError("boom", cause=cause)
        assert error.cause is cause
        assert error.__cause__ is cause

    def test_to_dict(self):
        error = SllistError("boom", cause=MemoryError()).with_context(operation="create")
        d = error.to_dict()
        assert d["error_type"] == "SllistError"
        assert d["category"] == "INTERNAL"
        assert d["context"] == {"operation": "create"}
        assert d["cause"] == "MemoryError()"

    def test_repr(self):
        assert repr(EmptyListError("remove_front")) == (
            "EmptyListError('remove_front: list is empty', category=EMPTY)"
        )


class TestSubclasses:
    """Test the concrete error types."""

    def test_index_out_of_bounds(self):
        error = IndexOutOfBoundsError("insert_at_index", index=8, length=3)
        assert error.category == ErrorCategory.BOUNDS
        assert error.to_dict()["context"] == {
            "operation": "insert_at_index",
            "index": 8,
            "length": 3,
        }

    def test_empty_list(self):
        error = EmptyListError("remove_at_index", index=2)
        assert error.category == ErrorCategory.EMPTY
        assert error.context.length == 0
        assert error.context.index == 2

    def test_payload_size_is_invalid_argument(self):
        error = PayloadSizeError("insert_end", element_size=4, data_size=1)
        assert isinstance(error, InvalidArgumentError)
        assert error.category == ErrorCategory.ARGUMENT
        assert error.to_dict()["field"] == "data"

    def test_invalid_argument_value_repr(self):
        error = InvalidArgumentError("bad index", field="index", value="0")
        assert error.to_dict()["value"] == "'0'"

    def test_allocation_kind(self):
        error = AllocationError(kind="node")
        assert error.message == "Allocation failed"
        assert error.context.metadata["block_kind"] == "node"

    def test_double_release(self):
        error = DoubleReleaseError(7, "payload")
        assert "7" in error.message
        assert error.context.metadata == {"block_id": 7, "block_kind": "payload"}

    def test_list_destroyed(self):
        assert ListDestroyedError("length").category == ErrorCategory.LIFECYCLE


class TestCategorizeError:
    @pytest.mark.parametrize(
        "error, expected",
        [
            (EmptyListError("remove_front"), ErrorCategory.EMPTY),
            (MemoryError(), ErrorCategory.ALLOCATION),
            (IndexError(), ErrorCategory.BOUNDS),
            (TypeError(), ErrorCategory.ARGUMENT),
            (ValueError(), ErrorCategory.ARGUMENT),
            (RuntimeError(), ErrorCategory.UNKNOWN),
        ],
    )
    def test_categorize(self, error, expected):
        assert categorize_error(error) == expected

"""
Tests for the generic cursor iterator.
"""

import pytest

from itercore import OperationError, STOP_ITERATION, TYPE_ERROR, ITERATOR
from itercore.runtime import (
    RangePayload,
    int_val, string_val, range_val, bytes_val, bytearray_val, list_val, tuple_val,
    get_iter, call_next, call_method, get_builtin_registry,
    ContainerKind, CursorIterator, PositionCell, classify, new_cursor,
    Produced, EXHAUSTED, ITER_DOC, STOP_MESSAGE,
)


def advance_all(iterator, limit=100):
    """Collect raw payloads by calling __next__ until StopIteration."""
    produced = []
    for _ in range(limit):
        try:
            produced.append(call_next(iterator).data)
        except OperationError as e:
            assert e.matches(STOP_ITERATION)
            return produced
    raise AssertionError("iterator did not exhaust")


def assert_exhausted(iterator):
    """The next advance raises the end-of-iterator StopIteration."""
    with pytest.raises(OperationError) as excinfo:
        call_next(iterator)
    assert excinfo.value.matches(STOP_ITERATION)
    assert excinfo.value.message == STOP_MESSAGE


# --- Classification Tests ---

class TestClassify:
    """Test container kind classification."""

    def test_range(self):
        """Ranges are classified first."""
        assert classify(range_val(0, 3)) is ContainerKind.RANGE

    def test_bytes(self):
        """Immutable bytes are a byte sequence."""
        assert classify(bytes_val(b"ab")) is ContainerKind.BYTES

    def test_bytearray(self):
        """bytearray is a mutable byte buffer, not a byte sequence."""
        assert classify(bytearray_val(b"ab")) is ContainerKind.BYTEARRAY

    def test_fallback(self):
        """Everything else falls back to the generic sequence path."""
        assert classify(list_val([])) is ContainerKind.SEQUENCE
        assert classify(tuple_val([])) is ContainerKind.SEQUENCE
        assert classify(int_val(3)) is ContainerKind.SEQUENCE

    def test_new_cursor_starts_at_zero(self):
        """A new cursor starts at position 0 over the container itself."""
        container = list_val([int_val(1)])
        it = new_cursor(container)
        assert it.type == ITERATOR
        assert isinstance(it.data, CursorIterator)
        assert it.data.iterated_obj is container
        assert it.data.position.get() == 0


# --- Range Tests ---

class TestRangeCursor:
    """Test iterating ranges."""

    def test_ascending(self):
        """Ascending range yields ints in order."""
        assert advance_all(get_iter(range_val(0, 5))) == [0, 1, 2, 3, 4]

    def test_step(self):
        """Positive step skips elements."""
        assert advance_all(get_iter(range_val(1, 10, 4))) == [1, 5, 9]

    def test_descending(self):
        """Negative step walks downwards."""
        assert advance_all(get_iter(range_val(10, 0, -3))) == [10, 7, 4, 1]

    def test_empty(self):
        """An empty range exhausts immediately."""
        it = get_iter(range_val(5, 5))
        assert_exhausted(it)
        assert it.data.position.get() == 0

    def test_produces_int_values(self):
        """Range elements are int values."""
        value = call_next(get_iter(range_val(7, 8)))
        assert value == int_val(7)


# --- Byte Tests ---

class TestByteCursors:
    """Test iterating bytes and bytearray."""

    def test_bytes_yield_ints(self):
        """Bytes are produced as integer values."""
        assert advance_all(get_iter(bytes_val(b"hi!"))) == [104, 105, 33]

    def test_empty_bytes(self):
        """Empty bytes exhaust immediately."""
        assert_exhausted(get_iter(bytes_val(b"")))

    def test_bytearray_yield_ints(self):
        """bytearray bytes are produced as integer values."""
        assert advance_all(get_iter(bytearray_val(b"\x00\xff"))) == [0, 255]

    def test_bytearray_growth_visible(self):
        """Appending after partial iteration is reached by the cursor."""
        buf = bytearray_val(b"ab")
        it = get_iter(buf)
        assert call_next(it).data == ord("a")
        buf.data.append(ord("c"))
        assert advance_all(it) == [ord("b"), ord("c")]

    def test_bytearray_removal_skips(self):
        """Removing an element ahead of the position skips past it."""
        buf = bytearray_val(b"abcd")
        it = get_iter(buf)
        assert call_next(it).data == ord("a")
        del buf.data[1]
        assert advance_all(it) == [ord("c"), ord("d")]

    def test_bytearray_shrink_exhausts_early(self):
        """Truncating to the current position exhausts the cursor."""
        buf = bytearray_val(b"abcd")
        it = get_iter(buf)
        call_next(it)
        call_next(it)
        del buf.data[2:]
        assert_exhausted(it)
        assert it.data.position.get() == 2


# --- Sequence Tests ---

class TestSequenceCursor:
    """Test the generic ordered-sequence path."""

    def test_list_order(self):
        """List elements come out in order."""
        lst = list_val([int_val(1), string_val("two"), int_val(3)])
        assert advance_all(get_iter(lst)) == [1, "two", 3]

    def test_tuple(self):
        """Tuples use the same path."""
        tup = tuple_val([string_val("a"), string_val("b")])
        assert advance_all(get_iter(tup)) == ["a", "b"]

    def test_elements_are_shared(self):
        """The cursor produces the stored element itself, not a copy."""
        inner = list_val([int_val(1)])
        outer = list_val([inner])
        produced = call_next(get_iter(outer))
        assert produced is inner

    def test_exactly_n_then_exhausted(self):
        """N advances succeed, then every further advance is exhausted."""
        lst = list_val([int_val(i) for i in range(4)])
        it = get_iter(lst)
        for i in range(4):
            assert call_next(it).data == i
        for _ in range(3):
            assert_exhausted(it)
        assert it.data.position.get() == 4

    def test_empty_list(self):
        """Empty list exhausts on the first advance."""
        assert_exhausted(get_iter(list_val([])))

    def test_list_growth_visible(self):
        """List elements appended during iteration are reached."""
        lst = list_val([int_val(1)])
        it = get_iter(lst)
        call_next(it)
        lst.data.append(int_val(2))
        assert call_next(it).data == 2

    def test_non_sequence_raises_type_error(self):
        """A cursor over a value with no elements view raises TypeError."""
        it = new_cursor(int_val(5))
        with pytest.raises(OperationError) as excinfo:
            call_next(it)
        assert excinfo.value.matches(TYPE_ERROR)
        assert "'int' object is not a sequence" in excinfo.value.message
        assert it.data.position.get() == 0


# --- Cursor Identity Tests ---

class TestCursorIdentity:
    """Test that an iterator is its own iterator."""

    def test_iter_returns_self(self):
        """__iter__ on a cursor returns the same value."""
        it = get_iter(range_val(0, 3))
        assert get_iter(it) is it
        assert call_method(it, "__iter__") is it

    def test_reentry_continues(self):
        """Re-entering a half-consumed cursor does not reset it."""
        it = get_iter(range_val(0, 4))
        call_next(it)
        again = get_iter(it)
        assert advance_all(again) == [1, 2, 3]
        assert_exhausted(it)

    def test_fresh_iter_on_container(self):
        """Each __iter__ on a container starts a new cursor."""
        lst = list_val([int_val(1), int_val(2)])
        first = get_iter(lst)
        call_next(first)
        second = get_iter(lst)
        assert second is not first
        assert call_next(second).data == 1


# --- Step Tests ---

class TestCursorStep:
    """Test the result-typed advance."""

    def test_step_produced_then_exhausted(self):
        """step() returns Produced values then EXHAUSTED."""
        cursor = new_cursor(bytes_val(b"z")).data
        step = cursor.step()
        assert isinstance(step, Produced)
        assert step.value == int_val(ord("z"))
        assert cursor.step() is EXHAUSTED
        assert cursor.step() is EXHAUSTED

    def test_position_cell(self):
        """PositionCell only moves forward by one from the expected value."""
        cell = PositionCell()
        cell.advance_from(0)
        cell.advance_from(1)
        assert cell.get() == 2
        with pytest.raises(RuntimeError):
            cell.advance_from(0)


# --- Registration Tests ---

class TestIteratorRegistration:
    """Test wiring of the iterator type into the registry."""

    def test_methods_registered(self):
        """__next__ and __iter__ are registered on the iterator type."""
        registry = get_builtin_registry()
        assert registry.get_method("iterator", "__next__") is not None
        assert registry.get_method("iterator", "__iter__") is not None

    def test_doc_attribute(self):
        """The iterator type documents both iter() forms."""
        doc = get_builtin_registry().get_attribute(ITERATOR, "__doc__")
        assert doc.data == ITER_DOC
        assert doc.data.startswith("iter(iterable) -> iterator")
        assert "iter(callable, sentinel) -> iterator" in doc.data

    def test_containers_have_iter(self):
        """Every recognized container type has __iter__."""
        registry = get_builtin_registry()
        for name in ("range", "bytes", "bytearray", "list", "tuple"):
            assert registry.get_method(name, "__iter__") is not None


# --- Reclassification Tests ---

class TestCursorReclassify:
    """Test that the container kind is read on every advance."""

    def test_payload_swap_followed(self):
        """Replacing the container payload switches the element rule."""
        container = list_val([int_val(1), int_val(2)])
        it = get_iter(container)
        assert call_next(it).data == 1
        container.data = b"xyz"
        assert call_next(it).data == ord("y")
        container.data = RangePayload(10, 25, 5)
        assert call_next(it).data == 20
        assert_exhausted(it)

    def test_payload_swap_to_non_sequence(self):
        """Swapping in a payload with no elements view raises TypeError."""
        container = range_val(0, 3)
        it = get_iter(container)
        call_next(it)
        container.data = 42
        with pytest.raises(OperationError) as excinfo:
            call_next(it)
        assert excinfo.value.matches(TYPE_ERROR)
        assert it.data.position.get() == 1

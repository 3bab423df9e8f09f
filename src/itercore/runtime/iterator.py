"""
The generic cursor iterator.

One iterator type serves every builtin container: a cursor holds a position
and a shared reference to the container, and on each advance applies the
bounds check and element rule for the container's kind.

TODO: give each container kind its own iterator type sharing the advance
contract, and keep this cursor only for types that expose nothing but an
ordered-elements view.
"""

from dataclasses import dataclass, field
from enum import Enum
import logging
import threading

from .values import Value, RangePayload, int_val, get_elements, string_val
from .protocol import Produced, EXHAUSTED, Step, new_stop_iteration
from ..types import ITERATOR
from ..errors import error_not_a_sequence, error_type_error

logger = logging.getLogger(__name__)


ITER_DOC = (
    "iter(iterable) -> iterator\n"
    "iter(callable, sentinel) -> iterator\n\n"
    "Get an iterator from an object.  In the first form, the argument must\n"
    "supply its own iterator, or be a sequence.\n"
    "In the second form, the callable is called until it returns the sentinel."
)


class ContainerKind(Enum):
    """Container kinds the cursor knows how to walk, in precedence order."""
    RANGE = "range"
    BYTES = "bytes"
    BYTEARRAY = "bytearray"
    SEQUENCE = "sequence"


def classify(container: Value) -> ContainerKind:
    """Classify a container by its payload; anything unrecognized is a SEQUENCE."""
    if container.payload(RangePayload) is not None:
        return ContainerKind.RANGE
    if container.payload(bytes) is not None:
        return ContainerKind.BYTES
    if container.payload(bytearray) is not None:
        return ContainerKind.BYTEARRAY
    return ContainerKind.SEQUENCE


class PositionCell:
    """A counter shared by every holder of the cursor."""

    def __init__(self, value: int = 0):
        self._value = value
        self._lock = threading.Lock()

    def get(self) -> int:
        with self._lock:
            return self._value

    def advance_from(self, expected: int) -> None:
        """
        Move from ``expected`` to ``expected + 1``.

        Invariant guard: a mismatch means two advances interleaved, which the
        single-threaded runtime never does, so it raises a plain RuntimeError
        rather than a runtime exception.
        """
        with self._lock:
            if self._value != expected:
                raise RuntimeError(
                    f"iterator position moved from {expected} to {self._value} during advance"
                )
            self._value = expected + 1

    def __repr__(self) -> str:
        return f"PositionCell({self._value})"


@dataclass(eq=False)
class CursorIterator:
    """
    Payload of an ``iterator`` value.

    `iterated_obj` is the walked container itself, never a copy. Its kind,
    length and elements are read from it on every advance.
    """
    iterated_obj: Value
    position: PositionCell = field(default_factory=PositionCell)

    def step(self) -> Step:
        """Advance by one element."""
        position = self.position.get()
        obj = self.iterated_obj
        kind = classify(obj)

        if kind is ContainerKind.RANGE:
            item = obj.data.get(position)
            if item is None:
                return self._exhausted(kind, position)
            self.position.advance_from(position)
            return Produced(int_val(item))

        if kind is ContainerKind.BYTES or kind is ContainerKind.BYTEARRAY:
            # bytearray length is re-read here, so growth/shrinkage shows up
            if position < len(obj.data):
                produced = int_val(obj.data[position])
                self.position.advance_from(position)
                return Produced(produced)
            return self._exhausted(kind, position)

        elements = get_elements(obj)
        if elements is None:
            raise error_not_a_sequence(obj.type.name)
        if position < len(elements):
            produced = elements[position]
            self.position.advance_from(position)
            return Produced(produced)
        return self._exhausted(kind, position)

    def _exhausted(self, kind: ContainerKind, position: int) -> Step:
        logger.debug("%s cursor exhausted at position %d", kind.value, position)
        return EXHAUSTED


def new_cursor(container: Value) -> Value:
    """Create an iterator value walking ``container`` from position 0."""
    logger.debug("new cursor over %s", container.type)
    return Value(CursorIterator(container), ITERATOR)


def cursor_next(iterator: Value) -> Value:
    """``iterator.__next__``: the next element, or raise StopIteration."""
    cursor = iterator.payload(CursorIterator)
    if cursor is None:
        raise error_type_error(
            f"'__next__' requires a cursor payload, got '{type(iterator.data).__name__}'"
        )
    step = cursor.step()
    if isinstance(step, Produced):
        return step.value
    raise new_stop_iteration()


def cursor_iter(iterator: Value) -> Value:
    """``iterator.__iter__``: an iterator is its own iterator."""
    return iterator


def init(registry) -> None:
    """Register the iterator type's methods and doc string."""
    from .builtins import BuiltinFunction

    registry.register_method(
        ITERATOR.name,
        BuiltinFunction("__next__", cursor_next, 0, 0,
                        doc="Implement next(self)."),
    )
    registry.register_method(
        ITERATOR.name,
        BuiltinFunction("__iter__", cursor_iter, 0, 0,
                        doc="Implement iter(self)."),
    )
    registry.set_attribute(ITERATOR.name, "__doc__", string_val(ITER_DOC))

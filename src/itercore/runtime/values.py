"""
Runtime value wrappers.

Values wrap Python objects with runtime type metadata. Containers hold their
elements as shared references: a list value's payload is a Python list of
``Value`` objects, and two holders of the same list value see each other's
mutations.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Type as PyType, TypeVar

from ..types import (
    RuntimeType,
    INT, STRING, RANGE, BYTES, BYTEARRAY, LIST, TUPLE,
)


T = TypeVar("T")


@dataclass
class Value:
    """
    A runtime value with type information.

    The `data` field holds the payload.
    The `type` field holds the runtime type used for method dispatch.
    """
    data: Any
    type: RuntimeType

    def __repr__(self) -> str:
        return f"Value({self.data!r}, {self.type})"

    def payload(self, cls: PyType[T]) -> Optional[T]:
        """Return the payload viewed as ``cls``, or None if it is not one."""
        if isinstance(self.data, cls):
            return self.data
        return None


@dataclass(frozen=True)
class RangePayload:
    """
    Payload of a range value: an arithmetic progression.

    Follows Python range arithmetic in both directions; ``step`` is never 0.
    """
    start: int
    stop: int
    step: int = 1

    def __len__(self) -> int:
        if self.step > 0 and self.start < self.stop:
            return (self.stop - self.start - 1) // self.step + 1
        if self.step < 0 and self.start > self.stop:
            return (self.start - self.stop - 1) // (-self.step) + 1
        return 0

    def get(self, index: int) -> Optional[int]:
        """The element at logical ``index``, or None if out of range."""
        if 0 <= index < len(self):
            return self.start + index * self.step
        return None


# Convenience constructors

def int_val(n: int) -> Value:
    """Create an integer value."""
    return Value(int(n), INT)


def string_val(s: str) -> Value:
    """Create a string value."""
    return Value(str(s), STRING)


def range_val(start: int, stop: int, step: int = 1) -> Value:
    """Create a range value. The caller guarantees ``step != 0``."""
    return Value(RangePayload(start, stop, step), RANGE)


def bytes_val(b: bytes) -> Value:
    """Create an immutable byte sequence value."""
    return Value(bytes(b), BYTES)


def bytearray_val(b: bytes = b"") -> Value:
    """Create a mutable byte buffer value (holds its own bytearray)."""
    return Value(bytearray(b), BYTEARRAY)


def list_val(items: Sequence[Value]) -> Value:
    """Create a list value holding the given element values."""
    return Value(list(items), LIST)


def tuple_val(items: Sequence[Value]) -> Value:
    """Create a tuple value holding the given element values."""
    return Value(tuple(items), TUPLE)


def get_elements(value: Value) -> Optional[Sequence[Value]]:
    """
    The ordered-elements view of a sequence-like container.

    Returns the container's own element storage (no copy), or None when the
    value has no such view.
    """
    if isinstance(value.data, (list, tuple)):
        return value.data
    return None


# Wrapping utilities

def wrap_python(obj: Any) -> Value:
    """
    Wrap a plain Python object as a runtime value.

    Supports int, str, bytes, bytearray, range, list and tuple (recursively).
    """
    if isinstance(obj, bool):
        raise ValueError("bool values are not supported")
    if isinstance(obj, int):
        return int_val(obj)
    if isinstance(obj, str):
        return string_val(obj)
    if isinstance(obj, bytearray):
        return bytearray_val(obj)
    if isinstance(obj, bytes):
        return bytes_val(obj)
    if isinstance(obj, range):
        return range_val(obj.start, obj.stop, obj.step)
    if isinstance(obj, list):
        return list_val([wrap_python(item) for item in obj])
    if isinstance(obj, tuple):
        return tuple_val([wrap_python(item) for item in obj])
    raise ValueError(f"cannot wrap {type(obj).__name__} as a runtime value")


def to_python(v: Value) -> Any:
    """Convert a runtime value back to plain Python, recursing into sequences."""
    if isinstance(v.data, list):
        return [to_python(item) for item in v.data]
    if isinstance(v.data, tuple):
        return tuple(to_python(item) for item in v.data)
    if isinstance(v.data, RangePayload):
        return range(v.data.start, v.data.stop, v.data.step)
    return v.data

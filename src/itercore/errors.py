"""
Runtime exceptions and error factories.

A runtime exception is an ordinary runtime ``Value`` whose type derives from
``BaseException`` and whose payload is an ``ExceptionPayload``. Raising one on
the Python side means raising an ``OperationError`` that carries the value.

Only a handful of kinds are produced by the core:
- StopIteration: the exhaustion sentinel, a control signal rather than a fault
- TypeError: value is not iterable / not an iterator / not a sequence
- AttributeError: generic dispatch found no method of that name
- ValueError: bad builtin argument (e.g. zero range step)
"""

from dataclasses import dataclass, field
from typing import Any, Tuple

from .types import (
    RuntimeType,
    STOP_ITERATION, TYPE_ERROR, VALUE_ERROR, ATTRIBUTE_ERROR,
)


@dataclass
class ExceptionPayload:
    """Payload of a runtime exception value."""
    message: str
    args: Tuple[Any, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return self.message


class OperationError(Exception):
    """A runtime exception raised through Python code."""

    def __init__(self, value):
        self.value = value
        super().__init__(value.data.message)

    @property
    def exc_type(self) -> RuntimeType:
        """The runtime type of the carried exception."""
        return self.value.type

    @property
    def message(self) -> str:
        return self.value.data.message

    def matches(self, exc_type: RuntimeType) -> bool:
        """Check if the carried exception is an instance of ``exc_type``."""
        return self.value.type.is_subtype_of(exc_type)

    def __str__(self) -> str:
        return f"{self.value.type.name}: {self.value.data.message}"


def new_exception(exc_type: RuntimeType, message: str) -> OperationError:
    """Build a fresh exception of ``exc_type`` wrapped for raising."""
    from .runtime.values import Value
    return OperationError(Value(ExceptionPayload(message, (message,)), exc_type))


def error_stop_iteration(message: str) -> OperationError:
    """StopIteration with the given message."""
    return new_exception(STOP_ITERATION, message)


def error_type_error(message: str) -> OperationError:
    """TypeError with the given message."""
    return new_exception(TYPE_ERROR, message)


def error_value_error(message: str) -> OperationError:
    """ValueError with the given message."""
    return new_exception(VALUE_ERROR, message)


def error_attribute_error(type_name: str, attr: str) -> OperationError:
    """AttributeError for a failed method lookup."""
    return new_exception(
        ATTRIBUTE_ERROR,
        f"'{type_name}' object has no attribute '{attr}'",
    )


def error_not_iterable(type_name: str) -> OperationError:
    """TypeError for a value whose type has no ``__iter__``."""
    return error_type_error(f"'{type_name}' object is not iterable")


def error_not_an_iterator(type_name: str) -> OperationError:
    """TypeError for a value whose type has no ``__next__``."""
    return error_type_error(f"'{type_name}' object is not an iterator")


def error_not_a_sequence(type_name: str) -> OperationError:
    """TypeError for a container with no ordered-elements view."""
    return error_type_error(f"'{type_name}' object is not a sequence")

"""
Built-in function and method registry.

Maps builtin function names and (type, method) pairs to Python
implementations, and provides the generic by-name dispatch used by the
iteration protocol.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import logging

from .values import (
    Value, RangePayload, int_val, range_val, list_val, tuple_val,
)
from ..types import RuntimeType, INT, RANGE, BYTES, BYTEARRAY, LIST, TUPLE
from ..errors import (
    error_type_error, error_value_error, error_attribute_error,
    error_not_iterable, error_not_an_iterator,
)

logger = logging.getLogger(__name__)


@dataclass
class BuiltinFunction:
    """
    A built-in function or method with its implementation and arity.

    Methods receive the receiver value as their first argument; the arity
    bounds count only the remaining arguments.
    """
    name: str
    implementation: Callable[..., Value]
    min_args: int = 0
    max_args: Optional[int] = None
    doc: str = ""

    def check_arity(self, count: int) -> None:
        """Raise a runtime TypeError if ``count`` arguments are not accepted."""
        if count < self.min_args or (self.max_args is not None and count > self.max_args):
            if self.min_args == self.max_args:
                expected = f"exactly {self.min_args}"
            elif self.max_args is None:
                expected = f"at least {self.min_args}"
            else:
                expected = f"from {self.min_args} to {self.max_args}"
            raise error_type_error(
                f"{self.name}() takes {expected} argument(s) ({count} given)"
            )


class BuiltinRegistry:
    """
    Registry of all built-in functions, methods and type attributes.

    Methods and attributes are registered per type name and looked up along
    the type's base chain.
    """

    def __init__(self):
        self._functions: Dict[str, BuiltinFunction] = {}
        self._methods: Dict[Tuple[str, str], BuiltinFunction] = {}  # (type_name, method_name)
        self._attributes: Dict[Tuple[str, str], Value] = {}
        self._register_all()

    def get_function(self, name: str) -> Optional[BuiltinFunction]:
        """Look up a function by name."""
        return self._functions.get(name)

    def get_method(self, type_name: str, method_name: str) -> Optional[BuiltinFunction]:
        """Look up a method defined directly on a type."""
        return self._methods.get((type_name, method_name))

    def lookup_method(self, runtime_type: RuntimeType, method_name: str) -> Optional[BuiltinFunction]:
        """Look up a method on a type or the nearest base type defining it."""
        for t in runtime_type.mro():
            method = self._methods.get((t.name, method_name))
            if method is not None:
                return method
        return None

    def get_attribute(self, runtime_type: RuntimeType, name: str) -> Optional[Value]:
        """Look up a type attribute (such as ``__doc__``) along the base chain."""
        for t in runtime_type.mro():
            attr = self._attributes.get((t.name, name))
            if attr is not None:
                return attr
        return None

    def register(self, func: BuiltinFunction) -> None:
        """Register a function."""
        self._functions[func.name] = func

    def register_method(self, type_name: str, func: BuiltinFunction) -> None:
        """Register a method for a specific type."""
        self._methods[(type_name, func.name)] = func

    def set_attribute(self, type_name: str, name: str, value: Value) -> None:
        """Attach a non-callable attribute to a type."""
        self._attributes[(type_name, name)] = value

    def _register_all(self) -> None:
        """Register all built-in functions and methods."""
        self._register_container_methods()
        self._register_iterator_type()
        self._register_iteration_functions()
        self._register_sequence_functions()
        logger.debug(
            "registered %d builtin functions and %d methods",
            len(self._functions), len(self._methods),
        )

    # --- Container iteration-start methods ---

    def _register_container_methods(self) -> None:
        """Give every recognized container kind an ``__iter__``."""
        from .iterator import new_cursor

        def _iter(container: Value) -> Value:
            return new_cursor(container)

        for runtime_type in (RANGE, BYTES, BYTEARRAY, LIST, TUPLE):
            self.register_method(
                runtime_type.name,
                BuiltinFunction("__iter__", _iter, 0, 0,
                                doc="Implement iter(self)."),
            )

    # --- Iterator type ---

    def _register_iterator_type(self) -> None:
        """Wire the generic cursor iterator into the registry."""
        from .iterator import init
        init(self)

    # --- Iteration Functions ---

    def _register_iteration_functions(self) -> None:
        """Register iter() and next()."""
        from .protocol import get_iter, call_next, get_next_object

        def _iter(obj: Value, *sentinel: Value) -> Value:
            if sentinel:
                raise error_type_error("iter(callable, sentinel) is not supported")
            return get_iter(obj)

        def _next(iterator: Value, *default: Value) -> Value:
            if not default:
                return call_next(iterator)
            value = get_next_object(iterator)
            return default[0] if value is None else value

        self.register(BuiltinFunction("iter", _iter, 1, 2))
        self.register(BuiltinFunction("next", _next, 1, 2))

    # --- Sequence Functions ---

    def _register_sequence_functions(self) -> None:
        """Register list(), tuple(), range() and len()."""
        from .protocol import get_iter, get_all

        def _list(*iterable: Value) -> Value:
            if not iterable:
                return list_val([])
            return list_val(get_all(get_iter(iterable[0])))

        def _tuple(*iterable: Value) -> Value:
            if not iterable:
                return tuple_val([])
            return tuple_val(get_all(get_iter(iterable[0])))

        def _range(*args: Value) -> Value:
            for arg in args:
                if arg.type != INT:
                    raise error_type_error(
                        f"'{arg.type.name}' object cannot be interpreted as an integer"
                    )
            bounds = [a.data for a in args]
            if len(bounds) == 1:
                start, stop, step = 0, bounds[0], 1
            elif len(bounds) == 2:
                start, stop, step = bounds[0], bounds[1], 1
            else:
                start, stop, step = bounds
            if step == 0:
                raise error_value_error("range() arg 3 must not be zero")
            return range_val(start, stop, step)

        def _len(container: Value) -> Value:
            data = container.data
            if isinstance(data, (RangePayload, bytes, bytearray, list, tuple, str)):
                return int_val(len(data))
            raise error_type_error(f"object of type '{container.type.name}' has no len()")

        self.register(BuiltinFunction("list", _list, 0, 1))
        self.register(BuiltinFunction("tuple", _tuple, 0, 1))
        self.register(BuiltinFunction("range", _range, 1, 3))
        self.register(BuiltinFunction("len", _len, 1, 1))


# Global registry instance
_registry: Optional[BuiltinRegistry] = None


def get_builtin_registry() -> BuiltinRegistry:
    """Get the global built-in function registry."""
    global _registry
    if _registry is None:
        _registry = BuiltinRegistry()
    return _registry


def reset_builtin_registry() -> BuiltinRegistry:
    """Rebuild the global registry from scratch and return it."""
    global _registry
    _registry = BuiltinRegistry()
    return _registry


def call_builtin(name: str, args: Sequence[Value]) -> Value:
    """
    Call a built-in function by name.

    Raises RuntimeError if function not found.
    """
    registry = get_builtin_registry()
    func = registry.get_function(name)
    if func is None:
        raise RuntimeError(f"Unknown built-in function: {name}")
    func.check_arity(len(args))
    return func.implementation(*args)


def call_method(receiver: Value, method_name: str, args: Sequence[Value] = ()) -> Value:
    """
    Call a method on a value through its runtime type.

    A missing ``__iter__`` or ``__next__`` raises a runtime TypeError; any
    other missing method raises a runtime AttributeError.
    """
    registry = get_builtin_registry()
    method = registry.lookup_method(receiver.type, method_name)
    if method is None:
        if method_name == "__iter__":
            raise error_not_iterable(receiver.type.name)
        if method_name == "__next__":
            raise error_not_an_iterator(receiver.type.name)
        raise error_attribute_error(receiver.type.name, method_name)
    method.check_arity(len(args))
    return method.implementation(receiver, *args)

"""
itercore - the iteration protocol of a small dynamic-language runtime.

This package provides:
- Runtime types and values (int, str, range, bytes, bytearray, list, tuple)
- Generic method dispatch over a builtin registry
- A single generic cursor iterator that walks every builtin container
- Protocol helpers: obtain an iterator, advance it, drain it

Usage:
    from itercore import range_val, get_iter, get_all, to_python

    it = get_iter(range_val(0, 10, 3))
    print([to_python(v) for v in get_all(it)])   # [0, 3, 6, 9]
"""

try:
    from importlib.metadata import PackageNotFoundError, version
except ModuleNotFoundError:  # pragma: no cover
    from importlib_metadata import PackageNotFoundError, version

from .types import (
    RuntimeType,
    OBJECT,
    INT,
    STRING,
    RANGE,
    BYTES,
    BYTEARRAY,
    LIST,
    TUPLE,
    ITERATOR,
    BASE_EXCEPTION,
    EXCEPTION,
    STOP_ITERATION,
    TYPE_ERROR,
    VALUE_ERROR,
    ATTRIBUTE_ERROR,
)

from .errors import (
    ExceptionPayload,
    OperationError,
    new_exception,
)

from .runtime import (
    Value,
    int_val,
    string_val,
    range_val,
    bytes_val,
    bytearray_val,
    list_val,
    tuple_val,
    wrap_python,
    to_python,
    get_builtin_registry,
    call_builtin,
    call_method,
    Produced,
    EXHAUSTED,
    new_stop_iteration,
    get_iter,
    call_next,
    next_step,
    get_next_object,
    get_all,
    new_cursor,
)

try:
    __version__ = version("itercore")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

__all__ = [
    # Types
    'RuntimeType',
    'OBJECT',
    'INT',
    'STRING',
    'RANGE',
    'BYTES',
    'BYTEARRAY',
    'LIST',
    'TUPLE',
    'ITERATOR',
    'BASE_EXCEPTION',
    'EXCEPTION',
    'STOP_ITERATION',
    'TYPE_ERROR',
    'VALUE_ERROR',
    'ATTRIBUTE_ERROR',

    # Errors
    'ExceptionPayload',
    'OperationError',
    'new_exception',

    # Runtime
    'Value',
    'int_val',
    'string_val',
    'range_val',
    'bytes_val',
    'bytearray_val',
    'list_val',
    'tuple_val',
    'wrap_python',
    'to_python',
    'get_builtin_registry',
    'call_builtin',
    'call_method',
    'Produced',
    'EXHAUSTED',
    'new_stop_iteration',
    'get_iter',
    'call_next',
    'next_step',
    'get_next_object',
    'get_all',
    'new_cursor',

    '__version__',
]

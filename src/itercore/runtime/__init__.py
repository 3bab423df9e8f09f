"""
Runtime - values, builtin dispatch and the iteration protocol.

This module provides:
- Value: Runtime value wrappers with type metadata
- BuiltinRegistry: Built-in functions and per-type methods
- call_method: Generic by-name method dispatch
- CursorIterator: The generic cursor iterator
- get_iter / call_next / get_next_object / get_all: Protocol helpers
"""

from .values import (
    Value,
    RangePayload,
    int_val,
    string_val,
    range_val,
    bytes_val,
    bytearray_val,
    list_val,
    tuple_val,
    get_elements,
    wrap_python,
    to_python,
)

from .builtins import (
    BuiltinFunction,
    BuiltinRegistry,
    get_builtin_registry,
    reset_builtin_registry,
    call_builtin,
    call_method,
)

from .protocol import (
    Produced,
    Exhausted,
    EXHAUSTED,
    Step,
    STOP_MESSAGE,
    new_stop_iteration,
    get_iter,
    call_next,
    next_step,
    get_next_object,
    get_all,
)

from .iterator import (
    ITER_DOC,
    ContainerKind,
    CursorIterator,
    PositionCell,
    classify,
    new_cursor,
)

__all__ = [
    # Values
    'Value',
    'RangePayload',
    'int_val',
    'string_val',
    'range_val',
    'bytes_val',
    'bytearray_val',
    'list_val',
    'tuple_val',
    'get_elements',
    'wrap_python',
    'to_python',

    # Builtins
    'BuiltinFunction',
    'BuiltinRegistry',
    'get_builtin_registry',
    'reset_builtin_registry',
    'call_builtin',
    'call_method',

    # Protocol
    'Produced',
    'Exhausted',
    'EXHAUSTED',
    'Step',
    'STOP_MESSAGE',
    'new_stop_iteration',
    'get_iter',
    'call_next',
    'next_step',
    'get_next_object',
    'get_all',

    # Iterator
    'ITER_DOC',
    'ContainerKind',
    'CursorIterator',
    'PositionCell',
    'classify',
    'new_cursor',
]

"""
Runtime type objects for itercore.

Every runtime value carries one of these types. Types form a single-inheritance
hierarchy rooted at ``object``; method lookup and exception matching both walk
the ``base`` chain.

    object
    ├── int, str, range, bytes, bytearray, list, tuple
    ├── iterator
    └── BaseException
        └── Exception
            ├── StopIteration
            ├── TypeError
            ├── ValueError
            └── AttributeError
"""

from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class RuntimeType:
    """A runtime type: a name and an optional base type."""
    name: str
    base: Optional["RuntimeType"] = None

    def mro(self) -> Iterator["RuntimeType"]:
        """Yield this type followed by its bases, nearest first."""
        current: Optional[RuntimeType] = self
        while current is not None:
            yield current
            current = current.base

    def is_subtype_of(self, other: "RuntimeType") -> bool:
        """Check if this type is ``other`` or derives from it."""
        return any(t == other for t in self.mro())

    def __str__(self) -> str:
        return self.name


# =============================================================================
# Builtin types
# =============================================================================

OBJECT = RuntimeType("object")

INT = RuntimeType("int", OBJECT)
STRING = RuntimeType("str", OBJECT)
RANGE = RuntimeType("range", OBJECT)
BYTES = RuntimeType("bytes", OBJECT)
BYTEARRAY = RuntimeType("bytearray", OBJECT)
LIST = RuntimeType("list", OBJECT)
TUPLE = RuntimeType("tuple", OBJECT)
ITERATOR = RuntimeType("iterator", OBJECT)

BASE_EXCEPTION = RuntimeType("BaseException", OBJECT)
EXCEPTION = RuntimeType("Exception", BASE_EXCEPTION)
STOP_ITERATION = RuntimeType("StopIteration", EXCEPTION)
TYPE_ERROR = RuntimeType("TypeError", EXCEPTION)
VALUE_ERROR = RuntimeType("ValueError", EXCEPTION)
ATTRIBUTE_ERROR = RuntimeType("AttributeError", EXCEPTION)


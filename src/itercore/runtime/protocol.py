"""
Iteration protocol helpers.

These are the entry points used wherever the runtime needs to loop: the
``iter()``/``next()`` builtins, ``list()``/``tuple()`` construction, and any
caller that has to drain an iterable.

An advance can also be seen as a two-armed result, ``Produced(value)`` or
``EXHAUSTED``. The cursor computes it directly; ``__next__`` turns the
exhausted arm into a raised ``StopIteration``, and ``next_step`` turns it back
for callers that want "no value" instead of an error.
"""

from dataclasses import dataclass
from typing import List, Optional, Union
import logging

from .values import Value
from .builtins import call_method
from ..types import STOP_ITERATION
from ..errors import OperationError, error_stop_iteration

logger = logging.getLogger(__name__)

STOP_MESSAGE = "End of iterator"


@dataclass(frozen=True)
class Produced:
    """An advance that produced a value."""
    value: Value


@dataclass(frozen=True)
class Exhausted:
    """An advance that found no more elements."""


EXHAUSTED = Exhausted()

Step = Union[Produced, Exhausted]


def new_stop_iteration() -> OperationError:
    """A fresh StopIteration carrying the fixed end-of-iterator message."""
    return error_stop_iteration(STOP_MESSAGE)


def get_iter(iter_target: Value) -> Value:
    """
    Obtain an iterator from a value by dispatching its ``__iter__``.

    Called when a loop is entered and by the ``iter()`` builtin. Whatever the
    dispatch raises (typically "not iterable") propagates unchanged.
    """
    return call_method(iter_target, "__iter__")


def call_next(iter_obj: Value) -> Value:
    """Advance an iterator by dispatching its ``__next__``."""
    return call_method(iter_obj, "__next__")


def next_step(iter_obj: Value) -> Step:
    """
    Advance an iterator and report the outcome as a ``Step``.

    Always dispatches ``__next__``; a raised StopIteration becomes
    ``EXHAUSTED`` and other errors propagate.
    """
    try:
        return Produced(call_next(iter_obj))
    except OperationError as err:
        if err.matches(STOP_ITERATION):
            return EXHAUSTED
        raise


def get_next_object(iter_obj: Value) -> Optional[Value]:
    """Retrieve the next value from an iterator, or None once it is exhausted."""
    step = next_step(iter_obj)
    if isinstance(step, Produced):
        return step.value
    return None


def get_all(iter_obj: Value) -> List[Value]:
    """
    Retrieve all remaining values from an iterator, in order.

    Never returns for an iterator that does not exhaust.
    """
    elements: List[Value] = []
    while True:
        element = get_next_object(iter_obj)
        if element is None:
            break
        elements.append(element)
    logger.debug("drained %d element(s) from %s", len(elements), iter_obj.type)
    return elements

"""Factories for exhaustive generators."""

from enum import Enum
from typing import Any, Iterable, TypeVar

from propgen.exhaustive.base import (
    Exhaustive,
    IntRangeExhaustive,
    ProductExhaustive,
    ValuesExhaustive,
)

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


def ints(lower: int, upper: int, step: int = 1) -> IntRangeExhaustive:
    """Every integer from ``lower`` to ``upper`` inclusive, ascending.

    Args:
        lower: First value
        upper: Inclusive upper bound
        step: Distance between consecutive values

    Returns:
        An exhaustive over the range

    Raises:
        ConfigurationError: If the range is empty or ``step`` is not positive
    """
    return IntRangeExhaustive(lower, upper, step)


def booleans() -> ValuesExhaustive[bool]:
    """``[False, True]``."""
    return ValuesExhaustive([False, True])


def collection(items: Iterable[T], dedupe: bool = False) -> ValuesExhaustive[T]:
    """Every item of ``items``, in input order.

    Repeated items are kept unless ``dedupe`` is set, in which case only the
    first occurrence survives.
    """
    return ValuesExhaustive(items, dedupe=dedupe)


def enum(enum_class: type[E]) -> ValuesExhaustive[E]:
    """Every member of an Enum class, in definition order."""
    return ValuesExhaustive(list(enum_class))


def constant(value: T) -> ValuesExhaustive[T]:
    return ValuesExhaustive([value])


def product(*parts: Exhaustive[Any]) -> ProductExhaustive:
    """Every combination of one value from each part, as tuples.

    The last part varies fastest.
    """
    return ProductExhaustive(parts)

"""Combinator factories for arbitrary generators.

These build new generators out of constants, explicit value lists, enum
classes or other generators.
"""

import copy
from enum import Enum
from typing import Any, Callable, Iterable, Sequence, TypeVar

from propgen.arb.base import Arb, BindArb, ChoiceArb
from propgen.core.errors import ConfigurationError
from propgen.core.random_source import RandomSource

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Enum)


class ConstantArb(Arb[T]):
    """Always the same value."""

    def __init__(self, value: T):
        super().__init__()
        self.value = value

    def draw(self, source: RandomSource) -> T:
        return copy.deepcopy(self.value)


class ElementArb(Arb[T]):
    """One of a fixed list of values, chosen uniformly."""

    def __init__(self, values: Iterable[T]):
        values = list(values)
        if not values:
            raise ConfigurationError("elements requires at least one value")
        super().__init__()
        self.values = values

    def draw(self, source: RandomSource) -> T:
        return copy.deepcopy(source.choice(self.values))

    def edge_cases(self) -> list[T]:
        return [self.values[0]]


def constant(value: T) -> ConstantArb[T]:
    return ConstantArb(value)


def elements(values: Iterable[T]) -> ElementArb[T]:
    """Uniformly chosen members of ``values``."""
    return ElementArb(values)


def enum(enum_class: type[E]) -> ElementArb[E]:
    """Uniformly chosen members of an Enum class."""
    return ElementArb(list(enum_class))


def choose(*arbs: Arb[Any], weights: Sequence[float] | None = None) -> ChoiceArb:
    """Pick one of several generators per sample, then delegate to it.

    Args:
        *arbs: Generators to choose between
        weights: Relative weights; uniform when omitted

    Returns:
        A generator mixing the values of all ``arbs``
    """
    return ChoiceArb(arbs, weights)


def bind(*arbs: Arb[Any], fn: Callable[..., U]) -> BindArb[U]:
    """Combine several generators through ``fn``.

    Each component is sampled in order from the same source, then ``fn`` is
    called with the values as positional arguments.

    Example:
        >>> labels = bind(strings(2, 3), ints(0, 5), fn=lambda s, i: f"{s}-{i}")
    """
    return BindArb(arbs, fn)


def zip(*arbs: Arb[Any]) -> BindArb[tuple[Any, ...]]:
    """Tuples with one value from each generator."""
    return BindArb(arbs, lambda *values: tuple(values))


def pair(first: Arb[T], second: Arb[U]) -> BindArb[tuple[T, U]]:
    return BindArb([first, second], lambda a, b: (a, b))


def triple(first: Arb[Any], second: Arb[Any], third: Arb[Any]) -> BindArb[tuple[Any, Any, Any]]:
    return BindArb([first, second, third], lambda a, b, c: (a, b, c))

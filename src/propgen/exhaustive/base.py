"""Base classes for exhaustive generators - the finite strategy.

An Exhaustive enumerates every value of a finite domain exactly once, in a
stable order. Its values are a pure function of its configuration, so
traversal can be repeated any number of times.

Derived exhaustives (map, filter, product) compute their values on first
use; a filter that removes everything fails at that point.
"""

import copy
import itertools
import math
from abc import abstractmethod
from functools import cached_property
from typing import Any, Callable, Iterable, Iterator, Sequence, TypeVar

from propgen.arb.combinators import ElementArb
from propgen.core.base import Gen, GenKind, Sample, check_count
from propgen.core.errors import ConfigurationError, DomainExhaustionError
from propgen.core.random_source import RandomSource

T = TypeVar("T")
U = TypeVar("U")


class Exhaustive(Gen[T]):
    """Abstract base class for exhaustive generators."""

    kind = GenKind.EXHAUSTIVE

    @abstractmethod
    def _materialize(self) -> Sequence[T]:
        """Compute the ordered values of the domain."""
        pass

    @cached_property
    def _resolved(self) -> Sequence[T]:
        return self._materialize()

    @property
    def values(self) -> list[T]:
        """All values of the domain, in order."""
        return [copy.deepcopy(v) for v in self._resolved]

    def value_at(self, position: int) -> T:
        """The value at ``position``, wrapping around past the end."""
        resolved = self._resolved
        return copy.deepcopy(resolved[position % len(resolved)])

    def __len__(self) -> int:
        return len(self._resolved)

    def __iter__(self) -> Iterator[T]:
        return (copy.deepcopy(v) for v in self._resolved)

    def sample(self, source: RandomSource | None = None) -> Sample[T]:
        """The first value of the domain; ``source`` is ignored."""
        return Sample(value=self.value_at(0), position=0)

    def samples(
        self,
        source: RandomSource | None = None,
        count: int | None = None,
    ) -> Iterator[Sample[T]]:
        """Produce values positionally, cycling when ``count`` exceeds the size.

        Args:
            source: Ignored
            count: Number of samples; one full pass when None

        Yields:
            Samples in domain order
        """
        check_count(count)
        if count is None:
            count = len(self)
        for position in range(count):
            yield Sample(value=self.value_at(position), position=position)

    def map(self, fn: Callable[[T], U]) -> "Exhaustive[U]":
        return MappedExhaustive(self, fn)

    def filter(self, predicate: Callable[[T], bool]) -> "Exhaustive[T]":
        return FilteredExhaustive(self, predicate)

    def times(self, other: "Exhaustive[U]") -> "Exhaustive[tuple[T, U]]":
        """Cartesian product with another exhaustive."""
        return ProductExhaustive([self, other])

    def to_arb(self) -> ElementArb[T]:
        """A random generator choosing uniformly among these values."""
        return ElementArb(self._resolved)

    def describe(self) -> dict[str, Any]:
        info = super().describe()
        info["size"] = len(self)
        return info


class ValuesExhaustive(Exhaustive[T]):
    """An explicit, ordered collection of values."""

    def __init__(self, values: Iterable[T], dedupe: bool = False):
        """Initialize from a collection.

        Args:
            values: Values in enumeration order
            dedupe: Drop repeated values, keeping the first occurrence

        Raises:
            ConfigurationError: If there are no values
        """
        values = list(values)
        if dedupe:
            values = _dedupe(values)
        if not values:
            raise ConfigurationError("An exhaustive generator needs at least one value")
        self.dedupe = dedupe
        self._values = tuple(values)

    def _materialize(self) -> Sequence[T]:
        return self._values


class IntRangeExhaustive(Exhaustive[int]):
    """Integers from lower to upper inclusive, ascending by ``step``."""

    def __init__(self, lower: int, upper: int, step: int = 1):
        if step <= 0:
            raise ConfigurationError(f"step must be positive, got {step}")
        if lower > upper:
            raise ConfigurationError(f"Empty integer range: lower {lower} > upper {upper}")
        self.lower = lower
        self.upper = upper
        self.step = step

    def _materialize(self) -> Sequence[int]:
        return range(self.lower, self.upper + 1, self.step)


class MappedExhaustive(Exhaustive[U]):
    """Applies a function to every value of another exhaustive."""

    def __init__(self, source: Exhaustive[T], fn: Callable[[T], U]):
        self._source = source
        self._fn = fn

    def _materialize(self) -> Sequence[U]:
        return tuple(self._fn(v) for v in self._source._resolved)

    def __len__(self) -> int:
        return len(self._source)


class FilteredExhaustive(Exhaustive[T]):
    """Keeps the values of another exhaustive that match a predicate."""

    def __init__(self, source: Exhaustive[T], predicate: Callable[[T], bool]):
        self._source = source
        self._predicate = predicate

    def _materialize(self) -> Sequence[T]:
        kept = tuple(v for v in self._source._resolved if self._predicate(v))
        if not kept:
            raise DomainExhaustionError(
                f"Filter removed all {len(self._source)} values of the domain"
            )
        return kept


class ProductExhaustive(Exhaustive[tuple[Any, ...]]):
    """Every combination of values from several exhaustives."""

    def __init__(self, parts: Sequence[Exhaustive[Any]]):
        if not parts:
            raise ConfigurationError("product requires at least one exhaustive generator")
        self._parts = list(parts)

    def _materialize(self) -> Sequence[tuple[Any, ...]]:
        return tuple(itertools.product(*(p._resolved for p in self._parts)))

    def __len__(self) -> int:
        return math.prod(len(p) for p in self._parts)


def _dedupe(values: list[T]) -> list[T]:
    seen: set[Any] = set()
    seen_unhashable: list[Any] = []
    result = []
    for value in values:
        try:
            if value in seen:
                continue
            seen.add(value)
        except TypeError:
            if value in seen_unhashable:
                continue
            seen_unhashable.append(value)
        result.append(value)
    return result

"""Container arbitrary generators: lists, sets, dicts, arrays and bytes.

Sizes are drawn uniformly from the configured bounds. Every container has a
minimum-size edge case, filled from the element's first edge case or, for
elements without edge cases, drawn from a fixed-seed source. Containers that need
distinct elements (sets, dict keys) retry within the max_filter_attempts
budget and fail with GenerationExhaustedError when the element domain is
too small to fill them.
"""

import copy
from typing import Any, Hashable, TypeVar

from propgen.arb.base import Arb
from propgen.arb.primitives import IntArb
from propgen.core.errors import ConfigurationError, GenerationExhaustedError
from propgen.core.random_source import RandomSource
from propgen.core.settings import get_settings

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

EDGE_SEED = 0


def check_size_bounds(min_size: int, max_size: int) -> None:
    if min_size < 0:
        raise ConfigurationError(f"min_size must be non-negative, got {min_size}")
    if min_size > max_size:
        raise ConfigurationError(
            f"Inverted size bounds: min_size {min_size} > max_size {max_size}"
        )


def fill(element: Arb[T], size: int) -> list[T]:
    """``size`` elements for a minimum-size edge case.

    Copies of the element's first edge case, or fixed-seed draws when the
    element has none.
    """
    edges = element._edges
    if edges:
        return [copy.deepcopy(edges[0]) for _ in range(size)]
    source = RandomSource(EDGE_SEED)
    return [element.draw(source) for _ in range(size)]


class ListArb(Arb[list[T]]):
    """Lists of elements from another generator."""

    def __init__(self, element: Arb[T], min_size: int = 0, max_size: int = 100):
        check_size_bounds(min_size, max_size)
        super().__init__()
        self.element = element
        self.min_size = min_size
        self.max_size = max_size

    def draw(self, source: RandomSource) -> list[T]:
        length = source.next_int(self.min_size, self.max_size)
        return [self.element.generate(source)[0] for _ in range(length)]

    def edge_cases(self) -> list[list[T]]:
        edges: list[list[T]] = []
        if self.min_size == 0:
            edges.append([])
        if self.min_size <= 1 <= self.max_size:
            edges.extend([e] for e in self.element._edges)
        if not edges:
            edges.append(fill(self.element, self.min_size))
        return edges


class SetArb(Arb[set[K]]):
    """Sets of distinct elements from another generator."""

    def __init__(self, element: Arb[K], min_size: int = 0, max_size: int = 100):
        check_size_bounds(min_size, max_size)
        super().__init__()
        self.element = element
        self.min_size = min_size
        self.max_size = max_size
        self.max_attempts = get_settings().max_filter_attempts

    def draw(self, source: RandomSource) -> set[K]:
        return set(self.collect(source, source.next_int(self.min_size, self.max_size)))

    def collect(self, source: RandomSource, target: int, initial: list[K] | None = None) -> list[K]:
        """Up to ``target`` distinct elements, in the order they were drawn."""
        result: dict[K, None] = dict.fromkeys(initial or ())
        misses = 0
        while len(result) < target:
            value = self.element.generate(source)[0]
            if value in result:
                misses += 1
                if misses >= self.max_attempts:
                    if len(result) >= self.min_size:
                        break
                    raise GenerationExhaustedError(
                        f"Could not find {self.min_size} distinct elements "
                        f"after {misses} duplicate draws",
                        attempts=misses,
                    )
                continue
            result[value] = None
        return list(result)

    def minimum(self) -> list[K]:
        """Exactly ``min_size`` distinct elements, preferring the element's edge cases."""
        initial = list(dict.fromkeys(self.element._edges))[: self.min_size]
        return self.collect(RandomSource(EDGE_SEED), self.min_size, initial)

    def edge_cases(self) -> list[set[K]]:
        edges: list[set[K]] = []
        if self.min_size == 0:
            edges.append(set())
        if self.min_size <= 1 <= self.max_size:
            edges.extend({e} for e in self.element._edges)
        if not edges:
            edges.append(set(self.minimum()))
        return edges


class DictArb(Arb[dict[K, V]]):
    """Dicts with distinct keys from one generator and values from another."""

    def __init__(
        self,
        keys: Arb[K],
        values: Arb[V],
        min_size: int = 0,
        max_size: int = 100,
    ):
        check_size_bounds(min_size, max_size)
        super().__init__()
        self.keys = SetArb(keys, min_size, max_size)
        self.values = values
        self.min_size = min_size
        self.max_size = max_size

    def draw(self, source: RandomSource) -> dict[K, V]:
        size = source.next_int(self.min_size, self.max_size)
        return {k: self.values.generate(source)[0] for k in self.keys.collect(source, size)}

    def edge_cases(self) -> list[dict[K, V]]:
        edges: list[dict[K, V]] = []
        if self.min_size == 0:
            edges.append({})
        key_edges = self.keys.element._edges
        value_edges = self.values._edges
        if self.min_size <= 1 <= self.max_size and key_edges and value_edges:
            edges.append({key_edges[0]: value_edges[0]})
        if not edges:
            keys = self.keys.minimum()
            edges.append(dict(zip(keys, fill(self.values, len(keys)))))
        return edges


class ArrayArb(Arb[tuple[T, ...]]):
    """Fixed-type tuples whose length comes from an integer generator."""

    def __init__(self, length: Arb[int] | int, element: Arb[T]):
        if isinstance(length, int):
            if length < 0:
                raise ConfigurationError(f"Array length must be non-negative, got {length}")
            length = IntArb(length, length)
        super().__init__()
        self.length = length
        self.element = element

    def draw(self, source: RandomSource) -> tuple[T, ...]:
        size = self.length.generate(source)[0]
        if size < 0:
            raise GenerationExhaustedError(f"Length generator produced negative size {size}")
        return tuple(self.element.generate(source)[0] for _ in range(size))

    def edge_cases(self) -> list[tuple[T, ...]]:
        sizes = [n for n in self.length._edges if n >= 0]
        if not sizes:
            return []
        return [tuple(fill(self.element, min(sizes)))]


class BinaryArb(Arb[bytes]):
    """Byte strings with length in [min_size, max_size]."""

    def __init__(self, min_size: int = 0, max_size: int = 100):
        check_size_bounds(min_size, max_size)
        super().__init__()
        self.min_size = min_size
        self.max_size = max_size

    def draw(self, source: RandomSource) -> bytes:
        length = source.next_int(self.min_size, self.max_size)
        return source.random.randbytes(length)

    def edge_cases(self) -> list[bytes]:
        return [b"\x00" * self.min_size]


def lists(element: Arb[T], min_size: int = 0, max_size: int = 100) -> ListArb[T]:
    """Lists with length in [min_size, max_size].

    Args:
        element: Generator for the list elements
        min_size: Inclusive lower bound on length
        max_size: Inclusive upper bound on length

    Returns:
        A list generator
    """
    return ListArb(element, min_size, max_size)


def sets(element: Arb[K], min_size: int = 0, max_size: int = 100) -> SetArb[K]:
    """Sets with size in [min_size, max_size].

    A set may come out smaller than the drawn size (never below
    ``min_size``) when the element domain runs out of fresh values.
    """
    return SetArb(element, min_size, max_size)


def dicts(
    keys: Arb[K],
    values: Arb[V],
    min_size: int = 0,
    max_size: int = 100,
) -> DictArb[K, V]:
    return DictArb(keys, values, min_size, max_size)


def arrays(length: Arb[int] | int, element: Arb[Any]) -> ArrayArb[Any]:
    """Tuples whose length is drawn from ``length`` (or fixed when an int)."""
    return ArrayArb(length, element)


def binary(min_size: int = 0, max_size: int = 100) -> BinaryArb:
    return BinaryArb(min_size, max_size)

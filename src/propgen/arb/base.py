"""Base class for arbitrary (random) generators.

An Arb produces an unbounded stream of values drawn from a domain. With a
fixed probability a sample is taken from the generator's edge cases
(boundaries, empty containers, ...) instead of the uniform draw, and
``samples`` always emits every edge case once before switching to random
sampling, so boundary coverage never depends on luck.

Combinators wrap an existing Arb rather than subclassing it.
"""

import copy
from abc import abstractmethod
from functools import cached_property
from typing import Any, Callable, Iterator, Sequence, TypeVar

from propgen.core.base import Gen, GenKind, Sample, check_count
from propgen.core.errors import ConfigurationError, GenerationExhaustedError
from propgen.core.random_source import RandomSource, get_default_source
from propgen.core.settings import get_settings

T = TypeVar("T")
U = TypeVar("U")


def check_probability(name: str, value: float) -> float:
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"{name} must be within [0, 1], got {value}")
    return value


class Arb(Gen[T]):
    """Abstract base class for random generators.

    Subclasses implement ``draw`` (the uniform draw) and optionally
    ``edge_cases``.
    """

    kind = GenKind.ARBITRARY

    def __init__(self, edge_probability: float | None = None):
        """Initialize the generator.

        Args:
            edge_probability: Chance of sampling an edge case; taken from
                the active settings when omitted
        """
        if edge_probability is None:
            edge_probability = get_settings().edge_case_probability
        self.edge_probability = check_probability("edge_probability", edge_probability)

    @abstractmethod
    def draw(self, source: RandomSource) -> T:
        """Draw a value uniformly from the domain, ignoring edge cases."""
        pass

    def edge_cases(self) -> list[T]:
        """Boundary values this generator should always cover."""
        return []

    @cached_property
    def _edges(self) -> tuple[T, ...]:
        # Handed out as deep copies; callers may mutate what they receive
        return tuple(self.edge_cases())

    def generate(self, source: RandomSource) -> tuple[T, bool]:
        """Produce a value with edge-case bias.

        Returns:
            Tuple of (value, whether it is an edge case)
        """
        edges = self._edges
        if edges and self.edge_probability > 0 and source.next_bool(self.edge_probability):
            return copy.deepcopy(source.choice(edges)), True
        return self.draw(source), False

    def sample(self, source: RandomSource | None = None) -> Sample[T]:
        if source is None:
            source = get_default_source()
        value, edge = self.generate(source)
        return Sample(value=value, seed=source.seed, edge_case=edge)

    def samples(
        self,
        source: RandomSource | None = None,
        count: int | None = None,
    ) -> Iterator[Sample[T]]:
        """Produce samples lazily: every edge case once, then random samples.

        Args:
            source: Random source to draw from (the default source when omitted)
            count: Number of samples; unbounded when None

        Yields:
            Samples computed on demand
        """
        check_count(count)
        if source is None:
            source = get_default_source()
        edges = self._edges
        position = 0
        while count is None or position < count:
            if position < len(edges):
                value, edge = copy.deepcopy(edges[position]), True
            else:
                value, edge = self.generate(source)
            yield Sample(value=value, seed=source.seed, position=position, edge_case=edge)
            position += 1

    def map(self, fn: Callable[[T], U]) -> "Arb[U]":
        return MappedArb(self, fn)

    def filter(self, predicate: Callable[[T], bool], max_attempts: int | None = None) -> "Arb[T]":
        return FilteredArb(self, predicate, max_attempts)

    def or_null(self, probability: float = 0.5) -> "Arb[T | None]":
        """Return None with ``probability``, otherwise a value from this generator."""
        return NullableArb(self, probability)

    def flat_map(self, fn: Callable[[T], "Arb[U]"]) -> "Arb[U]":
        """Sample a value, then sample from the generator ``fn`` builds from it."""
        return FlatMappedArb(self, fn)

    def zip(self, *others: "Arb[Any]") -> "Arb[tuple[Any, ...]]":
        return BindArb([self, *others], lambda *values: tuple(values))

    def describe(self) -> dict[str, Any]:
        info = super().describe()
        info["edge_cases"] = len(self._edges)
        return info


class MappedArb(Arb[U]):
    """Transforms every value of another Arb."""

    def __init__(self, arb: Arb[T], fn: Callable[[T], U]):
        super().__init__(arb.edge_probability)
        self._arb = arb
        self._fn = fn

    def draw(self, source: RandomSource) -> U:
        return self._fn(self._arb.draw(source))

    def edge_cases(self) -> list[U]:
        return [self._fn(e) for e in self._arb._edges]

    def generate(self, source: RandomSource) -> tuple[U, bool]:
        value, edge = self._arb.generate(source)
        return self._fn(value), edge


class FilteredArb(Arb[T]):
    """Keeps only values matching a predicate, with a bounded retry budget."""

    def __init__(
        self,
        arb: Arb[T],
        predicate: Callable[[T], bool],
        max_attempts: int | None = None,
    ):
        super().__init__(arb.edge_probability)
        if max_attempts is None:
            max_attempts = get_settings().max_filter_attempts
        if max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be at least 1, got {max_attempts}")
        self._arb = arb
        self._predicate = predicate
        self.max_attempts = max_attempts

    def draw(self, source: RandomSource) -> T:
        for _ in range(self.max_attempts):
            value = self._arb.draw(source)
            if self._predicate(value):
                return value
        raise self._exhausted()

    def edge_cases(self) -> list[T]:
        return [e for e in self._arb._edges if self._predicate(e)]

    def generate(self, source: RandomSource) -> tuple[T, bool]:
        for _ in range(self.max_attempts):
            value, edge = self._arb.generate(source)
            if self._predicate(value):
                return value, edge
        raise self._exhausted()

    def _exhausted(self) -> GenerationExhaustedError:
        return GenerationExhaustedError(
            f"Filter rejected {self.max_attempts} consecutive values",
            attempts=self.max_attempts,
        )


class NullableArb(Arb[T | None]):
    """Yields None with a fixed probability, otherwise delegates."""

    def __init__(self, arb: Arb[T], probability: float = 0.5):
        super().__init__(arb.edge_probability)
        self._arb = arb
        self.probability = check_probability("probability", probability)

    def draw(self, source: RandomSource) -> T | None:
        if self._is_null(source):
            return None
        return self._arb.draw(source)

    def edge_cases(self) -> list[T | None]:
        if self.probability >= 1.0:
            return [None]
        if self.probability <= 0.0:
            return list(self._arb._edges)
        return [None, *self._arb._edges]

    def generate(self, source: RandomSource) -> tuple[T | None, bool]:
        if self._is_null(source):
            return None, True
        return self._arb.generate(source)

    def _is_null(self, source: RandomSource) -> bool:
        # p == 1.0 and p == 0.0 never consult the source
        if self.probability >= 1.0:
            return True
        if self.probability <= 0.0:
            return False
        return source.next_bool(self.probability)


class FlatMappedArb(Arb[U]):
    """Samples a value, then samples from a generator derived from it."""

    def __init__(self, arb: Arb[T], fn: Callable[[T], Arb[U]]):
        super().__init__(arb.edge_probability)
        self._arb = arb
        self._fn = fn

    def draw(self, source: RandomSource) -> U:
        return self._fn(self._arb.draw(source)).draw(source)

    def generate(self, source: RandomSource) -> tuple[U, bool]:
        value, _ = self._arb.generate(source)
        return self._fn(value).generate(source)


class BindArb(Arb[U]):
    """Combines several Arbs through a function.

    Components are sampled one after another from the same source.
    """

    def __init__(self, arbs: Sequence[Arb[Any]], fn: Callable[..., U]):
        if not arbs:
            raise ConfigurationError("bind requires at least one generator")
        super().__init__(min(a.edge_probability for a in arbs))
        self._arbs = list(arbs)
        self._fn = fn

    def draw(self, source: RandomSource) -> U:
        return self._fn(*(a.draw(source) for a in self._arbs))

    def edge_cases(self) -> list[U]:
        # Aligns the i-th edge case of every component
        edge_lists = [a._edges for a in self._arbs]
        if not all(edge_lists):
            return []
        return [self._fn(*combo) for combo in zip(*edge_lists)]

    def generate(self, source: RandomSource) -> tuple[U, bool]:
        values = []
        all_edges = True
        for arb in self._arbs:
            value, edge = arb.generate(source)
            values.append(value)
            all_edges = all_edges and edge
        return self._fn(*values), all_edges


class ChoiceArb(Arb[Any]):
    """Picks one of several Arbs per sample, then delegates to it."""

    def __init__(self, arbs: Sequence[Arb[Any]], weights: Sequence[float] | None = None):
        if not arbs:
            raise ConfigurationError("choose requires at least one generator")
        if weights is not None:
            if len(weights) != len(arbs):
                raise ConfigurationError(
                    f"Got {len(weights)} weights for {len(arbs)} generators"
                )
            if any(w < 0 for w in weights) or sum(weights) <= 0:
                raise ConfigurationError("Weights must be non-negative with a positive total")
        super().__init__(min(a.edge_probability for a in arbs))
        self._arbs = list(arbs)
        self._weights = list(weights) if weights is not None else None

    def _pick(self, source: RandomSource) -> Arb[Any]:
        if self._weights is None:
            return source.choice(self._arbs)
        return self._arbs[source.weighted_index(self._weights)]

    def draw(self, source: RandomSource) -> Any:
        return self._pick(source).draw(source)

    def edge_cases(self) -> list[Any]:
        weights = self._weights or [1.0] * len(self._arbs)
        return [e for a, w in zip(self._arbs, weights) if w > 0 for e in a._edges]

    def generate(self, source: RandomSource) -> tuple[Any, bool]:
        return self._pick(source).generate(source)

"""Base classes for generators - the sampling protocol.

Every generator, random or exhaustive, can:
- Produce a single Sample
- Produce a lazy sequence of Samples
- Be transformed with map and filter

Generators are immutable. Random state lives only in the RandomSource
passed alongside them.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Generic, Iterator, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from propgen.core.errors import ConfigurationError
from propgen.core.random_source import RandomSource

T = TypeVar("T")
U = TypeVar("U")


class GenKind(str, Enum):
    """The two generator strategies."""

    ARBITRARY = "arbitrary"
    EXHAUSTIVE = "exhaustive"


class Sample(BaseModel, Generic[T]):
    """A single generated value and where it came from."""

    model_config = ConfigDict(frozen=True)

    value: T = Field(..., description="The generated value")
    seed: int | None = Field(
        default=None,
        description="Seed of the source that produced the value (random generators only)",
    )
    position: int | None = Field(
        default=None,
        description="Index within a produced sequence",
    )
    edge_case: bool = Field(
        default=False,
        description="Whether the value came from the generator's edge cases",
    )


class Gen(ABC, Generic[T]):
    """Abstract base class for all generators."""

    kind: GenKind

    @abstractmethod
    def sample(self, source: RandomSource | None = None) -> Sample[T]:
        """Produce a single sample.

        Args:
            source: Random source to draw from (the default source when omitted)

        Returns:
            One Sample
        """
        pass

    @abstractmethod
    def samples(
        self,
        source: RandomSource | None = None,
        count: int | None = None,
    ) -> Iterator[Sample[T]]:
        """Produce samples lazily, one at a time.

        Args:
            source: Random source to draw from
            count: Number of samples (None for the generator's natural length)

        Yields:
            Samples computed on demand
        """
        pass

    @abstractmethod
    def map(self, fn: Callable[[T], U]) -> "Gen[U]":
        pass

    @abstractmethod
    def filter(self, predicate: Callable[[T], bool]) -> "Gen[T]":
        pass

    def take(self, count: int, source: RandomSource | None = None) -> list[T]:
        """Produce ``count`` values as a list."""
        return [s.value for s in self.samples(source, count)]

    def describe(self) -> dict[str, Any]:
        """Describe this generator for display."""
        return {"kind": self.kind.value, "generator": type(self).__name__}


def check_count(count: int | None) -> None:
    if count is not None and count < 0:
        raise ConfigurationError(f"Sample count must be non-negative, got {count}")

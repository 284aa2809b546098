"""Property Engine - runs properties against generated inputs.

A property is a callable taking one argument per generator. ``for_all``
passes when the property returns a truthy value for every trial;
``check_all`` passes when it raises nothing. The first failing input is
reported with the seed that reproduces it. There is no shrinking.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Sequence

from propgen.core.base import Gen
from propgen.core.errors import ConfigurationError, PropertyFailedError
from propgen.core.random_source import RandomSource
from propgen.core.settings import get_settings
from propgen.exhaustive.base import Exhaustive

logger = logging.getLogger(__name__)


class CheckMode(str, Enum):
    """How a property signals failure."""

    FOR_ALL = "for_all"
    CHECK_ALL = "check_all"


@dataclass
class PropertyResult:
    """Result of a successful property run."""

    name: str
    mode: CheckMode
    iterations: int
    seed: int
    edge_cases: int = 0
    duration_seconds: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "mode": self.mode.value,
            "iterations": self.iterations,
            "seed": self.seed,
            "edge_cases": self.edge_cases,
            "duration_seconds": self.duration_seconds,
            "metadata": self.metadata,
        }


class PropertyEngine:
    """Engine for running properties over generated inputs.

    Exhaustive arguments cycle through their values; arbitrary arguments
    each draw from their own child of the run's source.
    """

    def resolve_iterations(self, generators: Sequence[Gen[Any]], iterations: int | None) -> int:
        """Work out how many trials to run.

        Without an explicit count the settings default is used, raised to
        the size of the largest exhaustive argument so every one of its
        values is tried.
        """
        if iterations is None:
            iterations = get_settings().default_iterations
            sizes = [len(g) for g in generators if isinstance(g, Exhaustive)]
            if sizes:
                iterations = max(iterations, max(sizes))
        if iterations < 1:
            raise ConfigurationError(f"iterations must be at least 1, got {iterations}")
        return iterations

    def run(
        self,
        prop: Callable[..., Any],
        generators: Sequence[Gen[Any]],
        mode: CheckMode = CheckMode.FOR_ALL,
        iterations: int | None = None,
        seed: int | None = None,
    ) -> PropertyResult:
        """Run a property.

        Args:
            prop: The property; called with one value per generator
            generators: Generators supplying the arguments
            mode: Whether the property returns a verdict or raises
            iterations: Number of trials
            seed: Seed for the run; random when omitted

        Returns:
            PropertyResult describing the run

        Raises:
            PropertyFailedError: On the first failing trial
        """
        if not generators:
            raise ConfigurationError("A property needs at least one generator")

        name = getattr(prop, "__name__", repr(prop))
        iterations = self.resolve_iterations(generators, iterations)
        root = RandomSource(seed)
        streams = [
            iter(gen.samples(root.child(index), iterations))
            for index, gen in enumerate(generators)
        ]

        logger.debug(
            "Running property '%s' (%s) for %d iterations with seed %d",
            name, mode.value, iterations, root.seed,
        )
        start = time.perf_counter()
        edge_cases = 0
        for iteration in range(iterations):
            samples = [next(stream) for stream in streams]
            arguments = tuple(s.value for s in samples)
            edge_cases += any(s.edge_case for s in samples)

            try:
                outcome = prop(*arguments)
            except Exception as e:
                raise PropertyFailedError(
                    f"Property '{name}' raised {type(e).__name__} at iteration {iteration} "
                    f"(seed={root.seed}) with arguments {arguments!r}: {e}",
                    seed=root.seed,
                    iteration=iteration,
                    arguments=arguments,
                    cause=e,
                ) from e

            if mode == CheckMode.FOR_ALL and not outcome:
                raise PropertyFailedError(
                    f"Property '{name}' returned {outcome!r} at iteration {iteration} "
                    f"(seed={root.seed}) with arguments {arguments!r}",
                    seed=root.seed,
                    iteration=iteration,
                    arguments=arguments,
                )

        return PropertyResult(
            name=name,
            mode=mode,
            iterations=iterations,
            seed=root.seed,
            edge_cases=edge_cases,
            duration_seconds=time.perf_counter() - start,
        )


def for_all(
    prop: Callable[..., Any],
    *generators: Gen[Any],
    iterations: int | None = None,
    seed: int | None = None,
) -> PropertyResult:
    """Check that ``prop`` returns a truthy value for every generated input.

    Example:
        >>> for_all(lambda a, b: len(a + b) == len(a) + len(b), arb.strings(), arb.strings())
    """
    return PropertyEngine().run(prop, generators, CheckMode.FOR_ALL, iterations, seed)


def check_all(
    prop: Callable[..., Any],
    *generators: Gen[Any],
    iterations: int | None = None,
    seed: int | None = None,
) -> PropertyResult:
    """Check that ``prop`` raises nothing for every generated input.

    Assertions inside ``prop`` are the usual way to fail.
    """
    return PropertyEngine().run(prop, generators, CheckMode.CHECK_ALL, iterations, seed)

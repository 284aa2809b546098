"""Error taxonomy for generator construction and sampling.

No error is recovered inside the library; all of them propagate to
whoever consumes the generator.
"""

from typing import Any


class PropgenError(Exception):
    """Base class for all propgen errors."""


class ConfigurationError(PropgenError, ValueError):
    """A generator was constructed with an invalid domain."""


class GenerationExhaustedError(PropgenError, RuntimeError):
    """A random generator ran out of attempts to find an acceptable value."""

    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class DomainExhaustionError(PropgenError, RuntimeError):
    """Filtering an exhaustive generator removed every value."""


class PropertyFailedError(PropgenError, AssertionError):
    """A property did not hold for a generated input."""

    def __init__(
        self,
        message: str,
        seed: int | None = None,
        iteration: int = 0,
        arguments: tuple[Any, ...] = (),
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.seed = seed
        self.iteration = iteration
        self.arguments = arguments
        self.cause = cause

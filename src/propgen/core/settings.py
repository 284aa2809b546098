"""Process-wide generation settings.

Generators read these values once, when they are constructed, so a
generator's behavior never changes after it has been built.
"""

from contextlib import contextmanager
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field


class GenerationSettings(BaseModel):
    """Tunable knobs shared by all generators."""

    model_config = ConfigDict(frozen=True)

    edge_case_probability: float = Field(
        default=0.02,
        ge=0.0,
        le=1.0,
        description="Probability that a random sample is drawn from the edge cases",
    )
    max_filter_attempts: int = Field(
        default=1000,
        ge=1,
        description="Retry budget for filters and distinct-element containers",
    )
    default_iterations: int = Field(
        default=1000,
        ge=1,
        description="Trials run by a property check when none are requested",
    )


_settings: GenerationSettings | None = None


def get_settings() -> GenerationSettings:
    """Get the active settings, creating the defaults on first use."""
    global _settings
    if _settings is None:
        _settings = GenerationSettings()
    return _settings


def configure(**overrides: Any) -> GenerationSettings:
    """Replace the active settings with a copy carrying ``overrides``."""
    global _settings
    _settings = GenerationSettings(**{**get_settings().model_dump(), **overrides})
    return _settings


def reset_settings() -> None:
    """Drop any overrides and return to the defaults."""
    global _settings
    _settings = None


@contextmanager
def use_settings(settings: GenerationSettings | None = None, **overrides: Any) -> Iterator[GenerationSettings]:
    """Temporarily activate other settings.

    Args:
        settings: Settings to activate (defaults to the current ones)
        **overrides: Individual fields to override on top

    Yields:
        The settings active inside the block
    """
    global _settings
    previous = _settings
    base = settings or get_settings()
    _settings = base.model_copy(update=overrides) if overrides else base
    try:
        yield _settings
    finally:
        _settings = previous

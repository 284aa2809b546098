"""Core module - the sampling protocol shared by every generator."""

from propgen.core.base import Gen, GenKind, Sample
from propgen.core.errors import (
    PropgenError,
    ConfigurationError,
    GenerationExhaustedError,
    DomainExhaustionError,
    PropertyFailedError,
)
from propgen.core.random_source import (
    RandomSource,
    get_default_source,
    set_default_source,
    reset_default_source,
)
from propgen.core.settings import (
    GenerationSettings,
    get_settings,
    configure,
    reset_settings,
    use_settings,
)

__all__ = [
    "Gen",
    "GenKind",
    "Sample",
    "PropgenError",
    "ConfigurationError",
    "GenerationExhaustedError",
    "DomainExhaustionError",
    "PropertyFailedError",
    "RandomSource",
    "get_default_source",
    "set_default_source",
    "reset_default_source",
    "GenerationSettings",
    "get_settings",
    "configure",
    "reset_settings",
    "use_settings",
]

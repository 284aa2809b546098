"""propgen - seedable value generators for property-based tests.

Two generator strategies share one sampling protocol:
- arb: random generators with edge-case bias
- exhaustive: finite generators enumerating every value of a domain

Generators compose through map, filter, zip, bind, or_null and choose, and
are consumed by for_all / check_all or sampled from YAML profiles.
"""

__version__ = "0.1.0"

from propgen import arb, exhaustive
from propgen.core.base import Gen, GenKind, Sample
from propgen.core.errors import (
    PropgenError,
    ConfigurationError,
    GenerationExhaustedError,
    DomainExhaustionError,
    PropertyFailedError,
)
from propgen.core.random_source import RandomSource
from propgen.engine.property_engine import for_all, check_all
from propgen.engine.sampling_engine import SamplingEngine
from propgen.engine.validation_engine import ValidationEngine

__all__ = [
    "arb",
    "exhaustive",
    "Gen",
    "GenKind",
    "Sample",
    "PropgenError",
    "ConfigurationError",
    "GenerationExhaustedError",
    "DomainExhaustionError",
    "PropertyFailedError",
    "RandomSource",
    "for_all",
    "check_all",
    "SamplingEngine",
    "ValidationEngine",
]

"""Engine module - runtime orchestration."""

from propgen.engine.sampling_engine import SamplingEngine, SamplingResult
from propgen.engine.property_engine import (
    PropertyEngine,
    PropertyResult,
    CheckMode,
    for_all,
    check_all,
)
from propgen.engine.validation_engine import ValidationEngine, ValidationResult

__all__ = [
    "SamplingEngine",
    "SamplingResult",
    "PropertyEngine",
    "PropertyResult",
    "CheckMode",
    "for_all",
    "check_all",
    "ValidationEngine",
    "ValidationResult",
]

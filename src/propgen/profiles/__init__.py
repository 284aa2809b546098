"""Profiles module - the configuration layer.

Profiles are project-owned YAML configurations that specify:
- Generators to sample and their options
- Sample counts
- Randomization seeds
- Generation settings

They contain no generation logic.
"""

from propgen.profiles.base import (
    SamplingProfile,
    GeneratorConfig,
    OutputConfig,
    OutputFormat,
)
from propgen.profiles.loader import ProfileLoader, load_profile

__all__ = [
    "SamplingProfile",
    "GeneratorConfig",
    "OutputConfig",
    "OutputFormat",
    "ProfileLoader",
    "load_profile",
]

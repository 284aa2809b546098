"""Base classes for Profiles - the configuration layer.

A sampling profile declares which generators to sample, how many samples
each should produce, and the seed and settings to sample them under. It
contains no generation logic.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from propgen.core.base import GenKind
from propgen.core.settings import GenerationSettings


class OutputFormat(str, Enum):
    """Supported output formats."""

    JSON = "json"
    JSONL = "jsonl"


class OutputConfig(BaseModel):
    """Configuration for exported samples."""

    format: OutputFormat = Field(default=OutputFormat.JSON, description="Output format")
    directory: str = Field(default="./output", description="Output directory")
    pretty_print: bool = Field(default=True, description="Indent JSON output")
    include_metadata: bool = Field(
        default=False,
        description="Export full samples (seed, position, edge_case) instead of bare values",
    )


class GeneratorConfig(BaseModel):
    """One generator to sample within a profile."""

    name: str = Field(..., description="Name of the produced dataset")
    type: str = Field(..., description="Registered generator type, e.g. 'int' or 'list'")
    kind: GenKind = Field(default=GenKind.ARBITRARY, description="Generator strategy")
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Factory options; nested generator specs are allowed"
    )
    count: int | None = Field(
        default=100,
        ge=0,
        description="Number of samples (None samples an exhaustive once through)"
    )
    null_probability: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Wrap the generator so it yields None with this probability"
    )
    schema_: dict[str, Any] | None = Field(
        default=None,
        alias="schema",
        description="JSON schema every sampled value must satisfy"
    )
    enabled: bool = Field(default=True, description="Whether this generator is sampled")

    model_config = ConfigDict(populate_by_name=True)

    def to_spec(self) -> dict[str, Any]:
        """The registry spec for this generator."""
        spec: dict[str, Any] = {
            "type": self.type,
            "kind": self.kind.value,
            "options": self.options,
        }
        if self.null_probability is not None:
            spec["null_probability"] = self.null_probability
        return spec


class SamplingProfile(BaseModel):
    """Project-specific configuration for sampling generators.

    A SamplingProfile declares:
    - Which generators to sample
    - How many samples each produces
    - The seed for reproducibility
    - Generation settings (edge-case bias, retry budget)
    """

    name: str = Field(..., description="Profile name")
    description: str = Field(default="", description="Profile description")
    version: str = Field(default="1.0.0", description="Profile version")

    seed: int | None = Field(
        default=None,
        description="Global random seed for reproducibility"
    )

    settings: GenerationSettings = Field(
        default_factory=GenerationSettings,
        description="Generation settings applied while building generators"
    )

    generators: list[GeneratorConfig] = Field(
        default_factory=list,
        description="Generators to sample"
    )

    output: OutputConfig = Field(
        default_factory=OutputConfig,
        description="Output configuration"
    )

    tags: list[str] = Field(
        default_factory=list,
        description="Tags for categorization"
    )

    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional metadata"
    )

    def get_enabled_generators(self) -> list[GeneratorConfig]:
        """Get only enabled generator configurations."""
        return [g for g in self.generators if g.enabled]

    def get_generator_config(self, name: str) -> GeneratorConfig | None:
        """Get the configuration of a generator by name."""
        for config in self.generators:
            if config.name == name:
                return config
        return None

    def add_generator(self, config: GeneratorConfig) -> None:
        """Add a generator configuration, replacing one with the same name."""
        self.generators = [g for g in self.generators if g.name != config.name]
        self.generators.append(config)

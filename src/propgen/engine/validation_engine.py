"""Validation Engine - checks profiles and sampled values.

The Validation Engine ensures:
- Profiles reference registered generators with buildable options
- Sampled values match the JSON schemas their profile declares
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

import jsonschema

from propgen.core.base import GenKind, Sample
from propgen.core.errors import ConfigurationError
from propgen.core.settings import use_settings
from propgen.engine.sampling_engine import SamplingResult
from propgen.profiles.base import SamplingProfile
from propgen.registry import GeneratorRegistry, get_global_generator_registry
from propgen.utils.helpers import to_jsonable


class ValidationSeverity(str, Enum):
    """Severity levels for validation issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: ValidationSeverity
    message: str
    path: str = ""
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "path": self.path,
            "context": self.context,
        }


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)
    validated_count: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.WARNING)

    def add_issue(
        self,
        severity: ValidationSeverity,
        message: str,
        path: str = "",
        **context: Any,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=severity,
                message=message,
                path=path,
                context=context,
            )
        )
        if severity == ValidationSeverity.ERROR:
            self.valid = False

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another validation result into this one."""
        return ValidationResult(
            valid=self.valid and other.valid,
            issues=self.issues + other.issues,
            validated_count=self.validated_count + other.validated_count,
            metadata={**self.metadata, **other.metadata},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "validated_count": self.validated_count,
            "issues": [i.to_dict() for i in self.issues],
            "metadata": self.metadata,
        }


class ValidationEngine:
    """Engine for validating profiles and sampled values."""

    def __init__(self, generator_registry: GeneratorRegistry | None = None):
        self.generator_registry = generator_registry or get_global_generator_registry()

    def validate_profile(self, profile: SamplingProfile) -> ValidationResult:
        """Validate a sampling profile.

        Checks:
        - Required fields are present
        - Generator names are unique
        - Generator types are registered and their options build
        - Arbitrary generators have a sample count
        - Declared JSON schemas are themselves valid
        """
        result = ValidationResult(valid=True, validated_count=1)

        if not profile.name:
            result.add_issue(
                ValidationSeverity.ERROR,
                "Profile must have a name",
                path="name",
            )

        if not profile.generators:
            result.add_issue(
                ValidationSeverity.WARNING,
                "Profile has no generators defined",
                path="generators",
            )

        if profile.settings.edge_case_probability == 0.0:
            result.add_issue(
                ValidationSeverity.INFO,
                "Edge-case bias is disabled; edge cases only appear at the start of each sequence",
                path="settings.edge_case_probability",
            )

        names: set[str] = set()
        for i, config in enumerate(profile.generators):
            path = f"generators[{i}]"
            if config.name in names:
                result.add_issue(
                    ValidationSeverity.ERROR,
                    f"Duplicate generator name: {config.name}",
                    path=f"{path}.name",
                )
            names.add(config.name)

            if self.generator_registry.get(config.type, config.kind) is None:
                result.add_issue(
                    ValidationSeverity.ERROR,
                    f"Unknown {config.kind.value} generator type: {config.type}",
                    path=f"{path}.type",
                )
                continue

            try:
                with use_settings(profile.settings):
                    generator = self.generator_registry.build(config.to_spec())
            except ConfigurationError as e:
                result.add_issue(
                    ValidationSeverity.ERROR,
                    f"Invalid generator configuration: {e}",
                    path=f"{path}.options",
                )
                continue

            if config.count is None and generator.kind == GenKind.ARBITRARY:
                result.add_issue(
                    ValidationSeverity.ERROR,
                    "Arbitrary generators need an explicit count",
                    path=f"{path}.count",
                )

            if config.schema_ is not None:
                for issue in self.check_schema(config.schema_).issues:
                    issue.path = f"{path}.schema"
                    result.issues.append(issue)
                    result.valid = False

        return result

    def check_schema(self, schema: dict[str, Any]) -> ValidationResult:
        """Check that a JSON schema is itself valid."""
        result = ValidationResult(valid=True, validated_count=1)
        try:
            jsonschema.validators.validator_for(schema).check_schema(schema)
        except jsonschema.SchemaError as e:
            result.add_issue(
                ValidationSeverity.ERROR,
                f"Invalid schema: {e.message}",
                path="schema",
            )
        return result

    def validate_samples(
        self,
        samples: Sequence[Sample[Any]],
        schema: dict[str, Any],
        name: str = "samples",
    ) -> ValidationResult:
        """Validate sampled values against a JSON schema.

        Values are converted to plain JSON types first, so tuples and sets
        validate as arrays.
        """
        schema_result = self.check_schema(schema)
        if not schema_result.valid:
            return schema_result

        result = ValidationResult(valid=True, validated_count=len(samples))

        if not samples:
            result.add_issue(
                ValidationSeverity.WARNING,
                "No samples to validate",
                path=name,
            )

        for i, sample in enumerate(samples):
            value_result = self.validate_value(sample.value, schema)
            for issue in value_result.issues:
                issue.path = f"{name}[{i}]{'.' + issue.path if issue.path else ''}"
                result.issues.append(issue)
                if issue.severity == ValidationSeverity.ERROR:
                    result.valid = False

        return result

    def validate_value(self, value: Any, schema: dict[str, Any]) -> ValidationResult:
        """Validate a single value against a JSON schema.

        Args:
            value: The value to validate
            schema: JSON Schema to validate against

        Returns:
            Validation result
        """
        result = ValidationResult(valid=True, validated_count=1)

        try:
            jsonschema.validate(to_jsonable(value), schema)
        except jsonschema.ValidationError as e:
            result.add_issue(
                ValidationSeverity.ERROR,
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                schema_path=list(e.schema_path),
            )
        except jsonschema.SchemaError as e:
            result.add_issue(
                ValidationSeverity.ERROR,
                f"Invalid schema: {e.message}",
                path="schema",
            )

        return result

    def validate_result(self, result: SamplingResult) -> ValidationResult:
        """Validate every dataset of a SamplingResult against its declared schema."""
        combined = ValidationResult(valid=True)
        for config in result.profile.get_enabled_generators():
            if config.schema_ is None:
                continue
            samples = result.get_dataset(config.name) or []
            combined = combined.merge(self.validate_samples(samples, config.schema_, config.name))
        return combined

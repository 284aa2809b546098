"""Profile Loader for loading sampling profiles from YAML files."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from propgen.core.errors import ConfigurationError
from propgen.core.settings import GenerationSettings
from propgen.profiles.base import (
    GeneratorConfig,
    OutputConfig,
    OutputFormat,
    SamplingProfile,
)

logger = logging.getLogger(__name__)


class ProfileLoader:
    """Loads sampling profiles from YAML files."""

    def load_file(self, path: Path | str) -> SamplingProfile:
        """Load a profile from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Loaded SamplingProfile instance
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Profile file not found: {path}")

        logger.debug("Loading profile from %s", path)
        with open(path) as f:
            data = yaml.safe_load(f)

        return self._parse_profile(data)

    def load_from_string(self, content: str) -> SamplingProfile:
        """Load a profile from a YAML string.

        Args:
            content: YAML content as string

        Returns:
            Loaded SamplingProfile instance
        """
        data = yaml.safe_load(content)
        return self._parse_profile(data)

    def _parse_profile(self, data: Any) -> SamplingProfile:
        """Parse profile data from YAML structure."""
        if not isinstance(data, dict):
            raise ConfigurationError("Profile must be a YAML mapping")
        if "name" not in data:
            raise ConfigurationError("Profile must have a 'name' field")

        try:
            generators = [
                GeneratorConfig(
                    name=g["name"],
                    type=g["type"],
                    kind=g.get("kind", "arbitrary"),
                    options=g.get("options") or {},
                    count=g.get("count", 100),
                    null_probability=g.get("null_probability"),
                    schema=g.get("schema"),
                    enabled=g.get("enabled", True),
                )
                for g in data.get("generators") or []
            ]

            output_data = data.get("output") or {}
            output_format_str = output_data.get("format", "json")
            try:
                output_format = OutputFormat(output_format_str)
            except ValueError:
                output_format = OutputFormat.JSON

            output = OutputConfig(
                format=output_format,
                directory=output_data.get("directory", "./output"),
                pretty_print=output_data.get("pretty_print", True),
                include_metadata=output_data.get("include_metadata", False),
            )

            return SamplingProfile(
                name=data["name"],
                description=data.get("description", ""),
                version=str(data.get("version", "1.0.0")),
                seed=data.get("seed"),
                settings=GenerationSettings(**(data.get("settings") or {})),
                generators=generators,
                output=output,
                tags=data.get("tags", []),
                metadata=data.get("metadata", {}),
            )
        except KeyError as e:
            raise ConfigurationError(f"Generator entry is missing required key {e}") from e
        except ValidationError as e:
            raise ConfigurationError(f"Invalid profile: {e}") from e

    def save_file(self, profile: SamplingProfile, path: Path | str) -> None:
        """Save a profile to a YAML file.

        Args:
            profile: The profile to save
            path: Path for the output file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self._profile_to_dict(profile)

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def _profile_to_dict(self, profile: SamplingProfile) -> dict[str, Any]:
        """Convert a SamplingProfile to a dictionary for YAML serialization."""
        generators = []
        for g in profile.generators:
            entry: dict[str, Any] = {
                "name": g.name,
                "type": g.type,
                "kind": g.kind.value,
                "options": g.options,
                "count": g.count,
                "enabled": g.enabled,
            }
            if g.null_probability is not None:
                entry["null_probability"] = g.null_probability
            if g.schema_ is not None:
                entry["schema"] = g.schema_
            generators.append(entry)

        return {
            "name": profile.name,
            "description": profile.description,
            "version": profile.version,
            "seed": profile.seed,
            "settings": profile.settings.model_dump(),
            "generators": generators,
            "output": {
                "format": profile.output.format.value,
                "directory": profile.output.directory,
                "pretty_print": profile.output.pretty_print,
                "include_metadata": profile.output.include_metadata,
            },
            "tags": profile.tags,
            "metadata": profile.metadata,
        }


def load_profile(path: Path | str) -> SamplingProfile:
    """Convenience function to load a profile from a file.

    Args:
        path: Path to the YAML file

    Returns:
        Loaded SamplingProfile instance
    """
    loader = ProfileLoader()
    return loader.load_file(path)

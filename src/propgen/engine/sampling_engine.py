"""Sampling Engine - Runtime engine for sampling profiles.

The Sampling Engine orchestrates a sampling run by:
- Building generators from profile configurations
- Deriving one child random source per generator from the profile seed
- Collecting samples and exporting them
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from propgen.core.base import Gen, GenKind, Sample
from propgen.core.errors import ConfigurationError
from propgen.core.random_source import RandomSource
from propgen.core.settings import GenerationSettings, use_settings
from propgen.profiles.base import GeneratorConfig, OutputFormat, SamplingProfile
from propgen.registry import GeneratorRegistry, get_global_generator_registry
from propgen.utils.helpers import to_jsonable

logger = logging.getLogger(__name__)


class SamplingResult:
    """Result of a sampling run."""

    def __init__(
        self,
        profile: SamplingProfile,
        datasets: dict[str, list[Sample[Any]]],
        seed: int,
        start_time: datetime,
        end_time: datetime,
    ):
        self.profile = profile
        self.datasets = datasets
        self.seed = seed
        self.start_time = start_time
        self.end_time = end_time

    @property
    def duration_seconds(self) -> float:
        return (self.end_time - self.start_time).total_seconds()

    @property
    def total_samples(self) -> int:
        return sum(len(samples) for samples in self.datasets.values())

    def get_dataset(self, name: str) -> list[Sample[Any]] | None:
        return self.datasets.get(name)

    def values(self, name: str) -> list[Any]:
        """The bare values sampled for a generator."""
        return [s.value for s in self.datasets.get(name, [])]

    def summary(self) -> dict[str, Any]:
        return {
            "profile": self.profile.name,
            "seed": self.seed,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_seconds": self.duration_seconds,
            "total_samples": self.total_samples,
            "datasets": {
                name: {
                    "count": len(samples),
                    "edge_cases": sum(1 for s in samples if s.edge_case),
                }
                for name, samples in self.datasets.items()
            },
        }


class SamplingEngine:
    """Engine for sampling the generators a profile declares.

    Every generator gets its own child source derived from the run seed and
    the generator's name, so adding or removing one generator never changes
    what the others produce.
    """

    def __init__(self, generator_registry: GeneratorRegistry | None = None):
        self.generator_registry = generator_registry or get_global_generator_registry()

    def build_generator(
        self,
        config: GeneratorConfig,
        settings: GenerationSettings | None = None,
    ) -> Gen[Any]:
        """Build the generator described by a configuration.

        Args:
            config: The generator configuration
            settings: Settings active while the generator is constructed

        Returns:
            The built generator
        """
        with use_settings(settings):
            return self.generator_registry.build(config.to_spec())

    def run(self, profile: SamplingProfile, seed: int | None = None) -> SamplingResult:
        """Sample every enabled generator of a profile.

        Args:
            profile: The profile defining what to sample
            seed: Overrides the profile seed

        Returns:
            SamplingResult containing the samples of every generator
        """
        start_time = datetime.now(timezone.utc)
        root = RandomSource(seed if seed is not None else profile.seed)
        logger.debug("Sampling profile '%s' with seed %d", profile.name, root.seed)

        datasets: dict[str, list[Sample[Any]]] = {}
        for config in profile.get_enabled_generators():
            generator = self.build_generator(config, profile.settings)
            if config.count is None and generator.kind == GenKind.ARBITRARY:
                raise ConfigurationError(
                    f"Generator '{config.name}' is arbitrary and needs an explicit count"
                )
            source = root.child(config.name)
            datasets[config.name] = list(generator.samples(source, config.count))
            logger.debug("Sampled %d values for '%s'", len(datasets[config.name]), config.name)

        end_time = datetime.now(timezone.utc)
        result = SamplingResult(
            profile=profile,
            datasets=datasets,
            seed=root.seed,
            start_time=start_time,
            end_time=end_time,
        )
        logger.info(
            "Sampled %d values from %d generators in %.3fs",
            result.total_samples,
            len(datasets),
            result.duration_seconds,
        )
        return result

    def sample(
        self,
        type_name: str,
        kind: GenKind | str = GenKind.ARBITRARY,
        count: int | None = 10,
        seed: int | None = None,
        null_probability: float | None = None,
        **options: Any,
    ) -> list[Sample[Any]]:
        """Sample a single generator by type name.

        Args:
            type_name: Registered generator type
            kind: Generator strategy
            count: Number of samples (None samples an exhaustive once through)
            seed: Optional random seed
            null_probability: Wrap the generator in or_null
            **options: Generator factory options

        Returns:
            The produced samples
        """
        spec: dict[str, Any] = {"type": type_name, "kind": kind, "options": options}
        if null_probability is not None:
            spec["null_probability"] = null_probability
        generator = self.generator_registry.build(spec)
        if count is None and generator.kind == GenKind.ARBITRARY:
            raise ConfigurationError("Arbitrary generators need an explicit count")
        return list(generator.samples(RandomSource(seed), count))

    def export_result(
        self,
        result: SamplingResult,
        output_dir: Path | str,
        format: OutputFormat | str = OutputFormat.JSON,
        pretty: bool = True,
        include_metadata: bool = False,
    ) -> list[Path]:
        """Export sampling results to files.

        Args:
            result: The sampling result to export
            output_dir: Directory to write files to
            format: Output format (json, jsonl)
            pretty: Indent JSON output
            include_metadata: Write full samples instead of bare values

        Returns:
            List of created file paths
        """
        format = OutputFormat(format)
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        created_files = []
        timestamp = result.start_time.strftime("%Y%m%d_%H%M%S")
        indent = 2 if pretty else None

        for name, samples in result.datasets.items():
            filepath = output_dir / f"{name}_{timestamp}.{format.value}"
            rows = [_export_row(s, include_metadata) for s in samples]

            if format == OutputFormat.JSON:
                data = {
                    "metadata": {
                        "generator": name,
                        "profile": result.profile.name,
                        "seed": result.seed,
                        "count": len(samples),
                        "generated_at": timestamp,
                    },
                    "samples": rows,
                }
                with open(filepath, "w") as f:
                    json.dump(data, f, indent=indent, default=str, allow_nan=False)

            elif format == OutputFormat.JSONL:
                with open(filepath, "w") as f:
                    for row in rows:
                        f.write(json.dumps(row, default=str, allow_nan=False) + "\n")

            created_files.append(filepath)

        summary_path = output_dir / f"summary_{timestamp}.json"
        with open(summary_path, "w") as f:
            json.dump(result.summary(), f, indent=2)
        created_files.append(summary_path)

        logger.debug("Exported %d files to %s", len(created_files), output_dir)
        return created_files


def _export_row(sample: Sample[Any], include_metadata: bool) -> Any:
    value = to_jsonable(sample.value)
    if not include_metadata:
        return value
    return {
        "value": value,
        "seed": sample.seed,
        "position": sample.position,
        "edge_case": sample.edge_case,
    }

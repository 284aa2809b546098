"""Main CLI entry point for propgen.

Provides deterministic sampling of generators from the command line.
"""

from typing import Any
import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from propgen import __version__
from propgen.core.base import GenKind
from propgen.engine.sampling_engine import SamplingEngine
from propgen.engine.validation_engine import ValidationEngine
from propgen.profiles.base import GeneratorConfig, SamplingProfile
from propgen.profiles.loader import ProfileLoader, load_profile
from propgen.registry import GeneratorRegistry
from propgen.utils.helpers import parse_option, to_jsonable

console = Console()

KINDS = [k.value for k in GenKind]


@click.group()
@click.version_option(version=__version__, prog_name="propgen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """propgen - Seedable value generators for property-based tests.

    Sample random (arbitrary) and exhaustive generators from the command
    line or from YAML sampling profiles.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@cli.command()
@click.argument("generator_type")
@click.option("--option", "-O", "raw_options", multiple=True, help="Generator option as key=value")
@click.option("--count", "-n", type=int, help="Number of samples (default 10; one full pass with --exhaustive)")
@click.option("--seed", "-s", type=int, help="Random seed")
@click.option("--exhaustive", "-e", is_flag=True, help="Use the exhaustive generator of this type")
@click.option("--null-probability", type=float, help="Yield null with this probability")
@click.option("--metadata", is_flag=True, help="Include seed, position and edge-case flags")
@click.option("--pretty", is_flag=True, help="Pretty print JSON output")
@click.pass_context
def sample(
    ctx: click.Context,
    generator_type: str,
    raw_options: tuple[str, ...],
    count: int | None,
    seed: int | None,
    exhaustive: bool,
    null_probability: float | None,
    metadata: bool,
    pretty: bool,
) -> None:
    """Sample values from a single generator.

    GENERATOR_TYPE is a registered type such as int, string or list.

    \b
    Examples:
      propgen sample int -O min_value=0 -O max_value=100 -n 5 -s 42
      propgen sample string -O max_size=8 --null-probability 0.2
      propgen sample int --exhaustive -O lower=0 -O upper=5
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        options = dict(parse_option(raw) for raw in raw_options)
        engine = SamplingEngine()
        samples = engine.sample(
            generator_type,
            kind=GenKind.EXHAUSTIVE if exhaustive else GenKind.ARBITRARY,
            count=count if count is not None or exhaustive else 10,
            seed=seed,
            null_probability=null_probability,
            **options,
        )

        if metadata:
            rows: list[Any] = [
                {
                    "value": to_jsonable(s.value),
                    "seed": s.seed,
                    "position": s.position,
                    "edge_case": s.edge_case,
                }
                for s in samples
            ]
        else:
            rows = [to_jsonable(s.value) for s in samples]
        click.echo(json.dumps(rows, indent=2 if pretty else None, default=str, allow_nan=False))

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


@cli.command()
@click.argument("profile_path", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), help="Output directory (overrides profile)")
@click.option("--format", "-f", type=click.Choice(["json", "jsonl"]), help="Output format (overrides profile)")
@click.option("--seed", "-s", type=int, help="Random seed for reproducibility")
@click.option("--dry-run", is_flag=True, help="Show what would be sampled without creating files")
@click.pass_context
def run(
    ctx: click.Context,
    profile_path: str,
    output: str | None,
    format: str | None,
    seed: int | None,
    dry_run: bool,
) -> None:
    """Sample every generator of a profile and export the values.

    PROFILE_PATH is the path to the YAML profile file.
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        profile = load_profile(profile_path)
        if seed is not None:
            profile.seed = seed

        if dry_run:
            _show_dry_run(profile)
            return

        validation = ValidationEngine().validate_profile(profile)
        if not validation.valid:
            _print_validation_result(profile.name, validation)
            sys.exit(1)

        engine = SamplingEngine()
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Sampling generators...", total=None)

            result = engine.run(profile)

            progress.update(task, description="Checking schemas...")
            schema_check = ValidationEngine().validate_result(result)

            progress.update(task, description="Exporting files...")
            files = engine.export_result(
                result,
                output or profile.output.directory,
                format=format or profile.output.format,
                pretty=profile.output.pretty_print,
                include_metadata=profile.output.include_metadata,
            )

        console.print(Panel.fit(
            f"[green]Sampled {result.total_samples} values in {result.duration_seconds:.2f}s[/green]\n"
            f"Seed: {result.seed}",
            title="Sampling Complete",
        ))

        if not schema_check.valid:
            _print_validation_result(f"{profile.name} samples", schema_check)
            sys.exit(1)

        if verbose:
            console.print("\nCreated files:")
            for f in files:
                console.print(f"  - {f}")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


@cli.command()
@click.option("--kind", "-k", type=click.Choice(KINDS), help="Only list one strategy")
@click.pass_context
def list_generators(ctx: click.Context, kind: str | None) -> None:
    """List available generator types."""
    registry = GeneratorRegistry()

    table = Table(title="Available Generators")
    table.add_column("Type", style="cyan")
    table.add_column("Kind", style="green")
    table.add_column("Description")

    for entry in registry.list_types(kind):
        table.add_row(entry.name, entry.kind.value, entry.description)

    console.print(table)


@cli.command()
@click.argument("path", type=click.Path(exists=True))
@click.pass_context
def validate(ctx: click.Context, path: str) -> None:
    """Validate a sampling profile.

    PATH is the path to the YAML profile to validate.
    """
    validation_engine = ValidationEngine()

    try:
        profile = load_profile(path)
        result = validation_engine.validate_profile(profile)
        _print_validation_result(profile.name, result)
        if not result.valid:
            sys.exit(1)

    except Exception as e:
        console.print(f"[red]Error loading file: {e}[/red]")
        sys.exit(1)


@cli.command()
@click.option("--name", "-n", required=True, help="Profile name")
@click.option("--output", "-o", type=click.Path(), default="profile.yaml", help="Output file path")
@click.option("--seed", "-s", type=int, default=42, help="Profile seed")
@click.pass_context
def init_profile(ctx: click.Context, name: str, output: str, seed: int) -> None:
    """Initialize a new sampling profile.

    Creates a template profile YAML file.
    """
    profile = SamplingProfile(
        name=name,
        description=f"Sampling profile for {name}",
        seed=seed,
        generators=[
            GeneratorConfig(
                name="ages",
                type="int",
                options={"min_value": 0, "max_value": 120},
                count=20,
                schema={"type": "integer", "minimum": 0, "maximum": 120},
            ),
            GeneratorConfig(
                name="nicknames",
                type="string",
                options={"min_size": 0, "max_size": 12},
                count=20,
                null_probability=0.1,
            ),
            GeneratorConfig(
                name="flags",
                type="boolean",
                kind=GenKind.EXHAUSTIVE,
                count=None,
            ),
        ],
    )

    loader = ProfileLoader()
    loader.save_file(profile, output)

    console.print(f"[green]Created profile: {output}[/green]")


def _show_dry_run(profile: SamplingProfile) -> None:
    """Show what would be sampled in a dry run."""
    console.print(Panel.fit(
        f"Profile: [cyan]{profile.name}[/cyan]\n"
        f"Seed: {profile.seed if profile.seed is not None else 'random'}\n"
        f"Edge-case probability: {profile.settings.edge_case_probability}",
        title="Dry Run",
    ))

    table = Table(title="Generators to Sample")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Kind")
    table.add_column("Count", justify="right")
    table.add_column("Enabled")

    for config in profile.generators:
        table.add_row(
            config.name,
            config.type,
            config.kind.value,
            "all" if config.count is None else str(config.count),
            "[green]Yes[/green]" if config.enabled else "[red]No[/red]",
        )

    console.print(table)


def _print_validation_result(name: str, result: Any) -> None:
    """Print validation results."""
    status = "[green]VALID[/green]" if result.valid else "[red]INVALID[/red]"
    console.print(f"\n{name}: {status}")

    if result.issues:
        for issue in result.issues:
            color = {
                "error": "red",
                "warning": "yellow",
                "info": "blue",
            }.get(issue.severity.value, "white")

            console.print(f"  [{color}]{issue.severity.value.upper()}[/{color}]: {issue.message}")
            if issue.path:
                console.print(f"    Path: {issue.path}")


if __name__ == "__main__":
    cli()

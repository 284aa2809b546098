"""Tests for the propgen command line interface."""

import json

import pytest
import yaml
from click.testing import CliRunner

from propgen.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def profile_path(runner, tmp_path):
    """Create a template profile with init-profile."""
    path = tmp_path / "profile.yaml"
    result = runner.invoke(cli, ["init-profile", "-n", "demo", "-o", str(path)])
    assert result.exit_code == 0
    return path


class TestSampleCommand:
    """Tests for `propgen sample`."""

    def test_sample_ints(self, runner):
        result = runner.invoke(
            cli, ["sample", "int", "-O", "min_value=0", "-O", "max_value=5", "-n", "5", "-s", "1"]
        )

        assert result.exit_code == 0
        values = json.loads(result.output)
        assert len(values) == 5
        assert all(0 <= v <= 5 for v in values)

    def test_default_count(self, runner):
        result = runner.invoke(cli, ["sample", "boolean", "-s", "1"])

        assert result.exit_code == 0
        assert len(json.loads(result.output)) == 10

    def test_seed_reproduces(self, runner):
        args = ["sample", "string", "-n", "20", "-s", "99"]
        assert runner.invoke(cli, args).output == runner.invoke(cli, args).output

    def test_exhaustive_one_pass(self, runner):
        result = runner.invoke(cli, ["sample", "int", "--exhaustive", "-O", "lower=0", "-O", "upper=3"])

        assert result.exit_code == 0
        assert json.loads(result.output) == [0, 1, 2, 3]

    def test_null_probability(self, runner):
        result = runner.invoke(cli, ["sample", "string", "--null-probability", "1.0", "-n", "5"])

        assert result.exit_code == 0
        assert json.loads(result.output) == [None] * 5

    def test_metadata(self, runner):
        result = runner.invoke(cli, ["sample", "int", "-O", "min_value=3", "-O", "max_value=3", "-n", "2", "-s", "8", "--metadata"])

        rows = json.loads(result.output)
        assert rows[0] == {"value": 3, "seed": 8, "position": 0, "edge_case": True}

    def test_unknown_type(self, runner):
        result = runner.invoke(cli, ["sample", "nope"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_malformed_option(self, runner):
        result = runner.invoke(cli, ["sample", "int", "-O", "min_value"])
        assert result.exit_code == 1


    def test_non_finite_doubles_are_valid_json(self, runner):
        result = runner.invoke(cli, ["sample", "double", "-n", "12", "-s", "1"])

        assert result.exit_code == 0
        values = json.loads(result.output, parse_constant=pytest.fail)
        assert {"NaN", "Infinity", "-Infinity"} <= {v for v in values if isinstance(v, str)}


class TestProfileCommands:
    """Tests for init-profile, validate and run."""

    def test_init_profile(self, profile_path):
        data = yaml.safe_load(profile_path.read_text())

        assert data["name"] == "demo"
        assert data["seed"] == 42
        assert [g["name"] for g in data["generators"]] == ["ages", "nicknames", "flags"]

    def test_validate(self, runner, profile_path):
        result = runner.invoke(cli, ["validate", str(profile_path)])

        assert result.exit_code == 0
        assert "VALID" in result.output
        assert "INVALID" not in result.output

    def test_validate_invalid(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("name: bad\ngenerators:\n  - name: x\n    type: nope\n")

        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 1

    def test_run(self, runner, profile_path, tmp_path):
        output = tmp_path / "out"
        result = runner.invoke(cli, ["run", str(profile_path), "-o", str(output)])

        assert result.exit_code == 0
        files = sorted(p.name for p in output.iterdir())
        assert len(files) == 4
        assert any(name.startswith("ages_") for name in files)
        assert any(name.startswith("summary_") for name in files)

    def test_run_jsonl(self, runner, profile_path, tmp_path):
        output = tmp_path / "out"
        result = runner.invoke(cli, ["run", str(profile_path), "-o", str(output), "-f", "jsonl"])

        assert result.exit_code == 0
        flags = next(output.glob("flags_*.jsonl"))
        assert [json.loads(line) for line in flags.read_text().splitlines()] == [False, True]

    def test_dry_run(self, runner, profile_path):
        result = runner.invoke(cli, ["run", str(profile_path), "--dry-run"])

        assert result.exit_code == 0
        assert "Dry Run" in result.output


class TestListGenerators:
    """Tests for list-generators."""

    def test_list_all(self, runner):
        result = runner.invoke(cli, ["list-generators"])

        assert result.exit_code == 0
        assert "string" in result.output
        assert "collection" in result.output

    def test_list_one_kind(self, runner):
        result = runner.invoke(cli, ["list-generators", "--kind", "exhaustive"])

        assert result.exit_code == 0
        assert "collection" in result.output
        assert "binary" not in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output

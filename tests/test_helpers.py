"""Tests for the utility helpers."""

import json
import math
from enum import Enum

import pytest

from propgen.utils.helpers import derive_seed, parse_option, to_jsonable


class Color(Enum):
    RED = "red"


class TestToJsonable:
    """Tests for converting generated values to JSON types."""

    @pytest.mark.parametrize("value,expected", [
        (math.nan, "NaN"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
        (1.5, 1.5),
        (-0.0, -0.0),
    ])
    def test_floats(self, value, expected):
        assert to_jsonable(value) == expected

    def test_nested_non_finite(self):
        value = {"a": [math.nan, (math.inf, 1.0)], 2: {-math.inf}}

        converted = to_jsonable(value)

        assert converted == {"a": ["NaN", ["Infinity", 1.0]], "2": ["-Infinity"]}
        assert json.loads(json.dumps(converted, allow_nan=False)) == converted

    def test_other_types(self):
        assert to_jsonable(b"\x01\xff") == "01ff"
        assert to_jsonable(Color.RED) == "red"
        assert to_jsonable({3, 1, 2}) == [1, 2, 3]
        assert to_jsonable({1: (True, None)}) == {"1": [True, None]}


class TestParseOption:
    """Tests for `-O key=value` parsing."""

    def test_scalars(self):
        assert parse_option("max_value=10") == ("max_value", 10)
        assert parse_option("alphabet=abc") == ("alphabet", "abc")
        assert parse_option(" flag = true") == ("flag", True)
        assert parse_option("empty=") == ("empty", None)

    def test_missing_separator(self):
        with pytest.raises(ValueError):
            parse_option("max_value")


class TestDeriveSeed:
    def test_stable(self):
        assert derive_seed(1, "a") == derive_seed(1, "a")
        assert derive_seed(1, "a") != derive_seed(1, "b")

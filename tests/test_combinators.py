"""Tests for generator combinators."""

from enum import Enum

import pytest

from propgen import arb
from propgen.core.errors import ConfigurationError, GenerationExhaustedError
from propgen.core.random_source import RandomSource


class Color(Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


@pytest.fixture
def source():
    """Create a seeded random source."""
    return RandomSource(7)


class TestOrNull:
    """Tests for or_null."""

    def test_always_null(self, source):
        gen = arb.ints().or_null(1.0)

        assert all(v is None for v in gen.take(1000, source))
        assert gen.sample(source).value is None

    def test_never_null(self, source):
        gen = arb.ints().or_null(0.0)
        assert all(v is not None for v in gen.take(1000, source))

    def test_mixed(self, source):
        values = arb.ints(0, 10).or_null(0.5).take(200, source)

        assert None in values
        assert any(isinstance(v, int) for v in values)

    def test_invalid_probability(self):
        with pytest.raises(ConfigurationError):
            arb.ints().or_null(1.5)


class TestMapFilter:
    """Tests for map and filter."""

    def test_map(self, source):
        gen = arb.ints(0, 10).map(lambda x: x * 2)

        assert gen.edge_cases() == [0, 20, 2]
        assert all(v % 2 == 0 and 0 <= v <= 20 for v in gen.take(200, source))

    def test_filter(self, source):
        gen = arb.ints(0, 100).filter(lambda x: x % 2 == 0)

        assert gen.edge_cases() == [0, 100]
        assert all(v % 2 == 0 for v in gen.take(200, source))

    def test_unsatisfiable_filter(self, source):
        gen = arb.ints(0, 10).filter(lambda x: x > 100, max_attempts=20)

        with pytest.raises(GenerationExhaustedError) as exc_info:
            gen.sample(source)
        assert exc_info.value.attempts == 20

    def test_invalid_attempt_budget(self):
        with pytest.raises(ConfigurationError):
            arb.ints().filter(lambda x: True, max_attempts=0)

    def test_flat_map(self, source):
        gen = arb.ints(1, 5).flat_map(lambda n: arb.lists(arb.constant(n), n, n))

        for value in gen.take(100, source):
            assert len(value) == value[0]
            assert set(value) == {value[0]}


class TestBind:
    """Tests for bind, zip, pair and triple."""

    def test_bind(self, source):
        gen = arb.bind(arb.strings(2, 3), arb.ints(0, 5), fn=lambda s, i: f"{s}-{i}")

        for value in gen.take(100, source):
            prefix, _, suffix = value.rpartition("-")
            assert 2 <= len(prefix) <= 3
            assert 0 <= int(suffix) <= 5

    def test_bind_requires_generators(self):
        with pytest.raises(ConfigurationError):
            arb.bind(fn=lambda: None)

    def test_pair(self, source):
        for first, second in arb.pair(arb.ints(0, 9), arb.booleans()).take(50, source):
            assert 0 <= first <= 9
            assert isinstance(second, bool)

    def test_triple(self, source):
        values = arb.triple(arb.ints(), arb.booleans(), arb.strings(2, 3)).take(50, source)

        assert all(len(v) == 3 for v in values)
        assert all(isinstance(v[1], bool) and 2 <= len(v[2]) <= 3 for v in values)

    def test_zip(self, source):
        values = arb.zip(arb.ints(0, 1), arb.booleans(), arb.chars()).take(50, source)
        assert all(len(v) == 3 and v[0] in (0, 1) for v in values)

    def test_zip_method(self, source):
        values = arb.ints(0, 1).zip(arb.booleans()).take(50, source)
        assert all(isinstance(v, tuple) and len(v) == 2 for v in values)

    def test_edge_cases_align_components(self):
        gen = arb.pair(arb.ints(0, 10), arb.ints(5, 6))
        assert gen.edge_cases() == [(0, 5), (10, 6)]

    def test_reproducible(self):
        gen = arb.pair(arb.ints(), arb.strings())
        assert gen.take(20, RandomSource(5)) == gen.take(20, RandomSource(5))


class TestChoose:
    """Tests for choose."""

    def test_mixes_generators(self, source):
        values = arb.choose(arb.ints(0, 10), arb.strings(1, 2)).take(100, source)

        assert any(isinstance(v, int) for v in values)
        assert any(isinstance(v, str) for v in values)

    def test_weights(self, source):
        gen = arb.choose(arb.constant("a"), arb.constant("b"), weights=[1, 0])
        assert set(gen.take(100, source)) == {"a"}

    def test_zero_weight_generators_have_no_edge_cases(self):
        gen = arb.choose(arb.ints(0, 1), arb.ints(5, 6), weights=[0, 1])
        assert gen.edge_cases() == [5, 6]

    @pytest.mark.parametrize("weights", [[1], [-1, 2], [0, 0]])
    def test_invalid_weights(self, weights):
        with pytest.raises(ConfigurationError):
            arb.choose(arb.ints(), arb.booleans(), weights=weights)


class TestConstantsAndElements:
    """Tests for constant, elements and enum."""

    def test_constant(self, source):
        assert set(arb.constant("fixed").take(50, source)) == {"fixed"}

    def test_elements(self, source):
        values = arb.elements([1, 2, 3]).take(100, source)

        assert set(values) == {1, 2, 3}
        assert values[0] == 1

    def test_empty_elements(self):
        with pytest.raises(ConfigurationError):
            arb.elements([])

    def test_enum(self, source):
        assert set(arb.enum(Color).take(100, source)) == set(Color)

"""Tests for the generator registry."""

import pytest

from propgen import arb
from propgen.core.base import GenKind
from propgen.core.errors import ConfigurationError
from propgen.core.random_source import RandomSource
from propgen.exhaustive import IntRangeExhaustive
from propgen.registry import GeneratorRegistry, get_global_generator_registry


@pytest.fixture
def registry():
    """Create a fresh registry."""
    return GeneratorRegistry()


class TestGeneratorRegistry:
    """Tests for GeneratorRegistry."""

    def test_create(self, registry):
        gen = registry.create("int", min_value=0, max_value=5)

        assert isinstance(gen, arb.IntArb)
        assert all(0 <= v <= 5 for v in gen.take(50, RandomSource(1)))

    def test_create_exhaustive_by_string_kind(self, registry):
        gen = registry.create("int", "exhaustive", lower=0, upper=2)

        assert isinstance(gen, IntRangeExhaustive)
        assert gen.values == [0, 1, 2]

    def test_unknown_type(self, registry):
        assert registry.get("unknown") is None
        assert registry.create("unknown") is None
        assert registry.get("int", "sideways") is None

    def test_invalid_options(self, registry):
        with pytest.raises(ConfigurationError):
            registry.create("int", no_such_option=1)

    def test_build_nested(self, registry):
        gen = registry.build({
            "type": "list",
            "options": {
                "element": {"type": "int", "options": {"min_value": 1, "max_value": 3}},
                "min_size": 1,
                "max_size": 4,
            },
        })

        for value in gen.take(50, RandomSource(2)):
            assert 1 <= len(value) <= 4
            assert all(1 <= x <= 3 for x in value)

    def test_build_list_of_specs(self, registry):
        gen = registry.build({
            "type": "choose",
            "options": {
                "generators": [
                    {"type": "constant", "options": {"value": "a"}},
                    {"type": "constant", "options": {"value": "b"}},
                ],
                "weights": [0, 1],
            },
        })
        assert set(gen.take(20, RandomSource(3))) == {"b"}

    def test_build_exhaustive_product(self, registry):
        gen = registry.build({
            "type": "product",
            "kind": "exhaustive",
            "options": {
                "parts": [
                    {"type": "boolean"},
                    {"type": "int", "options": {"lower": 0, "upper": 1}},
                ],
            },
        })
        assert len(gen) == 4

    def test_build_null_probability(self, registry):
        gen = registry.build({"type": "string", "null_probability": 1.0})
        assert set(gen.take(20, RandomSource(4))) == {None}

    def test_null_probability_needs_arbitrary(self, registry):
        with pytest.raises(ConfigurationError):
            registry.build({"type": "boolean", "kind": "exhaustive", "null_probability": 0.5})

    @pytest.mark.parametrize("spec", [
        {"type": "unknown"},
        {"type": "int", "kind": "sideways"},
        {"options": {}},
        "int",
    ])
    def test_build_invalid_spec(self, registry, spec):
        with pytest.raises(ConfigurationError):
            registry.build(spec)

    def test_build_invalid_domain(self, registry):
        with pytest.raises(ConfigurationError):
            registry.build({"type": "int", "options": {"min_value": 5, "max_value": 1}})

    def test_register_custom(self, registry):
        registry.register("digit", lambda: arb.ints(0, 9), description="Decimal digits")

        assert "digit" in registry
        assert registry.get("digit").description == "Decimal digits"
        assert all(0 <= v <= 9 for v in registry.create("digit").take(20, RandomSource(5)))

    def test_unregister(self, registry):
        assert registry.unregister("int", GenKind.EXHAUSTIVE)
        assert registry.get("int", GenKind.EXHAUSTIVE) is None
        assert registry.get("int") is not None
        assert not registry.unregister("int", GenKind.EXHAUSTIVE)

    def test_list_types(self, registry):
        arbitrary = registry.list_types(GenKind.ARBITRARY)
        finite = registry.list_types("exhaustive")

        assert {"int", "string", "list", "fake"} <= {e.name for e in arbitrary}
        assert {e.name for e in finite} == {"int", "boolean", "collection", "constant", "product"}
        assert len(registry.list_types()) == len(arbitrary) + len(finite)

    def test_global_registry_is_singleton(self):
        assert get_global_generator_registry() is get_global_generator_registry()

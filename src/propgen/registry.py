"""Generator Registry for looking up generators by name.

Profiles and the CLI refer to generators by type name (``"int"``,
``"string"``, ``"list"`` ...). The registry maps those names, per strategy,
to factory functions and builds generators from plain dict specs.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from propgen import arb, exhaustive
from propgen.core.base import Gen, GenKind
from propgen.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorEntry:
    """A registered generator factory."""

    name: str
    kind: GenKind
    factory: Callable[..., Gen[Any]]
    description: str = ""


class GeneratorRegistry:
    """Registry for generator factories.

    Manages the available generators and provides factory methods
    for creating generator instances.
    """

    def __init__(self):
        self._generators: dict[GenKind, dict[str, GeneratorEntry]] = {
            GenKind.ARBITRARY: {},
            GenKind.EXHAUSTIVE: {},
        }
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register the built-in generators."""
        a = GenKind.ARBITRARY
        self.register("int", arb.ints, a, "32-bit integers (min_value, max_value)")
        self.register("long", arb.longs, a, "64-bit integers (min_value, max_value)")
        self.register("short", arb.shorts, a, "16-bit integers (min_value, max_value)")
        self.register("byte", arb.signed_bytes, a, "8-bit integers (min_value, max_value)")
        self.register("positive_int", arb.positive_ints, a, "Integers from 1 (max_value)")
        self.register("non_negative_int", arb.non_negative_ints, a, "Integers from 0 (max_value)")
        self.register("double", arb.doubles, a, "64-bit floats (min_value, max_value, include_non_finite)")
        self.register("float", arb.floats, a, "32-bit floats (min_value, max_value, include_non_finite)")
        self.register("boolean", arb.booleans, a, "True or False")
        self.register("char", arb.chars, a, "Single characters (alphabet, min_codepoint, max_codepoint)")
        self.register("string", arb.strings, a, "Strings (min_size, max_size, alphabet)")
        self.register("fake", arb.fake, a, "Faker provider values (provider, locale, ...)")
        self.register("list", arb.lists, a, "Lists (element, min_size, max_size)")
        self.register("set", arb.sets, a, "Sets of distinct elements (element, min_size, max_size)")
        self.register("dict", arb.dicts, a, "Dicts (keys, values, min_size, max_size)")
        self.register("array", arb.arrays, a, "Tuples with generated length (length, element)")
        self.register("binary", arb.binary, a, "Byte strings (min_size, max_size)")
        self.register("constant", arb.constant, a, "A single repeated value (value)")
        self.register("element", arb.elements, a, "One of a list of values (values)")
        self.register("choose", _choose, a, "One of several generators per sample (generators, weights)")
        self.register("pair", arb.pair, a, "Two-tuples (first, second)")
        self.register("triple", arb.triple, a, "Three-tuples (first, second, third)")
        self.register("zip", _zip, a, "Tuples of one value per generator (generators)")

        e = GenKind.EXHAUSTIVE
        self.register("int", exhaustive.ints, e, "Every integer in a range (lower, upper, step)")
        self.register("boolean", exhaustive.booleans, e, "False, then True")
        self.register("collection", exhaustive.collection, e, "Every item of a list (items, dedupe)")
        self.register("constant", exhaustive.constant, e, "A single value (value)")
        self.register("product", _product, e, "Cartesian product (parts)")

    def register(
        self,
        name: str,
        factory: Callable[..., Gen[Any]],
        kind: GenKind = GenKind.ARBITRARY,
        description: str = "",
    ) -> None:
        """Register a generator factory.

        Args:
            name: Type name used in profiles and on the command line
            factory: Callable building the generator from keyword options
            kind: Strategy of the generators the factory builds
            description: One-line description for listings
        """
        self._generators[kind][name] = GeneratorEntry(name, kind, factory, description)

    def get(self, name: str, kind: GenKind | str = GenKind.ARBITRARY) -> GeneratorEntry | None:
        """Get a registered entry.

        Args:
            name: The type name
            kind: The strategy (can be string or enum)

        Returns:
            The entry or None if not found
        """
        resolved = _resolve_kind(kind)
        if resolved is None:
            return None
        return self._generators[resolved].get(name)

    def create(
        self,
        name: str,
        kind: GenKind | str = GenKind.ARBITRARY,
        **options: Any,
    ) -> Gen[Any] | None:
        """Create a generator instance.

        Args:
            name: The type name
            kind: The strategy
            **options: Keyword arguments for the factory

        Returns:
            A generator instance or None if the type is not registered

        Raises:
            ConfigurationError: If the options are invalid for the factory
        """
        entry = self.get(name, kind)
        if entry is None:
            return None
        try:
            return entry.factory(**options)
        except TypeError as e:
            raise ConfigurationError(f"Invalid options for {entry.kind.value} '{name}': {e}") from e

    def build(self, spec: dict[str, Any], kind: GenKind | str = GenKind.ARBITRARY) -> Gen[Any]:
        """Build a generator from a dict spec.

        A spec looks like ``{"type": "list", "options": {"element": {"type": "int"}}}``.
        Option values that are specs themselves (or lists of specs) are built
        first; nested specs default to the parent's kind.

        Args:
            spec: The generator spec
            kind: Strategy used when the mapping has no ``kind`` key

        Returns:
            The built generator

        Raises:
            ConfigurationError: If it names an unknown type or has bad options
        """
        if not isinstance(spec, dict) or "type" not in spec:
            raise ConfigurationError(f"Generator spec must be a mapping with a 'type' key: {spec!r}")

        kind = spec.get("kind", kind)
        if _resolve_kind(kind) is None:
            raise ConfigurationError(f"Unknown generator kind: '{kind}'")
        name = spec["type"]
        options = {
            key: self._build_option(value, kind)
            for key, value in (spec.get("options") or {}).items()
        }

        logger.debug("Building %s generator '%s' with options %s", kind, name, options)
        generator = self.create(name, kind, **options)
        if generator is None:
            raise ConfigurationError(f"Unknown {_resolve_kind(kind).value} generator type: '{name}'")

        null_probability = spec.get("null_probability")
        if null_probability is not None:
            if not isinstance(generator, arb.Arb):
                raise ConfigurationError("null_probability only applies to arbitrary generators")
            generator = generator.or_null(null_probability)
        return generator

    def _build_option(self, value: Any, kind: GenKind | str) -> Any:
        if _is_spec(value):
            return self.build(value, kind)
        if isinstance(value, list) and value and all(_is_spec(v) for v in value):
            return [self.build(v, kind) for v in value]
        return value

    def list_types(self, kind: GenKind | str | None = None) -> list[GeneratorEntry]:
        """List registered entries, optionally for one strategy."""
        if kind is None:
            return [e for entries in self._generators.values() for e in entries.values()]
        resolved = _resolve_kind(kind)
        if resolved is None:
            return []
        return list(self._generators[resolved].values())

    def unregister(self, name: str, kind: GenKind = GenKind.ARBITRARY) -> bool:
        """Remove a generator from the registry.

        Returns:
            True if removed, False if not found
        """
        if name in self._generators[kind]:
            del self._generators[kind][name]
            return True
        return False

    def __contains__(self, name: str) -> bool:
        """Check if a type name is registered for any strategy."""
        return any(name in entries for entries in self._generators.values())


def _resolve_kind(kind: GenKind | str) -> GenKind | None:
    if isinstance(kind, GenKind):
        return kind
    try:
        return GenKind(kind)
    except ValueError:
        return None


def _is_spec(value: Any) -> bool:
    return isinstance(value, dict) and "type" in value


def _choose(generators: list[arb.Arb[Any]], weights: list[float] | None = None) -> arb.ChoiceArb:
    return arb.choose(*generators, weights=weights)


def _zip(generators: list[arb.Arb[Any]]) -> arb.BindArb[tuple[Any, ...]]:
    return arb.zip(*generators)


def _product(parts: list[exhaustive.Exhaustive[Any]]) -> exhaustive.ProductExhaustive:
    return exhaustive.product(*parts)


_global_registry: GeneratorRegistry | None = None


def get_global_generator_registry() -> GeneratorRegistry:
    """Get the global generator registry singleton."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
    return _global_registry

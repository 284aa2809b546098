"""Character, string and Faker-backed arbitrary generators."""

from typing import Any

from faker import Faker

from propgen.arb.base import Arb
from propgen.core.errors import ConfigurationError
from propgen.core.random_source import RandomSource

PRINTABLE_MIN = 0x20
PRINTABLE_MAX = 0x7E


class CharArb(Arb[str]):
    """Single characters from an alphabet or a code point range."""

    def __init__(
        self,
        alphabet: str | None = None,
        min_codepoint: int = PRINTABLE_MIN,
        max_codepoint: int = PRINTABLE_MAX,
        edge_probability: float | None = None,
    ):
        if alphabet is not None:
            if not alphabet:
                raise ConfigurationError("alphabet must not be empty")
        elif not 0 <= min_codepoint <= max_codepoint <= 0x10FFFF:
            raise ConfigurationError(
                f"Invalid code point range [{min_codepoint}, {max_codepoint}]"
            )
        super().__init__(edge_probability)
        self.alphabet = alphabet
        self.min_codepoint = min_codepoint
        self.max_codepoint = max_codepoint

    @property
    def first(self) -> str:
        """The lowest character of the domain."""
        if self.alphabet is not None:
            return self.alphabet[0]
        return chr(self.min_codepoint)

    def draw(self, source: RandomSource) -> str:
        if self.alphabet is not None:
            return source.choice(self.alphabet)
        return chr(source.next_int(self.min_codepoint, self.max_codepoint))

    def edge_cases(self) -> list[str]:
        return [self.first]


class StringArb(Arb[str]):
    """Strings whose length lies in [min_size, max_size]."""

    def __init__(
        self,
        min_size: int = 0,
        max_size: int = 100,
        chars: CharArb | None = None,
        edge_probability: float | None = None,
    ):
        if min_size < 0:
            raise ConfigurationError(f"min_size must be non-negative, got {min_size}")
        if min_size > max_size:
            raise ConfigurationError(
                f"Inverted size bounds: min_size {min_size} > max_size {max_size}"
            )
        super().__init__(edge_probability)
        self.min_size = min_size
        self.max_size = max_size
        self.chars = chars or CharArb()

    def draw(self, source: RandomSource) -> str:
        length = source.next_int(self.min_size, self.max_size)
        return "".join(self.chars.draw(source) for _ in range(length))

    def edge_cases(self) -> list[str]:
        first = self.chars.first
        edges = [first * self.min_size]
        if self.min_size < 1 <= self.max_size:
            edges.append(first)
        return edges


class FakerArb(Arb[Any]):
    """Realistic values from a Faker provider.

    Faker is reseeded from the source before every draw, so values are
    reproducible from the source's seed.
    """

    def __init__(
        self,
        provider: str,
        *args: Any,
        locale: str | None = None,
        **kwargs: Any,
    ):
        super().__init__()
        self._faker = Faker(locale)
        if not provider or provider.startswith("_") or not callable(getattr(self._faker, provider, None)):
            raise ConfigurationError(f"Unknown Faker provider: '{provider}'")
        self.provider = provider
        self.locale = locale
        self._args = args
        self._kwargs = kwargs

    def draw(self, source: RandomSource) -> Any:
        self._faker.seed_instance(source.next_int(0, 2**31 - 1))
        return getattr(self._faker, self.provider)(*self._args, **self._kwargs)


def chars(
    alphabet: str | None = None,
    min_codepoint: int = PRINTABLE_MIN,
    max_codepoint: int = PRINTABLE_MAX,
) -> CharArb:
    """Single characters.

    Args:
        alphabet: Characters to choose from; overrides the code point range
        min_codepoint: Lowest code point (printable ASCII by default)
        max_codepoint: Highest code point

    Returns:
        A character generator
    """
    return CharArb(alphabet, min_codepoint, max_codepoint)


def strings(
    min_size: int = 0,
    max_size: int = 100,
    alphabet: str | None = None,
) -> StringArb:
    """Strings with length in [min_size, max_size].

    The minimum-length string is always among the edge cases, so the empty
    string is covered whenever ``min_size`` is 0.

    Args:
        min_size: Inclusive lower bound on length
        max_size: Inclusive upper bound on length
        alphabet: Characters to build strings from (printable ASCII by default)

    Returns:
        A string generator

    Raises:
        ConfigurationError: If the bounds are negative or inverted
    """
    return StringArb(min_size, max_size, CharArb(alphabet) if alphabet is not None else None)


def fake(provider: str, *args: Any, locale: str | None = None, **kwargs: Any) -> FakerArb:
    """Values from a Faker provider such as ``"email"`` or ``"city"``.

    Extra arguments are passed to the provider method.
    """
    return FakerArb(provider, *args, locale=locale, **kwargs)

"""Arbitrary generators - the random strategy.

Arbs produce effectively unbounded streams of values with a built-in bias
towards edge cases:
- Numbers and booleans
- Characters, strings and Faker-backed values
- Lists, sets, dicts, arrays and bytes
- Combinators (constant, elements, enum, choose, bind, zip, pair, triple)

Usage:
    >>> from propgen import arb
    >>> arb.ints(0, 100).take(10)
"""

from propgen.arb.base import (
    Arb,
    MappedArb,
    FilteredArb,
    NullableArb,
    FlatMappedArb,
    BindArb,
    ChoiceArb,
)
from propgen.arb.primitives import (
    IntArb,
    DoubleArb,
    FloatArb,
    BooleanArb,
    ints,
    longs,
    shorts,
    signed_bytes,
    positive_ints,
    non_negative_ints,
    doubles,
    floats,
    booleans,
)
from propgen.arb.text import CharArb, StringArb, FakerArb, chars, strings, fake
from propgen.arb.containers import (
    ListArb,
    SetArb,
    DictArb,
    ArrayArb,
    BinaryArb,
    lists,
    sets,
    dicts,
    arrays,
    binary,
)
from propgen.arb.combinators import (
    ConstantArb,
    ElementArb,
    constant,
    elements,
    enum,
    choose,
    bind,
    zip,
    pair,
    triple,
)

__all__ = [
    "Arb",
    "MappedArb",
    "FilteredArb",
    "NullableArb",
    "FlatMappedArb",
    "BindArb",
    "ChoiceArb",
    "IntArb",
    "DoubleArb",
    "FloatArb",
    "BooleanArb",
    "CharArb",
    "StringArb",
    "FakerArb",
    "ListArb",
    "SetArb",
    "DictArb",
    "ArrayArb",
    "BinaryArb",
    "ConstantArb",
    "ElementArb",
    "ints",
    "longs",
    "shorts",
    "signed_bytes",
    "positive_ints",
    "non_negative_ints",
    "doubles",
    "floats",
    "booleans",
    "chars",
    "strings",
    "fake",
    "lists",
    "sets",
    "dicts",
    "arrays",
    "binary",
    "constant",
    "elements",
    "enum",
    "choose",
    "bind",
    "zip",
    "pair",
    "triple",
]

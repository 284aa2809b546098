"""Exhaustive generators - the finite strategy.

Exhaustives enumerate every value of a small domain exactly once:
- Integer ranges with a step
- Booleans
- Explicit collections and enum classes
- Cartesian products

Usage:
    >>> from propgen import exhaustive
    >>> exhaustive.ints(0, 5).values
    [0, 1, 2, 3, 4, 5]
"""

from propgen.exhaustive.base import (
    Exhaustive,
    ValuesExhaustive,
    IntRangeExhaustive,
    MappedExhaustive,
    FilteredExhaustive,
    ProductExhaustive,
)
from propgen.exhaustive.builtin import (
    ints,
    booleans,
    collection,
    enum,
    constant,
    product,
)

__all__ = [
    "Exhaustive",
    "ValuesExhaustive",
    "IntRangeExhaustive",
    "MappedExhaustive",
    "FilteredExhaustive",
    "ProductExhaustive",
    "ints",
    "booleans",
    "collection",
    "enum",
    "constant",
    "product",
]

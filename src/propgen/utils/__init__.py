"""Utility functions for propgen."""

from propgen.utils.helpers import (
    generate_seed,
    deterministic_hash,
    derive_seed,
    parse_option,
    to_jsonable,
)

__all__ = [
    "generate_seed",
    "deterministic_hash",
    "derive_seed",
    "parse_option",
    "to_jsonable",
]

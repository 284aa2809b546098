"""Utility helper functions."""

import hashlib
import math
import random
from enum import Enum
from typing import Any

import yaml


def generate_seed() -> int:
    """Generate a random seed value."""
    return random.randint(0, 2**31 - 1)


def deterministic_hash(value: str, max_value: int = 2**31 - 1) -> int:
    """Generate a deterministic hash from a string.

    Args:
        value: String to hash
        max_value: Maximum hash value

    Returns:
        Integer hash value
    """
    hash_bytes = hashlib.sha256(value.encode()).digest()
    hash_int = int.from_bytes(hash_bytes[:8], byteorder="big")
    return hash_int % max_value


def derive_seed(seed: int, label: str | int) -> int:
    """Derive a child seed from a parent seed and a label.

    The same (seed, label) pair always gives the same child seed.
    """
    return deterministic_hash(f"{seed}:{label}")


def parse_option(raw: str) -> tuple[str, object]:
    """Split a ``key=value`` string, decoding the value as YAML scalar.

    ``"max_value=10"`` gives ``("max_value", 10)``; ``"alphabet=abc"`` gives
    ``("alphabet", "abc")``.
    """
    if "=" not in raw:
        raise ValueError(f"Option must look like key=value, got '{raw}'")
    key, _, value = raw.partition("=")
    return key.strip(), yaml.safe_load(value) if value else None


def to_jsonable(value: Any) -> Any:
    """Convert a generated value into plain JSON types.

    Tuples and sets become lists (sets sorted when possible), bytes become
    hex strings, enum members their values and dict keys strings. NaN and
    the infinities, which JSON cannot express, become the strings ``"NaN"``,
    ``"Infinity"`` and ``"-Infinity"``.
    """
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, Enum):
        return to_jsonable(value.value)
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        items = [to_jsonable(v) for v in value]
        try:
            return sorted(items)
        except TypeError:
            return items
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value

"""Numeric and boolean arbitrary generators.

Integer generators always cover the range bounds plus 0, 1 and -1 where
they fall inside the range. Floating point generators add the signed zeros,
+/-1, the smallest positive normal and, for unbounded ranges, the non-finite
values.
"""

import math
import struct
import sys

from propgen.arb.base import Arb
from propgen.core.errors import ConfigurationError
from propgen.core.random_source import RandomSource

INT8_MIN, INT8_MAX = -(2**7), 2**7 - 1
INT16_MIN, INT16_MAX = -(2**15), 2**15 - 1
INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1

FLOAT32_MAX = 3.4028234663852886e38
FLOAT32_MIN_NORMAL = 1.1754943508222875e-38


class IntArb(Arb[int]):
    """Integers in a closed range."""

    def __init__(
        self,
        min_value: int,
        max_value: int,
        edge_probability: float | None = None,
    ):
        if min_value > max_value:
            raise ConfigurationError(
                f"Empty integer range: min_value {min_value} > max_value {max_value}"
            )
        super().__init__(edge_probability)
        self.min_value = min_value
        self.max_value = max_value

    def draw(self, source: RandomSource) -> int:
        return source.next_int(self.min_value, self.max_value)

    def edge_cases(self) -> list[int]:
        candidates = [self.min_value, self.max_value, 0, 1, -1]
        edges: list[int] = []
        for value in candidates:
            if self.min_value <= value <= self.max_value and value not in edges:
                edges.append(value)
        return edges


class DoubleArb(Arb[float]):
    """Floating point numbers in a closed range."""

    def __init__(
        self,
        min_value: float,
        max_value: float,
        include_non_finite: bool = False,
        edge_probability: float | None = None,
    ):
        if not (math.isfinite(min_value) and math.isfinite(max_value)):
            raise ConfigurationError(
                f"Range bounds must be finite, got [{min_value}, {max_value}]; "
                "use include_non_finite for NaN and the infinities"
            )
        if min_value > max_value:
            raise ConfigurationError(
                f"Empty float range: min_value {min_value} > max_value {max_value}"
            )
        super().__init__(edge_probability)
        self.min_value = min_value
        self.max_value = max_value
        self.include_non_finite = include_non_finite

    def draw(self, source: RandomSource) -> float:
        r = source.next_float()
        # Interpolate without computing max - min, which overflows for the full range
        value = self.min_value * (1.0 - r) + self.max_value * r
        return min(max(value, self.min_value), self.max_value)

    def edge_cases(self) -> list[float]:
        candidates = [
            self.min_value,
            self.max_value,
            0.0,
            -0.0,
            1.0,
            -1.0,
            self._min_normal(),
        ]
        edges: list[float] = []
        for value in candidates:
            if self.min_value <= value <= self.max_value and not _contains_float(edges, value):
                edges.append(value)
        if self.include_non_finite:
            edges.extend([math.nan, math.inf, -math.inf])
        return edges

    def _min_normal(self) -> float:
        return sys.float_info.min


class FloatArb(DoubleArb):
    """32-bit floating point numbers.

    Bounds are rounded inward to the nearest 32-bit values, so every value
    and every edge case is exactly representable as a float32.
    """

    def __init__(
        self,
        min_value: float,
        max_value: float,
        include_non_finite: bool = False,
        edge_probability: float | None = None,
    ):
        super().__init__(min_value, max_value, include_non_finite, edge_probability)
        self.min_value = _round_float32(min_value, up=True)
        self.max_value = _round_float32(max_value, up=False)
        if self.min_value > self.max_value:
            raise ConfigurationError(
                f"No 32-bit float lies in [{min_value}, {max_value}]"
            )

    def draw(self, source: RandomSource) -> float:
        value = _to_float32(super().draw(source))
        return min(max(value, self.min_value), self.max_value)

    def _min_normal(self) -> float:
        return FLOAT32_MIN_NORMAL


class BooleanArb(Arb[bool]):
    """True or False with equal probability."""

    def draw(self, source: RandomSource) -> bool:
        return source.next_bool()

    def edge_cases(self) -> list[bool]:
        return [False, True]


def _contains_float(values: list[float], value: float) -> bool:
    # Tells 0.0 and -0.0 apart
    return any(v == value and math.copysign(1.0, v) == math.copysign(1.0, value) for v in values)


def _to_float32(value: float) -> float:
    if not math.isfinite(value):
        return value
    if abs(value) > FLOAT32_MAX:
        return math.copysign(FLOAT32_MAX, value)
    return struct.unpack("f", struct.pack("f", value))[0]


def _round_float32(value: float, up: bool) -> float:
    """The nearest float32 at or above (``up``) or at or below ``value``."""
    rounded = _to_float32(value)
    if (up and rounded < value) or (not up and rounded > value):
        rounded = _next_float32(rounded, up)
    return rounded


def _next_float32(value: float, up: bool) -> float:
    if value == 0.0:
        smallest = struct.unpack("<f", struct.pack("<I", 1))[0]
        return smallest if up else -smallest
    bits = struct.unpack("<I", struct.pack("<f", value))[0]
    # Sign-magnitude layout: stepping the bits moves away from or towards zero
    bits += 1 if (value > 0) == up else -1
    return struct.unpack("<f", struct.pack("<I", bits))[0]


def ints(min_value: int = INT32_MIN, max_value: int = INT32_MAX) -> IntArb:
    """32-bit integers in [min_value, max_value].

    Args:
        min_value: Inclusive lower bound
        max_value: Inclusive upper bound

    Returns:
        An integer generator

    Raises:
        ConfigurationError: If the range is empty
    """
    return IntArb(min_value, max_value)


def longs(min_value: int = INT64_MIN, max_value: int = INT64_MAX) -> IntArb:
    """64-bit integers in [min_value, max_value]."""
    return IntArb(min_value, max_value)


def shorts(min_value: int = INT16_MIN, max_value: int = INT16_MAX) -> IntArb:
    """16-bit integers in [min_value, max_value]."""
    return IntArb(min_value, max_value)


def signed_bytes(min_value: int = INT8_MIN, max_value: int = INT8_MAX) -> IntArb:
    """8-bit integers in [min_value, max_value]."""
    return IntArb(min_value, max_value)


def positive_ints(max_value: int = INT32_MAX) -> IntArb:
    return IntArb(1, max_value)


def non_negative_ints(max_value: int = INT32_MAX) -> IntArb:
    return IntArb(0, max_value)


def doubles(
    min_value: float | None = None,
    max_value: float | None = None,
    include_non_finite: bool | None = None,
) -> DoubleArb:
    """64-bit floats in [min_value, max_value].

    Args:
        min_value: Inclusive lower bound (the most negative finite double by default)
        max_value: Inclusive upper bound (the largest finite double by default)
        include_non_finite: Add NaN and the infinities to the edge cases;
            defaults to True only when neither bound is given

    Returns:
        A float generator
    """
    if include_non_finite is None:
        include_non_finite = min_value is None and max_value is None
    return DoubleArb(
        -sys.float_info.max if min_value is None else min_value,
        sys.float_info.max if max_value is None else max_value,
        include_non_finite=include_non_finite,
    )


def floats(
    min_value: float | None = None,
    max_value: float | None = None,
    include_non_finite: bool | None = None,
) -> FloatArb:
    """32-bit floats in [min_value, max_value]."""
    if include_non_finite is None:
        include_non_finite = min_value is None and max_value is None
    return FloatArb(
        -FLOAT32_MAX if min_value is None else min_value,
        FLOAT32_MAX if max_value is None else max_value,
        include_non_finite=include_non_finite,
    )


def booleans() -> BooleanArb:
    return BooleanArb()

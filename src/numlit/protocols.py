"""
Numeric Capability Interfaces
=============================

Small structural interfaces describing what a numeric value can do. The
concrete value types implement them directly; there is no base class to
inherit from.

| Interface              | Implemented by              |
|------------------------|-----------------------------|
| IntegerLike            | ExactInteger, FixedWidthInt |
| FixedWidthIntegerLike  | FixedWidthInt               |
| BinaryFloatLike        | BinaryFloat                 |
"""

from fractions import Fraction
from typing import Protocol, runtime_checkable

from numlit.types import FloatFormat, IntType


@runtime_checkable
class IntegerLike(Protocol):
    """Anything with an exact integer value."""

    def __int__(self) -> int:
        ...


@runtime_checkable
class FixedWidthIntegerLike(Protocol):
    """An integer bound to a fixed-width, two's-complement type."""

    type: IntType
    value: int

    @property
    def bit_width(self) -> int:
        """Width of the value's type in bits."""
        ...

    @property
    def bit_pattern(self) -> int:
        """Two's-complement bits as an unsigned integer."""
        ...

    def __int__(self) -> int:
        ...


@runtime_checkable
class BinaryFloatLike(Protocol):
    """An IEEE-754 binary floating-point value given by its raw fields."""

    format: FloatFormat
    sign: bool
    exponent: int
    significand: int

    @property
    def bits(self) -> int:
        """Raw encoding."""
        ...

    @property
    def is_nan(self) -> bool:
        ...

    def as_fraction(self) -> Fraction:
        ...

"""
Numeric Value Types
===================

Immutable value types produced and consumed by the parsers, converters and
arithmetic functions.

Exact Intermediates
-------------------
- ExactInteger: sign and unbounded magnitude parsed from an integer literal.
- ExactFloat: sign, unbounded digits and exponent parsed from a float
  literal or runtime string. It keeps every digit of the text, so rounding
  into a concrete format happens exactly once.

Concrete Values
---------------
- FixedWidthInt: a value of an IntType, validated on construction.
- BinaryFloat: the raw fields of an IEEE-754 value of a FloatFormat.

BinaryFloat Encoding
--------------------
| Field       | Meaning                                           |
|-------------|---------------------------------------------------|
| sign        | True for negative values (including -0.0 and -NaN) |
| exponent    | biased exponent field                             |
| significand | stored fraction bits (never the explicit int bit) |

The classification is derived from the fields:

| exponent  | significand | category  |
|-----------|-------------|-----------|
| 0         | 0           | ZERO      |
| 0         | != 0        | SUBNORMAL |
| 1 .. max-1| any         | NORMAL    |
| max       | 0           | INFINITE  |
| max       | != 0        | NAN       |

Exactly one category holds for every value.
"""

import math
import struct
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_EVEN, localcontext
from enum import Enum, auto
from fractions import Fraction
from typing import Optional

from numlit.types import FLOAT64, FloatFormat, IntType


# =============================================================================
# Exact Intermediates
# =============================================================================

@dataclass(frozen=True)
class ExactInteger:
    """
    An integer literal's value before it is narrowed to a fixed width.

    Attributes:
        negative: True when the literal carried a leading '-'
        magnitude: Absolute value of the literal
        radix: Base the literal was written in (2, 8, 10 or 16)
    """
    negative: bool
    magnitude: int
    radix: int = 10

    @property
    def value(self) -> int:
        """Signed value. An integer literal '-0' has no negative zero."""
        return -self.magnitude if self.negative else self.magnitude

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class ExactFloat:
    """
    A floating-point literal's exact value: digits * radix ** exponent.

    Hexadecimal literals are stored with radix 2: their hex digits become
    the integer `digits` and the exponent already accounts for the binary
    exponent and the hex fraction digits.

    Attributes:
        negative: Sign of the literal (kept for zero as well)
        digits: All significant digits as one unbounded integer
        exponent: Power of `radix` applied to `digits`
        radix: 10 for decimal literals, 2 for hexadecimal literals
    """
    negative: bool
    digits: int
    exponent: int
    radix: int = 10

    @property
    def is_zero(self) -> bool:
        return self.digits == 0

    def as_fraction(self) -> Fraction:
        """Exact rational value; the sign of zero is lost."""
        if self.exponent >= 0:
            value = Fraction(self.digits * self.radix ** self.exponent)
        else:
            value = Fraction(self.digits, self.radix ** -self.exponent)
        return -value if self.negative else value


# =============================================================================
# Fixed-Width Integers
# =============================================================================

@dataclass(frozen=True)
class FixedWidthInt:
    """
    A concrete value of a fixed-width integer type.

    The arithmetic operators trap on overflow, the same as the named
    functions in numlit.arithmetic:

        >>> FixedWidthInt(INT8, 100) + FixedWidthInt(INT8, 27)
        FixedWidthInt(type=Int8, value=127)
        >>> FixedWidthInt(INT8, 100) + FixedWidthInt(INT8, 28)
        Traceback (most recent call last):
        ArithmeticOverflowError: arithmetic overflow in add for 'Int8'
    """
    type: IntType
    value: int

    def __post_init__(self):
        if not self.type.contains(self.value):
            raise ValueError(
                f"{self.value} is out of range for '{self.type}' "
                f"({self.type.min} to {self.type.max})"
            )

    @classmethod
    def from_bit_pattern(cls, int_type: IntType, pattern: int) -> "FixedWidthInt":
        return cls(int_type, int_type.from_bit_pattern(pattern))

    @classmethod
    def min_value(cls, int_type: IntType) -> "FixedWidthInt":
        return cls(int_type, int_type.min)

    @classmethod
    def max_value(cls, int_type: IntType) -> "FixedWidthInt":
        return cls(int_type, int_type.max)

    @property
    def bit_width(self) -> int:
        return self.type.bits

    @property
    def bit_pattern(self) -> int:
        """The two's-complement bits as an unsigned integer."""
        return self.value & self.type.mask

    @property
    def leading_zero_bit_count(self) -> int:
        return self.type.bits - self.bit_pattern.bit_length()

    @property
    def trailing_zero_bit_count(self) -> int:
        pattern = self.bit_pattern
        if pattern == 0:
            return self.type.bits
        return (pattern & -pattern).bit_length() - 1

    @property
    def nonzero_bit_count(self) -> int:
        return bin(self.bit_pattern).count("1")

    def byte_swapped(self) -> "FixedWidthInt":
        """Reverse the byte order. Only defined for whole-byte widths."""
        if self.type.bits % 8:
            raise ValueError(f"'{self.type}' is not a whole number of bytes")
        size = self.type.bits // 8
        swapped = int.from_bytes(self.bit_pattern.to_bytes(size, "big"), "little")
        return FixedWidthInt.from_bit_pattern(self.type, swapped)

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"FixedWidthInt(type={self.type}, value={self.value})"

    # Default arithmetic traps on overflow
    def __add__(self, other: "FixedWidthInt") -> "FixedWidthInt":
        from numlit.arithmetic import add
        return add(self, other)

    def __sub__(self, other: "FixedWidthInt") -> "FixedWidthInt":
        from numlit.arithmetic import subtract
        return subtract(self, other)

    def __mul__(self, other: "FixedWidthInt") -> "FixedWidthInt":
        from numlit.arithmetic import multiply
        return multiply(self, other)

    def __neg__(self) -> "FixedWidthInt":
        from numlit.arithmetic import negate
        return negate(self)


# =============================================================================
# Binary Floating-Point Values
# =============================================================================

class FloatCategory(Enum):
    """Unsigned classification; exactly one holds per value."""
    ZERO = auto()
    SUBNORMAL = auto()
    NORMAL = auto()
    INFINITE = auto()
    NAN = auto()


class FloatClassification(Enum):
    """Signed ten-way classification of a floating-point value."""
    SIGNALING_NAN = auto()
    QUIET_NAN = auto()
    NEGATIVE_INFINITY = auto()
    NEGATIVE_NORMAL = auto()
    NEGATIVE_SUBNORMAL = auto()
    NEGATIVE_ZERO = auto()
    POSITIVE_ZERO = auto()
    POSITIVE_SUBNORMAL = auto()
    POSITIVE_NORMAL = auto()
    POSITIVE_INFINITY = auto()


@dataclass(frozen=True)
class NaNPayload:
    """
    Decoded NaN contents.

    Attributes:
        signaling: True for a signaling NaN
        payload: Payload integer, at most `significand_bits - 2` bits wide
    """
    signaling: bool
    payload: int


@dataclass(frozen=True)
class BinaryFloat:
    """
    A concrete IEEE-754 binary floating-point value.

    Equality of BinaryFloat objects is bitwise identity: two NaNs with the
    same bits compare equal and -0.0 differs from 0.0. Use is_equal() for
    IEEE-754 numeric equality.

    Attributes:
        format: The FloatFormat of the value
        sign: True when the sign bit is set
        exponent: Biased exponent field
        significand: Stored fraction field
    """
    format: FloatFormat
    sign: bool
    exponent: int
    significand: int

    def __post_init__(self):
        if not 0 <= self.exponent <= self.format.max_biased_exponent:
            raise ValueError(f"biased exponent {self.exponent} out of range for '{self.format}'")
        if not 0 <= self.significand <= self.format.fraction_mask:
            raise ValueError(f"significand {self.significand:#x} out of range for '{self.format}'")

    # -------------------------------------------------------------------------
    # Standard constructors
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls, fmt: FloatFormat, negative: bool = False) -> "BinaryFloat":
        return cls(fmt, negative, 0, 0)

    @classmethod
    def one(cls, fmt: FloatFormat, negative: bool = False) -> "BinaryFloat":
        return cls(fmt, negative, fmt.bias, 0)

    @classmethod
    def infinity(cls, fmt: FloatFormat, negative: bool = False) -> "BinaryFloat":
        return cls(fmt, negative, fmt.max_biased_exponent, 0)

    @classmethod
    def largest_finite(cls, fmt: FloatFormat, negative: bool = False) -> "BinaryFloat":
        return cls(fmt, negative, fmt.max_biased_exponent - 1, fmt.fraction_mask)

    @classmethod
    def smallest_normal(cls, fmt: FloatFormat, negative: bool = False) -> "BinaryFloat":
        return cls(fmt, negative, 1, 0)

    @classmethod
    def smallest_subnormal(cls, fmt: FloatFormat, negative: bool = False) -> "BinaryFloat":
        return cls(fmt, negative, 0, 1)

    # -------------------------------------------------------------------------
    # Bit-level encoding
    # -------------------------------------------------------------------------

    @classmethod
    def from_bits(cls, fmt: FloatFormat, bits: int) -> "BinaryFloat":
        """
        Decode a raw bit pattern of the format's width.

        Float80 patterns whose explicit integer bit disagrees with the
        exponent (unnormals, pseudo-denormals, pseudo-NaNs) are rejected.
        """
        if not 0 <= bits < (1 << fmt.bit_width):
            raise ValueError(f"bit pattern {bits:#x} is wider than {fmt.bit_width} bits")

        significand = bits & fmt.fraction_mask
        bits >>= fmt.significand_bits
        if fmt.explicit_integer_bit:
            integer_bit = bits & 1
            bits >>= 1
        exponent = bits & fmt.max_biased_exponent
        sign = bool(bits >> fmt.exponent_bits)

        if fmt.explicit_integer_bit and integer_bit != (1 if exponent else 0):
            raise ValueError(f"non-canonical {fmt} encoding: integer bit does not match exponent")
        return cls(fmt, sign, exponent, significand)

    @property
    def bits(self) -> int:
        """The raw bit pattern as an unsigned integer."""
        fmt = self.format
        pattern = (1 if self.sign else 0) << fmt.exponent_bits | self.exponent
        if fmt.explicit_integer_bit:
            pattern = pattern << 1 | (1 if self.exponent else 0)
        return pattern << fmt.significand_bits | self.significand

    @classmethod
    def from_float(cls, value: float, fmt: FloatFormat = FLOAT64) -> "BinaryFloat":
        """
        Build a value from a Python float.

        For Double the bits are copied exactly (NaN payloads included); for
        any other format the float is rounded once to nearest-even.
        """
        pattern = struct.unpack(">Q", struct.pack(">d", value))[0]
        double = cls.from_bits(FLOAT64, pattern)
        if fmt == FLOAT64:
            return double
        from numlit.convert.floats import convert_float
        return convert_float(double, fmt)

    def to_float(self) -> float:
        """
        Convert to a Python float (an IEEE Double).

        Double values are bit-exact. Wider or narrower finite values are
        rounded once; NaN payloads of other formats are not carried over.
        """
        if self.format == FLOAT64:
            return struct.unpack(">d", struct.pack(">Q", self.bits))[0]
        if self.is_nan:
            return math.copysign(math.nan, -1.0 if self.sign else 1.0)
        if self.is_infinite:
            return -math.inf if self.sign else math.inf
        try:
            result = float(self.as_fraction())
        except OverflowError:
            result = math.inf
        return math.copysign(result, -1.0 if self.sign else 1.0)

    def as_fraction(self) -> Fraction:
        """
        Exact rational value of a finite number.

        Raises:
            ValueError: For infinities and NaNs
        """
        if not self.is_finite:
            raise ValueError(f"{self.to_hex_string()} has no exact rational value")
        fmt = self.format
        if self.exponent == 0:
            magnitude = Fraction(self.significand) * Fraction(2) ** (fmt.emin - fmt.significand_bits)
        else:
            integer = (1 << fmt.significand_bits) | self.significand
            magnitude = Fraction(integer) * Fraction(2) ** (
                self.exponent - fmt.bias - fmt.significand_bits
            )
        return -magnitude if self.sign else magnitude

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    @property
    def is_zero(self) -> bool:
        return self.exponent == 0 and self.significand == 0

    @property
    def is_subnormal(self) -> bool:
        return self.exponent == 0 and self.significand != 0

    @property
    def is_normal(self) -> bool:
        return 0 < self.exponent < self.format.max_biased_exponent

    @property
    def is_finite(self) -> bool:
        return self.exponent < self.format.max_biased_exponent

    @property
    def is_infinite(self) -> bool:
        return self.exponent == self.format.max_biased_exponent and self.significand == 0

    @property
    def is_nan(self) -> bool:
        return self.exponent == self.format.max_biased_exponent and self.significand != 0

    @property
    def is_signaling_nan(self) -> bool:
        return self.is_nan and not self.significand & self.format.quiet_bit

    @property
    def is_quiet_nan(self) -> bool:
        return self.is_nan and bool(self.significand & self.format.quiet_bit)

    @property
    def category(self) -> FloatCategory:
        if self.is_zero:
            return FloatCategory.ZERO
        if self.is_subnormal:
            return FloatCategory.SUBNORMAL
        if self.is_normal:
            return FloatCategory.NORMAL
        if self.is_infinite:
            return FloatCategory.INFINITE
        return FloatCategory.NAN

    @property
    def classification(self) -> FloatClassification:
        if self.is_nan:
            if self.is_signaling_nan:
                return FloatClassification.SIGNALING_NAN
            return FloatClassification.QUIET_NAN
        signed = {
            FloatCategory.ZERO: ("NEGATIVE_ZERO", "POSITIVE_ZERO"),
            FloatCategory.SUBNORMAL: ("NEGATIVE_SUBNORMAL", "POSITIVE_SUBNORMAL"),
            FloatCategory.NORMAL: ("NEGATIVE_NORMAL", "POSITIVE_NORMAL"),
            FloatCategory.INFINITE: ("NEGATIVE_INFINITY", "POSITIVE_INFINITY"),
        }[self.category]
        return FloatClassification[signed[0] if self.sign else signed[1]]

    # -------------------------------------------------------------------------
    # Sign and neighbour operations
    # -------------------------------------------------------------------------

    def negate(self) -> "BinaryFloat":
        """Flip the sign bit (NaNs included)."""
        return BinaryFloat(self.format, not self.sign, self.exponent, self.significand)

    def magnitude(self) -> "BinaryFloat":
        """Clear the sign bit."""
        return BinaryFloat(self.format, False, self.exponent, self.significand)

    def _magnitude_bits(self) -> int:
        return self.exponent << self.format.significand_bits | self.significand

    def _from_magnitude_bits(self, sign: bool, magnitude: int) -> "BinaryFloat":
        fmt = self.format
        return BinaryFloat(fmt, sign, magnitude >> fmt.significand_bits,
                           magnitude & fmt.fraction_mask)

    def next_up(self) -> "BinaryFloat":
        """
        Least value that compares greater than this one.

        NaNs come back quiet; +inf is its own successor; the successor of
        both zeros is the smallest positive subnormal.
        """
        fmt = self.format
        if self.is_nan:
            return BinaryFloat(fmt, self.sign, self.exponent, self.significand | fmt.quiet_bit)
        if self.is_infinite:
            return BinaryFloat.largest_finite(fmt, negative=True) if self.sign else self
        if self.is_zero:
            return BinaryFloat.smallest_subnormal(fmt)
        if self.sign:
            return self._from_magnitude_bits(True, self._magnitude_bits() - 1)
        return self._from_magnitude_bits(False, self._magnitude_bits() + 1)

    def next_down(self) -> "BinaryFloat":
        """Greatest value that compares less than this one."""
        return self.negate().next_up().negate()

    def ulp(self) -> "BinaryFloat":
        """
        Unit in the last place: the gap to the next value of greater
        magnitude. NaN for NaNs and infinities.
        """
        fmt = self.format
        if not self.is_finite:
            return BinaryFloat(fmt, False, fmt.max_biased_exponent, fmt.quiet_bit)
        scale = max(self.exponent, 1) - fmt.bias - fmt.significand_bits
        if scale >= fmt.emin:
            return BinaryFloat(fmt, False, scale + fmt.bias, 0)
        return BinaryFloat(fmt, False, 0, 1 << (scale - (fmt.emin - fmt.significand_bits)))

    def is_equal(self, other: "BinaryFloat") -> bool:
        """IEEE-754 equality: NaN equals nothing, -0.0 equals 0.0."""
        if self.is_nan or other.is_nan:
            return False
        if self.is_zero and other.is_zero:
            return True
        if self.is_infinite or other.is_infinite:
            return self.is_infinite and other.is_infinite and self.sign == other.sign
        return self.as_fraction() == other.as_fraction()

    def is_less(self, other: "BinaryFloat") -> bool:
        """IEEE-754 ordered less-than: False whenever a NaN is involved."""
        if self.is_nan or other.is_nan or self.is_equal(other):
            return False
        if self.is_infinite:
            return self.sign
        if other.is_infinite:
            return not other.sign
        return self.as_fraction() < other.as_fraction()

    # -------------------------------------------------------------------------
    # Text
    # -------------------------------------------------------------------------

    def to_hex_string(self) -> str:
        """
        Hexadecimal representation, e.g. "0x1.8p-1" or "-0x0.0000000000001p-1022".

        Non-finite values print as "inf", "nan", "snan", with the payload in
        parentheses when it is not zero.
        """
        fmt = self.format
        prefix = "-" if self.sign else ""
        if self.is_infinite:
            return f"{prefix}inf"
        if self.is_nan:
            nan = "snan" if self.is_signaling_nan else "nan"
            payload = self.significand & fmt.max_payload
            suffix = f"(0x{payload:x})" if payload else ""
            return f"{prefix}{nan}{suffix}"
        if self.is_zero:
            return f"{prefix}0x0p+0"

        # Pad the fraction to whole hex digits
        pad = -fmt.significand_bits % 4
        digits = f"{self.significand << pad:0{(fmt.significand_bits + pad) // 4}x}".rstrip("0")
        lead = "1" if self.exponent else "0"
        power = max(self.exponent, 1) - fmt.bias
        fraction = f".{digits}" if digits else ""
        return f"{prefix}0x{lead}{fraction}p{power:+d}"

    def description(self) -> str:
        """
        Shortest decimal text that parses back to this exact value.

        Examples: "0.75", "-0.0", "1e+100", "0.1", "inf", "nan".
        """
        if not self.is_finite:
            return self.to_hex_string().split("(")[0]
        if self.is_zero:
            return "-0.0" if self.sign else "0.0"

        from numlit.rounding import round_fraction

        exact = self.as_fraction()
        max_digits = math.ceil(self.format.precision * math.log10(2)) + 1
        shortest: Optional[Decimal] = None
        for digits in range(1, max_digits + 1):
            with localcontext() as ctx:
                ctx.prec = digits
                ctx.rounding = ROUND_HALF_EVEN
                candidate = Decimal(exact.numerator) / Decimal(exact.denominator)
            if round_fraction(Fraction(candidate), self.format).value == self:
                shortest = candidate
                break
        if shortest is None:
            shortest = candidate

        if -5 <= shortest.adjusted() < 17:
            text = format(shortest, "f")
            return text if "." in text else f"{text}.0"
        return format(shortest, "e")

    def __str__(self) -> str:
        return self.description()

    def __repr__(self) -> str:
        return f"BinaryFloat({self.format}, {self.to_hex_string()})"

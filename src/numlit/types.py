"""
Numeric Type Descriptors
========================

This module defines the descriptors for the fixed-width integer types and
the IEEE-754 binary floating-point formats. Every parse and convert call in
numlit takes one of these descriptors explicitly; there is no implicit
default type for an untyped literal.

Integer Types
-------------
| Type    | Bits | Range                       |
|---------|------|-----------------------------|
| Int8    | 8    | -128 to 127                 |
| UInt8   | 8    | 0 to 255                    |
| Int16   | 16   | -32768 to 32767             |
| UInt16  | 16   | 0 to 65535                  |
| Int32   | 32   | -2^31 to 2^31 - 1           |
| UInt32  | 32   | 0 to 2^32 - 1               |
| Int64   | 64   | -2^63 to 2^63 - 1 (= Int)   |
| UInt64  | 64   | 0 to 2^64 - 1 (= UInt)      |
| Int128  | 128  | -2^127 to 2^127 - 1         |
| UInt128 | 128  | 0 to 2^128 - 1              |

Signed values use two's complement.

Floating-Point Formats
----------------------
| Format  | Exponent bits | Stored significand bits | Total |
|---------|---------------|-------------------------|-------|
| Float16 | 5             | 10                      | 16    |
| Float   | 8             | 23                      | 32    |
| Double  | 11            | 52                      | 64    |
| Float80 | 15            | 63 (+ explicit int bit) | 80    |

Float80 stores its integer bit explicitly, so its stored significand is 64
bits wide although only 63 are fraction bits.
"""

from dataclasses import dataclass
from typing import Union

from numlit.errors import UnknownTypeError


# =============================================================================
# Fixed-Width Integer Types
# =============================================================================

@dataclass(frozen=True)
class IntType:
    """
    A fixed-width integer type.

    Attributes:
        bits: Width of the type in bits (identical for every instance)
        signed: True for two's-complement signed types
        name: Display name, e.g. "Int8"
    """
    bits: int
    signed: bool
    name: str

    def __post_init__(self):
        if self.bits <= 0:
            raise ValueError(f"integer width must be positive, got {self.bits}")

    @property
    def bit_width(self) -> int:
        return self.bits

    @property
    def min(self) -> int:
        """Smallest representable value."""
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        """Largest representable value."""
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1

    @property
    def mask(self) -> int:
        """All-ones bit mask of the type's width."""
        return (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        """Return True if `value` is representable in this type."""
        return self.min <= value <= self.max

    def wrap(self, value: int) -> int:
        """
        Reduce an unbounded integer to this type, two's-complement style.

        The low `bits` bits are kept; for signed types the top kept bit is
        then read as the sign.
        """
        pattern = value & self.mask
        if self.signed and pattern > self.max:
            return pattern - (1 << self.bits)
        return pattern

    def from_bit_pattern(self, pattern: int) -> int:
        """Interpret an unsigned bit pattern of this width as a value."""
        if not 0 <= pattern <= self.mask:
            raise ValueError(f"bit pattern {pattern:#x} is wider than {self.bits} bits")
        return self.wrap(pattern)

    def counterpart(self) -> "IntType":
        """Return the type of the same width with the opposite signedness."""
        return integer_type(self.bits, not self.signed)

    def __str__(self) -> str:
        return self.name


def integer_type(bits: int, signed: bool) -> IntType:
    """Return the standard integer type for a width, or build one."""
    for candidate in INTEGER_TYPES:
        if candidate.bits == bits and candidate.signed == signed:
            return candidate
    prefix = "Int" if signed else "UInt"
    return IntType(bits, signed, f"{prefix}{bits}")


INT8 = IntType(8, True, "Int8")
INT16 = IntType(16, True, "Int16")
INT32 = IntType(32, True, "Int32")
INT64 = IntType(64, True, "Int64")
INT128 = IntType(128, True, "Int128")
UINT8 = IntType(8, False, "UInt8")
UINT16 = IntType(16, False, "UInt16")
UINT32 = IntType(32, False, "UInt32")
UINT64 = IntType(64, False, "UInt64")
UINT128 = IntType(128, False, "UInt128")

# Word-sized aliases (64-bit platform)
INT = INT64
UINT = UINT64

INTEGER_TYPES = (
    INT8, INT16, INT32, INT64, INT128,
    UINT8, UINT16, UINT32, UINT64, UINT128,
)


# =============================================================================
# Binary Floating-Point Formats
# =============================================================================

@dataclass(frozen=True)
class FloatFormat:
    """
    An IEEE-754 binary floating-point format.

    Attributes:
        name: Display name, e.g. "Double"
        exponent_bits: Width of the biased exponent field
        significand_bits: Number of stored fraction bits (excludes any
                          explicit integer bit)
        explicit_integer_bit: True when the integer bit is stored (Float80)

    Examples:
        - Float   : FloatFormat("Float", 8, 23)
        - Float80 : FloatFormat("Float80", 15, 63, explicit_integer_bit=True)
    """
    name: str
    exponent_bits: int
    significand_bits: int
    explicit_integer_bit: bool = False

    def __post_init__(self):
        if self.exponent_bits < 2:
            raise ValueError("a float format needs at least 2 exponent bits")
        if self.significand_bits < 3:
            raise ValueError("a float format needs at least 3 significand bits")

    @property
    def precision(self) -> int:
        """Significand precision in bits, including the integer bit."""
        return self.significand_bits + 1

    @property
    def bias(self) -> int:
        return (1 << (self.exponent_bits - 1)) - 1

    @property
    def emax(self) -> int:
        """Largest unbiased exponent of a finite value."""
        return self.bias

    @property
    def emin(self) -> int:
        """Smallest unbiased exponent of a normal value."""
        return 1 - self.bias

    @property
    def max_biased_exponent(self) -> int:
        """Biased exponent reserved for infinities and NaNs."""
        return (1 << self.exponent_bits) - 1

    @property
    def bit_width(self) -> int:
        width = 1 + self.exponent_bits + self.significand_bits
        return width + 1 if self.explicit_integer_bit else width

    @property
    def fraction_mask(self) -> int:
        return (1 << self.significand_bits) - 1

    @property
    def quiet_bit(self) -> int:
        """Top stored fraction bit; set for quiet NaNs."""
        return 1 << (self.significand_bits - 1)

    @property
    def signaling_bit(self) -> int:
        """
        Second fraction bit; set for signaling NaNs.

        IEEE-754 only requires the quiet bit to be clear for a signaling NaN.
        numlit additionally sets this bit so that a signaling NaN with a zero
        payload is still distinct from an infinity.
        """
        return 1 << (self.significand_bits - 2)

    @property
    def payload_bits(self) -> int:
        """Width of the NaN payload: two fraction bits are reserved."""
        return self.significand_bits - 2

    @property
    def max_payload(self) -> int:
        return (1 << self.payload_bits) - 1

    def __str__(self) -> str:
        return self.name


FLOAT16 = FloatFormat("Float16", 5, 10)
FLOAT32 = FloatFormat("Float", 8, 23)
FLOAT64 = FloatFormat("Double", 11, 52)
FLOAT80 = FloatFormat("Float80", 15, 63, explicit_integer_bit=True)

FLOAT_FORMATS = (FLOAT16, FLOAT32, FLOAT64, FLOAT80)

NumericType = Union[IntType, FloatFormat]


# =============================================================================
# Name Lookup
# =============================================================================

_TYPE_NAMES: dict[str, NumericType] = {
    **{t.name.lower(): t for t in INTEGER_TYPES},
    "int": INT,
    "uint": UINT,
    "float16": FLOAT16,
    "float": FLOAT32,
    "float32": FLOAT32,
    "double": FLOAT64,
    "float64": FLOAT64,
    "float80": FLOAT80,
}


def lookup_type(name: str) -> NumericType:
    """
    Resolve a type name such as "Int8", "UInt", "Double" or "Float80".

    Matching is case-insensitive.

    Raises:
        UnknownTypeError: If the name is not a standard numeric type
    """
    try:
        return _TYPE_NAMES[name.strip().lower()]
    except KeyError:
        raise UnknownTypeError(name, known=type_names()) from None


def type_names() -> list[str]:
    """Canonical names of all standard types, integers first."""
    return [t.name for t in INTEGER_TYPES] + [f.name for f in FLOAT_FORMATS]

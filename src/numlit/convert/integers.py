"""
Integer Width Conversion
========================

Converts a FixedWidthInt to another fixed-width integer type.

Truncation of Negative Values
-----------------------------
Truncating a negative value into a wider unsigned type does not copy the
value; it keeps the two's-complement pattern, extended with sign bits:

    truncating(Int8(-1), UInt16)   -> 65535
    truncating(Int8(-56), UInt32)  -> 4294967240

which is the identity

    truncating(s, U) == (U.max + 1) - truncating(-s, U)      for s < 0

Narrowing keeps only the low bits, read with the target's signedness:

    truncating(Int16(300), Int8)   -> 44
    truncating(UInt8(200), Int8)   -> -56
"""

import logging
from typing import Optional

from numlit.convert.policy import ConversionPolicy
from numlit.errors import ArithmeticOverflowError, ConversionError
from numlit.outcome import ConversionOutcome, OutcomeKind
from numlit.types import IntType
from numlit.values import FixedWidthInt

logger = logging.getLogger(__name__)


def integer_outcome(value: FixedWidthInt, target: IntType) -> ConversionOutcome:
    """
    EXACT with the converted value, or OVERFLOW (value None).

    Out-of-range values are OVERFLOW in both directions; UNDERFLOW is kept
    for nonzero floats that round to zero.
    """
    n = value.value
    if n > target.max:
        return ConversionOutcome(OutcomeKind.OVERFLOW, None, f"{n} is above {target} maximum {target.max}")
    if n < target.min:
        return ConversionOutcome(OutcomeKind.OVERFLOW, None, f"{n} is below {target} minimum {target.min}")
    return ConversionOutcome.exact(FixedWidthInt(target, n))


def exactly(value: FixedWidthInt, target: IntType) -> FixedWidthInt:
    """
    Convert, raising if the value is not representable in `target`.

    Raises:
        ArithmeticOverflowError: If the value is out of range
    """
    outcome = integer_outcome(value, target)
    if not outcome.is_exact:
        raise ArithmeticOverflowError(
            "conversion",
            target.name,
            f"{value.value} ({value.type}) is not representable",
        )
    return outcome.value


def exactly_or_none(value: FixedWidthInt, target: IntType) -> Optional[FixedWidthInt]:
    """Convert, returning None if the value is not representable."""
    outcome = integer_outcome(value, target)
    if not outcome.is_exact:
        logger.debug(f"{value.value} ({value.type}) does not fit {target}")
    return outcome.value_or_none()


def clamping(value: FixedWidthInt, target: IntType) -> FixedWidthInt:
    """Convert, saturating to target.min or target.max."""
    return FixedWidthInt(target, min(max(value.value, target.min), target.max))


def truncating(value: FixedWidthInt, target: IntType) -> FixedWidthInt:
    """
    Convert by keeping the low target.bits bits of the two's-complement
    pattern (sign-extended first when the source is signed and negative).
    """
    return FixedWidthInt(target, target.wrap(value.value))


def bit_pattern(value: FixedWidthInt, target: IntType) -> FixedWidthInt:
    """
    Reinterpret the bits as the opposite-signedness type of the same width.

    Raises:
        ConversionError: If the widths differ or the signedness is the same
    """
    if target.bits != value.type.bits or target.signed == value.type.signed:
        raise ConversionError(
            f"bit-pattern conversion needs the same width and opposite signedness, "
            f"got '{value.type}' to '{target}'"
        )
    return FixedWidthInt.from_bit_pattern(target, value.bit_pattern)


_CONVERTERS = {
    ConversionPolicy.EXACT: exactly,
    ConversionPolicy.EXACT_OR_NONE: exactly_or_none,
    ConversionPolicy.CLAMPING: clamping,
    ConversionPolicy.TRUNCATING: truncating,
    ConversionPolicy.BIT_PATTERN: bit_pattern,
}


def convert_integer(
    value: FixedWidthInt,
    target: IntType,
    policy: ConversionPolicy = ConversionPolicy.EXACT,
) -> Optional[FixedWidthInt]:
    """Convert `value` to `target` under `policy`."""
    return _CONVERTERS[policy](value, target)

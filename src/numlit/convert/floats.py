"""
Floating-Point Width Conversion
===============================

Converts BinaryFloat values between formats, and between floats and
fixed-width integers.

Float to Float
--------------
The source value is exact, so converting it is one rounding step straight
into the target. Narrowing Float80 to Float never passes through Double:

    x = Float80 value 1 + 2^-24 + 2^-60
    convert_float(x, FLOAT32)   -> 1 + 2^-23   (correct, rounds up)
    via Double first            -> 1.0         (double rounding: the tie
                                                breaks to even)

NaNs keep their sign and their payload, truncated to the target payload
width, and come out quiet. A NaN never counts as an exact conversion.

Integer to Float
----------------
EXACT rounds to nearest (an integer too large for the format becomes an
infinity); EXACT_OR_NONE fails if any bit is lost.

Float to Integer
----------------
| Policy        | NaN / inf      | fractional     | out of range   |
|---------------|----------------|----------------|----------------|
| EXACT         | raises         | truncates      | raises         |
| EXACT_OR_NONE | None           | None           | None           |
| CLAMPING      | NaN raises, inf saturates | truncates | saturates |
"""

import logging
from typing import Optional

from numlit.convert.policy import ConversionPolicy
from numlit.errors import ArithmeticOverflowError, ConversionError
from numlit.nan import make_nan_truncating, nan_payload
from numlit.outcome import ConversionOutcome, OutcomeKind
from numlit.protocols import BinaryFloatLike, IntegerLike
from numlit.rounding import round_exact, round_fraction
from numlit.types import FloatFormat, IntType, integer_type
from numlit.values import BinaryFloat, FixedWidthInt

logger = logging.getLogger(__name__)


# =============================================================================
# Float to Float
# =============================================================================

def convert_float_outcome(value: BinaryFloat, target: FloatFormat) -> ConversionOutcome:
    """
    Convert `value` to `target` and report how it went.

    NaNs give an INEXACT outcome carrying the re-encoded quiet NaN.
    """
    if value.is_nan:
        decoded = nan_payload(value)
        nan = make_nan_truncating(target, decoded.payload, signaling=False, negative=value.sign)
        return ConversionOutcome(OutcomeKind.INEXACT, nan, "NaN")
    if value.is_infinite:
        return ConversionOutcome.exact(BinaryFloat.infinity(target, value.sign))
    if value.is_zero:
        return ConversionOutcome.exact(BinaryFloat.zero(target, value.sign))
    return round_fraction(value.as_fraction(), target, negative=value.sign)


def convert_float(
    value: BinaryFloat,
    target: FloatFormat,
    policy: ConversionPolicy = ConversionPolicy.EXACT,
) -> Optional[BinaryFloat]:
    """
    Convert a BinaryFloat to another format under `policy`.

    Raises:
        ConversionError: For the TRUNCATING and BIT_PATTERN policies
    """
    if policy in (ConversionPolicy.TRUNCATING, ConversionPolicy.BIT_PATTERN):
        raise ConversionError(f"{policy} conversion is not defined between floating-point formats")

    outcome = convert_float_outcome(value, target)

    if policy is ConversionPolicy.EXACT_OR_NONE:
        if not outcome.is_exact:
            logger.debug(
                f"{value.to_hex_string()} ({value.format}) to {target}: "
                f"{outcome.reason or outcome.kind.name.lower()}"
            )
        return outcome.value_or_none()

    if policy is ConversionPolicy.CLAMPING and not value.is_nan:
        if outcome.kind is OutcomeKind.OVERFLOW or value.is_infinite:
            return BinaryFloat.largest_finite(target, value.sign)

    return outcome.value


# =============================================================================
# Integer to Float
# =============================================================================

def int_to_float(
    value: IntegerLike,
    fmt: FloatFormat,
    policy: ConversionPolicy = ConversionPolicy.EXACT,
) -> Optional[BinaryFloat]:
    """
    Convert an integer to `fmt`. Zero always converts to positive zero.

    Raises:
        ConversionError: For policies other than EXACT and EXACT_OR_NONE
    """
    if policy not in (ConversionPolicy.EXACT, ConversionPolicy.EXACT_OR_NONE):
        raise ConversionError(f"{policy} conversion is not defined from integers to '{fmt}'")

    n = int(value)
    outcome = round_exact(n < 0, abs(n), 1, fmt)
    if policy is ConversionPolicy.EXACT_OR_NONE:
        return outcome.value_or_none()
    return outcome.value


# =============================================================================
# Float to Integer
# =============================================================================

def float_to_int(
    value: BinaryFloat,
    target: IntType,
    policy: ConversionPolicy = ConversionPolicy.EXACT,
) -> Optional[FixedWidthInt]:
    """
    Convert a BinaryFloat to an integer type, rounding toward zero.

    Raises:
        ArithmeticOverflowError: EXACT policy with NaN, infinity or an
                                 out-of-range value
        ConversionError: CLAMPING policy with NaN, or an undefined policy
    """
    if policy not in (ConversionPolicy.EXACT, ConversionPolicy.EXACT_OR_NONE,
                      ConversionPolicy.CLAMPING):
        raise ConversionError(f"{policy} conversion is not defined from '{value.format}' to integers")

    if value.is_nan:
        if policy is ConversionPolicy.EXACT_OR_NONE:
            return None
        if policy is ConversionPolicy.CLAMPING:
            raise ConversionError("NaN has no integer value to clamp")
        raise ArithmeticOverflowError("conversion", target.name, "NaN cannot be converted to an integer")

    if value.is_infinite:
        if policy is ConversionPolicy.CLAMPING:
            return FixedWidthInt(target, target.min if value.sign else target.max)
        if policy is ConversionPolicy.EXACT_OR_NONE:
            return None
        raise ArithmeticOverflowError("conversion", target.name, "infinity cannot be converted to an integer")

    exact = value.as_fraction()
    truncated = int(exact)

    if policy is ConversionPolicy.EXACT_OR_NONE:
        if truncated != exact or not target.contains(truncated):
            return None
        return FixedWidthInt(target, truncated)

    if policy is ConversionPolicy.CLAMPING:
        return FixedWidthInt(target, min(max(truncated, target.min), target.max))

    if not target.contains(truncated):
        raise ArithmeticOverflowError(
            "conversion", target.name, f"{value.description()} is outside {target.min}...{target.max}"
        )
    return FixedWidthInt(target, truncated)


# =============================================================================
# Bit Patterns
# =============================================================================

def float_bit_pattern(value: BinaryFloatLike) -> FixedWidthInt:
    """The raw encoding as an unsigned integer of the format's width."""
    return FixedWidthInt(integer_type(value.format.bit_width, False), value.bits)


def float_from_bit_pattern(pattern: FixedWidthInt, fmt: FloatFormat) -> BinaryFloat:
    """
    Reinterpret an integer's bits as a value of `fmt`.

    Raises:
        ConversionError: If the integer width differs from the format width
    """
    if pattern.bit_width != fmt.bit_width:
        raise ConversionError(
            f"'{pattern.type}' is {pattern.bit_width} bits wide but '{fmt}' needs {fmt.bit_width}"
        )
    return BinaryFloat.from_bits(fmt, pattern.bit_pattern)

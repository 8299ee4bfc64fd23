"""
NaN Payloads and Total Ordering
===============================

NaN Encoding
------------
A NaN has the maximum biased exponent and a nonzero stored significand.
The top two stored significand bits are flags, the rest is the payload:

    significand = [quiet][signaling][payload: significand_bits - 2 bits]

| quiet | signaling | meaning       |
|-------|-----------|---------------|
| 1     | 0         | quiet NaN     |
| 0     | 1         | signaling NaN |

IEEE-754 only fixes the quiet bit; it would allow a payload of
significand_bits - 1 bits. Reserving the second bit as the signaling flag
is an implementation convention: it keeps a signaling NaN with payload 0
distinct from infinity. Payloads therefore hold significand_bits - 2 bits
(21 for Float, 50 for Double, 61 for Float80).

Minimum and Maximum
-------------------
minimum() and maximum() follow IEEE-754 minNum/maxNum:
- a number wins over a quiet NaN: minimum(nan, 0.0) is 0.0
- a signaling NaN operand always yields a (quiet) NaN
- -0.0 and 0.0 are interchangeable; either may be returned

Total Order
-----------
total_order(a, b) is True when a orders at or below b in the IEEE-754
total order, which covers every bit pattern:

    -NaN < -inf < negative normals/subnormals < -0.0 < 0.0
         < positive subnormals/normals < +inf < +NaN

Among positive NaNs, signaling orders below quiet and a larger payload
orders higher. For negative NaNs the ordering is mirrored (quiet below
signaling, larger payload lower), exactly as for the other negative values.

The rule "among NaNs of the same sign, signaling < quiet" therefore holds as
stated only for positive NaNs. Negative NaNs compare by their magnitude
reversed, as IEEE-754 5.10 (totalOrder) requires, so -nan < -snan.
"""

import logging

from numlit.errors import ConversionError, NaNEncodingError
from numlit.protocols import BinaryFloatLike
from numlit.types import FloatFormat
from numlit.values import BinaryFloat, NaNPayload

logger = logging.getLogger(__name__)


# =============================================================================
# Encoding and Decoding
# =============================================================================

def make_nan(
    fmt: FloatFormat,
    payload: int = 0,
    signaling: bool = False,
    negative: bool = False,
) -> BinaryFloat:
    """
    Build a NaN with an explicit payload and signaling state.

    Raises:
        NaNEncodingError: If the payload is negative or wider than
                          fmt.payload_bits
    """
    if payload < 0:
        raise NaNEncodingError(f"NaN payload cannot be negative: {payload}")
    if payload > fmt.max_payload:
        raise NaNEncodingError(
            f"NaN payload {payload:#x} needs {payload.bit_length()} bits; "
            f"'{fmt}' payloads hold {fmt.payload_bits} bits"
        )
    flag = fmt.signaling_bit if signaling else fmt.quiet_bit
    return BinaryFloat(fmt, negative, fmt.max_biased_exponent, flag | payload)


def make_nan_truncating(
    fmt: FloatFormat,
    payload: int,
    signaling: bool = False,
    negative: bool = False,
) -> BinaryFloat:
    """Build a NaN, silently dropping payload bits that do not fit."""
    if payload < 0:
        raise NaNEncodingError(f"NaN payload cannot be negative: {payload}")
    if payload > fmt.max_payload:
        logger.debug(f"Truncating NaN payload {payload:#x} to {fmt.payload_bits} bits for {fmt}")
    return make_nan(fmt, payload & fmt.max_payload, signaling, negative)


def nan_payload(value: BinaryFloat) -> NaNPayload:
    """
    Decode the signaling state and payload of a NaN.

    Raises:
        NaNEncodingError: If the value is not a NaN
    """
    if not value.is_nan:
        raise NaNEncodingError(f"{value.to_hex_string()} is not a NaN")
    return NaNPayload(
        signaling=value.is_signaling_nan,
        payload=value.significand & value.format.max_payload,
    )


def quieted(value: BinaryFloat) -> BinaryFloat:
    """Return a NaN as a quiet NaN with the same sign and payload."""
    decoded = nan_payload(value)
    return make_nan(value.format, decoded.payload, signaling=False, negative=value.sign)


# =============================================================================
# Minimum and Maximum
# =============================================================================

def _check_same_format(a: BinaryFloatLike, b: BinaryFloatLike) -> None:
    if a.format != b.format:
        raise ConversionError(f"operands have different formats: '{a.format}' and '{b.format}'")


def _nan_result(a: BinaryFloat, b: BinaryFloat):
    """
    Shared NaN handling for the min/max family.

    Returns the result if a NaN decides it, or None when both operands are
    numbers.
    """
    if a.is_signaling_nan or b.is_signaling_nan:
        return quieted(a if a.is_signaling_nan else b)
    if a.is_nan and b.is_nan:
        return a
    if a.is_nan:
        return b
    if b.is_nan:
        return a
    return None


def minimum(a: BinaryFloat, b: BinaryFloat) -> BinaryFloat:
    """
    IEEE-754 minNum.

        minimum(nan, 0.0) -> 0.0
        minimum(snan, 0.0) -> nan
    """
    _check_same_format(a, b)
    result = _nan_result(a, b)
    if result is not None:
        return result
    return b if b.is_less(a) else a


def maximum(a: BinaryFloat, b: BinaryFloat) -> BinaryFloat:
    """IEEE-754 maxNum; see minimum() for the NaN rules."""
    _check_same_format(a, b)
    result = _nan_result(a, b)
    if result is not None:
        return result
    return b if a.is_less(b) else a


def minimum_magnitude(a: BinaryFloat, b: BinaryFloat) -> BinaryFloat:
    """The operand of smaller magnitude (IEEE-754 minNumMag)."""
    _check_same_format(a, b)
    result = _nan_result(a, b)
    if result is not None:
        return result
    if b.magnitude().is_less(a.magnitude()):
        return b
    if a.magnitude().is_less(b.magnitude()):
        return a
    return minimum(a, b)


def maximum_magnitude(a: BinaryFloat, b: BinaryFloat) -> BinaryFloat:
    """The operand of greater magnitude (IEEE-754 maxNumMag)."""
    _check_same_format(a, b)
    result = _nan_result(a, b)
    if result is not None:
        return result
    if a.magnitude().is_less(b.magnitude()):
        return b
    if b.magnitude().is_less(a.magnitude()):
        return a
    return maximum(a, b)


# =============================================================================
# Total Order
# =============================================================================

def total_order_key(value: BinaryFloatLike) -> int:
    """
    Integer key whose natural order is the IEEE-754 total order.

    Usable directly with sorted(values, key=total_order_key) for values of
    one format.
    """
    magnitude = value.exponent << value.format.significand_bits | value.significand
    return -magnitude - 1 if value.sign else magnitude


def total_order(a: BinaryFloat, b: BinaryFloat) -> bool:
    """True if `a` orders at or below `b` in the total order."""
    _check_same_format(a, b)
    return total_order_key(a) <= total_order_key(b)


def total_order_magnitude(a: BinaryFloat, b: BinaryFloat) -> bool:
    """total_order() applied to the magnitudes of `a` and `b`."""
    _check_same_format(a, b)
    return total_order_key(a.magnitude()) <= total_order_key(b.magnitude())

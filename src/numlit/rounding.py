"""
Correct Rounding into Binary Formats
====================================

Rounds an exact rational value into a FloatFormat in a single step. All
converters and parsers funnel through round_exact(), so no value is ever
rounded twice (first into some wider intermediate, then into the target).

Rounding Mode
-------------
The rounding mode is fixed: round to nearest, ties to even. There is no
API to change it, and no floating-point exception flags are kept; the
outcome kind reports what happened instead.

Outcome Kinds
-------------
- EXACT: the value is representable
- INEXACT: rounded to the nearest representable value (subnormals included)
- OVERFLOW: rounded magnitude exceeds the largest finite value; the
  delivered value is the infinity of the same sign
- UNDERFLOW: a nonzero value rounded to zero; the delivered value is the
  zero of the same sign

Huge Exponents
--------------
Text such as "1e999999999" would need an enormous integer to evaluate
exactly. round_exact_float() first bounds the binary magnitude of the
value and decides overflow or underflow without building that integer.
"""

import logging
import math
from fractions import Fraction
from typing import Optional

from numlit.outcome import ConversionOutcome
from numlit.types import FloatFormat
from numlit.values import BinaryFloat, ExactFloat

logger = logging.getLogger(__name__)

ROUNDING_MODE = "toNearestOrEven"

_LOG2_10 = math.log2(10)


def round_exact(
    negative: bool,
    numerator: int,
    denominator: int,
    fmt: FloatFormat,
) -> ConversionOutcome:
    """
    Round numerator / denominator (with the given sign) into `fmt`.

    Args:
        negative: Sign of the result (also used for zero)
        numerator: Non-negative numerator of the magnitude
        denominator: Positive denominator of the magnitude
        fmt: Target format

    Returns:
        ConversionOutcome whose value is a BinaryFloat of `fmt`
    """
    if numerator < 0 or denominator <= 0:
        raise ValueError("round_exact expects a non-negative magnitude and positive denominator")

    if numerator == 0:
        return ConversionOutcome.exact(BinaryFloat.zero(fmt, negative))

    precision = fmt.precision

    # floor(log2(value)), from the bit lengths and one comparison
    top = numerator.bit_length() - denominator.bit_length()
    if top >= 0:
        if numerator < denominator << top:
            top -= 1
    elif numerator << -top < denominator:
        top -= 1

    if top > fmt.emax:
        return ConversionOutcome.overflow(BinaryFloat.infinity(fmt, negative))

    # Exponent of the last significand bit; subnormals share emin's
    scale = max(top, fmt.emin) - (precision - 1)

    if scale >= 0:
        divisor = denominator << scale
        quotient, remainder = divmod(numerator, divisor)
    else:
        divisor = denominator
        quotient, remainder = divmod(numerator << -scale, divisor)

    # Ties to even
    twice = remainder << 1
    if twice > divisor or (twice == divisor and quotient & 1):
        quotient += 1
    inexact = remainder != 0

    if quotient >> precision:
        quotient >>= 1
        scale += 1

    if quotient == 0:
        return ConversionOutcome.underflow(BinaryFloat.zero(fmt, negative))

    integer_bit = 1 << (precision - 1)
    if quotient >= integer_bit:
        unbiased = scale + precision - 1
        if unbiased > fmt.emax:
            return ConversionOutcome.overflow(BinaryFloat.infinity(fmt, negative))
        value = BinaryFloat(fmt, negative, unbiased + fmt.bias, quotient - integer_bit)
    else:
        value = BinaryFloat(fmt, negative, 0, quotient)

    if inexact:
        return ConversionOutcome.inexact(value)
    return ConversionOutcome.exact(value)


def round_fraction(
    value: Fraction,
    fmt: FloatFormat,
    negative: Optional[bool] = None,
) -> ConversionOutcome:
    """
    Round a Fraction into `fmt`.

    `negative` overrides the sign, which is how a negative zero is requested
    (a Fraction cannot carry one).
    """
    if negative is None:
        negative = value < 0
    return round_exact(negative, abs(value.numerator), value.denominator, fmt)


def round_exact_float(value: ExactFloat, fmt: FloatFormat) -> ConversionOutcome:
    """
    Round a parsed literal or string into `fmt`, keeping the sign of zero.
    """
    if value.is_zero:
        return ConversionOutcome.exact(BinaryFloat.zero(fmt, value.negative))

    # Upper bound on log2(|value|), and the bound minus one digit's worth
    if value.radix == 2:
        log2_high = value.digits.bit_length() + value.exponent
    else:
        log2_high = value.digits.bit_length() + value.exponent * _LOG2_10
    log2_low = log2_high - (1 if value.radix == 2 else _LOG2_10 + 1)

    if log2_low > fmt.emax + 2:
        logger.debug(f"{fmt}: overflow decided by magnitude bound (2^{log2_low:.0f})")
        return ConversionOutcome.overflow(BinaryFloat.infinity(fmt, value.negative))
    if log2_high < fmt.emin - fmt.precision - 1:
        logger.debug(f"{fmt}: underflow decided by magnitude bound (2^{log2_high:.0f})")
        return ConversionOutcome.underflow(BinaryFloat.zero(fmt, value.negative))

    exact = value.as_fraction()
    return round_exact(value.negative, abs(exact.numerator), exact.denominator, fmt)

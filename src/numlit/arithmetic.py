"""
Fixed-Width Integer Arithmetic
==============================

Four families of operations on FixedWidthInt values of one type:

| Family     | On overflow                                      |
|------------|--------------------------------------------------|
| trapping   | raises ArithmeticOverflowError (the default, also used by + - *) |
| reporting  | returns (wrapped partial value, True)            |
| wrapping   | returns the two's-complement wrapped value       |
| unchecked  | checked build: PreconditionFailure; release: wrapped value |

Division truncates toward zero and the remainder takes the sign of the
dividend: -7 / 2 is -3 and -7 % 2 is -1.

Reporting Edge Cases
--------------------
| Operation        | Result            |
|------------------|-------------------|
| x / 0            | (x, True)         |
| x % 0            | (x, True)         |
| MIN / -1         | (MIN, True)       |
| x % -1 (signed)  | (0, True)         |

The remainder by -1 is mathematically always zero, but it is reported as
an overflow for every dividend because MIN % -1 overflows at the hardware
level and the flag does not depend on the dividend. The trapping
remainder() only traps for MIN % -1 and returns 0 for any other dividend.
"""

import logging
from typing import NamedTuple, Optional

from numlit.config import NumericsConfig, get_config
from numlit.errors import (
    ArithmeticOverflowError,
    ConversionError,
    DivisionByZeroError,
    PreconditionFailure,
)
from numlit.protocols import FixedWidthIntegerLike
from numlit.values import FixedWidthInt

logger = logging.getLogger(__name__)


class PartialResult(NamedTuple):
    """Result of a reporting operation."""
    partial_value: FixedWidthInt
    overflow: bool


class FullWidthProduct(NamedTuple):
    """Double-width product: high half (same type) and low half (unsigned)."""
    high: FixedWidthInt
    low: FixedWidthInt


class QuotientAndRemainder(NamedTuple):
    quotient: FixedWidthInt
    remainder: FixedWidthInt


# =============================================================================
# Helpers
# =============================================================================

def _check_types(a: FixedWidthIntegerLike, b: FixedWidthIntegerLike) -> None:
    if a.type != b.type:
        raise ConversionError(f"operands have different types: '{a.type}' and '{b.type}'")


def _truncating_divide(n: int, d: int) -> int:
    """Integer quotient rounded toward zero (Python's // rounds down)."""
    quotient = abs(n) // abs(d)
    return -quotient if (n < 0) != (d < 0) else quotient


def _report(a: FixedWidthIntegerLike, exact: int, operation: str) -> PartialResult:
    int_type = a.type
    overflow = not int_type.contains(exact)
    if overflow:
        logger.debug(f"{operation} overflowed {int_type}: exact result {exact}")
    return PartialResult(FixedWidthInt(int_type, int_type.wrap(exact)), overflow)


# =============================================================================
# Reporting Operations
# =============================================================================

def add_reporting_overflow(a: FixedWidthInt, b: FixedWidthInt) -> PartialResult:
    _check_types(a, b)
    return _report(a, a.value + b.value, "add")


def subtract_reporting_overflow(a: FixedWidthInt, b: FixedWidthInt) -> PartialResult:
    _check_types(a, b)
    return _report(a, a.value - b.value, "subtract")


def multiply_reporting_overflow(a: FixedWidthInt, b: FixedWidthInt) -> PartialResult:
    _check_types(a, b)
    return _report(a, a.value * b.value, "multiply")


def divide_reporting_overflow(a: FixedWidthInt, b: FixedWidthInt) -> PartialResult:
    """
    Truncating division that reports overflow.

    Division by zero and MIN / -1 both return the dividend with the
    overflow flag set.
    """
    _check_types(a, b)
    if b.value == 0:
        logger.debug(f"divide by zero reported for {a.type}")
        return PartialResult(a, True)
    if a.type.signed and a.value == a.type.min and b.value == -1:
        return PartialResult(a, True)
    return PartialResult(FixedWidthInt(a.type, _truncating_divide(a.value, b.value)), False)


def remainder_reporting_overflow(a: FixedWidthInt, b: FixedWidthInt) -> PartialResult:
    """
    Truncating remainder that reports overflow.

    A zero divisor returns the dividend; a divisor of -1 returns zero.
    Both set the overflow flag.
    """
    _check_types(a, b)
    if b.value == 0:
        logger.debug(f"remainder by zero reported for {a.type}")
        return PartialResult(a, True)
    if a.type.signed and b.value == -1:
        return PartialResult(FixedWidthInt(a.type, 0), True)
    remainder = a.value - b.value * _truncating_divide(a.value, b.value)
    return PartialResult(FixedWidthInt(a.type, remainder), False)


# =============================================================================
# Trapping Operations
# =============================================================================

def _trap(result: PartialResult, operation: str) -> FixedWidthInt:
    if result.overflow:
        raise ArithmeticOverflowError(operation, result.partial_value.type.name)
    return result.partial_value


def add(a: FixedWidthInt, b: FixedWidthInt) -> FixedWidthInt:
    return _trap(add_reporting_overflow(a, b), "add")


def subtract(a: FixedWidthInt, b: FixedWidthInt) -> FixedWidthInt:
    return _trap(subtract_reporting_overflow(a, b), "subtract")


def multiply(a: FixedWidthInt, b: FixedWidthInt) -> FixedWidthInt:
    return _trap(multiply_reporting_overflow(a, b), "multiply")


def divide(a: FixedWidthInt, b: FixedWidthInt) -> FixedWidthInt:
    """
    Truncating division.

    Raises:
        DivisionByZeroError: If `b` is zero
        ArithmeticOverflowError: For MIN / -1
    """
    _check_types(a, b)
    if b.value == 0:
        raise DivisionByZeroError("division", a.type.name)
    return _trap(divide_reporting_overflow(a, b), "division")


def remainder(a: FixedWidthInt, b: FixedWidthInt) -> FixedWidthInt:
    """
    Truncating remainder (sign of the dividend).

    Raises:
        DivisionByZeroError: If `b` is zero
        ArithmeticOverflowError: For MIN % -1
    """
    _check_types(a, b)
    if b.value == 0:
        raise DivisionByZeroError("remainder", a.type.name)
    if a.type.signed and b.value == -1:
        if a.value == a.type.min:
            raise ArithmeticOverflowError("remainder", a.type.name, "MIN % -1")
        return FixedWidthInt(a.type, 0)
    return remainder_reporting_overflow(a, b).partial_value


def negate(a: FixedWidthInt) -> FixedWidthInt:
    """
    Arithmetic negation.

    Raises:
        ArithmeticOverflowError: For the signed minimum, or any nonzero
                                 unsigned value
    """
    if not a.type.contains(-a.value):
        raise ArithmeticOverflowError("negation", a.type.name)
    return FixedWidthInt(a.type, -a.value)


def absolute(a: FixedWidthInt) -> FixedWidthInt:
    """
    Absolute value in the same type.

    Raises:
        ArithmeticOverflowError: For the signed minimum, whose absolute
                                 value does not fit; use magnitude() instead
    """
    if not a.type.contains(abs(a.value)):
        raise ArithmeticOverflowError("abs", a.type.name, f"|{a.value}| is not representable")
    return FixedWidthInt(a.type, abs(a.value))


def magnitude(a: FixedWidthInt) -> FixedWidthInt:
    """Absolute value as the unsigned type of the same width; never traps."""
    unsigned = a.type if not a.type.signed else a.type.counterpart()
    return FixedWidthInt(unsigned, abs(a.value))


# =============================================================================
# Wrapping Operations
# =============================================================================

def wrapping_add(a: FixedWidthInt, b: FixedWidthInt) -> FixedWidthInt:
    return add_reporting_overflow(a, b).partial_value


def wrapping_subtract(a: FixedWidthInt, b: FixedWidthInt) -> FixedWidthInt:
    return subtract_reporting_overflow(a, b).partial_value


def wrapping_multiply(a: FixedWidthInt, b: FixedWidthInt) -> FixedWidthInt:
    return multiply_reporting_overflow(a, b).partial_value


def wrapping_negate(a: FixedWidthInt) -> FixedWidthInt:
    return FixedWidthInt(a.type, a.type.wrap(-a.value))


# =============================================================================
# Unchecked Operations
# =============================================================================

def _unchecked(result: PartialResult, operation: str,
               config: Optional[NumericsConfig]) -> FixedWidthInt:
    config = config or get_config()
    if result.overflow and config.checked:
        raise PreconditionFailure(operation, result.partial_value.type.name)
    return result.partial_value


def unchecked_add(a: FixedWidthInt, b: FixedWidthInt,
                  config: Optional[NumericsConfig] = None) -> FixedWidthInt:
    """Addition whose caller guarantees no overflow."""
    return _unchecked(add_reporting_overflow(a, b), "add", config)


def unchecked_subtract(a: FixedWidthInt, b: FixedWidthInt,
                       config: Optional[NumericsConfig] = None) -> FixedWidthInt:
    return _unchecked(subtract_reporting_overflow(a, b), "subtract", config)


def unchecked_multiply(a: FixedWidthInt, b: FixedWidthInt,
                       config: Optional[NumericsConfig] = None) -> FixedWidthInt:
    return _unchecked(multiply_reporting_overflow(a, b), "multiply", config)


# =============================================================================
# Full-Width Operations
# =============================================================================

def multiplied_full_width(a: FixedWidthInt, b: FixedWidthInt) -> FullWidthProduct:
    """
    The exact double-width product, split into halves.

    The high half has the operands' type, the low half is the unsigned
    type of the same width: product == high * 2**bits + low.
    """
    _check_types(a, b)
    product = a.value * b.value
    bits = a.type.bits
    low_type = a.type.counterpart() if a.type.signed else a.type
    return FullWidthProduct(
        high=FixedWidthInt(a.type, product >> bits),
        low=FixedWidthInt(low_type, product & a.type.mask),
    )


def divided_full_width(divisor: FixedWidthInt, dividend: FullWidthProduct) -> QuotientAndRemainder:
    """
    Divide a double-width dividend (high, low) by `divisor`.

    The quotient truncates toward zero and the remainder takes the sign of
    the dividend, as in divide() and remainder(). There is no reporting
    variant.

    Raises:
        DivisionByZeroError: If `divisor` is zero
        ArithmeticOverflowError: If the quotient does not fit the type
    """
    int_type = divisor.type
    high, low = dividend
    if high.type != int_type or low.type.bits != int_type.bits or low.type.signed:
        raise ConversionError(
            f"dividend halves must be '{int_type}' and its unsigned counterpart, "
            f"got '{high.type}' and '{low.type}'"
        )
    if divisor.value == 0:
        raise DivisionByZeroError("full-width division", int_type.name)

    combined = high.value << int_type.bits | low.value
    quotient = _truncating_divide(combined, divisor.value)
    if not int_type.contains(quotient):
        raise ArithmeticOverflowError("full-width division", int_type.name, "quotient does not fit")
    return QuotientAndRemainder(
        FixedWidthInt(int_type, quotient),
        FixedWidthInt(int_type, combined - quotient * divisor.value),
    )

# =============================================================================
# test_rounding.py - Correct Rounding Tests
# =============================================================================
# Tests for rounding exact rational values into a floating-point format.
#
# Test coverage includes:
#   - Round half to even at normal and subnormal precision
#   - Overflow to infinity, including ties at the top of the range
#   - Underflow to zero, including the half-subnormal tie
#   - Magnitude bounds for exponents far outside every format
# =============================================================================

from fractions import Fraction

from numlit.outcome import OutcomeKind
from numlit.rounding import ROUNDING_MODE, round_exact_float, round_fraction
from numlit.types import FLOAT32, FLOAT64
from numlit.values import BinaryFloat, ExactFloat


def float32_bits(value: Fraction) -> int:
    return round_fraction(value, FLOAT32).value.bits


class TestRoundHalfEven:
    """Tests for ties-to-even rounding."""

    def test_mode(self):
        """The rounding mode is fixed."""
        assert ROUNDING_MODE == "toNearestOrEven"

    def test_tie_rounds_down_to_even(self):
        """1 + 2**-24 is halfway; 1.0 has the even significand."""
        assert float32_bits(1 + Fraction(1, 2 ** 24)) == 0x3F800000

    def test_tie_rounds_up_to_even(self):
        """1 + 3 * 2**-24 is halfway; 1 + 2**-22 has the even significand."""
        assert float32_bits(1 + Fraction(3, 2 ** 24)) == 0x3F800002

    def test_above_tie_rounds_up(self):
        """Anything above halfway rounds up."""
        assert float32_bits(1 + Fraction(1, 2 ** 24) + Fraction(1, 2 ** 80)) == 0x3F800001

    def test_inexact_kind(self):
        """1/3 rounds to the nearest Double and is INEXACT."""
        outcome = round_fraction(Fraction(1, 3), FLOAT64)
        assert outcome.kind is OutcomeKind.INEXACT
        assert outcome.value.to_float() == 1 / 3

    def test_exact_kind(self):
        """Representable values are EXACT."""
        assert round_fraction(Fraction(3, 4), FLOAT32).is_exact

    def test_carry_into_exponent(self):
        """Rounding up the largest significand carries into the exponent."""
        value = 2 - Fraction(1, 2 ** 25)
        assert float32_bits(value) == 0x40000000


class TestRangeLimits:
    """Tests for overflow and underflow."""

    def test_overflow(self):
        """2**128 overflows Float."""
        outcome = round_fraction(Fraction(2) ** 128, FLOAT32)
        assert outcome.kind is OutcomeKind.OVERFLOW
        assert outcome.value == BinaryFloat.infinity(FLOAT32)

    def test_tie_at_top_overflows(self):
        """Halfway between the largest Float and 2**128 rounds to infinity."""
        halfway = (2 - Fraction(1, 2 ** 24)) * Fraction(2) ** 127
        assert round_fraction(halfway, FLOAT32).kind is OutcomeKind.OVERFLOW
        below = halfway - 1
        assert round_fraction(below, FLOAT32).value == BinaryFloat.largest_finite(FLOAT32)

    def test_underflow(self):
        """2**-200 underflows Float to zero."""
        outcome = round_fraction(Fraction(1, 2 ** 200), FLOAT32)
        assert outcome.kind is OutcomeKind.UNDERFLOW
        assert outcome.value.is_zero

    def test_half_smallest_subnormal(self):
        """2**-150 is a tie between 0 and 2**-149 and rounds to zero."""
        assert round_fraction(Fraction(1, 2 ** 150), FLOAT32).kind is OutcomeKind.UNDERFLOW
        above = round_fraction(Fraction(3, 2 ** 151), FLOAT32)
        assert above.kind is OutcomeKind.INEXACT
        assert above.value == BinaryFloat.smallest_subnormal(FLOAT32)

    def test_smallest_subnormal_exact(self):
        """2**-1074 is exactly the smallest Double subnormal."""
        outcome = round_fraction(Fraction(1, 2 ** 1074), FLOAT64)
        assert outcome.is_exact
        assert outcome.value == BinaryFloat.smallest_subnormal(FLOAT64)

    def test_negative_zero(self):
        """The sign override produces a negative zero."""
        outcome = round_fraction(Fraction(0), FLOAT64, negative=True)
        assert outcome.is_exact
        assert outcome.value.sign


class TestExactFloatRounding:
    """Tests for round_exact_float()."""

    def test_decimal(self):
        """Decimal digits and exponent."""
        assert round_exact_float(ExactFloat(False, 15, -1), FLOAT64).value.to_float() == 1.5

    def test_keeps_sign_of_zero(self):
        """A negative zero literal stays negative."""
        assert round_exact_float(ExactFloat(True, 0, 5), FLOAT64).value.sign

    def test_huge_exponents(self):
        """Exponents far outside the format are decided by the bounds."""
        assert round_exact_float(ExactFloat(False, 1, 10 ** 12), FLOAT64).kind is OutcomeKind.OVERFLOW
        assert round_exact_float(ExactFloat(True, 1, -10 ** 12), FLOAT64).kind is OutcomeKind.UNDERFLOW

    def test_near_bounds(self):
        """Values close to the range limits are rounded exactly."""
        assert round_exact_float(ExactFloat(False, 17976931348623157, 292), FLOAT64).value == \
            BinaryFloat.largest_finite(FLOAT64)
        assert round_exact_float(ExactFloat(False, 5, -324), FLOAT64).value == \
            BinaryFloat.smallest_subnormal(FLOAT64)

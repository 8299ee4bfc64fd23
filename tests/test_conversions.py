# =============================================================================
# test_conversions.py - Width Converter Tests
# =============================================================================
# Tests for conversions between integer widths and floating-point formats.
#
# Test coverage includes:
#   - Integer policies: exact, exact-or-none, clamping, truncating, bit-pattern
#   - The truncation identity for negative values into unsigned types
#   - Float narrowing with a single rounding step (no double rounding)
#   - NaN re-encoding and payload truncation
#   - Integer/float crossings and raw bit patterns
# =============================================================================

import math

import pytest

from numlit.convert import (
    ConversionPolicy,
    bit_pattern,
    clamping,
    convert_float,
    convert_float_outcome,
    convert_integer,
    exactly,
    exactly_or_none,
    float_bit_pattern,
    float_from_bit_pattern,
    float_to_int,
    int_to_float,
    integer_outcome,
    truncating,
)
from numlit.errors import ArithmeticOverflowError, ConversionError
from numlit.nan import make_nan, nan_payload
from numlit.outcome import OutcomeKind
from numlit.types import (
    FLOAT16, FLOAT32, FLOAT64, FLOAT80,
    INT8, INT16, INT32, INT64, UINT8, UINT16, UINT32, UINT64,
)
from numlit.values import BinaryFloat, FixedWidthInt


def double(value: float) -> BinaryFloat:
    return BinaryFloat.from_float(value)


# =============================================================================
# Integer to Integer
# =============================================================================

class TestExactIntegerConversion:
    """Tests for the exact and exact-or-none policies."""

    def test_exact_fits(self):
        """Representable values convert unchanged."""
        assert exactly(FixedWidthInt(INT16, -100), INT8).value == -100

    def test_exact_overflow_raises(self):
        """Unrepresentable values raise ArithmeticOverflowError."""
        with pytest.raises(ArithmeticOverflowError):
            exactly(FixedWidthInt(INT16, 300), INT8)
        with pytest.raises(ArithmeticOverflowError):
            exactly(FixedWidthInt(INT8, -1), UINT8)

    def test_exact_or_none(self):
        """Unrepresentable values give None."""
        assert exactly_or_none(FixedWidthInt(INT16, 300), INT8) is None
        assert exactly_or_none(FixedWidthInt(INT8, -1), UINT64) is None

    def test_exact_or_none_round_trip(self):
        """A successful conversion converts back to the original value."""
        for n in (-32768, -129, -128, -1, 0, 127, 128, 255, 32767):
            original = FixedWidthInt(INT16, n)
            narrowed = exactly_or_none(original, INT8)
            if narrowed is not None:
                assert exactly(narrowed, INT16) == original
            else:
                assert not INT8.contains(n)

    def test_outcome_kinds(self):
        """Out-of-range integers are OVERFLOW in both directions."""
        assert integer_outcome(FixedWidthInt(INT16, 300), INT8).kind is OutcomeKind.OVERFLOW
        assert integer_outcome(FixedWidthInt(INT16, -300), INT8).kind is OutcomeKind.OVERFLOW
        assert integer_outcome(FixedWidthInt(INT16, 3), INT8).is_exact


class TestClampingConversion:
    """Tests for the clamping policy."""

    def test_saturates(self):
        """Out-of-range values saturate to the target's bounds."""
        assert clamping(FixedWidthInt(INT16, 300), INT8).value == 127
        assert clamping(FixedWidthInt(INT16, -300), INT8).value == -128

    def test_negative_into_unsigned(self):
        """Negative values clamp to zero in unsigned types."""
        assert clamping(FixedWidthInt(INT32, -5), UINT16).value == 0

    def test_in_range_unchanged(self):
        """Representable values are not changed."""
        assert clamping(FixedWidthInt(UINT8, 200), INT16).value == 200


class TestTruncatingConversion:
    """Tests for the truncating policy."""

    def test_sign_extends_into_wider_unsigned(self):
        """Negative values keep their two's-complement pattern."""
        assert truncating(FixedWidthInt(INT8, -1), UINT16).value == 65535
        assert truncating(FixedWidthInt(INT8, -56), UINT32).value == 4294967240

    def test_truncation_identity(self):
        """truncating(s, U) == (U.max + 1) - truncating(-s, U) for s < 0."""
        for target in (UINT8, UINT16, UINT32, UINT64):
            for s in (-1, -2, -56, -100, -127):
                direct = truncating(FixedWidthInt(INT8, s), target).value
                negated = truncating(FixedWidthInt(INT8, -s), target).value
                assert direct == (target.max + 1) - negated

    def test_narrowing_keeps_low_bits(self):
        """Narrowing keeps the low bits, read with the target's sign."""
        assert truncating(FixedWidthInt(INT16, 300), INT8).value == 44
        assert truncating(FixedWidthInt(UINT8, 200), INT8).value == -56
        assert truncating(FixedWidthInt(INT64, -1), UINT8).value == 255


class TestBitPatternConversion:
    """Tests for the bit-pattern policy."""

    def test_reinterprets(self):
        """Same width, opposite signedness."""
        assert bit_pattern(FixedWidthInt(UINT8, 200), INT8).value == -56
        assert bit_pattern(FixedWidthInt(INT16, -1), UINT16).value == 65535

    def test_width_mismatch(self):
        """Different widths are not a bit-pattern conversion."""
        with pytest.raises(ConversionError):
            bit_pattern(FixedWidthInt(INT8, -1), UINT16)

    def test_same_signedness(self):
        """The target must have the opposite signedness."""
        with pytest.raises(ConversionError):
            bit_pattern(FixedWidthInt(INT8, 1), INT8)


class TestConvertInteger:
    """Tests for the policy dispatcher."""

    def test_dispatch(self):
        """convert_integer applies each policy."""
        value = FixedWidthInt(INT16, 300)
        assert convert_integer(value, INT8, ConversionPolicy.CLAMPING).value == 127
        assert convert_integer(value, INT8, ConversionPolicy.TRUNCATING).value == 44
        assert convert_integer(value, INT8, ConversionPolicy.EXACT_OR_NONE) is None
        assert convert_integer(FixedWidthInt(INT16, 3), INT8).value == 3

    def test_policy_text(self):
        """Policies print as their command-line names."""
        assert str(ConversionPolicy.EXACT_OR_NONE) == "exact-or-none"
        assert str(ConversionPolicy.BIT_PATTERN) == "bit-pattern"


# =============================================================================
# Float to Float
# =============================================================================

class TestFloatNarrowing:
    """Tests for rounding between floating-point formats."""

    def test_exact_values_convert_exactly(self):
        """Representable values keep their value."""
        outcome = convert_float_outcome(double(0.5), FLOAT32)
        assert outcome.is_exact
        assert outcome.value.to_float() == 0.5

    def test_rounds_to_nearest(self):
        """0.1 rounds to the nearest Float."""
        assert convert_float(double(0.1), FLOAT32).bits == 0x3DCCCCCD
        assert BinaryFloat.from_float(0.1, FLOAT32).bits == 0x3DCCCCCD

    def test_no_double_rounding(self):
        """
        Float80 1 + 2**-24 + 2**-60 to Float rounds up. Going through Double
        first drops 2**-60 and leaves a tie that rounds down to 1.0.
        """
        x = BinaryFloat(FLOAT80, False, FLOAT80.bias, (1 << 39) | (1 << 3))
        assert convert_float(x, FLOAT32).bits == 0x3F800001
        via_double = convert_float(convert_float(x, FLOAT64), FLOAT32)
        assert via_double.bits == 0x3F800000

    def test_overflow_gives_infinity(self):
        """Too-large values become infinities under the exact policy."""
        outcome = convert_float_outcome(double(-1e300), FLOAT32)
        assert outcome.kind is OutcomeKind.OVERFLOW
        assert outcome.value == BinaryFloat.infinity(FLOAT32, negative=True)

    def test_underflow_gives_zero(self):
        """Too-small values become zeros, keeping the sign."""
        outcome = convert_float_outcome(double(-1e-300), FLOAT32)
        assert outcome.kind is OutcomeKind.UNDERFLOW
        assert outcome.value == BinaryFloat.zero(FLOAT32, negative=True)

    def test_subnormal_result(self):
        """Results below the normal range become subnormals."""
        value = convert_float(double(2.0 ** -20), FLOAT16)
        assert value.is_subnormal
        assert value.to_float() == 2.0 ** -20

    def test_widening_is_exact(self):
        """Every Float is exactly representable in Double and Float80."""
        value = BinaryFloat.largest_finite(FLOAT32)
        assert convert_float_outcome(value, FLOAT64).is_exact
        assert convert_float_outcome(value, FLOAT80).is_exact

    def test_zeros_and_infinities(self):
        """Zeros and infinities keep their sign."""
        assert convert_float(double(-0.0), FLOAT16) == BinaryFloat.zero(FLOAT16, negative=True)
        assert convert_float(double(-math.inf), FLOAT80) == BinaryFloat.infinity(FLOAT80, negative=True)


class TestFloatPolicies:
    """Tests for the policies on float-to-float conversion."""

    def test_exact_or_none(self):
        """Only exact conversions succeed."""
        assert convert_float(double(0.1), FLOAT32, ConversionPolicy.EXACT_OR_NONE) is None
        assert convert_float(double(1e300), FLOAT32, ConversionPolicy.EXACT_OR_NONE) is None
        assert convert_float(double(0.5), FLOAT32, ConversionPolicy.EXACT_OR_NONE).to_float() == 0.5

    def test_exact_or_none_underflow(self):
        """A nonzero value that would round to zero gives None."""
        assert convert_float(double(1e-300), FLOAT32, ConversionPolicy.EXACT_OR_NONE) is None
        assert convert_float(double(-1e-300), FLOAT32, ConversionPolicy.EXACT_OR_NONE) is None

    def test_exact_or_none_round_trip(self):
        """
        Whenever exact-or-none succeeds, converting back gives the same
        bits: Float -> Double -> Float and Float16 -> Float80 -> Float16.
        """
        for narrow, wide in ((FLOAT32, FLOAT64), (FLOAT16, FLOAT80)):
            values = [
                BinaryFloat.one(narrow),
                BinaryFloat.one(narrow, negative=True),
                BinaryFloat.largest_finite(narrow),
                BinaryFloat.largest_finite(narrow, negative=True),
                BinaryFloat.smallest_normal(narrow),
                BinaryFloat.smallest_subnormal(narrow),
                BinaryFloat.smallest_subnormal(narrow, negative=True),
                BinaryFloat.smallest_normal(narrow).next_down(),
                BinaryFloat.zero(narrow),
                BinaryFloat.zero(narrow, negative=True),
                BinaryFloat.infinity(narrow),
                BinaryFloat.infinity(narrow, negative=True),
                BinaryFloat.from_bits(narrow, 0x3123 if narrow is FLOAT16 else 0x3DCCCCCD),
            ]
            for value in values:
                widened = convert_float(value, wide, ConversionPolicy.EXACT_OR_NONE)
                assert widened is not None, repr(value)
                back = convert_float(widened, narrow, ConversionPolicy.EXACT_OR_NONE)
                assert back is not None and back.bits == value.bits, repr(value)

    def test_exact_or_none_round_trip_when_narrowing(self):
        """Narrowing that succeeds widens back to the original bits."""
        for source in (0.5, -0.0, 1e-40, 0.1, 1e300, 1e-300, 2.0 ** -149, math.inf):
            value = double(source)
            narrowed = convert_float(value, FLOAT32, ConversionPolicy.EXACT_OR_NONE)
            if narrowed is not None:
                back = convert_float(narrowed, FLOAT64, ConversionPolicy.EXACT_OR_NONE)
                assert back.bits == value.bits, source
        assert convert_float(double(2.0 ** -149), FLOAT32, ConversionPolicy.EXACT_OR_NONE).is_subnormal

    def test_exact_or_none_rejects_nan(self):
        """A NaN is never an exact conversion."""
        assert convert_float(double(math.nan), FLOAT32, ConversionPolicy.EXACT_OR_NONE) is None

    def test_clamping_saturates(self):
        """Clamping saturates overflow and infinities to the largest finite."""
        largest = BinaryFloat.largest_finite(FLOAT32)
        assert convert_float(double(1e300), FLOAT32, ConversionPolicy.CLAMPING) == largest
        assert convert_float(double(math.inf), FLOAT32, ConversionPolicy.CLAMPING) == largest
        assert convert_float(double(-math.inf), FLOAT32, ConversionPolicy.CLAMPING) == largest.negate()

    def test_clamping_in_range(self):
        """In-range values round as under the exact policy."""
        assert convert_float(double(0.1), FLOAT32, ConversionPolicy.CLAMPING).bits == 0x3DCCCCCD

    def test_undefined_policies(self):
        """Truncating and bit-pattern are not defined between formats."""
        with pytest.raises(ConversionError):
            convert_float(double(1.0), FLOAT32, ConversionPolicy.TRUNCATING)
        with pytest.raises(ConversionError):
            convert_float(double(1.0), FLOAT32, ConversionPolicy.BIT_PATTERN)


class TestNaNConversion:
    """Tests for NaN re-encoding."""

    def test_payload_kept(self):
        """The payload and sign survive when they fit."""
        nan = make_nan(FLOAT64, payload=0x7F, negative=True)
        converted = convert_float(nan, FLOAT32)
        assert converted.is_quiet_nan
        assert converted.sign
        assert nan_payload(converted).payload == 0x7F

    def test_signaling_becomes_quiet(self):
        """Conversion quiets a signaling NaN."""
        snan = make_nan(FLOAT64, payload=3, signaling=True)
        converted = convert_float(snan, FLOAT80)
        assert converted.is_quiet_nan
        assert nan_payload(converted).payload == 3

    def test_payload_truncated(self):
        """Payload bits beyond the target width are dropped."""
        nan = make_nan(FLOAT64, payload=FLOAT64.max_payload)
        assert nan_payload(convert_float(nan, FLOAT32)).payload == FLOAT32.max_payload

    def test_outcome_is_inexact(self):
        """NaN conversions report INEXACT."""
        assert convert_float_outcome(double(math.nan), FLOAT16).kind is OutcomeKind.INEXACT


# =============================================================================
# Integer / Float Crossings
# =============================================================================

class TestIntToFloat:
    """Tests for int_to_float()."""

    def test_exact(self):
        """Small integers convert exactly."""
        assert int_to_float(FixedWidthInt(INT32, -7), FLOAT32).to_float() == -7.0

    def test_rounds_ties_to_even(self):
        """2**53 + 1 rounds to 2**53 in Double."""
        value = FixedWidthInt(INT64, 2 ** 53 + 1)
        assert int_to_float(value, FLOAT64).to_float() == 2.0 ** 53
        assert int_to_float(FixedWidthInt(INT32, 16777217), FLOAT32).to_float() == 16777216.0

    def test_exact_or_none(self):
        """Inexact conversions give None."""
        value = FixedWidthInt(INT64, 2 ** 53 + 1)
        assert int_to_float(value, FLOAT64, ConversionPolicy.EXACT_OR_NONE) is None
        assert int_to_float(FixedWidthInt(INT8, 3), FLOAT16, ConversionPolicy.EXACT_OR_NONE).to_float() == 3.0

    def test_overflow_to_infinity(self):
        """UInt64.max overflows Float16."""
        assert int_to_float(FixedWidthInt(UINT64, UINT64.max), FLOAT16).is_infinite

    def test_zero_is_positive(self):
        """Integer zero becomes positive zero."""
        assert int_to_float(FixedWidthInt(INT8, 0), FLOAT64).sign is False

    def test_undefined_policy(self):
        """Clamping is not defined from integers to floats."""
        with pytest.raises(ConversionError):
            int_to_float(FixedWidthInt(INT8, 1), FLOAT64, ConversionPolicy.CLAMPING)


class TestFloatToInt:
    """Tests for float_to_int()."""

    def test_truncates_toward_zero(self):
        """Fractions are dropped toward zero."""
        assert float_to_int(double(3.9), INT8).value == 3
        assert float_to_int(double(-3.9), INT8).value == -3

    def test_exact_out_of_range(self):
        """Out-of-range values raise under the exact policy."""
        with pytest.raises(ArithmeticOverflowError):
            float_to_int(double(300.0), INT8)
        with pytest.raises(ArithmeticOverflowError):
            float_to_int(double(-1.0), UINT8)

    def test_exact_non_finite(self):
        """NaN and infinities raise under the exact policy."""
        with pytest.raises(ArithmeticOverflowError):
            float_to_int(double(math.nan), INT64)
        with pytest.raises(ArithmeticOverflowError):
            float_to_int(double(math.inf), INT64)

    def test_exact_or_none(self):
        """Any lost fraction or range gives None."""
        policy = ConversionPolicy.EXACT_OR_NONE
        assert float_to_int(double(3.5), INT8, policy) is None
        assert float_to_int(double(300.0), INT8, policy) is None
        assert float_to_int(double(math.nan), INT8, policy) is None
        assert float_to_int(double(3.0), INT8, policy).value == 3

    def test_clamping(self):
        """Clamping saturates, infinities included, but NaN raises."""
        policy = ConversionPolicy.CLAMPING
        assert float_to_int(double(300.0), INT8, policy).value == 127
        assert float_to_int(double(-math.inf), INT8, policy).value == -128
        assert float_to_int(double(-5.5), UINT8, policy).value == 0
        with pytest.raises(ConversionError):
            float_to_int(double(math.nan), INT8, policy)


class TestFloatBitPatterns:
    """Tests for raw bit reinterpretation."""

    def test_to_bits(self):
        """float_bit_pattern gives the unsigned encoding."""
        pattern = float_bit_pattern(double(1.0))
        assert pattern.type == UINT64
        assert pattern.value == 0x3FF0000000000000

    def test_from_bits(self):
        """float_from_bit_pattern decodes an integer's bits."""
        value = float_from_bit_pattern(FixedWidthInt(UINT32, 0x3F800000), FLOAT32)
        assert value == BinaryFloat.one(FLOAT32)
        negative = float_from_bit_pattern(FixedWidthInt(INT16, -1), FLOAT16)
        assert negative.is_nan and negative.sign

    def test_width_mismatch(self):
        """The integer width must match the format."""
        with pytest.raises(ConversionError):
            float_from_bit_pattern(FixedWidthInt(UINT16, 0), FLOAT32)

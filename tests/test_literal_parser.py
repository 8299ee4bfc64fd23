# =============================================================================
# test_literal_parser.py - Numeric Literal Parser Tests
# =============================================================================
# Tests for the source-code literal grammar.
#
# Test coverage includes:
#   - Integer formats: decimal, binary (0b), octal (0o), hexadecimal (0x)
#   - '_' separators
#   - Decimal and hexadecimal floating-point literals
#   - Storing literals into fixed-width types, with overflow
#   - Correct single-step rounding into each float format
#   - Error conditions and error locations
# =============================================================================

import logging

import pytest

from numlit.errors import (
    ConversionError,
    LiteralOverflowError,
    LiteralSyntaxError,
    NumlitError,
)
from numlit.parsing.literal import (
    LiteralParser,
    float_literal,
    integer_literal,
    parse_float_literal,
    parse_integer_literal,
    parse_literal,
)
from numlit.types import FLOAT16, FLOAT32, FLOAT64, FLOAT80, INT8, INT32, INT64, UINT16, UINT128
from numlit.values import ExactFloat, ExactInteger


# =============================================================================
# Helper Function
# =============================================================================

def syntax_error(text: str) -> LiteralSyntaxError:
    """Parse `text`, expecting a syntax error, and return the error."""
    with pytest.raises(LiteralSyntaxError) as exc_info:
        parse_literal(text)
    return exc_info.value


# =============================================================================
# Integer Literal Tests
# =============================================================================

class TestIntegerLiterals:
    """Test the integer literal formats."""

    def test_decimal(self):
        """Plain decimal integer."""
        assert parse_literal("42") == ExactInteger(False, 42, 10)

    def test_negative(self):
        """A leading '-' is part of the literal."""
        assert parse_literal("-42").value == -42

    def test_leading_zeros_are_decimal(self):
        """0177 is decimal, not octal."""
        assert parse_literal("0177").value == 177

    def test_binary(self):
        """0b prefix."""
        assert parse_literal("0b1010").value == 10

    def test_octal(self):
        """0o prefix."""
        assert parse_literal("0o177").value == 127

    def test_hexadecimal(self):
        """0x prefix, digits in either case."""
        assert parse_literal("0x7f").value == 127
        assert parse_literal("0x7F").value == 127
        assert parse_literal("0x1e5").value == 0x1E5

    def test_radix_recorded(self):
        """The radix the literal was written in is kept."""
        assert parse_literal("0b11").radix == 2
        assert parse_literal("0o17").radix == 8
        assert parse_literal("0xff").radix == 16

    def test_parse_integer_rejects_float(self):
        """parse_integer_literal requires an integer literal."""
        with pytest.raises(LiteralSyntaxError):
            parse_integer_literal("1.5")
        assert parse_integer_literal("15").value == 15


class TestSeparators:
    """Test '_' digit separators."""

    def test_separators_ignored(self):
        """Removing every '_' does not change the value."""
        for text in ("1_000_000", "0xFF_FF", "0b1010_1010", "0o7_7", "1_0.2_5e1_0"):
            assert parse_literal(text) == parse_literal(text.replace("_", ""))

    def test_separator_values(self):
        """Separated literals store their full value."""
        assert integer_literal("1_000_000", INT32).value == 1000000
        assert integer_literal("0xFF_FF", UINT16).value == 65535
        assert float_literal("1_000.5", FLOAT64).to_float() == 1000.5

    def test_separator_cannot_start_digits(self):
        """A '_' cannot be the first character of a digit run."""
        syntax_error("_1")
        syntax_error("0x_1")
        syntax_error("1e_5")

    def test_consecutive_separators(self):
        """Several '_' in a row are allowed after a digit."""
        assert parse_literal("1__0").value == 10


# =============================================================================
# Storing Integer Literals
# =============================================================================

class TestIntegerLiteralStorage:
    """Test integer_literal() range checking."""

    def test_fits(self):
        """Literals at the edges of the range fit."""
        assert integer_literal("127", INT8).value == 127
        assert integer_literal("-128", INT8).value == -128
        assert integer_literal("-0x80", INT8).value == -128

    def test_overflow(self):
        """A literal outside the range raises LiteralOverflowError."""
        with pytest.raises(LiteralOverflowError) as exc_info:
            integer_literal("128", INT8)
        assert isinstance(exc_info.value, OverflowError)
        assert exc_info.value.value == 128
        assert "Int8" in str(exc_info.value)

    def test_negative_into_unsigned(self):
        """A negative literal does not fit an unsigned type."""
        with pytest.raises(LiteralOverflowError):
            integer_literal("-1", UINT16)

    def test_wide_types(self):
        """128-bit literals keep every bit."""
        text = "0x" + "f" * 32
        assert integer_literal(text, UINT128).value == 2 ** 128 - 1

    def test_float_literal_into_integer(self):
        """A floating-point literal cannot initialize an integer type."""
        with pytest.raises(ConversionError):
            integer_literal("1.5", INT64)

    def test_minus_zero_integer(self):
        """An integer literal has no negative zero."""
        assert integer_literal("-0", INT8).value == 0


# =============================================================================
# Floating-Point Literal Tests
# =============================================================================

class TestFloatLiterals:
    """Test decimal and hexadecimal floating-point literals."""

    def test_decimal_exact_value(self):
        """Decimal literals keep every digit."""
        assert parse_literal("1.25") == ExactFloat(False, 125, -2, 10)
        assert parse_literal("1e10").as_fraction() == 10 ** 10
        assert parse_literal("25E-1").as_fraction() == 2.5

    def test_hexadecimal_exact_value(self):
        """Hexadecimal floats are stored with radix 2."""
        assert parse_literal("0x1.8p-1") == ExactFloat(False, 24, -5, 2)

    def test_hexadecimal_values(self):
        """Hexadecimal floats round into Double exactly."""
        assert float_literal("0x1.8p-1", FLOAT64).to_float() == 0.75
        assert float_literal("0xf.fffp-3", FLOAT64).to_float() == 1.999969482421875
        assert float_literal("0x1P4", FLOAT64).to_float() == 16.0
        assert float_literal("0x1p+4", FLOAT64).to_float() == 16.0

    def test_negative_zero(self):
        """A float literal keeps the sign of zero, an integer one does not."""
        assert float_literal("-0.0", FLOAT64).sign is True
        assert float_literal("-0", FLOAT64).sign is False

    def test_integer_literal_as_float(self):
        """Integer literals may initialize a float."""
        assert float_literal("0x10", FLOAT32).to_float() == 16.0

    def test_parse_float_rejects_integer(self):
        """parse_float_literal requires a floating-point literal."""
        with pytest.raises(LiteralSyntaxError) as exc_info:
            parse_float_literal("15")
        assert "fractional part" in str(exc_info.value)


class TestFloatLiteralRounding:
    """Test rounding of literals into each format."""

    def test_decimal_rounds_to_nearest(self):
        """0.1 rounds to the nearest Float and Double."""
        assert float_literal("0.1", FLOAT32).bits == 0x3DCCCCCD
        assert float_literal("0.1", FLOAT64).to_float() == 0.1

    def test_single_rounding_step(self):
        """
        1 + 2**-24 + 1e-30 must round up in Float. Rounding through Double
        first would lose the 1e-30 and leave a tie that rounds to 1.0.
        """
        value = float_literal("1.000000059604644775390625000001", FLOAT32)
        assert value.bits == 0x3F800001

    def test_exact_tie_rounds_to_even(self):
        """1 + 2**-24 is a tie in Float and rounds to 1.0."""
        assert float_literal("1.000000059604644775390625", FLOAT32).bits == 0x3F800000

    def test_overflow_gives_infinity(self):
        """Literals too large for the format round to infinity."""
        assert float_literal("1e400", FLOAT64).is_infinite
        assert float_literal("-1e39", FLOAT32).to_hex_string() == "-inf"
        assert float_literal("65520", FLOAT16).is_infinite
        assert float_literal("1e400", FLOAT80).is_finite

    def test_overflow_logs_warning(self, caplog):
        """Rounding a literal to infinity is reported at WARNING level."""
        with caplog.at_level(logging.WARNING, logger="numlit.parsing.literal"):
            float_literal("1e400", FLOAT64)
        assert any(
            record.levelno == logging.WARNING and "overflows Double" in record.getMessage()
            for record in caplog.records
        )

    def test_inexact_literal_does_not_warn(self, caplog):
        """Ordinary rounding stays at DEBUG level."""
        with caplog.at_level(logging.WARNING, logger="numlit.parsing.literal"):
            float_literal("0.1", FLOAT64)
        assert not caplog.records

    def test_underflow_gives_zero(self):
        """Literals too small for the format round to zero."""
        value = float_literal("-1e-400", FLOAT64)
        assert value.is_zero and value.sign

    def test_long_digit_runs(self):
        """Thousands of digits are accepted and rounded once."""
        text = "1" + "0" * 5000 + "e-5000"
        assert float_literal(text, FLOAT64).to_float() == 1.0

    def test_huge_exponents(self):
        """Exponents beyond any format's range are decided without overflow."""
        assert float_literal("1e99999999999999999999", FLOAT64).is_infinite
        assert float_literal("1e-99999999999999999999", FLOAT64).is_zero


# =============================================================================
# Error Conditions
# =============================================================================

class TestLiteralErrors:
    """Test rejection of malformed literals."""

    def test_leading_dot(self):
        """'.5' is not a literal."""
        error = syntax_error(".5")
        assert error.location.column == 1
        assert "0.5" in error.hint

    def test_trailing_dot(self):
        """'5.' is not a literal."""
        error = syntax_error("5.")
        assert error.location.column == 3

    def test_hex_trailing_dot(self):
        """'0x1.' is not a literal."""
        syntax_error("0x1.")

    def test_hex_float_requires_exponent(self):
        """A hexadecimal float needs its 'p' exponent."""
        error = syntax_error("0x1.8")
        assert "requires an exponent" in error.message
        assert error.location.column == 6

    def test_uppercase_prefix(self):
        """Base prefixes are lowercase."""
        error = syntax_error("0X1F")
        assert "invalid base prefix" in error.message

    def test_plus_sign(self):
        """'+' is not part of a literal."""
        syntax_error("+1")

    def test_empty_and_whitespace(self):
        """The whole text must be one literal."""
        syntax_error("")
        syntax_error("-")
        syntax_error(" 1")
        syntax_error("1 ")

    def test_invalid_digits(self):
        """Digits outside the radix are errors."""
        assert "binary" in syntax_error("0b102").message
        assert "octal" in syntax_error("0o8").message
        assert "decimal" in syntax_error("12a").message
        syntax_error("0x")
        syntax_error("0xg")

    def test_missing_exponent_digits(self):
        """An exponent marker needs digits."""
        syntax_error("1e")
        syntax_error("1e+")
        syntax_error("0x1p")

    def test_error_message_format(self):
        """The message shows location, the literal, a caret and the hint."""
        error = syntax_error("0x1.8")
        lines = str(error).splitlines()
        assert lines[0] == "<literal>:1:6: error: hexadecimal floating-point literal requires an exponent"
        assert lines[1] == "    0x1.8"
        assert lines[2] == "         ^"
        assert lines[3] == "hint: add a binary exponent such as 'p0'"

    def test_filename_in_location(self):
        """The filename given to the parser appears in the location."""
        with pytest.raises(LiteralSyntaxError) as exc_info:
            LiteralParser("1.", filename="config.txt").parse()
        assert str(exc_info.value).startswith("config.txt:1:3:")

    def test_errors_share_base_class(self):
        """Syntax errors are NumlitErrors and ValueErrors."""
        error = syntax_error("abc")
        assert isinstance(error, NumlitError)
        assert isinstance(error, ValueError)

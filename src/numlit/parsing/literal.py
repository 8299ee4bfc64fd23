"""
Numeric Literal Parser
======================

This module parses the text of a numeric literal, as it would appear in
source code, into an exact intermediate value (ExactInteger or
ExactFloat). Nothing is rounded or narrowed here; integer_literal() and
float_literal() then produce a typed value from the exact one.

Integer Literals
----------------
| Format      | Prefix | Example     | Value |
|-------------|--------|-------------|-------|
| Decimal     | (none) | 1_000       | 1000  |
| Binary      | 0b     | 0b1010      | 10    |
| Octal       | 0o     | 0o177       | 127   |
| Hexadecimal | 0x     | 0x7F        | 127   |

- Leading zeros do not mean octal: 0177 is one hundred seventy-seven.
- '_' may follow any digit and is ignored: 1_000_000, 0xFF_FF.
- A leading '-' is part of the literal token. This is what lets "-128" be
  stored into Int8 although 128 alone does not fit.
- Prefixes are lowercase; "0X1F" is rejected.

Floating-Point Literals
-----------------------
Decimal:      digits ['.' digits] [('e'|'E') ['+'|'-'] digits]
Hexadecimal:  '0x' hexdigits ['.' hexdigits] ('p'|'P') ['+'|'-'] digits

- There must be digits on both sides of a '.': ".5" and "5." are errors.
- A hexadecimal float must have its binary exponent: "0x1.8" is an error,
  "0x1.8p0" is 1.5.
- Exponent digits are always decimal.
- A floating-point literal keeps the sign of zero ("-0.0" is negative
  zero); an integer literal does not ("-0" is plain zero).

Example Usage
-------------
>>> from numlit.parsing.literal import parse_literal, float_literal
>>> parse_literal("0x1.8p-1")
ExactFloat(negative=False, digits=24, exponent=-5, radix=2)
>>> float_literal("0x1.8p-1", FLOAT64).to_float()
0.75
"""

import logging
import string
from typing import Optional, Union

from numlit.errors import (
    ConversionError,
    LiteralOverflowError,
    LiteralSyntaxError,
    SourceLocation,
)
from numlit.outcome import OutcomeKind
from numlit.parsing.digits import digits_to_int, exponent_to_int
from numlit.rounding import round_exact, round_exact_float
from numlit.types import FloatFormat, IntType
from numlit.values import BinaryFloat, ExactFloat, ExactInteger, FixedWidthInt

logger = logging.getLogger(__name__)

ExactValue = Union[ExactInteger, ExactFloat]


class LiteralParser:
    """
    Parses one numeric literal.

    The whole text must be a single literal: surrounding whitespace or any
    trailing character is an error. Errors carry the column of the
    offending character.

    Usage:
        parser = LiteralParser("0x1.8p-1")
        value = parser.parse()

    Attributes:
        text: The literal text being parsed
        filename: Name used in error locations
    """

    DIGIT_SETS = {
        2: "01",
        8: string.octdigits,
        10: string.digits,
        16: string.hexdigits,
    }

    RADIX_NAMES = {2: "binary", 8: "octal", 10: "decimal", 16: "hexadecimal"}

    PREFIXES = {"b": 2, "o": 8, "x": 16}

    def __init__(self, text: str, filename: str = "<literal>"):
        self.text = text
        self.filename = filename
        self._pos = 0

    # =========================================================================
    # Public Entry Points
    # =========================================================================

    def parse(self) -> ExactValue:
        """
        Parse the literal.

        Returns:
            ExactInteger for integer literals, ExactFloat for float literals

        Raises:
            LiteralSyntaxError: If the text is not a valid literal
        """
        self._pos = 0
        if not self.text:
            raise self._error("expected a numeric literal")

        negative = self._match("-")
        first = self._peek()

        if first == "":
            raise self._error("expected digits after '-'")
        if first == ".":
            raise self._error("a literal cannot begin with '.'", hint="write a leading zero, as in '0.5'")
        if first == "+":
            raise self._error("a literal cannot begin with '+'", hint="only '-' is part of a numeric literal")
        if first not in string.digits:
            raise self._error(f"unexpected character {first!r} in numeric literal")

        if first == "0" and self._peek(1) in self.PREFIXES:
            self._advance()
            radix = self.PREFIXES[self._advance()]
            if radix == 16:
                value = self._scan_hexadecimal(negative)
            else:
                digits = self._scan_digits(radix)
                self._check_no_invalid_digit(radix, "")
                value = ExactInteger(negative, digits_to_int(digits, radix), radix)
        elif first == "0" and self._peek(1) in ("B", "O", "X"):
            self._advance()
            raise self._error(
                f"invalid base prefix '0{self._peek()}'",
                hint=f"base prefixes are lowercase: '0{self._peek().lower()}'",
            )
        else:
            value = self._scan_decimal(negative)

        if not self._at_end():
            raise self._error(f"unexpected character {self._peek()!r} after numeric literal")
        return value

    def parse_integer(self) -> ExactInteger:
        """Parse the literal, requiring an integer literal."""
        value = self.parse()
        if not isinstance(value, ExactInteger):
            raise LiteralSyntaxError(
                "expected an integer literal, found a floating-point literal",
                SourceLocation(self.filename, 1, 1),
                source_line=self.text,
            )
        return value

    def parse_float(self) -> ExactFloat:
        """Parse the literal, requiring a floating-point literal."""
        value = self.parse()
        if not isinstance(value, ExactFloat):
            raise LiteralSyntaxError(
                "expected a floating-point literal, found an integer literal",
                SourceLocation(self.filename, 1, 1),
                source_line=self.text,
                hint="add a fractional part or an exponent",
            )
        return value

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.text)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or "" past the end."""
        pos = self._pos + offset
        if pos >= len(self.text):
            return ""
        return self.text[pos]

    def _advance(self) -> str:
        if self._at_end():
            return ""
        char = self.text[self._pos]
        self._pos += 1
        return char

    def _match(self, expected: str) -> bool:
        if self._peek() == expected:
            self._advance()
            return True
        return False

    def _error(self, message: str, hint: Optional[str] = None) -> LiteralSyntaxError:
        """Create a syntax error located at the current character."""
        location = SourceLocation(self.filename, 1, self._pos + 1)
        logger.debug(f"Rejected literal {self.text!r}: {message}")
        return LiteralSyntaxError(message, location, hint=hint, source_line=self.text)

    # =========================================================================
    # Digit Runs
    # =========================================================================

    def _scan_digits(self, radix: int, what: Optional[str] = None) -> str:
        """
        Scan a run of digits of `radix`, dropping '_' separators.

        The run must start with a digit. A letter or digit that is not valid
        for the radix right after the run is reported as an invalid digit
        rather than as trailing garbage.
        """
        digits = self.DIGIT_SETS[radix]
        name = self.RADIX_NAMES[radix]

        if self._peek() == "" or self._peek() not in digits:
            if self._peek() == "_":
                raise self._error(f"'_' cannot begin a {what or name + ' digit'} run")
            raise self._error(f"expected {what or name + ' digits'}")

        chars = []
        while self._peek() and (self._peek() in digits or self._peek() == "_"):
            char = self._advance()
            if char != "_":
                chars.append(char)
        return "".join(chars)

    def _check_no_invalid_digit(self, radix: int, allowed: str) -> None:
        char = self._peek()
        if char and char.isalnum() and char not in allowed:
            raise self._error(f"invalid digit {char!r} in {self.RADIX_NAMES[radix]} literal")

    def _scan_exponent(self) -> int:
        """Scan an exponent's optional sign and decimal digits."""
        exponent_negative = False
        if self._peek() in ("+", "-"):
            exponent_negative = self._advance() == "-"
        return exponent_to_int(self._scan_digits(10, what="exponent digits"), exponent_negative)

    # =========================================================================
    # Literal Forms
    # =========================================================================

    def _scan_decimal(self, negative: bool) -> ExactValue:
        whole = self._scan_digits(10)
        fraction = ""
        is_float = False

        if self._peek() == ".":
            self._advance()
            if self._peek() == "" or self._peek() not in string.digits:
                raise self._error(
                    "expected digits after '.'",
                    hint="a literal cannot end with '.'; write a digit after it, as in '5.0'",
                )
            fraction = self._scan_digits(10)
            is_float = True

        exponent = 0
        if self._peek() in ("e", "E"):
            self._advance()
            exponent = self._scan_exponent()
            is_float = True

        self._check_no_invalid_digit(10, "")

        if not is_float:
            return ExactInteger(negative, digits_to_int(whole), 10)
        return ExactFloat(negative, digits_to_int(whole + fraction), exponent - len(fraction), 10)

    def _scan_hexadecimal(self, negative: bool) -> ExactValue:
        whole = self._scan_digits(16)
        fraction = ""
        has_fraction = False

        if self._peek() == ".":
            self._advance()
            if self._peek() == "" or self._peek() not in string.hexdigits:
                raise self._error(
                    "expected hexadecimal digits after '.'",
                    hint="a hexadecimal literal cannot end with '.'",
                )
            fraction = self._scan_digits(16)
            has_fraction = True

        if self._peek() in ("p", "P"):
            self._advance()
            exponent = self._scan_exponent()
            self._check_no_invalid_digit(10, "")
            digits = digits_to_int(whole + fraction, 16)
            return ExactFloat(negative, digits, exponent - 4 * len(fraction), 2)

        if has_fraction:
            raise self._error(
                "hexadecimal floating-point literal requires an exponent",
                hint="add a binary exponent such as 'p0'",
            )

        self._check_no_invalid_digit(16, "")
        return ExactInteger(negative, digits_to_int(whole, 16), 16)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_literal(text: str, filename: str = "<literal>") -> ExactValue:
    """Parse an integer or floating-point literal into its exact value."""
    return LiteralParser(text, filename).parse()


def parse_integer_literal(text: str, filename: str = "<literal>") -> ExactInteger:
    return LiteralParser(text, filename).parse_integer()


def parse_float_literal(text: str, filename: str = "<literal>") -> ExactFloat:
    return LiteralParser(text, filename).parse_float()


def integer_literal(text: str, int_type: IntType) -> FixedWidthInt:
    """
    Parse an integer literal and store it into `int_type`.

    Raises:
        LiteralSyntaxError: If the text is not a valid literal
        ConversionError: If the text is a floating-point literal
        LiteralOverflowError: If the value does not fit `int_type`
    """
    value = parse_literal(text)
    if isinstance(value, ExactFloat):
        raise ConversionError(
            f"floating-point literal '{text}' cannot initialize integer type '{int_type}'"
        )
    if not int_type.contains(value.value):
        raise LiteralOverflowError(text, int_type.name, value.value)
    return FixedWidthInt(int_type, value.value)


def float_literal(text: str, fmt: FloatFormat) -> BinaryFloat:
    """
    Parse a literal and round it once into `fmt`.

    Integer literals are accepted; "-0" gives positive zero. A literal too
    large for the format becomes an infinity and logs a warning; one too
    small becomes zero.
    """
    value = parse_literal(text)
    if isinstance(value, ExactInteger):
        outcome = round_exact(value.value < 0, value.magnitude, 1, fmt)
    else:
        outcome = round_exact_float(value, fmt)

    if outcome.kind is OutcomeKind.OVERFLOW:
        logger.warning(f"Literal {text!r} overflows {fmt}; stored as {outcome.value.to_hex_string()}")
    elif not outcome.is_exact:
        logger.debug(f"Literal {text!r} stored into {fmt} as {outcome.kind.name.lower()}")
    return outcome.value

"""
Runtime String-to-Float Parser
==============================

Parses strings received at run time (user input, files) into a
BinaryFloat. The grammar is more permissive than the literal grammar, but
the parse is all-or-nothing: any character that does not fit invalidates
the whole string, including incidental whitespace.

Accepted Forms
--------------
| Form                 | Examples                          |
|----------------------|-----------------------------------|
| decimal              | 1.5, .5, 5., 1e10, -0, +2.5E-3    |
| hexadecimal          | 0x1.8p-1, 0x1., 0x.1p2, 0X1P4, 0xff |
| infinity             | inf, -Infinity, INF               |
| quiet NaN            | nan, -NaN, nan(123), nan(0x7f)    |
| signaling NaN        | snan, sNaN(017)                   |

- Digits on either side of the '.' are optional, but at least one digit
  is required.
- The binary exponent of a hexadecimal string is optional.
- '-0' is negative zero.
- '_' separators are not accepted.

NaN Payloads
------------
The parenthesised payload uses its own radix rule:

| Payload text | Radix | Value |
|--------------|-------|-------|
| 123          | 10    | 123   |
| 0123         | 8     | 83    |
| 0x123        | 16    | 291   |

Payload bits that do not fit the format are dropped.

Failures
--------
Results that do not fit the format are failures, not infinities or zeros:
"1e400" and "1e-400" both fail for Double. This differs from the exact
conversion policy, which delivers infinity and zero.

State Machine
-------------
    START -> SIGN -> (KEYWORD -> PAYLOAD? | MANTISSA -> EXPONENT?) -> END

Each state either moves forward or rejects; there is no recovery.
"""

import logging
import string
from enum import Enum, auto
from typing import Optional

from numlit.nan import make_nan_truncating
from numlit.outcome import ConversionOutcome, OutcomeKind
from numlit.parsing.digits import digits_to_int, exponent_to_int
from numlit.rounding import round_exact_float
from numlit.types import FloatFormat
from numlit.values import BinaryFloat, ExactFloat

logger = logging.getLogger(__name__)


class ParseState(Enum):
    """States of the string-to-float parser."""
    START = auto()
    SIGN = auto()
    KEYWORD = auto()
    PAYLOAD = auto()
    MANTISSA = auto()
    EXPONENT = auto()
    END = auto()


class _Rejected(Exception):
    """Internal signal that the string is not a valid float."""


class FloatStringParser:
    """
    Parses one string into a value of a FloatFormat.

    Usage:
        outcome = FloatStringParser("0x1.8p-1", FLOAT64).parse()
        value = outcome.value  # None on failure

    Attributes:
        text: The string being parsed
        format: Target format
        state: Current ParseState (END after a successful parse)
    """

    INFINITY_WORDS = ("inf", "infinity")

    def __init__(self, text: str, fmt: FloatFormat):
        self.text = text
        self.format = fmt
        self.state = ParseState.START
        self._pos = 0

        self._negative = False
        self._radix = 10
        self._whole = ""
        self._fraction = ""
        self._exponent = 0
        self._result: Optional[BinaryFloat] = None
        self._signaling = False

    def parse(self) -> ConversionOutcome:
        """
        Run the state machine over the whole string.

        Returns:
            ConversionOutcome: EXACT or INEXACT with a BinaryFloat, or
            FAILURE (with a reason) for anything else
        """
        handlers = {
            ParseState.START: self._state_start,
            ParseState.SIGN: self._state_sign,
            ParseState.KEYWORD: self._state_keyword,
            ParseState.PAYLOAD: self._state_payload,
            ParseState.MANTISSA: self._state_mantissa,
            ParseState.EXPONENT: self._state_exponent,
        }
        try:
            while self.state is not ParseState.END:
                self.state = handlers[self.state]()
            if self._pos != len(self.text):
                raise _Rejected(f"unexpected {self.text[self._pos]!r} at offset {self._pos}")
        except _Rejected as e:
            logger.debug(f"Rejected float string {self.text!r} in state {self.state.name}: {e}")
            return ConversionOutcome.failure(str(e))

        if self._result is not None:
            return ConversionOutcome.exact(self._result)
        return self._round()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _peek(self, offset: int = 0) -> str:
        pos = self._pos + offset
        if pos >= len(self.text):
            return ""
        return self.text[pos]

    def _rest(self) -> str:
        return self.text[self._pos:]

    def _take_while(self, allowed: str) -> str:
        start = self._pos
        while self._peek() and self._peek() in allowed:
            self._pos += 1
        return self.text[start:self._pos]

    # =========================================================================
    # States
    # =========================================================================

    def _state_start(self) -> ParseState:
        if not self.text:
            raise _Rejected("empty string")
        if self._peek() in ("+", "-"):
            self._negative = self._peek() == "-"
            self._pos += 1
        return ParseState.SIGN

    def _state_sign(self) -> ParseState:
        rest = self._rest().lower()
        if rest.startswith(("inf", "nan", "snan")):
            return ParseState.KEYWORD
        if rest.startswith("0x"):
            self._pos += 2
            self._radix = 16
        return ParseState.MANTISSA

    def _state_keyword(self) -> ParseState:
        rest = self._rest().lower()

        for word in self.INFINITY_WORDS:
            if rest == word:
                self._pos = len(self.text)
                self._result = BinaryFloat.infinity(self.format, self._negative)
                return ParseState.END

        word = "snan" if rest.startswith("snan") else "nan"
        if not rest.startswith(word):
            raise _Rejected(f"unknown keyword {self._rest()!r}")
        self._pos += len(word)
        self._signaling = word == "snan"

        if self._peek() == "(":
            return ParseState.PAYLOAD
        self._result = make_nan_truncating(self.format, 0, self._signaling, self._negative)
        return ParseState.END

    def _state_payload(self) -> ParseState:
        close = self.text.find(")", self._pos)
        if close == -1:
            raise _Rejected("unterminated NaN payload")
        payload = self._parse_payload(self.text[self._pos + 1:close])
        self._pos = close + 1
        self._result = make_nan_truncating(self.format, payload, self._signaling, self._negative)
        return ParseState.END

    def _state_mantissa(self) -> ParseState:
        digits = string.hexdigits if self._radix == 16 else string.digits
        self._whole = self._take_while(digits)
        if self._peek() == ".":
            self._pos += 1
            self._fraction = self._take_while(digits)
        if not self._whole and not self._fraction:
            raise _Rejected("no digits")

        marker = ("p", "P") if self._radix == 16 else ("e", "E")
        if self._peek() and self._peek() in marker:
            self._pos += 1
            return ParseState.EXPONENT
        return ParseState.END

    def _state_exponent(self) -> ParseState:
        negative = False
        if self._peek() in ("+", "-"):
            negative = self._peek() == "-"
            self._pos += 1
        digits = self._take_while(string.digits)
        if not digits:
            raise _Rejected("exponent has no digits")
        self._exponent = exponent_to_int(digits, negative)
        return ParseState.END

    # =========================================================================
    # Results
    # =========================================================================

    @staticmethod
    def _parse_payload(text: str) -> int:
        """Payload number: decimal, octal after a leading 0, hex after 0x."""
        if text == "":
            return 0
        lowered = text.lower()
        if lowered.startswith("0x"):
            radix, digits, valid = 16, text[2:], string.hexdigits
        elif text.startswith("0") and len(text) > 1:
            radix, digits, valid = 8, text[1:], string.octdigits
        else:
            radix, digits, valid = 10, text, string.digits
        if not digits or any(char not in valid for char in digits):
            raise _Rejected(f"invalid NaN payload {text!r}")
        return digits_to_int(digits, radix)

    def _round(self) -> ConversionOutcome:
        digit_text = self._whole + self._fraction
        if self._radix == 16:
            value = ExactFloat(
                self._negative,
                digits_to_int(digit_text, 16),
                self._exponent - 4 * len(self._fraction),
                2,
            )
        else:
            value = ExactFloat(
                self._negative,
                digits_to_int(digit_text),
                self._exponent - len(self._fraction),
                10,
            )

        outcome = round_exact_float(value, self.format)
        if outcome.kind in (OutcomeKind.OVERFLOW, OutcomeKind.UNDERFLOW):
            reason = outcome.kind.name.lower()
            logger.debug(f"Float string {self.text!r} fails for {self.format}: {reason}")
            return ConversionOutcome.failure(reason)
        return outcome


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_float_outcome(text: str, fmt: FloatFormat) -> ConversionOutcome:
    """Parse `text` into `fmt`, returning the full ConversionOutcome."""
    return FloatStringParser(text, fmt).parse()


def parse_float(text: str, fmt: FloatFormat) -> Optional[BinaryFloat]:
    """
    Parse `text` into `fmt`.

    Returns:
        The correctly rounded BinaryFloat, or None if the string is not a
        valid float or its value overflows or underflows the format
    """
    return parse_float_outcome(text, fmt).value

"""
Digit Run Conversion
====================

Helpers shared by the literal and string parsers for turning scanned digit
runs into integers.

Python refuses to convert decimal strings longer than a few thousand
digits with int() (a denial-of-service guard). Literal text has no such
limit, so long decimal runs are converted in chunks. Power-of-two radixes
are not affected by the guard.

Exponents are clamped: anything beyond EXPONENT_LIMIT already overflows or
underflows every supported format, and keeping it small spares the
rounding code from evaluating 10 ** 10 ** 20.
"""

EXPONENT_LIMIT = 10 ** 12

_CHUNK = 1000


def digits_to_int(digits: str, radix: int = 10) -> int:
    """Convert a run of digits (no separators, no sign) to an int."""
    if radix != 10 or len(digits) <= _CHUNK:
        return int(digits, radix)
    value = 0
    for start in range(0, len(digits), _CHUNK):
        chunk = digits[start:start + _CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def exponent_to_int(digits: str, negative: bool) -> int:
    """Convert exponent digits, clamped to +/- EXPONENT_LIMIT."""
    stripped = digits.lstrip("0")
    if len(stripped) > len(str(EXPONENT_LIMIT)):
        value = EXPONENT_LIMIT
    else:
        value = min(int(stripped or "0"), EXPONENT_LIMIT)
    return -value if negative else value

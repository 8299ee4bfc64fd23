"""
numlit Error Hierarchy
======================

This module defines the exception hierarchy for the whole numlit package.
All exceptions inherit from NumlitError, allowing callers to catch every
library error with a single except clause if desired. Each class also
inherits from the closest built-in exception, so code that already catches
ValueError or OverflowError keeps working.

Exception Hierarchy
-------------------
NumlitError (base)
├── LiteralSyntaxError - malformed numeric literal (ValueError)
├── LiteralOverflowError - literal does not fit its target type (OverflowError)
├── ArithmeticTrap - fatal arithmetic condition (ArithmeticError)
│   ├── ArithmeticOverflowError - result not representable (OverflowError)
│   └── DivisionByZeroError - division or remainder by zero (ZeroDivisionError)
├── PreconditionFailure - unchecked operation overflowed in checked mode
├── NaNEncodingError - NaN payload does not fit / value is not a NaN
├── ConversionError - policy is not defined for the given operands
└── UnknownTypeError - unrecognised type name

Soft Failures
-------------
Conversions requested with the "exact or none" policy and runtime string
parses do not raise: they return None (or a FAILURE ConversionOutcome) and
leave the decision to the caller. Only the classes above are raised.

Error Message Format
--------------------
Literal syntax errors capture the column of the offending character:

    <literal>:1:4: error: hexadecimal floating-point literal requires an exponent
        0x1.8
           ^
    hint: add a binary exponent such as 'p0'
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class NumlitError(Exception):
    """
    Base exception for all numlit errors.

        try:
            value = integer_literal("0x1ff", INT8)
        except NumlitError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A location inside literal text, for error reporting.

    Attributes:
        filename: Name of the source (or "<literal>" for bare strings)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Literal Exceptions
# =============================================================================

class LiteralSyntaxError(NumlitError, ValueError):
    """
    The literal text violates the literal grammar.

    Examples:
        - A leading or trailing dot: ".5", "5."
        - A hexadecimal float without its binary exponent: "0x1.8"
        - An empty digit run: "0x", "1e"
        - A character outside the literal alphabet

    Attributes:
        message: The error description
        location: Where in the text the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The literal text (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            <literal>:1:2: error: a literal cannot begin with '.'
                .5
                ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class LiteralOverflowError(NumlitError, OverflowError):
    """
    A syntactically valid literal whose value does not fit the target type.

    Example:
        integer_literal("128", INT8)  # 'Int8' holds -128 to 127
    """

    def __init__(self, literal: str, type_name: str, value: int):
        self.literal = literal
        self.type_name = type_name
        self.value = value
        super().__init__(
            f"integer literal '{literal}' overflows when stored into '{type_name}'"
        )


# =============================================================================
# Arithmetic Exceptions
# =============================================================================

class ArithmeticTrap(NumlitError, ArithmeticError):
    """
    Base class of the fatal arithmetic conditions.

    Default fixed-width arithmetic traps instead of wrapping around. Callers
    that want to recover use the reporting or wrapping variants instead of
    catching these.
    """
    pass


class ArithmeticOverflowError(ArithmeticTrap, OverflowError):
    """
    The result of an operation or conversion is not representable.

    Attributes:
        operation: Name of the operation that overflowed (e.g. "add")
        type_name: Name of the fixed-width type involved
    """

    def __init__(self, operation: str, type_name: str, detail: Optional[str] = None):
        self.operation = operation
        self.type_name = type_name
        self.detail = detail
        message = f"arithmetic overflow in {operation} for '{type_name}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DivisionByZeroError(ArithmeticTrap, ZeroDivisionError):
    """Division or remainder with a zero divisor."""

    def __init__(self, operation: str, type_name: str):
        self.operation = operation
        self.type_name = type_name
        super().__init__(f"{operation} by zero for '{type_name}'")


class PreconditionFailure(NumlitError, AssertionError):
    """
    An unchecked fast-path operation overflowed while the build mode is
    checked (debug). In release mode the same call returns the wrapped bits.
    """

    def __init__(self, operation: str, type_name: str):
        self.operation = operation
        self.type_name = type_name
        super().__init__(
            f"precondition failed: overflow in unchecked {operation} for '{type_name}'"
        )


# =============================================================================
# NaN / Conversion Exceptions
# =============================================================================

class NaNEncodingError(NumlitError, ValueError):
    """
    A NaN cannot be encoded or decoded as requested.

    Raised when a payload needs more than `significand_bits - 2` bits, when
    the payload is negative, or when a payload is read from a non-NaN value.
    """
    pass


class ConversionError(NumlitError, TypeError):
    """
    The requested conversion policy is not defined for these operands.

    Examples:
        - Bit-pattern conversion between types of different widths
        - Truncating conversion between floating-point formats
    """
    pass


class UnknownTypeError(NumlitError, LookupError):
    """A type name that is not one of the standard numeric types."""

    def __init__(self, name: str, known: Optional[list[str]] = None):
        self.name = name
        self.known = known or []
        message = f"unknown numeric type '{name}'"
        if self.known:
            message = f"{message} (expected one of: {', '.join(self.known)})"
        super().__init__(message)

"""
numlit - Numeric Literals, Conversions and IEEE-754 Semantics
=============================================================

This package implements the numeric core of a language standard library:
how numeric literals are read, how values move between integer widths and
floating-point formats, how fixed-width arithmetic reports overflow, and
how NaNs are encoded and ordered.

Main Components
---------------
- **parsing.literal**: Literal parser
    Decimal, hexadecimal, octal and binary literals, '_' separators,
    hexadecimal floats with binary exponents

- **parsing.runtime**: String-to-float parser
    Permissive runtime parsing of user strings, including inf and NaN
    payloads; returns None instead of raising

- **convert**: Width converter
    exact, exact-or-none, clamping, truncating and bit-pattern conversions

- **arithmetic**: Fixed-width arithmetic
    Trapping, overflow-reporting, wrapping and unchecked operations

- **nan**: NaN payloads, minimum/maximum and the IEEE-754 total order

Quick Start
-----------
Parse a literal into a type:
    >>> from numlit import integer_literal, INT8
    >>> integer_literal("0x7f", INT8)
    FixedWidthInt(type=Int8, value=127)

Round a hexadecimal float once, directly into Double:
    >>> from numlit import float_literal, FLOAT64
    >>> float_literal("0x1.8p-1", FLOAT64).to_float()
    0.75

Add with overflow reporting:
    >>> from numlit import add_reporting_overflow, FixedWidthInt
    >>> add_reporting_overflow(FixedWidthInt(INT8, 127), FixedWidthInt(INT8, 1))
    PartialResult(partial_value=FixedWidthInt(type=Int8, value=-128), overflow=True)

Or use the command-line tool:
    $ numlit literal 0x1.8p-1 -t Double
    $ numlit convert 300 --from Int16 --to Int8 -p clamping

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from numlit.errors import (
    NumlitError,
    SourceLocation,
    LiteralSyntaxError,
    LiteralOverflowError,
    ArithmeticTrap,
    ArithmeticOverflowError,
    DivisionByZeroError,
    PreconditionFailure,
    NaNEncodingError,
    ConversionError,
    UnknownTypeError,
)
from numlit.config import NumericsConfig, get_config
from numlit.types import (
    IntType,
    FloatFormat,
    INT8, INT16, INT32, INT64, INT128, INT,
    UINT8, UINT16, UINT32, UINT64, UINT128, UINT,
    FLOAT16, FLOAT32, FLOAT64, FLOAT80,
    integer_type,
    lookup_type,
    type_names,
)
from numlit.values import (
    ExactInteger,
    ExactFloat,
    FixedWidthInt,
    BinaryFloat,
    FloatCategory,
    FloatClassification,
    NaNPayload,
)
from numlit.outcome import ConversionOutcome, OutcomeKind
from numlit.parsing import (
    LiteralParser,
    parse_literal,
    parse_integer_literal,
    parse_float_literal,
    integer_literal,
    float_literal,
    parse_float,
    parse_float_outcome,
)
from numlit.convert import (
    ConversionPolicy,
    convert_integer,
    convert_float,
    int_to_float,
    float_to_int,
    float_bit_pattern,
    float_from_bit_pattern,
)
from numlit.arithmetic import (
    PartialResult,
    add_reporting_overflow,
    subtract_reporting_overflow,
    multiply_reporting_overflow,
    divide_reporting_overflow,
    remainder_reporting_overflow,
    multiplied_full_width,
    divided_full_width,
)
from numlit.nan import (
    make_nan,
    nan_payload,
    minimum,
    maximum,
    minimum_magnitude,
    maximum_magnitude,
    total_order,
    total_order_magnitude,
    total_order_key,
)

__all__ = [
    "__version__",
    # Exception hierarchy
    "NumlitError",
    "SourceLocation",
    "LiteralSyntaxError",
    "LiteralOverflowError",
    "ArithmeticTrap",
    "ArithmeticOverflowError",
    "DivisionByZeroError",
    "PreconditionFailure",
    "NaNEncodingError",
    "ConversionError",
    "UnknownTypeError",
    # Configuration
    "NumericsConfig",
    "get_config",
    # Types
    "IntType",
    "FloatFormat",
    "INT8", "INT16", "INT32", "INT64", "INT128", "INT",
    "UINT8", "UINT16", "UINT32", "UINT64", "UINT128", "UINT",
    "FLOAT16", "FLOAT32", "FLOAT64", "FLOAT80",
    "integer_type",
    "lookup_type",
    "type_names",
    # Values
    "ExactInteger",
    "ExactFloat",
    "FixedWidthInt",
    "BinaryFloat",
    "FloatCategory",
    "FloatClassification",
    "NaNPayload",
    "ConversionOutcome",
    "OutcomeKind",
    # Parsing
    "LiteralParser",
    "parse_literal",
    "parse_integer_literal",
    "parse_float_literal",
    "integer_literal",
    "float_literal",
    "parse_float",
    "parse_float_outcome",
    # Conversion
    "ConversionPolicy",
    "convert_integer",
    "convert_float",
    "int_to_float",
    "float_to_int",
    "float_bit_pattern",
    "float_from_bit_pattern",
    # Arithmetic
    "PartialResult",
    "add_reporting_overflow",
    "subtract_reporting_overflow",
    "multiply_reporting_overflow",
    "divide_reporting_overflow",
    "remainder_reporting_overflow",
    "multiplied_full_width",
    "divided_full_width",
    # NaN and ordering
    "make_nan",
    "nan_payload",
    "minimum",
    "maximum",
    "minimum_magnitude",
    "maximum_magnitude",
    "total_order",
    "total_order_magnitude",
    "total_order_key",
]

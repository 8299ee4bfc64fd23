"""
numlit Width Converter
======================

Conversions between fixed-width integer types and floating-point formats,
each governed by a ConversionPolicy.
"""

from numlit.convert.policy import ConversionPolicy
from numlit.convert.integers import (
    integer_outcome,
    exactly,
    exactly_or_none,
    clamping,
    truncating,
    bit_pattern,
    convert_integer,
)
from numlit.convert.floats import (
    convert_float,
    convert_float_outcome,
    int_to_float,
    float_to_int,
    float_bit_pattern,
    float_from_bit_pattern,
)

__all__ = [
    "ConversionPolicy",
    # Integer to integer
    "integer_outcome",
    "exactly",
    "exactly_or_none",
    "clamping",
    "truncating",
    "bit_pattern",
    "convert_integer",
    # Floating point
    "convert_float",
    "convert_float_outcome",
    "int_to_float",
    "float_to_int",
    "float_bit_pattern",
    "float_from_bit_pattern",
]

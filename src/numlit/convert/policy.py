"""
Conversion Policies
===================

| Policy        | Integer -> integer                     | Float -> float                       |
|---------------|----------------------------------------|--------------------------------------|
| EXACT         | raises if unrepresentable              | rounds once; overflow -> inf, underflow -> 0 |
| EXACT_OR_NONE | None if unrepresentable                | None if inexact, overflow, underflow, NaN |
| CLAMPING      | saturates to min / max                 | saturates to +/- largest finite      |
| TRUNCATING    | keeps the low bits                     | not defined                          |
| BIT_PATTERN   | same width, opposite signedness        | not defined                          |
"""

from enum import Enum


class ConversionPolicy(Enum):
    """How a converter handles values the target cannot hold exactly."""
    EXACT = "exact"
    EXACT_OR_NONE = "exact-or-none"
    CLAMPING = "clamping"
    TRUNCATING = "truncating"
    BIT_PATTERN = "bit-pattern"

    def __str__(self) -> str:
        return self.value

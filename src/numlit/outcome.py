"""
Conversion Outcomes
===================

Every converter in numlit first computes a ConversionOutcome, a tagged
result that says how the conversion went, and then applies its policy to
that outcome (return the value, return None, or raise).

| Kind      | value                                   |
|-----------|-----------------------------------------|
| EXACT     | the converted value, mathematically equal |
| INEXACT   | the correctly rounded value             |
| OVERFLOW  | ±inf for floats; None for integers out of range in either direction |
| UNDERFLOW | ±0, for a nonzero float that rounded to zero |
| FAILURE   | None                                    |
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional


class OutcomeKind(Enum):
    """How a conversion relates to the exact source value."""
    EXACT = auto()
    INEXACT = auto()
    OVERFLOW = auto()
    UNDERFLOW = auto()
    FAILURE = auto()


@dataclass(frozen=True)
class ConversionOutcome:
    """
    Tagged result of a conversion.

    Attributes:
        kind: The OutcomeKind
        value: Delivered value (None for FAILURE)
        reason: Short explanation, used for FAILURE and in debug logs
    """
    kind: OutcomeKind
    value: Any = None
    reason: Optional[str] = None

    @classmethod
    def exact(cls, value: Any) -> "ConversionOutcome":
        return cls(OutcomeKind.EXACT, value)

    @classmethod
    def inexact(cls, value: Any) -> "ConversionOutcome":
        return cls(OutcomeKind.INEXACT, value)

    @classmethod
    def overflow(cls, value: Any) -> "ConversionOutcome":
        return cls(OutcomeKind.OVERFLOW, value, "value too large for the target")

    @classmethod
    def underflow(cls, value: Any) -> "ConversionOutcome":
        return cls(OutcomeKind.UNDERFLOW, value, "value too small for the target")

    @classmethod
    def failure(cls, reason: str) -> "ConversionOutcome":
        return cls(OutcomeKind.FAILURE, None, reason)

    @property
    def is_exact(self) -> bool:
        return self.kind is OutcomeKind.EXACT

    @property
    def is_failure(self) -> bool:
        return self.kind is OutcomeKind.FAILURE

    def value_or_none(self) -> Any:
        """The value if the conversion was exact, otherwise None."""
        return self.value if self.kind is OutcomeKind.EXACT else None

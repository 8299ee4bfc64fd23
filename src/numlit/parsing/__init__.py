"""
numlit Parsers
==============

Two parsers with deliberately different grammars:

- **literal**: numeric literals as written in source code (strict,
  raises LiteralSyntaxError with a caret-annotated message)
- **runtime**: strings received at run time (permissive, never raises,
  returns None on failure)
"""

from numlit.parsing.literal import (
    LiteralParser,
    parse_literal,
    parse_integer_literal,
    parse_float_literal,
    integer_literal,
    float_literal,
)
from numlit.parsing.runtime import (
    FloatStringParser,
    ParseState,
    parse_float,
    parse_float_outcome,
)

__all__ = [
    "LiteralParser",
    "parse_literal",
    "parse_integer_literal",
    "parse_float_literal",
    "integer_literal",
    "float_literal",
    "FloatStringParser",
    "ParseState",
    "parse_float",
    "parse_float_outcome",
]

"""
numlit - Numeric Literal Toolkit Command-Line Interface
=======================================================

Commands
--------
- **literal**: Parse a numeric literal into a type
- **parse**: Parse a runtime string into a floating-point format
- **convert**: Convert a value between types under a policy
- **inspect**: Show the fields and classification of a float
- **arith**: Fixed-width arithmetic in trapping, reporting or wrapping mode
- **order**: Compare two floats in the IEEE-754 total order

Usage Examples
--------------
Store a literal into a type:
    $ numlit literal 0x1.8p-1 -t Double
    0.75 (0x1.8p-1)

Parse a runtime string (prints nil and exits 1 on failure):
    $ numlit parse 1e400 -t Double
    nil

Clamp a value into a narrower type:
    $ numlit convert 300 --from Int16 --to Int8 -p clamping
    127

Add with overflow reporting:
    $ numlit arith add 127 1 -t Int8 -m reporting
    -128 (overflow)

Negative operands go after "--":
    $ numlit arith div -t Int8 -- -128 -1

Type names default to NUMLIT_DEFAULT_INT / NUMLIT_DEFAULT_FLOAT.
"""

import logging
import sys
from typing import Optional, Union

import click

from numlit import __version__
from numlit.arithmetic import (
    add,
    add_reporting_overflow,
    divide,
    divide_reporting_overflow,
    multiply,
    multiply_reporting_overflow,
    remainder,
    remainder_reporting_overflow,
    subtract,
    subtract_reporting_overflow,
)
from numlit.cli.errors import ExitCode, handle_cli_exception
from numlit.config import NumericsConfig, get_config
from numlit.convert import (
    ConversionPolicy,
    convert_float,
    convert_integer,
    float_to_int,
    int_to_float,
)
from numlit.errors import UnknownTypeError
from numlit.nan import nan_payload, total_order
from numlit.parsing import float_literal, integer_literal, parse_float, parse_literal
from numlit.types import FloatFormat, IntType, NumericType, lookup_type, type_names
from numlit.values import BinaryFloat, ExactFloat, FixedWidthInt

logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Parameter Types
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the verbosity and the configuration the defaults come from.
    """

    def __init__(self) -> None:
        self.verbose: bool = False
        self.config: NumericsConfig = get_config()

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.WARNING
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(name)s: %(message)s" if self.verbose else "%(message)s",
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


class NumericTypeParam(click.ParamType):
    """
    Click parameter type for numeric type names.

    Accepts any name known to lookup_type() (case-insensitive), optionally
    restricted to integer types or floating-point formats.
    """
    name = "type"

    def __init__(self, kind: Optional[type] = None):
        self.kind = kind

    def convert(self, value: Union[str, NumericType], param: Optional[click.Parameter],
                ctx: Optional[click.Context]) -> NumericType:
        """Convert string to IntType or FloatFormat."""
        if isinstance(value, (IntType, FloatFormat)):
            return value
        try:
            numeric_type = lookup_type(value)
        except UnknownTypeError:
            self.fail(
                f"Unknown type '{value}'. Choose from: {', '.join(type_names())}",
                param, ctx
            )
        if self.kind is not None and not isinstance(numeric_type, self.kind):
            what = "an integer type" if self.kind is IntType else "a floating-point type"
            self.fail(f"'{value}' is not {what}", param, ctx)
        return numeric_type


class PolicyChoice(click.ParamType):
    """
    Click parameter type for conversion policies.

    Accepts: exact, exact-or-none, clamping, truncating, bit-pattern
    """
    name = "policy"

    def convert(self, value: Union[str, ConversionPolicy], param: Optional[click.Parameter],
                ctx: Optional[click.Context]) -> ConversionPolicy:
        if isinstance(value, ConversionPolicy):
            return value
        key = value.lower().replace("_", "-")
        for policy in ConversionPolicy:
            if policy.value == key:
                return policy
        self.fail(
            f"Invalid policy '{value}'. "
            f"Choose from: {', '.join(p.value for p in ConversionPolicy)}",
            param, ctx
        )


ANY_TYPE = NumericTypeParam()
INT_TYPE = NumericTypeParam(IntType)
FLOAT_TYPE = NumericTypeParam(FloatFormat)
POLICY = PolicyChoice()


# =============================================================================
# Helpers
# =============================================================================

def format_value(value: Union[FixedWidthInt, BinaryFloat]) -> str:
    """Decimal text, followed by the hexadecimal form for floats."""
    if isinstance(value, FixedWidthInt):
        return str(value)
    text = value.description()
    hex_text = value.to_hex_string()
    return text if hex_text == text else f"{text} ({hex_text})"


def read_value(text: str, numeric_type: NumericType) -> Union[FixedWidthInt, BinaryFloat]:
    """
    Read a command-line operand into `numeric_type`.

    Integers use the literal grammar; floats use the runtime grammar so
    that inf and nan(...) are accepted.
    """
    if isinstance(numeric_type, IntType):
        return integer_literal(text, numeric_type)
    value = parse_float(text, numeric_type)
    if value is None:
        raise click.BadParameter(f"'{text}' is not a valid {numeric_type} value")
    return value


def echo_nil() -> None:
    """Report a soft failure."""
    click.echo("nil")
    sys.exit(ExitCode.VALUE_ERROR)


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
@click.version_option(__version__, "--version", "-V", prog_name="numlit")
@pass_context
def main(ctx: Context, verbose: bool) -> None:
    """
    Numeric literal, conversion and IEEE-754 toolkit.

    \b
    Commands:
      literal   Parse a numeric literal into a type
      parse     Parse a runtime string into a float format
      convert   Convert a value between types
      inspect   Show the fields of a float
      arith     Fixed-width arithmetic
      order     Total-order comparison of two floats

    \b
    Type names:
      Int8 Int16 Int32 Int64 Int128 Int
      UInt8 UInt16 UInt32 UInt64 UInt128 UInt
      Float16 Float Double Float80
    """
    ctx.verbose = verbose
    ctx.setup_logging()


# =============================================================================
# Literal Command
# =============================================================================

@main.command("literal")
@click.argument("text")
@click.option(
    "-t", "--type",
    "numeric_type",
    type=ANY_TYPE,
    default=None,
    help="Target type (default: configured Int or Double, by literal kind)",
)
@pass_context
def cmd_literal(ctx: Context, text: str, numeric_type: Optional[NumericType]) -> None:
    """
    Parse a numeric literal and store it into a type.

    \b
    Examples:
      numlit literal 0x7f -t Int8
      numlit literal 1_000_000
      numlit literal 0x1.8p-1 -t Float
    """
    try:
        if numeric_type is None:
            exact = parse_literal(text)
            numeric_type = (
                ctx.config.float_type if isinstance(exact, ExactFloat) else ctx.config.int_type
            )

        if isinstance(numeric_type, IntType):
            value = integer_literal(text, numeric_type)
        else:
            value = float_literal(text, numeric_type)
        click.echo(format_value(value))

    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose, error_type="Literal")


# =============================================================================
# Parse Command
# =============================================================================

@main.command("parse")
@click.argument("text")
@click.option(
    "-t", "--type",
    "fmt",
    type=FLOAT_TYPE,
    default=None,
    help="Floating-point format (default: configured Double)",
)
@pass_context
def cmd_parse(ctx: Context, text: str, fmt: Optional[FloatFormat]) -> None:
    """
    Parse a runtime string into a floating-point format.

    Prints nil and exits with status 1 if the string is invalid or its
    value overflows or underflows the format.

    \b
    Examples:
      numlit parse .5
      numlit parse "nan(0x7f)" -t Float
      numlit parse 0x1.fffffep127 -t Float
    """
    try:
        value = parse_float(text, fmt or ctx.config.float_type)
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)

    if value is None:
        echo_nil()
    click.echo(format_value(value))


# =============================================================================
# Convert Command
# =============================================================================

@main.command("convert")
@click.argument("value_text", metavar="VALUE")
@click.option("--from", "source", type=ANY_TYPE, required=True, help="Source type")
@click.option("--to", "target", type=ANY_TYPE, required=True, help="Target type")
@click.option(
    "-p", "--policy",
    type=POLICY,
    default="exact",
    help="exact, exact-or-none, clamping, truncating, bit-pattern (default: exact)",
)
@pass_context
def cmd_convert(
    ctx: Context,
    value_text: str,
    source: NumericType,
    target: NumericType,
    policy: ConversionPolicy,
) -> None:
    """
    Convert VALUE from one type to another under a policy.

    \b
    Examples:
      numlit convert 300 --from Int16 --to Int8 -p clamping
      numlit convert 200 --from UInt8 --to Int8 -p bit-pattern
      numlit convert 0.1 --from Double --to Float -p exact-or-none
    """
    try:
        value = read_value(value_text, source)

        if isinstance(source, IntType) and isinstance(target, IntType):
            result = convert_integer(value, target, policy)
        elif isinstance(source, IntType):
            result = int_to_float(value, target, policy)
        elif isinstance(target, IntType):
            result = float_to_int(value, target, policy)
        else:
            result = convert_float(value, target, policy)

    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose, error_type="Conversion")

    if result is None:
        echo_nil()
    click.echo(format_value(result))


# =============================================================================
# Inspect Command
# =============================================================================

@main.command("inspect")
@click.argument("text")
@click.option(
    "-t", "--type",
    "fmt",
    type=FLOAT_TYPE,
    default=None,
    help="Floating-point format (default: configured Double)",
)
@pass_context
def cmd_inspect(ctx: Context, text: str, fmt: Optional[FloatFormat]) -> None:
    """
    Show the encoding and classification of a floating-point value.

    \b
    Examples:
      numlit inspect 0.1
      numlit inspect "snan(5)" -t Float
    """
    try:
        fmt = fmt or ctx.config.float_type
        value = read_value(text, fmt)
        digits = (fmt.bit_width + 3) // 4
        unbiased = max(value.exponent, 1) - fmt.bias

        click.echo(f"Type:         {fmt} ({fmt.bit_width} bits)")
        click.echo(f"Value:        {value.description()}")
        click.echo(f"Hex:          {value.to_hex_string()}")
        click.echo(f"Bits:         0x{value.bits:0{digits}x}")
        click.echo(f"Sign:         {int(value.sign)}")
        if value.is_finite and not value.is_zero:
            click.echo(f"Exponent:     {value.exponent} (unbiased {unbiased})")
        else:
            click.echo(f"Exponent:     {value.exponent}")
        click.echo(f"Significand:  0x{value.significand:x}")
        click.echo(f"Class:        {value.classification.name.lower().replace('_', ' ')}")
        if value.is_nan:
            decoded = nan_payload(value)
            kind = "signaling" if decoded.signaling else "quiet"
            click.echo(f"Payload:      {decoded.payload} ({kind})")

    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)


# =============================================================================
# Arithmetic Command
# =============================================================================

OPERATIONS = {
    "add": (add, add_reporting_overflow),
    "sub": (subtract, subtract_reporting_overflow),
    "mul": (multiply, multiply_reporting_overflow),
    "div": (divide, divide_reporting_overflow),
    "rem": (remainder, remainder_reporting_overflow),
}


@main.command("arith")
@click.argument("operation", type=click.Choice(list(OPERATIONS)))
@click.argument("lhs")
@click.argument("rhs")
@click.option(
    "-t", "--type",
    "int_type",
    type=INT_TYPE,
    default=None,
    help="Integer type (default: configured Int)",
)
@click.option(
    "-m", "--mode",
    type=click.Choice(["trapping", "reporting", "wrapping"]),
    default="trapping",
    help="Overflow handling (default: trapping)",
)
@pass_context
def cmd_arith(
    ctx: Context,
    operation: str,
    lhs: str,
    rhs: str,
    int_type: Optional[IntType],
    mode: str,
) -> None:
    """
    Apply OPERATION to LHS and RHS in a fixed-width integer type.

    In wrapping mode, div and rem return the same partial value that
    reporting mode prints.

    \b
    Examples:
      numlit arith add 100 27 -t Int8
      numlit arith add 127 1 -t Int8 -m reporting
      numlit arith mul 0xff 0xff -t UInt8 -m wrapping
    """
    try:
        int_type = int_type or ctx.config.int_type
        a = integer_literal(lhs, int_type)
        b = integer_literal(rhs, int_type)
        trapping, reporting = OPERATIONS[operation]

        if mode == "trapping":
            click.echo(str(trapping(a, b)))
        else:
            result = reporting(a, b)
            if mode == "reporting" and result.overflow:
                click.echo(f"{result.partial_value} (overflow)")
            else:
                click.echo(str(result.partial_value))

    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose, error_type="Arithmetic")


# =============================================================================
# Order Command
# =============================================================================

@main.command("order")
@click.argument("a_text", metavar="A")
@click.argument("b_text", metavar="B")
@click.option(
    "-t", "--type",
    "fmt",
    type=FLOAT_TYPE,
    default=None,
    help="Floating-point format (default: configured Double)",
)
@pass_context
def cmd_order(ctx: Context, a_text: str, b_text: str, fmt: Optional[FloatFormat]) -> None:
    """
    Compare A and B in the IEEE-754 total order.

    Prints "A < B", "A > B" or "A == B" using the values' hexadecimal
    forms, so -0.0 and 0.0 are told apart and NaN payloads are shown.

    \b
    Examples:
      numlit order -- -0.0 0.0
      numlit order nan inf
    """
    try:
        fmt = fmt or ctx.config.float_type
        a = read_value(a_text, fmt)
        b = read_value(b_text, fmt)

        below = total_order(a, b)
        above = total_order(b, a)
        if below and above:
            relation = "=="
        elif below:
            relation = "<"
        else:
            relation = ">"
        click.echo(f"{a.to_hex_string()} {relation} {b.to_hex_string()}")

    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)


if __name__ == "__main__":
    main()

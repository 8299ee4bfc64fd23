"""
numlit Configuration
====================

Process-wide settings. Configuration can come from:
- Default values (defined here)
- Environment variables, read once by get_config()
- An explicit NumericsConfig passed to the functions that take `config=`

Build Mode
----------
The build mode only affects the unchecked fast-path arithmetic
(unchecked_add and friends):

| Mode    | Unchecked operation that overflows      |
|---------|-----------------------------------------|
| debug   | raises PreconditionFailure              |
| release | returns the wrapped two's-complement bits |

The rounding mode is not configurable; see numlit.rounding.

Environment Variables
---------------------
    NUMLIT_BUILD_MODE: "debug" or "release"
    NUMLIT_DEFAULT_INT: integer type name used by the CLI (e.g. "Int32")
    NUMLIT_DEFAULT_FLOAT: float type name used by the CLI (e.g. "Float")
"""

import logging
import os
from dataclasses import dataclass, replace
from functools import lru_cache

from numlit.errors import UnknownTypeError
from numlit.types import FloatFormat, IntType, lookup_type

logger = logging.getLogger(__name__)

BUILD_MODES = ("debug", "release")


@dataclass(frozen=True)
class NumericsConfig:
    """
    Settings for a numlit process.

    Attributes:
        build_mode: "debug" (checked) or "release" (default: "debug")
        default_int_type: Integer type name for CLI commands without -t
        default_float_type: Float type name for CLI commands without -t
    """

    build_mode: str = "debug"
    default_int_type: str = "Int"
    default_float_type: str = "Double"

    def __post_init__(self):
        if self.build_mode not in BUILD_MODES:
            raise ValueError(f"build_mode must be one of {BUILD_MODES}, got {self.build_mode!r}")

    @property
    def checked(self) -> bool:
        """True when unchecked operations must verify their precondition."""
        return self.build_mode == "debug"

    @property
    def int_type(self) -> IntType:
        return lookup_type(self.default_int_type)

    @property
    def float_type(self) -> FloatFormat:
        return lookup_type(self.default_float_type)

    @classmethod
    def from_env(cls) -> "NumericsConfig":
        """
        Create a NumericsConfig from environment variables.

        Invalid values are ignored (with a warning) and the default kept.
        """
        config = cls()

        if mode := os.environ.get("NUMLIT_BUILD_MODE"):
            if mode.lower() in BUILD_MODES:
                config = replace(config, build_mode=mode.lower())
            else:
                logger.warning(f"Ignoring NUMLIT_BUILD_MODE={mode!r}")

        if int_name := os.environ.get("NUMLIT_DEFAULT_INT"):
            if _is_type_name(int_name, IntType):
                config = replace(config, default_int_type=int_name)
            else:
                logger.warning(f"Ignoring NUMLIT_DEFAULT_INT={int_name!r}")

        if float_name := os.environ.get("NUMLIT_DEFAULT_FLOAT"):
            if _is_type_name(float_name, FloatFormat):
                config = replace(config, default_float_type=float_name)
            else:
                logger.warning(f"Ignoring NUMLIT_DEFAULT_FLOAT={float_name!r}")

        return config


def _is_type_name(name: str, kind: type) -> bool:
    try:
        return isinstance(lookup_type(name), kind)
    except UnknownTypeError:
        return False


@lru_cache(maxsize=None)
def get_config() -> NumericsConfig:
    """The process-wide configuration, read from the environment once."""
    return NumericsConfig.from_env()

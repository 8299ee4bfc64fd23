"""
numlit Command-Line Interface
=============================

The `numlit` tool exposes the parsers, converters, arithmetic and NaN
ordering from the shell. It is a Click-based application; see
numlit.cli.main for the commands.
"""

__all__ = ["main"]

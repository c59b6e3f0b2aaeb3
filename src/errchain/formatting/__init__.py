"""Printf-style formatting with self-rendering values.

Exports:
    FormatSpec: Explicit flags/width/precision/verb of one directive
    FormatState: Output sink bound to a FormatSpec
    Formatter: Protocol for values that render themselves
    reconstruct: Rebuild directive text from a FormatSpec
    parse_directive: Strict parser for a single directive
    sprintf / fprintf: Host printer

Python 3.13+.
"""

from .directive import FormatSpec, parse_directive, reconstruct
from .printer import format_value, fprintf, sprintf
from .state import FormatState, Formatter, TextSink

__all__ = [
    "FormatSpec",
    "FormatState",
    "Formatter",
    "TextSink",
    "format_value",
    "fprintf",
    "parse_directive",
    "reconstruct",
    "sprintf",
]

"""errchain - chained, detail-carrying errors with compact and verbose rendering.

An error value that wraps a cause, carries optional detail (source
locations, snippets) and renders either as one line or as a full report:

    >>> err = ChainedError('reading "file"', "cmd/prog/reader.go:122",
    ...                    ChainedError("parsing line 23", cause=SyntaxError("syntax error")))
    >>> str(err)
    'reading "file": parsing line 23: syntax error'
    >>> print(f"{err:+v}", end="")
    reading "file"
    	cmd/prog/reader.go:122
    parsing line 23
    syntax error

Public API:
    ChainedError - The chained error value
    sprintf / fprintf - Printf-style printer that honors Formatter values
    FormatSpec / FormatState / Formatter - Formatting protocol
    reconstruct / parse_directive - Directive text <-> FormatSpec

Exceptions:
    ErrchainError - Base exception class
    DirectiveError - Malformed format directive
    ImmutabilityViolationError - Mutation of a frozen error

Submodules:
    errchain.chain - Generic chain walking (unwrap, iter_chain, find, contains)
    errchain.detail - Detail builders (source locations, snippets)
    errchain.log - logging.Formatter integration
"""

from .chained import ChainedError
from .errors import DirectiveError, ErrchainError, ImmutabilityViolationError
from .formatting import (
    FormatSpec,
    FormatState,
    Formatter,
    fprintf,
    parse_directive,
    reconstruct,
    sprintf,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("errchain")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ChainedError",
    "DirectiveError",
    "ErrchainError",
    "FormatSpec",
    "FormatState",
    "Formatter",
    "ImmutabilityViolationError",
    "__version__",
    "fprintf",
    "parse_directive",
    "reconstruct",
    "sprintf",
]

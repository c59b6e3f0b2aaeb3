"""Shared constants for errchain.

Centralized configuration used by the formatting and error layers. Placing
constants here avoids circular imports between ``errchain.chained`` and
``errchain.formatting`` and keeps a single source of truth.

Constants are grouped by domain:
- Directive syntax: flag alphabet and canonical order
- Rendering: separators used by compact and verbose output
- Limits: bounds on width/precision
- Markers: printer output for malformed directives

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Directive syntax
    "FLAG_ORDER",
    "DIRECTIVE_PREFIX",
    "DEFAULT_VERB",
    "STRING_VERBS",
    "INTEGER_VERBS",
    "FLOAT_VERBS",
    # Rendering
    "CHAIN_SEPARATOR",
    "DETAIL_INDENT",
    # Limits
    "MAX_FORMAT_NUMBER",
    # Markers
    "MARKER_BAD_PREC",
    "MARKER_BAD_WIDTH",
    "MARKER_EXTRA",
    "MARKER_MISSING",
    "MARKER_NO_VERB",
    # Environment
    "LOG_LEVEL_ENV",
]

# ============================================================================
# DIRECTIVE SYNTAX
# ============================================================================

# Canonical flag order used when rebuilding a directive. Input order is not
# preserved: "%-+5d" reconstructs as "%+-5d".
FLAG_ORDER: tuple[str, ...] = ("+", "-", "#", " ", "0")

DIRECTIVE_PREFIX = "%"

# Verb used when a format spec omits one (f"{err}" / format(err, "")).
DEFAULT_VERB = "v"

STRING_VERBS: frozenset[str] = frozenset("vsqxX")
INTEGER_VERBS: frozenset[str] = frozenset("vdboxXc")
FLOAT_VERBS: frozenset[str] = frozenset("veEfFgG")

# ============================================================================
# RENDERING
# ============================================================================

# Compact form: message + CHAIN_SEPARATOR + str(cause)
CHAIN_SEPARATOR = ": "

# Verbose form: a single indent precedes the whole detail block
DETAIL_INDENT = "\t"

# ============================================================================
# LIMITS
# ============================================================================

# Upper bound for width and precision. Larger values are rejected rather than
# allocating arbitrarily large padding buffers.
MAX_FORMAT_NUMBER = 1_000_000

# ============================================================================
# MARKERS
# ============================================================================
#
# The printer never raises on malformed directives. It writes these markers
# into the output instead, so the offending call site stays visible in logs.

MARKER_NO_VERB = "%!(NOVERB)"
MARKER_BAD_WIDTH = "%!(BADWIDTH)"
MARKER_BAD_PREC = "%!(BADPREC)"
MARKER_MISSING = "(MISSING)"
MARKER_EXTRA = "%!(EXTRA "

# ============================================================================
# ENVIRONMENT
# ============================================================================

LOG_LEVEL_ENV = "ERRCHAIN_LOG_LEVEL"

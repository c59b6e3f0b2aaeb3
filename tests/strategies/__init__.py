"""Hypothesis strategies for errchain property-based testing.

Strategies are organized by domain:

- formatting: FormatSpec directives and ChainedError chains

Usage:
    from tests.strategies.formatting import chains, format_specs

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - format_specs: fmt_flag_count, fmt_has_width, fmt_has_prec
    - chains: chain_length, chain_tail, chain_details
"""

from .formatting import chains, details, format_specs, messages

__all__ = [
    "chains",
    "details",
    "format_specs",
    "messages",
]

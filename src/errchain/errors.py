"""Exceptions raised by errchain itself.

These are programming errors in the calling code (a malformed format spec,
an attempt to mutate a frozen error), not the chained errors the library
renders.

Hierarchy:
    ErrchainError
    ├─ DirectiveError (also ValueError)
    └─ ImmutabilityViolationError (also AttributeError)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import final

__all__ = [
    "DirectiveError",
    "ErrchainError",
    "ImmutabilityViolationError",
]


class ErrchainError(Exception):
    """Base exception for all errchain failures."""


@final
class DirectiveError(ErrchainError, ValueError):
    """Malformed format directive.

    Raised by the strict directive parser and therefore by
    ``format(err, spec)``. The lenient printer never raises this and
    writes a marker into its output instead.

    Attributes:
        directive: The directive text that failed to parse
    """

    def __init__(self, message: str, directive: str) -> None:
        """Initialize DirectiveError.

        Args:
            message: Human-readable error description
            directive: The offending directive text
        """
        super().__init__(message)
        self.directive = directive


@final
class ImmutabilityViolationError(ErrchainError, AttributeError):
    """Attempt to mutate an immutable error value.

    Raised when code assigns to or deletes an attribute of a ChainedError
    after construction.
    """

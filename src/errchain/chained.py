"""Chained, detail-carrying error value.

A ChainedError holds a short message, an optional multi-line detail and an
optional wrapped cause. It renders in two shapes:

Compact (``str(err)``, ``%v``, ``%s``, any non-``+v`` directive)::

    reading "file": parsing line 23: syntax error

Verbose (``%+v``, ``f"{err:+v}"``)::

    reading "file"
    	cmd/prog/reader.go:122
    parsing line 23
    	iff x > 3 {
    	cmd/prog/parser.go:85
    syntax error
    	cmd/prog/parser.go:214

Verbosity cascades through every link that implements ``Formatter``; the
first plain exception in the chain ends the report on a single line.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import io

from errchain.constants import (
    CHAIN_SEPARATOR,
    DEFAULT_VERB,
    DETAIL_INDENT,
    DIRECTIVE_PREFIX,
)
from errchain.errors import ImmutabilityViolationError
from errchain.formatting.directive import parse_directive
from errchain.formatting.printer import fprintf
from errchain.formatting.state import FormatState, Formatter

__all__ = ["ChainedError"]


class ChainedError(Exception):
    """Immutable error with a message, optional detail and optional cause.

    The chain is singly linked through ``cause``. Cycles are the caller's
    responsibility: rendering recurses until the chain ends.

    When the cause is an exception it is also installed as ``__cause__`` so
    standard tracebacks show the same chain.

    Attributes:
        message: Short single-line description
        detail: Supplementary text (source location, snippet); "" if none
        cause: Wrapped underlying error, or None

    Example:
        >>> err = ChainedError("m", "d", EOFError("unexpected EOF"))
        >>> str(err)
        'm: unexpected EOF'
        >>> f"{err:+v}"
        'm\\n\\td\\nunexpected EOF\\n'
    """

    __slots__ = ("_cause", "_detail", "_frozen", "_message")

    _message: str
    _detail: str
    _cause: BaseException | None
    _frozen: bool

    # Python's exception machinery sets these during propagation; they stay
    # writable after the freeze.
    _PYTHON_EXCEPTION_ATTRS: frozenset[str] = frozenset(
        ("__traceback__", "__context__", "__cause__", "__suppress_context__", "__notes__")
    )

    def __init__(
        self,
        message: str,
        detail: str = "",
        cause: BaseException | None = None,
    ) -> None:
        """Initialize ChainedError.

        No validation is performed; any combination is legal.

        Args:
            message: Short description, without a trailing newline
            detail: Optional multi-line detail ("" means none)
            cause: Optional wrapped error
        """
        super().__init__(message)
        object.__setattr__(self, "_message", message)
        object.__setattr__(self, "_detail", detail)
        object.__setattr__(self, "_cause", cause)
        if isinstance(cause, BaseException):
            self.__cause__ = cause
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, name: str, value: object) -> None:
        """Reject attribute mutations after initialization.

        Raises:
            ImmutabilityViolationError: If modifying after construction
        """
        if name in self._PYTHON_EXCEPTION_ATTRS:
            object.__setattr__(self, name, value)
            return
        if getattr(self, "_frozen", False):
            msg = f"Cannot modify ChainedError attribute: {name}"
            raise ImmutabilityViolationError(msg)
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        """Reject attribute deletions.

        Raises:
            ImmutabilityViolationError: Always
        """
        msg = f"Cannot delete ChainedError attribute: {name}"
        raise ImmutabilityViolationError(msg)

    def __reduce__(self) -> tuple[type[ChainedError], tuple[str, str, BaseException | None]]:
        return (type(self), (self._message, self._detail, self._cause))

    @property
    def message(self) -> str:
        return self._message

    @property
    def detail(self) -> str:
        return self._detail

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    def unwrap(self) -> BaseException | None:
        """Return the wrapped cause, or None at the end of the chain."""
        return self._cause

    def __str__(self) -> str:
        """Compact form: messages of every link joined by ``": "``."""
        if self._cause is None:
            return self._message
        return self._message + CHAIN_SEPARATOR + str(self._cause)

    def __repr__(self) -> str:
        """Raw structural dump, identical to the ``%#v`` rendering."""
        return (
            f"{type(self).__name__}(message={self._message!r}, "
            f"detail={self._detail!r}, cause={self._cause!r})"
        )

    def __format__(self, format_spec: str) -> str:
        """Render through ``format_to`` using ``format_spec`` as a directive.

        ``format_spec`` is a directive without the leading ``%``; an empty
        spec means ``v``. ``f"{err:+v}"`` is the verbose report and
        ``f"{err:>20}"``-style Python specs are rejected.

        Raises:
            DirectiveError: If format_spec is not a valid directive
        """
        spec = parse_directive(DIRECTIVE_PREFIX + (format_spec or DEFAULT_VERB))
        buffer = io.StringIO()
        self.format_to(FormatState(buffer, spec))
        return buffer.getvalue()

    def format_to(self, state: FormatState) -> None:
        """Write this error under the directive carried by ``state``.

        ``%#v`` writes the raw structure. Any directive other than ``%+v``
        (with or without width/precision) applies to the compact string
        exactly as it would to a plain string. ``%+v`` writes one block per
        link: message line, tab-indented detail, then the cause.
        """
        if state.verb == "v" and state.flag("#"):
            state.write(repr(self))
            return

        if state.verb != "v" or not state.flag("+"):
            fprintf(state, state.directive, str(self))
            return

        state.write(self._message + "\n")
        if self._detail:
            state.write(DETAIL_INDENT + self._detail + "\n")

        cause = self._cause
        if cause is None:
            return
        if isinstance(cause, Formatter):
            cause.format_to(state)
        else:
            fprintf(state, state.directive, cause)
            state.write("\n")

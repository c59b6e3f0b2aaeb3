"""Format state and the custom formatter protocol.

``FormatState`` is what a value receives when the printer delegates
rendering to it: the output sink plus the explicit ``FormatSpec``. A value
opts in to custom rendering by implementing ``Formatter.format_to``.

Thread Safety:
    FormatState is created per directive and never shared. Writes go straight
    to the caller's sink; the sink's own thread-safety is the caller's concern.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .directive import FormatSpec, reconstruct

__all__ = [
    "FormatState",
    "Formatter",
    "TextSink",
]


class TextSink(Protocol):
    """Anything text can be written to (io.StringIO, sys.stderr, FormatState)."""

    def write(self, text: str, /) -> object: ...


@runtime_checkable
class Formatter(Protocol):
    """Values that render themselves for every directive verb.

    The printer calls ``format_to`` instead of applying the directive to
    ``str(value)``. Implementations read flags, width, precision and verb
    from ``state`` and write their output through ``state.write``.
    """

    def format_to(self, state: FormatState) -> None: ...


class FormatState:
    """Output sink bound to the directive being rendered.

    A FormatState is itself a TextSink, so a Formatter can hand it back to
    ``fprintf`` to render nested values into the same output.

    Attributes:
        spec: The directive's flags, width, precision and verb
    """

    __slots__ = ("_sink", "spec")

    def __init__(self, sink: TextSink, spec: FormatSpec) -> None:
        self._sink = sink
        self.spec = spec

    def write(self, text: str, /) -> int:
        """Write text to the underlying sink, returning its length."""
        self._sink.write(text)
        return len(text)

    def flag(self, name: str) -> bool:
        """Return True if the flag character is active."""
        return self.spec.flag(name)

    @property
    def verb(self) -> str:
        return self.spec.verb

    @property
    def width(self) -> int | None:
        return self.spec.width

    @property
    def precision(self) -> int | None:
        return self.spec.precision

    @property
    def directive(self) -> str:
        """Directive equivalent to this state, for forwarding to nested values."""
        return reconstruct(self.spec)

    def __repr__(self) -> str:
        return f"FormatState({self.directive!r})"

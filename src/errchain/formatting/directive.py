"""Format directives: the explicit format-state struct and its text form.

A directive is ``%[flags][width][.precision]verb``. ``FormatSpec`` holds the
parsed pieces; ``reconstruct`` turns them back into text so a request can be
forwarded to a nested value; ``parse_directive`` is the strict inverse used
by ``format(err, spec)``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from errchain.constants import DIRECTIVE_PREFIX, FLAG_ORDER, MAX_FORMAT_NUMBER
from errchain.errors import DirectiveError

__all__ = [
    "DirectiveScan",
    "FormatSpec",
    "parse_directive",
    "reconstruct",
    "scan_directive",
]

_FLAG_SET = frozenset(FLAG_ORDER)
# Longest digit run that can still be <= MAX_FORMAT_NUMBER
_MAX_DIGITS = len(str(MAX_FORMAT_NUMBER))


@dataclass(frozen=True, slots=True)
class FormatSpec:
    """Explicit formatting state for one directive.

    Attributes:
        verb: Single-character conversion (``v``, ``s``, ``x``, ...)
        flags: Active flags, any subset of ``+ - # space 0``
        width: Minimum output width in characters (None if absent)
        precision: Precision (None if absent)
    """

    verb: str
    flags: frozenset[str] = frozenset()
    width: int | None = None
    precision: int | None = None

    def __post_init__(self) -> None:
        """Normalize flags and validate invariants.

        Raises:
            ValueError: If verb is not a single character, a flag is not
                one of ``+ - # space 0``, or width/precision is negative.
        """
        if len(self.verb) != 1:
            msg = f"FormatSpec.verb must be a single character, got {self.verb!r}"
            raise ValueError(msg)
        flags = frozenset(self.flags)
        unknown = flags - _FLAG_SET
        if unknown:
            msg = f"FormatSpec.flags contains unknown flags: {sorted(unknown)!r}"
            raise ValueError(msg)
        object.__setattr__(self, "flags", flags)
        if self.width is not None and self.width < 0:
            msg = f"FormatSpec.width must be >= 0, got {self.width}"
            raise ValueError(msg)
        if self.precision is not None and self.precision < 0:
            msg = f"FormatSpec.precision must be >= 0, got {self.precision}"
            raise ValueError(msg)

    def flag(self, name: str) -> bool:
        """Return True if the flag character is active."""
        return name in self.flags

    @property
    def directive(self) -> str:
        """Canonical directive text for this spec."""
        return reconstruct(self)


def reconstruct(spec: FormatSpec) -> str:
    """Rebuild the directive text that produced ``spec``.

    Flags are emitted in the canonical order ``+ - # space 0`` whatever order
    they were given in, followed by width, ``.precision`` and the verb.

    Example:
        >>> reconstruct(FormatSpec("x", frozenset("0+"), width=5, precision=2))
        '%+05.2x'
    """
    parts = [DIRECTIVE_PREFIX]
    parts.extend(f for f in FLAG_ORDER if f in spec.flags)
    if spec.width is not None:
        parts.append(str(spec.width))
    if spec.precision is not None:
        parts.append(".")
        parts.append(str(spec.precision))
    parts.append(spec.verb)
    return "".join(parts)


class DirectiveScan(NamedTuple):
    """Result of scanning one directive out of a larger format string.

    Attributes:
        flags: Flags seen, in any order
        width: Parsed width, None if absent or out of range
        precision: Parsed precision, None if absent or out of range
        verb: Verb character, empty if the text ended first
        end: Index just past the directive
        bad_width: Width digits exceeded MAX_FORMAT_NUMBER
        bad_precision: Precision digits exceeded MAX_FORMAT_NUMBER
    """

    flags: frozenset[str]
    width: int | None
    precision: int | None
    verb: str
    end: int
    bad_width: bool
    bad_precision: bool


def _scan_number(text: str, pos: int) -> tuple[int | None, int, bool]:
    """Scan a run of ASCII digits starting at ``pos``.

    Returns:
        (value or None, position after digits, True if out of range)
    """
    end = pos
    while end < len(text) and "0" <= text[end] <= "9":
        end += 1
    if end == pos:
        return None, end, False
    digits = text[pos:end]
    if len(digits) > _MAX_DIGITS or int(digits) > MAX_FORMAT_NUMBER:
        return None, end, True
    return int(digits), end, False


def scan_directive(text: str, start: int) -> DirectiveScan:
    """Scan the directive whose body begins at ``start`` (just past ``%``).

    Lenient: never raises. Callers inspect ``verb``, ``bad_width`` and
    ``bad_precision`` to decide how to report problems.
    """
    pos = start
    flags: set[str] = set()
    while pos < len(text) and text[pos] in _FLAG_SET:
        flags.add(text[pos])
        pos += 1

    width, pos, bad_width = _scan_number(text, pos)

    precision: int | None = None
    bad_precision = False
    if pos < len(text) and text[pos] == ".":
        precision, pos, bad_precision = _scan_number(text, pos + 1)
        # A bare "." means precision zero
        if precision is None and not bad_precision:
            precision = 0

    verb = ""
    if pos < len(text):
        verb = text[pos]
        pos += 1

    return DirectiveScan(
        flags=frozenset(flags),
        width=width,
        precision=precision,
        verb=verb,
        end=pos,
        bad_width=bad_width,
        bad_precision=bad_precision,
    )


def parse_directive(text: str) -> FormatSpec:
    """Parse a single complete directive such as ``%+5.2x``.

    Args:
        text: Directive text, including the leading ``%``

    Returns:
        Parsed FormatSpec

    Raises:
        DirectiveError: If the text does not start with ``%``, has no verb,
            uses ``%`` as the verb, has trailing characters, or has a width
            or precision above MAX_FORMAT_NUMBER.
    """
    if not text.startswith(DIRECTIVE_PREFIX):
        msg = f"Directive must start with {DIRECTIVE_PREFIX!r}: {text!r}"
        raise DirectiveError(msg, text)

    scan = scan_directive(text, len(DIRECTIVE_PREFIX))
    if scan.bad_width:
        msg = f"Directive width exceeds {MAX_FORMAT_NUMBER}: {text!r}"
        raise DirectiveError(msg, text)
    if scan.bad_precision:
        msg = f"Directive precision exceeds {MAX_FORMAT_NUMBER}: {text!r}"
        raise DirectiveError(msg, text)
    if not scan.verb or scan.verb == DIRECTIVE_PREFIX:
        msg = f"Directive has no verb: {text!r}"
        raise DirectiveError(msg, text)
    if scan.end != len(text):
        msg = f"Unexpected characters after verb in directive: {text!r}"
        raise DirectiveError(msg, text)

    return FormatSpec(
        verb=scan.verb,
        flags=scan.flags,
        width=scan.width,
        precision=scan.precision,
    )

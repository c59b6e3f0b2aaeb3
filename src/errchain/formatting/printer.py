"""Printf-style host printer with Formatter delegation.

Scans ``%[flags][width][.precision]verb`` directives and renders each
argument. Values implementing ``Formatter`` render themselves; everything
else has the directive applied to its plain rendering:

    Verb      str()-rendered values     int                 float
    ----      ---------------------     ---                 -----
    v         str(value)                decimal             shortest digits
    s         str(value)                -                   -
    q         double-quoted, escaped    -                   -
    x / X     hex of UTF-8 bytes        hex                 -
    d b o c   -                         dec/bin/oct/char    -
    e E f F   -                         -                   Python format
    g G       -                         -                   shortest digits

``%#v`` on a non-Formatter writes ``repr(value)``.

Shortest-digit floats use exponent form when the decimal exponent is below
-4 or at least 6 (``1e+06``, ``0.1234567``). With a precision or the ``#``
flag, ``g``/``G`` fall back to Python formatting.

The printer never raises on a malformed format string. Problems are written
into the output as markers (``%!z(int=5)``, ``%!v(MISSING)``,
``%!(NOVERB)``, ``%!(EXTRA ...)``) and logged at DEBUG, so a broken log call
still produces a readable line.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import io
import logging
import math
from decimal import Decimal

from errchain.constants import (
    DIRECTIVE_PREFIX,
    FLOAT_VERBS,
    INTEGER_VERBS,
    MARKER_BAD_PREC,
    MARKER_BAD_WIDTH,
    MARKER_EXTRA,
    MARKER_MISSING,
    MARKER_NO_VERB,
    STRING_VERBS,
)

from .directive import FormatSpec, scan_directive
from .state import FormatState, Formatter, TextSink

__all__ = [
    "format_value",
    "fprintf",
    "sprintf",
]

logger = logging.getLogger(__name__)

# verb -> (Python format code, alternate-form prefix)
_INTEGER_BASES: dict[str, tuple[str, str]] = {
    "v": ("d", ""),
    "d": ("d", ""),
    "b": ("b", "0b"),
    "o": ("o", "0"),
    "x": ("x", "0x"),
    "X": ("X", "0X"),
}

_ESCAPES: dict[str, str] = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def sprintf(format: str, *args: object) -> str:  # noqa: A002 - mirrors printf naming
    """Format args according to ``format`` and return the result.

    Example:
        >>> sprintf("%5s|%-4d|%X", "m", 7, "m")
        '    m|7   |6D'
    """
    buffer = io.StringIO()
    fprintf(buffer, format, *args)
    return buffer.getvalue()


def fprintf(sink: TextSink, format: str, *args: object) -> None:  # noqa: A002
    """Format args according to ``format`` and write the result to ``sink``."""
    arg_index = 0
    pos = 0
    length = len(format)

    while pos < length:
        pct = format.find(DIRECTIVE_PREFIX, pos)
        if pct < 0:
            sink.write(format[pos:])
            break
        if pct > pos:
            sink.write(format[pos:pct])

        scan = scan_directive(format, pct + 1)
        pos = scan.end

        if not scan.verb:
            logger.debug("Format string ends inside a directive: %r", format)
            sink.write(MARKER_NO_VERB)
            break
        if scan.verb == DIRECTIVE_PREFIX:
            sink.write(DIRECTIVE_PREFIX)
            continue
        if scan.bad_width:
            logger.debug("Width out of range in format string: %r", format)
            sink.write(MARKER_BAD_WIDTH)
        if scan.bad_precision:
            logger.debug("Precision out of range in format string: %r", format)
            sink.write(MARKER_BAD_PREC)

        if arg_index >= len(args):
            logger.debug("Missing argument for %%%s in %r", scan.verb, format)
            sink.write(f"%!{scan.verb}{MARKER_MISSING}")
            continue

        value = args[arg_index]
        arg_index += 1
        spec = FormatSpec(
            verb=scan.verb,
            flags=scan.flags,
            width=scan.width,
            precision=scan.precision,
        )
        format_value(FormatState(sink, spec), value)

    if arg_index < len(args):
        extras = args[arg_index:]
        logger.debug("%d extra argument(s) for format string %r", len(extras), format)
        rendered = ", ".join(f"{type(v).__name__}={v}" for v in extras)
        sink.write(f"{MARKER_EXTRA}{rendered})")


def format_value(state: FormatState, value: object) -> None:
    """Render one value under the directive carried by ``state``.

    Formatter values always render themselves, whatever the verb.
    """
    if isinstance(value, Formatter) and not isinstance(value, type):
        value.format_to(state)
        return

    verb = state.verb
    if verb == "v" and state.flag("#"):
        _pad(state, repr(value))
        return

    match value:
        case bool():
            if verb in STRING_VERBS:
                _format_string(state, str(value))
                return
        case int():
            if verb in INTEGER_VERBS:
                _format_integer(state, value)
                return
        case float():
            if verb in FLOAT_VERBS:
                _format_float(state, value)
                return
        case _:
            if verb in STRING_VERBS:
                _format_string(state, str(value))
                return

    _bad_verb(state, value)


def _bad_verb(state: FormatState, value: object) -> None:
    logger.debug("Bad verb %%%s for %s", state.verb, type(value).__name__)
    state.write(f"%!{state.verb}({type(value).__name__}={value})")


def _pad(state: FormatState, text: str, *, zero: bool | None = None) -> None:
    """Write text padded to the state's width.

    ``-`` pads on the right with spaces and wins over ``0``. Otherwise pad on
    the left, with zeros when ``zero`` (default: the ``0`` flag) is set.
    """
    width = state.width
    if width is None or len(text) >= width:
        state.write(text)
        return
    fill = width - len(text)
    if state.flag("-"):
        state.write(text + " " * fill)
        return
    if zero is None:
        zero = state.flag("0")
    state.write(("0" if zero else " ") * fill + text)


def _format_string(state: FormatState, text: str) -> None:
    verb = state.verb
    precision = state.precision

    if verb in ("x", "X"):
        data = text.encode("utf-8", "surrogatepass")
        if precision is not None:
            data = data[:precision]
        _pad(
            state,
            _hex(data, upper=verb == "X", sharp=state.flag("#"), spaced=state.flag(" ")),
        )
        return

    if precision is not None:
        text = text[:precision]
    if verb == "q":
        text = _quote(text, ascii_only=state.flag("+"), backquote=state.flag("#"))
    _pad(state, text)


def _hex(data: bytes, *, upper: bool, sharp: bool, spaced: bool) -> str:
    """Hex-encode bytes.

    ``#`` adds a ``0x`` prefix once, or before every byte when ``spaced``.
    """
    if not data:
        return ""
    code = "02X" if upper else "02x"
    prefix = ("0X" if upper else "0x") if sharp else ""
    pairs = [format(b, code) for b in data]
    if spaced:
        return " ".join(prefix + p for p in pairs)
    return prefix + "".join(pairs)


def _can_backquote(text: str) -> bool:
    """Return True if text can be written between backquotes unchanged."""
    for ch in text:
        if ch == "`" or ch in ("\x7f", "\ufeff"):
            return False
        if ch < " " and ch != "\t":
            return False
    return True


def _quote(text: str, *, ascii_only: bool, backquote: bool) -> str:
    """Double-quote text with backslash escapes.

    Args:
        text: Text to quote
        ascii_only: Escape every non-ASCII character (the ``+`` flag)
        backquote: Prefer a raw backquoted string when possible (the ``#`` flag)
    """
    if backquote and _can_backquote(text):
        return f"`{text}`"

    out = ['"']
    for ch in text:
        escape = _ESCAPES.get(ch)
        if escape is not None:
            out.append(escape)
            continue
        code = ord(ch)
        if ch.isprintable() and not (ascii_only and code >= 0x80):
            out.append(ch)
        elif code < 0x80:
            out.append(f"\\x{code:02x}")
        elif code < 0x10000:
            out.append(f"\\u{code:04x}")
        else:
            out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


def _format_integer(state: FormatState, value: int) -> None:
    verb = state.verb
    if verb == "c":
        _pad(state, chr(value) if 0 <= value <= 0x10FFFF else "\ufffd")
        return

    code, prefix = _INTEGER_BASES[verb]
    digits = format(abs(value), code)

    precision = state.precision
    if precision is not None:
        # Precision is the minimum digit count; %.0d of zero prints nothing
        digits = "" if precision == 0 and value == 0 else digits.zfill(precision)

    if not state.flag("#") or (verb == "o" and digits.startswith("0")):
        prefix = ""

    if value < 0:
        sign = "-"
    elif state.flag("+"):
        sign = "+"
    elif state.flag(" "):
        sign = " "
    else:
        sign = ""

    head = sign + prefix
    width = state.width
    if width is not None and precision is None and state.flag("0") and not state.flag("-"):
        digits = digits.zfill(width - len(head))

    _pad(state, head + digits, zero=False)


def _shortest_general(value: float, upper: bool) -> str:
    """Shortest round-trip digits, exponent form when exp < -4 or exp >= 6."""
    _, digit_tuple, exp = Decimal(repr(abs(value))).normalize().as_tuple()
    digits, exponent = tuple(digit_tuple), int(exp)
    exp10 = len(digits) + exponent - 1
    if -4 <= exp10 < 6:
        text = format(Decimal((0, digits, exponent)), "f")
    else:
        mantissa = str(digits[0])
        if len(digits) > 1:
            mantissa += "." + "".join(map(str, digits[1:]))
        esign = "-" if exp10 < 0 else "+"
        text = f"{mantissa}{'E' if upper else 'e'}{esign}{abs(exp10):02d}"
    return text


def _format_float(state: FormatState, value: float) -> None:
    """Render a float.

    ``%v``, ``%g`` and ``%G`` without precision use the shortest digits that
    round-trip. Everything else goes through Python's format-spec
    mini-language.
    """
    if (
        state.verb in "vgG"
        and state.precision is None
        and not state.flag("#")
        and math.isfinite(value)
    ):
        if math.copysign(1.0, value) < 0:
            head = "-"
        elif state.flag("+"):
            head = "+"
        elif state.flag(" "):
            head = " "
        else:
            head = ""
        body = _shortest_general(value, upper=state.verb == "G")
        width = state.width
        if width is not None and state.flag("0") and not state.flag("-"):
            body = body.zfill(width - len(head))
        _pad(state, head + body, zero=False)
        return

    parts: list[str] = []
    if state.flag("-"):
        parts.append("<")
    if state.flag("+"):
        parts.append("+")
    elif state.flag(" "):
        parts.append(" ")
    if state.flag("#"):
        parts.append("#")
    if state.flag("0") and not state.flag("-"):
        parts.append("0")
    if state.width is not None:
        parts.append(str(state.width))
    if state.precision is not None:
        parts.append(f".{state.precision}")
    if state.verb != "v":
        parts.append(state.verb)
    state.write(format(value, "".join(parts)))

"""Tests for formatting/printer.py: sprintf/fprintf host printer.

Covers:
- String verbs (v s q x X) with width, precision and flags
- Integer and float verbs
- Formatter delegation and %#v repr fallback
- Error markers for malformed format strings (never raises)
- DEBUG logging of malformed directives

Python 3.13+.
"""

from __future__ import annotations

import io
import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from errchain import FormatState, fprintf, sprintf


class _Shout:
    def format_to(self, state: FormatState) -> None:
        state.write(f"<{state.verb}>")


class TestStringVerbs:
    """v/s/q/x/X applied to str() renderings."""

    @pytest.mark.parametrize(
        ("fmt", "arg", "expected"),
        [
            ("%v", "m", "m"),
            ("%s", "m", "m"),
            ("%5s", "m", "    m"),
            ("%-5s|", "m", "m    |"),
            ("%05s", "m", "0000m"),
            ("%-05s|", "m", "m    |"),
            ("%.2s", "hello", "he"),
            ("%6.2s", "hello", "    he"),
            ("%+v", "m", "m"),
            ("%s", ValueError("boom"), "boom"),
            ("%v", None, "None"),
            ("%v", True, "True"),
        ],
    )
    def test_plain(self, fmt: str, arg: object, expected: str) -> None:
        assert sprintf(fmt, arg) == expected

    @pytest.mark.parametrize(
        ("fmt", "arg", "expected"),
        [
            ("%X", "m", "6D"),
            ("%x", "hi", "6869"),
            ("% x", "hi", "68 69"),
            ("%#x", "hi", "0x6869"),
            ("%# X", "hi", "0X68 0X69"),
            ("%.1x", "hi", "68"),
            ("%x", "é", "c3a9"),
            ("%6x", "m", "    6d"),
            ("%x", "", ""),
        ],
    )
    def test_hex(self, fmt: str, arg: str, expected: str) -> None:
        assert sprintf(fmt, arg) == expected

    @pytest.mark.parametrize(
        ("fmt", "arg", "expected"),
        [
            ("%q", "m", '"m"'),
            ("%q", 'a"b\n', '"a\\"b\\n"'),
            ("%q", "tab\there", '"tab\\there"'),
            ("%q", "\x01", '"\\x01"'),
            ("%q", "é", '"é"'),
            ("%+q", "é", '"\\u00e9"'),
            ("%+q", "\U0001f600", '"\\U0001f600"'),
            ("%#q", "abc", "`abc`"),
            ("%#q", "a`b", '"a`b"'),
            ("%#q", "a\nb", '"a\\nb"'),
            ("%.2q", "hello", '"he"'),
            ("%5q", "m", '  "m"'),
        ],
    )
    def test_quote(self, fmt: str, arg: str, expected: str) -> None:
        assert sprintf(fmt, arg) == expected

    @given(text=st.text(), width=st.integers(min_value=0, max_value=50))
    def test_width_is_a_minimum(self, text: str, width: int) -> None:
        """PROPERTY: %Ns output is max(len, N) long and ends with the text."""
        out = sprintf(f"%{width}s", text) if width else sprintf("%s", text)
        assert len(out) == max(len(text), width)
        assert out.endswith(text)

    @given(text=st.text(), precision=st.integers(min_value=0, max_value=50))
    def test_precision_truncates(self, text: str, precision: int) -> None:
        """PROPERTY: %.Ns keeps the first N characters."""
        assert sprintf(f"%.{precision}s", text) == text[:precision]


class TestIntegerVerbs:
    """d/b/o/x/X/c/v on ints."""

    @pytest.mark.parametrize(
        ("fmt", "arg", "expected"),
        [
            ("%d", 42, "42"),
            ("%v", 7, "7"),
            ("%+d", 42, "+42"),
            ("%+v", 42, "+42"),
            ("% d", 42, " 42"),
            ("%5d", -42, "  -42"),
            ("%05d", -42, "-0042"),
            ("%-5d|", 42, "42   |"),
            ("%x", 255, "ff"),
            ("%#x", 255, "0xff"),
            ("%X", 255, "FF"),
            ("%#08x", 255, "0x0000ff"),
            ("%o", 8, "10"),
            ("%#o", 8, "010"),
            ("%#o", 0, "0"),
            ("%b", 5, "101"),
            ("%#b", 5, "0b101"),
            ("%.3d", 7, "007"),
            ("%.0d", 0, ""),
            ("%5.3d", -7, " -007"),
            ("%c", 65, "A"),
            ("%c", -1, "\ufffd"),
        ],
    )
    def test_integer(self, fmt: str, arg: int, expected: str) -> None:
        assert sprintf(fmt, arg) == expected

    @given(value=st.integers(min_value=-(10**30), max_value=10**30))
    def test_decimal_matches_str(self, value: int) -> None:
        """PROPERTY: %d renders like str() for every int."""
        assert sprintf("%d", value) == str(value)

    def test_bool_is_not_an_integer(self) -> None:
        assert sprintf("%d", True) == "%!d(bool=True)"


class TestFloatVerbs:
    """e/f/g/v on floats."""

    @pytest.mark.parametrize(
        ("fmt", "arg", "expected"),
        [
            ("%.2f", 3.14159, "3.14"),
            ("%v", 1.5, "1.5"),
            ("%+.1f", 2.0, "+2.0"),
            ("%8.3e", 1500.0, "1.500e+03"),
            ("%g", 0.5, "0.5"),
            ("%-6.1f|", 1.0, "1.0   |"),
            ("%07.2f", -1.5, "-001.50"),
        ],
    )
    def test_float(self, fmt: str, arg: float, expected: str) -> None:
        assert sprintf(fmt, arg) == expected

    @pytest.mark.parametrize(
        ("fmt", "arg", "expected"),
        [
            ("%g", 0.1234567, "0.1234567"),
            ("%v", 123456.0, "123456"),
            ("%v", 1e6, "1e+06"),
            ("%v", 123456789.0, "1.23456789e+08"),
            ("%g", 0.0001234, "0.0001234"),
            ("%g", 0.00001, "1e-05"),
            ("%G", 2.5e-7, "2.5E-07"),
            ("%v", 0.0, "0"),
            ("%v", -0.0, "-0"),
            ("%+v", 3.0, "+3"),
            ("%08g", -1.25, "-0001.25"),
            ("%-7v|", 0.5, "0.5    |"),
            ("%.3g", 0.1234567, "0.123"),
        ],
    )
    def test_shortest_digits(self, fmt: str, arg: float, expected: str) -> None:
        assert sprintf(fmt, arg) == expected

    @given(value=st.floats(allow_nan=False, allow_infinity=False))
    def test_shortest_digits_round_trip(self, value: float) -> None:
        """PROPERTY: %v output parses back to the same float."""
        assert float(sprintf("%v", value)) == value


class TestDispatch:
    """Formatter delegation and %#v."""

    def test_formatter_handles_every_verb(self) -> None:
        assert sprintf("%d %s %#v", _Shout(), _Shout(), _Shout()) == "<d> <s> <v>"

    def test_sharp_v_is_repr(self) -> None:
        assert sprintf("%#v", "m") == "'m'"
        assert sprintf("%#v", [1, "a"]) == "[1, 'a']"
        assert sprintf("%#v", ValueError("x")) == "ValueError('x')"

    def test_sharp_v_is_padded(self) -> None:
        assert sprintf("%#5v", 1) == "    1"

    def test_literal_text_and_percent(self) -> None:
        assert sprintf("100%% of %s", "it") == "100% of it"

    def test_no_directives(self) -> None:
        assert sprintf("plain") == "plain"

    def test_fprintf_writes_to_sink(self) -> None:
        buffer = io.StringIO()
        fprintf(buffer, "%s=%d\n", "x", 1)
        assert buffer.getvalue() == "x=1\n"


class TestMarkers:
    """Malformed input produces markers, never exceptions."""

    @pytest.mark.parametrize(
        ("fmt", "args", "expected"),
        [
            ("%s", (42,), "%!s(int=42)"),
            ("%d", ("x",), "%!d(str=x)"),
            ("%z", ("x",), "%!z(str=x)"),
            ("%d", (), "%!d(MISSING)"),
            ("a %s %s", ("x",), "a x %!s(MISSING)"),
            ("abc%", (), "abc%!(NOVERB)"),
            ("%s", ("a", "b", 3), "a%!(EXTRA str=b, int=3)"),
            ("%1234567s", ("m",), "%!(BADWIDTH)m"),
            ("%.1234567s", ("m",), "%!(BADPREC)m"),
        ],
    )
    def test_marker(self, fmt: str, args: tuple[object, ...], expected: str) -> None:
        assert sprintf(fmt, *args) == expected

    def test_markers_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="errchain.formatting.printer"):
            sprintf("%d")
        assert any("Missing argument" in r.getMessage() for r in caplog.records)

    @given(
        fmt=st.text(max_size=30),
        args=st.lists(st.one_of(st.text(), st.integers(-(10**12), 10**12))),
    )
    def test_never_raises(self, fmt: str, args: list[object]) -> None:
        """PROPERTY: any format string with any arguments renders."""
        assert isinstance(sprintf(fmt, *args), str)

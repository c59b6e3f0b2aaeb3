"""Builders for ChainedError detail text.

A detail block usually carries a source location, a snippet of the input
that failed, or both::

    err = ChainedError(
        "parsing line 23",
        snippet_detail(source, pos, path="cmd/prog/parser.go"),
        cause,
    )

Offsets are character offsets into a Python string, not byte offsets.
Lines and columns are 0-based unless ``zero_based=False`` is passed.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "column_offset",
    "get_line_content",
    "line_offset",
    "location_detail",
    "snippet_detail",
]


def line_offset(source: str, pos: int) -> int:
    """Get 0-based line number of a character offset.

    Example:
        >>> source = "line1\\nline2\\nline3"
        >>> line_offset(source, 0)
        0
        >>> line_offset(source, 6)
        1

    Raises:
        ValueError: If pos is negative
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(source))  # Clamp to source length

    return source.count("\n", 0, pos)


def column_offset(source: str, pos: int) -> int:
    """Get 0-based column of a character offset (characters since line start).

    Example:
        >>> column_offset("hello\\nworld", 2)
        2
        >>> column_offset("hello\\nworld", 6)
        0

    Raises:
        ValueError: If pos is negative
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(source))

    line_start = source.rfind("\n", 0, pos)
    if line_start == -1:
        return pos
    return pos - line_start - 1


def get_line_content(source: str, line_number: int, zero_based: bool = True) -> str:
    """Extract one line of source, without its line terminator.

    Lines are split on ``"\\n"`` only, so ``line_offset`` results index the
    same line. A trailing ``"\\r"`` is dropped.

    Example:
        >>> get_line_content("a\\rb\\nc", 1)
        'c'

    Raises:
        ValueError: If line_number is negative or past the last line
    """
    if not zero_based:
        line_number -= 1

    if line_number < 0:
        msg = f"Line number must be >= 0, got {line_number}"
        raise ValueError(msg)

    lines = source.split("\n")
    if line_number >= len(lines):
        msg = f"Line {line_number} past end of source ({len(lines)} lines)"
        raise ValueError(msg)

    return lines[line_number].removesuffix("\r")


def location_detail(path: str, line: int, column: int | None = None) -> str:
    """Detail line for a source location, e.g. ``cmd/prog/reader.go:122``."""
    if column is None:
        return f"{path}:{line}"
    return f"{path}:{line}:{column}"


def snippet_detail(
    source: str,
    pos: int,
    path: str | None = None,
    context_lines: int = 0,
    marker: str = "^",
) -> str:
    """Detail block showing the source around ``pos``.

    The line containing ``pos`` is followed by a marker under its column.
    ``context_lines`` lines before and after are included. When ``path`` is
    given, a final 1-based ``path:line:column`` location line is appended.

    Example:
        >>> source = "if x > 3 {\\niff x > 3 {\\n}"
        >>> print(snippet_detail(source, 11, path="cmd/prog/parser.go"))
        iff x > 3 {
        ^
        cmd/prog/parser.go:2:1

    Raises:
        ValueError: If pos is negative or context_lines is negative
    """
    if context_lines < 0:
        msg = f"context_lines must be >= 0, got {context_lines}"
        raise ValueError(msg)

    line_num = line_offset(source, pos)
    col_num = column_offset(source, pos)

    last_line = source.count("\n")
    start_line = max(0, line_num - context_lines)
    end_line = min(last_line, line_num + context_lines)

    block: list[str] = []
    for i in range(start_line, end_line + 1):
        block.append(get_line_content(source, i))
        if i == line_num:
            block.append(" " * col_num + marker)

    if path is not None:
        block.append(location_detail(path, line_num + 1, col_num + 1))

    return "\n".join(block)

"""Quickstart example for errchain.

Builds a three-link chain the way a file reader, a parser and a lexer would,
then prints it in every shape the error supports.
"""

import logging
import sys

from errchain import ChainedError, sprintf
from errchain.chain import find, iter_chain
from errchain.detail import location_detail, snippet_detail
from errchain.log import ChainedErrorFormatter

SOURCE = "if x > 3 {\niff x > 3 {\n}\n"

syntax = ChainedError("syntax error", location_detail("cmd/prog/parser.go", 214))
parsing = ChainedError(
    "parsing line 2",
    snippet_detail(SOURCE, SOURCE.index("iff"), path="input.txt"),
    syntax,
)
err = ChainedError('reading "input.txt"', location_detail("cmd/prog/reader.go", 122), parsing)

# Example 1: Compact form
print("=" * 50)
print("Example 1: Compact")
print("=" * 50)
print(err)
# Output: reading "input.txt": parsing line 2: syntax error

# Example 2: Verbose report
print("\n" + "=" * 50)
print("Example 2: Verbose (%+v)")
print("=" * 50)
print(f"{err:+v}", end="")

# Example 3: Width, precision and other verbs go to the compact string
print("\n" + "=" * 50)
print("Example 3: Directives")
print("=" * 50)
print(sprintf("[%30.20s]", err))
print(sprintf("%q", err))
print(sprintf("%#v", syntax))

# Example 4: Walking the chain
print("\n" + "=" * 50)
print("Example 4: Chain walking")
print("=" * 50)
for link in iter_chain(err):
    print(f"- {link.message}" if isinstance(link, ChainedError) else f"- {link}")
print("innermost ChainedError:", find(syntax, ChainedError))

# Example 5: Logging with the full report
print("\n" + "=" * 50)
print("Example 5: Logging")
print("=" * 50)
handler = logging.StreamHandler(sys.stdout)
handler.setFormatter(ChainedErrorFormatter("%(levelname)s %(message)s", include_traceback=False))
log = logging.getLogger("quickstart")
log.addHandler(handler)
log.propagate = False
try:
    raise err
except ChainedError:
    log.exception("load failed")

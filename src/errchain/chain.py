"""Generic walking of error chains.

Works on any exception: links are followed through an ``unwrap()`` method
when the error has one (ChainedError and compatible types), otherwise through
Python's ``__cause__``.

Chains are assumed acyclic. A cycle makes ``iter_chain`` infinite and
``root_cause`` never return.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeVar

E = TypeVar("E", bound=BaseException)

__all__ = [
    "contains",
    "find",
    "iter_chain",
    "root_cause",
    "unwrap",
]


def unwrap(err: BaseException) -> BaseException | None:
    """Return the error directly wrapped by ``err``, or None."""
    method = getattr(err, "unwrap", None)
    if callable(method):
        return method()
    return err.__cause__


def iter_chain(err: BaseException | None) -> Iterator[BaseException]:
    """Yield ``err`` and every error beneath it, outermost first.

    Example:
        >>> inner = ValueError("syntax error")
        >>> [str(e) for e in iter_chain(ChainedError("parsing", cause=inner))]
        ['parsing: syntax error', 'syntax error']
    """
    while err is not None:
        yield err
        err = unwrap(err)


def find(err: BaseException | None, kind: type[E]) -> E | None:
    """Return the first link in the chain that is an instance of ``kind``."""
    for link in iter_chain(err):
        if isinstance(link, kind):
            return link
    return None


def contains(err: BaseException | None, target: BaseException) -> bool:
    """Return True if any link in the chain compares equal to ``target``.

    Exceptions compare by identity unless they define ``__eq__``, so this is
    the check for sentinel error instances.
    """
    return any(link == target for link in iter_chain(err))


def root_cause(err: BaseException) -> BaseException:
    """Return the innermost error of the chain."""
    for link in iter_chain(err):
        err = link
    return err

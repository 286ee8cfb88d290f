# Tracks the number of the last line read by the stub reader, the way
# interpreters keep a "last line read" register around for diagnostics.
# Probing a descriptor must leave the register as it found it, so readers
# wrap their work in `preserved_lineno()`.

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional


_last_lineno: ContextVar[Optional[int]] = ContextVar("pkgstub_last_lineno", default=None)


def last_lineno() -> Optional[int]:
    return _last_lineno.get()


def set_last_lineno(lineno: Optional[int]) -> None:
    _last_lineno.set(lineno)


@contextmanager
def preserved_lineno() -> Iterator[None]:
    saved = _last_lineno.get()
    try:
        yield
    finally:
        _last_lineno.set(saved)

"""Reads the stub lines at the top of a package descriptor.

A descriptor starts with a header line followed by a line of the form::

    # stub: <name> <version> <platform> <require paths>

optionally followed by an extensions line and, for default packages, a files
line. Reading these lines is enough to list a package without evaluating the
rest of the descriptor.
"""
from typing import Optional, Sequence, TextIO

from pkgstub._src.constants import EXTENSIONS_PREFIX, FILES_PREFIX, STUB_PREFIX
from pkgstub._src.lineno import last_lineno, set_last_lineno
from pkgstub._src.models.platform import Platform
from pkgstub._src.models.version import Version
from pkgstub._src.utils import split_nul, strip_prefix


NO_EXTENSIONS: tuple[str, ...] = ()
NO_FILES: tuple[str, ...] = ()

# Most packages only list "lib", so share the strings and the one-element list.
REQUIRE_PATHS = {
    "lib": "lib",
    "test": "test",
    "ext": "ext",
}
REQUIRE_PATH_LIST = {
    "lib": ("lib",),
}


class StubLine:
    __slots__ = ("name", "version", "platform", "require_paths", "files", "extensions", "full_name")

    def __init__(self, data: str, files: Sequence[str] = NO_FILES, extensions: Sequence[str] = NO_EXTENSIONS):
        parts = data[len(STUB_PREFIX):].split(" ", 3)
        if len(parts) < 2 or not Version.is_correct(parts[1]):
            parts.insert(1, "0")

        self.name = parts[0]
        self.version = Version(parts[1])
        self.platform = Platform.parse(parts[2] if len(parts) > 2 else None)
        self.files = tuple(files)
        self.extensions = tuple(extensions)

        if self.platform.is_ruby:
            self.full_name = f"{self.name}-{self.version}"
        else:
            self.full_name = f"{self.name}-{self.version}-{self.platform}"

        path_list = parts[-1] if len(parts) > 3 else ""
        self.require_paths = REQUIRE_PATH_LIST.get(path_list) or tuple(
            REQUIRE_PATHS.get(path, path) for path in split_nul(path_list)
        )

    def __repr__(self) -> str:
        return f"StubLine({self.full_name!r})"


def _readline(file: TextIO) -> Optional[str]:
    line = file.readline()
    if line == "":
        return None
    set_last_lineno((last_lineno() or 0) + 1)
    return line.removesuffix("\n").removesuffix("\r")


def read_stub_line(file: TextIO, default_package: bool = False) -> Optional[StubLine]:
    """Parse the stub lines from an open descriptor.

    Returns None when the descriptor has no stub line. Lines missing past
    the stub line just leave their fields empty.
    """
    if _readline(file) is None:
        return None
    stub_line = _readline(file)
    if stub_line is None or not stub_line.startswith(STUB_PREFIX):
        return None

    extensions = NO_EXTENSIONS
    files = NO_FILES

    next_line = _readline(file)
    if next_line is not None:
        remainder = strip_prefix(next_line, EXTENSIONS_PREFIX)
        if remainder is not None:
            extensions = tuple(split_nul(remainder))

    if default_package and next_line is not None:
        remainder = strip_prefix(next_line, FILES_PREFIX)
        if remainder is None:
            files_line = _readline(file)
            if files_line is not None:
                remainder = strip_prefix(files_line, FILES_PREFIX)
        if remainder is not None:
            files = tuple(split_nul(remainder))

    return StubLine(stub_line, files=files, extensions=extensions)

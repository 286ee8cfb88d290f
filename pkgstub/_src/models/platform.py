import re
from typing import Optional


RUBY_PLATFORM = "ruby"

_X86_RE = re.compile(r"\Ai\d86\Z")
_OS_VERSION_RE = re.compile(r"\A([a-z_]+?)(\d+(?:\.\d+)*)?\Z")


class Platform:
    """Architecture/OS qualifier of a package.

    ``Platform.RUBY`` marks a package that runs anywhere.
    """

    __slots__ = ("cpu", "os", "version")

    RUBY: "Platform"

    def __init__(self, cpu: Optional[str], os: str, version: Optional[str] = None):
        self.cpu = cpu
        self.os = os
        self.version = version

    @classmethod
    def parse(cls, platform: "str | Platform | None") -> "Platform":
        if isinstance(platform, Platform):
            return platform
        if platform is None or platform in ("", RUBY_PLATFORM):
            return cls.RUBY

        parts = str(platform).split("-")
        if len(parts) == 1:
            cpu, os_token, version = None, parts[0], None
        else:
            cpu = parts[0]
            os_token = parts[1]
            version = "-".join(parts[2:]) or None

        if cpu is not None and _X86_RE.match(cpu):
            cpu = "x86"

        match = _OS_VERSION_RE.match(os_token)
        if match is not None and version is None:
            os_token, version = match.group(1), match.group(2)

        return cls(cpu=cpu, os=os_token, version=version)

    @property
    def is_ruby(self) -> bool:
        return self == Platform.RUBY

    def _key(self) -> tuple:
        return (self.cpu, self.os, self.version)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Platform):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return "-".join(p for p in self._key() if p)

    def __repr__(self) -> str:
        return f"Platform({str(self)!r})"


Platform.RUBY = Platform(cpu=None, os=RUBY_PLATFORM)

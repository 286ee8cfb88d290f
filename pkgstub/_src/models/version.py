from __future__ import annotations

import re
from functools import total_ordering
from typing import Union


VERSION_PATTERN = r"[0-9]+(?:\.[0-9a-zA-Z]+)*(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
ANCHORED_VERSION_RE = re.compile(rf"\A\s*(?:{VERSION_PATTERN})?\s*\Z")
SEGMENT_RE = re.compile(r"[0-9]+|[a-z]+", re.IGNORECASE)


Segment = Union[int, str]


@total_ordering
class Version:
    """A package version.

    Versions are dot separated segments. Numeric segments compare
    numerically, anything containing a letter marks a prerelease and sorts
    before the release, so ``1.0.a < 1.0 < 1.0.1``. Missing trailing
    segments count as zero, so ``1.0 == 1``.
    """

    __slots__ = ("_version", "_segments")

    def __init__(self, version: Union[str, int, float, "Version", None] = "0"):
        if isinstance(version, Version):
            version = str(version)
        raw = "" if version is None else str(version)
        if not self.is_correct(raw):
            raise ValueError(f"Malformed version number string {raw!r}")

        raw = raw.strip() or "0"
        self._version = raw.replace("-", ".pre.")
        self._segments = tuple(
            int(s) if s.isdigit() else s for s in SEGMENT_RE.findall(self._version)
        )

    @classmethod
    def is_correct(cls, version) -> bool:
        if version is None:
            return False
        return ANCHORED_VERSION_RE.match(str(version)) is not None

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    @property
    def is_prerelease(self) -> bool:
        return any(isinstance(s, str) for s in self._segments)

    def _canonical(self) -> tuple[Segment, ...]:
        segments = list(self._segments)
        while len(segments) > 1 and segments[-1] == 0:
            segments.pop()
        return tuple(segments)

    def _cmp(self, other: "Version") -> int:
        lhs, rhs = self._segments, other._segments
        for i in range(max(len(lhs), len(rhs))):
            left = lhs[i] if i < len(lhs) else 0
            right = rhs[i] if i < len(rhs) else 0
            if left == right:
                continue
            # prerelease identifiers sort below numbers
            if isinstance(left, str) and isinstance(right, int):
                return -1
            if isinstance(left, int) and isinstance(right, str):
                return 1
            return -1 if left < right else 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._cmp(other) == 0

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._cmp(other) < 0

    def __hash__(self) -> int:
        return hash(self._canonical())

    def __str__(self) -> str:
        return self._version

    def __repr__(self) -> str:
        return f"Version({self._version!r})"

from pathlib import Path


def split_nul(s: str) -> list[str]:
    """Split a NUL-joined list, dropping trailing empty segments."""
    parts = s.split("\0")
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def ensure_dir(s: str | Path) -> None:
    """Recursively create a directory if it does not exist"""
    path = Path(s)
    path.mkdir(parents=True, exist_ok=True)


def strip_prefix(line: str, prefix: str) -> str | None:
    """Return the remainder of `line` after `prefix`, or None if it doesn't match"""
    if line.startswith(prefix):
        return line[len(prefix):]
    return None

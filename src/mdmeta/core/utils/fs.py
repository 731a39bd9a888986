"""Minimal single-directory glob matching (`*` and `?` only)"""

import re
from pathlib import Path

from mdmeta.errors import NotFoundError


GLOB_CHARS = ("*", "?")


def is_glob_pattern(path: str) -> bool:
    return any(c in path for c in GLOB_CHARS)


def glob_to_regex(pattern: str) -> re.Pattern:
    """Compile a filename pattern: `*` is any run, `?` any one char, the rest literal."""
    parts = []
    for c in pattern:
        if c == "*":
            parts.append(".*")
        elif c == "?":
            parts.append(".")
        else:
            parts.append(re.escape(c))
    return re.compile("".join(parts), re.DOTALL)


def list_matching_files(pattern: str) -> list[Path]:
    """Return sorted files in the pattern's directory whose names match its last component.

    Only the final component may hold wildcards; `**` is not recursive.
    """
    target = Path(pattern)
    directory, regex = target.parent, glob_to_regex(target.name)
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise NotFoundError(f"Failed to read directory {directory}: {e}") from e
    return sorted(p for p in entries if p.is_file() and regex.fullmatch(p.name))

"""Snapshot of the files and directories below a pod root."""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Pattern, Sequence, Set

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}


@lru_cache(maxsize=512)
def _compile_pattern(pattern: str) -> Pattern[str]:
    """Translate a glob pattern (``*``, ``?``, ``[..]``, ``**/``, ``{a,b}``) into a regex."""
    pattern = pattern.strip()
    while pattern.startswith("./"):
        pattern = pattern[2:]
    pattern = pattern.rstrip("/")

    parts: List[str] = []
    index = 0
    depth = 0
    while index < len(pattern):
        char = pattern[index]
        if pattern.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
            continue
        if pattern.startswith("**", index):
            parts.append(".*")
            index += 2
            continue
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "[":
            end = pattern.find("]", index + 1)
            if end == -1:
                parts.append(re.escape(char))
            else:
                body = pattern[index + 1 : end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                parts.append(f"[{body}]")
                index = end
        elif char == "{":
            parts.append("(?:")
            depth += 1
        elif char == "}" and depth:
            parts.append(")")
            depth -= 1
        elif char == "," and depth:
            parts.append("|")
        else:
            parts.append(re.escape(char))
        index += 1
    return re.compile("".join(parts) + r"\Z")


def _ancestors(rel_path: str) -> Iterable[str]:
    parts = rel_path.split("/")
    for end in range(1, len(parts)):
        yield "/".join(parts[:end])


class PathList:
    """Lists the contents of a pod root and evaluates file patterns against it."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self._files: List[str] | None = None
        self._dirs: List[str] | None = None

    @property
    def files(self) -> List[str]:
        if self._files is None:
            self.read_file_system()
        return list(self._files or [])

    @property
    def dirs(self) -> List[str]:
        if self._dirs is None:
            self.read_file_system()
        return list(self._dirs or [])

    def read_file_system(self) -> None:
        """Re-read the contents of the root from disk."""
        if not self.root.is_dir():
            raise FileNotFoundError(f"Pod root not found: {self.root}")

        files: List[str] = []
        dirs: List[str] = []
        for dirpath, dirnames, filenames in os.walk(self.root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(self.root).as_posix() if current_dir != self.root else ""

            dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
            for name in dirnames:
                dirs.append(f"{rel_dir}/{name}" if rel_dir else name)

            for filename in filenames:
                if filename in _EXCLUDED_FILES:
                    continue
                files.append(f"{rel_dir}/{filename}" if rel_dir else filename)

        self._files = sorted(files)
        self._dirs = sorted(dirs)

    def glob(
        self,
        patterns: Sequence[str],
        exclude_patterns: Sequence[str] = (),
        *,
        include_dirs: bool = False,
    ) -> List[Path]:
        """Return the absolute paths matching any pattern, in listing order.

        A pattern naming a directory selects every file below it. With
        ``include_dirs`` the matching directories themselves are returned
        as well (used for bundles such as ``.framework`` directories).
        """
        if not patterns:
            return []
        regexes = [_compile_pattern(pattern) for pattern in patterns]
        excludes = [_compile_pattern(pattern) for pattern in exclude_patterns]

        candidates = list(self.files)
        if include_dirs:
            candidates = sorted(candidates + self.dirs)

        matched: List[Path] = []
        seen: Set[str] = set()
        for rel_path in candidates:
            if rel_path in seen:
                continue
            if not self._matches(rel_path, regexes, nested=not include_dirs):
                continue
            if excludes and self._matches(rel_path, excludes, nested=True):
                continue
            seen.add(rel_path)
            matched.append(self.root / rel_path)
        return matched

    @staticmethod
    def _matches(rel_path: str, regexes: Sequence[Pattern[str]], *, nested: bool) -> bool:
        for regex in regexes:
            if regex.match(rel_path):
                return True
            if nested and any(regex.match(parent) for parent in _ancestors(rel_path)):
                return True
        return False


__all__ = ["PathList"]

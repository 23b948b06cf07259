"""Source file discovery with include/exclude glob filtering."""

from __future__ import annotations

import os
import re
import time
from dataclasses import dataclass
from pathlib import Path
from re import Pattern
from typing import Iterator, List, Sequence

from .config import DEFAULT_EXTENSION
from .errors import NotAFileError, NotFoundError
from .logging import get_logger

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "**/target/**",
    "**/build/**",
    "**/.git/**",
)

_logger = get_logger("path_filter")


def glob_to_regex(pattern: str) -> Pattern[str]:
    """Translate a glob into an anchored regex.

    ``**`` matches any run of characters including ``/``; ``*`` matches any run
    without ``/``. Every other character is literal.
    """
    parts: List[str] = []
    index = 0
    while index < len(pattern):
        if pattern.startswith("**", index):
            parts.append(".*")
            index += 2
        elif pattern[index] == "*":
            parts.append("[^/]*")
            index += 1
        else:
            parts.append(re.escape(pattern[index]))
            index += 1
    return re.compile("".join(parts) + r"\Z", re.DOTALL)


@dataclass(frozen=True)
class GlobRule:
    """Compiled include/exclude glob."""

    pattern: str
    regex: Pattern[str]
    has_slash: bool

    @classmethod
    def compile(cls, pattern: str) -> "GlobRule":
        return cls(pattern=pattern, regex=glob_to_regex(pattern), has_slash="/" in pattern)

    def matches(self, normalized_path: str) -> bool:
        # Slash-free patterns apply to the file name only.
        target = normalized_path if self.has_slash else normalized_path.rsplit("/", 1)[-1]
        return self.regex.match(target) is not None


@dataclass
class ScanResult:
    """Files found by a directory scan along with timing statistics."""

    files: List[Path]
    scan_time_ms: int
    root_path: str

    @property
    def file_count(self) -> int:
        return len(self.files)


def normalize_path(path: str | os.PathLike[str]) -> str:
    return os.fspath(path).replace(os.sep, "/").replace("\\", "/")


class PathFilter:
    """Selects candidate source files beneath a root directory."""

    def __init__(
        self,
        include: Sequence[str] | None = None,
        exclude: Sequence[str] | None = None,
        *,
        extension: str = DEFAULT_EXTENSION,
    ) -> None:
        self.extension = extension
        self._include: List[GlobRule] = []
        self._exclude: List[GlobRule] = []
        self.reset_patterns()
        if include:
            self._include = [GlobRule.compile(pattern) for pattern in include]
        if exclude:
            for pattern in exclude:
                self.add_exclude_pattern(pattern)

    @property
    def include_patterns(self) -> List[str]:
        return [rule.pattern for rule in self._include]

    @property
    def exclude_patterns(self) -> List[str]:
        return [rule.pattern for rule in self._exclude]

    def add_include_pattern(self, pattern: str) -> None:
        self._include.append(GlobRule.compile(pattern))

    def add_exclude_pattern(self, pattern: str) -> None:
        self._exclude.append(GlobRule.compile(pattern))

    def reset_patterns(self) -> None:
        """Restore the default include (by extension) and exclude patterns."""
        self._include = [GlobRule.compile(f"*{self.extension}")]
        self._exclude = [GlobRule.compile(pattern) for pattern in DEFAULT_EXCLUDE_PATTERNS]

    def matches(self, path: str | os.PathLike[str]) -> bool:
        """Return True when ``path`` is not excluded and matches an include glob."""
        normalized = normalize_path(path)
        if any(rule.matches(normalized) for rule in self._exclude):
            return False
        return any(rule.matches(normalized) for rule in self._include)

    def scan_directory(self, root: str | os.PathLike[str]) -> List[Path]:
        """Return the filtered regular files under ``root`` in a stable depth-first order."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise NotFoundError(f"Directory does not exist: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {root}")

        files = [
            path
            for path in _iter_files(root_path)
            if self.matches(_walked_path(path, root_path))
        ]
        _logger.debug("Selected %d of the files under %s", len(files), root_path)
        return files

    def scan_file(self, path: str | os.PathLike[str]) -> List[Path]:
        """Apply the filter to a single file; returns zero or one paths."""
        file_path = Path(path).expanduser().resolve()
        if not file_path.exists():
            raise NotFoundError(f"File does not exist: {path}")
        if not file_path.is_file():
            raise NotAFileError(f"Path is not a file: {path}")
        given = Path(path).expanduser()
        candidate = given.as_posix() if given.is_absolute() else f"./{given.as_posix()}"
        return [file_path] if self.matches(candidate) else []

    def scan_with_stats(self, root: str | os.PathLike[str]) -> ScanResult:
        started = time.perf_counter()
        files = self.scan_directory(root)
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        return ScanResult(files=files, scan_time_ms=elapsed_ms, root_path=os.fspath(root))


def _walked_path(path: Path, root: Path) -> str:
    # Root-relative, prefixed with "." so leading "**/" globs reach top-level dirs.
    return f"./{path.relative_to(root).as_posix()}"


def _iter_files(root: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            candidate = current_dir / filename
            if candidate.is_file():
                yield candidate


__all__ = [
    "DEFAULT_EXCLUDE_PATTERNS",
    "GlobRule",
    "PathFilter",
    "ScanResult",
    "glob_to_regex",
    "normalize_path",
]

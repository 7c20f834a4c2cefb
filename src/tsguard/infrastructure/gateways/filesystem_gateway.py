"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

import fnmatch
import os
from pathlib import Path
from typing import Iterable, List

from tsguard.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def exists(self, path: str) -> bool:
        """Check if a regular file exists at path."""
        return Path(path).is_file()

    def read_text(self, path: str) -> str:
        """Read a UTF-8 text file."""
        return Path(path).read_text(encoding="utf-8")

    def write_text(self, path: str, content: str) -> None:
        """Write text content to a file, keeping its newlines as given."""
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)

    def iter_source_files(
        self, paths: Iterable[str], extensions: Iterable[str], ignores: Iterable[str]
    ) -> List[str]:
        """Get all source files under paths (recursive for directories), minus ignored globs.

        Files named explicitly are kept even when their extension is not in ``extensions``.
        """
        suffixes = tuple(extensions)
        patterns = list(ignores)
        found: set[str] = set()
        for raw in paths:
            root = Path(raw)
            if root.is_file():
                found.add(str(root.resolve()))
                continue
            if not root.is_dir():
                continue
            for dirpath, dirnames, filenames in os.walk(root):
                rel_dir = os.path.relpath(dirpath, root)
                dirnames[:] = sorted(
                    d for d in dirnames
                    if not self._is_ignored(self._relative(rel_dir, d) + "/", patterns)
                )
                for name in filenames:
                    if not name.endswith(suffixes):
                        continue
                    if self._is_ignored(self._relative(rel_dir, name), patterns):
                        continue
                    found.add(str((Path(dirpath) / name).resolve()))
        return sorted(found)

    @staticmethod
    def _relative(rel_dir: str, name: str) -> str:
        return name if rel_dir == "." else f"{rel_dir.replace(os.sep, '/')}/{name}"

    @staticmethod
    def _is_ignored(rel_path: str, patterns: list[str]) -> bool:
        """Match ``dir/**`` style globs against a root-relative posix path."""
        for pattern in patterns:
            if fnmatch.fnmatch(rel_path, pattern):
                return True
            if pattern.endswith("/**") and (
                rel_path.rstrip("/") == pattern[:-3] or rel_path.startswith(pattern[:-2])
            ):
                return True
        return False

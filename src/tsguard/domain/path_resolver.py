"""Relative import resolution against the directory of the file being linted."""

import os
from typing import Optional

from tsguard.domain.protocols import FileSystemProtocol


class PathResolver:
    """Stateless given (current_dir, import_path); existence checks go through the injected filesystem."""

    def __init__(self, filesystem: FileSystemProtocol) -> None:
        self._filesystem = filesystem

    @staticmethod
    def resolve_relative(import_path: str, current_dir: str) -> Optional[str]:
        """Join a ``.``-prefixed specifier onto ``current_dir``; None for package imports."""
        if not import_path.startswith("."):
            return None
        return os.path.abspath(os.path.join(current_dir, import_path))

    def exists_with_extension(self, base_path: str, extension: str) -> bool:
        """True if ``base_path + extension`` exists. Filesystem errors read as absent."""
        try:
            return self._filesystem.exists(base_path + extension)
        except (OSError, ValueError):
            return False

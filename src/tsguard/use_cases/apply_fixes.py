"""Fix use case: apply non-overlapping rule edits, re-lint, repeat until stable."""

import logging
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from tsguard.domain.entities import Diagnostic, TextEdit

if TYPE_CHECKING:
    from tsguard.use_cases.lint_files import LintFilesUseCase

logger = logging.getLogger(__name__)


class ApplyFixesUseCase:
    """
    Multi-pass fixer.

    Each pass applies every fix whose range does not overlap an edit already
    taken in that pass; deferred fixes get another chance after re-linting.
    """

    MAX_PASSES: int = 10

    def __init__(self, linter: "LintFilesUseCase") -> None:
        self.linter = linter

    @staticmethod
    def select_edits(edits: Iterable[TextEdit]) -> list[TextEdit]:
        """Sort by range, drop duplicates and anything overlapping an accepted edit."""
        accepted: list[TextEdit] = []
        for edit in sorted(set(edits), key=lambda e: (e.start, e.end, e.text)):
            if accepted and edit.overlaps(accepted[-1]):
                continue
            accepted.append(edit)
        return accepted

    @staticmethod
    def apply_edits(source: str, edits: Sequence[TextEdit]) -> str:
        """Apply already-selected, non-overlapping edits (back to front)."""
        for edit in sorted(edits, key=lambda e: e.start, reverse=True):
            source = edit.apply(source)
        return source

    def fix_text(
        self, file_path: str, text: str, only: Optional[Sequence[str]] = None
    ) -> tuple[str, list[Diagnostic]]:
        """Return the fixed text and the diagnostics that remain in it."""
        current = text
        for pass_number in range(1, self.MAX_PASSES + 1):
            diagnostics = self.linter.lint_text(file_path, current, only)
            edits = self.select_edits(d.fix for d in diagnostics if d.fix is not None)
            if not edits:
                return current, diagnostics
            updated = self.apply_edits(current, edits)
            logger.debug("%s: pass %d applied %d fix(es)", file_path, pass_number, len(edits))
            if updated == current:
                return current, diagnostics
            current = updated
        logger.warning(
            "%s: fixes did not converge after %d passes", file_path, self.MAX_PASSES
        )
        return current, self.linter.lint_text(file_path, current, only)

"""Formatters for lint results."""

import json
import os
from typing import Protocol, Sequence

from tsguard.domain.entities import LintResult, Severity


class LintReporter(Protocol):
    """Protocol for rendering lint results to text."""

    def render(self, results: Sequence[LintResult]) -> str:
        ...


class StylishReporter:
    """Grouped-by-file output in the style of ESLint's default formatter."""

    def __init__(self, cwd: str = "") -> None:
        self.cwd = cwd or os.getcwd()

    def render(self, results: Sequence[LintResult]) -> str:
        lines: list[str] = []
        errors = warnings = fixable = 0
        for result in results:
            if not result.diagnostics:
                continue
            lines.append(self._display_path(result.file_path))
            for d in result.diagnostics:
                label = "error" if d.severity == Severity.ERROR else "warning"
                lines.append(f"  {d.line}:{d.column}  {label}  {d.message}  {d.rule_id}")
            lines.append("")
            errors += result.error_count
            warnings += result.warning_count
            fixable += result.fixable_count
        total = errors + warnings
        if total == 0:
            return ""
        lines.append(
            f"✖ {total} problem{'s' if total != 1 else ''} "
            f"({errors} error{'s' if errors != 1 else ''}, "
            f"{warnings} warning{'s' if warnings != 1 else ''})"
        )
        if fixable:
            lines.append(f"  {fixable} potentially fixable with the `--fix` option.")
        return "\n".join(lines)

    def _display_path(self, file_path: str) -> str:
        try:
            rel = os.path.relpath(file_path, self.cwd)
        except ValueError:
            return file_path
        return file_path if rel.startswith("..") else rel


class JsonReporter:
    """Machine-readable output: one object per linted file."""

    def render(self, results: Sequence[LintResult]) -> str:
        return json.dumps([r.to_dict() for r in results], indent=2)

"""Per-file activation context handed to rules: source accessor, fixer and report channel."""

import bisect
import re
from typing import Mapping, Optional

from tsguard.domain.entities import Diagnostic, Severity, TextEdit
from tsguard.domain.errors import UnknownMessageError
from tsguard.domain.protocols import FixFunction, RuleFixerProtocol
from tsguard.domain.rules.base import RuleMeta
from tsguard.domain.syntax import SyntaxNode

_PLACEHOLDER = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")


class SourceCode:
    """Source text of one file plus offset -> (line, column) lookups."""

    def __init__(self, text: str, ast: Optional[SyntaxNode] = None) -> None:
        self.text = text
        self.ast = ast
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\r\n|\r|\n", text)]

    def get_text(self, node: Optional[SyntaxNode] = None) -> str:
        """Exact original text of ``node``, or the whole file when node is None."""
        if node is None:
            return self.text
        return self.text[node.start: node.end]

    def position(self, offset: int) -> tuple[int, int]:
        """1-based line and 1-based column of a character offset."""
        line_index = bisect.bisect_right(self._line_starts, offset) - 1
        return line_index + 1, offset - self._line_starts[line_index] + 1


class RuleFixer(RuleFixerProtocol):
    """Builds TextEdits; never mutates the source."""

    def remove(self, node: SyntaxNode) -> TextEdit:
        return TextEdit(node.start, node.end, "")

    def replace_text(self, node: SyntaxNode, text: str) -> TextEdit:
        return TextEdit(node.start, node.end, text)


class RuleContext:
    """Context for one (rule, file) activation. Collects the rule's diagnostics."""

    def __init__(
        self,
        rule_id: str,
        meta: RuleMeta,
        filename: str,
        source_code: SourceCode,
        severity: Severity = Severity.ERROR,
        settings: Optional[Mapping[str, object]] = None,
    ) -> None:
        self.rule_id = rule_id
        self.meta = meta
        self._filename = filename
        self._source_code = source_code
        self._severity = severity
        self._settings: Mapping[str, object] = dict(settings or {})
        self.diagnostics: list[Diagnostic] = []

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def settings(self) -> Mapping[str, object]:
        return self._settings

    @property
    def source_code(self) -> SourceCode:
        return self._source_code

    def report(
        self,
        *,
        node: SyntaxNode,
        message_id: str,
        data: Optional[Mapping[str, str]] = None,
        fix: Optional[FixFunction] = None,
    ) -> None:
        template = self.meta.messages.get(message_id)
        if template is None:
            raise UnknownMessageError(self.rule_id, message_id)
        edit = fix(RuleFixer()) if fix is not None and self.meta.fixable else None
        line, column = self._source_code.position(node.start)
        end_line, end_column = self._source_code.position(node.end)
        self.diagnostics.append(
            Diagnostic(
                rule_id=self.rule_id,
                message_id=message_id,
                message=self.interpolate(template, data or {}),
                severity=self._severity,
                line=line,
                column=column,
                end_line=end_line,
                end_column=end_column,
                fix=edit,
            )
        )

    @staticmethod
    def interpolate(template: str, data: Mapping[str, str]) -> str:
        """Fill ``{{ name }}`` placeholders; unknown names are left as written."""

        def substitute(match: "re.Match[str]") -> str:
            key = match.group(1)
            return str(data[key]) if key in data else match.group(0)

        return _PLACEHOLDER.sub(substitute, template)

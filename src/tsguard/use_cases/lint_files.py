"""Lint use case: activate rules per file, drive one traversal, collect diagnostics."""

import logging
from typing import Iterable, Mapping, Optional, Sequence

from tsguard.domain.config import SOURCE_EXTENSIONS, TsguardConfig
from tsguard.domain.entities import Diagnostic, LintResult, Severity
from tsguard.domain.errors import ParseError
from tsguard.domain.protocols import FileSystemProtocol, ParserGatewayProtocol
from tsguard.domain.rules.base import RuleModule, Visitors
from tsguard.domain.syntax import SyntaxNode
from tsguard.infrastructure.rule_context import RuleContext, SourceCode
from tsguard.use_cases.apply_fixes import ApplyFixesUseCase

logger = logging.getLogger(__name__)


class LintFilesUseCase:
    """Host engine for the rule registry.

    Rules are activated fresh for every file; nothing is carried across files.
    """

    def __init__(
        self,
        parser: ParserGatewayProtocol,
        filesystem: FileSystemProtocol,
        rules: Mapping[str, RuleModule],
        config: Optional[TsguardConfig] = None,
    ) -> None:
        self.parser = parser
        self.filesystem = filesystem
        self.rules = rules
        self.config = config or TsguardConfig()

    def active_rules(self, only: Optional[Sequence[str]] = None) -> list[tuple[str, RuleModule, Severity]]:
        """Rules to run, in registry order. Rules named in ``only`` run even when configured off."""
        selected: list[tuple[str, RuleModule, Severity]] = []
        for rule_id, rule in self.rules.items():
            severity = self.config.severity_for(rule_id)
            if only is not None:
                if rule_id not in only:
                    continue
                if severity == Severity.OFF:
                    severity = Severity.ERROR
            elif severity == Severity.OFF:
                continue
            selected.append((rule_id, rule, severity))
        return selected

    def lint_text(
        self, file_path: str, text: str, only: Optional[Sequence[str]] = None
    ) -> list[Diagnostic]:
        """Lint in-memory source as if it lived at ``file_path``."""
        root = self.parser.parse(file_path, text)
        source_code = SourceCode(text, root)
        contexts: list[RuleContext] = []
        dispatch: dict[str, list[Visitors]] = {}
        for rule_id, rule, severity in self.active_rules(only):
            context = RuleContext(
                rule_id=rule_id,
                meta=rule.meta,
                filename=file_path,
                source_code=source_code,
                severity=severity,
                settings=self.config.settings,
            )
            visitors = rule.create(context)
            contexts.append(context)
            for kind in visitors:
                dispatch.setdefault(kind, []).append(visitors)
        if dispatch:
            self._traverse(root, dispatch)
        diagnostics = [d for context in contexts for d in context.diagnostics]
        diagnostics.sort(key=lambda d: (d.line, d.column))
        return diagnostics

    @staticmethod
    def _traverse(root: SyntaxNode, dispatch: dict[str, list[Visitors]]) -> None:
        """Single pre-order walk in source order, invoking callbacks by node kind."""
        stack: list[SyntaxNode] = [root]
        while stack:
            node = stack.pop()
            for visitors in dispatch.get(node.kind, ()):
                visitors[node.kind](node)
            stack.extend(reversed(node.children))

    def lint_file(
        self, file_path: str, fix: bool = False, only: Optional[Sequence[str]] = None
    ) -> LintResult:
        try:
            text = self._read(file_path)
        except ParseError as exc:
            logger.warning("%s", exc)
            return LintResult(file_path=file_path, diagnostics=[self._fatal(exc)])

        if not fix:
            return LintResult(file_path=file_path, diagnostics=self.lint_text(file_path, text, only))

        output, diagnostics = ApplyFixesUseCase(self).fix_text(file_path, text, only)
        if output == text:
            return LintResult(file_path=file_path, diagnostics=diagnostics)
        self.filesystem.write_text(file_path, output)
        logger.debug("Wrote fixes to %s", file_path)
        return LintResult(file_path=file_path, diagnostics=diagnostics, output=output)

    def execute(
        self, paths: Iterable[str], fix: bool = False, only: Optional[Sequence[str]] = None
    ) -> list[LintResult]:
        files = []
        for path in self.filesystem.iter_source_files(paths, SOURCE_EXTENSIONS, self.config.ignores):
            if self.parser.supports(path):
                files.append(path)
            else:
                logger.warning("Skipping %s: not a JavaScript or TypeScript file", path)
        logger.debug("Linting %d file(s)", len(files))
        return [self.lint_file(path, fix=fix, only=only) for path in files]

    def _read(self, file_path: str) -> str:
        try:
            return self.filesystem.read_text(file_path)
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseError(file_path, str(exc)) from exc

    @staticmethod
    def _fatal(exc: ParseError) -> Diagnostic:
        return Diagnostic(
            rule_id="parse-error",
            message_id="parseError",
            message=f"Parsing error: {exc.reason}",
            severity=Severity.ERROR,
            line=1,
            column=1,
            end_line=1,
            end_column=1,
            fatal=True,
        )

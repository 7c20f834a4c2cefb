"""require-ts-extensions: relative imports of on-disk .ts files must spell out the extension."""

from __future__ import annotations

import os
from typing import Optional

from tsguard.domain.entities import TextEdit
from tsguard.domain.path_resolver import PathResolver
from tsguard.domain.patterns import PatternMatcher
from tsguard.domain.protocols import FileSystemProtocol, RuleContextProtocol, RuleFixerProtocol
from tsguard.domain.rules.base import RuleMeta, Visitors
from tsguard.domain.syntax import (
    EXPORT_ALL_DECLARATION,
    EXPORT_NAMED_DECLARATION,
    IMPORT_DECLARATION,
    SyntaxNode,
)

DEFAULT_TARGET_EXTENSION = ".ts"


class RequireTsExtensionsRule:
    """Rewrite ``'./util'`` to ``"./util.ts"`` when ``util.ts`` sits next to the import target.

    Purely path-existence based: a missed rewrite is acceptable, rewriting a
    specifier that does not name a sibling source file is not.
    """

    rule_id: str = "require-ts-extensions"
    meta: RuleMeta = RuleMeta(
        type="problem",
        description="Require .ts extensions when importing .ts files that exist on disk",
        category="Best Practices",
        fixable="code",
        messages={
            "missingTsExtension": (
                'Missing {{extension}} extension for import "{{importPath}}". Add {{extension}} extension.'
            ),
        },
    )

    def __init__(self, filesystem: FileSystemProtocol) -> None:
        self._resolver = PathResolver(filesystem)

    def create(self, context: RuleContextProtocol) -> Visitors:
        current_dir = os.path.dirname(context.filename)
        extension = str(context.settings.get("target_extension") or DEFAULT_TARGET_EXTENSION)
        resolver = self._resolver

        def check_source(node: SyntaxNode) -> None:
            source = node.field("source")
            if source is None or source.value is None:
                return
            import_path = source.value
            if not import_path.startswith("."):
                return
            if import_path.endswith(extension):
                return
            if PatternMatcher.has_recognized_extension(import_path):
                return
            resolved = resolver.resolve_relative(import_path, current_dir)
            if resolved is None or not resolver.exists_with_extension(resolved, extension):
                return

            def fix(fixer: RuleFixerProtocol) -> Optional[TextEdit]:
                return fixer.replace_text(source, f'"{import_path}{extension}"')

            context.report(
                node=source,
                message_id="missingTsExtension",
                data={"importPath": import_path, "extension": extension},
                fix=fix,
            )

        return {
            IMPORT_DECLARATION: check_source,
            EXPORT_ALL_DECLARATION: check_source,
            EXPORT_NAMED_DECLARATION: check_source,
        }

"""no-mocks-spies: forbid mocks, spies, stubs and fakes in test files."""

from __future__ import annotations

from typing import Optional

from tsguard.domain.entities import TextEdit
from tsguard.domain.patterns import PatternMatcher
from tsguard.domain.protocols import RuleContextProtocol, RuleFixerProtocol
from tsguard.domain.rules.base import RuleMeta, Visitors
from tsguard.domain.syntax import (
    CALL_EXPRESSION,
    EXPRESSION_STATEMENT,
    IMPORT_DECLARATION,
    VARIABLE_DECLARATION,
    VARIABLE_DECLARATOR,
    SyntaxNode,
    is_kind,
    is_statement_boundary,
    nearest_enclosing,
)


class NoMocksSpiesRule:
    """Report test doubles in ``*.test.*`` / ``*.spec.*`` files and propose deleting them.

    Stateless: ``create`` recomputes the test-file gate for every file and
    returns fresh closures, so one instance can serve files linted in parallel.
    """

    rule_id: str = "no-mocks-spies"
    meta: RuleMeta = RuleMeta(
        type="problem",
        description="Disallow the use of mocks and spies in tests",
        category="Best Practices",
        fixable="code",
        messages={
            "noMocks": "Do not use mocks in tests. Use real implementations or dependency injection instead.",
            "noSpies": "Do not use spies in tests. Use real implementations or dependency injection instead.",
        },
    )

    def create(self, context: RuleContextProtocol) -> Visitors:
        if not PatternMatcher.is_test_file(context.filename):
            return {}

        source_code = context.source_code

        def call_expression(node: SyntaxNode) -> None:
            callee = node.field("callee")
            if callee is None:
                return
            family = PatternMatcher.classify_callee(source_code.get_text(callee))
            if family is None:
                return
            message_id = "noSpies" if "spy" in family.value else "noMocks"
            statement = self.enclosing_statement(node)
            context.report(
                node=node,
                message_id=message_id,
                fix=lambda fixer: fixer.remove(statement),
            )

        def import_declaration(node: SyntaxNode) -> None:
            source = node.field("source")
            if source is None or source.value is None:
                return
            if PatternMatcher.classify_import_source(source.value):
                context.report(
                    node=node,
                    message_id="noMocks",
                    fix=lambda fixer: fixer.remove(node),
                )

        def variable_declarator(node: SyntaxNode) -> None:
            init = node.field("init")
            if init is None or init.kind != CALL_EXPRESSION:
                return
            callee = init.field("callee")
            if callee is None:
                return
            if not PatternMatcher.classify_declarator_init(source_code.get_text(callee)):
                return
            declaration = nearest_enclosing(node, is_kind(VARIABLE_DECLARATION))

            def fix(fixer: RuleFixerProtocol) -> Optional[TextEdit]:
                if declaration is None:
                    return None
                return fixer.remove(declaration)

            context.report(node=node, message_id="noMocks", fix=fix)

        return {
            CALL_EXPRESSION: call_expression,
            IMPORT_DECLARATION: import_declaration,
            VARIABLE_DECLARATOR: variable_declarator,
        }

    @staticmethod
    def enclosing_statement(node: SyntaxNode) -> SyntaxNode:
        """The expression statement holding ``node``, else ``node`` itself.

        The walk stops at the first statement or declaration boundary,
        so a fix never reaches past the innermost statement. Arrow functions
        are not boundaries: a spy inside an expression-bodied callback such as
        ``it("x", () => expect(spyOn(a)))`` removes the whole ``it(...)`` call.
        """
        boundary = nearest_enclosing(node, is_statement_boundary)
        if boundary is not None and boundary.kind == EXPRESSION_STATEMENT:
            return boundary
        return node

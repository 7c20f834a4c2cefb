"""Unit tests for the no-mocks-spies rule."""

import dataclasses
from textwrap import dedent
from typing import Optional

from tsguard.domain.entities import TextEdit
from tsguard.domain.rules import NoMocksSpiesRule
from tsguard.infrastructure.rule_context import RuleContext, SourceCode
from tsguard.use_cases.apply_fixes import ApplyFixesUseCase
from tsguard.use_cases.lint_files import LintFilesUseCase

TEST_FILE = "/project/src/client.test.ts"
ONLY = ["no-mocks-spies"]


@dataclasses.dataclass(eq=False)
class Node:
    """Minimal hand-built SyntaxNode for shapes the parser never produces."""

    kind: str
    start: int
    end: int
    parent: Optional["Node"] = None
    value: Optional[str] = None
    fields: dict = dataclasses.field(default_factory=dict)
    children: list = dataclasses.field(default_factory=list)

    def field(self, name: str) -> Optional["Node"]:
        return self.fields.get(name)


def fix(linter: LintFilesUseCase, code: str, path: str = TEST_FILE) -> str:
    output, _remaining = ApplyFixesUseCase(linter).fix_text(path, code, ONLY)
    return output


class TestGate:
    """The rule registers nothing outside *.test.* / *.spec.* files."""

    def test_non_test_file_gets_no_visitors(self) -> None:
        context = RuleContext(
            rule_id=NoMocksSpiesRule.rule_id,
            meta=NoMocksSpiesRule.meta,
            filename="/project/src/helper.ts",
            source_code=SourceCode("jest.mock('x');\n"),
        )
        assert NoMocksSpiesRule().create(context) == {}

    def test_test_file_gets_three_visitors(self) -> None:
        context = RuleContext(
            rule_id=NoMocksSpiesRule.rule_id,
            meta=NoMocksSpiesRule.meta,
            filename=TEST_FILE,
            source_code=SourceCode(""),
        )
        assert set(NoMocksSpiesRule().create(context)) == {
            "CallExpression",
            "ImportDeclaration",
            "VariableDeclarator",
        }

    def test_mocks_in_helper_file_are_allowed(self, linter: LintFilesUseCase) -> None:
        code = "import sinon from 'sinon';\njest.mock('./db');\nconst mockFn = jest.fn();\n"
        assert linter.lint_text("/project/src/helper.ts", code, ONLY) == []

    def test_spec_and_jsx_files_are_checked(self, linter: LintFilesUseCase) -> None:
        code = "vi.mock('./db');\n"
        assert len(linter.lint_text("/project/a.spec.js", code, ONLY)) == 1
        assert len(linter.lint_text("/project/a.test.jsx", code, ONLY)) == 1


class TestCallExpressions:
    def test_jest_mock_statement_is_removed(self, linter: LintFilesUseCase) -> None:
        code = dedent(
            """\
            describe('suite', () => {
              it('works', () => {
                jest.mock('./module');
                expect(true).toBe(true);
              });
            });
            """
        )
        diagnostics = linter.lint_text(TEST_FILE, code, ONLY)
        assert [(d.message_id, d.line, d.column) for d in diagnostics] == [("noMocks", 3, 5)]
        assert diagnostics[0].message == (
            "Do not use mocks in tests. Use real implementations or dependency injection instead."
        )
        assert fix(linter, code) == code.replace("jest.mock('./module');", "")

    def test_spy_reports_no_spies(self, linter: LintFilesUseCase) -> None:
        code = "jest.spyOn(console, 'log');\n"
        diagnostics = linter.lint_text(TEST_FILE, code, ONLY)
        assert [d.message_id for d in diagnostics] == ["noSpies"]
        assert diagnostics[0].fix == TextEdit(0, 27, "")
        assert fix(linter, code) == "\n"

    def test_stub_and_fake_report_no_mocks(self, linter: LintFilesUseCase) -> None:
        code = "sinon.stub(db, 'query');\nsinon.fake();\n"
        diagnostics = linter.lint_text(TEST_FILE, code, ONLY)
        assert [d.message_id for d in diagnostics] == ["noMocks", "noMocks"]
        assert fix(linter, code) == "\n\n"

    def test_mock_wins_when_chain_holds_spy_and_mock(self, linter: LintFilesUseCase) -> None:
        """Outer call text 'jest.spyOn(...).mockReturnValue' is a mock; the inner call is a spy."""
        code = "jest.spyOn(api, 'get').mockReturnValue(1);\n"
        diagnostics = linter.lint_text(TEST_FILE, code, ONLY)
        assert sorted(d.message_id for d in diagnostics) == ["noMocks", "noSpies"]
        # Both propose removing the same statement; the fixer applies it once.
        assert {d.fix for d in diagnostics} == {TextEdit(0, 42, "")}
        assert fix(linter, code) == "\n"

    def test_awaited_call_removes_the_whole_statement(self, linter: LintFilesUseCase) -> None:
        code = "await vi.mock('./db');\nrun();\n"
        assert fix(linter, code) == "\nrun();\n"

    def test_hook_wrapping_a_spy_is_removed_whole(self, linter: LintFilesUseCase) -> None:
        code = "beforeEach(() => jest.spyOn(a, 'b'));\nrun();\n"
        diagnostics = linter.lint_text(TEST_FILE, code, ONLY)
        assert [d.message_id for d in diagnostics] == ["noSpies"]
        assert fix(linter, code) == "\nrun();\n"

    def test_expression_bodied_test_case_is_removed_whole(self, linter: LintFilesUseCase) -> None:
        code = "it('x', () => expect(spyOn(a)).toBe(1));\nrun();\n"
        assert fix(linter, code) == "\nrun();\n"

    def test_block_bodied_test_case_keeps_its_other_statements(self, linter: LintFilesUseCase) -> None:
        code = "it('x', () => {\n  spyOn(a);\n  run();\n});\n"
        assert fix(linter, code) == "it('x', () => {\n  \n  run();\n});\n"

    def test_call_outside_expression_statement_falls_back_to_call(
        self, linter: LintFilesUseCase
    ) -> None:
        code = "function f() {\n  return vi.mocked(api);\n}\n"
        diagnostics = linter.lint_text(TEST_FILE, code, ONLY)
        assert len(diagnostics) == 1
        assert diagnostics[0].fix == TextEdit(24, 38, "")
        assert fix(linter, code) == "function f() {\n  return ;\n}\n"

    def test_real_code_is_left_alone(self, linter: LintFilesUseCase) -> None:
        code = dedent(
            """\
            import { describe, it, expect } from 'vitest';
            import { createRealClient } from '../test-helpers';

            describe('real test', () => {
              it('works with real implementations', () => {
                const client = createRealClient();
                expect(client.isReal()).toBe(true);
              });
            });
            """
        )
        assert linter.lint_text(TEST_FILE, code, ONLY) == []


class TestImportDeclarations:
    def test_sinon_import_is_removed(self, linter: LintFilesUseCase) -> None:
        code = "import sinon from 'sinon';\n"
        diagnostics = linter.lint_text(TEST_FILE, code, ONLY)
        assert [(d.message_id, d.line, d.column) for d in diagnostics] == [("noMocks", 1, 1)]
        assert fix(linter, code) == "\n"

    def test_all_banned_libraries(self, linter: LintFilesUseCase) -> None:
        code = dedent(
            """\
            import FakeTimers from "@sinon/fake-timers";
            import { ModuleMocker } from 'jest-mock';
            import { spyOn } from 'vitest/spy';
            import { expect } from 'vitest';
            """
        )
        diagnostics = linter.lint_text(TEST_FILE, code, ONLY)
        assert [d.line for d in diagnostics] == [1, 2, 3]
        assert fix(linter, code) == "\n\n\nimport { expect } from 'vitest';\n"

    def test_escaped_specifier_is_decoded(self, linter: LintFilesUseCase) -> None:
        code = "import sinon from 'sin\\x6fn';\nrun();\n"
        diagnostics = linter.lint_text(TEST_FILE, code, ONLY)
        assert [(d.message_id, d.line) for d in diagnostics] == [("noMocks", 1)]
        assert fix(linter, code) == "\nrun();\n"


class TestVariableDeclarators:
    def test_jest_fn_declaration_is_removed(self, linter: LintFilesUseCase) -> None:
        code = "import { jest } from '@jest/globals';\nconst mockFn = jest.fn();\n"
        diagnostics = linter.lint_text(TEST_FILE, code, ONLY)
        assert [(d.message_id, d.line, d.column) for d in diagnostics] == [("noMocks", 2, 7)]
        assert diagnostics[0].fix == TextEdit(38, 63, "")
        assert fix(linter, code) == "import { jest } from '@jest/globals';\n\n"

    def test_spy_declaration_reports_declarator_and_call(self, linter: LintFilesUseCase) -> None:
        code = "const spy = jest.spyOn(console, 'log');\n"
        diagnostics = linter.lint_text(TEST_FILE, code, ONLY)
        assert [(d.message_id, d.column) for d in diagnostics] == [("noMocks", 7), ("noSpies", 13)]
        # The declaration removal covers the call removal, so only it is applied.
        output, remaining = ApplyFixesUseCase(linter).fix_text(TEST_FILE, code, ONLY)
        assert output == "\n"
        assert remaining == []

    def test_let_and_var_declarations(self, linter: LintFilesUseCase) -> None:
        code = "let a = vi.fn();\nvar b = spyFactory();\n"
        assert fix(linter, code) == "\n\n"

    def test_non_call_initializer_is_ignored(self, linter: LintFilesUseCase) -> None:
        code = "const mockConfig = { mock: true };\nconst stubbed = build();\n"
        assert linter.lint_text(TEST_FILE, code, ONLY) == []

    def test_declarator_without_declaration_reports_without_fix(self) -> None:
        source = "jest.fn()"
        program = Node("Program", 0, 9)
        declarator = Node("VariableDeclarator", 0, 9, parent=program)
        call = Node("CallExpression", 0, 9, parent=declarator)
        callee = Node("MemberExpression", 0, 7, parent=call)
        call.fields["callee"] = callee
        declarator.fields["init"] = call
        context = RuleContext(
            rule_id=NoMocksSpiesRule.rule_id,
            meta=NoMocksSpiesRule.meta,
            filename=TEST_FILE,
            source_code=SourceCode(source),
        )

        NoMocksSpiesRule().create(context)["VariableDeclarator"](declarator)

        assert [d.message_id for d in context.diagnostics] == ["noMocks"]
        assert context.diagnostics[0].fix is None

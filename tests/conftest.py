"""Pytest configuration and shared fixtures.

Run pytest from this project's root; pythonpath in pyproject.toml points at
src/. Fixtures build the real engine (tree-sitter parser, real filesystem)
and lay out JS/TS fixture files under tmp_path.
"""

from pathlib import Path
from typing import Callable, Mapping, Optional

import pytest

from tsguard.domain.config import TsguardConfig
from tsguard.domain.rules import RuleModule, build_rule_registry
from tsguard.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from tsguard.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from tsguard.use_cases.lint_files import LintFilesUseCase


@pytest.fixture(scope="session")
def parser() -> TreeSitterGateway:
    return TreeSitterGateway()


@pytest.fixture
def filesystem() -> FileSystemGateway:
    return FileSystemGateway()


@pytest.fixture
def registry(filesystem: FileSystemGateway) -> Mapping[str, RuleModule]:
    return build_rule_registry(filesystem)


@pytest.fixture
def make_linter(
    parser: TreeSitterGateway,
    filesystem: FileSystemGateway,
    registry: Mapping[str, RuleModule],
) -> Callable[..., LintFilesUseCase]:
    """Factory for a LintFilesUseCase over the real gateways."""

    def factory(config: Optional[TsguardConfig] = None) -> LintFilesUseCase:
        return LintFilesUseCase(parser=parser, filesystem=filesystem, rules=registry, config=config)

    return factory


@pytest.fixture
def linter(make_linter: Callable[..., LintFilesUseCase]) -> LintFilesUseCase:
    return make_linter()


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write ``content`` to ``tmp_path / relative`` (creating parents) and return the path."""

    def writer(relative: str, content: str) -> Path:
        target = tmp_path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target

    return writer

from typing import Any, Dict, Mapping, Optional

from tsguard.domain.config import TsguardConfig
from tsguard.domain.rules import RuleModule, build_rule_registry
from tsguard.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from tsguard.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from tsguard.use_cases.lint_files import LintFilesUseCase


class TsguardContainer:
    """Dependency Injection Container for tsguard."""

    def __init__(self) -> None:
        self._singletons: Dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        filesystem = FileSystemGateway()
        self.register_singleton("FileSystemGateway", filesystem)
        self.register_singleton("TreeSitterGateway", TreeSitterGateway())
        self.register_singleton("RuleRegistry", build_rule_registry(filesystem))

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_filesystem_gateway(self) -> FileSystemGateway:
        return self.get("FileSystemGateway")

    def get_parser_gateway(self) -> TreeSitterGateway:
        return self.get("TreeSitterGateway")

    def get_rule_registry(self) -> Mapping[str, RuleModule]:
        return self.get("RuleRegistry")

    def build_lint_use_case(self, config: Optional[TsguardConfig] = None) -> LintFilesUseCase:
        return LintFilesUseCase(
            parser=self.get_parser_gateway(),
            filesystem=self.get_filesystem_gateway(),
            rules=self.get_rule_registry(),
            config=config,
        )

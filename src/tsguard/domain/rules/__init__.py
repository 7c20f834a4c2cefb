"""Rule registry: public rule id -> rule definition, handed to the engine once at startup."""

from types import MappingProxyType
from typing import Mapping

from tsguard.domain.protocols import FileSystemProtocol
from tsguard.domain.rules.base import RuleMeta, RuleModule, Visitors
from tsguard.domain.rules.no_mocks_spies import NoMocksSpiesRule
from tsguard.domain.rules.require_ts_extensions import RequireTsExtensionsRule

RULE_IDS: tuple[str, ...] = (NoMocksSpiesRule.rule_id, RequireTsExtensionsRule.rule_id)


def build_rule_registry(filesystem: FileSystemProtocol) -> Mapping[str, RuleModule]:
    """Compose the immutable registry. The filesystem backs require-ts-extensions' existence checks."""
    rules: dict[str, RuleModule] = {
        NoMocksSpiesRule.rule_id: NoMocksSpiesRule(),
        RequireTsExtensionsRule.rule_id: RequireTsExtensionsRule(filesystem),
    }
    return MappingProxyType(rules)


__all__ = [
    "RULE_IDS",
    "NoMocksSpiesRule",
    "RequireTsExtensionsRule",
    "RuleMeta",
    "RuleModule",
    "Visitors",
    "build_rule_registry",
]

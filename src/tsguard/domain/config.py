"""Linter settings parsed from [tool.tsguard]."""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from tsguard.domain.entities import Severity
from tsguard.domain.errors import ConfigurationError

DEFAULT_IGNORES: tuple[str, ...] = (
    "node_modules/**",
    "**/node_modules/**",
    "dist/**",
    "coverage/**",
    ".git/**",
)

SOURCE_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs", ".mts", ".cts")


@dataclass(frozen=True)
class TsguardConfig:
    """
    Immutable linter configuration.

    ``rules`` maps rule id to severity; rules missing from it run at ERROR.
    ``max_warnings`` of -1 disables the warning threshold.
    """

    rules: Mapping[str, Severity] = field(default_factory=lambda: MappingProxyType({}))
    target_extension: str = ".ts"
    ignores: tuple[str, ...] = DEFAULT_IGNORES
    max_warnings: int = -1

    def severity_for(self, rule_id: str) -> Severity:
        return self.rules.get(rule_id, Severity.ERROR)

    @property
    def settings(self) -> Mapping[str, object]:
        """Shared settings visible to every rule through its context."""
        return MappingProxyType({"target_extension": self.target_extension})

    @classmethod
    def from_mapping(
        cls, raw: Mapping[str, object], known_rules: Optional[tuple[str, ...]] = None
    ) -> "TsguardConfig":
        """Validate a raw [tool.tsguard] table. Raises ConfigurationError on bad values."""
        rules: dict[str, Severity] = {}
        raw_rules = raw.get("rules", {}) or {}
        if not isinstance(raw_rules, Mapping):
            raise ConfigurationError("[tool.tsguard.rules] must be a table of rule id = severity")
        for rule_id, value in raw_rules.items():
            if known_rules is not None and rule_id not in known_rules:
                logging.warning("Ignoring unknown rule id in [tool.tsguard.rules]: %s", rule_id)
                continue
            try:
                rules[str(rule_id)] = Severity.parse(value)
            except ValueError as exc:
                raise ConfigurationError(f"Rule '{rule_id}': {exc}") from exc

        target_extension = raw.get("target_extension", ".ts")
        if not isinstance(target_extension, str) or not target_extension.startswith("."):
            raise ConfigurationError("target_extension must be a string starting with '.'")

        ignores = raw.get("ignores", list(DEFAULT_IGNORES))
        if not isinstance(ignores, (list, tuple)) or not all(isinstance(i, str) for i in ignores):
            raise ConfigurationError("ignores must be a list of glob strings")

        max_warnings = raw.get("max_warnings", -1)
        if not isinstance(max_warnings, int) or isinstance(max_warnings, bool) or max_warnings < -1:
            raise ConfigurationError("max_warnings must be an integer >= -1")

        return cls(
            rules=MappingProxyType(rules),
            target_extension=target_extension,
            ignores=tuple(ignores),
            max_warnings=max_warnings,
        )

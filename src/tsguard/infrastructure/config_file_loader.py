"""Load [tool.tsguard] from pyproject.toml. Infrastructure I/O only."""

import sys
from pathlib import Path
from typing import Optional

from tsguard.domain.config import TsguardConfig
from tsguard.domain.errors import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib


class ConfigFileLoader:
    """
    Finds the nearest pyproject.toml walking up from a start directory.
    """

    @staticmethod
    def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
        current_path = (start or Path.cwd()).resolve()
        for candidate in (current_path, *current_path.parents):
            config_file = candidate / "pyproject.toml"
            if config_file.is_file():
                return config_file
        return None

    @staticmethod
    def load_section(config_file: Optional[Path]) -> dict[str, object]:
        """Return the raw [tool.tsguard] table, or {} when absent."""
        if config_file is None:
            return {}
        try:
            with config_file.open("rb") as f:
                data = toml_lib.load(f)
        except OSError:
            return {}
        except toml_lib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Invalid TOML in {config_file}: {exc}") from exc
        tool_section = data.get("tool", {}) or {}
        section = tool_section.get("tsguard", {}) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"[tool.tsguard] in {config_file} must be a table")
        return section

    @classmethod
    def load_config_from_fs(
        cls, start: Optional[Path] = None, known_rules: Optional[tuple[str, ...]] = None
    ) -> TsguardConfig:
        config_file = cls.find_config_file(start)
        return TsguardConfig.from_mapping(cls.load_section(config_file), known_rules=known_rules)

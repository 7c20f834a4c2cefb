"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from tsguard.domain.rules import RULE_IDS
from tsguard.infrastructure.config_file_loader import ConfigFileLoader
from tsguard.infrastructure.di.container import TsguardContainer
from tsguard.interface.cli import CLIDependencies, create_app


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = TsguardContainer()

    deps = CLIDependencies(
        rules=container.get_rule_registry(),
        load_config=lambda: ConfigFileLoader.load_config_from_fs(known_rules=RULE_IDS),
        build_use_case=container.build_lint_use_case,
    )

    app = create_app(deps)
    app()


if __name__ == "__main__":
    main()

"""CLI entry points for tsguard - Thin Controller using Typer."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Mapping, Optional

import typer

from tsguard import __version__
from tsguard.domain.config import TsguardConfig
from tsguard.domain.errors import ConfigurationError
from tsguard.domain.rules import RuleModule
from tsguard.interface.reporters import JsonReporter, LintReporter, StylishReporter
from tsguard.use_cases.lint_files import LintFilesUseCase

# B008: avoid function call in default; use module-level singletons for Typer params
_PATHS_ARGUMENT = typer.Argument(None, help="Files or directories to lint (default: .)")
_RULE_OPTION = typer.Option(None, "--rule", "-r", help="Only run this rule (repeatable)")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    rules: Mapping[str, RuleModule]
    load_config: Callable[[], TsguardConfig]
    build_use_case: Callable[[TsguardConfig], LintFilesUseCase]


def _reporter_for(output_format: str) -> LintReporter:
    if output_format == "json":
        return JsonReporter()
    if output_format == "stylish":
        return StylishReporter()
    raise typer.BadParameter(f"Unknown format '{output_format}' (use stylish or json)")


def create_app(deps: CLIDependencies) -> typer.Typer:
    """Create the Typer app with explicitly injected dependencies."""
    app = typer.Typer(
        name="tsguard",
        help="tsguard: test-double and import-extension rules for JS/TS sources",
        add_completion=False,
    )

    @app.callback(invoke_without_command=True)
    def main(
        ctx: typer.Context,
        version: bool = typer.Option(False, "--version", help="Show version and exit"),
    ) -> None:
        if version:
            typer.echo(f"tsguard {__version__}")
            raise typer.Exit()
        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())

    @app.command()
    def check(
        paths: Optional[List[Path]] = _PATHS_ARGUMENT,
        fix: bool = typer.Option(False, "--fix", help="Apply fixes and write files in place"),
        output_format: str = typer.Option("stylish", "--format", "-f", help="stylish or json"),
        rule: Optional[List[str]] = _RULE_OPTION,
        max_warnings: Optional[int] = typer.Option(
            None, "--max-warnings", help="Fail when warnings exceed this count (-1 disables)"
        ),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    ) -> None:
        """Lint JS/TS files; with --fix, rewrite them."""
        if verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
        reporter = _reporter_for(output_format)
        try:
            config = deps.load_config()
        except ConfigurationError as exc:
            typer.echo(f"Configuration error: {exc}", err=True)
            raise typer.Exit(code=2) from exc

        only = list(rule) if rule else None
        if only:
            unknown = [r for r in only if r not in deps.rules]
            if unknown:
                typer.echo(f"Unknown rule(s): {', '.join(unknown)}", err=True)
                raise typer.Exit(code=2)

        targets = [str(p) for p in paths] if paths else ["."]
        use_case = deps.build_use_case(config)
        results = use_case.execute(targets, fix=fix, only=only)

        rendered = reporter.render(results)
        if rendered:
            typer.echo(rendered)

        errors = sum(r.error_count for r in results)
        warnings = sum(r.warning_count for r in results)
        threshold = config.max_warnings if max_warnings is None else max_warnings
        if errors or (threshold >= 0 and warnings > threshold):
            raise typer.Exit(code=1)

    @app.command("rules")
    def list_rules() -> None:
        """List registered rules."""
        for rule_id, rule_module in deps.rules.items():
            fixable = "fixable" if rule_module.meta.fixable else "-"
            typer.echo(f"{rule_id:<24} {rule_module.meta.type:<10} {fixable:<8} {rule_module.meta.description}")

    return app

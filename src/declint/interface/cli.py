"""CLI entry points for declint - Thin Controller using Typer."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import typer

from declint.domain.errors import ConfigurationError
from declint.domain.rule_registry import RuleRegistry
from declint.infrastructure.di.container import DeclintContainer
from declint.infrastructure.reporters import ReporterFactory
from declint.use_cases.lint_files import LintFilesUseCase

EXIT_VIOLATIONS = 2
EXIT_PARSE_FAILURES = 1
EXIT_USAGE = 64


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI, injected at the composition root."""

    container_factory: Callable[[Path | None], DeclintContainer]


class CLIAppFactory:
    """Creates the Typer app. No top-level functions."""

    @staticmethod
    def collect_paths(paths: list[Path]) -> list[str]:
        """Expand directories into their *.swift files; explicit files are kept as given."""
        collected: list[str] = []
        for path in paths:
            if path.is_dir():
                collected.extend(str(found) for found in sorted(path.rglob("*.swift")))
            else:
                collected.append(str(path))
        return collected

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        app = typer.Typer(
            name="declint",
            help="declint: declaration and availability lint rules over SourceKitten structure.",
            add_completion=False,
        )

        @app.command()
        def lint(
            paths: list[Path] = typer.Argument(..., help="Swift files or directories to lint"),  # noqa: B008
            config: Path | None = typer.Option(None, "--config", help="Path to a .declint.yml file"),  # noqa: B008
            reporter: str = typer.Option("text", help="Output format: text or json"),
            jobs: int = typer.Option(1, min=1, help="Files linted in parallel"),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
        ) -> None:
            """Lint files and print violations. Exit 2 on error-severity violations, 1 on unparseable files."""
            logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
            try:
                output = ReporterFactory.create(reporter)
                container = deps.container_factory(config)
                enabled_rules = container.get_rules()
            except (ConfigurationError, ValueError) as exc:
                typer.echo(f"error: {exc}", err=True)
                raise typer.Exit(code=EXIT_USAGE) from exc

            use_case = LintFilesUseCase(
                structure_provider=container.get_structure_provider(),
                rules=enabled_rules,
                jobs=jobs,
            )
            result = use_case.execute(CLIAppFactory.collect_paths(paths))
            rendered = output.render(result)
            if rendered:
                typer.echo(rendered)
            if result.has_errors():
                raise typer.Exit(code=EXIT_VIOLATIONS)
            if result.failures:
                raise typer.Exit(code=EXIT_PARSE_FAILURES)

        @app.command()
        def rules() -> None:
            """List available rules."""
            for description in RuleRegistry.descriptions():
                opt_in = "opt-in" if description.opt_in else "default"
                typer.echo(
                    f"{description.identifier:<32} {opt_in:<8} {description.kind.value:<10} "
                    f"{description.default_severity.value:<8} {description.name}"
                )

        return app

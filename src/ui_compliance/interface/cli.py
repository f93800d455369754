"""CLI entry points for ui-compliance - Thin Controller using Typer."""

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from ui_compliance.domain.config import Configuration
from ui_compliance.domain.errors import ConfigurationError
from ui_compliance.domain.protocols import FileSystemProtocol, TelemetryPort
from ui_compliance.infrastructure.reporters import ReportRenderer, RichTerminalReporter
from ui_compliance.use_cases.apply_fixes import ApplyFixesUseCase
from ui_compliance.use_cases.check_compliance import CheckComplianceUseCase
from ui_compliance.use_cases.validation_engine import ValidationEngine

TERMINAL_FORMAT = "terminal"

EXIT_NOT_COMPLIANT = 1
EXIT_CONFIG_ERROR = 2


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    telemetry: TelemetryPort
    filesystem: FileSystemProtocol
    renderer: ReportRenderer
    terminal_reporter: RichTerminalReporter
    load_config: Callable[[], Mapping[str, object]]
    engine_factory: Callable[[Configuration], ValidationEngine]


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_target_path(path: Optional[Path]) -> str:
        """Resolve target path: explicit path, else src/ if exists, else '.'."""
        if path and str(path) != ".":
            return str(path)
        src_dir = Path.cwd() / "src"
        if src_dir.exists() and src_dir.is_dir():
            return "src"
        return "."

    @staticmethod
    def build_config(
        deps: CLIDependencies,
        preset: Optional[str] = None,
        **overrides: object,
    ) -> Configuration:
        """
        pyproject.toml table, then --preset, then per-command overrides.

        Any ConfigurationError is reported and turned into exit code 2.
        """
        raw = dict(deps.load_config())
        if preset:
            raw["preset"] = preset
        try:
            config = Configuration.from_mapping(raw)
            changes = {k: v for k, v in overrides.items() if v is not None}
            return config.replace(**changes) if changes else config
        except ConfigurationError as exc:
            deps.telemetry.error(f"Invalid configuration: {exc}")
            raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="ui-compliance",
            help="UI compliance: design-system, accessibility and localization audit for component sources",
            add_completion=False,
        )

        @app.command()
        def check(
            path: Optional[Path] = typer.Argument(None, help="File or directory to validate (default: src/ or .)"),  # noqa: B008
            preset: Optional[str] = typer.Option(None, help="strict, development or migration"),
            output_format: str = typer.Option(
                TERMINAL_FORMAT, "--format", "-f", help="terminal, markdown, json or html"),
            level: Optional[str] = typer.Option(None, help="Reporting level: minimal, standard or detailed"),
            workers: int = typer.Option(1, help="Validate files on a thread pool of this size"),
        ) -> None:
            """Validate every supported file and report; exits 1 when the project is not compliant."""
            fmt = output_format.lower()
            overrides: dict[str, object] = {"reporting_level": level}
            if fmt != TERMINAL_FORMAT:
                overrides["output_format"] = fmt
            config = CLIAppFactory.build_config(deps, preset, **overrides)
            deps.telemetry.handshake()
            engine = deps.engine_factory(config)
            use_case = CheckComplianceUseCase(engine, deps.filesystem, deps.telemetry, max_workers=workers)
            report = use_case.execute(CLIAppFactory.resolve_target_path(path), config)
            if fmt == TERMINAL_FORMAT:
                deps.terminal_reporter.report(report)
            else:
                typer.echo(deps.renderer.render(report), nl=False)
            if not report.summary.compliant:
                raise typer.Exit(code=EXIT_NOT_COMPLIANT)

        @app.command()
        def fix(
            path: Optional[Path] = typer.Argument(None, help="File or directory to fix (default: src/ or .)"),  # noqa: B008
            preset: Optional[str] = typer.Option(None, help="strict, development or migration"),
            dry_run: bool = typer.Option(False, "--dry-run", help="Report the fixes without writing files"),
        ) -> None:
            """Apply every auto-fix with a source range and write the files back."""
            config = CLIAppFactory.build_config(deps, preset)
            deps.telemetry.handshake()
            engine = deps.engine_factory(config)
            target_path = CLIAppFactory.resolve_target_path(path)
            files = CheckComplianceUseCase(engine, deps.filesystem, deps.telemetry).collect_files(target_path)
            outcomes = ApplyFixesUseCase(engine, deps.filesystem, deps.telemetry).execute(
                files, config, dry_run=dry_run)
            deps.terminal_reporter.report_fixes(outcomes, dry_run=dry_run)
            applied = sum(o.applied for o in outcomes)
            deps.telemetry.step(
                f"{'Would apply' if dry_run else 'Applied'} {applied} fix(es) across {len(outcomes)} file(s)")

        @app.command()
        def rules(
            preset: Optional[str] = typer.Option(None, help="strict, development or migration"),
        ) -> None:
            """List the rule catalog and which rules the configuration enables."""
            config = CLIAppFactory.build_config(deps, preset)
            engine = deps.engine_factory(config)
            deps.terminal_reporter.report_rules(engine.get_rules())

        @app.command()
        def deep(
            file: Path = typer.Argument(..., help="Component file to analyse"),  # noqa: B008
            preset: Optional[str] = typer.Option(None, help="strict, development or migration"),
        ) -> None:
            """Print the five independent compliance analyses of one file as JSON."""
            config = CLIAppFactory.build_config(deps, preset)
            engine = deps.engine_factory(config)
            path = str(file)
            result = engine.validate_deep_compliance(path, deps.filesystem.read_text(path), config)
            typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
            if not result.valid:
                raise typer.Exit(code=EXIT_NOT_COMPLIANT)

        return app

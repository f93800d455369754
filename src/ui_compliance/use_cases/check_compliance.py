"""Use Case: validate every supported source file under a path."""

from typing import TYPE_CHECKING

from ui_compliance.domain.entities import ComplianceReport, SourceFile

if TYPE_CHECKING:
    from ui_compliance.domain.config import Configuration
    from ui_compliance.domain.protocols import FileSystemProtocol, TelemetryPort
    from ui_compliance.use_cases.validation_engine import ValidationEngine

# Extensions the check and fix commands pick up when given a directory.
SOURCE_SUFFIXES = (".tsx", ".jsx", ".ts", ".js", ".mjs", ".cjs", ".mts", ".cts", ".css", ".scss")


class CheckComplianceUseCase:
    """Collect files through the filesystem port, then hand their text to the engine."""

    def __init__(
        self,
        engine: "ValidationEngine",
        filesystem: "FileSystemProtocol",
        telemetry: "TelemetryPort",
        max_workers: int | None = None,
    ) -> None:
        self.engine = engine
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.max_workers = max_workers

    def collect_files(self, path: str) -> list[str]:
        return self.filesystem.glob_source_files(path, SOURCE_SUFFIXES)

    def execute(self, path: str, config: "Configuration | None" = None) -> ComplianceReport:
        file_paths = self.collect_files(path)
        if not file_paths:
            self.telemetry.warning(f"No source files found under {path}")
        else:
            self.telemetry.step(f"Validating {len(file_paths)} file(s) under {path}")
        sources = [SourceFile(p, self.filesystem.read_text(p)) for p in file_paths]
        report = self.engine.validate_files(sources, config, max_workers=self.max_workers)
        for file_report in report.files:
            if not file_report.compliant:
                self.telemetry.error(f"{file_report.file_path}: score {file_report.score}")
        return report

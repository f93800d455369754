from rich.console import Console

from ui_compliance.interface.telemetry import ProjectTelemetry


def _telemetry(welcome: str = "") -> tuple[ProjectTelemetry, Console]:
    console = Console(record=True, width=120, color_system=None)
    return ProjectTelemetry("UI-COMPLIANCE", "cyan", welcome, console=console), console


def test_handshake_prints_project_name_and_welcome() -> None:
    telemetry, console = _telemetry("Design-system audit online")
    telemetry.handshake()
    assert console.export_text() == "UI-COMPLIANCE Design-system audit online\n"


def test_step_warning_and_error() -> None:
    telemetry, console = _telemetry()
    telemetry.step("Validating 3 file(s)")
    telemetry.warning("No source files found")
    telemetry.error("Card.tsx: score 80")
    lines = console.export_text().splitlines()
    assert lines == [
        "› Validating 3 file(s)",
        "⚠ No source files found",
        "✖ Card.tsx: score 80",
    ]


def test_defaults_to_stderr() -> None:
    assert ProjectTelemetry("UI-COMPLIANCE").console.stderr

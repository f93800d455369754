"""User-facing progress output for the CLI, rendered with rich."""

from rich.console import Console

from ui_compliance.domain.protocols import TelemetryPort


class ProjectTelemetry(TelemetryPort):
    """TelemetryPort implementation writing to a rich Console (stderr by default)."""

    def __init__(
        self,
        project_name: str,
        color: str = "cyan",
        welcome_message: str = "",
        console: Console | None = None,
    ) -> None:
        self.project_name = project_name
        self.color = color
        self.welcome_message = welcome_message
        self.console = console or Console(stderr=True)

    def handshake(self) -> None:
        message = f" {self.welcome_message}" if self.welcome_message else ""
        self.console.print(f"[bold {self.color}]{self.project_name}[/]{message}")

    def step(self, message: str) -> None:
        self.console.print(f"[{self.color}]›[/] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {message}[/]")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]✖ {message}[/]")

from typing import TYPE_CHECKING, Any, Optional, cast

from ui_compliance.infrastructure.config_file_loader import ConfigFileLoader
from ui_compliance.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from ui_compliance.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from ui_compliance.infrastructure.reporters import ReportRenderer, RichTerminalReporter
from ui_compliance.interface.telemetry import ProjectTelemetry
from ui_compliance.use_cases.validation_engine import ValidationEngine

if TYPE_CHECKING:
    from ui_compliance.domain.config import Configuration
    from ui_compliance.domain.protocols import (
        FileSystemProtocol,
        MarkupParserProtocol,
        TelemetryPort,
    )


class UIComplianceContainer:
    """Dependency Injection Container for the UI compliance engine."""

    _instance: Optional["UIComplianceContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        self.register_singleton(
            "TelemetryPort", ProjectTelemetry("UI-COMPLIANCE", "cyan", "Design-system audit online"))
        self.register_singleton("MarkupParser", TreeSitterGateway())
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("ConfigFileLoader", ConfigFileLoader())
        self.register_singleton("ReportRenderer", ReportRenderer())
        self.register_singleton("TerminalReporter", RichTerminalReporter())

    # JUSTIFICATION: DI Container must handle any type of service
    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    # JUSTIFICATION: DI Container must return any type of service
    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_markup_parser(self) -> "MarkupParserProtocol":
        """Return the tree-sitter parser gateway."""
        return cast("MarkupParserProtocol", self.get("MarkupParser"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_config_file_loader(self) -> ConfigFileLoader:
        return cast(ConfigFileLoader, self.get("ConfigFileLoader"))

    def get_report_renderer(self) -> ReportRenderer:
        return cast(ReportRenderer, self.get("ReportRenderer"))

    def get_terminal_reporter(self) -> RichTerminalReporter:
        return cast(RichTerminalReporter, self.get("TerminalReporter"))

    def create_engine(self, config: "Configuration") -> ValidationEngine:
        """
        Build an engine for one configuration.

        Engines are not singletons: rule enablement is fixed at construction,
        so each distinct configuration gets its own engine sharing the parser.
        """
        return ValidationEngine(config=config, parser=self.get_markup_parser())

    @classmethod
    def get_instance(cls) -> "UIComplianceContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = UIComplianceContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None

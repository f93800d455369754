"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import logging

from ui_compliance.infrastructure.di.container import UIComplianceContainer
from ui_compliance.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    container = UIComplianceContainer.get_instance()
    config_loader = container.get_config_file_loader()

    deps = CLIDependencies(
        telemetry=container.get_telemetry_port(),
        filesystem=container.get_filesystem_gateway(),
        renderer=container.get_report_renderer(),
        terminal_reporter=container.get_terminal_reporter(),
        load_config=config_loader.load_config_from_fs,
        engine_factory=container.create_engine,
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()

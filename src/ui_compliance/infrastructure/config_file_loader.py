"""Load [tool.ui-compliance] from pyproject.toml. Infrastructure I/O only."""

import tomllib
from pathlib import Path

SECTION_NAMES = ("ui-compliance", "ui_compliance")


class ConfigFileLoader:
    """
    Loads config from the nearest pyproject.toml, walking up from a start directory.
    """

    @staticmethod
    def find_pyproject(start: Path | None = None) -> Path | None:
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            candidate = directory / "pyproject.toml"
            if candidate.is_file():
                return candidate
        return None

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        """Return the [tool.ui-compliance] table, or {} when there is none."""
        config_file = ConfigFileLoader.find_pyproject(start)
        if config_file is None:
            return {}
        try:
            with config_file.open("rb") as f:
                data = tomllib.load(f)
        except OSError:
            return {}
        tool_section = data.get("tool", {}) or {}
        for name in SECTION_NAMES:
            section = tool_section.get(name)
            if section:
                return dict(section)
        return {}

from pathlib import Path

from ui_compliance.infrastructure.config_file_loader import ConfigFileLoader


def test_reads_tool_section_from_nearest_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.ui-compliance]\npreset = "development"\nmaxComponentSize = 300\n',
        encoding="utf-8",
    )
    nested = tmp_path / "packages" / "web"
    nested.mkdir(parents=True)

    assert ConfigFileLoader.find_pyproject(nested) == (tmp_path / "pyproject.toml").resolve()
    assert ConfigFileLoader.load_config_from_fs(nested) == {
        "preset": "development",
        "maxComponentSize": 300,
    }


def test_underscore_section_name(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "[tool.ui_compliance]\nallow_raw_html = true\n", encoding="utf-8"
    )

    assert ConfigFileLoader.load_config_from_fs(tmp_path) == {"allow_raw_html": True}


def test_missing_section_gives_empty_mapping(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "web"\n', encoding="utf-8")

    assert ConfigFileLoader.load_config_from_fs(tmp_path) == {}

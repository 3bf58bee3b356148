from pathlib import Path

from arsenal.presentation.cli.config import load_config, save_config


def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    assert load_config(tmp_path / "missing.json") == {"definitions_path": "", "log_level": "WARNING"}


def test_load_config_defaults_when_malformed(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("not json", encoding="utf-8")

    assert load_config(path)["log_level"] == "WARNING"


def test_save_and_load_normalizes_values(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    save_config({"definitions_path": "/srv/defs", "log_level": "debug"}, path)

    assert load_config(path) == {"definitions_path": "/srv/defs", "log_level": "DEBUG"}


def test_unknown_log_level_falls_back(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text('{"log_level": "LOUD", "definitions_path": 3}', encoding="utf-8")

    assert load_config(path) == {"definitions_path": "", "log_level": "WARNING"}

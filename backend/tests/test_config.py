from pathlib import Path

import pytest

from waste_api.config import PROJECT_ROOT, ConfigError, load_config


def test_defaults_without_settings_file(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    assert config.server.port == 8080
    assert config.storage.data_file == PROJECT_ROOT / "data" / "bin_data.json"
    assert config.sensors.collection_threshold == 75
    assert config.sensors.seed is None
    assert config.api.version == "1.0.0"


def test_settings_override(tmp_path: Path) -> None:
    (tmp_path / "settings.yaml").write_text(
        """
server:
  port: 9000
storage:
  data_file: data/other.json
  load_on_startup: false
sensors:
  collection_threshold: 60
  seed: 3
""".strip()
        + "\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path)
    assert config.server.port == 9000
    assert config.storage.data_file == (PROJECT_ROOT / "data" / "other.json").resolve()
    assert config.storage.load_on_startup is False
    assert config.sensors.collection_threshold == 60
    assert config.sensors.seed == 3


def test_env_var_selects_config_dir(monkeypatch, tmp_path: Path) -> None:
    (tmp_path / "settings.yaml").write_text("server:\n  port: 7001\n", encoding="utf-8")
    monkeypatch.setenv("WASTE_API_CONFIG_DIR", str(tmp_path))
    assert load_config().server.port == 7001


def test_invalid_settings(tmp_path: Path) -> None:
    (tmp_path / "settings.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)

    (tmp_path / "settings.yaml").write_text("sensors:\n  collection_threshold: 150\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)

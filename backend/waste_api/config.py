from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@dataclass(slots=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass(slots=True)
class StorageConfig:
    data_file: Path = PROJECT_ROOT / "data" / "bin_data.json"
    load_on_startup: bool = True


@dataclass(slots=True)
class SensorConfig:
    collection_threshold: int = 75
    seed: int | None = None


@dataclass(slots=True)
class ApiConfig:
    title: str = "Smart Waste Management API"
    version: str = "1.0.0"


@dataclass(slots=True)
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    sensors: SensorConfig = field(default_factory=SensorConfig)
    api: ApiConfig = field(default_factory=ApiConfig)


class ConfigError(RuntimeError):
    pass


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected mapping in {path}")
    return data


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"`{name}` must be a dictionary")
    return value


def _resolve_config_dir() -> Path:
    env_dir = os.getenv("WASTE_API_CONFIG_DIR")
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    return (PROJECT_ROOT / "config").resolve()


def _resolve_data_file(value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (PROJECT_ROOT / path).resolve()
    return path


def load_config(config_dir: Path | None = None) -> AppConfig:
    directory = config_dir or _resolve_config_dir()
    raw = _read_yaml(directory / "settings.yaml")

    server_cfg = _section(raw, "server")
    storage_cfg = _section(raw, "storage")
    sensors_cfg = _section(raw, "sensors")
    api_cfg = _section(raw, "api")

    threshold = int(sensors_cfg.get("collection_threshold", 75))
    if not 0 <= threshold <= 100:
        raise ConfigError(f"sensors.collection_threshold must be within 0..100, got {threshold}")

    seed_raw = sensors_cfg.get("seed")

    return AppConfig(
        server=ServerConfig(
            host=str(server_cfg.get("host", "0.0.0.0")),
            port=int(server_cfg.get("port", 8080)),
        ),
        storage=StorageConfig(
            data_file=_resolve_data_file(str(storage_cfg.get("data_file", "./data/bin_data.json"))),
            load_on_startup=bool(storage_cfg.get("load_on_startup", True)),
        ),
        sensors=SensorConfig(
            collection_threshold=threshold,
            seed=int(seed_raw) if seed_raw is not None else None,
        ),
        api=ApiConfig(
            title=str(api_cfg.get("title", "Smart Waste Management API")),
            version=str(api_cfg.get("version", "1.0.0")),
        ),
    )

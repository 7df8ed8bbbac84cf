"""Runtime configuration for the todo application."""

from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass, replace
from pathlib import Path

from .exceptions import ConfigError

DEFAULT_DATA_PATH = "./data.csv"
DEFAULT_LOG_FILE = "./todos.log"


def _path_value(payload: dict, key: str, default: str) -> Path:
    """Read a path setting, expanding a leading ~."""
    value = payload.get(key, default)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{key} must be a non-empty string, got {value!r}")
    return Path(os.path.expanduser(value))


@dataclass(frozen=True)
class Config:
    """Runtime configuration, optionally loaded from a JSON file."""

    data_path: Path = Path(DEFAULT_DATA_PATH)
    log_file: Path = Path(DEFAULT_LOG_FILE)
    refresh_seconds: float = 0.1
    list_viewport_rows: int | None = None

    @classmethod
    def from_dict(cls, payload: dict) -> Config:
        """Create a Config object from a raw dictionary."""
        if not isinstance(payload, dict):
            raise ConfigError("config must be a JSON object")

        data_path = _path_value(payload, "data_path", DEFAULT_DATA_PATH)
        log_file = _path_value(payload, "log_file", DEFAULT_LOG_FILE)

        try:
            refresh_seconds = float(payload.get("refresh_seconds", 0.1))
            viewport_raw = payload.get("list_viewport_rows")
            list_viewport_rows = None if viewport_raw is None else int(viewport_raw)
        except (TypeError, ValueError, OverflowError) as err:
            raise ConfigError(f"Invalid config value: {err}") from err

        if not math.isfinite(refresh_seconds) or refresh_seconds <= 0:
            raise ConfigError(f"refresh_seconds must be positive, got {refresh_seconds}")
        if list_viewport_rows is not None and list_viewport_rows <= 0:
            raise ConfigError(
                f"list_viewport_rows must be positive, got {list_viewport_rows}"
            )

        return cls(
            data_path=data_path,
            log_file=log_file,
            refresh_seconds=refresh_seconds,
            list_viewport_rows=list_viewport_rows,
        )

    def with_overrides(
        self, data_path: Path | None = None, log_file: Path | None = None
    ) -> Config:
        """Return a copy with command-line overrides applied."""
        overrides: dict[str, Path] = {}
        if data_path is not None:
            overrides["data_path"] = data_path.expanduser()
        if log_file is not None:
            overrides["log_file"] = log_file.expanduser()
        return replace(self, **overrides)


def load_config(path: Path) -> Config:
    """Load configuration from the provided path."""
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as err:
        raise ConfigError(f"Failed to load config {path}: {err}") from err
    return Config.from_dict(data)

"""Centralized application configuration."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

DEFAULT_DATA_DIR = Path.home() / ".local" / "vault-clip"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class Config(BaseModel):
    """Application-wide configuration."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(description="Base directory for all application data")
    database: Path = Field(description="Entry database file (JSON)")
    clipboard_command: list[str] | None = Field(
        default=None, min_length=1, description="Clipboard program and arguments (None = platform default)"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO", description="Log file verbosity")

    @computed_field(description="Optional TOML configuration file")
    @property
    def config_path(self) -> Path:
        """Optional TOML configuration file."""
        return self.data_dir / "config.toml"

    @computed_field(description="Log file")
    @property
    def log_path(self) -> Path:
        """Log file."""
        return self.data_dir / "vault-clip.log"

    @staticmethod
    def build(data_dir: Path | None = None, database: Path | None = None) -> Config:
        """Build a Config from defaults, optional config.toml, and CLI overrides."""
        resolved_dir = data_dir if data_dir is not None else DEFAULT_DATA_DIR
        config_path = resolved_dir / "config.toml"

        kwargs: dict[str, Any] = {"data_dir": resolved_dir, "database": resolved_dir / "database.json"}
        if config_path.is_file():
            with config_path.open("rb") as f:
                toml_data = tomllib.load(f)
            if isinstance(toml_data.get("database"), str):
                kwargs["database"] = Path(toml_data["database"]).expanduser()
            command = toml_data.get("clipboard_command")
            if isinstance(command, list) and command and all(isinstance(arg, str) for arg in command):
                kwargs["clipboard_command"] = command
            if toml_data.get("log_level") in LOG_LEVELS:
                kwargs["log_level"] = toml_data["log_level"]
        if database is not None:
            kwargs["database"] = database

        return Config(**kwargs)

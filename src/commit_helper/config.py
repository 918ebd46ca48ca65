"""Configuration management for commit-helper."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from commit_helper.logging import get_logger
from commit_helper.models import DispatchMode

# Try to import tomllib (Python 3.11+) or fall back to tomli
try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found]

logger = get_logger("config")

APP_NAME = "commit-helper"
CONFIG_FILENAME = "config.toml"
SESSION_FILENAME = "session.json"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Application configuration."""

    dispatch: DispatchMode = Field(
        default=DispatchMode.TERMINAL,
        description="Print the git command (terminal) or run it (execute)",
    )
    root: Path | None = Field(default=None, description="Workspace root to scan for repositories")
    verbose: bool = Field(default=False, description="Enable debug logging")

    @classmethod
    def get_config_dir(cls) -> Path:
        """Get the directory holding the config file and session state."""
        # Check for XDG config directory first (Linux/macOS)
        if xdg_config := os.getenv("XDG_CONFIG_HOME"):
            return Path(xdg_config) / APP_NAME
        # Fall back to ~/.config on Unix or APPDATA on Windows
        if os.name == "nt":
            base = Path(os.getenv("APPDATA", Path.home()))
        else:
            base = Path.home() / ".config"
        return base / APP_NAME

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the path to the config file."""
        return cls.get_config_dir() / CONFIG_FILENAME

    @classmethod
    def get_session_path(cls) -> Path:
        """Get the path to the workflow session record."""
        return cls.get_config_dir() / SESSION_FILENAME


def load_config() -> Config:
    """Load configuration from environment variables and config file.

    Priority: Environment variables > Config file > Defaults
    """
    config_data: dict[str, object] = {}

    # 1. Load from config file if it exists
    config_path = Config.get_config_path()
    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                file_config = tomllib.load(f)
                # Get settings from [default] section
                config_data.update(file_config.get("default", {}))
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Ignoring unreadable config file %s: %s", config_path, e)

    # 2. Environment variables override config file
    if dispatch := os.getenv("COMMIT_HELPER_DISPATCH"):
        config_data["dispatch"] = dispatch.lower()
    if root := os.getenv("COMMIT_HELPER_ROOT"):
        config_data["root"] = root
    if verbose := os.getenv("COMMIT_HELPER_VERBOSE"):
        config_data["verbose"] = verbose.lower() in _TRUE_VALUES

    try:
        return Config(**config_data)
    except ValidationError as e:
        # Drop only the offending settings and keep the rest.
        invalid = {str(error["loc"][0]) for error in e.errors() if error["loc"]}
        logger.warning("Ignoring invalid configuration for %s: %s", ", ".join(sorted(invalid)), e)
        return Config(**{key: value for key, value in config_data.items() if key not in invalid})

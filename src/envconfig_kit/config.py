"""Project configuration: the ``envconfig.toml`` schema file and user settings."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs
import toml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ProjectConfigError
from .logging_config import LoggingConfig
from .resolver import DEFAULT_ENVIRONMENT_VARIABLE

logger = logging.getLogger(__name__)

APP_NAME = "envconfig-kit"
PROJECT_FILE = "envconfig.toml"


class ProjectConfig(BaseModel):
    """Contents of a project's ``envconfig.toml``.

    ``variables`` holds one table per environment variable, e.g.::

        [variables.PORT]
        type = "port"
        default = 3000

    Tables are kept as plain mappings so that a broken field is reported
    alongside environment errors instead of failing the whole file.
    """

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    environment_variable: str = Field(
        default=DEFAULT_ENVIRONMENT_VARIABLE,
        description="Variable selecting the .env.<name> file",
    )
    variables: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class ProjectConfigLoader:
    """Loads project configuration from multiple sources with priority."""

    def __init__(self, app_name: str = APP_NAME) -> None:
        self.app_name = app_name

    def load(self, project_path: Optional[Path] = None) -> ProjectConfig:
        """Load configuration from all sources.

        Args:
            project_path: Path to the project file (defaults to ./envconfig.toml)

        Returns:
            Validated project configuration
        """
        # 1. User-level settings
        config_dict = self._load_user_config() or {}

        # 2. Project file
        path = project_path or Path.cwd() / PROJECT_FILE
        project_config = self._load_toml(path) if path.exists() else None
        if project_config:
            config_dict = self._deep_merge(config_dict, project_config)

        try:
            return ProjectConfig(**config_dict)
        except ValidationError as e:
            raise ProjectConfigError(f"Invalid configuration in {path}: {e}", path=str(path)) from e

    def user_config_path(self) -> Path:
        user_config_dir = platformdirs.user_config_dir(appname=self.app_name, appauthor=False)
        return Path(user_config_dir) / "config.toml"

    def _load_user_config(self) -> Optional[Dict[str, Any]]:
        """Load user-specific settings (logging preferences, environment variable)."""
        user_config_path = self.user_config_path()

        if user_config_path.exists():
            logger.debug(f"Loading user config from {user_config_path}")
            user_config = self._load_toml(user_config_path)
            # Schemas belong to projects
            user_config.pop("variables", None)
            return user_config

        logger.debug(f"User config not found at {user_config_path}")
        return None

    def _load_toml(self, path: Path) -> Dict[str, Any]:
        try:
            return toml.load(path)
        except toml.TomlDecodeError as e:
            raise ProjectConfigError(f"Invalid TOML in {path}: {e}", path=str(path)) from e
        except OSError as e:
            raise ProjectConfigError(f"Cannot read {path}: {e}", path=str(path)) from e

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

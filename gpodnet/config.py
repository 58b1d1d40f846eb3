"""
Configuration management using pydantic-settings.
Loads from config.yaml, .env, and environment variables.

Only the command-line front end reads configuration; the API clients take
every value as a constructor argument.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gpodnet.api.transport import DEFAULT_HOST, DEFAULT_TIMEOUT

# Load .env file at module import
load_dotenv()

logger = logging.getLogger(__name__)


class GpodderSettings(BaseSettings):
    """gpodder.net service and account settings."""

    model_config = SettingsConfigDict(
        env_prefix="GPODDER_",
        extra="ignore",
    )

    host: str = Field(default=DEFAULT_HOST, description="Service root URL")
    username: str = Field(default="", description="Account name")
    password: str = Field(default="", description="Account password (env var GPODDER_PASSWORD only)")
    device_id: str | None = Field(default=None, description="Device ID for device-scoped commands")
    timeout: float = Field(default=DEFAULT_TIMEOUT, description="Request timeout in seconds")

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    gpodder: GpodderSettings = Field(default_factory=GpodderSettings)

    log_file: Path | None = Field(default=None, description="Optional log file for debug output")
    verbose: bool = Field(default=True)
    debug: bool = Field(default=False)

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Settings":
        """Load settings from config.yaml and environment."""
        config_data: dict[str, Any] = {}

        if config_path is None:
            config_path = Path("config.yaml")

        if config_path.exists():
            with open(config_path, encoding="utf-8") as f:
                yaml_content: Any = yaml.safe_load(f)
                yaml_config: dict[str, Any] = yaml_content or {}

            if "gpodder" in yaml_config:
                gpodder_yaml = dict(yaml_config["gpodder"] or {})
                # Secrets are env-only: strip from YAML and warn
                if "password" in gpodder_yaml:
                    logger.warning(
                        "password found in config.yaml - credentials are env-var only. "
                        "Use the GPODDER_PASSWORD environment variable instead. Ignoring YAML value."
                    )
                    del gpodder_yaml["password"]
                config_data["gpodder"] = GpodderSettings(**gpodder_yaml)
            for key in ("log_file", "verbose", "debug"):
                if key in yaml_config:
                    config_data[key] = yaml_config[key]

        if "gpodder" not in config_data:
            config_data["gpodder"] = GpodderSettings()

        return cls(**config_data)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Path | None = None) -> Settings:
    """Reload settings from config."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings

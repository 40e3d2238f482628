"""Configuration management for zoho-tasks.

Settings come from three places, later ones winning:

- built-in defaults
- ``config.json`` in the platform user config directory
- ``ALLOY_*`` / ``ZOHO_*`` environment variables

Serverless deployments normally only set environment variables; the JSON file
is there for the ``zoho-tasks config set`` command on a developer machine.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from zoho_tasks.errors import ConfigurationError

APP_NAME = "zoho_tasks"

# env var -> dotted settings key
ENV_VARS = {
    "ALLOY_API_KEY": "alloy.api_key",
    "ALLOY_USER_ID": "alloy.user_id",
    "ALLOY_CREDENTIAL_ID": "alloy.credential_id",
    "ALLOY_BASE_URL": "alloy.base_url",
    "ALLOY_API_VERSION": "alloy.api_version",
    "ALLOY_CONNECTOR_ID": "alloy.connector_id",
    "ALLOY_TIMEOUT": "alloy.timeout",
    "ZOHO_MODULE": "zoho.module",
}

REQUIRED_KEYS = ("alloy.api_key", "alloy.user_id", "alloy.credential_id")


class AlloyConfig(BaseModel):
    """Connector API configuration."""

    api_key: str = Field(default="")
    user_id: str = Field(default="")
    credential_id: str = Field(default="")
    base_url: str = Field(default="https://production.runalloy.com")
    api_version: str = Field(default="2025-09")
    connector_id: str = Field(default="zohoCRM")
    timeout: float = Field(default=30, gt=0)


class ZohoConfig(BaseModel):
    """Zoho CRM configuration."""

    module: str = Field(default="Tasks")


class Settings(BaseModel):
    """Main configuration."""

    alloy: AlloyConfig = Field(default_factory=AlloyConfig)
    zoho: ZohoConfig = Field(default_factory=ZohoConfig)

    def masked(self) -> dict[str, Any]:
        """Settings as a dict with the API key hidden."""
        data = self.model_dump()
        key = data["alloy"]["api_key"]
        if key:
            data["alloy"]["api_key"] = f"{key[:4]}…" if len(key) > 8 else "****"
        return data


def _set_dotted(data: dict[str, Any], key: str, value: Any) -> None:
    keys = key.split(".")
    current = data
    for k in keys[:-1]:
        current = current.setdefault(k, {})
    current[keys[-1]] = value


class ConfigManager:
    """Loads and persists zoho-tasks settings."""

    def __init__(self, environ: Optional[dict[str, str]] = None):
        self.config_dir = Path(user_config_dir(APP_NAME))
        self.config_file = self.config_dir / "config.json"
        self.environ = os.environ if environ is None else environ
        self._settings: Optional[Settings] = None

    @property
    def settings(self) -> Settings:
        """Get the current settings."""
        if self._settings is None:
            self._settings = self.load_settings()
        return self._settings

    def _read_file(self) -> dict[str, Any]:
        if not self.config_file.exists():
            return {}
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Cannot read {self.config_file}: {e}",
                hint="Fix or delete the config file.",
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"{self.config_file} must contain a JSON object",
                hint="Fix or delete the config file.",
            )
        return data

    def load_settings(self) -> Settings:
        """Merge the config file and environment into a Settings object."""
        data = self._read_file()
        for env_var, key in ENV_VARS.items():
            value = self.environ.get(env_var)
            if value:
                _set_dotted(data, key, value)
        try:
            return Settings(**data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def reload(self) -> Settings:
        self._settings = None
        return self.settings

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        value: Any = self.settings
        for k in key.split("."):
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value

    def set_value(self, key: str, value: Any) -> None:
        """Set a value by dot-separated key and persist it to the config file."""
        if key not in ENV_VARS.values():
            raise ConfigurationError(
                f"Unknown configuration key: {key}",
                hint=f"Valid keys: {', '.join(sorted(ENV_VARS.values()))}",
            )
        data = self._read_file()
        _set_dotted(data, key, value)
        try:
            Settings(**data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid value for {key}: {value}") from e
        self.save_config(data)
        self._settings = None

    def save_config(self, data: dict[str, Any]) -> None:
        """Save raw settings to the config file, readable by the owner only."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        self.config_file.chmod(0o600)

    def missing_keys(self) -> list[str]:
        """Required keys that have no value."""
        return [key for key in REQUIRED_KEYS if not self.get(key)]

    def require_credentials(self) -> Settings:
        """Return settings, failing if any connector identifier is missing."""
        missing = self.missing_keys()
        if missing:
            env_names = {key: env for env, key in ENV_VARS.items()}
            names = ", ".join(env_names[key] for key in missing)
            raise ConfigurationError(
                f"Missing connector settings: {names}",
                hint=f"Export {names} or run 'zoho-tasks config set'.",
            )
        return self.settings


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def reset_config_manager() -> None:
    """Drop the cached manager so the next call re-reads file and environment."""
    global _config_manager
    _config_manager = None

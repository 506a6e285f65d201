"""Configuration management for Worklog."""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml  # type: ignore[import-untyped]
from jsonschema import ValidationError as SchemaValidationError  # type: ignore[import-untyped]
from jsonschema import validate  # type: ignore[import-untyped]
from sqlalchemy.engine import URL

from worklog.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_HOME = Path.home() / ".worklog"

# Flat JSON config written by earlier worklog releases
LEGACY_CONFIG_NAME = "config.json"

# Environment variables that override database settings, keyed by config field
DATABASE_ENV_OVERRIDES = {
    "host": "DB_HOST",
    "port": "DB_PORT",
    "user": "DB_USER",
    "password": "DB_PASSWORD",
    "name": "DB_NAME",
}


class ConfigManager:
    """Manage persisted defaults and database connection settings.

    One instance is created per CLI invocation and handed to every command
    through the click context.
    """

    DEFAULT_CONFIG: dict[str, Any] = {
        "version": "1.0",
        "defaults": {
            "consultant": None,
            "client": None,
            "project": None,
            "rate": None,
        },
        "language": None,
        "database": {
            "url": None,
            "host": None,
            "port": None,
            "user": None,
            "password": None,
            "name": None,
            "path": None,
        },
        "logging": {
            "level": "WARNING",
        },
    }

    CONFIG_SCHEMA = {
        "type": "object",
        "properties": {
            "version": {"type": "string"},
            "defaults": {
                "type": "object",
                "properties": {
                    "consultant": {"type": ["string", "null"]},
                    "client": {"type": ["string", "null"]},
                    "project": {"type": ["string", "null"]},
                    "rate": {"type": ["number", "null"], "exclusiveMinimum": 0},
                },
            },
            "language": {"type": ["string", "null"]},
            "database": {
                "type": "object",
                "properties": {
                    "url": {"type": ["string", "null"]},
                    "host": {"type": ["string", "null"]},
                    "port": {"type": ["string", "integer", "null"]},
                    "user": {"type": ["string", "null"]},
                    "password": {"type": ["string", "null"]},
                    "name": {"type": ["string", "null"]},
                    "path": {"type": ["string", "null"]},
                },
            },
            "logging": {
                "type": "object",
                "properties": {
                    "level": {
                        "type": "string",
                        "enum": ["DEBUG", "INFO", "WARNING", "ERROR"],
                    },
                },
            },
        },
        "required": ["version"],
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to config file. Defaults to $WORKLOG_CONFIG or
                ~/.worklog/config.yml
        """
        if config_path is None:
            env_path = os.environ.get("WORKLOG_CONFIG")
            config_path = Path(env_path) if env_path else DEFAULT_HOME / "config.yml"
        self.config_path = Path(config_path)
        self._config: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load the config file if it exists, otherwise start from defaults.

        YAML is a superset of JSON, so JSON config files load as well. When
        the file is missing, a flat ``config.json`` of the older worklog
        format beside it is read instead; saving writes the new file.
        """
        if self.config_path.exists():
            loaded_config = self._read(self.config_path)
        else:
            legacy_path = self.config_path.with_name(LEGACY_CONFIG_NAME)
            if legacy_path == self.config_path or not legacy_path.exists():
                self._config = copy.deepcopy(self.DEFAULT_CONFIG)
                return
            loaded_config = self._from_legacy(self._read(legacy_path))
            logger.info(f"Loaded legacy config {legacy_path}")

        self._config = self._merge_with_defaults(loaded_config)
        self.validate()

    def _read(self, path: Path) -> dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                loaded_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError("error.config_read", path=path, cause=e) from e

        if not isinstance(loaded_config, dict):
            raise ConfigError("error.config_not_mapping", path=path)
        return loaded_config

    @staticmethod
    def _from_legacy(legacy: dict[str, Any]) -> dict[str, Any]:
        """Map the flat legacy layout onto the nested one.

        Empty strings and a zero rate mean unset in the legacy format.
        """
        def value(raw: Any) -> Any:
            return None if raw in ("", 0) else raw

        database = legacy.get("database")
        if not isinstance(database, dict):
            database = {}
        return {
            "version": "1.0",
            "defaults": {
                "consultant": value(legacy.get("default_consultant")),
                "client": value(legacy.get("default_client")),
                "project": value(legacy.get("default_project")),
                "rate": value(legacy.get("default_rate")),
            },
            "database": {
                field: value(database.get(field))
                for field in ("host", "port", "user", "password", "name")
            },
        }

    def _merge_with_defaults(self, config: dict[str, Any]) -> dict[str, Any]:
        """Merge config with defaults to ensure all keys exist."""
        result = copy.deepcopy(self.DEFAULT_CONFIG)
        self._deep_merge(result, config)
        return result

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> None:
        """Deep merge override into base dictionary (in-place)."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., 'defaults.rate')
            default: Default value if key not found or unset

        Returns:
            Configuration value or default

        Example:
            >>> config.get('logging.level')
            'WARNING'
            >>> config.get('defaults.consultant', 'nobody')
            'nobody'
        """
        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
            if value is None:
                return default
        return value

    def set(self, key: str, value: Any, save: bool = True) -> None:
        """Set configuration value using dot notation.

        Args:
            key: Configuration key in dot notation
            value: Value to set
            save: Write the file after setting

        Raises:
            ConfigError: If configuration is invalid after setting
        """
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value
        self.validate()
        if save:
            self.save()

    def validate(self) -> bool:
        """Validate configuration against schema.

        Raises:
            ConfigError: If configuration is invalid
        """
        try:
            validate(instance=self._config, schema=self.CONFIG_SCHEMA)
            return True
        except SchemaValidationError as e:
            raise ConfigError("error.config_invalid", detail=e.message) from e

    def save(self) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(
                self._config, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )

    def clear(self) -> None:
        """Clear saved defaults and database settings."""
        self._config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.save()

    def to_dict(self) -> dict[str, Any]:
        """Get a copy of the full configuration."""
        return copy.deepcopy(self._config)

    @property
    def default_consultant(self) -> Optional[str]:
        return self.get("defaults.consultant") or None

    @property
    def default_client(self) -> Optional[str]:
        return self.get("defaults.client") or None

    @property
    def default_project(self) -> Optional[str]:
        return self.get("defaults.project") or None

    @property
    def default_rate(self) -> Optional[float]:
        rate = self.get("defaults.rate")
        return float(rate) if rate else None

    @property
    def language(self) -> Optional[str]:
        return self.get("language")

    @property
    def log_level(self) -> str:
        return str(self.get("logging.level", "WARNING"))

    def database_setting(self, field: str) -> Optional[str]:
        """Get a database setting, honouring environment overrides.

        Args:
            field: One of host, port, user, password, name

        Returns:
            Value from the environment, then the config file, else None
        """
        env_key = DATABASE_ENV_OVERRIDES.get(field)
        if env_key and os.environ.get(env_key):
            return os.environ[env_key]
        value = self.get(f"database.{field}")
        return str(value) if value is not None else None

    def database_url(self) -> str:
        """Resolve the SQLAlchemy database URL.

        Order: $WORKLOG_DATABASE_URL, database.url, PostgreSQL when a host is
        configured, otherwise a SQLite file (database.path or
        ~/.worklog/worklog.db).
        """
        explicit = os.environ.get("WORKLOG_DATABASE_URL") or self.get("database.url")
        if explicit:
            explicit = str(explicit)
            # SQLAlchemy only accepts the postgresql:// scheme
            if explicit.startswith("postgres://"):
                explicit = explicit.replace("postgres://", "postgresql://", 1)
            return explicit

        host = self.database_setting("host")
        if host:
            port = self.database_setting("port") or "5432"
            if not port.isdigit():
                raise ConfigError("error.config_port", port=port)
            url = URL.create(
                "postgresql",
                username=self.database_setting("user") or "worklog",
                password=self.database_setting("password") or "worklog",
                host=host,
                port=int(port),
                database=self.database_setting("name") or "worklog",
            )
            return url.render_as_string(hide_password=False)

        path = self.get("database.path")
        db_path = Path(path).expanduser() if path else DEFAULT_HOME / "worklog.db"
        return f"sqlite:///{db_path}"

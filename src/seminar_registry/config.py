"""Configuration loading for Seminar Registry."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_FILE = "seminar_registry.yaml"
ENV_PREFIX = "SEMINAR_REGISTRY_"


class ConfigError(Exception):
    """Raised when configuration is invalid."""


@dataclass
class DatabaseConfig:
    """Entity store location. Use ":memory:" for a throwaway database."""

    path: str = "seminar_registry.db"


@dataclass
class LoggingConfig:
    """Log output settings, passed through to setup_logging."""

    dir: str = "logs"
    level: str = "INFO"
    console: bool = True


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = 2022
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class CertificateConfig:
    """Certificate URL generation settings."""

    base_path: str = "/certificates"


@dataclass
class Settings:
    """Seminar Registry configuration.

    Every section has defaults, so an empty or missing config file yields a
    runnable local setup backed by ./seminar_registry.db.
    """

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    certificates: CertificateConfig = field(default_factory=CertificateConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create settings from a dictionary.

        Args:
            data: Configuration dictionary from YAML.

        Returns:
            Parsed settings object.

        Raises:
            ConfigError: If a section is not a mapping or a value has the wrong type.
        """
        sections = {}
        for name in ("database", "logging", "server", "certificates"):
            section = data.get(name) or {}
            if not isinstance(section, dict):
                raise ConfigError(f"Section '{name}' must be a mapping")
            sections[name] = section

        db_data = sections["database"]
        log_data = sections["logging"]
        server_data = sections["server"]
        cert_data = sections["certificates"]

        try:
            port = int(server_data.get("port", 2022))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid server port: {server_data.get('port')!r}") from e

        origins = server_data.get("cors_origins", ["*"])
        if not isinstance(origins, list):
            raise ConfigError("server.cors_origins must be a list")

        return cls(
            database=DatabaseConfig(path=str(db_data.get("path", "seminar_registry.db"))),
            logging=LoggingConfig(
                dir=str(log_data.get("dir", "logs")),
                level=str(log_data.get("level", "INFO")),
                console=bool(log_data.get("console", True)),
            ),
            server=ServerConfig(
                host=str(server_data.get("host", "127.0.0.1")),
                port=port,
                cors_origins=[str(o) for o in origins],
            ),
            certificates=CertificateConfig(
                base_path=str(cert_data.get("base_path", "/certificates")).rstrip("/"),
            ),
        )

    def apply_env(self, environ: dict[str, str] | None = None) -> Settings:
        """Override settings from SEMINAR_REGISTRY_* environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            This settings object, for chaining.

        Raises:
            ConfigError: If SEMINAR_REGISTRY_PORT is not an integer.
        """
        env = os.environ if environ is None else environ

        if f"{ENV_PREFIX}DB_PATH" in env:
            self.database.path = env[f"{ENV_PREFIX}DB_PATH"]
        if f"{ENV_PREFIX}HOST" in env:
            self.server.host = env[f"{ENV_PREFIX}HOST"]
        if f"{ENV_PREFIX}PORT" in env:
            try:
                self.server.port = int(env[f"{ENV_PREFIX}PORT"])
            except ValueError as e:
                raise ConfigError(f"Invalid {ENV_PREFIX}PORT: {env[f'{ENV_PREFIX}PORT']!r}") from e
        if f"{ENV_PREFIX}LOG_DIR" in env:
            self.logging.dir = env[f"{ENV_PREFIX}LOG_DIR"]
        if f"{ENV_PREFIX}LOG_LEVEL" in env:
            self.logging.level = env[f"{ENV_PREFIX}LOG_LEVEL"]
        if f"{ENV_PREFIX}CERTIFICATE_BASE_PATH" in env:
            self.certificates.base_path = env[f"{ENV_PREFIX}CERTIFICATE_BASE_PATH"].rstrip("/")
        return self


def load_settings(config_path: Path | str | None = None, use_env: bool = True) -> Settings:
    """Load settings from a YAML file, then apply environment overrides.

    Args:
        config_path: Path to a YAML config file. When None, ./seminar_registry.yaml
            is used if it exists, otherwise defaults apply.
        use_env: Whether to apply SEMINAR_REGISTRY_* environment overrides.

    Returns:
        Parsed settings object.

    Raises:
        ConfigError: If an explicit file doesn't exist or the YAML is invalid.
    """
    if config_path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_FILE
        data: Any = _read_yaml(candidate) if candidate.exists() else {}
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        data = _read_yaml(config_path)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    settings = Settings.from_dict(data)
    if use_env:
        settings.apply_env()
    return settings


def _read_yaml(path: Path) -> Any:
    try:
        with open(path) as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

"""Unit tests for configuration loading."""

from pathlib import Path

import pytest

from seminar_registry.config import ConfigError, Settings, load_settings


@pytest.mark.unit
class TestSettingsFromDict:
    """Tests for Settings.from_dict."""

    def test_empty_dict_uses_defaults(self) -> None:
        """Every section falls back to its defaults."""
        settings = Settings.from_dict({})

        assert settings.database.path == "seminar_registry.db"
        assert settings.logging.level == "INFO"
        assert settings.server.host == "127.0.0.1"
        assert settings.server.port == 2022
        assert settings.server.cors_origins == ["*"]
        assert settings.certificates.base_path == "/certificates"

    def test_sections_parsed(self) -> None:
        """Values from every section are applied."""
        settings = Settings.from_dict(
            {
                "database": {"path": "/var/lib/seminars.db"},
                "logging": {"dir": "/var/log/seminars", "level": "DEBUG", "console": False},
                "server": {"host": "0.0.0.0", "port": "9000", "cors_origins": ["https://a.test"]},
                "certificates": {"base_path": "/static/certs/"},
            }
        )

        assert settings.database.path == "/var/lib/seminars.db"
        assert settings.logging.dir == "/var/log/seminars"
        assert settings.logging.console is False
        assert settings.server.port == 9000
        assert settings.server.cors_origins == ["https://a.test"]
        assert settings.certificates.base_path == "/static/certs"

    def test_section_must_be_mapping(self) -> None:
        """A scalar section is rejected."""
        with pytest.raises(ConfigError, match="database"):
            Settings.from_dict({"database": "seminars.db"})

    def test_invalid_port(self) -> None:
        """A non-numeric port is rejected."""
        with pytest.raises(ConfigError, match="port"):
            Settings.from_dict({"server": {"port": "eighty"}})

    def test_cors_origins_must_be_list(self) -> None:
        """cors_origins must be a list."""
        with pytest.raises(ConfigError, match="cors_origins"):
            Settings.from_dict({"server": {"cors_origins": "*"}})


@pytest.mark.unit
class TestApplyEnv:
    """Tests for environment overrides."""

    def test_overrides_applied(self) -> None:
        """SEMINAR_REGISTRY_* variables override file values."""
        settings = Settings().apply_env(
            {
                "SEMINAR_REGISTRY_DB_PATH": ":memory:",
                "SEMINAR_REGISTRY_HOST": "0.0.0.0",
                "SEMINAR_REGISTRY_PORT": "8080",
                "SEMINAR_REGISTRY_LOG_DIR": "/var/log/seminars",
                "SEMINAR_REGISTRY_LOG_LEVEL": "DEBUG",
                "SEMINAR_REGISTRY_CERTIFICATE_BASE_PATH": "/certs/",
            }
        )

        assert settings.database.path == ":memory:"
        assert settings.server.host == "0.0.0.0"
        assert settings.server.port == 8080
        assert settings.logging.dir == "/var/log/seminars"
        assert settings.logging.level == "DEBUG"
        assert settings.certificates.base_path == "/certs"

    def test_unrelated_env_ignored(self) -> None:
        """Variables without the prefix change nothing."""
        settings = Settings().apply_env({"DB_PATH": "other.db"})
        assert settings.database.path == "seminar_registry.db"

    def test_invalid_port_env(self) -> None:
        """A non-numeric SEMINAR_REGISTRY_PORT is rejected."""
        with pytest.raises(ConfigError, match="PORT"):
            Settings().apply_env({"SEMINAR_REGISTRY_PORT": "abc"})


@pytest.mark.unit
class TestLoadSettings:
    """Tests for load_settings."""

    def test_loads_yaml_file(self, tmp_path: Path) -> None:
        """Values are read from an explicit YAML file."""
        config = tmp_path / "seminar_registry.yaml"
        config.write_text("database:\n  path: custom.db\nserver:\n  port: 7000\n")

        settings = load_settings(config, use_env=False)

        assert settings.database.path == "custom.db"
        assert settings.server.port == 7000

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        """An explicit path that doesn't exist is an error."""
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "missing.yaml", use_env=False)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Malformed YAML is reported as ConfigError."""
        config = tmp_path / "bad.yaml"
        config.write_text("database: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(config, use_env=False)

    def test_non_mapping_yaml(self, tmp_path: Path) -> None:
        """A YAML list at top level is rejected."""
        config = tmp_path / "list.yaml"
        config.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_settings(config, use_env=False)

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        """An empty file yields default settings."""
        config = tmp_path / "empty.yaml"
        config.write_text("")

        settings = load_settings(config, use_env=False)
        assert settings.database.path == "seminar_registry.db"

    def test_autodetects_file_in_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """seminar_registry.yaml in the working directory is picked up."""
        (tmp_path / "seminar_registry.yaml").write_text("database:\n  path: found.db\n")
        monkeypatch.chdir(tmp_path)

        settings = load_settings(use_env=False)
        assert settings.database.path == "found.db"

    def test_no_file_uses_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a config file defaults apply."""
        monkeypatch.chdir(tmp_path)

        settings = load_settings(use_env=False)
        assert settings.server.port == 2022

    def test_env_applied_after_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment overrides win over file values."""
        config = tmp_path / "seminar_registry.yaml"
        config.write_text("database:\n  path: file.db\n")
        monkeypatch.setenv("SEMINAR_REGISTRY_DB_PATH", "env.db")

        settings = load_settings(config)
        assert settings.database.path == "env.db"

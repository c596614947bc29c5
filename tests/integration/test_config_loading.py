"""Integration tests for configuration loading with layered precedence.

Tests the real load_config() function with actual YAML files, environment
variables, and CLI overrides to verify precedence: defaults < YAML < ENV < CLI.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from smartmedia.application.use_cases.resolve_stream import DEFAULT_STREAM_USER_AGENT
from smartmedia.infrastructure.config.load import load_config
from smartmedia.infrastructure.hoster_resolvers.youtube import DEFAULT_PLAYER_API_URL

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SMARTMEDIA_LOG_LEVEL",
        "SMARTMEDIA_ENVIRONMENT",
        "SMARTMEDIA_CLIENT_NAME",
        "SMARTMEDIA_GEMINI_API_KEY",
        "GEMINI_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def yaml_config(tmp_path: Path) -> Path:
    """Write a minimal YAML config and return its path."""
    config = {
        "app_name": "smartmedia-test",
        "environment": "test",
        "http": {
            "timeout_seconds": 15.0,
            "user_agent": "TestAgent/1.0",
        },
        "logging": {"level": "DEBUG", "format": "console"},
        "extraction": {
            "client_version": "20.10.38",
            "request_timeout_seconds": 5.0,
        },
        "summary": {"model": "gemini-1.5-flash"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config), encoding="utf-8")
    return path


class TestDefaultsOnly:
    """Load with no YAML, no ENV, no CLI: pure defaults."""

    def test_defaults_produce_valid_config(self) -> None:
        config = load_config()
        assert config.app_name == "smartmedia"
        assert config.environment == "dev"
        assert config.http_timeout_seconds == 30.0
        assert config.log_level == "INFO"
        assert config.log_format == "console"  # dev -> console
        assert config.extraction.player_api_url == DEFAULT_PLAYER_API_URL
        assert config.extraction.stream_user_agent == DEFAULT_STREAM_USER_AGENT
        assert config.summary.model == "gemini-2.0-flash"
        assert config.summary.gemini_api_key is None

    def test_defaults_derive_log_format_from_environment(self) -> None:
        config = load_config(cli_overrides={"environment": "prod"})
        assert config.log_format == "json"


class TestYamlOverrides:
    """YAML values override defaults."""

    def test_yaml_overrides_defaults(self, yaml_config: Path) -> None:
        config = load_config(config_path=yaml_config)
        assert config.app_name == "smartmedia-test"
        assert config.environment == "test"
        assert config.http_timeout_seconds == 15.0
        assert config.http_user_agent == "TestAgent/1.0"
        assert config.log_level == "DEBUG"
        assert config.extraction.client_version == "20.10.38"
        assert config.extraction.request_timeout_seconds == 5.0
        assert config.summary.model == "gemini-1.5-flash"

    def test_yaml_partial_section_keeps_section_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "partial.yaml"
        path.write_text(
            yaml.dump({"extraction": {"client_version": "1.0"}}), encoding="utf-8"
        )

        config = load_config(config_path=path)
        assert config.extraction.client_version == "1.0"
        assert config.extraction.player_api_url == DEFAULT_PLAYER_API_URL
        assert config.http_follow_redirects is True

    def test_yaml_file_not_found_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "nonexistent.yaml")

    def test_yaml_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(config_path=path)

    def test_empty_yaml_is_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(config_path=path).app_name == "smartmedia"

    def test_invalid_timeout_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(
            yaml.dump({"extraction": {"request_timeout_seconds": 0}}), encoding="utf-8"
        )
        with pytest.raises(ValidationError):
            load_config(config_path=path)


class TestEnvOverrides:
    """Environment variables override YAML and defaults."""

    def test_env_overrides_yaml(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SMARTMEDIA_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("SMARTMEDIA_CLIENT_VERSION", "21.0.0")

        config = load_config(config_path=yaml_config)
        assert config.log_level == "WARNING"
        assert config.extraction.client_version == "21.0.0"
        # YAML values not overridden by ENV stay
        assert config.app_name == "smartmedia-test"
        assert config.extraction.request_timeout_seconds == 5.0

    def test_env_overrides_client_name_and_version(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SMARTMEDIA_CLIENT_NAME", "WEB")
        monkeypatch.setenv("SMARTMEDIA_CLIENT_VERSION", "2.0")

        config = load_config()
        assert config.extraction.client_name == "WEB"
        assert config.extraction.client_version == "2.0"

    def test_cli_beats_env_client_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SMARTMEDIA_CLIENT_NAME", "WEB")

        config = load_config(cli_overrides={"client_name": "IOS"})
        assert config.extraction.client_name == "IOS"

    def test_bare_gemini_api_key_is_accepted(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "sdk-key")

        assert load_config().summary.gemini_api_key == "sdk-key"

    def test_env_sets_gemini_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SMARTMEDIA_GEMINI_API_KEY", "secret")
        monkeypatch.setenv("SMARTMEDIA_SUMMARY_MODEL", "gemini-2.5-pro")

        config = load_config()
        assert config.summary.gemini_api_key == "secret"
        assert config.summary.model == "gemini-2.5-pro"
        assert "gemini_api_key" not in config.to_sectioned_dict()["summary"]

    def test_dotenv_participates_as_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("SMARTMEDIA_STREAM_USER_AGENT", raising=False)
        dotenv = tmp_path / ".env"
        dotenv.write_text("SMARTMEDIA_STREAM_USER_AGENT=DotenvAgent/1\n", encoding="utf-8")

        try:
            config = load_config(dotenv_path=dotenv)
            assert config.extraction.stream_user_agent == "DotenvAgent/1"
        finally:
            os.environ.pop("SMARTMEDIA_STREAM_USER_AGENT", None)

    def test_missing_dotenv_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(dotenv_path=tmp_path / "missing.env")


class TestCliOverrides:
    """CLI overrides beat everything (highest precedence)."""

    def test_cli_overrides_yaml_and_env(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SMARTMEDIA_LOG_LEVEL", "WARNING")

        config = load_config(
            config_path=yaml_config,
            cli_overrides={"log_level": "ERROR"},
        )
        assert config.log_level == "ERROR"

    def test_cli_overrides_with_sectioned_format(self, yaml_config: Path) -> None:
        config = load_config(
            config_path=yaml_config,
            cli_overrides={"extraction": {"request_timeout_seconds": 2.5}},
        )
        assert config.extraction.request_timeout_seconds == 2.5
        assert config.extraction.client_version == "20.10.38"

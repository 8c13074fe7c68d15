"""Tests for note2anki.config.

Tests cover:
- AppConfig model defaults, validation, immutability
- Loading JSON and YAML config files
- Default config.json lookup
- Environment variable overrides (API key precedence)
- Missing API key and invalid files
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from note2anki.config import DEFAULT_MODEL, AppConfig, load_config
from note2anki.errors import ConfigError

_ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "NOTE2ANKI_MODEL",
    "NOTE2ANKI_MAX_TOKENS",
    "NOTE2ANKI_TEMPERATURE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate from the caller's environment, config.json, and .env.

    setenv-then-delenv makes monkeypatch restore each variable on teardown,
    including values that load_dotenv writes during a test.
    """
    for var in _ENV_VARS:
        monkeypatch.setenv(var, "unset")
        monkeypatch.delenv(var)
    monkeypatch.chdir(tmp_path)


# ============================================================
# AppConfig Model Tests
# ============================================================


class TestAppConfig:
    """Test AppConfig Pydantic model."""

    def test_default_values(self) -> None:
        config = AppConfig()
        assert config.model == DEFAULT_MODEL
        assert config.max_tokens == 2000
        assert config.temperature == 0.7
        assert config.system_prompt is None

    def test_frozen_immutability(self) -> None:
        config = AppConfig(api_key="k")
        with pytest.raises(ValidationError):
            config.model = "other-model"  # type: ignore[misc]

    def test_api_key_hidden_from_repr(self) -> None:
        config = AppConfig(api_key="sk-ant-secret")
        assert "sk-ant-secret" not in repr(config)

    def test_invalid_max_tokens(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(max_tokens=0)

    def test_invalid_temperature(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(temperature=1.5)


# ============================================================
# load_config Tests
# ============================================================


class TestLoadConfig:
    """Test config loading from files and env vars."""

    def test_env_api_key_only(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        config = load_config()
        assert config.api_key == "sk-env"
        assert config.model == DEFAULT_MODEL

    def test_missing_api_key_raises(self) -> None:
        with pytest.raises(ConfigError, match="API key not found"):
            load_config()

    def test_blank_api_key_in_file_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.json"
        config_file.write_text(json.dumps({"api_key": "   "}))
        with pytest.raises(ConfigError, match="API key"):
            load_config(str(config_file))

    def test_load_from_json(self, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.json"
        config_file.write_text(json.dumps({
            "api_key": "sk-file",
            "model": "claude-sonnet-4-5-20250929",
            "max_tokens": 4096,
            "temperature": 0.2,
            "system_prompt": "Make cloze-free cards.",
        }))

        config = load_config(str(config_file))
        assert config.api_key == "sk-file"
        assert config.model == "claude-sonnet-4-5-20250929"
        assert config.max_tokens == 4096
        assert config.temperature == 0.2
        assert config.system_prompt == "Make cloze-free cards."

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text('api_key: "sk-yaml"\nmax_tokens: 1000\n')

        config = load_config(str(config_file))
        assert config.api_key == "sk-yaml"
        assert config.max_tokens == 1000
        assert config.temperature == 0.7  # default preserved

    def test_tab_indented_json(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"api_key": "sk-tab", "model": "m"}, indent="\t"))

        config = load_config(str(config_file), env_file=None)
        assert config.api_key == "sk-tab"
        assert config.model == "m"

    def test_tab_indented_default_config_json(self, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text(
            json.dumps({"api_key": "sk-default", "max_tokens": 500}, indent="\t")
        )
        config = load_config(env_file=None)
        assert config.max_tokens == 500

    def test_yml_suffix_read_as_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yml"
        config_file.write_text("api_key: sk-yml\nmodel: claude-yml\n")
        assert load_config(str(config_file)).model == "claude-yml"

    def test_yaml_syntax_in_json_file_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text("api_key: sk-yaml\n")
        with pytest.raises(ConfigError, match="Invalid config file"):
            load_config(str(config_file))

    def test_default_config_json_is_used(self, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text(json.dumps({"api_key": "sk-default"}))
        config = load_config()
        assert config.api_key == "sk-default"

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.json"
        config_file.write_text(json.dumps({"api_key": "k", "colour": "blue"}))
        config = load_config(str(config_file))
        assert config.api_key == "k"

    def test_env_api_key_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_file = tmp_path / "custom.json"
        config_file.write_text(json.dumps({"api_key": "sk-file"}))
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")

        config = load_config(str(config_file))
        assert config.api_key == "sk-env"

    def test_env_model_settings_override_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_file = tmp_path / "custom.json"
        config_file.write_text(json.dumps({"api_key": "k", "model": "from-file"}))
        monkeypatch.setenv("NOTE2ANKI_MODEL", "from-env")
        monkeypatch.setenv("NOTE2ANKI_MAX_TOKENS", "3000")
        monkeypatch.setenv("NOTE2ANKI_TEMPERATURE", "0.1")

        config = load_config(str(config_file))
        assert config.model == "from-env"
        assert config.max_tokens == 3000
        assert config.temperature == 0.1

    def test_invalid_env_value_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANTHROPIC_API_KEY", "k")
        monkeypatch.setenv("NOTE2ANKI_MAX_TOKENS", "lots")
        with pytest.raises(ConfigError, match="NOTE2ANKI_MAX_TOKENS"):
            load_config()

    def test_env_file_loaded(self, tmp_path: Path) -> None:
        env_file = tmp_path / "test.env"
        env_file.write_text("ANTHROPIC_API_KEY=sk-dotenv\n")

        config = load_config(env_file=str(env_file))
        assert config.api_key == "sk-dotenv"

    def test_env_file_does_not_override_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        env_file = tmp_path / "test.env"
        env_file.write_text("ANTHROPIC_API_KEY=sk-dotenv\n")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")

        config = load_config(env_file=str(env_file))
        assert config.api_key == "sk-env"

    def test_nonexistent_explicit_config_raises(self) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config("/nonexistent/config.json")

    def test_invalid_syntax_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "bad.json"
        config_file.write_text("{unclosed: [")
        with pytest.raises(ConfigError, match="Invalid config file"):
            load_config(str(config_file))

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.json"
        config_file.write_text("[1, 2, 3]")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(str(config_file))

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.json"
        config_file.write_text(json.dumps({"api_key": "k", "max_tokens": -5}))
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(str(config_file))

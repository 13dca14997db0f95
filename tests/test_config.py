"""Tests for building the session configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from convo_cli.config import (
    DEFAULT_TEMPERATURE,
    DEFAULT_TIMEOUT,
    EnvSettings,
    SessionConfig,
    build_config,
    parse_temperature,
)
from convo_cli.errors import ConfigError

ENV_VARS = ("LLM_PROVIDER_KEY", "LLM_MODEL", "CHAT_COMPLETION_URL", "TEMPERATURE", "CHAT_TIMEOUT")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def _env() -> EnvSettings:
    return EnvSettings(_env_file=None)


class TestParseTemperature:
    def test_valid(self):
        assert parse_temperature("0.35") == 0.35

    @pytest.mark.parametrize("value", [None, "", "hot", "1,5", "nan", "inf", "-inf", "NaN"])
    def test_invalid_falls_back_to_default(self, value):
        assert parse_temperature(value) == DEFAULT_TEMPERATURE


class TestBuildConfig:
    def test_values_from_environment(self, clean_env):
        clean_env.setenv("LLM_PROVIDER_KEY", "sk-env")
        clean_env.setenv("LLM_MODEL", "meta/llama")
        clean_env.setenv("CHAT_COMPLETION_URL", "https://env.example.com/chat")
        clean_env.setenv("TEMPERATURE", "1.2")

        cfg = build_config(env=_env())

        assert cfg.api_key == "sk-env"
        assert cfg.model == "meta/llama"
        assert cfg.url == "https://env.example.com/chat"
        assert cfg.temperature == 1.2
        assert cfg.timeout == DEFAULT_TIMEOUT
        assert cfg.input_path == Path("input") / "messages.json"
        assert cfg.prompts_dir == Path("prompts")
        assert cfg.logs_dir == Path("logs")

    def test_arguments_override_environment(self, clean_env):
        clean_env.setenv("LLM_PROVIDER_KEY", "sk-env")
        clean_env.setenv("LLM_MODEL", "env-model")
        clean_env.setenv("CHAT_COMPLETION_URL", "https://env.example.com/chat")
        clean_env.setenv("TEMPERATURE", "1.2")

        cfg = build_config(
            api_key="sk-flag",
            model="flag-model",
            temperature="0.1",
            input_file="seed.json",
            input_dir=Path("data"),
            timeout=5.0,
            env=_env(),
        )

        assert cfg.api_key == "sk-flag"
        assert cfg.model == "flag-model"
        assert cfg.url == "https://env.example.com/chat"
        assert cfg.temperature == 0.1
        assert cfg.timeout == 5.0
        assert cfg.input_path == Path("data") / "seed.json"

    def test_unparsable_temperature_uses_default(self, clean_env):
        cfg = build_config(api_key="k", model="m", url="u", temperature="warm", env=_env())
        assert cfg.temperature == DEFAULT_TEMPERATURE

    @pytest.mark.parametrize(
        ("kwargs", "missing"),
        [
            ({"model": "m", "url": "u"}, "LLM_PROVIDER_KEY"),
            ({"api_key": "k", "url": "u"}, "LLM_MODEL"),
            ({"api_key": "k", "model": "m"}, "CHAT_COMPLETION_URL"),
        ],
    )
    def test_missing_required_value(self, clean_env, kwargs, missing):
        with pytest.raises(ConfigError, match=missing):
            build_config(env=_env(), **kwargs)

    def test_config_is_immutable(self, clean_env):
        cfg = build_config(api_key="k", model="m", url="u", env=_env())
        with pytest.raises(ValidationError):
            cfg.model = "other"

    @pytest.mark.parametrize("value", ["nan", "inf"])
    def test_non_finite_temperature_uses_default(self, clean_env, value):
        cfg = build_config(api_key="k", model="m", url="u", temperature=value, env=_env())
        assert cfg.temperature == DEFAULT_TEMPERATURE

    def test_session_config_rejects_non_finite_temperature(self):
        with pytest.raises(ValidationError):
            SessionConfig(api_key="k", model="m", url="u", temperature=float("nan"))

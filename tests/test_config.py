from __future__ import annotations

import os

import pytest
from pydantic import ValidationError

from agent_conductor.config import Settings

ENV_NAMES = (
    "CONDUCTOR_MAX_TURNS",
    "CONDUCTOR_PORT",
    "CONDUCTOR_LLM_PROVIDER",
    "CONDUCTOR_LOG_LEVEL",
    "CONDUCTOR_LLM_RETRIES",
    "CONDUCTOR_TURN_TIMEOUT",
    "TEST_PROVIDER_API_KEY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_NAMES:
        # setenv first so teardown also removes values exported from .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # Keep any developer .env out of the way.
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = Settings.from_env()
    assert settings.max_turns == 6
    assert settings.port == 3001
    assert settings.llm_provider == "openai"
    assert settings.llm_retries == 0


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("CONDUCTOR_MAX_TURNS", "3")
    monkeypatch.setenv("CONDUCTOR_TURN_TIMEOUT", "4.5")
    monkeypatch.setenv("CONDUCTOR_LLM_PROVIDER", "deepseek")
    monkeypatch.setenv("CONDUCTOR_LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.max_turns == 3
    assert settings.turn_timeout == 4.5
    assert settings.llm_provider == "deepseek"
    assert settings.log_level == "DEBUG"


def test_reads_dotenv_file(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text(
        "CONDUCTOR_MAX_TURNS=4\nCONDUCTOR_LLM_RETRIES=2\nTEST_PROVIDER_API_KEY=sk-from-file\n",
        encoding="utf-8",
    )

    settings = Settings.from_env()

    assert settings.max_turns == 4
    assert settings.llm_retries == 2
    # from_env also exports the file so provider keys resolve through os.environ
    assert os.environ["TEST_PROVIDER_API_KEY"] == "sk-from-file"


def test_environment_wins_over_dotenv_file(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("CONDUCTOR_PORT=9000\n", encoding="utf-8")
    monkeypatch.setenv("CONDUCTOR_PORT", "9100")
    assert Settings.from_env().port == 9100


@pytest.mark.parametrize(
    "name, value, field",
    [
        ("CONDUCTOR_PORT", "http", "port"),
        ("CONDUCTOR_MAX_TURNS", "0", "max_turns"),
        ("CONDUCTOR_LLM_RETRIES", "-1", "llm_retries"),
    ],
)
def test_invalid_values(monkeypatch, name, value, field):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError, match=field):
        Settings.from_env()


def test_settings_are_immutable():
    settings = Settings(max_turns=2)
    with pytest.raises(ValidationError):
        settings.max_turns = 5

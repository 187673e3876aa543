from pathlib import Path

import pytest

from serenity.config.settings import AppConfig, ConfigManager, ConfigValidationError
from serenity.utils.logging import redact_secrets

DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "serenity" / "config" / "default_config.yaml"

ENV_VARS = [
    "SERENITY_TMDB_API_KEY", "SERENITY_YOUTUBE_API_KEY", "SERENITY_YELP_API_KEY",
    "SERENITY_SOURCE_TIMEOUT", "SERENITY_DEFAULT_LOCATION", "SERENITY_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def write_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_default_config_loads():
    config = ConfigManager().load(str(DEFAULT_CONFIG))

    assert config.recommendation.default_location == "New York, NY"
    assert config.sources.timeout_seconds == 5.0
    assert config.sources.tmdb_base_url == "https://api.themoviedb.org/3"
    assert config.logging.level == "INFO"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigManager().load(str(tmp_path / "missing.yaml"))


def test_empty_file_uses_defaults(tmp_path):
    config = ConfigManager().load(write_config(tmp_path, ""))

    assert config == AppConfig()


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("SERENITY_TMDB_API_KEY", "env-tmdb")
    monkeypatch.setenv("SERENITY_YELP_API_KEY", "env-yelp")
    monkeypatch.setenv("SERENITY_SOURCE_TIMEOUT", "2.5")
    monkeypatch.setenv("SERENITY_DEFAULT_LOCATION", "Boston, MA")
    monkeypatch.setenv("SERENITY_LOG_LEVEL", "debug")

    config = ConfigManager().load(write_config(tmp_path, "sources:\n  tmdb_api_key: file-key\n"))

    assert config.sources.tmdb_api_key == "env-tmdb"
    assert config.sources.yelp_api_key == "env-yelp"
    assert config.sources.timeout_seconds == 2.5
    assert config.recommendation.default_location == "Boston, MA"
    assert config.logging.level == "DEBUG"


@pytest.mark.parametrize("value", ["null", "0"])
def test_timeout_can_be_disabled(tmp_path, value):
    config = ConfigManager().load(write_config(tmp_path, f"sources:\n  timeout_seconds: {value}\n"))

    assert config.sources.timeout_seconds is None


@pytest.mark.parametrize("text,message", [
    ("sources:\n  timeout_seconds: -1\n", "timeout"),
    ("sources:\n  timeout_seconds: soon\n", "timeout"),
    ("recommendation:\n  default_location: ''\n", "default_location"),
    ("logging:\n  level: LOUD\n", "Logging level"),
    ("logging:\n  format: xml\n", "format"),
    ("sources:\n  yelp_base_url: ''\n", "yelp_base_url"),
    ("- just\n- a list\n", "mapping"),
])
def test_invalid_config_raises(tmp_path, text, message):
    with pytest.raises(ConfigValidationError, match=message):
        ConfigManager().load(write_config(tmp_path, text))


def test_secrets_are_redacted():
    config = AppConfig()
    config.sources.yelp_api_key = "super-secret"

    redacted = redact_secrets(config.to_dict())

    assert redacted["sources"]["yelp_api_key"] == "***REDACTED***"
    assert redacted["sources"]["yelp_base_url"] == "https://api.yelp.com/v3"
    assert redacted["recommendation"]["default_location"] == "New York, NY"

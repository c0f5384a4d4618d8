from pathlib import Path

import pytest

from newsapiorg.config import ClientConfig
from newsapiorg.exceptions import ConfigurationError


def test_round_trip(tmp_path: Path) -> None:
    config_path = tmp_path / "newsapi.json"
    config = ClientConfig(api_key="abc", country="us", category="business", timeout=(5, 15))
    config.dump(config_path)

    loaded = ClientConfig.from_file(config_path)
    assert loaded == config
    assert loaded.timeout == (5, 15)


def test_defaults_match_legacy_parameters() -> None:
    config = ClientConfig()

    assert config.country == "se"
    assert config.category == "technology"
    assert config.api_key is None


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ClientConfig.from_file(tmp_path / "missing.json")


def test_invalid_json_raises(tmp_path: Path) -> None:
    config_path = tmp_path / "newsapi.json"
    config_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ClientConfig.from_file(config_path)


def test_invalid_values_raise(tmp_path: Path) -> None:
    config_path = tmp_path / "newsapi.json"
    config_path.write_text('{"max_workers": 0}', encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ClientConfig.from_file(config_path)


def test_from_env_reads_prefixed_variables() -> None:
    config = ClientConfig.from_env(
        {"NEWSAPI_API_KEY": "secret", "NEWSAPI_COUNTRY": "no", "NEWSAPI_CATEGORY": "", "OTHER": "x"}
    )

    assert config.api_key == "secret"
    assert config.country == "no"
    assert config.category is None


def test_from_env_keeps_defaults_when_unset(monkeypatch) -> None:
    for name in ("NEWSAPI_API_KEY", "NEWSAPI_COUNTRY", "NEWSAPI_CATEGORY"):
        monkeypatch.delenv(name, raising=False)

    config = ClientConfig.from_env()

    assert config == ClientConfig()

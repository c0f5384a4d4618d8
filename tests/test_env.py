import os
from pathlib import Path

from newsapiorg import ENV_FILE_VARIABLE, _load_local_env


def test_env_file_populates_missing_variables(tmp_path: Path, monkeypatch) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text(
        "# local settings\nNEWSAPI_TEST_KEY='from-file'\nNEWSAPI_TEST_COUNTRY=us\nnot a pair\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("NEWSAPI_TEST_COUNTRY", "no")

    try:
        loaded = _load_local_env(env_path)

        assert loaded == ["NEWSAPI_TEST_KEY"]
        assert os.environ["NEWSAPI_TEST_KEY"] == "from-file"
        assert os.environ["NEWSAPI_TEST_COUNTRY"] == "no"
    finally:
        os.environ.pop("NEWSAPI_TEST_KEY", None)


def test_env_file_location_can_be_overridden(tmp_path: Path, monkeypatch) -> None:
    env_path = tmp_path / "custom.env"
    env_path.write_text("NEWSAPI_TEST_CATEGORY=business\n", encoding="utf-8")
    monkeypatch.setenv(ENV_FILE_VARIABLE, str(env_path))

    try:
        assert _load_local_env() == ["NEWSAPI_TEST_CATEGORY"]
        assert os.environ["NEWSAPI_TEST_CATEGORY"] == "business"
    finally:
        os.environ.pop("NEWSAPI_TEST_CATEGORY", None)


def test_missing_env_file_loads_nothing(tmp_path: Path) -> None:
    assert _load_local_env(tmp_path / "absent.env") == []

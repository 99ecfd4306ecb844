from __future__ import annotations

from pathlib import Path

import pytest

from civildate import CANONICAL_FORMAT, Settings

ENV_KEYS = ("CIVILDATE_STORAGE_FORMAT", "CIVILDATE_OUTPUT_FORMAT", "CIVILDATE_DEFAULT_LOCALE")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    # setenv first so teardown also removes values written by load_dotenv()
    for k in ENV_KEYS:
        monkeypatch.setenv(k, "unset")
        monkeypatch.delenv(k)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env(dotenv=False)
    assert s == Settings()
    assert s.storage_format == CANONICAL_FORMAT


def test_from_env(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("CIVILDATE_STORAGE_FORMAT", "%d.%m.%Y")
    clean_env.setenv("CIVILDATE_OUTPUT_FORMAT", " %Y/%m/%d ")
    clean_env.setenv("CIVILDATE_DEFAULT_LOCALE", "fr_FR")
    s = Settings.from_env(dotenv=False)
    assert s.storage_format == "%d.%m.%Y"
    assert s.output_format == "%Y/%m/%d"
    assert s.default_locale == "fr_FR"


def test_from_dotenv_file(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    env = tmp_path / ".env"
    env.write_text("CIVILDATE_DEFAULT_LOCALE=de_DE\n", encoding="utf-8")
    s = Settings.from_env(dotenv_path=env)
    assert s.default_locale == "de_DE"
    assert s.storage_format == CANONICAL_FORMAT


def test_environment_wins_over_dotenv(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    env = tmp_path / ".env"
    env.write_text("CIVILDATE_DEFAULT_LOCALE=de_DE\n", encoding="utf-8")
    clean_env.setenv("CIVILDATE_DEFAULT_LOCALE", "it_IT")
    assert Settings.from_env(dotenv_path=env).default_locale == "it_IT"

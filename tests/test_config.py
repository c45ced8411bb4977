from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from core.config import AppSettings, _parse_env_lines, write_user_env_vars


def test_defaults():
    settings = AppSettings(_env_file=None)
    assert settings.scraper_endpoint_url is None
    assert settings.scraper_api_token is None
    assert settings.placeholder_avatar_base_url == "https://ui-avatars.com/api/"
    assert settings.max_concurrency >= 1


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("INSTA_RESOLVER_SCRAPER_ENDPOINT_URL", "https://scraper.test/run")
    monkeypatch.setenv("INSTA_RESOLVER_SCRAPER_API_TOKEN", "secret")
    settings = AppSettings(_env_file=None)
    assert settings.scraper_endpoint_url == "https://scraper.test/run"
    assert settings.scraper_api_token.get_secret_value() == "secret"
    assert "secret" not in repr(settings)


def test_rejects_non_positive_timeout():
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, http_timeout_seconds=0)


def test_reads_env_file(tmp_path: Path):
    env = tmp_path / ".env"
    env.write_text("INSTA_RESOLVER_SCRAPER_ENDPOINT_URL=https://from-file.test/run\n", encoding="utf-8")
    settings = AppSettings(_env_file=env)
    assert settings.scraper_endpoint_url == "https://from-file.test/run"


def test_write_user_env_vars_merges_and_skips_none(tmp_path: Path):
    env = tmp_path / "cfg" / ".env"
    env.parent.mkdir()
    env.write_text("KEEP=1\nINSTA_RESOLVER_SCRAPER_API_TOKEN=old\n", encoding="utf-8")

    write_user_env_vars(
        {"INSTA_RESOLVER_SCRAPER_ENDPOINT_URL": "https://x.test/run", "INSTA_RESOLVER_SCRAPER_API_TOKEN": None},
        env_path=env,
    )

    data = _parse_env_lines(env.read_text(encoding="utf-8"))
    assert data == {
        "KEEP": "1",
        "INSTA_RESOLVER_SCRAPER_API_TOKEN": "old",
        "INSTA_RESOLVER_SCRAPER_ENDPOINT_URL": "https://x.test/run",
    }

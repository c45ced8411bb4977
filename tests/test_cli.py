from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from cli import main as cli_main
from cli.doctor import task_metadata_url
from cli.ui_components import profile_status
from core.config import AppSettings
from core.domain.models import InstagramProfile

runner = CliRunner()


class FakeService:
    def __init__(self, settings=None, **kwargs) -> None:
        self.settings = settings

    async def resolve_many(self, usernames, *, max_concurrency=None):
        out = []
        for name in usernames:
            name = name.lstrip("@")
            if name == "ghost":
                out.append(InstagramProfile.failed(name))
            else:
                out.append(InstagramProfile(username=name, display_name=name.title(), avatar_url=f"https://img/{name}.jpg"))
        return out


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("INSTA_RESOLVER_SCRAPER_ENDPOINT_URL", "https://scraper.test/run")
    monkeypatch.setattr(cli_main, "ProfileResolutionService", FakeService)


def test_resolve_json_output():
    result = runner.invoke(cli_main.app, ["resolve", "@alice", "bob", "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload == [
        {"avatarUrl": "https://img/alice.jpg", "displayName": "Alice", "exists": True, "username": "alice"},
        {"avatarUrl": "https://img/bob.jpg", "displayName": "Bob", "exists": True, "username": "bob"},
    ]


def test_resolve_table_and_export(tmp_path):
    out = tmp_path / "reports" / "profiles.json"
    result = runner.invoke(cli_main.app, ["resolve", "alice", "--export", str(out)])
    assert result.exit_code == 0, result.output
    assert "alice" in result.stdout
    saved = json.loads(out.read_text(encoding="utf-8"))
    assert saved[0]["username"] == "alice"


def test_resolve_exit_code_when_every_lookup_failed():
    result = runner.invoke(cli_main.app, ["resolve", "ghost", "--json"])
    assert result.exit_code == 1


def test_profile_status_labels():
    base = "https://ui-avatars.com/api/"
    assert profile_status(InstagramProfile.failed("a"), base) == "lookup failed"
    assert profile_status(InstagramProfile(username="a", display_name="a"), base) == "no image"
    assert profile_status(InstagramProfile(username="a", display_name="a", avatar_url=base + "?name=a"), base) == "placeholder"
    assert profile_status(InstagramProfile(username="a", display_name="a", avatar_url="https://img/a.jpg"), base) == "found"


def test_json_output_stays_parseable_with_export(tmp_path):
    out = tmp_path / "profiles.json"
    result = runner.invoke(cli_main.app, ["resolve", "alice", "--json", "--export", str(out)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)[0]["username"] == "alice"
    assert out.exists()


def test_json_output_stays_parseable_without_endpoint(monkeypatch):
    monkeypatch.delenv("INSTA_RESOLVER_SCRAPER_ENDPOINT_URL")
    monkeypatch.setattr(cli_main, "AppSettings", lambda: AppSettings(_env_file=None))
    result = runner.invoke(cli_main.app, ["resolve", "alice", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)[0]["username"] == "alice"


@pytest.mark.parametrize("handle", ["@", "   "])
def test_resolve_rejects_empty_handles(handle):
    result = runner.invoke(cli_main.app, ["resolve", "alice", handle])
    assert result.exit_code == 2
    assert "empty username" in result.output


@pytest.mark.parametrize(
    ("endpoint", "expected"),
    [
        (
            "https://api.apify.com/v2/actor-tasks/me~ig-task/run-sync?token=abc",
            "https://api.apify.com/v2/actor-tasks/me~ig-task?token=abc",
        ),
        (
            "https://api.apify.com/v2/actor-tasks/me~ig-task/run-sync-get-dataset-items/",
            "https://api.apify.com/v2/actor-tasks/me~ig-task",
        ),
        ("https://scraper.example/run", None),
    ],
)
def test_doctor_checks_task_metadata_instead_of_running(endpoint, expected):
    assert task_metadata_url(endpoint) == expected

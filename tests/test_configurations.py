from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.domain.models import RequestConfiguration
from core.services.configurations import build_configurations, clean_username


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("@alice", "alice"),
        ("alice", "alice"),
        ("  @bob ", "bob"),
        ("carol@", "carol@"),
    ],
)
def test_clean_username_strips_leading_at(raw, expected):
    assert clean_username(raw) == expected


def test_builder_is_deterministic():
    first = [c.payload() for c in build_configurations("alice")]
    second = [c.payload() for c in build_configurations("alice")]
    assert first == second


def test_builder_orders_direct_url_then_search_then_posts():
    configs = build_configurations("alice")
    assert len(configs) == 3

    direct, search, posts = (c.payload() for c in configs)

    assert direct["search"] == "https://www.instagram.com/alice/"
    assert direct["resultsType"] == "details"
    assert direct["proxy"] == {"useApifyProxy": True, "apifyProxyGroups": ["RESIDENTIAL"]}
    assert "directProfileData: true" in direct["extendOutputFunction"]

    assert search["search"] == "alice"
    assert search["resultsType"] == "details"
    assert search["enhanceUserSearchWithFacebookPage"] is False

    assert posts["search"] == "alice"
    assert posts["resultsType"] == "posts"
    assert posts["proxy"]["apifyProxyGroups"] == ["DATACENTER"]
    assert "extendOutputFunction" not in posts


def test_every_configuration_is_small_and_well_formed():
    for config in build_configurations("alice"):
        body = config.payload()
        assert body["search"]
        assert body["searchType"] == "user"
        assert 1 <= body["searchLimit"] <= 5
        assert 1 <= body["resultsLimit"] <= 5
        assert body["addParentData"] is True


def test_configurations_are_immutable():
    config = build_configurations("alice")[0]
    with pytest.raises(ValidationError):
        config.search = "mallory"


def test_configuration_rejects_large_limits():
    with pytest.raises(ValidationError):
        RequestConfiguration(search="alice", results_limit=50)

"""End-to-end tests for ``POST /tastings``."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from cask.adapters.db.schema import tasting
from cask.adapters.stores.badges import SqlAlchemyBadgeStore
from cask.adapters.stores.tastings import SqlAlchemyBottleTagStore
from cask.domain.model import MAX_TAG_LENGTH

from tests.fixtures.datagen import NOW


def test_create_tasting(client, as_user, seed, uow):
    """201 with a camelCase body; counters, tags and badges are applied."""
    resp = client.post(
        "/tastings",
        json={
            "bottle": seed.malt_12,
            "notes": "Honey and oak",
            "rating": 4.5,
            "tags": ["Smoky", "smoky", "PEATY"],
        },
        headers=as_user(),
    )

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["bottle"] == seed.malt_12
    assert body["createdBy"] == seed.alice
    assert body["tags"] == ["peaty", "smoky"]
    assert body["rating"] == 4.5
    assert body["createdAt"].startswith("2024-06-01T12:00:00")

    with uow:
        assert uow.catalog.get_bottle(seed.malt_12).total_tastings == 1
        assert uow.tags.counts(seed.malt_12) == {"peaty": 1, "smoky": 1}
        assert uow.badges.get_award(seed.aged_malts, seed.alice).level == 1


def test_client_supplied_created_at(client, as_user, seed):
    created_at = (NOW - timedelta(days=2)).isoformat()
    resp = client.post(
        "/tastings",
        json={"bottle": seed.malt_8, "createdAt": created_at},
        headers=as_user("bob"),
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["createdAt"].startswith("2024-05-30T12:00:00")


@pytest.mark.parametrize(
    "offset, message",
    [
        (timedelta(minutes=6), "createdAt too far in future"),
        (-timedelta(days=8), "createdAt too far in past"),
    ],
)
def test_created_at_out_of_window(client, as_user, seed, offset, message):
    resp = client.post(
        "/tastings",
        json={"bottle": seed.malt_12, "createdAt": (NOW + offset).isoformat()},
        headers=as_user(),
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": message}


def test_unknown_bottle(client, as_user):
    resp = client.post("/tastings", json={"bottle": 999}, headers=as_user())
    assert resp.status_code == 400
    assert resp.json() == {"error": "Could not identify bottle"}


def test_unknown_user(client, seed):
    resp = client.post(
        "/tastings", json={"bottle": seed.malt_12}, headers={"X-User-Id": "999"}
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Could not identify user"}


def test_invalid_body(client, as_user, seed):
    """Schema violations are reported as 400 with the offending field."""
    resp = client.post(
        "/tastings", json={"bottle": seed.malt_12, "rating": 7}, headers=as_user()
    )
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("rating:")


@pytest.mark.parametrize("header", [None, "", "abc", "0"])
def test_requires_user(client, seed, header):
    headers = {} if header is None else {"X-User-Id": header}
    resp = client.post("/tastings", json={"bottle": seed.malt_12}, headers=headers)
    assert resp.status_code == 401
    assert "error" in resp.json()


def test_duplicate_tasting(client, as_user, seed, uow):
    """The same user, bottle and second is a conflict; counters stay put."""
    payload = {"bottle": seed.malt_12, "tags": ["smoky"]}
    assert client.post("/tastings", json=payload, headers=as_user()).status_code == 201

    resp = client.post("/tastings", json=payload, headers=as_user())

    assert resp.status_code == 409
    assert resp.json() == {"error": "Tasting already exists"}
    with uow:
        assert uow.catalog.get_bottle(seed.malt_12).total_tastings == 1
        assert uow.tags.counts(seed.malt_12) == {"smoky": 1}


def test_overlong_tag(client, as_user, seed, uow):
    """Tags longer than the stored column are a client error, not a 500."""
    resp = client.post(
        "/tastings",
        json={"bottle": seed.malt_12, "tags": ["x" * (MAX_TAG_LENGTH + 1)]},
        headers=as_user(),
    )
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("tags.0:")
    with uow:
        assert uow.catalog.get_bottle(seed.malt_12).total_tastings == 0


def test_padded_tag_at_limit_is_accepted(client, as_user, seed):
    tag = "x" * MAX_TAG_LENGTH
    resp = client.post(
        "/tastings",
        json={"bottle": seed.malt_12, "tags": [f"  {tag} "]},
        headers=as_user(),
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["tags"] == [tag]


@pytest.mark.parametrize(
    "store_cls, method",
    [(SqlAlchemyBottleTagStore, "increment"), (SqlAlchemyBadgeStore, "award")],
)
def test_storage_failure_rolls_back(
    client, as_user, seed, uow, monkeypatch, store_cls, method
):
    """A failure after the insert is a generic 500 and leaves no trace."""

    def boom(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(store_cls, method, boom)

    resp = client.post(
        "/tastings",
        json={"bottle": seed.malt_12, "tags": ["smoky"]},
        headers=as_user(),
    )

    assert resp.status_code == 500
    assert resp.json() == {"error": "Unable to create tasting"}
    monkeypatch.undo()
    with uow:
        assert uow.catalog.get_bottle(seed.malt_12).total_tastings == 0
        assert uow.catalog.get_entity(seed.glen).total_tastings == 0
        assert uow.tags.counts(seed.malt_12) == {}
        assert uow.badges.get_award(seed.aged_malts, seed.alice) is None
        assert uow.connection.execute(
            select(func.count()).select_from(tasting)
        ).scalar_one() == 0

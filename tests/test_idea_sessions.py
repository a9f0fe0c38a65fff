"""Tests for recipe idea session actions.

Tests cover:
- Create / partial update / list handlers against the in-memory store
- Ownership isolation (foreign ids look like missing ids)
- The HTTP action surface and its envelope
"""

from datetime import datetime, timedelta, timezone

import pytest

from recipe_ideas.errors import NotFoundError, UnauthorizedError
from recipe_ideas.models import RecipeIdeaSession
from recipe_ideas.schemas import IdeaSessionCreate, IdeaSessionUpdate, IdeaSessionList
from recipe_ideas.services.idea_sessions import (
    create_idea_session, update_idea_session, list_idea_sessions,
)

ALICE = "user-alice"
BOB = "user-bob"


# --- Handlers ---


def test_create_returns_new_id_and_stores_owner(store, alice):
    result = create_idea_session(store, alice, IdeaSessionCreate(title="Quick dinners", servingCount=2))

    assert result.success is True
    session_id = result.data.id
    row = store.tables["recipe_idea_sessions"][0]
    assert row["id"] == session_id
    assert row["user_id"] == ALICE
    assert row["title"] == "Quick dinners"
    assert row["serving_count"] == 2
    assert row["created_at"] == row["updated_at"]


def test_create_accepts_empty_payload(store, alice):
    result = create_idea_session(store, alice, IdeaSessionCreate())
    row = store.tables["recipe_idea_sessions"][0]
    assert row["id"] == result.data.id
    assert row["prompt"] is None


def test_create_requires_user(store, make_context):
    with pytest.raises(UnauthorizedError):
        create_idea_session(store, make_context(None), IdeaSessionCreate(title="x"))
    assert store.writes() == []


def test_update_only_touches_present_fields(store, alice):
    session_id = create_idea_session(store, alice, IdeaSessionCreate(
        title="Breakfast",
        prompt="high protein",
        cuisinePreference="Mexican",
        dietaryPreference="vegetarian",
        servingCount=4,
    )).data.id

    update_idea_session(store, alice, IdeaSessionUpdate(id=session_id, title="Brunch"))

    row = store.select(RecipeIdeaSession, {"id": session_id})[0]
    assert row["title"] == "Brunch"
    assert row["prompt"] == "high protein"
    assert row["cuisine_preference"] == "Mexican"
    assert row["dietary_preference"] == "vegetarian"
    assert row["serving_count"] == 4
    assert row["updated_at"] > row["created_at"]


def test_update_rejects_explicit_null(client, alice_headers, db_session):
    session_id = client.post(
        "/api/actions/createRecipeIdeaSession", json={"prompt": "spicy"}, headers=alice_headers,
    ).json()["data"]["id"]

    res = client.post(
        "/api/actions/updateRecipeIdeaSession",
        json={"id": session_id, "prompt": None},
        headers=alice_headers,
    )
    assert res.status_code == 422
    assert [i["path"] for i in res.json()["error"]["issues"]] == ["prompt"]

    db_session.expire_all()
    assert db_session.get(RecipeIdeaSession, session_id).prompt == "spicy"


def test_update_other_users_session_is_not_found(store, alice, bob):
    session_id = create_idea_session(store, alice, IdeaSessionCreate(title="Mine")).data.id

    with pytest.raises(NotFoundError) as exc:
        update_idea_session(store, bob, IdeaSessionUpdate(id=session_id, title="Stolen"))
    assert exc.value.message == "Recipe idea session not found."

    row = store.select(RecipeIdeaSession, {"id": session_id})[0]
    assert row["title"] == "Mine"


def test_update_nonexistent_session_is_not_found(store, alice):
    with pytest.raises(NotFoundError):
        update_idea_session(store, alice, IdeaSessionUpdate(id="missing", title="x"))
    assert store.writes() == []


def test_list_is_scoped_to_user_and_ordered(store, alice, bob):
    first = create_idea_session(store, alice, IdeaSessionCreate(title="one")).data.id
    create_idea_session(store, bob, IdeaSessionCreate(title="bob's"))
    second = create_idea_session(store, alice, IdeaSessionCreate(title="two")).data.id

    page = list_idea_sessions(store, alice, IdeaSessionList()).data

    assert [item.id for item in page.items] == [first, second]
    assert page.page == 1
    assert page.page_size == 20


def test_list_pagination_and_total_counts_page_only(store, alice):
    ids = [create_idea_session(store, alice, IdeaSessionCreate(title=f"s{i}")).data.id for i in range(5)]

    page = list_idea_sessions(store, alice, IdeaSessionList(page=2, pageSize=2)).data
    assert [item.id for item in page.items] == ids[2:4]
    # total mirrors the page size returned, not the 5 stored rows
    assert page.total == 2

    last = list_idea_sessions(store, alice, IdeaSessionList(page=3, pageSize=2)).data
    assert [item.id for item in last.items] == ids[4:]
    assert last.total == 1


# --- HTTP surface ---


def test_create_and_list_via_api(client, alice_headers, bob_headers):
    res = client.post(
        "/api/actions/createRecipeIdeaSession",
        json={"title": "Quick dinners", "cuisinePreference": "Thai"},
        headers=alice_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    session_id = body["data"]["id"]

    res = client.post("/api/actions/listRecipeIdeaSessions", json={}, headers=alice_headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["page"] == 1
    assert data["pageSize"] == 20
    assert data["total"] == 1
    item = data["items"][0]
    assert item["id"] == session_id
    assert item["userId"] == ALICE
    assert item["cuisinePreference"] == "Thai"
    assert "createdAt" in item

    res = client.post("/api/actions/listRecipeIdeaSessions", json={}, headers=bob_headers)
    assert res.json()["data"]["items"] == []


def test_update_via_api_keeps_absent_fields(client, alice_headers, db_session):
    session_id = client.post(
        "/api/actions/createRecipeIdeaSession",
        json={"title": "Old", "prompt": "keep me", "servingCount": 3},
        headers=alice_headers,
    ).json()["data"]["id"]

    res = client.post(
        "/api/actions/updateRecipeIdeaSession",
        json={"id": session_id, "title": "New"},
        headers=alice_headers,
    )
    assert res.status_code == 200
    assert res.json() == {"success": True, "data": {"id": session_id}}

    row = db_session.get(RecipeIdeaSession, session_id)
    assert row.title == "New"
    assert row.prompt == "keep me"
    assert row.serving_count == 3


def test_update_via_api_foreign_session_returns_404(client, alice_headers, bob_headers):
    session_id = client.post(
        "/api/actions/createRecipeIdeaSession", json={"title": "Mine"}, headers=alice_headers,
    ).json()["data"]["id"]

    res = client.post(
        "/api/actions/updateRecipeIdeaSession",
        json={"id": session_id, "title": "Stolen"},
        headers=bob_headers,
    )
    assert res.status_code == 404
    assert res.json() == {
        "success": False,
        "error": {"code": "NOT_FOUND", "message": "Recipe idea session not found."},
    }


def test_list_via_api_orders_by_creation_time(client, alice_headers, db_session):
    base = datetime(2026, 3, 1, tzinfo=timezone.utc)
    # Inserted newest first to prove ordering comes from created_at
    for i in reversed(range(3)):
        db_session.add(RecipeIdeaSession(
            id=f"s-{i}", user_id=ALICE, title=f"t{i}",
            created_at=base + timedelta(minutes=i), updated_at=base,
        ))
    db_session.add(RecipeIdeaSession(id="s-bob", user_id=BOB, created_at=base, updated_at=base))
    db_session.commit()

    res = client.post(
        "/api/actions/listRecipeIdeaSessions", json={"page": 1, "pageSize": 2}, headers=alice_headers,
    )
    data = res.json()["data"]
    assert [it["id"] for it in data["items"]] == ["s-0", "s-1"]
    assert data["total"] == 2

    res = client.post(
        "/api/actions/listRecipeIdeaSessions", json={"page": 2, "pageSize": 2}, headers=alice_headers,
    )
    assert [it["id"] for it in res.json()["data"]["items"]] == ["s-2"]

"""End-to-end tests for the comment and vote API."""

import asyncio
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from discuss.adapter.realtime import RecordingEventSink
from discuss.config import Settings
from discuss.domain.repository import UserRepository
from discuss.interface.api.app import create_app
from discuss.util.jwt import create_token
from tests.conftest import make_user
from tests.di import build_test_container


@pytest.fixture
def container():
    """Fresh all-mock container; one per test keeps stores isolated."""
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client bound to the test container."""
    return TestClient(create_app(container))


@pytest.fixture
def events(container) -> RecordingEventSink:
    """Events published during the test."""
    return asyncio.run(container.get(RecordingEventSink))


@pytest.fixture
def login(container):
    """Seed a user and return Authorization headers for them."""

    def _login(username: str) -> dict[str, str]:
        user = make_user(username)

        async def _save():
            user_repo = await container.get(UserRepository)
            await user_repo.save(user)

        asyncio.run(_save())
        token = create_token(str(user.id), username, Settings().auth)
        return {"Authorization": f"Bearer {token}"}

    return _login


@pytest.fixture
def short_content_limit(monkeypatch):
    """Lower the configured comment limit to 10 characters.

    Must be requested before client so the setting is read after the patch.
    """
    monkeypatch.setenv("COMMENTS__MAX_CONTENT_LENGTH", "10")


@pytest.fixture
def ghost_headers():
    """Valid token for a user that isn't in the store."""
    token = create_token(str(uuid4()), "ghost", Settings().auth)
    return {"Authorization": f"Bearer {token}"}


def _post_comment(client, headers, content, parent_id=None):
    body = {"content": content}
    if parent_id:
        body["parent_id"] = parent_id
    response = client.post("/comments", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateComment:
    """POST /comments"""

    def test_create_top_level(self, client, login, events):
        # Arrange
        alice = login("alice")

        # Act
        response = client.post("/comments", json={"content": "  hi  "}, headers=alice)

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["content"] == "hi"
        assert data["parent_id"] is None
        assert data["author"]["display_name"] == "alice"
        assert data["like_count"] == 0
        assert data["replies"] == []
        assert events.topics() == ["comment:created"]

    def test_requires_token(self, client):
        response = client.post("/comments", json={"content": "hi"})

        assert response.status_code == 401

    def test_rejects_invalid_token(self, client):
        response = client.post(
            "/comments",
            json={"content": "hi"},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401

    @pytest.mark.parametrize("content", ["", "   ", "x" * 1001])
    def test_invalid_content_is_400_with_field_errors(self, client, login, content):
        alice = login("alice")

        response = client.post("/comments", json={"content": content}, headers=alice)

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Validation failed"
        assert data["errors"][0]["field"] == "content"
        assert data["errors"][0]["message"]

    def test_missing_content_is_400(self, client, login):
        alice = login("alice")

        response = client.post("/comments", json={}, headers=alice)

        assert response.status_code == 400

    def test_reply_to_missing_parent_is_404(self, client, login, events):
        alice = login("alice")

        response = client.post(
            "/comments",
            json={"content": "orphan", "parent_id": str(uuid4())},
            headers=alice,
        )

        assert response.status_code == 404
        assert events.events == []

    def test_malformed_parent_id_is_400(self, client, login):
        alice = login("alice")

        response = client.post(
            "/comments",
            json={"content": "x", "parent_id": "nope"},
            headers=alice,
        )

        assert response.status_code == 400

    def test_configured_limit_is_enforced(self, short_content_limit, client, login):
        alice = login("alice")

        too_long = client.post("/comments", json={"content": "x" * 50}, headers=alice)
        at_limit = client.post("/comments", json={"content": "x" * 10}, headers=alice)

        assert too_long.status_code == 400
        assert too_long.json()["detail"] == "Comment cannot exceed 10 characters"
        assert at_limit.status_code == 201

    def test_token_for_unknown_user_is_401(self, client, ghost_headers, events):
        response = client.post(
            "/comments", json={"content": "hi"}, headers=ghost_headers
        )

        assert response.status_code == 401
        assert client.get("/comments").json()["pagination"]["total"] == 0
        assert events.events == []


class TestReadComments:
    """GET /comments and GET /comments/{id}"""

    def test_list_is_public_and_paginated(self, client, login):
        # Arrange
        alice = login("alice")
        for i in range(3):
            _post_comment(client, alice, f"comment {i}")

        # Act
        response = client.get("/comments", params={"page": 1, "limit": 2})

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert len(data["comments"]) == 2
        assert data["comments"][0]["content"] == "comment 2"
        assert data["pagination"] == {
            "page": 1,
            "limit": 2,
            "total": 3,
            "pages": 2,
            "has_next": True,
            "has_prev": False,
        }

    @pytest.mark.parametrize(
        "params",
        [{"page": 0}, {"limit": 0}, {"limit": 101}, {"sort": "oldest"}],
    )
    def test_bad_query_parameters_are_400(self, client, params):
        response = client.get("/comments", params=params)

        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"

    def test_get_single_with_replies(self, client, login):
        alice, bob = login("alice"), login("bob")
        parent = _post_comment(client, alice, "parent")
        reply = _post_comment(client, bob, "reply", parent["id"])

        response = client.get(f"/comments/{parent['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["reply_ids"] == [reply["id"]]
        assert data["replies"][0]["author"]["display_name"] == "bob"

    def test_get_missing_is_404(self, client):
        response = client.get(f"/comments/{uuid4()}")

        assert response.status_code == 404

    def test_get_malformed_id_is_400(self, client):
        response = client.get("/comments/not-a-uuid")

        assert response.status_code == 400


class TestUpdateComment:
    """PUT /comments/{id}"""

    def test_author_can_edit(self, client, login, events):
        alice = login("alice")
        comment = _post_comment(client, alice, "before")

        response = client.put(
            f"/comments/{comment['id']}", json={"content": "after"}, headers=alice
        )

        assert response.status_code == 200
        data = response.json()
        assert data["content"] == "after"
        assert data["is_edited"] is True
        assert data["edited_at"] is not None
        assert events.topics()[-1] == "comment:updated"

    def test_other_user_is_403(self, client, login):
        alice, bob = login("alice"), login("bob")
        comment = _post_comment(client, alice, "mine")

        response = client.put(
            f"/comments/{comment['id']}", json={"content": "yours"}, headers=bob
        )

        assert response.status_code == 403
        assert client.get(f"/comments/{comment['id']}").json()["content"] == "mine"

    def test_missing_comment_is_404(self, client, login):
        alice = login("alice")

        response = client.put(
            f"/comments/{uuid4()}", json={"content": "x"}, headers=alice
        )

        assert response.status_code == 404

    def test_requires_token(self, client, login):
        alice = login("alice")
        comment = _post_comment(client, alice, "mine")

        response = client.put(f"/comments/{comment['id']}", json={"content": "x"})

        assert response.status_code == 401


class TestVotes:
    """POST /comments/{id}/like and /dislike"""

    def test_like_toggle_and_switch(self, client, login, events):
        # Arrange
        alice, bob = login("alice"), login("bob")
        comment = _post_comment(client, alice, "vote")
        url = f"/comments/{comment['id']}"

        # Act & Assert
        liked = client.post(f"{url}/like", headers=bob).json()
        assert (liked["like_count"], liked["dislike_count"]) == (1, 0)

        switched = client.post(f"{url}/dislike", headers=bob).json()
        assert (switched["like_count"], switched["dislike_count"]) == (0, 1)

        withdrawn = client.post(f"{url}/dislike", headers=bob).json()
        assert (withdrawn["like_count"], withdrawn["dislike_count"]) == (0, 0)

        assert events.topics() == [
            "comment:created",
            "comment:liked",
            "comment:disliked",
            "comment:disliked",
        ]

    def test_vote_requires_token(self, client, login):
        alice = login("alice")
        comment = _post_comment(client, alice, "vote")

        response = client.post(f"/comments/{comment['id']}/like")

        assert response.status_code == 401

    def test_vote_on_missing_comment_is_404(self, client, login):
        alice = login("alice")

        response = client.post(f"/comments/{uuid4()}/dislike", headers=alice)

        assert response.status_code == 404


class TestDeleteComment:
    """DELETE /comments/{id}"""

    def test_token_for_unknown_user_cannot_mutate(self, client, login, ghost_headers):
        alice = login("alice")
        comment = _post_comment(client, alice, "mine")
        url = f"/comments/{comment['id']}"

        responses = [
            client.put(url, json={"content": "x"}, headers=ghost_headers),
            client.delete(url, headers=ghost_headers),
            client.post(f"{url}/like", headers=ghost_headers),
            client.post(f"{url}/dislike", headers=ghost_headers),
        ]

        assert [r.status_code for r in responses] == [401, 401, 401, 401]
        stored = client.get(url).json()
        assert stored["content"] == "mine"
        assert stored["like_count"] == 0
        assert stored["dislike_count"] == 0

    def test_other_user_is_403(self, client, login):
        alice, bob = login("alice"), login("bob")
        comment = _post_comment(client, alice, "mine")

        response = client.delete(f"/comments/{comment['id']}", headers=bob)

        assert response.status_code == 403

    def test_missing_comment_is_404(self, client, login):
        alice = login("alice")

        response = client.delete(f"/comments/{uuid4()}", headers=alice)

        assert response.status_code == 404

    def test_deleting_reply_detaches_it(self, client, login):
        alice, bob = login("alice"), login("bob")
        parent = _post_comment(client, alice, "parent")
        reply = _post_comment(client, bob, "reply", parent["id"])

        response = client.delete(f"/comments/{reply['id']}", headers=bob)

        assert response.status_code == 200
        data = client.get(f"/comments/{parent['id']}").json()
        assert data["reply_ids"] == []
        assert data["replies"] == []


class TestThreadScenario:
    """A full discussion from creation to cascading delete."""

    def test_discussion_lifecycle(self, client, login, events):
        # Arrange
        alice, bob, carol = login("alice"), login("bob"), login("carol")
        parent = _post_comment(client, alice, "What do you think?")
        r1 = _post_comment(client, bob, "Agree", parent["id"])
        r2 = _post_comment(client, carol, "Disagree", parent["id"])

        # Act: votes, with bob switching from like to dislike
        client.post(f"/comments/{parent['id']}/like", headers=bob)
        client.post(f"/comments/{parent['id']}/dislike", headers=carol)
        client.post(f"/comments/{parent['id']}/dislike", headers=bob)

        # Assert: listing shows only the top-level comment with both replies
        listing = client.get("/comments", params={"sort": "mostDisliked"}).json()
        assert [c["id"] for c in listing["comments"]] == [parent["id"]]
        top = listing["comments"][0]
        assert [r["id"] for r in top["replies"]] == [r1["id"], r2["id"]]
        assert top["like_count"] == 0
        assert top["dislike_count"] == 2
        assert top["liker_ids"] == []

        # Act: a replier may not delete the parent
        assert client.delete(f"/comments/{parent['id']}", headers=bob).status_code == 403

        # Act: the author deletes the whole thread
        response = client.delete(f"/comments/{parent['id']}", headers=alice)

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Comment deleted successfully"
        assert set(data["deleted_ids"]) == {parent["id"], r1["id"], r2["id"]}
        for comment_id in (parent["id"], r1["id"], r2["id"]):
            assert client.get(f"/comments/{comment_id}").status_code == 404
        assert client.get("/comments").json()["pagination"]["total"] == 0
        assert events.events[-1] == ("comment:deleted", {"id": parent["id"]})

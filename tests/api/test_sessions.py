"""
Test suite for session endpoints.

Tests create, list, get, rename and delete under /chat/sessions,
including per-user visibility via X-User-Id.

System role: Verification of session HTTP API
"""

import uuid

SESSIONS_URL = "/api/v1/chat/sessions"


class TestSessionEndpoints:
    """Test suite for /chat/sessions routes."""

    async def test_create_session_should_return_201(self, client) -> None:
        """Test a session is created with the given title."""
        # Act
        response = await client.post(SESSIONS_URL, json={"title": "Holiday"})

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["title"] == "Holiday"
        uuid.UUID(body["id"])

    async def test_create_session_should_default_title(self, client) -> None:
        """Test an omitted title falls back to the default."""
        # Act
        response = await client.post(SESSIONS_URL, json={})

        # Assert
        assert response.json()["title"] == "New chat"

    async def test_list_sessions_should_only_show_callers_sessions(self, client) -> None:
        """Test users see only their own sessions."""
        # Arrange
        await client.post(SESSIONS_URL, json={"title": "Mine"})
        await client.post(SESSIONS_URL, json={"title": "Theirs"}, headers={"X-User-Id": "user-2"})

        # Act
        response = await client.get(SESSIONS_URL)

        # Assert
        assert [s["title"] for s in response.json()] == ["Mine"]

    async def test_get_session_should_include_messages(self, client, chat_session_with_history) -> None:
        """Test the detail view returns ordered history."""
        # Act
        response = await client.get(f"{SESSIONS_URL}/{chat_session_with_history.id}")

        # Assert
        assert response.status_code == 200
        messages = response.json()["messages"]
        assert [m["role"] for m in messages] == ["user", "assistant", "user", "assistant"]
        assert messages[0]["content"] == "Hello"

    async def test_get_session_should_return_404_for_unknown_id(self, client) -> None:
        """Test an unknown id is not found."""
        # Act
        response = await client.get(f"{SESSIONS_URL}/{uuid.uuid4()}")

        # Assert
        assert response.status_code == 404

    async def test_get_session_should_return_404_for_other_user(self, client, chat_session_with_history) -> None:
        """Test another user's session is not found."""
        # Act
        response = await client.get(
            f"{SESSIONS_URL}/{chat_session_with_history.id}",
            headers={"X-User-Id": "intruder"},
        )

        # Assert
        assert response.status_code == 404

    async def test_update_session_should_rename(self, client, chat_session_with_history) -> None:
        """Test PUT changes the title."""
        # Act
        response = await client.put(
            f"{SESSIONS_URL}/{chat_session_with_history.id}",
            json={"title": "Oslo trip"},
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["title"] == "Oslo trip"

    async def test_update_session_should_reject_empty_title(self, client, chat_session_with_history) -> None:
        """Test an empty title fails request validation."""
        # Act
        response = await client.put(f"{SESSIONS_URL}/{chat_session_with_history.id}", json={"title": ""})

        # Assert
        assert response.status_code == 422

    async def test_delete_session_should_return_204_then_404(self, client, chat_session_with_history) -> None:
        """Test a deleted session is gone."""
        # Act
        deleted = await client.delete(f"{SESSIONS_URL}/{chat_session_with_history.id}")
        fetched = await client.get(f"{SESSIONS_URL}/{chat_session_with_history.id}")

        # Assert
        assert deleted.status_code == 204
        assert fetched.status_code == 404

    async def test_delete_session_should_return_404_for_unknown_id(self, client) -> None:
        """Test deleting an unknown session is not found."""
        # Act
        response = await client.delete(f"{SESSIONS_URL}/{uuid.uuid4()}")

        # Assert
        assert response.status_code == 404

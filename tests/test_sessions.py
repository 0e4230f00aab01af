"""Tests for voting session CRUD endpoints."""

import pytest
from httpx import AsyncClient

SESSIONS_URL = "/api/v1/sessions"


async def create_session(
    client: AsyncClient, headers: dict[str, str], organizer_id: int, **fields
) -> int:
    """Create a session and return its id (creation answers with no body)."""
    payload = {"title": "Board election", "organizer_id": organizer_id, **fields}
    response = await client.post(SESSIONS_URL, json=payload, headers=headers)
    assert response.status_code == 201

    listing = await client.get(
        SESSIONS_URL,
        params={"sort": "id", "direction": "DESC"},
        headers=headers,
    )
    return listing.json()["items"][0]["id"]


@pytest.mark.asyncio
async def test_create_session(client: AsyncClient, alice_headers, users):
    """Test creating a new voting session."""
    response = await client.post(
        SESSIONS_URL,
        json={
            "title": "Budget vote",
            "description": "Approve the 2027 budget",
            "start_date": "2026-11-01T09:00:00",
            "end_date": "2026-11-02T18:00:00",
            "organizer_id": users["alice"].id,
        },
        headers=alice_headers,
    )

    assert response.status_code == 201
    assert response.content == b""


@pytest.mark.asyncio
async def test_create_session_without_title(client: AsyncClient, alice_headers, users):
    """Test that a missing title is rejected with a field error."""
    response = await client.post(
        SESSIONS_URL,
        json={"organizer_id": users["alice"].id},
        headers=alice_headers,
    )

    assert response.status_code == 400
    data = response.json()
    assert data["message"] == "Validation error"
    assert any("title" in error for error in data["errors"])


@pytest.mark.asyncio
@pytest.mark.parametrize("title", [None, "", "   "])
async def test_create_session_with_empty_title(
    client: AsyncClient, alice_headers, users, title
):
    """Test that null, empty and blank titles are rejected."""
    response = await client.post(
        SESSIONS_URL,
        json={"title": title, "organizer_id": users["alice"].id},
        headers=alice_headers,
    )

    assert response.status_code == 400
    assert any(error.startswith("title") for error in response.json()["errors"])


@pytest.mark.asyncio
async def test_create_session_with_unknown_organizer(client: AsyncClient, admin_headers):
    """Test that a missing organizer yields 404."""
    response = await client.post(
        SESSIONS_URL,
        json={"title": "Orphan", "organizer_id": 999},
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json() == {"message": "Organizer not found"}


@pytest.mark.asyncio
async def test_create_session_end_before_start(client: AsyncClient, alice_headers, users):
    """Test that a session cannot close before it opens."""
    response = await client.post(
        SESSIONS_URL,
        json={
            "title": "Backwards",
            "start_date": "2026-11-02T09:00:00",
            "end_date": "2026-11-01T09:00:00",
            "organizer_id": users["alice"].id,
        },
        headers=alice_headers,
    )

    assert response.status_code == 400
    assert any("end_date" in error for error in response.json()["errors"])


@pytest.mark.asyncio
async def test_get_session(client: AsyncClient, alice_headers, users):
    """Test retrieving a session that was just created."""
    session_id = await create_session(
        client, alice_headers, users["alice"].id, description="Pick a logo"
    )

    response = await client.get(f"{SESSIONS_URL}/{session_id}", headers=alice_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == session_id
    assert data["title"] == "Board election"
    assert data["description"] == "Pick a logo"
    assert data["organizer_id"] == users["alice"].id
    assert "created_at" in data
    assert "updated_at" in data


@pytest.mark.asyncio
async def test_get_nonexistent_session(client: AsyncClient, alice_headers):
    """Test retrieving a session that doesn't exist."""
    response = await client.get(f"{SESSIONS_URL}/12345", headers=alice_headers)

    assert response.status_code == 404
    assert response.json() == {"message": "Session not found"}


@pytest.mark.asyncio
async def test_get_session_with_non_numeric_id(client: AsyncClient, alice_headers):
    """Test that a non-numeric id is rejected."""
    response = await client.get(f"{SESSIONS_URL}/abc", headers=alice_headers)

    assert response.status_code == 400
    assert any("session_id" in error for error in response.json()["errors"])


@pytest.mark.asyncio
async def test_update_session(client: AsyncClient, alice_headers, users):
    """Test that an update is visible on the next read."""
    session_id = await create_session(client, alice_headers, users["alice"].id)

    update_response = await client.put(
        f"{SESSIONS_URL}/{session_id}",
        json={
            "title": "Board election (round 2)",
            "description": "Runoff",
            "start_date": "2026-12-01T08:00:00Z",
            "end_date": "2026-12-01T20:00:00Z",
        },
        headers=alice_headers,
    )

    assert update_response.status_code == 200
    updated = update_response.json()
    assert updated["id"] == session_id
    assert updated["title"] == "Board election (round 2)"

    get_response = await client.get(f"{SESSIONS_URL}/{session_id}", headers=alice_headers)
    data = get_response.json()
    assert data["title"] == "Board election (round 2)"
    assert data["description"] == "Runoff"
    assert data["start_date"].startswith("2026-12-01T08:00:00")
    assert data["end_date"].startswith("2026-12-01T20:00:00")


@pytest.mark.asyncio
async def test_update_session_replaces_optional_fields(
    client: AsyncClient, alice_headers, users
):
    """Test that PUT clears optional fields left out of the payload."""
    session_id = await create_session(
        client, alice_headers, users["alice"].id, description="Temporary"
    )

    response = await client.put(
        f"{SESSIONS_URL}/{session_id}",
        json={"title": "Renamed"},
        headers=alice_headers,
    )

    assert response.status_code == 200
    assert response.json()["description"] is None


@pytest.mark.asyncio
async def test_update_session_without_title(client: AsyncClient, alice_headers, users):
    """Test that update validates the payload like create."""
    session_id = await create_session(client, alice_headers, users["alice"].id)

    response = await client.put(
        f"{SESSIONS_URL}/{session_id}",
        json={"description": "No title here"},
        headers=alice_headers,
    )

    assert response.status_code == 400
    assert any("title" in error for error in response.json()["errors"])


@pytest.mark.asyncio
async def test_update_nonexistent_session(client: AsyncClient, alice_headers):
    """Test updating a session that doesn't exist."""
    response = await client.put(
        f"{SESSIONS_URL}/12345",
        json={"title": "Ghost"},
        headers=alice_headers,
    )

    assert response.status_code == 404
    assert response.json() == {"message": "Session not found"}


@pytest.mark.asyncio
async def test_delete_session(client: AsyncClient, alice_headers, users):
    """Test deleting a session."""
    session_id = await create_session(client, alice_headers, users["alice"].id)

    delete_response = await client.delete(
        f"{SESSIONS_URL}/{session_id}", headers=alice_headers
    )
    assert delete_response.status_code == 204
    assert delete_response.content == b""

    get_response = await client.get(f"{SESSIONS_URL}/{session_id}", headers=alice_headers)
    assert get_response.status_code == 404

    second_delete = await client.delete(
        f"{SESSIONS_URL}/{session_id}", headers=alice_headers
    )
    assert second_delete.status_code == 404


@pytest.mark.asyncio
async def test_session_lifecycle(client: AsyncClient, alice_headers, users):
    """Test complete session lifecycle: create -> read -> update -> delete."""
    session_id = await create_session(client, alice_headers, users["alice"].id)

    get_response = await client.get(f"{SESSIONS_URL}/{session_id}", headers=alice_headers)
    assert get_response.status_code == 200

    update_response = await client.put(
        f"{SESSIONS_URL}/{session_id}",
        json={"title": "Final title"},
        headers=alice_headers,
    )
    assert update_response.status_code == 200

    delete_response = await client.delete(
        f"{SESSIONS_URL}/{session_id}", headers=alice_headers
    )
    assert delete_response.status_code == 204

    get_after_delete = await client.get(
        f"{SESSIONS_URL}/{session_id}", headers=alice_headers
    )
    assert get_after_delete.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("session_id", [0, -1, 2**63, 2**64])
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
async def test_session_id_out_of_range(
    client: AsyncClient, alice_headers, method, session_id
):
    """Test that ids outside the 64-bit range are rejected instead of failing."""
    response = await client.request(
        method,
        f"{SESSIONS_URL}/{session_id}",
        json={"title": "Out of range"},
        headers=alice_headers,
    )

    assert response.status_code == 400
    assert any(error.startswith("session_id") for error in response.json()["errors"])


@pytest.mark.asyncio
async def test_largest_session_id_is_not_found(client: AsyncClient, alice_headers):
    response = await client.get(f"{SESSIONS_URL}/{2**63 - 1}", headers=alice_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_session_with_oversized_organizer_id(
    client: AsyncClient, admin_headers
):
    response = await client.post(
        SESSIONS_URL,
        json={"title": "Too big", "organizer_id": 2**64},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert any(error.startswith("organizer_id") for error in response.json()["errors"])

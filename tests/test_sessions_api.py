"""Session CRUD and participation API tests."""

import pytest

from conftest import login


def _body(teacher_id, /, **overrides):
    body = {
        "name": "Yoga Class",
        "date": "2026-11-02T08:00:00Z",
        "teacher_id": teacher_id,
        "description": "Morning yoga session",
    }
    body.update(overrides)
    return body


async def _create(client, teacher_id, **overrides):
    r = await client.post("/api/sessions", json=_body(teacher_id, **overrides))
    assert r.status_code == 200, r.text
    return r.json()


# ═══════════════════════════════════════════════════════════
# Read
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_get_session(client, teacher):
    created = await _create(client, teacher.id)

    r = await client.get(f"/api/sessions/{created['id']}")
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Yoga Class"
    assert body["description"] == "Morning yoga session"
    assert body["teacher_id"] == teacher.id
    assert "teacherId" not in body
    assert body["users"] == []
    assert "createdAt" in body and "updatedAt" in body


@pytest.mark.asyncio
async def test_get_missing_session(client):
    r = await client.get("/api/sessions/999999")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_get_session_malformed_id(client):
    r = await client.get("/api/sessions/not-a-number")
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_list_sessions_empty(client):
    r = await client.get("/api/sessions")
    assert r.status_code == 200
    assert r.json() == []


@pytest.mark.asyncio
async def test_list_sessions(client, teacher):
    await _create(client, teacher.id, name="Late", date="2026-11-03T18:00:00Z")
    await _create(client, teacher.id, name="Early", date="2026-11-01T07:00:00Z")

    r = await client.get("/api/sessions")
    assert r.status_code == 200
    assert [s["name"] for s in r.json()] == ["Early", "Late"]


# ═══════════════════════════════════════════════════════════
# Create / update / delete
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_session(client, teacher):
    body = await _create(client, teacher.id, name="New Session")
    assert body["id"] > 0
    assert body["name"] == "New Session"
    assert body["teacher_id"] == teacher.id
    assert "teacherId" not in body
    assert body["users"] == []


@pytest.mark.asyncio
async def test_create_ignores_participant_list(client, teacher, make_user):
    user = await make_user()
    body = await _create(client, teacher.id, users=[user.id])
    assert body["users"] == []


@pytest.mark.asyncio
async def test_create_accepts_camel_case_teacher_id(client, teacher):
    body = _body(teacher.id)
    body["teacherId"] = body.pop("teacher_id")

    r = await client.post("/api/sessions", json=body)
    assert r.status_code == 200, r.text
    assert r.json()["teacher_id"] == teacher.id


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "   "},
        {"name": "x" * 51},
        {"date": None},
        {"teacher_id": None},
        {"description": ""},
        {"description": "x" * 2501},
    ],
)
async def test_create_rejects_invalid_body(client, teacher, overrides):
    r = await client.post("/api/sessions", json=_body(teacher.id, **overrides))
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_create_with_unknown_teacher(client):
    r = await client.post("/api/sessions", json=_body(999999))
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_update_session(client, teacher):
    created = await _create(client, teacher.id)

    r = await client.put(
        f"/api/sessions/{created['id']}",
        json=_body(teacher.id, name="Updated Session", description="Updated description"),
    )
    assert r.status_code == 200
    assert r.json()["name"] == "Updated Session"
    assert r.json()["description"] == "Updated description"


@pytest.mark.asyncio
async def test_update_keeps_participants(client, teacher, make_user):
    user = await make_user()
    created = await _create(client, teacher.id)
    await client.post(f"/api/sessions/{created['id']}/participants/{user.id}")

    r = await client.put(
        f"/api/sessions/{created['id']}",
        json=_body(teacher.id, name="Renamed", users=[]),
    )
    assert r.status_code == 200
    assert r.json()["users"] == [user.id]


@pytest.mark.asyncio
async def test_update_missing_session(client, teacher):
    r = await client.put("/api/sessions/999999", json=_body(teacher.id))
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_update_malformed_id(client, teacher):
    r = await client.put("/api/sessions/abc", json=_body(teacher.id))
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_delete_session(client, teacher):
    created = await _create(client, teacher.id)

    r = await client.delete(f"/api/sessions/{created['id']}")
    assert r.status_code == 200

    r = await client.get(f"/api/sessions/{created['id']}")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_session(client):
    r = await client.delete("/api/sessions/999999")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_delete_malformed_id(client):
    r = await client.delete("/api/sessions/abc")
    assert r.status_code == 400


# ═══════════════════════════════════════════════════════════
# Participation
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_join_and_leave(client, teacher, make_user):
    user = await make_user()
    sid = (await _create(client, teacher.id))["id"]

    r = await client.post(f"/api/sessions/{sid}/participants/{user.id}")
    assert r.status_code == 200
    assert r.json()["users"] == [user.id]

    r = await client.delete(f"/api/sessions/{sid}/participants/{user.id}")
    assert r.status_code == 200
    assert r.json()["users"] == []


@pytest.mark.asyncio
async def test_join_twice_is_400(client, teacher, make_user):
    user = await make_user()
    sid = (await _create(client, teacher.id))["id"]

    await client.post(f"/api/sessions/{sid}/participants/{user.id}")
    r = await client.post(f"/api/sessions/{sid}/participants/{user.id}")
    assert r.status_code == 400

    r = await client.get(f"/api/sessions/{sid}")
    assert r.json()["users"] == [user.id]


@pytest.mark.asyncio
async def test_leave_without_joining_is_400(client, teacher, make_user):
    user = await make_user()
    sid = (await _create(client, teacher.id))["id"]

    r = await client.delete(f"/api/sessions/{sid}/participants/{user.id}")
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_join_unknown_session_is_404(client, make_user):
    user = await make_user()
    r = await client.post(f"/api/sessions/999999/participants/{user.id}")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_join_unknown_user_is_404(client, teacher):
    sid = (await _create(client, teacher.id))["id"]
    r = await client.post(f"/api/sessions/{sid}/participants/999999")
    assert r.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["abc/participants/1", "1/participants/abc"])
async def test_participation_malformed_ids(client, path):
    assert (await client.post(f"/api/sessions/{path}")).status_code == 400
    assert (await client.delete(f"/api/sessions/{path}")).status_code == 400


@pytest.mark.asyncio
async def test_participation_with_real_token(unauthenticated_client, teacher, make_user):
    user = await make_user(email="ada@studio.com")
    headers = await login(unauthenticated_client, "ada@studio.com")

    r = await unauthenticated_client.post(
        "/api/sessions", json=_body(teacher.id), headers=headers
    )
    sid = r.json()["id"]

    r = await unauthenticated_client.post(
        f"/api/sessions/{sid}/participants/{user.id}", headers=headers
    )
    assert r.status_code == 200

    r = await unauthenticated_client.post(f"/api/sessions/{sid}/participants/{user.id}")
    assert r.status_code == 401

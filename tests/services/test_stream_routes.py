"""Live Stream Routes — snapshot on connect, fresh snapshot after each change.

Invariants:
    - /requests/stream sends {"requests", "unread"} for the caller's received requests
    - /messages/stream sends {"messages", "unread"} with is_unread for the caller
    - Every state change that touches the subscriber produces a new snapshot
    - The auth session is closed before the first frame goes out
"""

import pytest

from skillswap.infrastructure.database import get_db
from skillswap.main import app


async def test_request_stream_follows_received_requests(
    client, make_user, auth, send_request, open_stream,
):
    alice = await make_user(name="Alice")
    bob = await make_user(name="Bob")

    async with open_stream("/api/v1/requests/stream", bob) as next_snapshot:
        assert await next_snapshot() == {"requests": [], "unread": 0}

        req = await send_request(alice, bob)
        snap = await next_snapshot()
        assert [r["id"] for r in snap["requests"]] == [req["id"]]
        assert snap["requests"][0]["status"] == "pending"
        assert snap["unread"] == 1

        await client.post(f"/api/v1/requests/{req['id']}/read", headers=auth(bob))
        assert (await next_snapshot())["unread"] == 0

        await client.patch(
            f"/api/v1/requests/{req['id']}/status",
            headers=auth(bob), json={"status": "accepted"},
        )
        assert (await next_snapshot())["requests"][0]["status"] == "accepted"


async def test_request_stream_sees_withdrawal(
    client, make_user, auth, send_request, open_stream,
):
    alice = await make_user(name="Alice")
    bob = await make_user(name="Bob")
    req = await send_request(alice, bob)

    async with open_stream("/api/v1/requests/stream", bob) as next_snapshot:
        assert len((await next_snapshot())["requests"]) == 1
        await client.delete(f"/api/v1/requests/{req['id']}", headers=auth(alice))
        assert await next_snapshot() == {"requests": [], "unread": 0}


async def test_message_stream_follows_broadcasts_and_seen_marks(
    client, make_user, auth, open_stream,
):
    admin = await make_user(name="Root", role="admin")
    alice = await make_user(name="Alice")

    async with open_stream("/api/v1/messages/stream", alice) as next_snapshot:
        assert await next_snapshot() == {"messages": [], "unread": 0}

        msg = (await client.post(
            "/api/v1/admin/messages", headers=auth(admin), json={"message": "hello"},
        )).json()
        snap = await next_snapshot()
        assert [m["id"] for m in snap["messages"]] == [msg["id"]]
        assert snap["messages"][0]["is_unread"] is True
        assert snap["unread"] == 1

        await client.post(f"/api/v1/messages/{msg['id']}/seen", headers=auth(alice))
        snap = await next_snapshot()
        assert snap["messages"][0]["is_unread"] is False
        assert snap["unread"] == 0

        await client.delete(f"/api/v1/admin/messages/{msg['id']}", headers=auth(admin))
        assert await next_snapshot() == {"messages": [], "unread": 0}


@pytest.mark.parametrize("path", ["/api/v1/requests/stream", "/api/v1/messages/stream"])
async def test_stream_requires_token(client, path):
    res = await client.get(path)
    assert res.status_code == 401


@pytest.mark.parametrize("path", ["/api/v1/requests/stream", "/api/v1/messages/stream"])
async def test_stream_releases_auth_session(
    client, make_user, test_session_factory, open_stream, path,
):
    alice = await make_user(name="Alice")
    sessions = []

    async def tracking_get_db():
        async with test_session_factory() as session:
            sessions.append(session)
            yield session

    app.dependency_overrides[get_db] = tracking_get_db

    async with open_stream(path, alice) as next_snapshot:
        await next_snapshot()
        assert len(sessions) == 1
        assert not sessions[0].in_transaction()

"""Admin Routes — user moderation, request oversight and overview counts.

Invariants:
    - Every admin route is 403 for regular users
    - Admins cannot ban themselves or other admins; ban/unban are idempotent
    - Banned users vanish from browse and are held on the banned page
    - Admin may delete any request regardless of status
"""


async def test_regular_user_gets_403(client, make_user, auth):
    user = await make_user(name="Alice")
    for path in ("/api/v1/admin/users", "/api/v1/admin/requests", "/api/v1/admin/overview"):
        res = await client.get(path, headers=auth(user))
        assert res.status_code == 403


async def test_list_all_users_includes_banned_and_incomplete(client, make_user, auth):
    admin = await make_user(name="Root", role="admin")
    await make_user(name="Banned", is_banned=True)
    await make_user(name="Draft", complete=False)

    users = (await client.get("/api/v1/admin/users", headers=auth(admin))).json()
    assert sorted(u["name"] for u in users) == ["Banned", "Draft", "Root"]


async def test_ban_and_unban(client, make_user, auth):
    admin = await make_user(name="Root", role="admin")
    alice = await make_user(name="Alice")

    res = await client.post(f"/api/v1/admin/users/{alice.id}/ban", headers=auth(admin))
    assert res.status_code == 200
    assert res.json()["is_banned"] is True
    again = await client.post(f"/api/v1/admin/users/{alice.id}/ban", headers=auth(admin))
    assert again.json()["is_banned"] is True

    names = [u["name"] for u in (await client.get("/api/v1/users")).json()["users"]]
    assert "Alice" not in names
    state = (await client.get("/api/v1/auth/me", headers=auth(alice))).json()
    assert state["landing_page"] == "banned"

    res = await client.post(f"/api/v1/admin/users/{alice.id}/unban", headers=auth(admin))
    assert res.json()["is_banned"] is False
    names = [u["name"] for u in (await client.get("/api/v1/users")).json()["users"]]
    assert "Alice" in names


async def test_admin_cannot_ban_self_or_other_admin(client, make_user, auth):
    admin = await make_user(name="Root", role="admin")
    other = await make_user(name="Other", role="admin")

    own = await client.post(f"/api/v1/admin/users/{admin.id}/ban", headers=auth(admin))
    peer = await client.post(f"/api/v1/admin/users/{other.id}/ban", headers=auth(admin))
    assert own.status_code == 403
    assert peer.status_code == 403


async def test_all_requests_with_status_filter(client, make_user, auth, send_request):
    admin = await make_user(name="Root", role="admin")
    alice = await make_user(name="Alice")
    bob = await make_user(name="Bob")
    req = await send_request(alice, bob)
    await send_request(bob, alice)
    await client.patch(
        f"/api/v1/requests/{req['id']}/status",
        headers=auth(bob), json={"status": "rejected"},
    )

    everything = (await client.get("/api/v1/admin/requests", headers=auth(admin))).json()
    rejected = (await client.get(
        "/api/v1/admin/requests", headers=auth(admin), params={"status": "rejected"},
    )).json()
    assert len(everything) == 2
    assert [r["id"] for r in rejected] == [req["id"]]


async def test_admin_deletes_answered_request(client, make_user, auth, send_request):
    admin = await make_user(name="Root", role="admin")
    alice = await make_user(name="Alice")
    bob = await make_user(name="Bob")
    req = await send_request(alice, bob)
    await client.patch(
        f"/api/v1/requests/{req['id']}/status",
        headers=auth(bob), json={"status": "accepted"},
    )

    res = await client.delete(f"/api/v1/admin/requests/{req['id']}", headers=auth(admin))
    assert res.status_code == 204
    assert (await client.get("/api/v1/admin/requests", headers=auth(admin))).json() == []


async def test_overview_counts(client, make_user, auth, send_request):
    admin = await make_user(name="Root", role="admin")
    alice = await make_user(name="Alice")
    bob = await make_user(name="Bob")
    await make_user(name="Banned", is_banned=True)
    req = await send_request(alice, bob)
    await send_request(bob, alice)
    await client.patch(
        f"/api/v1/requests/{req['id']}/status",
        headers=auth(bob), json={"status": "accepted"},
    )
    await client.post(
        "/api/v1/admin/messages", headers=auth(admin), json={"message": "hi"},
    )

    data = (await client.get("/api/v1/admin/overview", headers=auth(admin))).json()
    assert data == {
        "users": 4,
        "banned_users": 1,
        "admins": 1,
        "requests": {"pending": 1, "accepted": 1, "rejected": 0},
        "messages": 1,
    }

"""Auth Routes — signup, login and /me session state.

Invariants:
    - Signup returns a token and an incomplete profile; duplicate email is 409
    - Emails listed in ADMIN_EMAILS get the admin role
    - Wrong password is 401 INVALID_CREDENTIALS; banned users can still log in
    - /me works anonymously and reports the landing page
"""


async def _signup(client, email="new@example.com", password="secret123", name=None):
    body = {"email": email, "password": password}
    if name is not None:
        body["name"] = name
    return await client.post("/api/v1/auth/signup", json=body)


async def test_signup_returns_token_and_incomplete_profile(client):
    res = await _signup(client, email="  New@Example.com ", name="Nora")
    assert res.status_code == 201
    data = res.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["user"]["email"] == "new@example.com"
    assert data["user"]["name"] == "Nora"
    assert data["user"]["is_profile_complete"] is False
    assert data["user"]["role"] == "user"
    assert data["user"]["rating"] == 0.0


async def test_signup_duplicate_email_is_conflict(client):
    await _signup(client)
    res = await _signup(client, email="NEW@example.com")
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CONFLICT"


async def test_signup_short_password_is_validation_error(client):
    res = await _signup(client, password="12345")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_signup_with_admin_email_gets_admin_role(client):
    res = await _signup(client, email="admin@example.com")
    assert res.json()["user"]["role"] == "admin"


async def test_login_with_correct_password(client):
    await _signup(client)
    res = await client.post(
        "/api/v1/auth/login",
        json={"email": "new@example.com", "password": "secret123"},
    )
    assert res.status_code == 200
    assert res.json()["user"]["email"] == "new@example.com"


async def test_login_with_wrong_password_is_401(client):
    await _signup(client)
    res = await client.post(
        "/api/v1/auth/login",
        json={"email": "new@example.com", "password": "wrong-password"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_CREDENTIALS"


async def test_login_unknown_email_is_401(client):
    res = await client.post(
        "/api/v1/auth/login",
        json={"email": "ghost@example.com", "password": "secret123"},
    )
    assert res.status_code == 401


async def test_banned_user_can_log_in(client, make_user):
    user = await make_user(name="Bob", is_banned=True)
    res = await client.post(
        "/api/v1/auth/login",
        json={"email": user.email, "password": "secret123"},
    )
    assert res.status_code == 200
    assert res.json()["user"]["is_banned"] is True


async def test_me_anonymous(client):
    res = await client.get("/api/v1/auth/me")
    assert res.status_code == 200
    data = res.json()
    assert data["is_authenticated"] is False
    assert data["user"] is None
    assert data["landing_page"] == "home"


async def test_me_new_account_lands_on_profile(client):
    token = (await _signup(client)).json()["access_token"]
    res = await client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"},
    )
    data = res.json()
    assert data["is_authenticated"] is True
    assert data["is_profile_complete"] is False
    assert data["landing_page"] == "profile"


async def test_me_banned_lands_on_banned(client, make_user, auth):
    user = await make_user(name="Bob", is_banned=True)
    data = (await client.get("/api/v1/auth/me", headers=auth(user))).json()
    assert data["is_banned"] is True
    assert data["landing_page"] == "banned"


async def test_me_admin_flag(client, make_user, auth):
    admin = await make_user(name="Root", role="admin")
    data = (await client.get("/api/v1/auth/me", headers=auth(admin))).json()
    assert data["is_admin"] is True
    assert data["landing_page"] == "home"


async def test_invalid_token_is_401(client):
    res = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_TOKEN"

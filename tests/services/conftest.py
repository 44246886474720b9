"""Service test fixtures — async DB, FastAPI test client and user factory.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched for code paths that open sessions directly (streams, readiness)

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection,
      so all sessions see the same database
    - Users seeded straight into the DB; tokens minted with create_access_token
"""

import asyncio
import json
from contextlib import asynccontextmanager
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import skillswap.infrastructure.database as db_module
from skillswap.db.base import Base
from skillswap.infrastructure.database import DatabaseSessionManager, get_db
from skillswap.infrastructure.security import create_access_token, hash_password
from skillswap.main import app
from skillswap.models import User

PASSWORD = "secret123"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def make_user(test_session_factory):
    """Insert a user; complete, public, non-banned by default."""
    async def _make(
        name: str = "Alice",
        email: str | None = None,
        skills_offered: list[str] | None = None,
        skills_wanted: list[str] | None = None,
        availability: str | None = "Weekends",
        role: str = "user",
        is_banned: bool = False,
        is_public: bool = True,
        complete: bool = True,
    ) -> User:
        user = User(
            email=email or f"{name.lower()}-{uuid4().hex[:8]}@example.com",
            password_hash=hash_password(PASSWORD),
            name=name,
            skills_offered=["Python"] if skills_offered is None else skills_offered,
            skills_wanted=["Guitar"] if skills_wanted is None else skills_wanted,
            availability=availability,
            role=role,
            is_banned=is_banned,
            is_public=is_public,
            is_profile_complete=complete,
            feedback_received=[],
        )
        async with test_session_factory() as db:
            db.add(user)
            await db.commit()
        return user
    return _make


@pytest.fixture
def auth():
    """Bearer headers for a user."""
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}
    return _headers


@pytest.fixture
def send_request(client, auth):
    """POST a valid swap request from sender to target; returns the JSON body."""
    async def _send(sender: User, target: User, **overrides) -> dict:
        body = {
            "to_user_id": str(target.id),
            "offered_skill": sender.skills_offered[0],
            "wanted_skill": "Cooking",
            "message": "Want to swap?",
        }
        body.update(overrides)
        res = await client.post("/api/v1/requests", json=body, headers=auth(sender))
        assert res.status_code == 201, res.text
        return res.json()
    return _send


@pytest.fixture
def open_stream(client, auth):
    """Drive an SSE route over raw ASGI and read its JSON snapshots.

    httpx's ASGITransport buffers until the app returns, which an open stream
    never does, so the app runs as a task and frames land on a queue.
    """
    @asynccontextmanager
    async def _open(path: str, user: User):
        frames: asyncio.Queue = asyncio.Queue()
        started: dict = {}
        disconnected = asyncio.Event()

        async def receive() -> dict:
            await disconnected.wait()
            return {"type": "http.disconnect"}

        async def send(message: dict) -> None:
            if message["type"] == "http.response.start":
                started["status"] = message["status"]
            elif message["type"] == "http.response.body" and message.get("body"):
                await frames.put(message["body"].decode())

        headers = [
            (k.lower().encode(), v.encode()) for k, v in auth(user).items()
        ]
        scope = {
            "type": "http",
            "asgi": {"version": "3.0", "spec_version": "2.3"},
            "http_version": "1.1",
            "method": "GET",
            "scheme": "http",
            "path": path,
            "raw_path": path.encode(),
            "query_string": b"",
            "root_path": "",
            "headers": headers,
            "server": ("test", 80),
            "client": ("127.0.0.1", 50000),
        }

        async def next_snapshot(timeout: float = 2.0) -> dict:
            while True:
                frame = await asyncio.wait_for(frames.get(), timeout)
                if frame.startswith("data: "):
                    assert started["status"] == 200
                    return json.loads(frame[len("data: "):])

        task = asyncio.create_task(app(scope, receive, send))
        try:
            yield next_snapshot
        finally:
            disconnected.set()
            try:
                await asyncio.wait_for(task, timeout=2.0)
            except asyncio.TimeoutError:
                pass
    return _open

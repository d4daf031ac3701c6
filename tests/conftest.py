# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime, timedelta
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from lireddit.core.security import hash_password
from lireddit.db.session import Base
from lireddit.db.session import get_db as app_get_session
from lireddit.db.time import utcnow
from lireddit.main import app as fastapi_app
from lireddit.models import Post, User
from lireddit.services.cache import get_redis
from lireddit.services.mailer import get_mailer
from lireddit.services.reset_tokens import ResetTokenStore
from lireddit.services.sessions import RequestSession, SessionStore

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "hunter22"

_USER_COUNTER = count(1)


class FakeRedis:
    """In-memory stand-in for the handful of redis commands the app uses."""

    def __init__(self) -> None:
        self.now = 0.0
        self._data: dict[str, tuple[str, float | None]] = {}

    def _live(self, key: str) -> str | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= self.now:
            del self._data[key]
            return None
        return value

    def get(self, key: str) -> str | None:
        return self._live(key)

    def set(self, key: str, value: Any, ex: int | None = None) -> bool:
        expires_at = self.now + ex if ex is not None else None
        self._data[key] = (str(value), expires_at)
        return True

    def getdel(self, key: str) -> str | None:
        value = self._live(key)
        self._data.pop(key, None)
        return value

    def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self._live(key) is not None:
                removed += 1
            self._data.pop(key, None)
        return removed

    def ttl(self, key: str) -> int:
        entry = self._data.get(key)
        if entry is None or self._live(key) is None:
            return -2
        _, expires_at = entry
        return -1 if expires_at is None else int(expires_at - self.now)

    def keys_with_prefix(self, prefix: str) -> list[str]:
        return [key for key in list(self._data) if key.startswith(prefix) and self._live(key)]

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingMailer:
    """Mailer that keeps messages in memory."""

    def __init__(self) -> None:
        self.outbox: list[dict[str, str]] = []

    def send(self, to_email: str, subject: str, html: str) -> None:
        self.outbox.append({"to": to_email, "subject": subject, "html": html})


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite needs manual BEGIN for SAVEPOINT support; see the SQLAlchemy SQLite dialect docs.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:  # pragma: no cover - driver hook
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:  # pragma: no cover - driver hook
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session whose commits become savepoints inside a transaction rolled back after the test."""
    connection = engine.connect()
    transaction = connection.begin()
    session = Session(
        bind=connection,
        join_transaction_mode="create_savepoint",
        expire_on_commit=False,
        autoflush=False,
    )
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


@pytest.fixture()
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture()
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture()
def reset_tokens(fake_redis: FakeRedis) -> ResetTokenStore:
    return ResetTokenStore(fake_redis)


@pytest.fixture()
def session_store(fake_redis: FakeRedis) -> SessionStore:
    return SessionStore(fake_redis)


@pytest.fixture()
def request_session(session_store: SessionStore) -> RequestSession:
    """An anonymous session with no response attached."""
    return RequestSession(session_store, None)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    fake_redis: FakeRedis,
    mailer: RecordingMailer,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_redis] = lambda: fake_redis
    app.dependency_overrides[get_mailer] = lambda: mailer
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_redis, None)
        app.dependency_overrides.pop(get_mailer, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def graphql(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Post a GraphQL document and return the decoded response body."""

    def _execute(query: str, **variables: Any) -> dict[str, Any]:
        response = client.post("/graphql", json={"query": query, "variables": variables})
        assert response.status_code == 200, response.text
        return response.json()

    return _execute


def _create_user(db_session: Session, username: str) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        password=hash_password(TEST_PASSWORD),
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return _create_user(db_session, f"tester{next(_USER_COUNTER)}")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return _create_user(db_session, f"other{next(_USER_COUNTER)}")


LOGIN_MUTATION = """
mutation Login($usernameOrEmail: String!, $password: String!) {
  login(usernameOrEmail: $usernameOrEmail, password: $password) {
    errors { field message }
    user { id username }
  }
}
"""


@pytest.fixture()
def login_as(graphql: Callable[..., dict[str, Any]]) -> Callable[[User], None]:
    """Log the test client in as ``user`` so later requests carry its cookie."""

    def _login(user: User) -> None:
        body = graphql(LOGIN_MUTATION, usernameOrEmail=user.username, password=TEST_PASSWORD)
        assert body["data"]["login"]["errors"] is None, body

    return _login


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Factory for posts; ``created_at`` defaults to now."""

    def _make(
        creator: User,
        *,
        title: str = "A post",
        text: str = "Some text for the post body.",
        created_at: datetime | None = None,
    ) -> Post:
        created = created_at or utcnow()
        post = Post(
            title=title,
            text=text,
            creator_id=creator.id,
            points=0,
            created_at=created,
            updated_at=created,
        )
        db_session.add(post)
        db_session.commit()
        return post

    return _make


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    """Create a baseline post for tests."""
    return make_post(test_user, title="Test post", text="Test post content")


@pytest.fixture()
def five_posts(make_post: Callable[..., Post], test_user: User) -> list[Post]:
    """Five posts one second apart, returned newest first."""
    base = utcnow() - timedelta(hours=1)
    posts = [
        make_post(test_user, title=f"Post {i}", created_at=base + timedelta(seconds=i))
        for i in range(5)
    ]
    return list(reversed(posts))

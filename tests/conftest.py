# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime, timedelta
from itertools import count

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from inkwell.core.security import create_access_token, hash_password
from inkwell.db.session import Base, enable_sqlite_foreign_keys
from inkwell.db.session import get_db as app_get_session
from inkwell.db.time import utcnow
from inkwell.main import app as fastapi_app
from inkwell.models import Post, PostLike, User
from inkwell.models.post import POST_STATUS_HIDDEN, POST_STATUS_PENDING, POST_STATUS_PUBLISHED
from inkwell.models.user import ROLE_ADMIN, ROLE_USER

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "password123"

# Hashing is slow on purpose; compute the fixture password hash once.
_TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)
_USER_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def auth_headers(user: User) -> dict[str, str]:
    """Return authorization headers for `user`."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    return auth_headers


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting users with the shared test password."""

    def _make_user(username: str | None = None, role: str = ROLE_USER) -> User:
        number = next(_USER_COUNTER)
        username = username or f"user{number}"
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=_TEST_PASSWORD_HASH,
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory persisting posts directly in a given status."""

    def _make_post(
        author: User,
        *,
        status: str = POST_STATUS_PENDING,
        title: str = "A post title",
        content: str = "Post content that is long enough.",
        published_at: datetime | None = None,
        likers: tuple[User, ...] = (),
    ) -> Post:
        if status in (POST_STATUS_PUBLISHED, POST_STATUS_HIDDEN) and published_at is None:
            published_at = utcnow()
        post = Post(
            title=title,
            content=content,
            author_id=author.id,
            status=status,
            published_at=published_at,
        )
        post.likes = [PostLike(user_id=liker.id) for liker in likers]
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def author(make_user: Callable[..., User]) -> User:
    return make_user("author")


@pytest.fixture()
def reader(make_user: Callable[..., User]) -> User:
    return make_user("reader")


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    return make_user("moderator", role=ROLE_ADMIN)


@pytest.fixture()
def author_headers(author: User) -> dict[str, str]:
    return auth_headers(author)


@pytest.fixture()
def reader_headers(reader: User) -> dict[str, str]:
    return auth_headers(reader)


@pytest.fixture()
def admin_headers(admin: User) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture()
def pending_post(make_post: Callable[..., Post], author: User) -> Post:
    return make_post(author)


@pytest.fixture()
def published_post(make_post: Callable[..., Post], author: User) -> Post:
    return make_post(author, status=POST_STATUS_PUBLISHED, title="Published post")


@pytest.fixture()
def make_published_series(make_post: Callable[..., Post]) -> Callable[[User, int], list[Post]]:
    """Return a factory creating published posts one minute apart, oldest first."""

    def _make_series(author: User, total: int) -> list[Post]:
        start = utcnow() - timedelta(days=1)
        return [
            make_post(
                author,
                status=POST_STATUS_PUBLISHED,
                title=f"Post {index}",
                published_at=start + timedelta(minutes=index),
            )
            for index in range(total)
        ]

    return _make_series

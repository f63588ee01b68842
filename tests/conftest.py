# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES", "false")

from inkwell.core.settings import settings
from inkwell.db.session import Base, Database
from inkwell.db.session import get_db as app_get_session
from inkwell.main import app as fastapi_app
from inkwell.models import Post, Privacy, Profile

TEST_DB_URL = "sqlite://"
IDENTITY_HEADER = settings.identity_header

_SLUG_COUNTER = count(1)
# Fixed base time so ordering assertions never depend on the wall clock.
BASE_TIME = datetime(2025, 1, 15, 10, 30, tzinfo=UTC)


@pytest.fixture(scope="session")
def database() -> Generator[Database, None, None]:
    database = Database(TEST_DB_URL, poolclass=StaticPool)
    database.create_tables()
    try:
        yield database
    finally:
        database.drop_tables()
        database.dispose()


@pytest.fixture()
def db_session(database: Database) -> Iterator[Session]:
    session = database.session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Services commit, so every test starts from empty tables.
        with database.engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(
    app: FastAPI,
    database: Database,
    db_session: Session,
) -> Iterator[None]:
    # One session per request, as in production; db_session is only for setup.
    def _get_session_override() -> Generator[Session, None, None]:
        session = database.session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Return a helper building headers that identify the caller."""

    def _headers(profile_id: str) -> dict[str, str]:
        return {IDENTITY_HEADER: profile_id}

    return _headers


@pytest.fixture()
def make_profile(db_session: Session) -> Callable[..., Profile]:
    """Return a factory persisting profiles directly, bypassing the API."""

    def _make(profile_id: str, **values: Any) -> Profile:
        profile = Profile(id=profile_id, **values)
        db_session.add(profile)
        db_session.commit()
        return profile

    return _make


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory persisting posts with a controllable creation time.

    ``minutes`` offsets ``created_at`` from a fixed base time so that tests
    can build a known newest-first order.
    """

    def _make(
        profile: Profile,
        title: str = "Untitled",
        *,
        minutes: int = 0,
        privacy: Privacy = Privacy.PUBLIC,
        **values: Any,
    ) -> Post:
        created_at = BASE_TIME + timedelta(minutes=minutes)
        post = Post(
            profile_id=profile.id,
            slug=f"{title.lower().replace(' ', '-')}-{next(_SLUG_COUNTER)}",
            title=title,
            privacy=privacy,
            created_at=created_at,
            updated_at=created_at,
            **values,
        )
        db_session.add(post)
        db_session.commit()
        return post

    return _make


@pytest.fixture()
def alice(make_profile: Callable[..., Profile]) -> Profile:
    return make_profile("alice", bio="Writes about databases")


@pytest.fixture()
def bob(make_profile: Callable[..., Profile]) -> Profile:
    return make_profile("bob", bio="Reads everything")

"""Shared fixtures: an in-memory SQLite store and a seeded publisher."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from onlyzines import models  # noqa: F401  # registers tables on Base.metadata
from onlyzines.core.security import create_password_hash
from onlyzines.db import get_db
from onlyzines.db.base import Base
from onlyzines.main import app
from onlyzines.models.publisher import Publisher
from onlyzines.models.user import User
from onlyzines.models.zine import Zine


@pytest.fixture()
def session_local() -> sessionmaker[Session]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture()
def session(session_local: sessionmaker[Session]) -> Iterator[Session]:
    with session_local() as db_session:
        yield db_session


def _make_publisher(session: Session, *, email: str, handle: str) -> Publisher:
    user = User(email=email, hashed_password=create_password_hash("correct-horse"))
    session.add(user)
    session.flush()
    publisher = Publisher(user_id=user.id, handle=handle, display_name=handle.title())
    session.add(publisher)
    session.commit()
    return publisher


@pytest.fixture()
def publisher(session: Session) -> Publisher:
    return _make_publisher(session, email="editor@example.com", handle="nightshift")


@pytest.fixture()
def other_publisher(session: Session) -> Publisher:
    return _make_publisher(session, email="rival@example.com", handle="dayshift")


@pytest.fixture()
def zine(session: Session, publisher: Publisher) -> Zine:
    zine = Zine(publisher_id=publisher.id, title="Night Shift", slug="night-shift")
    session.add(zine)
    session.commit()
    return zine


def make_builder_state(page_count: int, *, elements_per_page: int = 1, name: str = "Issue One") -> dict[str, Any]:
    """Build a builder-state payload with simple text elements."""

    pages = []
    for index in range(page_count):
        pages.append(
            {
                "id": f"p{index + 1}",
                "name": "Cover" if index == 0 else f"Page {index + 1}",
                "section": "cover" if index == 0 else "editorial",
                "paper": "kraft",
                "deckled": index == 0,
                "elements": [
                    {
                        "id": f"e{index + 1}-{slot}",
                        "type": "text",
                        "x": 90,
                        "y": 120,
                        "w": 450,
                        "h": 300,
                        "text": f"Block {slot} on page {index + 1}",
                    }
                    for slot in range(elements_per_page)
                ],
            }
        )
    return {"version": "13.1", "project": {"name": name}, "pages": pages}


@pytest.fixture()
def client(session_local: sessionmaker[Session]) -> Iterator[TestClient]:
    def override_get_db():
        with session_local() as db_session:
            yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


def signup(client: TestClient, email: str = "editor@example.com") -> dict[str, Any]:
    response = client.post(
        "/api/auth/signup",
        json={"email": email, "password": "correct-horse", "displayName": "Editor"},
    )
    assert response.status_code == 201, response.text
    return response.json()


def bearer(tokens: dict[str, Any]) -> dict[str, str]:
    return {"Authorization": f"Bearer {tokens['accessToken']}"}


def signup_publisher(
    client: TestClient, *, email: str = "editor@example.com", handle: str = "nightshift"
) -> dict[str, str]:
    """Sign up a user, open a publisher account and return auth headers."""

    headers = bearer(signup(client, email)["tokens"])
    response = client.post(
        "/api/publisher/account",
        json={"handle": handle, "displayName": handle.title()},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return headers

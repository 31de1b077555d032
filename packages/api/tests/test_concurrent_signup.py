# This project was developed with assistance from AI tools.
"""Signups racing each other over separate connections.

These tests run against a file-backed SQLite database so each request gets
its own pooled connection and writers serialize on the database lock.
"""

import asyncio

import pytest
import pytest_asyncio
from visadesk_db import DatabaseService

from visadesk.core.errors import Conflict
from visadesk.schemas.auth import SignupRequest
from visadesk.services import auth as auth_service

from .helpers import PASSWORD, login


@pytest_asyncio.fixture
async def db_service(tmp_path):
    service = DatabaseService(f"sqlite+aiosqlite:///{tmp_path / 'visadesk.db'}")
    await service.connect()
    await service.create_all()
    yield service
    await service.close()


def _admin_signup(http, email):
    return http.post(
        "/api/auth/signup",
        json={"name": "Racer", "email": email, "password": PASSWORD, "role": "admin"},
    )


async def test_same_email_signups_yield_one_conflict(make_client):
    responses = await asyncio.gather(
        _admin_signup(make_client(), "same@example.com"),
        _admin_signup(make_client(), "same@example.com"),
    )

    assert sorted(r.status_code for r in responses) == [201, 409]
    loser = next(r for r in responses if r.status_code == 409)
    assert loser.json() == {"error": "Email already exists"}

    resp = await login(make_client(), "same@example.com", PASSWORD, "admin")
    assert resp.status_code == 200


async def test_parallel_signups_get_distinct_sequential_ids(make_client):
    responses = await asyncio.gather(
        *(_admin_signup(make_client(), f"admin{n}@example.com") for n in range(8))
    )

    assert [r.status_code for r in responses] == [201] * 8
    ids = sorted(r.json()["user"]["id"] for r in responses)
    assert ids == list(range(1, 9))

    admins = (await make_client().get("/api/admins/public")).json()["data"]
    assert sorted(a["id"] for a in admins) == ids


async def test_unique_email_violation_is_a_conflict(session, monkeypatch):
    data = SignupRequest(name="First", email="dup@example.com", password=PASSWORD, role="admin")
    first_id = (await auth_service.signup(session, data)).id

    async def _missed_check(_session, _email):
        return None

    # A racing request whose pre-check ran before the first commit.
    monkeypatch.setattr(auth_service, "get_user_by_email", _missed_check)
    with pytest.raises(Conflict, match="Email already exists"):
        await auth_service.signup(session, data)

    # The rolled-back insert does not consume a user id.
    other = SignupRequest(name="Next", email="next@example.com", password=PASSWORD, role="admin")
    assert (await auth_service.signup(session, other)).id == first_id + 1

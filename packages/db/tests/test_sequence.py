# This project was developed with assistance from AI tools.
"""Counter-backed id sequences and the DatabaseService lifecycle."""

import asyncio

import pytest
import pytest_asyncio
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from visadesk_db import Application, Client, Counter, DatabaseService, User, next_sequence
from visadesk_db.enums import ApplicationStatus, UserRole
from visadesk_db.sequence import SEQUENCE_NAMES


@pytest_asyncio.fixture
async def db(tmp_path):
    """File-backed SQLite so separate connections share one database."""
    service = DatabaseService(f"sqlite+aiosqlite:///{tmp_path / 'visadesk.db'}")
    await service.connect()
    await service.create_all()
    yield service
    await service.close()


async def test_create_all_seeds_counters(db):
    async with db.session() as session:
        rows = (await session.execute(select(Counter))).scalars().all()
    assert {row.name: row.seq for row in rows} == {name: 0 for name in SEQUENCE_NAMES}


async def test_create_all_is_idempotent(db):
    async with db.session() as session:
        await next_sequence(session, "users")
        await session.commit()

    await db.create_all()

    async with db.session() as session:
        seq = (
            await session.execute(select(Counter.seq).where(Counter.name == "users"))
        ).scalar_one()
    assert seq == 1


async def test_sequence_is_monotonic_per_name(db):
    async with db.session() as session:
        users = [await next_sequence(session, "users") for _ in range(3)]
        agents = [await next_sequence(session, "agents") for _ in range(2)]
        await session.commit()
    assert users == [1, 2, 3]
    assert agents == [1, 2]


async def test_missing_counter_row_is_created(db):
    async with db.session() as session:
        await session.execute(delete(Counter).where(Counter.name == "documents"))
        await session.commit()

    async with db.session() as session:
        assert await next_sequence(session, "documents") == 1
        assert await next_sequence(session, "documents") == 2
        await session.commit()


async def test_rolled_back_allocation_is_never_observed(db):
    async with db.session() as session:
        await next_sequence(session, "clients")
        await session.rollback()

    async with db.session() as session:
        first = await next_sequence(session, "clients")
        await session.commit()
    async with db.session() as session:
        second = await next_sequence(session, "clients")
        await session.commit()
    assert second > first


async def test_concurrent_sessions_get_distinct_ids(db):
    async def allocate() -> int:
        async with db.session() as session:
            value = await next_sequence(session, "applications")
            await session.commit()
            return value

    values = await asyncio.gather(*(allocate() for _ in range(10)))
    assert sorted(values) == list(range(1, 11))


async def test_progress_is_bounded_in_the_database(db):
    async with db.session() as session:
        user = User(
            id=await next_sequence(session, "users"),
            name="Carla",
            email="carla@example.com",
            password_hash="x",
            role=UserRole.CLIENT,
        )
        client = Client(id=await next_sequence(session, "clients"), admin_id=99)
        client.user = user
        session.add_all([user, client])
        await session.flush()

        session.add(
            Application(
                id=await next_sequence(session, "applications"),
                client_id=client.id,
                visa_type="F-1 Student",
                target_country="United States",
                status=ApplicationStatus.DOCUMENT_REVIEW,
                progress=150,
            )
        )
        with pytest.raises(IntegrityError):
            await session.flush()


class TestDatabaseService:
    async def test_session_requires_connect(self, tmp_path):
        service = DatabaseService(f"sqlite+aiosqlite:///{tmp_path / 'x.db'}")
        assert not service.is_connected
        with pytest.raises(RuntimeError):
            service.session()

    async def test_connect_and_close_are_idempotent(self, tmp_path):
        service = DatabaseService(f"sqlite+aiosqlite:///{tmp_path / 'x.db'}")
        await service.connect()
        engine = service.engine
        await service.connect()
        assert service.engine is engine
        assert await service.health_check() is True

        await service.close()
        await service.close()
        assert not service.is_connected
        with pytest.raises(RuntimeError):
            _ = service.engine

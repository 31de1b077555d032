# This project was developed with assistance from AI tools.
"""Per-table integer id sequences backed by the ``counters`` table.

The increment is a single ``UPDATE ... SET seq = seq + 1 ... RETURNING seq``
statement, so concurrent callers always receive distinct values. The counter
row is locked until the caller's transaction ends; an id allocated inside a
rolled-back transaction is never visible to anyone.
"""

from sqlalchemy import insert, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Counter

SEQUENCE_NAMES = (
    "users",
    "agents",
    "clients",
    "applications",
    "commissions",
    "documents",
    "activities",
)


async def next_sequence(session: AsyncSession, name: str) -> int:
    """Atomically increment and return the counter for ``name``.

    The counter row is created on first use if the migration/create_all seed
    did not already insert it.
    """
    seq = await _increment(session, name)
    if seq is not None:
        return seq

    try:
        async with session.begin_nested():
            await session.execute(insert(Counter).values(name=name, seq=1))
        return 1
    except IntegrityError:
        # Another transaction inserted the row between our UPDATE and INSERT.
        seq = await _increment(session, name)
        if seq is None:
            raise
        return seq


async def _increment(session: AsyncSession, name: str) -> int | None:
    stmt = (
        update(Counter)
        .where(Counter.name == name)
        .values(seq=Counter.seq + 1)
        .returning(Counter.seq)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()

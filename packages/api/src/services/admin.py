# This project was developed with assistance from AI tools.
"""Admin tree maintenance.

``clear_data`` wipes everything under the calling admin: its agents and
clients (with their user accounts), their applications, commissions and
documents, and all activity performed by anyone in the tree. The admin's own
account survives, other admins' trees are untouched, and id counters are not
reset, so ids are never reused.
"""

import logging

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import Activity, Agent, Application, Client, Commission, Document, User
from visadesk_db.enums import OwnerType

from ..schemas.auth import UserContext

logger = logging.getLogger(__name__)


async def clear_data(session: AsyncSession, user: UserContext) -> dict[str, int]:
    """Delete the caller's tree in one transaction; return per-table counts."""
    admin_id = user.user_id
    agent_rows = (
        await session.execute(select(Agent.id, Agent.user_id).where(Agent.admin_id == admin_id))
    ).all()
    client_rows = (
        await session.execute(select(Client.id, Client.user_id).where(Client.admin_id == admin_id))
    ).all()
    agent_ids = [row.id for row in agent_rows]
    client_ids = [row.id for row in client_rows]
    member_user_ids = [row.user_id for row in agent_rows] + [row.user_id for row in client_rows]
    tree_user_ids = [admin_id, *member_user_ids]

    counts: dict[str, int] = {}

    async def _delete(name: str, stmt) -> None:
        result = await session.execute(stmt.execution_options(synchronize_session=False))
        counts[name] = result.rowcount or 0

    await _delete("activities", delete(Activity).where(Activity.actor_id.in_(tree_user_ids)))
    await _delete(
        "documents",
        delete(Document).where(
            or_(
                Document.uploaded_by_id.in_(tree_user_ids),
                (Document.owner_type == OwnerType.ADMIN) & (Document.owner_id == admin_id),
                (Document.owner_type == OwnerType.AGENT) & Document.owner_id.in_(agent_ids),
                (Document.owner_type == OwnerType.CLIENT) & Document.owner_id.in_(client_ids),
            )
        ),
    )
    await _delete(
        "commissions",
        delete(Commission).where(
            or_(Commission.agent_id.in_(agent_ids), Commission.client_id.in_(client_ids))
        ),
    )
    await _delete("applications", delete(Application).where(Application.client_id.in_(client_ids)))
    await _delete("clients", delete(Client).where(Client.id.in_(client_ids)))
    await _delete("agents", delete(Agent).where(Agent.id.in_(agent_ids)))
    await _delete("users", delete(User).where(User.id.in_(member_user_ids)))

    await session.commit()
    # Bulk deletes bypass the identity map.
    session.expunge_all()
    logger.info("Admin %s cleared their data: %s", admin_id, counts)
    return counts

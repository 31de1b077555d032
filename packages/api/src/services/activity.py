# This project was developed with assistance from AI tools.
"""Append-only activity feed.

Mutating services call ``record_activity`` inside their own transaction so
the feed row commits (or rolls back) together with the change it describes.
Rows are never updated; only the admin clear-data operation deletes them.
"""

import logging

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import Activity, next_sequence
from visadesk_db.enums import ActivityType, UserRole

from ..core.config import settings
from ..schemas.auth import UserContext

logger = logging.getLogger(__name__)


async def record_activity(
    session: AsyncSession,
    user: UserContext,
    *,
    target_type: str,
    target_id: int,
    activity_type: ActivityType,
    description: str,
    event_data: dict | None = None,
) -> Activity:
    """Add one feed row to the session. The caller commits."""
    activity = Activity(
        id=await next_sequence(session, "activities"),
        actor_id=user.user_id,
        actor_role=user.role,
        target_type=target_type,
        target_id=target_id,
        activity_type=activity_type,
        description=description,
        event_data=event_data or {},
    )
    session.add(activity)
    logger.debug(
        "Activity %s: %s by user=%s on %s:%s",
        activity.id,
        activity_type.value,
        user.user_id,
        target_type,
        target_id,
    )
    return activity


async def list_activities(session: AsyncSession, user: UserContext) -> list[Activity]:
    """Newest-first feed for the caller.

    Admins see what they did themselves. Agents and clients see what they
    did plus anything that named their own agent/client row as the target.
    """
    scope = user.data_scope
    if user.role == UserRole.ADMIN:
        condition = Activity.actor_id == user.user_id
        limit = settings.ADMIN_ACTIVITY_FEED_LIMIT
    else:
        condition = Activity.actor_id == user.user_id
        own_row = scope.agent_id if user.role == UserRole.AGENT else scope.client_id
        if own_row is not None:
            condition = or_(
                condition,
                and_(
                    Activity.target_type == user.role.value,
                    Activity.target_id == own_row,
                ),
            )
        limit = settings.ACTIVITY_FEED_LIMIT

    stmt = (
        select(Activity)
        .where(condition)
        .order_by(Activity.created_at.desc(), Activity.id.desc())
        .limit(limit)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())

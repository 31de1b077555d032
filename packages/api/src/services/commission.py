# This project was developed with assistance from AI tools.
"""Commission service.

Commissions are created explicitly by an admin; nothing creates one as a
side effect of an application decision. Status changes follow
``CommissionStatus.valid_transitions()``. Totals are summed over the listed
rows at read time.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import Agent, Commission, next_sequence
from visadesk_db.enums import ActivityType, CommissionStatus

from ..core.errors import AccessDenied, NotFound, ValidationError
from ..schemas.auth import UserContext
from ..schemas.commission import CommissionCreate, CommissionTotals
from .activity import record_activity
from .scope import get_caller_agent, get_owned_agent, get_owned_client

logger = logging.getLogger(__name__)


def compute_totals(commissions: Iterable[Commission]) -> CommissionTotals:
    """Sum commission amounts per status."""
    sums = {status: Decimal("0") for status in CommissionStatus}
    for commission in commissions:
        sums[commission.status] += Decimal(commission.amount)
    return CommissionTotals(
        pending=sums[CommissionStatus.PENDING],
        approved=sums[CommissionStatus.APPROVED],
        paid=sums[CommissionStatus.PAID],
        rejected=sums[CommissionStatus.REJECTED],
    )


async def list_admin_commissions(session: AsyncSession, user: UserContext) -> list[Commission]:
    """Commissions of every agent owned by the calling admin."""
    stmt = (
        select(Commission)
        .join(Agent, Commission.agent_id == Agent.id)
        .where(Agent.admin_id == user.user_id)
        .order_by(Commission.date.desc(), Commission.id.desc())
    )
    return list((await session.execute(stmt)).scalars().all())


async def list_agent_commissions(session: AsyncSession, user: UserContext) -> list[Commission]:
    agent = await get_caller_agent(session, user)
    stmt = (
        select(Commission)
        .where(Commission.agent_id == agent.id)
        .order_by(Commission.date.desc(), Commission.id.desc())
    )
    return list((await session.execute(stmt)).scalars().all())


async def create_commission(
    session: AsyncSession,
    user: UserContext,
    data: CommissionCreate,
) -> Commission:
    """Admin records a payout owed to one of its agents for an assigned client."""
    agent = await get_owned_agent(session, user, data.agent_id)
    client = await get_owned_client(session, user, data.client_id)
    if client.agent_id != agent.id:
        raise ValidationError("Client is not assigned to this agent")

    commission = Commission(
        id=await next_sequence(session, "commissions"),
        amount=data.amount,
        status=CommissionStatus.PENDING,
    )
    commission.agent = agent
    commission.client = client
    session.add(commission)
    await record_activity(
        session,
        user,
        target_type="agent",
        target_id=agent.id,
        activity_type=ActivityType.COMMISSION_CREATED,
        description=f"Commission of {data.amount} created",
        event_data={"commissionId": commission.id, "clientId": client.id},
    )
    await session.commit()
    logger.info(
        "Admin %s created commission %s for agent %s", user.user_id, commission.id, agent.id
    )
    return commission


async def update_status(
    session: AsyncSession,
    user: UserContext,
    commission_id: int,
    status: CommissionStatus,
) -> Commission:
    """Admin moves a commission along Pending -> Approved -> Paid (or Rejected)."""
    commission = await session.get(Commission, commission_id)
    if commission is None:
        raise NotFound("Commission not found")
    if commission.agent.admin_id != user.user_id:
        logger.warning(
            "Ownership denied: admin=%s commission=%s", user.user_id, commission_id
        )
        raise AccessDenied()

    current = commission.status
    allowed = CommissionStatus.valid_transitions().get(current, frozenset())
    if status not in allowed:
        raise ValidationError(
            f"Cannot change commission from '{current.value}' to '{status.value}'. "
            f"Allowed: {sorted(s.value for s in allowed) if allowed else 'none (final status)'}."
        )

    commission.status = status
    await record_activity(
        session,
        user,
        target_type="agent",
        target_id=commission.agent_id,
        activity_type=ActivityType.STATUS_CHANGED,
        description=f"Commission status updated to {status.value}",
        event_data={
            "commissionId": commission.id,
            "from": current.value,
            "to": status.value,
        },
    )
    await session.commit()
    return commission

# This project was developed with assistance from AI tools.
"""Agent (broker) service.

Admin-side management of the agents in an admin's tree, and agent self-service
profile access. All admin operations re-fetch the agent and verify
``agent.admin_id`` against the caller before touching it.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import Agent
from visadesk_db.enums import ActivityType, AgentStatus, UserRole

from ..core.auth import generate_temporary_password
from ..core.errors import AccessDenied
from ..schemas.agent import (
    AdminAgentUpdate,
    AgentCommissionUpdate,
    AgentCreate,
    AgentProfileUpdate,
)
from ..schemas.auth import UserContext
from . import auth as auth_service
from .activity import record_activity
from .scope import get_caller_agent, get_owned_agent

logger = logging.getLogger(__name__)


async def list_agents(session: AsyncSession, user: UserContext) -> list[Agent]:
    """Agents owned by the calling admin."""
    stmt = select(Agent).where(Agent.admin_id == user.user_id).order_by(Agent.id)
    return list((await session.execute(stmt)).scalars().all())


async def create_agent(
    session: AsyncSession,
    user: UserContext,
    data: AgentCreate,
) -> tuple[Agent, str]:
    """Provision an agent under the calling admin.

    Returns the agent and its one-time temporary password.
    """
    password = generate_temporary_password()
    agent_user = await auth_service.create_user(
        session,
        name=data.name,
        email=data.email,
        password=password,
        role=UserRole.AGENT,
    )
    fields = data.model_dump(exclude={"name", "email"}, exclude_none=True)
    agent = await auth_service.new_agent(session, agent_user, user.user_id, **fields)
    await session.commit()
    logger.info("Admin %s created agent %s (user=%s)", user.user_id, agent.id, agent_user.id)
    return await get_agent(session, user, agent.id), password


async def get_agent(session: AsyncSession, user: UserContext, agent_id: int) -> Agent:
    return await get_owned_agent(session, user, agent_id)


async def update_agent(
    session: AsyncSession,
    user: UserContext,
    agent_id: int,
    data: AdminAgentUpdate,
) -> Agent:
    """Admin edit of an agent's profile, commission terms and status."""
    agent = await get_owned_agent(session, user, agent_id)
    changes = data.model_dump(exclude_unset=True)
    _apply_agent_changes(agent, changes)
    await record_activity(
        session,
        user,
        target_type="agent",
        target_id=agent.id,
        activity_type=ActivityType.PROFILE_UPDATED,
        description="Admin updated agent profile",
        event_data={"changes": sorted(changes)},
    )
    await session.commit()
    return await get_owned_agent(session, user, agent_id)


async def set_agent_status(
    session: AsyncSession,
    user: UserContext,
    agent_id: int,
    status: AgentStatus,
) -> Agent:
    agent = await get_owned_agent(session, user, agent_id)
    previous = agent.status
    agent.status = status
    await record_activity(
        session,
        user,
        target_type="agent",
        target_id=agent.id,
        activity_type=ActivityType.STATUS_CHANGED,
        description=f"Agent status changed to {status.value}",
        event_data={"from": previous.value, "to": status.value},
    )
    await session.commit()
    return agent


async def update_agent_commission(
    session: AsyncSession,
    user: UserContext,
    agent_id: int,
    data: AgentCommissionUpdate,
) -> Agent:
    """Set an agent's percentage rate and optional fixed fee together."""
    agent = await get_owned_agent(session, user, agent_id)
    agent.commission_rate = data.commission_rate
    agent.commission_amount = data.commission_amount
    await record_activity(
        session,
        user,
        target_type="agent",
        target_id=agent.id,
        activity_type=ActivityType.PROFILE_UPDATED,
        description="Admin updated agent commission",
        event_data={
            "commissionRate": data.commission_rate,
            "commissionAmount": (
                str(data.commission_amount) if data.commission_amount is not None else None
            ),
        },
    )
    await session.commit()
    return agent


async def set_agent_password(
    session: AsyncSession,
    user: UserContext,
    agent_id: int,
    new_password: str,
) -> None:
    agent = await get_owned_agent(session, user, agent_id)
    await auth_service.set_password(session, agent.user, new_password)
    await session.commit()
    logger.info("Admin %s reset password for agent %s", user.user_id, agent_id)


async def get_profile(session: AsyncSession, user: UserContext) -> Agent:
    return await get_caller_agent(session, user)


async def update_profile(
    session: AsyncSession,
    user: UserContext,
    data: AgentProfileUpdate,
) -> Agent:
    """Agent self-service edit. Commission terms and status are admin-only."""
    agent = await get_caller_agent(session, user)
    changes = data.model_dump(exclude_unset=True)
    _apply_agent_changes(agent, changes)
    await record_activity(
        session,
        user,
        target_type="agent",
        target_id=agent.id,
        activity_type=ActivityType.PROFILE_UPDATED,
        description="Agent profile updated",
        event_data={"changes": sorted(changes)},
    )
    await session.commit()
    return agent


async def list_available_agents(session: AsyncSession, user: UserContext) -> list[Agent]:
    """Active agents under the caller's admin, for assignment pickers."""
    admin_id = user.data_scope.admin_id
    if admin_id is None:
        raise AccessDenied("Could not determine admin")
    stmt = (
        select(Agent)
        .where(Agent.admin_id == admin_id, Agent.status == AgentStatus.ACTIVE)
        .order_by(Agent.id)
    )
    return list((await session.execute(stmt)).scalars().all())


# Columns that cannot be cleared by sending null.
_REQUIRED_FIELDS = {"name", "commission_rate", "status"}


def _apply_agent_changes(agent: Agent, changes: dict) -> None:
    for field, value in changes.items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        if field == "name":
            agent.user.name = value
        else:
            setattr(agent, field, value)

# This project was developed with assistance from AI tools.
"""Shared ownership checks and data scope filtering for service queries.

Centralizes the admin -> agent -> client rules so that each resource service
applies them the same way. Targets are always re-fetched and their linkage
compared with the caller's resolved identity; ids supplied in a request are
never trusted on their own.
"""

import logging

from sqlalchemy import false, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import Agent, Client
from visadesk_db.enums import UserRole

from ..core.errors import AccessDenied, NotFound
from ..schemas.auth import UserContext

logger = logging.getLogger(__name__)


def apply_data_scope(stmt, user: UserContext):
    """Restrict a statement that selects from (or joins) ``Client``.

    Admins see clients they own, agents see clients assigned to them, clients
    see only themselves. A caller whose role row could not be resolved sees
    nothing.
    """
    scope = user.data_scope
    if user.role == UserRole.ADMIN:
        return stmt.where(Client.admin_id == user.user_id)
    if user.role == UserRole.AGENT and scope.agent_id is not None:
        return stmt.where(Client.agent_id == scope.agent_id)
    if user.role == UserRole.CLIENT and scope.client_id is not None:
        return stmt.where(Client.id == scope.client_id)
    return stmt.where(false())


async def get_caller_agent(session: AsyncSession, user: UserContext) -> Agent:
    """The Agent row of an agent caller."""
    agent = (
        await session.execute(select(Agent).where(Agent.user_id == user.user_id))
    ).scalar_one_or_none()
    if agent is None:
        raise NotFound("Agent not found")
    return agent


async def get_caller_client(session: AsyncSession, user: UserContext) -> Client:
    """The Client row of a client caller."""
    client = (
        await session.execute(select(Client).where(Client.user_id == user.user_id))
    ).scalar_one_or_none()
    if client is None:
        raise NotFound("Client not found")
    return client


async def get_owned_agent(session: AsyncSession, user: UserContext, agent_id: int) -> Agent:
    """An agent that belongs to the calling admin."""
    agent = await session.get(Agent, agent_id)
    if agent is None:
        raise NotFound("Agent not found")
    if agent.admin_id != user.user_id:
        logger.warning("Ownership denied: admin=%s agent=%s", user.user_id, agent_id)
        raise AccessDenied()
    return agent


async def get_owned_client(session: AsyncSession, user: UserContext, client_id: int) -> Client:
    """A client that belongs to the calling admin."""
    client = await session.get(Client, client_id)
    if client is None:
        raise NotFound("Client not found")
    if client.admin_id != user.user_id:
        logger.warning("Ownership denied: admin=%s client=%s", user.user_id, client_id)
        raise AccessDenied()
    return client


async def get_assigned_client(session: AsyncSession, agent: Agent, client_id: int) -> Client:
    """A client assigned to ``agent``."""
    client = await session.get(Client, client_id)
    if client is None:
        raise NotFound("Client not found")
    if client.agent_id != agent.id:
        logger.warning("Ownership denied: agent=%s client=%s", agent.id, client_id)
        raise AccessDenied("Client not assigned to you")
    return client


async def get_assignable_agent(session: AsyncSession, agent_id: int, admin_id: int) -> Agent:
    """An agent that a client owned by ``admin_id`` may be linked to.

    Assignment never crosses admin boundaries.
    """
    agent = await session.get(Agent, agent_id)
    if agent is None:
        raise NotFound("Agent not found")
    if agent.admin_id != admin_id:
        logger.warning(
            "Cross-admin assignment refused: agent=%s admin=%s client_admin=%s",
            agent_id,
            agent.admin_id,
            admin_id,
        )
        raise AccessDenied("Agent belongs to a different admin")
    return agent


async def assign_agent(session: AsyncSession, client: Client, agent: Agent | None) -> None:
    """Link ``client`` to ``agent`` (or unlink) and refresh cached counts.

    Callers must have checked the agent via ``get_assignable_agent``.
    """
    previous = client.agent
    client.agent = agent
    await session.flush()
    for affected in {a for a in (previous, agent) if a is not None}:
        await refresh_active_clients(session, affected)


async def refresh_active_clients(session: AsyncSession, agent: Agent) -> None:
    """Recount the clients currently assigned to ``agent``."""
    count = (
        await session.execute(
            select(func.count(Client.id)).where(Client.agent_id == agent.id)
        )
    ).scalar_one()
    agent.active_clients = count

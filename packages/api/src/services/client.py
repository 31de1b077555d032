# This project was developed with assistance from AI tools.
"""Client (student) service.

Provisioning by agents and admins, admin edits, and client self-service.
Every path that writes ``Client.agent_id`` goes through
``scope.get_assignable_agent`` so a client is never linked to an agent of a
different admin.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import Agent, Application, Client, next_sequence
from visadesk_db.enums import ActivityType, ApplicationStatus, UserRole

from ..core.auth import generate_temporary_password
from ..core.config import settings
from ..schemas.auth import UserContext
from ..schemas.client import (
    AdminClientCreate,
    AdminClientUpdate,
    AgentClientCreate,
    ClientProfileUpdate,
)
from . import auth as auth_service
from .activity import record_activity
from .scope import (
    apply_data_scope,
    assign_agent,
    get_assignable_agent,
    get_caller_agent,
    get_caller_client,
    get_owned_client,
)

logger = logging.getLogger(__name__)


async def list_clients(session: AsyncSession, user: UserContext) -> list[Client]:
    """Clients visible to the caller (admin: owned, agent: assigned)."""
    if user.role == UserRole.AGENT:
        await get_caller_agent(session, user)
    stmt = apply_data_scope(select(Client), user).order_by(Client.id)
    return list((await session.execute(stmt)).scalars().all())


async def create_client_for_agent(
    session: AsyncSession,
    user: UserContext,
    data: AgentClientCreate,
) -> tuple[Client, str]:
    """Agent provisions a client assigned to itself, with an initial application.

    The client inherits the agent's admin. User, Client and Application are
    committed together.
    """
    agent = await get_caller_agent(session, user)
    password = generate_temporary_password()
    client_user = await auth_service.create_user(
        session,
        name=data.name,
        email=data.email,
        password=password,
        role=UserRole.CLIENT,
    )
    client = await auth_service.new_client(session, client_user, agent.admin_id)
    await assign_agent(session, client, agent)

    application = Application(
        id=await next_sequence(session, "applications"),
        visa_type=data.visa_type or settings.DEFAULT_VISA_TYPE,
        target_country=data.target_country or settings.DEFAULT_TARGET_COUNTRY,
        purpose="",
        status=ApplicationStatus.DOCUMENT_REVIEW,
        progress=0,
        last_action="Account Created",
    )
    application.client = client
    session.add(application)
    await record_activity(
        session,
        user,
        target_type="client",
        target_id=client.id,
        activity_type=ActivityType.APPLICATION_SUBMITTED,
        description=f"Agent created client {data.name}",
        event_data={"applicationId": application.id},
    )
    await session.commit()
    logger.info(
        "Agent %s created client %s (user=%s, admin=%s)",
        agent.id,
        client.id,
        client_user.id,
        agent.admin_id,
    )
    return client, password


async def create_client_for_admin(
    session: AsyncSession,
    user: UserContext,
    data: AdminClientCreate,
) -> tuple[Client, str]:
    """Admin provisions a client in its own tree, optionally assigned."""
    agent = None
    if data.agent_id is not None:
        agent = await get_assignable_agent(session, data.agent_id, user.user_id)

    password = generate_temporary_password()
    client_user = await auth_service.create_user(
        session,
        name=data.name,
        email=data.email,
        password=password,
        role=UserRole.CLIENT,
    )
    client = await auth_service.new_client(
        session, client_user, user.user_id, fee_amount=data.fee_amount,
    )
    if agent is not None:
        await assign_agent(session, client, agent)
        await record_activity(
            session,
            user,
            target_type="agent",
            target_id=agent.id,
            activity_type=ActivityType.AGENT_ASSIGNED,
            description="Admin assigned agent to new client",
            event_data={"clientId": client.id},
        )
    await session.commit()
    logger.info("Admin %s created client %s (user=%s)", user.user_id, client.id, client_user.id)
    return client, password


async def get_client(session: AsyncSession, user: UserContext, client_id: int) -> Client:
    return await get_owned_client(session, user, client_id)


async def update_client(
    session: AsyncSession,
    user: UserContext,
    client_id: int,
    data: AdminClientUpdate,
) -> Client:
    """Admin edit of a client, including agent (re)assignment."""
    client = await get_owned_client(session, user, client_id)
    changes = data.model_dump(exclude_unset=True)

    if "agent_id" in changes:
        agent_id = changes.pop("agent_id")
        agent = None
        if agent_id is not None:
            agent = await get_assignable_agent(session, agent_id, client.admin_id)
        if agent is not client.agent:
            await assign_agent(session, client, agent)
            await record_activity(
                session,
                user,
                target_type="agent" if agent is not None else "client",
                target_id=agent.id if agent is not None else client.id,
                activity_type=ActivityType.AGENT_ASSIGNED,
                description=(
                    "Admin assigned agent to client"
                    if agent is not None
                    else "Admin unassigned client from agent"
                ),
                event_data={"clientId": client.id, "agentId": agent_id},
            )

    _apply_client_changes(client, changes)
    await record_activity(
        session,
        user,
        target_type="client",
        target_id=client.id,
        activity_type=ActivityType.PROFILE_UPDATED,
        description="Admin updated client profile",
        event_data={"changes": sorted(changes)},
    )
    await session.commit()
    return client


async def set_client_password(
    session: AsyncSession,
    user: UserContext,
    client_id: int,
    new_password: str,
) -> None:
    client = await get_owned_client(session, user, client_id)
    await auth_service.set_password(session, client.user, new_password)
    await session.commit()
    logger.info("Admin %s reset password for client %s", user.user_id, client_id)


async def get_profile(session: AsyncSession, user: UserContext) -> Client:
    return await get_caller_client(session, user)


async def update_profile(
    session: AsyncSession,
    user: UserContext,
    data: ClientProfileUpdate,
) -> Client:
    """Client self-service edit. Agent and fee are not editable here."""
    client = await get_caller_client(session, user)
    changes = data.model_dump(exclude_unset=True)
    _apply_client_changes(client, changes)
    await record_activity(
        session,
        user,
        target_type="client",
        target_id=client.id,
        activity_type=ActivityType.PROFILE_UPDATED,
        description="Client profile updated",
        event_data={"changes": sorted(changes)},
    )
    await session.commit()
    return client


async def choose_agent(session: AsyncSession, user: UserContext, agent_id: int) -> Client:
    """Client picks an agent; only agents of its own admin qualify."""
    client = await get_caller_client(session, user)
    agent = await get_assignable_agent(session, agent_id, client.admin_id)
    await assign_agent(session, client, agent)
    await record_activity(
        session,
        user,
        target_type="agent",
        target_id=agent.id,
        activity_type=ActivityType.AGENT_ASSIGNED,
        description="Client chose an agent",
        event_data={"clientId": client.id},
    )
    await session.commit()
    return client


async def get_assigned_agent(session: AsyncSession, user: UserContext) -> Agent | None:
    client = await get_caller_client(session, user)
    return client.agent


def _apply_client_changes(client: Client, changes: dict) -> None:
    for field, value in changes.items():
        if field == "name":
            if value:
                client.user.name = value
        else:
            setattr(client, field, value)

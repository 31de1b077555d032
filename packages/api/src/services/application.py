# This project was developed with assistance from AI tools.
"""Visa application service with ownership-scoped filtering.

Every query is filtered through ``apply_data_scope`` on the owning Client so
that admins see applications of clients they own, agents see those of their
assigned clients, and clients see only their own.

Status changes are free-form: an authorized agent may set any status from any
other status.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import Application, Client, next_sequence
from visadesk_db.enums import ActivityType, ApplicationStatus, UserRole

from ..core.errors import AccessDenied, NotFound
from ..schemas.application import ApplicationCreate, ApplicationProgressUpdate
from ..schemas.auth import UserContext
from .activity import record_activity
from .scope import (
    apply_data_scope,
    assign_agent,
    get_assignable_agent,
    get_caller_agent,
    get_caller_client,
)

logger = logging.getLogger(__name__)


async def list_applications(session: AsyncSession, user: UserContext) -> list[Application]:
    """Applications visible to the caller, newest first."""
    if user.role == UserRole.AGENT:
        await get_caller_agent(session, user)
    elif user.role == UserRole.CLIENT:
        await get_caller_client(session, user)
    stmt = (
        select(Application)
        .join(Client, Application.client_id == Client.id)
        .order_by(Application.submitted_at.desc(), Application.id.desc())
    )
    stmt = apply_data_scope(stmt, user)
    return list((await session.execute(stmt)).scalars().all())


async def _get_application(session: AsyncSession, application_id: int) -> Application:
    application = await session.get(Application, application_id)
    if application is None:
        raise NotFound("Application not found")
    return application


async def create_application(
    session: AsyncSession,
    user: UserContext,
    data: ApplicationCreate,
) -> Application:
    """Client files a new application for itself."""
    client = await get_caller_client(session, user)
    application = Application(
        id=await next_sequence(session, "applications"),
        visa_type=data.visa_type,
        target_country=data.target_country,
        purpose=data.purpose,
        status=ApplicationStatus.DOCUMENT_REVIEW,
        progress=10,
        last_action="Application Submitted",
    )
    application.client = client
    session.add(application)
    await record_activity(
        session,
        user,
        target_type="client",
        target_id=client.id,
        activity_type=ActivityType.APPLICATION_SUBMITTED,
        description=f"Application submitted for {data.visa_type} ({data.target_country})",
        event_data={"applicationId": application.id},
    )
    await session.commit()
    return application


async def update_status(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
    status: ApplicationStatus,
) -> Application:
    """Agent sets the status of an application of one of its clients."""
    application = await _get_application(session, application_id)
    agent = await get_caller_agent(session, user)
    if application.client.agent_id != agent.id:
        logger.warning(
            "Ownership denied: agent=%s application=%s", agent.id, application_id
        )
        raise AccessDenied()

    previous = application.status
    application.status = status
    application.last_action = f"Status changed to {status.value}"
    await record_activity(
        session,
        user,
        target_type="client",
        target_id=application.client_id,
        activity_type=ActivityType.APPLICATION_UPDATED,
        description=f"Application status updated to {status.value}",
        event_data={
            "applicationId": application.id,
            "from": previous.value,
            "to": status.value,
        },
    )
    await session.commit()
    return application


async def update_progress(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
    data: ApplicationProgressUpdate,
) -> Application:
    """Client records progress on one of its own applications."""
    application = await _get_application(session, application_id)
    client = await get_caller_client(session, user)
    if application.client_id != client.id:
        logger.warning(
            "Ownership denied: client=%s application=%s", client.id, application_id
        )
        raise AccessDenied()

    application.progress = data.progress
    if data.last_action is not None:
        application.last_action = data.last_action
    await record_activity(
        session,
        user,
        target_type="client",
        target_id=client.id,
        activity_type=ActivityType.APPLICATION_UPDATED,
        description=f"Application progress updated to {data.progress}%",
        event_data={"applicationId": application.id, "progress": data.progress},
    )
    await session.commit()
    return application


async def assign_agent_to_application(
    session: AsyncSession,
    user: UserContext,
    application_id: int,
    agent_id: int,
) -> Application:
    """Admin links the application's client to one of the admin's agents."""
    application = await _get_application(session, application_id)
    client = application.client
    if client.admin_id != user.user_id:
        logger.warning(
            "Ownership denied: admin=%s application=%s", user.user_id, application_id
        )
        raise AccessDenied()

    agent = await get_assignable_agent(session, agent_id, client.admin_id)
    await assign_agent(session, client, agent)
    await record_activity(
        session,
        user,
        target_type="application",
        target_id=application.id,
        activity_type=ActivityType.AGENT_ASSIGNED,
        description="Admin assigned agent to client",
        event_data={"agentId": agent.id, "clientId": client.id},
    )
    await session.commit()
    return application

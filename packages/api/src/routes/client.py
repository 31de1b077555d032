# This project was developed with assistance from AI tools.
"""Client (student) self-service endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import get_db
from visadesk_db.enums import UserRole

from ..middleware.auth import CurrentUser, require_roles
from ..schemas.agent import AgentResponse
from ..schemas.application import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationProgressUpdate,
    ApplicationResponse,
)
from ..schemas.client import (
    AssignedAgentResponse,
    ChooseAgentRequest,
    ClientProfileUpdate,
    ClientResponse,
)
from ..services import application as app_service
from ..services import client as client_service

router = APIRouter()


@router.get(
    "/applications",
    response_model=ApplicationListResponse,
    dependencies=[Depends(require_roles(UserRole.CLIENT))],
)
async def list_applications(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationListResponse:
    applications = await app_service.list_applications(session, user)
    return ApplicationListResponse(
        data=[ApplicationResponse.model_validate(a) for a in applications],
        count=len(applications),
    )


@router.post(
    "/applications",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(UserRole.CLIENT))],
)
async def create_application(
    body: ApplicationCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    application = await app_service.create_application(session, user, body)
    return ApplicationResponse.model_validate(application)


@router.patch(
    "/applications/{application_id}/progress",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_roles(UserRole.CLIENT))],
)
async def update_progress(
    application_id: int,
    body: ApplicationProgressUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    application = await app_service.update_progress(session, user, application_id, body)
    return ApplicationResponse.model_validate(application)


@router.get(
    "/profile",
    response_model=ClientResponse,
    dependencies=[Depends(require_roles(UserRole.CLIENT))],
)
async def get_profile(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ClientResponse:
    client = await client_service.get_profile(session, user)
    return ClientResponse.model_validate(client)


@router.patch(
    "/profile",
    response_model=ClientResponse,
    dependencies=[Depends(require_roles(UserRole.CLIENT))],
)
async def update_profile(
    body: ClientProfileUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ClientResponse:
    client = await client_service.update_profile(session, user, body)
    return ClientResponse.model_validate(client)


@router.patch(
    "/choose-agent",
    response_model=ClientResponse,
    dependencies=[Depends(require_roles(UserRole.CLIENT))],
)
async def choose_agent(
    body: ChooseAgentRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ClientResponse:
    """Pick an agent from the caller's own admin."""
    client = await client_service.choose_agent(session, user, body.agent_id)
    return ClientResponse.model_validate(client)


@router.get(
    "/agent",
    response_model=AssignedAgentResponse,
    dependencies=[Depends(require_roles(UserRole.CLIENT))],
)
async def get_assigned_agent(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> AssignedAgentResponse:
    agent = await client_service.get_assigned_agent(session, user)
    return AssignedAgentResponse(
        agent=AgentResponse.model_validate(agent) if agent is not None else None
    )

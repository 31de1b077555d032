# This project was developed with assistance from AI tools.
"""Agent (broker) endpoints, scoped to the caller's assigned clients."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import get_db
from visadesk_db.enums import UserRole

from ..middleware.auth import CurrentUser, require_roles
from ..schemas.agent import AgentProfileUpdate, AgentResponse
from ..schemas.application import (
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationStatusUpdate,
)
from ..schemas.client import (
    AgentClientCreate,
    ClientCreatedResponse,
    ClientListResponse,
    ClientResponse,
)
from ..schemas.commission import CommissionListResponse, CommissionResponse
from ..schemas.document import DocumentListResponse, DocumentResponse
from ..services import agent as agent_service
from ..services import application as app_service
from ..services import client as client_service
from ..services import commission as commission_service
from ..services import document as document_service

router = APIRouter()


@router.get(
    "/clients",
    response_model=ClientListResponse,
    dependencies=[Depends(require_roles(UserRole.AGENT))],
)
async def list_clients(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ClientListResponse:
    clients = await client_service.list_clients(session, user)
    return ClientListResponse(
        data=[ClientResponse.model_validate(c) for c in clients],
        count=len(clients),
    )


@router.post(
    "/clients",
    response_model=ClientCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(UserRole.AGENT))],
)
async def create_client(
    body: AgentClientCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ClientCreatedResponse:
    """Provision a client assigned to the caller, with an initial application."""
    client, password = await client_service.create_client_for_agent(session, user, body)
    return ClientCreatedResponse(
        **ClientResponse.model_validate(client).model_dump(),
        temporary_password=password,
    )


@router.get(
    "/clients/{client_id}/documents",
    response_model=DocumentListResponse,
    dependencies=[Depends(require_roles(UserRole.AGENT))],
)
async def list_client_documents(
    client_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentListResponse:
    documents = await document_service.list_client_documents(session, user, client_id)
    return DocumentListResponse(
        data=[DocumentResponse.model_validate(d) for d in documents],
        count=len(documents),
    )


@router.get(
    "/applications",
    response_model=ApplicationListResponse,
    dependencies=[Depends(require_roles(UserRole.AGENT))],
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


@router.patch(
    "/applications/{application_id}/status",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_roles(UserRole.AGENT))],
)
async def set_application_status(
    application_id: int,
    body: ApplicationStatusUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    application = await app_service.update_status(session, user, application_id, body.status)
    return ApplicationResponse.model_validate(application)


@router.get(
    "/commissions",
    response_model=CommissionListResponse,
    dependencies=[Depends(require_roles(UserRole.AGENT))],
)
async def list_commissions(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> CommissionListResponse:
    commissions = await commission_service.list_agent_commissions(session, user)
    return CommissionListResponse(
        data=[CommissionResponse.model_validate(c) for c in commissions],
        count=len(commissions),
        totals=commission_service.compute_totals(commissions),
    )


@router.get(
    "/profile",
    response_model=AgentResponse,
    dependencies=[Depends(require_roles(UserRole.AGENT))],
)
async def get_profile(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> AgentResponse:
    agent = await agent_service.get_profile(session, user)
    return AgentResponse.model_validate(agent)


@router.patch(
    "/profile",
    response_model=AgentResponse,
    dependencies=[Depends(require_roles(UserRole.AGENT))],
)
async def update_profile(
    body: AgentProfileUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> AgentResponse:
    agent = await agent_service.update_profile(session, user, body)
    return AgentResponse.model_validate(agent)

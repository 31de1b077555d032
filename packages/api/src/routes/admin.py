# This project was developed with assistance from AI tools.
"""Admin endpoints: agents, clients, applications, commissions, documents.

Every route is admin-only and scoped to the caller's own tree.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import get_db
from visadesk_db.enums import OwnerType, UserRole

from ..middleware.auth import CurrentUser, require_roles
from ..schemas.admin import ClearDataResponse
from ..schemas.agent import (
    AdminAgentUpdate,
    AgentCommissionUpdate,
    AgentCreate,
    AgentCreatedResponse,
    AgentListResponse,
    AgentResponse,
    AgentStatusUpdate,
    PasswordUpdate,
)
from ..schemas.application import (
    ApplicationListResponse,
    ApplicationResponse,
    AssignAgentRequest,
)
from ..schemas.auth import MessageResponse
from ..schemas.client import (
    AdminClientCreate,
    AdminClientUpdate,
    ClientCreatedResponse,
    ClientListResponse,
    ClientResponse,
)
from ..schemas.commission import (
    CommissionCreate,
    CommissionListResponse,
    CommissionResponse,
    CommissionStatusUpdate,
)
from ..schemas.document import DocumentListResponse, DocumentResponse
from ..services import admin as admin_service
from ..services import agent as agent_service
from ..services import application as app_service
from ..services import client as client_service
from ..services import commission as commission_service
from ..services import document as document_service

router = APIRouter()

# ---------------------------------------------------------------------------
# Agents
# ---------------------------------------------------------------------------


@router.get(
    "/agents",
    response_model=AgentListResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def list_agents(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> AgentListResponse:
    agents = await agent_service.list_agents(session, user)
    return AgentListResponse(
        data=[AgentResponse.model_validate(a) for a in agents],
        count=len(agents),
    )


@router.post(
    "/agents",
    response_model=AgentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def create_agent(
    body: AgentCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> AgentCreatedResponse:
    """Provision an agent. The temporary password is only ever shown here."""
    agent, password = await agent_service.create_agent(session, user, body)
    return AgentCreatedResponse(
        **AgentResponse.model_validate(agent).model_dump(),
        temporary_password=password,
    )


@router.get(
    "/agents/{agent_id}",
    response_model=AgentResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def get_agent(
    agent_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> AgentResponse:
    agent = await agent_service.get_agent(session, user, agent_id)
    return AgentResponse.model_validate(agent)


@router.patch(
    "/agents/{agent_id}",
    response_model=AgentResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def update_agent(
    agent_id: int,
    body: AdminAgentUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> AgentResponse:
    agent = await agent_service.update_agent(session, user, agent_id, body)
    return AgentResponse.model_validate(agent)


@router.patch(
    "/agents/{agent_id}/status",
    response_model=AgentResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def set_agent_status(
    agent_id: int,
    body: AgentStatusUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> AgentResponse:
    agent = await agent_service.set_agent_status(session, user, agent_id, body.status)
    return AgentResponse.model_validate(agent)


@router.patch(
    "/agents/{agent_id}/commission",
    response_model=AgentResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def update_agent_commission(
    agent_id: int,
    body: AgentCommissionUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> AgentResponse:
    agent = await agent_service.update_agent_commission(session, user, agent_id, body)
    return AgentResponse.model_validate(agent)


@router.patch(
    "/agents/{agent_id}/password",
    response_model=MessageResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def set_agent_password(
    agent_id: int,
    body: PasswordUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    await agent_service.set_agent_password(session, user, agent_id, body.new_password)
    return MessageResponse(message="Password updated")


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------


@router.get(
    "/clients",
    response_model=ClientListResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
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
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def create_client(
    body: AdminClientCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ClientCreatedResponse:
    client, password = await client_service.create_client_for_admin(session, user, body)
    return ClientCreatedResponse(
        **ClientResponse.model_validate(client).model_dump(),
        temporary_password=password,
    )


@router.get(
    "/clients/{client_id}",
    response_model=ClientResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def get_client(
    client_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ClientResponse:
    client = await client_service.get_client(session, user, client_id)
    return ClientResponse.model_validate(client)


@router.patch(
    "/clients/{client_id}",
    response_model=ClientResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def update_client(
    client_id: int,
    body: AdminClientUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ClientResponse:
    client = await client_service.update_client(session, user, client_id, body)
    return ClientResponse.model_validate(client)


@router.patch(
    "/clients/{client_id}/password",
    response_model=MessageResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def set_client_password(
    client_id: int,
    body: PasswordUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    await client_service.set_client_password(session, user, client_id, body.new_password)
    return MessageResponse(message="Password updated")


# ---------------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------------


@router.get(
    "/applications",
    response_model=ApplicationListResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
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
    "/applications/{application_id}/assign-agent",
    response_model=ApplicationResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def assign_agent(
    application_id: int,
    body: AssignAgentRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ApplicationResponse:
    """Assign the application's client to one of the caller's agents."""
    application = await app_service.assign_agent_to_application(
        session, user, application_id, body.agent_id
    )
    return ApplicationResponse.model_validate(application)


# ---------------------------------------------------------------------------
# Commissions
# ---------------------------------------------------------------------------


@router.get(
    "/commissions",
    response_model=CommissionListResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def list_commissions(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> CommissionListResponse:
    commissions = await commission_service.list_admin_commissions(session, user)
    return CommissionListResponse(
        data=[CommissionResponse.model_validate(c) for c in commissions],
        count=len(commissions),
        totals=commission_service.compute_totals(commissions),
    )


@router.post(
    "/commissions",
    response_model=CommissionResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def create_commission(
    body: CommissionCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> CommissionResponse:
    commission = await commission_service.create_commission(session, user, body)
    return CommissionResponse.model_validate(commission)


@router.patch(
    "/commissions/{commission_id}/status",
    response_model=CommissionResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def set_commission_status(
    commission_id: int,
    body: CommissionStatusUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> CommissionResponse:
    commission = await commission_service.update_status(
        session, user, commission_id, body.status
    )
    return CommissionResponse.model_validate(commission)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


@router.get(
    "/documents",
    response_model=DocumentListResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def list_documents(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentListResponse:
    documents = await document_service.list_admin_documents(session, user)
    return DocumentListResponse(
        data=[DocumentResponse.model_validate(d) for d in documents],
        count=len(documents),
    )


@router.get(
    "/documents/{owner_type}/{owner_id}",
    response_model=DocumentListResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def list_owner_documents(
    owner_type: OwnerType,
    owner_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentListResponse:
    documents = await document_service.list_owner_documents(session, user, owner_type, owner_id)
    return DocumentListResponse(
        data=[DocumentResponse.model_validate(d) for d in documents],
        count=len(documents),
    )


# ---------------------------------------------------------------------------
# Maintenance
# ---------------------------------------------------------------------------


@router.post(
    "/clear-data",
    response_model=ClearDataResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
async def clear_data(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ClearDataResponse:
    """Delete every agent, client and related record under the caller."""
    deleted = await admin_service.clear_data(session, user)
    return ClearDataResponse(message="All data cleared successfully", deleted=deleted)

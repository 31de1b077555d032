# This project was developed with assistance from AI tools.
"""Cross-role lookups: activity feed, agent picker, admin directory."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import get_db

from ..middleware.auth import CurrentUser
from ..schemas.activity import ActivityListResponse, ActivityResponse
from ..schemas.admin import (
    AdminListResponse,
    AdminPublic,
    AdminPublicListResponse,
    AdminResponse,
)
from ..schemas.agent import AgentListResponse, AgentResponse
from ..services import activity as activity_service
from ..services import agent as agent_service
from ..services import auth as auth_service

router = APIRouter()


@router.get("/activities", response_model=ActivityListResponse)
async def list_activities(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> ActivityListResponse:
    """The caller's notification feed, newest first."""
    activities = await activity_service.list_activities(session, user)
    return ActivityListResponse(
        data=[ActivityResponse.model_validate(a) for a in activities],
        count=len(activities),
    )


@router.get("/agents/available", response_model=AgentListResponse)
async def list_available_agents(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> AgentListResponse:
    """Active agents under the caller's admin."""
    agents = await agent_service.list_available_agents(session, user)
    return AgentListResponse(
        data=[AgentResponse.model_validate(a) for a in agents],
        count=len(agents),
    )


@router.get("/admins", response_model=AdminListResponse)
async def list_admins(
    _user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> AdminListResponse:
    admins = await auth_service.list_admins(session)
    return AdminListResponse(
        data=[AdminResponse.model_validate(a) for a in admins],
        count=len(admins),
    )


@router.get("/admins/public", response_model=AdminPublicListResponse)
async def list_public_admins(
    session: AsyncSession = Depends(get_db),
) -> AdminPublicListResponse:
    """Unauthenticated: names and ids only, for the signup form."""
    admins = await auth_service.list_admins(session)
    return AdminPublicListResponse(
        data=[AdminPublic.model_validate(a) for a in admins],
        count=len(admins),
    )

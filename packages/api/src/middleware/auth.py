# This project was developed with assistance from AI tools.
"""
Session-cookie authentication.

The signed Starlette session carries ``{"user_id", "role"}``. Every
authenticated request reloads the user, checks the stored role still matches,
resolves the caller's Agent/Client row, and exposes the result as a
``UserContext`` for route-level auth.
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import Agent, Client, User, get_db
from visadesk_db.enums import UserRole

from ..core.auth import build_data_scope
from ..schemas.auth import UserContext

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"
SESSION_ROLE_KEY = "role"


def start_session(request: Request, user: User) -> None:
    """Bind ``user`` to the caller's session cookie."""
    request.session.clear()
    request.session.update({SESSION_USER_KEY: user.id, SESSION_ROLE_KEY: user.role.value})


def end_session(request: Request) -> None:
    request.session.clear()


def _unauthenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
    )


async def get_current_user(
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> UserContext:
    """FastAPI dependency: resolve the session cookie into a UserContext."""
    user_id = request.session.get(SESSION_USER_KEY)
    role = request.session.get(SESSION_ROLE_KEY)
    if user_id is None or role is None:
        raise _unauthenticated()

    user = await session.get(User, user_id)
    if user is None or user.role.value != role:
        # Account deleted (e.g. by clear-data) or tampered role claim.
        logger.warning("Stale session for user_id=%s role=%s; clearing", user_id, role)
        end_session(request)
        raise _unauthenticated()

    admin_id = agent_id = client_id = None
    if user.role == UserRole.AGENT:
        agent = (
            await session.execute(select(Agent).where(Agent.user_id == user.id))
        ).scalar_one_or_none()
        if agent is not None:
            admin_id, agent_id = agent.admin_id, agent.id
    elif user.role == UserRole.CLIENT:
        client = (
            await session.execute(select(Client).where(Client.user_id == user.id))
        ).scalar_one_or_none()
        if client is not None:
            admin_id, agent_id, client_id = client.admin_id, client.agent_id, client.id

    return UserContext(
        user_id=user.id,
        role=user.role,
        email=user.email,
        name=user.name,
        data_scope=build_data_scope(
            user.role, user.id, admin_id=admin_id, agent_id=agent_id, client_id=client_id,
        ),
    )


# Type alias for use in route signatures
CurrentUser = Annotated[UserContext, Depends(get_current_user)]


def require_roles(*allowed_roles: UserRole):
    """Dependency factory: restrict a route to specific roles.

    Usage:
        @router.get("/agents", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """

    async def _check(user: CurrentUser) -> UserContext:
        if user.role not in allowed_roles:
            logger.warning(
                "RBAC denied: user=%s role=%s attempted route requiring %s",
                user.user_id,
                user.role.value,
                [r.value for r in allowed_roles],
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied",
            )
        return user

    return _check

# This project was developed with assistance from AI tools.
"""Signup, login, logout and session introspection."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import get_db

from ..middleware.auth import CurrentUser, end_session, start_session
from ..schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    UserResponse,
)
from ..services import auth as auth_service

router = APIRouter()


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Create an account and start a session for it."""
    user = await auth_service.signup(session, body)
    start_session(request, user)
    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> AuthResponse:
    user = await auth_service.login(session, body)
    start_session(request, user)
    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request) -> MessageResponse:
    end_session(request)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=AuthResponse)
async def me(user: CurrentUser) -> AuthResponse:
    return AuthResponse(
        user=UserResponse(id=user.user_id, name=user.name, email=user.email, role=user.role)
    )

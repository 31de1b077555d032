# This project was developed with assistance from AI tools.
"""Identity service: signup, login, and user provisioning.

``create_user`` adds and flushes the User row but never commits. Every caller
creates the role-specific row in the same transaction and commits once, so a
failure part-way never leaves a User without its Agent/Client row.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool
from visadesk_db import Agent, Client, User, next_sequence
from visadesk_db.enums import AgentStatus, UserRole

from ..core.auth import check_password_strength, hash_password, verify_password
from ..core.config import settings
from ..core.errors import Conflict, InvalidCredentials, NotFound, ValidationError
from ..schemas.auth import LoginRequest, SignupRequest

logger = logging.getLogger(__name__)


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    stmt = select(User).where(User.email == email.strip().lower())
    return (await session.execute(stmt)).scalar_one_or_none()


async def get_admin(session: AsyncSession, admin_id: int) -> User:
    user = await session.get(User, admin_id)
    if user is None or user.role != UserRole.ADMIN:
        raise NotFound("Admin not found")
    return user


async def create_user(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
    role: UserRole,
) -> User:
    """Add and flush a new User. Does not commit."""
    check_password_strength(password)
    if await get_user_by_email(session, email) is not None:
        raise Conflict("Email already exists")

    # bcrypt is CPU-bound; keep it off the event loop.
    password_hash = await run_in_threadpool(hash_password, password)
    user = User(
        id=await next_sequence(session, "users"),
        name=name,
        email=email.strip().lower(),
        password_hash=password_hash,
        role=role,
    )
    session.add(user)
    # A concurrent signup can pass the pre-check; the unique index decides.
    try:
        await session.flush()
    except IntegrityError:
        await session.rollback()
        logger.info("Duplicate email rejected at insert: %s", email)
        raise Conflict("Email already exists") from None
    return user


async def new_agent(session: AsyncSession, user: User, admin_id: int, **fields) -> Agent:
    """Add the Agent row for a freshly created agent user. Does not commit."""
    fields.setdefault("commission_rate", settings.DEFAULT_COMMISSION_RATE)
    agent = Agent(
        id=await next_sequence(session, "agents"),
        admin_id=admin_id,
        status=AgentStatus.ACTIVE,
        active_clients=0,
        **fields,
    )
    agent.user = user
    session.add(agent)
    return agent


async def new_client(session: AsyncSession, user: User, admin_id: int, **fields) -> Client:
    """Add the Client row for a freshly created client user. Does not commit."""
    client = Client(
        id=await next_sequence(session, "clients"),
        admin_id=admin_id,
        **fields,
    )
    client.user = user
    session.add(client)
    return client


async def signup(session: AsyncSession, data: SignupRequest) -> User:
    """Self-registration for any role.

    Agents and clients must name the admin they will work under.
    """
    admin_id = None
    if data.role in (UserRole.AGENT, UserRole.CLIENT):
        if data.admin_id is None:
            raise ValidationError("Please select an admin to work with")
        admin_id = (await get_admin(session, data.admin_id)).id

    user = await create_user(
        session,
        name=data.name,
        email=data.email,
        password=data.password,
        role=data.role,
    )
    if data.role == UserRole.AGENT:
        await new_agent(session, user, admin_id)
    elif data.role == UserRole.CLIENT:
        await new_client(session, user, admin_id)

    await session.commit()
    logger.info("Signup: user=%s role=%s admin=%s", user.id, user.role.value, admin_id)
    return user


async def login(session: AsyncSession, data: LoginRequest) -> User:
    """Verify credentials and the requested role.

    Unknown email, wrong password and role mismatch all fail the same way.
    """
    user = await get_user_by_email(session, data.email)
    if user is None:
        logger.warning("Login failed: unknown email")
        raise InvalidCredentials()

    if not await run_in_threadpool(verify_password, data.password, user.password_hash):
        logger.warning("Login failed: bad password for user=%s", user.id)
        raise InvalidCredentials()

    if user.role != data.role:
        logger.warning(
            "Login failed: user=%s has role %s, requested %s",
            user.id,
            user.role.value,
            data.role.value,
        )
        raise InvalidCredentials()

    return user


async def get_user(session: AsyncSession, user_id: int) -> User:
    user = await session.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


async def set_password(session: AsyncSession, user: User, new_password: str) -> None:
    """Replace a user's password. Does not commit."""
    check_password_strength(new_password)
    user.password_hash = await run_in_threadpool(hash_password, new_password)


async def list_admins(session: AsyncSession) -> list[User]:
    stmt = select(User).where(User.role == UserRole.ADMIN).order_by(User.id)
    return list((await session.execute(stmt)).scalars().all())

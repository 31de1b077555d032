# This project was developed with assistance from AI tools.
"""Authentication and authorization schemas."""

from typing import Annotated

from pydantic import AfterValidator, ConfigDict, EmailStr, Field
from visadesk_db.enums import UserRole

from . import CamelModel


class DataScope(CamelModel):
    """Caller's position in the ownership tree, resolved by the auth dependency.

    ``admin_id`` is the user id of the owning admin (the caller's own id for
    admins). ``agent_id``/``client_id`` are the caller's own Agent/Client row
    ids; None when the role has no such row or it could not be found.
    """

    admin_id: int | None = None
    agent_id: int | None = None
    client_id: int | None = None


class UserContext(CamelModel):
    """Injected by auth middleware into every authenticated request."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    role: UserRole
    email: str
    name: str
    data_scope: DataScope = Field(default_factory=DataScope)


def _normalize_email(value: str) -> str:
    return value.strip().lower()


# Emails are stored lower-cased; every request that carries one goes through this.
NormalizedEmail = Annotated[EmailStr, AfterValidator(_normalize_email)]

Password = Annotated[str, Field(min_length=1, max_length=72)]


class SignupRequest(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: NormalizedEmail
    password: Password
    role: UserRole
    admin_id: int | None = None


class LoginRequest(CamelModel):
    email: NormalizedEmail
    password: Password
    role: UserRole


class UserResponse(CamelModel):
    """Public view of a user -- never includes the password hash."""

    id: int
    name: str
    email: str
    role: UserRole


class AuthResponse(CamelModel):
    user: UserResponse


class MessageResponse(CamelModel):
    message: str

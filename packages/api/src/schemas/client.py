# This project was developed with assistance from AI tools.
"""Client (student) request/response schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from . import CamelModel, Money
from .agent import AgentResponse
from .auth import NormalizedEmail, UserResponse


class ClientResponse(CamelModel):
    id: int
    user_id: int
    admin_id: int
    agent_id: int | None = None
    passport_number: str | None = None
    date_of_birth: str | None = None
    current_address: str | None = None
    phone: str | None = None
    nationality: str | None = None
    education: str | None = None
    fee_amount: Money | None = None
    created_at: datetime
    updated_at: datetime
    user: UserResponse
    agent: AgentResponse | None = None


class ClientCreatedResponse(ClientResponse):
    temporary_password: str


class ClientListResponse(CamelModel):
    data: list[ClientResponse]
    count: int


class AgentClientCreate(CamelModel):
    """Agent provisions a client; an initial application is opened with it."""

    name: str = Field(min_length=1, max_length=255)
    email: NormalizedEmail
    visa_type: str | None = Field(default=None, max_length=100)
    target_country: str | None = Field(default=None, max_length=100)


class AdminClientCreate(CamelModel):
    """Admin provisions a client directly, optionally assigning an agent."""

    name: str = Field(min_length=1, max_length=255)
    email: NormalizedEmail
    agent_id: int | None = None
    fee_amount: Decimal | None = Field(default=None, ge=0)


class ClientProfileUpdate(CamelModel):
    """Fields a client may change on its own profile."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    passport_number: str | None = Field(default=None, max_length=50)
    date_of_birth: str | None = Field(default=None, max_length=20)
    current_address: str | None = None
    phone: str | None = Field(default=None, max_length=50)
    nationality: str | None = Field(default=None, max_length=100)
    education: str | None = Field(default=None, max_length=255)


class AdminClientUpdate(ClientProfileUpdate):
    """Admin edit; ``agent_id`` null unassigns the client."""

    agent_id: int | None = None
    fee_amount: Decimal | None = Field(default=None, ge=0)


class ChooseAgentRequest(CamelModel):
    agent_id: int


class AssignedAgentResponse(CamelModel):
    agent: AgentResponse | None = None

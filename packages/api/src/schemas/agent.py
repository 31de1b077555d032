# This project was developed with assistance from AI tools.
"""Agent (broker) request/response schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import Field
from visadesk_db.enums import AgentStatus

from . import CamelModel, Money
from .auth import NormalizedEmail, Password, UserResponse

CommissionRate = Annotated[str, Field(max_length=20, pattern=r"^\d+(\.\d+)?%$")]


class AgentResponse(CamelModel):
    id: int
    user_id: int
    admin_id: int
    commission_rate: str
    commission_amount: Money | None = None
    status: AgentStatus
    active_clients: int = 0
    phone: str | None = None
    address: str | None = None
    company_name: str | None = None
    license_number: str | None = None
    created_at: datetime
    updated_at: datetime
    user: UserResponse


class AgentCreatedResponse(AgentResponse):
    """Returned once on provisioning; the temporary password is never stored."""

    temporary_password: str


class AgentListResponse(CamelModel):
    data: list[AgentResponse]
    count: int


class AgentCreate(CamelModel):
    """Admin provisions a new agent under itself."""

    name: str = Field(min_length=1, max_length=255)
    email: NormalizedEmail
    commission_rate: CommissionRate | None = None
    commission_amount: Decimal | None = Field(default=None, ge=0)
    phone: str | None = None
    company_name: str | None = None


class AgentProfileUpdate(CamelModel):
    """Fields an agent may change on its own profile."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = None
    address: str | None = None
    company_name: str | None = None
    license_number: str | None = None


class AdminAgentUpdate(AgentProfileUpdate):
    """Fields an admin may change on one of its agents."""

    commission_rate: CommissionRate | None = None
    commission_amount: Decimal | None = Field(default=None, ge=0)
    status: AgentStatus | None = None


class AgentStatusUpdate(CamelModel):
    status: AgentStatus


class AgentCommissionUpdate(CamelModel):
    commission_rate: CommissionRate
    commission_amount: Decimal | None = Field(default=None, ge=0)


class PasswordUpdate(CamelModel):
    """Admin-set password for an agent or client."""

    new_password: Password

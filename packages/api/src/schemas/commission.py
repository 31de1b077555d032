# This project was developed with assistance from AI tools.
"""Commission request/response schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field
from visadesk_db.enums import CommissionStatus

from . import CamelModel, Money
from .auth import UserResponse


class CommissionParty(CamelModel):
    """Agent or client summary nested in a commission row."""

    id: int
    user: UserResponse


class CommissionResponse(CamelModel):
    id: int
    agent_id: int
    client_id: int
    amount: Money
    status: CommissionStatus
    date: datetime
    agent: CommissionParty | None = None
    client: CommissionParty | None = None


class CommissionTotals(CamelModel):
    """Sums per status, computed over the returned rows."""

    pending: Money = Decimal("0")
    approved: Money = Decimal("0")
    paid: Money = Decimal("0")
    rejected: Money = Decimal("0")


class CommissionListResponse(CamelModel):
    data: list[CommissionResponse]
    count: int
    totals: CommissionTotals


class CommissionCreate(CamelModel):
    agent_id: int
    client_id: int
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)


class CommissionStatusUpdate(CamelModel):
    status: CommissionStatus

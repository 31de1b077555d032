# This project was developed with assistance from AI tools.
"""Activity feed schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field
from visadesk_db.enums import ActivityType, UserRole

from . import CamelModel
from .auth import UserResponse


class ActivityResponse(CamelModel):
    id: int
    actor_id: int
    actor_role: UserRole
    target_type: str
    target_id: int
    activity_type: ActivityType
    description: str
    event_data: dict[str, Any] | None = Field(default=None, serialization_alias="metadata")
    created_at: datetime
    actor: UserResponse | None = None


class ActivityListResponse(CamelModel):
    data: list[ActivityResponse]
    count: int

# This project was developed with assistance from AI tools.
"""Visa application request/response schemas."""

from datetime import datetime

from pydantic import Field
from visadesk_db.enums import ApplicationStatus

from . import CamelModel
from .auth import UserResponse


class ApplicationClient(CamelModel):
    """Client summary nested in agent/admin application listings."""

    id: int
    agent_id: int | None = None
    user: UserResponse


class ApplicationResponse(CamelModel):
    id: int
    client_id: int
    visa_type: str
    target_country: str
    purpose: str | None = None
    status: ApplicationStatus
    progress: int
    last_action: str | None = None
    submitted_at: datetime
    updated_at: datetime
    client: ApplicationClient | None = None


class ApplicationListResponse(CamelModel):
    data: list[ApplicationResponse]
    count: int


class ApplicationCreate(CamelModel):
    """Client files a new application."""

    visa_type: str = Field(min_length=1, max_length=100)
    target_country: str = Field(min_length=1, max_length=100)
    purpose: str = ""


class ApplicationStatusUpdate(CamelModel):
    # Any status may be set from any other; see DESIGN.md.
    status: ApplicationStatus


class ApplicationProgressUpdate(CamelModel):
    progress: int = Field(ge=0, le=100)
    last_action: str | None = Field(default=None, max_length=255)


class AssignAgentRequest(CamelModel):
    agent_id: int

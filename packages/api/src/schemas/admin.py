# This project was developed with assistance from AI tools.
"""Admin directory schemas."""

from . import CamelModel


class AdminPublic(CamelModel):
    """Shown on the signup page so new agents/clients can pick an admin."""

    id: int
    name: str


class AdminResponse(AdminPublic):
    email: str


class AdminListResponse(CamelModel):
    data: list[AdminResponse]
    count: int


class AdminPublicListResponse(CamelModel):
    data: list[AdminPublic]
    count: int


class ClearDataResponse(CamelModel):
    message: str
    deleted: dict[str, int]

# This project was developed with assistance from AI tools.
"""Document request/response schemas.

Documents are links to externally hosted files; only the URL is stored.
"""

from datetime import datetime

from pydantic import Field
from visadesk_db.enums import DocumentStatus, OwnerType

from . import CamelModel
from .auth import UserResponse


class DocumentCreate(CamelModel):
    owner_type: OwnerType
    owner_id: int
    name: str = Field(min_length=1, max_length=255)
    type: str = Field(min_length=1, max_length=100)
    # Scheme and host are checked by the document service.
    path: str = Field(min_length=1, max_length=2048)


class DocumentResponse(CamelModel):
    id: int
    owner_type: OwnerType
    owner_id: int
    uploaded_by_id: int
    name: str
    type: str
    path: str
    status: DocumentStatus
    notes: str | None = None
    uploaded_at: datetime
    updated_at: datetime
    uploaded_by: UserResponse | None = None


class DocumentListResponse(CamelModel):
    data: list[DocumentResponse]
    count: int


class DocumentStatusUpdate(CamelModel):
    status: DocumentStatus
    notes: str | None = None

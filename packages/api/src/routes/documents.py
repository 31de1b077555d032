# This project was developed with assistance from AI tools.
"""Document endpoints shared by all roles.

Documents are external links; ownership rules live in ``services/document.py``.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import get_db
from visadesk_db.enums import UserRole

from ..middleware.auth import CurrentUser, require_roles
from ..schemas.document import (
    DocumentCreate,
    DocumentListResponse,
    DocumentResponse,
    DocumentStatusUpdate,
)
from ..services import document as document_service

router = APIRouter()


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    body: DocumentCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentResponse:
    """Attach a document link to the caller or to an owner the caller manages."""
    document = await document_service.create_document(session, user, body)
    return DocumentResponse.model_validate(document)


@router.get("/my", response_model=DocumentListResponse)
async def list_my_documents(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentListResponse:
    documents = await document_service.list_my_documents(session, user)
    return DocumentListResponse(
        data=[DocumentResponse.model_validate(d) for d in documents],
        count=len(documents),
    )


@router.patch(
    "/{document_id}/status",
    response_model=DocumentResponse,
    dependencies=[Depends(require_roles(UserRole.ADMIN, UserRole.AGENT))],
)
async def review_document(
    document_id: int,
    body: DocumentStatusUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> DocumentResponse:
    document = await document_service.review_document(session, user, document_id, body)
    return DocumentResponse.model_validate(document)

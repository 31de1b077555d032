# This project was developed with assistance from AI tools.
"""Document service.

Documents are links to externally hosted files. The link is checked here,
at write time, so that only absolute http(s) URLs with a host are stored.

Who may attach a document to which owner:

- client: itself only;
- agent: itself, or clients assigned to it;
- admin: itself (owner id = its user id), or agents and clients it owns.

Review (status change) is open to admins for anything in their tree and to
agents for documents of their assigned clients.
"""

import logging
from urllib.parse import urlparse

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from visadesk_db import Agent, Client, Document, next_sequence
from visadesk_db.enums import ActivityType, OwnerType, UserRole

from ..core.errors import AccessDenied, NotFound, ValidationError
from ..schemas.auth import UserContext
from ..schemas.document import DocumentCreate, DocumentStatusUpdate
from .activity import record_activity
from .scope import (
    get_assigned_client,
    get_caller_agent,
    get_caller_client,
    get_owned_agent,
    get_owned_client,
)

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def is_valid_document_url(url: str) -> bool:
    """True for absolute http/https URLs with a host."""
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme.lower() in _ALLOWED_SCHEMES and bool(parsed.netloc)


async def _check_can_attach(
    session: AsyncSession,
    user: UserContext,
    owner_type: OwnerType,
    owner_id: int,
) -> None:
    """Raise AccessDenied/NotFound unless ``user`` may attach to the owner."""
    if user.role == UserRole.CLIENT:
        client = await get_caller_client(session, user)
        if owner_type == OwnerType.CLIENT and owner_id == client.id:
            return
    elif user.role == UserRole.AGENT:
        agent = await get_caller_agent(session, user)
        if owner_type == OwnerType.AGENT and owner_id == agent.id:
            return
        if owner_type == OwnerType.CLIENT:
            await get_assigned_client(session, agent, owner_id)
            return
    elif user.role == UserRole.ADMIN:
        if owner_type == OwnerType.ADMIN and owner_id == user.user_id:
            return
        if owner_type == OwnerType.AGENT:
            await get_owned_agent(session, user, owner_id)
            return
        if owner_type == OwnerType.CLIENT:
            await get_owned_client(session, user, owner_id)
            return

    logger.warning(
        "Document attach denied: user=%s role=%s owner=%s:%s",
        user.user_id,
        user.role.value,
        owner_type.value,
        owner_id,
    )
    raise AccessDenied("You cannot add documents for this owner")


async def create_document(
    session: AsyncSession,
    user: UserContext,
    data: DocumentCreate,
) -> Document:
    if not is_valid_document_url(data.path):
        raise ValidationError(
            "Invalid document URL. Only http:// and https:// URLs are allowed."
        )
    await _check_can_attach(session, user, data.owner_type, data.owner_id)

    document = Document(
        id=await next_sequence(session, "documents"),
        owner_type=data.owner_type,
        owner_id=data.owner_id,
        uploaded_by_id=user.user_id,
        name=data.name,
        type=data.type,
        path=data.path.strip(),
    )
    session.add(document)
    await record_activity(
        session,
        user,
        target_type=data.owner_type.value,
        target_id=data.owner_id,
        activity_type=ActivityType.DOCUMENT_UPLOADED,
        description=f'Document "{data.name}" uploaded',
        event_data={"documentId": document.id},
    )
    await session.commit()
    return await _get_document(session, document.id)


async def _get_document(session: AsyncSession, document_id: int) -> Document:
    document = await session.get(Document, document_id, populate_existing=True)
    if document is None:
        raise NotFound("Document not found")
    return document


async def _list_by_owner(
    session: AsyncSession,
    owner_type: OwnerType,
    owner_id: int,
) -> list[Document]:
    stmt = (
        select(Document)
        .where(Document.owner_type == owner_type, Document.owner_id == owner_id)
        .order_by(Document.uploaded_at.desc(), Document.id.desc())
    )
    return list((await session.execute(stmt)).scalars().all())


async def list_my_documents(session: AsyncSession, user: UserContext) -> list[Document]:
    """Documents attached to the caller itself."""
    if user.role == UserRole.CLIENT:
        client = await get_caller_client(session, user)
        return await _list_by_owner(session, OwnerType.CLIENT, client.id)
    if user.role == UserRole.AGENT:
        agent = await get_caller_agent(session, user)
        return await _list_by_owner(session, OwnerType.AGENT, agent.id)
    return await _list_by_owner(session, OwnerType.ADMIN, user.user_id)


async def list_client_documents(
    session: AsyncSession,
    user: UserContext,
    client_id: int,
) -> list[Document]:
    """Agent view of one assigned client's documents."""
    agent = await get_caller_agent(session, user)
    await get_assigned_client(session, agent, client_id)
    return await _list_by_owner(session, OwnerType.CLIENT, client_id)


async def list_admin_documents(session: AsyncSession, user: UserContext) -> list[Document]:
    """Every document in the calling admin's tree."""
    agent_ids = select(Agent.id).where(Agent.admin_id == user.user_id)
    client_ids = select(Client.id).where(Client.admin_id == user.user_id)
    stmt = (
        select(Document)
        .where(
            or_(
                and_(Document.owner_type == OwnerType.CLIENT, Document.owner_id.in_(client_ids)),
                and_(Document.owner_type == OwnerType.AGENT, Document.owner_id.in_(agent_ids)),
                and_(Document.owner_type == OwnerType.ADMIN, Document.owner_id == user.user_id),
            )
        )
        .order_by(Document.uploaded_at.desc(), Document.id.desc())
    )
    return list((await session.execute(stmt)).scalars().all())


async def list_owner_documents(
    session: AsyncSession,
    user: UserContext,
    owner_type: OwnerType,
    owner_id: int,
) -> list[Document]:
    """Admin view of one owner's documents within its tree."""
    if owner_type == OwnerType.CLIENT:
        await get_owned_client(session, user, owner_id)
    elif owner_type == OwnerType.AGENT:
        await get_owned_agent(session, user, owner_id)
    elif owner_id != user.user_id:
        raise AccessDenied()
    return await _list_by_owner(session, owner_type, owner_id)


async def _check_can_review(session: AsyncSession, user: UserContext, document: Document) -> None:
    if user.role == UserRole.ADMIN:
        if document.owner_type == OwnerType.ADMIN and document.owner_id == user.user_id:
            return
        if document.owner_type == OwnerType.AGENT:
            await get_owned_agent(session, user, document.owner_id)
            return
        if document.owner_type == OwnerType.CLIENT:
            await get_owned_client(session, user, document.owner_id)
            return
    elif user.role == UserRole.AGENT and document.owner_type == OwnerType.CLIENT:
        agent = await get_caller_agent(session, user)
        client = await session.get(Client, document.owner_id)
        if client is not None and client.agent_id == agent.id:
            return
        logger.warning("Review denied: agent=%s document=%s", agent.id, document.id)
        raise AccessDenied("You can only manage documents from your assigned clients")

    logger.warning(
        "Review denied: user=%s role=%s document=%s", user.user_id, user.role.value, document.id
    )
    raise AccessDenied("You cannot review this document")


async def review_document(
    session: AsyncSession,
    user: UserContext,
    document_id: int,
    data: DocumentStatusUpdate,
) -> Document:
    """Set a document's review status and optional notes."""
    document = await _get_document(session, document_id)
    await _check_can_review(session, user, document)

    document.status = data.status
    if data.notes is not None:
        document.notes = data.notes
    await record_activity(
        session,
        user,
        target_type="document",
        target_id=document.id,
        activity_type=ActivityType.DOCUMENT_REVIEWED,
        description=f"Document status updated to {data.status.value}",
        event_data={"status": data.status.value, "notes": data.notes},
    )
    await session.commit()
    return document

# This project was developed with assistance from AI tools.
"""
VisaDesk -- domain models

Three-tier ownership (admin -> agent -> client) plus the visa workflow
records: applications, documents, commissions, and the activity feed.

Primary keys are assigned from the ``counters`` table (see ``sequence.py``),
never from database autoincrement, so ids stay monotonic per table and are
never reused.
"""

from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .database import Base
from .enums import (
    ActivityType,
    AgentStatus,
    ApplicationStatus,
    CommissionStatus,
    DocumentStatus,
    OwnerType,
    UserRole,
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Counter(Base):
    """Per-table id sequence."""

    __tablename__ = "counters"

    name = Column(String(50), primary_key=True)
    seq = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Counter(name='{self.name}', seq={self.seq})>"


class User(Base):
    """Login identity. Role is fixed at creation."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(UserRole, name="user_role", native_enum=False), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"


class Agent(Base):
    """Broker working under one admin."""

    __tablename__ = "agents"

    id = Column(Integer, primary_key=True, autoincrement=False)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True,
    )
    admin_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    commission_rate = Column(String(20), nullable=False, default="10%")
    commission_amount = Column(Numeric(12, 2), nullable=True)
    status = Column(
        Enum(AgentStatus, name="agent_status", native_enum=False),
        nullable=False,
        default=AgentStatus.ACTIVE,
    )
    active_clients = Column(Integer, nullable=False, default=0)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    company_name = Column(String(255), nullable=True)
    license_number = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    user = relationship("User", foreign_keys=[user_id], lazy="selectin")

    def __repr__(self):
        return f"<Agent(id={self.id}, admin_id={self.admin_id}, status='{self.status}')>"


class Client(Base):
    """Visa applicant (student) owned by one admin, optionally assigned to an agent."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, autoincrement=False)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True,
    )
    admin_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    agent_id = Column(
        Integer, ForeignKey("agents.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    passport_number = Column(String(50), nullable=True)
    date_of_birth = Column(String(20), nullable=True)
    current_address = Column(Text, nullable=True)
    phone = Column(String(50), nullable=True)
    nationality = Column(String(100), nullable=True)
    education = Column(String(255), nullable=True)
    fee_amount = Column(Numeric(12, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    user = relationship("User", foreign_keys=[user_id], lazy="selectin")
    agent = relationship("Agent", lazy="selectin")

    def __repr__(self):
        return f"<Client(id={self.id}, admin_id={self.admin_id}, agent_id={self.agent_id})>"


class Application(Base):
    """Visa application filed by a client."""

    __tablename__ = "applications"
    __table_args__ = (
        CheckConstraint("progress >= 0 AND progress <= 100", name="ck_applications_progress"),
    )

    id = Column(Integer, primary_key=True, autoincrement=False)
    client_id = Column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    visa_type = Column(String(100), nullable=False)
    target_country = Column(String(100), nullable=False)
    purpose = Column(Text, nullable=True)
    status = Column(
        Enum(ApplicationStatus, name="application_status", native_enum=False),
        nullable=False,
        default=ApplicationStatus.DOCUMENT_REVIEW,
    )
    progress = Column(Integer, nullable=False, default=0)
    last_action = Column(String(255), nullable=True)
    submitted_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    client = relationship("Client", lazy="selectin")

    def __repr__(self):
        return f"<Application(id={self.id}, status='{self.status}')>"


class Commission(Base):
    """Payout owed to an agent for a client."""

    __tablename__ = "commissions"

    id = Column(Integer, primary_key=True, autoincrement=False)
    agent_id = Column(
        Integer, ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    client_id = Column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    status = Column(
        Enum(CommissionStatus, name="commission_status", native_enum=False),
        nullable=False,
        default=CommissionStatus.PENDING,
    )
    date = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    agent = relationship("Agent", lazy="selectin")
    client = relationship("Client", lazy="selectin")

    def __repr__(self):
        return f"<Commission(id={self.id}, amount={self.amount}, status='{self.status}')>"


class Document(Base):
    """Externally hosted document (URL only) attached to an admin, agent, or client."""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=False)
    owner_type = Column(
        Enum(OwnerType, name="owner_type", native_enum=False), nullable=False, index=True,
    )
    owner_id = Column(Integer, nullable=False, index=True)
    uploaded_by_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    path = Column(String(2048), nullable=False)
    status = Column(
        Enum(DocumentStatus, name="document_status", native_enum=False),
        nullable=False,
        default=DocumentStatus.PENDING,
    )
    notes = Column(Text, nullable=True)
    uploaded_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    uploaded_by = relationship("User", lazy="selectin")

    def __repr__(self):
        return f"<Document(id={self.id}, owner={self.owner_type}:{self.owner_id})>"


class Activity(Base):
    """Append-only activity feed entry. INSERT + SELECT only."""

    __tablename__ = "activities"
    __table_args__ = (Index("ix_activities_target", "target_type", "target_id"),)

    id = Column(Integer, primary_key=True, autoincrement=False)
    actor_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    actor_role = Column(Enum(UserRole, name="actor_role", native_enum=False), nullable=False)
    target_type = Column(String(50), nullable=False)
    target_id = Column(Integer, nullable=False)
    activity_type = Column(
        Enum(ActivityType, name="activity_type", native_enum=False), nullable=False, index=True,
    )
    description = Column(Text, nullable=False)
    event_data = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)

    actor = relationship("User", lazy="selectin")

    def __repr__(self):
        return f"<Activity(id={self.id}, type='{self.activity_type}')>"

# This project was developed with assistance from AI tools.
"""
Domain enums for the visa consultancy workflow.

Shared domain types used by both SQLAlchemy models (db package)
and Pydantic schemas (api package).
"""

import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    AGENT = "agent"
    CLIENT = "client"


class AgentStatus(str, enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ApplicationStatus(str, enum.Enum):
    DOCUMENT_REVIEW = "Document Review"
    SUBMITTED = "Submitted"
    INTERVIEW = "Interview"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    @classmethod
    def terminal_statuses(cls) -> frozenset["ApplicationStatus"]:
        """Statuses where a visa decision has been made."""
        return frozenset({cls.APPROVED, cls.REJECTED})


class DocumentStatus(str, enum.Enum):
    PENDING = "Pending"
    UNDER_REVIEW = "Under Review"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class CommissionStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    PAID = "Paid"
    REJECTED = "Rejected"

    @classmethod
    def valid_transitions(cls) -> dict["CommissionStatus", frozenset["CommissionStatus"]]:
        """Allowed payout transitions."""
        return {
            cls.PENDING: frozenset({cls.APPROVED, cls.REJECTED}),
            cls.APPROVED: frozenset({cls.PAID}),
            cls.PAID: frozenset(),
            cls.REJECTED: frozenset(),
        }


class OwnerType(str, enum.Enum):
    ADMIN = "admin"
    AGENT = "agent"
    CLIENT = "client"


class ActivityType(str, enum.Enum):
    APPLICATION_SUBMITTED = "application_submitted"
    APPLICATION_UPDATED = "application_updated"
    AGENT_ASSIGNED = "agent_assigned"
    DOCUMENT_UPLOADED = "document_uploaded"
    DOCUMENT_REVIEWED = "document_reviewed"
    COMMISSION_CREATED = "commission_created"
    PROFILE_UPDATED = "profile_updated"
    STATUS_CHANGED = "status_changed"

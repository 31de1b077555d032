# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, DatabaseService, get_db, get_db_service
from .enums import (
    ActivityType,
    AgentStatus,
    ApplicationStatus,
    CommissionStatus,
    DocumentStatus,
    OwnerType,
    UserRole,
)
from .models import (
    Activity,
    Agent,
    Application,
    Client,
    Commission,
    Counter,
    Document,
    User,
)
from .sequence import SEQUENCE_NAMES, next_sequence

__all__ = [
    "Base",
    "DatabaseService",
    "get_db",
    "get_db_service",
    "next_sequence",
    "SEQUENCE_NAMES",
    "__version__",
    # Enums
    "ActivityType",
    "AgentStatus",
    "ApplicationStatus",
    "CommissionStatus",
    "DocumentStatus",
    "OwnerType",
    "UserRole",
    # Models
    "Activity",
    "Agent",
    "Application",
    "Client",
    "Commission",
    "Counter",
    "Document",
    "User",
]

# This project was developed with assistance from AI tools.
"""Pure auth utility functions with no FastAPI or HTTP dependencies.

Password hashing, temporary-password minting, and DataScope construction.
Keeping them separate from ``middleware/auth.py`` lets services call them
without pulling in request handling.
"""

import base64
import secrets

import bcrypt
from visadesk_db.enums import UserRole

from ..schemas.auth import DataScope
from .config import settings
from .errors import ValidationError

# bcrypt only considers the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def check_password_strength(password: str) -> None:
    """Raise ValidationError if ``password`` is unusable as a credential."""
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of ``password`` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
    except ValueError:
        # Malformed stored hash or over-long password: never a match.
        return False


def generate_temporary_password() -> str:
    """Random password handed once to the provisioning admin/agent."""
    return base64.b64encode(secrets.token_bytes(settings.TEMP_PASSWORD_BYTES)).decode("ascii")


def build_data_scope(
    role: UserRole,
    user_id: int,
    *,
    admin_id: int | None = None,
    agent_id: int | None = None,
    client_id: int | None = None,
) -> DataScope:
    """Build the caller's position in the admin -> agent -> client tree.

    Admins own their own tree, so their ``admin_id`` is their user id.
    Agents and clients carry the owning admin plus their own row id.
    """
    if role == UserRole.ADMIN:
        return DataScope(admin_id=user_id)
    if role == UserRole.AGENT:
        return DataScope(admin_id=admin_id, agent_id=agent_id)
    if role == UserRole.CLIENT:
        return DataScope(admin_id=admin_id, agent_id=agent_id, client_id=client_id)
    return DataScope()

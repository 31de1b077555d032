# This project was developed with assistance from AI tools.
"""
SQLAdmin configuration for the back-office database UI

Access the admin panel at: http://localhost:8000/admin

Login uses SQLADMIN_USER / SQLADMIN_PASSWORD. This is a separate gate from
the API's own session cookie; the two never share a session.
"""

import secrets

from sqladmin import Admin, ModelView
from sqladmin.authentication import AuthenticationBackend
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from starlette.requests import Request
from starlette.responses import Response
from visadesk_db import (
    Activity,
    Agent,
    Application,
    Client,
    Commission,
    Counter,
    Document,
    User,
)

from .core.config import settings


def sync_database_url(url: str) -> str:
    """SQLAdmin needs a sync engine; drop the async driver from ``url``.

    ``postgresql+asyncpg://...`` -> ``postgresql://...`` (psycopg2),
    ``sqlite+aiosqlite://...`` -> ``sqlite://...``.
    """
    parsed = make_url(url)
    return parsed.set(drivername=parsed.get_backend_name()).render_as_string(hide_password=False)


engine = create_engine(sync_database_url(settings.DATABASE_URL), echo=False)


class AdminAuth(AuthenticationBackend):
    """Session-based auth gate for SQLAdmin."""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = str(form.get("username") or "")
        password = str(form.get("password") or "")
        if secrets.compare_digest(username, settings.SQLADMIN_USER) and secrets.compare_digest(
            password, settings.SQLADMIN_PASSWORD
        ):
            request.session.update({"admin_authenticated": True})
            return True
        return False

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> Response | bool:
        return request.session.get("admin_authenticated", False)


class UserAdmin(ModelView, model=User):
    column_list = [User.id, User.name, User.email, User.role, User.created_at]
    column_searchable_list = [User.name, User.email]
    column_sortable_list = [User.id, User.role, User.created_at]
    column_default_sort = [(User.created_at, True)]
    # Hashes are never shown or edited here.
    column_details_exclude_list = [User.password_hash]
    form_excluded_columns = [User.password_hash]
    can_create = False
    name = "User"
    name_plural = "Users"
    icon = "fa-solid fa-user"


class AgentAdmin(ModelView, model=Agent):
    column_list = [
        Agent.id,
        Agent.user_id,
        Agent.admin_id,
        Agent.status,
        Agent.commission_rate,
        Agent.commission_amount,
        Agent.active_clients,
        Agent.company_name,
    ]
    column_sortable_list = [Agent.id, Agent.admin_id, Agent.status]
    can_create = False
    name = "Agent"
    name_plural = "Agents"
    icon = "fa-solid fa-user-tie"


class ClientAdmin(ModelView, model=Client):
    column_list = [
        Client.id,
        Client.user_id,
        Client.admin_id,
        Client.agent_id,
        Client.nationality,
        Client.fee_amount,
        Client.created_at,
    ]
    column_searchable_list = [Client.passport_number, Client.nationality]
    column_sortable_list = [Client.id, Client.admin_id, Client.agent_id]
    can_create = False
    name = "Client"
    name_plural = "Clients"
    icon = "fa-solid fa-user-graduate"


class ApplicationAdmin(ModelView, model=Application):
    column_list = [
        Application.id,
        Application.client_id,
        Application.visa_type,
        Application.target_country,
        Application.status,
        Application.progress,
        Application.submitted_at,
    ]
    column_searchable_list = [Application.visa_type, Application.target_country]
    column_sortable_list = [Application.id, Application.status, Application.submitted_at]
    column_default_sort = [(Application.submitted_at, True)]
    can_create = False
    name = "Application"
    name_plural = "Applications"
    icon = "fa-solid fa-passport"


class CommissionAdmin(ModelView, model=Commission):
    column_list = [
        Commission.id,
        Commission.agent_id,
        Commission.client_id,
        Commission.amount,
        Commission.status,
        Commission.date,
    ]
    column_sortable_list = [Commission.id, Commission.status, Commission.date]
    column_default_sort = [(Commission.date, True)]
    can_create = False
    name = "Commission"
    name_plural = "Commissions"
    icon = "fa-solid fa-dollar-sign"


class DocumentAdmin(ModelView, model=Document):
    column_list = [
        Document.id,
        Document.owner_type,
        Document.owner_id,
        Document.name,
        Document.type,
        Document.status,
        Document.uploaded_at,
    ]
    column_sortable_list = [Document.id, Document.status, Document.uploaded_at]
    column_default_sort = [(Document.uploaded_at, True)]
    can_create = False
    name = "Document"
    name_plural = "Documents"
    icon = "fa-solid fa-file-alt"


class ActivityAdmin(ModelView, model=Activity):
    column_list = [
        Activity.id,
        Activity.created_at,
        Activity.actor_id,
        Activity.actor_role,
        Activity.activity_type,
        Activity.target_type,
        Activity.target_id,
    ]
    column_sortable_list = [Activity.id, Activity.created_at, Activity.activity_type]
    column_default_sort = [(Activity.created_at, True)]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Activity"
    name_plural = "Activities"
    icon = "fa-solid fa-stream"


class CounterAdmin(ModelView, model=Counter):
    column_list = [Counter.name, Counter.seq]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Sequence"
    name_plural = "Sequences"
    icon = "fa-solid fa-list-ol"


def setup_admin(app):
    """Set up SQLAdmin and mount it to the FastAPI app."""
    auth_backend = AdminAuth(
        secret_key=settings.SQLADMIN_SECRET_KEY,
    )
    admin = Admin(app, engine, title="VisaDesk Admin", authentication_backend=auth_backend)

    admin.add_view(UserAdmin)
    admin.add_view(AgentAdmin)
    admin.add_view(ClientAdmin)
    admin.add_view(ApplicationAdmin)
    admin.add_view(CommissionAdmin)
    admin.add_view(DocumentAdmin)
    admin.add_view(ActivityAdmin)
    admin.add_view(CounterAdmin)

    return admin

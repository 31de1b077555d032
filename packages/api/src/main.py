# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from visadesk_db import DatabaseService

from .admin import setup_admin
from .core.config import settings
from .core.errors import ServiceError
from .routes import admin, agent, auth, client, documents, health, public
from .schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    db_service = DatabaseService(settings.DATABASE_URL)
    await db_service.connect()
    if settings.CREATE_TABLES_ON_STARTUP:
        await db_service.create_all()
        logger.info("Database tables ensured (CREATE_TABLES_ON_STARTUP)")
    app.state.db_service = db_service
    yield
    await db_service.close()


app = FastAPI(
    title="VisaDesk API",
    description="Visa consultancy management: admins, agents and clients",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Signed cookie holding {user_id, role}; the only credential the API accepts.
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    session_cookie=settings.SESSION_COOKIE,
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
    https_only=settings.SESSION_HTTPS_ONLY,
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Translate domain errors raised by services into the error envelope."""
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or missing input is a 400 with a readable message."""
    return _error(status.HTTP_400_BAD_REQUEST, _format_validation_errors(exc.errors()))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred.")


def _format_validation_errors(errors) -> str:
    parts = []
    for err in errors:
        # Drop the leading "body"/"query"/"path" segment.
        loc = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


# Include routers
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
app.include_router(agent.router, prefix="/api/agent", tags=["agent"])
app.include_router(client.router, prefix="/api/client", tags=["client"])
app.include_router(documents.router, prefix="/api/documents", tags=["documents"])
app.include_router(public.router, prefix="/api", tags=["shared"])

# Setup SQLAdmin dashboard at /admin
setup_admin(app)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": "Welcome to the VisaDesk API"}

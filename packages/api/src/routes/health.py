# This project was developed with assistance from AI tools.
"""Liveness and database health check."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from visadesk_db import DatabaseService, get_db_service

router = APIRouter()


@router.get("/")
async def health(db_service: DatabaseService = Depends(get_db_service)):
    """Report service and database status; 503 when the database is unreachable."""
    database_ok = await db_service.health_check()
    body = {"status": "ok" if database_ok else "degraded", "database": database_ok}
    return JSONResponse(status_code=200 if database_ok else 503, content=body)

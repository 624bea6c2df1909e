"""Health endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.config import Config
from app.core.dependencies import get_settings
from app.database.db import verify_database_connection

router = APIRouter(tags=["health"])


@router.get("/health")
def health(cfg: Config = Depends(get_settings)) -> dict:
    return {"status": "ok", "service": cfg.APP_NAME, "version": cfg.APP_VERSION}


@router.get("/health/db")
def database_health() -> dict:
    connected = verify_database_connection()
    return {"status": "ok" if connected else "degraded", "database": connected}

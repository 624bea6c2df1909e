"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import get_config
from app.core.logging_config import configure_logging
from app.database.db import get_active_database_url, get_engine, verify_database_connection
from app.models import Base

logger = logging.getLogger(__name__)


def missing_tables() -> set[str]:
    """Mapped tables that the active database does not have yet."""
    try:
        existing = set(inspect(get_engine()).get_table_names())
    except SQLAlchemyError:
        logger.exception("startup.schema.inspect_failed", extra={"event": "startup.schema.inspect_failed"})
        return set(Base.metadata.tables)
    return set(Base.metadata.tables) - existing


def validate_startup_config() -> None:
    """Fail fast on an unreachable required database; warn on risky settings."""
    config = get_config()
    database_ok = verify_database_connection()
    active_database_url = get_active_database_url()
    if not database_ok and config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError("Database connectivity check failed.")
    if not database_ok:
        logger.warning(
            "startup.database.connectivity_optional_failed",
            extra={"event": "startup.database.connectivity_optional_failed"},
        )
    else:
        missing = missing_tables()
        if missing:
            logger.warning(
                "startup.database.schema_incomplete",
                extra={"event": "startup.database.schema_incomplete", "missing_tables": sorted(missing)},
            )

    if config.is_production and active_database_url.startswith("sqlite"):
        logger.warning(
            "startup.production.sqlite_detected",
            extra={"event": "startup.production.sqlite_detected"},
        )

    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "database_url_scheme": active_database_url.split("://", 1)[0],
            "db_connectivity_required": config.DB_CONNECTIVITY_REQUIRED,
            "business_name": config.BUSINESS_NAME,
        },
    )


def bootstrap() -> None:
    """Initialize logging and validate runtime configuration."""
    configure_logging()
    validate_startup_config()

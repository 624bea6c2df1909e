"""Session handling shared by the contract services."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.database import db as db_module

logger = logging.getLogger(__name__)


class BaseService:
    """Base class for services that operate on a SQLAlchemy session.

    A service built without a session opens its own and closes it on exit;
    a caller-supplied session (a request or a test) is left open.
    """

    def __init__(self, db: Session | None = None) -> None:
        self._owns_session = db is None
        self.db = db if db is not None else db_module.SessionLocal()

    def commit(self) -> None:
        """Commit the unit of work; roll back and re-raise on failure."""
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception(
                "service.commit.failed",
                extra={"event": "service.commit.failed", "service": type(self).__name__},
            )
            raise

    def rollback(self) -> None:
        self.db.rollback()

    def close(self) -> None:
        if self._owns_session:
            self.db.close()

    def __enter__(self) -> "BaseService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type:
            self.rollback()
        self.close()

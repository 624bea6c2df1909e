"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import Config, get_config
from app.database.db import get_db
from app.services.contract_builder_service import ContractBuilderService
from app.services.contract_part_service import ContractPartService
from app.services.contract_service import ContractService
from app.services.payment_schedule_service import PaymentScheduleService
from app.services.related_data_service import RelatedDataService


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


def get_contract_service(db: Session = Depends(get_db_session)) -> ContractService:
    return ContractService(db=db)


def get_contract_part_service(db: Session = Depends(get_db_session)) -> ContractPartService:
    return ContractPartService(db=db)


def get_builder_service(db: Session = Depends(get_db_session)) -> ContractBuilderService:
    return ContractBuilderService(db=db)


def get_related_data_service(db: Session = Depends(get_db_session)) -> RelatedDataService:
    return RelatedDataService(db=db)


def get_payment_schedule_service(db: Session = Depends(get_db_session)) -> PaymentScheduleService:
    return PaymentScheduleService(db=db)

"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from app.api.v1 import compilation, contract_parts, contracts, health
from app.core.config import get_config

api_router = APIRouter(prefix=get_config().API_PREFIX)
api_router.include_router(health.router)
api_router.include_router(contract_parts.router)
api_router.include_router(contracts.router)
api_router.include_router(compilation.router)


def get_api_router() -> APIRouter:
    return api_router

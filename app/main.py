"""Application entrypoint for the FastAPI service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api.v1.router import get_api_router
from app.core.config import get_config
from app.core.exceptions import NotFoundError, ValidationError
from app.core.startup import bootstrap
from app.schemas.common import ErrorEnvelope

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error_code: str, exc: Exception) -> JSONResponse:
    body = ErrorEnvelope(error_code=error_code, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app() -> FastAPI:
    cfg = get_config()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION, debug=cfg.DEBUG)
    app.include_router(get_api_router())

    @app.exception_handler(NotFoundError)
    def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        logger.warning("api.not_found", extra={"event": "api.not_found", "path": request.url.path})
        return _error_response(status.HTTP_404_NOT_FOUND, "not_found", exc)

    @app.exception_handler(ValidationError)
    def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning("api.validation_failed", extra={"event": "api.validation_failed", "path": request.url.path})
        return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, "validation_error", exc)

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# Expose ASGI app for `uvicorn app.main:app`.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    bootstrap()
    cfg = get_config()
    uvicorn.run("app.main:app", host=cfg.API_HOST, port=cfg.API_PORT)

"""
Exception handlers — every failure leaves as ``{"message": ...}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from auth.errors import ApiError, InternalError, ValidationError

logger = logging.getLogger(__name__)


def _render(error: ApiError) -> JSONResponse:
    return JSONResponse(status_code=int(error.status_code), content=error.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    """Map the error taxonomy and unexpected exceptions onto JSON responses."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return _render(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
        return _render(ValidationError())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _render(InternalError())

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from petadoption.application.errors import AppError, InfrastructureError, ValidationError

logger = logging.getLogger(__name__)


def _error_payload(code: str, message: str, details=None) -> dict:
    payload = {"success": False, "code": code, "message": message}
    if details is not None:
        payload["details"] = jsonable_encoder(details)
    return payload


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:  # noqa: WPS430
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "Application error handled: %s - %s (status: %d)",
            exc.code,
            exc.message,
            exc.status_code,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_payload(exc.code, exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(  # noqa: WPS430
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        messages = [str(err.get("msg", "")) for err in errors]
        logger.info(
            "Request validation failed on %s %s: %s",
            request.method,
            request.url.path,
            "; ".join(messages),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_payload(
                ValidationError.code,
                ", ".join(messages) or "Invalid request",
                {"errors": errors},
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # noqa: WPS430
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_payload("http_error", str(exc.detail)),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:  # noqa: WPS430
        logger.exception(
            "Unexpected error on %s %s", request.method, request.url.path, exc_info=exc
        )
        error = InfrastructureError("Server Error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_payload(error.code, error.message),
        )

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from chakravya.shared.errors import AppError, InternalError, ValidationError

logger = logging.getLogger(__name__)


def error_body(err: AppError, errors: Optional[list] = None) -> dict:
    body: dict[str, Any] = {"message": err.message, "code": err.code}
    if errors is not None:
        body["errors"] = errors
    elif err.details is not None:
        body["details"] = err.details
    return body


def field_errors(exc: RequestValidationError) -> list[dict]:
    # keep only plain fields; pydantic's ctx may hold exception objects
    return [
        {"loc": [str(p) for p in e.get("loc", ())], "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError):
        err = ValidationError()
        return JSONResponse(status_code=err.status_code, content=error_body(err, field_errors(exc)))

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        err = InternalError()
        return JSONResponse(status_code=err.status_code, content=error_body(err))

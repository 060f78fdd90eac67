"""
Error taxonomy and FastAPI exception handlers

- RequestValidationError -> 422 with a field-level error list
- NotFoundError -> 404
- anything else -> 500, logged, details never returned
"""
from typing import Any, Dict, Iterable, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError as PydanticValidationError


class SpeedballError(Exception):
    """Base class for domain errors"""


class NotFoundError(SpeedballError):
    """A referenced row does not exist"""

    def __init__(self, entity: str, entity_id: Any = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")

    @property
    def message(self) -> str:
        return f"{self.entity} not found"


class InternalError(SpeedballError):
    """Storage or unexpected failure"""


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """pydantic error dicts -> [{field, message, type}]"""
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        formatted.append({
            "field": ".".join(loc) or "__root__",
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        })
    return formatted


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "message": "Validation failed",
            "errors": format_validation_errors(exc.errors()),
        },
    )


async def model_validation_error_handler(request: Request, exc: PydanticValidationError) -> JSONResponse:
    """Query models built inside endpoints (cross-field rules)"""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "message": "Validation failed",
            "errors": format_validation_errors(exc.errors()),
        },
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": exc.message},
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(PydanticValidationError, model_validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(Exception, internal_error_handler)

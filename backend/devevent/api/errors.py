"""
Exception handlers translating the error taxonomy into HTTP responses.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from devevent.core.errors import (
    DuplicateSlugError,
    NotFoundError,
    ReferentialIntegrityError,
    StoreError,
    ValidationError,
)
from devevent.core.logging import get_logger

logger = get_logger(__name__)

UNPROCESSABLE_ENTITY = 422


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=UNPROCESSABLE_ENTITY,
        content={
            "message": "Validation failed",
            "errors": [v.as_dict() for v in exc.violations],
        },
    )


async def duplicate_slug_handler(request: Request, exc: DuplicateSlugError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"message": str(exc), "slug": exc.slug},
    )


async def referential_integrity_handler(request: Request, exc: ReferentialIntegrityError) -> JSONResponse:
    return JSONResponse(
        status_code=UNPROCESSABLE_ENTITY,
        content={"message": str(exc)},
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": "Not found", "error": str(exc)},
    )


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("store_unavailable", error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"message": "Storage unavailable", "error": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(DuplicateSlugError, duplicate_slug_handler)
    app.add_exception_handler(ReferentialIntegrityError, referential_integrity_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StoreError, store_error_handler)

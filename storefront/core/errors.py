# storefront/core/errors.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.schemas.common import ErrorEnvelope

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int,
    message: str,
    headers=None,
    errors: list[str] | None = None,
) -> JSONResponse:
    body = ErrorEnvelope(message=message, errors=errors).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _describe_validation_errors(exc: RequestValidationError) -> tuple[str, list[str]]:
    """
    Flatten pydantic errors into one readable line, e.g.
    "body.quantity: Input should be greater than or equal to 1",
    plus the list of offending field locations.
    """
    parts = []
    fields: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
        if loc:
            fields.append(loc)
    return "; ".join(parts) or "Invalid request", fields


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _error_response(exc.status_code, detail, getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Malformed input is a 400 like every other validation failure
    message, fields = _describe_validation_errors(exc)
    return _error_response(status.HTTP_400_BAD_REQUEST, message, errors=fields or None)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Unexpected server error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Render every error as {success: false, message, errors?}.

      - HTTPException          -> its own status
      - RequestValidationError -> 400
      - anything else          -> 500 (traceback logged, not returned)
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

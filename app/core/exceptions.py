"""Exception handlers rendering errors in the API's response envelope."""
import logging

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.services.eligibility import EligibilityInputError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, details=None, headers=None) -> JSONResponse:
    error = {"message": message}
    if details is not None:
        error["details"] = details
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error},
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation failed",
        details=jsonable_encoder(exc.errors()),
    )


async def eligibility_input_exception_handler(request: Request, exc: EligibilityInputError):
    logger.warning(f"Rejected eligibility input on {request.url.path}: {exc}")
    return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))


async def general_exception_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", "N/A")
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
        extra={"request_id": request_id},
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

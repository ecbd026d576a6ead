import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from grooming_booking.core.request_context import request_id_ctx_var

logger = logging.getLogger(__name__)

VALIDATION_ERROR_MESSAGE = "Required booking fields are missing or invalid"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def _error_payload(code: str, message: str) -> dict[str, str]:
    return {
        "error": message,
        "code": code,
        "request_id": request_id_ctx_var.get(),
    }


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_payload(code=f"http_{exc.status_code}", message=str(exc.detail)),
        headers=exc.headers,
    )


async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_validation_failed errors=%s", len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_payload(code="validation_error", message=VALIDATION_ERROR_MESSAGE),
    )


async def unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_payload(code="internal_error", message=INTERNAL_ERROR_MESSAGE),
    )

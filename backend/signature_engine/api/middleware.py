from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from signature_engine.schemas.error import ErrorResponse
from signature_engine.utils.exceptions import SigningApiError
import logging
import uuid

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _error_response(status_code: int, message: str, code: str, field: str = None,
                    details: dict = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=message,
            code=code,
            field=field,
            details=details,
            request_id=str(uuid.uuid4())
        ).model_dump(exclude_none=True)
    )


async def signing_api_error_handler(request: Request, e: SigningApiError) -> JSONResponse:
    """Client errors carry their detail; internal faults are logged and masked."""
    if e.expose:
        logger.warning(f"Signing API Error: {e.code} - {e.message}")
        return _error_response(e.status_code, e.message, e.code, e.field, e.details)

    logger.error(f"Signing API Error: {e.code} - {e.message} {e.details}")
    return _error_response(e.status_code, INTERNAL_ERROR_MESSAGE, "INTERNAL_SERVER_ERROR")


async def request_validation_error_handler(request: Request, e: RequestValidationError) -> JSONResponse:
    errors = e.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ())]
    field = ".".join(loc[1:]) if len(loc) > 1 else None
    message = first.get("msg", "Invalid request")
    if field:
        message = f"{field}: {message}"
    logger.warning(f"Request validation failed: {message}")
    return _error_response(400, message, "VALIDATION_ERROR", field, {"error_count": len(errors)})


async def http_exception_handler(request: Request, e: StarletteHTTPException) -> JSONResponse:
    logger.warning(f"HTTP Exception: {e.status_code} - {e.detail}")
    return _error_response(e.status_code, str(e.detail), "HTTP_EXCEPTION")


async def error_handler_middleware(request: Request, call_next):
    """Catch-all for unexpected errors that no handler claimed."""
    try:
        return await call_next(request)
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return _error_response(
            500,
            INTERNAL_ERROR_MESSAGE,
            "INTERNAL_SERVER_ERROR",
            details={"error_type": type(e).__name__}
        )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SigningApiError, signing_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.middleware("http")(error_handler_middleware)

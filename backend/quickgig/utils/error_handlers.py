"""
Centralized error handling and user-facing error messages.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, status_code: int = 500, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class DuplicateEmailError(AppError):
    def __init__(self, message: str | None = None, details: dict | None = None):
        super().__init__(message or get_error_message("email_exists"), status_code=400, details=details)


class InvalidCredentialsError(AppError):
    def __init__(self, message: str | None = None, details: dict | None = None):
        super().__init__(message or get_error_message("invalid_credentials"), status_code=401, details=details)


class DuplicateApplicationError(AppError):
    def __init__(self, message: str | None = None, details: dict | None = None):
        super().__init__(message or get_error_message("already_applied"), status_code=400, details=details)


class ConstraintViolationError(AppError):
    """Any integrity failure that isn't one of the known uniqueness rules."""
    def __init__(self, message: str | None = None, details: dict | None = None):
        super().__init__(message or get_error_message("constraint_violation"), status_code=400, details=details)


class NotFoundError(AppError):
    """Resource not found error."""
    def __init__(self, message: str | None = None, details: dict | None = None):
        super().__init__(message or get_error_message("not_found"), status_code=404, details=details)


ERROR_MESSAGES = {
    # Authentication
    "invalid_credentials": "Invalid credentials",
    "email_exists": "Email already exists",

    # Applications
    "already_applied": "Already applied",

    # General
    "constraint_violation": "Invalid reference or duplicate record. Please check your input.",
    "not_found": "The requested resource was not found.",
    "server_error": "Something went wrong on our end. Please try again later.",
    "database_error": "Database connection issue. Please try again later.",
    "validation_error": "Please check your input and try again.",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-friendly error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


def _is_unique_violation(error_str: str) -> bool:
    return "unique" in error_str or "duplicate" in error_str


def is_duplicate_email(error: IntegrityError) -> bool:
    error_str = str(getattr(error, "orig", None) or error).lower()
    return _is_unique_violation(error_str) and "email" in error_str


def is_duplicate_application(error: IntegrityError) -> bool:
    error_str = str(getattr(error, "orig", None) or error).lower()
    if not _is_unique_violation(error_str):
        return False
    # SQLite names the columns, PostgreSQL/MySQL name the constraint.
    return "uq_applications_job_worker" in error_str or (
        "applications.job_id" in error_str and "applications.worker_id" in error_str
    )


def handle_database_error(error: Exception, operation: str = "") -> AppError:
    """Translate a store error raised during `operation` into an AppError."""
    logger.error(f"Database error during {operation}: {error}")

    if isinstance(error, IntegrityError):
        return ConstraintViolationError()

    if isinstance(error, OperationalError):
        return AppError(get_error_message("database_error"), status_code=503)

    return AppError(get_error_message("server_error"), status_code=500)


def create_error_response(
    status_code: int,
    message: str,
    details: dict | None = None
) -> JSONResponse:
    """Create a standardized error response."""
    content = {
        "success": False,
        "error": message,
    }

    if details:
        content["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=content
    )


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return get_error_message("validation_error")
    first = errors[0]
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg") or get_error_message("validation_error")
    return f"{field}: {msg}" if field else msg


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers used by every router."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("AppError on %s %s: %s", request.method, request.url.path, exc.message)
        return create_error_response(exc.status_code, exc.message, exc.details or None)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTPException with the same body shape as AppError."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": exc.detail,
                "status_code": exc.status_code,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Request validation failed on %s: %s", request.url.path, exc.errors())
        return create_error_response(400, _first_validation_message(exc))

    @app.exception_handler(OperationalError)
    async def sqlalchemy_operational_error_handler(request: Request, exc: OperationalError):
        """Handle database operational errors."""
        logger.exception("Database OperationalError: %s", exc)
        return create_error_response(503, get_error_message("database_error"))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
        """Handle general database errors."""
        logger.exception("Database SQLAlchemyError: %s", exc)
        return create_error_response(500, get_error_message("database_error"))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors globally."""
        logger.exception("Unhandled exception: %s", exc)
        return create_error_response(500, get_error_message("server_error"))

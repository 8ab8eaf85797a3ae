"""Domain exceptions and the app-wide exception handlers."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class WealthWiseError(Exception):
    """Base class for errors raised by the service layer."""


class StorageError(WealthWiseError):
    """The database failed for a reason other than a duplicate key."""


class DuplicateKeyError(StorageError):
    """A user with the same email is already stored."""

    def __init__(self, email: str):
        super().__init__(f"User with email {email!r} already exists")
        self.email = email


class ChatUnavailableError(WealthWiseError):
    """The chatbot has no API key configured."""


def register_exception_handlers(app: FastAPI) -> None:
    """Install the validation and last-resort handlers on ``app``."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected malformed body for %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        settings = request.app.state.settings
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": "Something went wrong!",
                "error": str(exc) if settings.is_development else "Internal server error",
            },
        )

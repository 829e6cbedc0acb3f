import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from echobot.responses import EscapedJSONResponse

logger = logging.getLogger("echobot.errors")

INVALID_MESSAGE = "Message parameter is required and must be a non-empty string."
INTERNAL_ERROR = "An unexpected error occurred while processing your request."


class EchoBotError(Exception):
    """Base error; `message` is what the client gets to see."""
    status_code = 500
    message = INTERNAL_ERROR

    def __init__(self):
        super().__init__(self.message)


class InvalidMessageError(EchoBotError):
    """Raised when the `message` field is missing, not a string, or blank."""
    status_code = 400
    message = INVALID_MESSAGE


class InternalServerError(EchoBotError):
    """Raised for any fault while producing a reply"""
    status_code = 500
    message = INTERNAL_ERROR


def error_response(error: EchoBotError) -> EscapedJSONResponse:
    return EscapedJSONResponse(status_code=error.status_code, content={"error": error.message})


async def echobot_error_handler(request: Request, exc: EchoBotError) -> EscapedJSONResponse:
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> EscapedJSONResponse:
    logger.warning(f"Validation Error: Message parameter is missing or invalid. errors={exc.errors()!r}")
    return error_response(InvalidMessageError())


async def unhandled_error_handler(request: Request, exc: Exception) -> EscapedJSONResponse:
    logger.exception("Internal Server Error during chat processing", exc_info=exc)
    return error_response(InternalServerError())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EchoBotError, echobot_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

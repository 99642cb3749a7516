import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class TaskHubException(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BadRequestError(TaskHubException):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(TaskHubException):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(TaskHubException):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(TaskHubException):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(TaskHubException):
    status_code = status.HTTP_409_CONFLICT


async def taskhub_exception_handler(request: Request, exc: TaskHubException) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Request conflicts with existing data"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskHubException, taskhub_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)

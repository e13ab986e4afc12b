"""
Problem responses (RFC 7807) for security service errors.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import logging

from warden.exceptions import SecurityServiceError

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


class ProblemDetails(BaseModel):
    """Standard problem document"""

    type: str
    title: str
    status: int
    detail: str | None = None


def problem_response(error: SecurityServiceError) -> JSONResponse:
    """Render *error* as an ``application/problem+json`` response"""
    problem = ProblemDetails(
        type=error.problem_type,
        title=error.title,
        status=error.status_code,
        detail=error.message,
    )
    return JSONResponse(
        status_code=error.status_code,
        content=problem.model_dump(),
        media_type=PROBLEM_MEDIA_TYPE,
    )


async def security_service_error_handler(
    request: Request, exc: SecurityServiceError
) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return problem_response(exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SecurityServiceError, security_service_error_handler)

"""Exception taxonomy and HTTP exception handling utilities."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("concierge.errors")


class ConciergeError(Exception):
    """Base class for failures that end the current turn with a message."""


class DecisionUnavailable(ConciergeError):
    """The planner could not be reached or returned an unusable decision."""


class MalformedParameters(ConciergeError):
    """A tool parameter payload could not be decoded."""

    def __init__(self, raw: str, detail: str | None = None) -> None:
        self.raw = raw
        self.detail = detail
        message = f"Invalid parameters format: {raw}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UnknownOperation(ConciergeError):
    """The planner chose an operation that is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class OperationFailure(ConciergeError):
    """A known operation rejected its input (unknown product, empty cart, ...)."""


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    """Return a generic JSON error response while logging the exception."""

    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "Something unexpected happened. Please try again later.",
        },
    )

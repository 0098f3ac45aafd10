"""Pydantic schemas for the system lookup and health endpoints."""

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and ``Z`` suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class HealthResponse(BaseModel):
    """Liveness probe body."""

    status: Literal["OK"] = "OK"
    timestamp: str = Field(default_factory=utc_timestamp)


class SystemLookupResponse(BaseModel):
    """Successful system lookup.

    ``data`` is the full ``system`` row, passed through without
    interpretation; its keys are whatever columns the table defines.
    """

    success: Literal[True] = True
    data: dict[str, Any]
    timestamp: str = Field(default_factory=utc_timestamp)


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str
    message: str

"""Pydantic schemas package."""
from simples_api.schemas.system import (
    ErrorResponse,
    HealthResponse,
    SystemLookupResponse,
    utc_timestamp,
)

__all__ = [
    "HealthResponse",
    "SystemLookupResponse",
    "ErrorResponse",
    "utc_timestamp",
]

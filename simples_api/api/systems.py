"""System lookup endpoints."""

import asyncio
import base64
import logging
import re
from typing import Annotated

from fastapi import APIRouter, Path
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError

from simples_api.constants import IDENTIFIER_PATTERN
from simples_api.dependencies import AppSettings
from simples_api.errors import (
    EndpointNotFoundError,
    InvalidIdentifierError,
    SystemLookupError,
    SystemNotFoundError,
)
from simples_api.providers import SystemRepo
from simples_api.schemas.system import ErrorResponse, SystemLookupResponse

logger = logging.getLogger(__name__)

router = APIRouter()

_IDENTIFIER_RE = re.compile(IDENTIFIER_PATTERN, re.ASCII)

# BINARY/BLOB columns arrive as bytes that need not be UTF-8
_ROW_ENCODERS = {bytes: lambda value: base64.b64encode(value).decode("ascii")}


def validate_identifiers(*values: str) -> None:
    """Raise InvalidIdentifierError unless every value is a base-10 integer."""
    if not all(_IDENTIFIER_RE.fullmatch(value) for value in values):
        raise InvalidIdentifierError()


@router.get(
    "/system/{map_id}/{system_id}",
    response_model=SystemLookupResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed identifier"},
        404: {"model": ErrorResponse, "description": "No matching system"},
        500: {"model": ErrorResponse, "description": "Database failure"},
    },
)
async def get_system(
    map_id: Annotated[str, Path(description="External map identifier (map.mapId)")],
    system_id: Annotated[str, Path(description="System identifier")],
    repo: SystemRepo,
    settings: AppSettings,
) -> SystemLookupResponse:
    """
    Look up one system within a map.

    Identifiers are checked for integer shape, but the query binds the
    strings exactly as they appeared in the path.  Only the first matching
    row is returned.
    """
    validate_identifiers(map_id, system_id)

    try:
        async with asyncio.timeout(settings.db_timeout):
            row = await repo.get_by_map_and_system(map_id, system_id)
    except (SQLAlchemyError, TimeoutError) as exc:
        logger.exception(
            "Database error looking up mapId=%s systemId=%s", map_id, system_id
        )
        raise SystemLookupError() from exc

    if row is None:
        raise SystemNotFoundError(map_id, system_id)

    return SystemLookupResponse(data=jsonable_encoder(row, custom_encoder=_ROW_ENCODERS))


@router.get("/system/{identifiers:path}", include_in_schema=False)
async def get_system_empty_identifier(identifiers: str) -> None:
    """Reject lookups with an empty identifier segment, e.g. ``/system//5``."""
    if len(identifiers.split("/")) == 2:
        raise InvalidIdentifierError()
    raise EndpointNotFoundError()

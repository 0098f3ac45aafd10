"""Repository for map-scoped system lookups."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from simples_api.constants import SYSTEM_LOOKUP_SQL

_SYSTEM_LOOKUP = text(SYSTEM_LOOKUP_SQL)


class SystemRepository:
    """Async data access layer for the ``system`` and ``map`` tables.

    Rows are returned as plain dicts: the service passes ``system`` columns
    through untouched, so there is no ORM model for them.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_map_and_system(self, map_id: str, system_id: str) -> dict[str, Any] | None:
        """Return the first system row for an external map id, or None.

        *map_id* is matched against ``map.mapId`` (the external identifier),
        not ``map.id``.  Both values are bound as parameters.
        """
        result = await self.session.execute(
            _SYSTEM_LOOKUP, {"map_id": map_id, "system_id": system_id}
        )
        row = result.mappings().first()
        return dict(row) if row is not None else None

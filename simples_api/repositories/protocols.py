"""Protocol definitions for repository interfaces.

These protocols enable type-safe fakes in tests and decouple route code
from the concrete SQLAlchemy implementation.
"""

from typing import Any, Protocol


class SystemRepositoryProtocol(Protocol):
    """Interface for system lookups."""

    async def get_by_map_and_system(
        self, map_id: str, system_id: str
    ) -> dict[str, Any] | None: ...

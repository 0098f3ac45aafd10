"""Shared constants used across the application."""

# Path identifiers must be base-10 integers (e.g. 1, 30000142, -5)
IDENTIFIER_PATTERN = r"^-?\d+$"

DEFAULT_POOL_SIZE = 10
DEFAULT_DB_TIMEOUT_SECONDS = 60.0

SYSTEM_LOOKUP_SQL = """
    SELECT s.*
    FROM `system` s
    INNER JOIN `map` m ON m.id = s.mapId
    WHERE m.mapId = :map_id AND s.systemId = :system_id
"""

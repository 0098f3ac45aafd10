"""API error taxonomy.

Every error the service reports deliberately is an :class:`ApiError`.  A
single exception handler in ``main.py`` renders them as ``{error, message}``
bodies with the matching HTTP status.
"""

from fastapi import status


class ApiError(Exception):
    """Base class for errors rendered as a structured JSON body."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_body(self) -> dict[str, str]:
        return {"error": self.error, "message": self.message}


class InvalidIdentifierError(ApiError):
    """Raised when a path identifier is not a base-10 integer."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid mapId or systemId format"

    def __init__(self, message: str = "mapId and systemId must be base-10 integers"):
        super().__init__(message)


class SystemNotFoundError(ApiError):
    """Raised when no system row matches the map/system pair."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"

    def __init__(self, map_id: str, system_id: str):
        self.map_id = map_id
        self.system_id = system_id
        super().__init__(f"No system found with mapId: {map_id} and systemId: {system_id}")


class SystemLookupError(ApiError):
    """Raised when the database could not answer a system lookup."""

    def __init__(self) -> None:
        super().__init__("Failed to retrieve system data")


class EndpointNotFoundError(ApiError):
    """Raised for requests that match no route."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"

    def __init__(self) -> None:
        super().__init__("Endpoint not found")


class UnexpectedError(ApiError):
    """Last-resort error for anything that escaped a handler."""

    def __init__(self) -> None:
        super().__init__("Something went wrong")

"""Database repositories for data access."""
from simples_api.repositories.protocols import SystemRepositoryProtocol
from simples_api.repositories.system_repository import SystemRepository

__all__ = [
    "SystemRepository",
    "SystemRepositoryProtocol",
]

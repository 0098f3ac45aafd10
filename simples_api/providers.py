"""FastAPI dependency providers for repositories.

Separated from ``dependencies.py`` so that module stays free of imports from
the data-access layer.  Route modules should import type aliases from here.
"""

from typing import Annotated

from fastapi import Depends

from simples_api.dependencies import DBSession
from simples_api.repositories.protocols import SystemRepositoryProtocol
from simples_api.repositories.system_repository import SystemRepository


def get_system_repository(db: DBSession) -> SystemRepositoryProtocol:
    return SystemRepository(db)


SystemRepo = Annotated[SystemRepositoryProtocol, Depends(get_system_repository)]

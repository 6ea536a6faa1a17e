"""Pick the persistence backend named by DATA_BACKEND"""

from seiva.config import Settings
from seiva.core.exceptions import BackendConfigurationError
from seiva.persistence.base import DataBackend


def create_backend(settings: Settings) -> DataBackend:
    if settings.DATA_BACKEND == "local":
        from seiva.persistence.local import create_local_backend
        return create_local_backend(settings.LOCAL_DATA_DIR)
    if settings.DATA_BACKEND == "database":
        from seiva.persistence.database import create_database_backend
        return create_database_backend(settings)
    raise BackendConfigurationError(
        f"Unknown DATA_BACKEND {settings.DATA_BACKEND!r}; expected 'local' or 'database'"
    )

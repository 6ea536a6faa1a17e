"""API Dependencies"""

from fastapi import Request

from seiva.core.exceptions import StoreNotInitializedError
from seiva.services.school_data import SchoolDataStore


def get_school_data(request: Request) -> SchoolDataStore:
    """
    The store constructed by the application lifespan.

    Raises:
        StoreNotInitializedError: If the app was started without a store
            (a wiring defect, surfaced as a 500)
    """
    store = getattr(request.app.state, "school_data", None)
    if store is None:
        raise StoreNotInitializedError(
            "get_school_data used outside an application with a school data store"
        )
    return store

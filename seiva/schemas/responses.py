"""API Response Envelope"""

from typing import Generic, TypeVar
from pydantic import BaseModel


T = TypeVar('T')


class SuccessResponse(BaseModel, Generic[T]):
    """
    Envelope for every school data endpoint. Entities inside ``data`` are
    rendered with their camelCase field names.

    Example:
        {
            "success": true,
            "data": {"id": "k3j9x0a1b", "name": "Ana Machava", "financialStatus": "paid"},
            "message": "Student enrolled successfully"
        }
    """
    success: bool = True
    data: T
    message: str = "OK"

"""Models Package - Export all tables for easy imports"""

from seiva.models.base import BaseModel
from seiva.models.enums import *
from seiva.models.student import StudentRow
from seiva.models.finance import TransactionRow
from seiva.models.calendar import EventRow
from seiva.models.staff import EmployeeRow


__all__ = [
    "BaseModel",
    "StudentRow",
    "TransactionRow",
    "EventRow",
    "EmployeeRow",
]

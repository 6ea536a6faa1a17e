"""Centralized Enum Definitions"""

import enum


# Students
class EnrollmentStatus(str, enum.Enum):
    """Academic enrollment status of a student"""
    ACTIVE = "active"
    SUSPENDED = "suspended"
    TRANSFERRED = "transferred"


class FinancialStatus(str, enum.Enum):
    """Tuition standing, always derived from the student's paid periods"""
    PENDING = "pending"
    PAID = "paid"
    LATE = "late"


# Finance
class TransactionType(str, enum.Enum):
    """Direction of money; amounts are always stored positive"""
    INCOME = "income"
    EXPENSE = "expense"


class TransactionStatus(str, enum.Enum):
    """Settlement state of a transaction"""
    COMPLETED = "completed"
    PENDING = "pending"
    CANCELLED = "cancelled"


# Human resources
class Department(str, enum.Enum):
    """Staff departments - matches the HR form options"""
    TEACHING = "Docentes"
    ADMINISTRATION = "Administrativo"
    GENERAL_SERVICES = "Serviços Gerais"
    SECURITY = "Segurança"
    MANAGEMENT = "Direção"


class ContractType(str, enum.Enum):
    """Employment contract types"""
    FULL_TIME = "Tempo Integral"
    PART_TIME = "Tempo Parcial"
    CONTRACTOR = "Prestador de Serviço"


class EmployeeStatus(str, enum.Enum):
    """Employee availability"""
    ACTIVE = "active"
    VACATION = "vacation"
    INACTIVE = "inactive"

"""Dashboard KPI Schemas"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class KPIData(BaseModel):
    """Dashboard summary, always computed from one snapshot of the store"""
    total_students: int = 0
    total_revenue: float = 0.0
    total_expenses: float = 0.0
    net_balance: float = 0.0
    delinquency_rate: float = Field(0.0, ge=0, le=100, description="Percentage of late students")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

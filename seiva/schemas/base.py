"""Shared configuration for in-memory entity schemas"""

from typing import List
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EntityModel(BaseModel):
    """
    Base for every entity held by the school data store.

    Attributes are snake_case in Python; the camelCase aliases are the
    wire form used by the local storage backend and the HTTP API.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def period_key(period: str) -> str:
    """Comparison key for billing period names: trimmed and case-folded."""
    return period.strip().casefold()


def unique_periods(periods: List[str]) -> List[str]:
    """Drop repeated periods (compared by ``period_key``), keeping the first spelling seen."""
    seen = set()
    out = []
    for period in periods:
        key = period_key(period)
        if key in seen:
            continue
        seen.add(key)
        out.append(period)
    return out

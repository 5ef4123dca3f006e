from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class Partner(BaseModel):
    id: int | None = None
    name: str
    is_active: bool = True


class Resource(BaseModel):
    id: int | None = None
    name: str
    partner_id: int | None = None  # None: employed by the supplier directly
    day_rate: Decimal = Field(default=Decimal("0"), ge=0)  # sell rate per working day

    def hourly_rate(self, hours_per_day: int) -> Decimal:
        return self.day_rate / Decimal(hours_per_day)

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class ProcurementMethod(str, Enum):
    SUPPLIER = "supplier"
    PARTNER = "partner"


class ExpenseEntry(BaseModel):
    id: int | None = None
    resource_id: int
    date: dt.date
    amount: Decimal = Field(ge=0)
    category: str
    reason: str = ""
    procurement_method: ProcurementMethod = ProcurementMethod.PARTNER
    chargeable_to_customer: bool = True
    status: str = ""  # display only; never filters

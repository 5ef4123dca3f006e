from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class TimesheetStatus(str, Enum):
    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    VALIDATED = "Validated"
    REJECTED = "Rejected"


class TimesheetEntry(BaseModel):
    id: int | None = None
    resource_id: int
    date: dt.date
    hours: Decimal = Field(ge=0)
    status: TimesheetStatus = TimesheetStatus.DRAFT

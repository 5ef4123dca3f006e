from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class SignOffRole(str, Enum):
    SUPPLIER = "supplier"
    CUSTOMER = "customer"


class SignOffStatus(str, Enum):
    AWAITING = "Awaiting Signatures"
    PENDING_SUPPLIER = "Pending Supplier Signature"
    PENDING_CUSTOMER = "Pending Customer Signature"
    SIGNED = "Signed"


class SignOff(BaseModel):
    supplier_signed_by: str | None = None
    supplier_signed_at: datetime | None = None
    customer_signed_by: str | None = None
    customer_signed_at: datetime | None = None

    @property
    def supplier_signed(self) -> bool:
        return self.supplier_signed_at is not None

    @property
    def customer_signed(self) -> bool:
        return self.customer_signed_at is not None

    @property
    def is_complete(self) -> bool:
        return self.supplier_signed and self.customer_signed

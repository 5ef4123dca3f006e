from __future__ import annotations

import logging
from datetime import datetime
from typing import assert_never

from tracker.constants import UK_TZ
from tracker.errors import AlreadySigned, SignOffIncomplete
from tracker.models.signoff import SignOff, SignOffRole, SignOffStatus

logger = logging.getLogger(__name__)


class SignOffService:
    """Two-party approval gate: supplier and customer each sign once, in either order."""

    def sign(self, signoff: SignOff, role: SignOffRole, signer: str) -> SignOff:
        if not signer:
            raise ValueError("Signer name is required")
        now = datetime.now(UK_TZ)
        if role is SignOffRole.SUPPLIER:
            if signoff.supplier_signed:
                raise AlreadySigned(f"Supplier already signed by {signoff.supplier_signed_by}")
            updated = signoff.model_copy(update={"supplier_signed_by": signer, "supplier_signed_at": now})
        elif role is SignOffRole.CUSTOMER:
            if signoff.customer_signed:
                raise AlreadySigned(f"Customer already signed by {signoff.customer_signed_by}")
            updated = signoff.model_copy(update={"customer_signed_by": signer, "customer_signed_at": now})
        else:
            assert_never(role)
        logger.info("Signed as %s by %s, status=%s", role.value, signer, self.status(updated).value)
        return updated

    @staticmethod
    def status(signoff: SignOff) -> SignOffStatus:
        if signoff.is_complete:
            return SignOffStatus.SIGNED
        if signoff.supplier_signed:
            return SignOffStatus.PENDING_CUSTOMER
        if signoff.customer_signed:
            return SignOffStatus.PENDING_SUPPLIER
        return SignOffStatus.AWAITING

    def require_signed(self, signoff: SignOff) -> None:
        """Raise unless both parties have signed; call before any downstream action."""
        if not signoff.is_complete:
            raise SignOffIncomplete(f"Sign-off incomplete: {self.status(signoff).value}")

class InvoiceError(ValueError):
    """Base class for invoice generation failures."""


class InvalidPeriod(InvoiceError):
    pass


class UnknownPartner(InvoiceError, LookupError):
    def __init__(self, partner_id: int) -> None:
        super().__init__(f"Partner {partner_id} not found")
        self.partner_id = partner_id


class SignOffError(ValueError):
    pass


class AlreadySigned(SignOffError):
    pass


class SignOffIncomplete(SignOffError):
    pass

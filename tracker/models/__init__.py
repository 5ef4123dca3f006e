from decimal import ROUND_HALF_UP, Decimal

PENNY = Decimal("0.01")


def to_money(value: Decimal) -> Decimal:
    """Round to whole pence, halves away from zero."""
    return value.quantize(PENNY, rounding=ROUND_HALF_UP)


def format_gbp(amount: Decimal) -> str:
    """Format an amount as GBP: Decimal('1234.5') -> '£1,234.50'"""
    amount = to_money(amount)
    sign = "-" if amount < 0 else ""
    return f"{sign}£{abs(amount):,.2f}"

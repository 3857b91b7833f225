"""Integer arithmetic utilities for cents-based money.

All amounts, totals and balances use int (cents). No float, no Decimal.
Sums over int are exact, so dashboard identities like
balance == income - expenses hold without rounding drift.
"""


def magnitude(cents: int) -> int:
    """Absolute value of a signed amount: -1200 -> 1200."""
    return -cents if cents < 0 else cents


def signed_amount(cents: int, is_expense: bool) -> int:
    """Apply the storage sign convention: expenses negative, income positive."""
    return -magnitude(cents) if is_expense else magnitude(cents)


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 6500 -> '$65.00', -1200 -> '-$12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-${abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"${cents // 100:,}.{cents % 100:02d}"

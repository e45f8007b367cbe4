"""Integer arithmetic utilities for cents-based balances and prices.

All prices, deposits and balances use int (cents). No float, no Decimal.
"""


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 185 -> '$1.85', -1200 -> '-$12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-${abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"${cents // 100:,}.{cents % 100:02d}"


def total_cost(unit_cost: int, quantity: int) -> int:
    """Cost of ``quantity`` units at ``unit_cost`` cents each."""
    if unit_cost <= 0 or quantity <= 0:
        raise ValueError(
            f"unit_cost and quantity must be positive, got {unit_cost} x {quantity}"
        )
    return unit_cost * quantity

from __future__ import annotations


def format_pence(amount_pence: int, *, symbol: str = "£") -> str:
    """Display integer minor units as a currency string (1250 -> '£12.50')."""
    pence = int(amount_pence)
    sign = "-" if pence < 0 else ""
    return f"{sign}{symbol}{abs(pence) // 100}.{abs(pence) % 100:02d}"

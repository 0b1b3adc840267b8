# admin_console/services/formatting.py
from typing import Optional

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}


def minor_to_major(amount: Optional[int]) -> float:
    """Integer minor units (cents) -> major units."""
    return (amount or 0) / 100


def format_price(amount: Optional[int], currency: Optional[str] = "USD") -> str:
    """1999 -> "$19.99". Unknown currencies fall back to a code suffix."""
    code = (currency or "USD").upper()
    value = minor_to_major(amount)
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{symbol}{value:.2f}"
    return f"{value:.2f} {code}"


def approval_rate(approved: int, rejected: int) -> float:
    """approved / (approved + rejected) as a percentage, one decimal; 0 when nothing was decided."""
    decided = approved + rejected
    if decided <= 0:
        return 0.0
    return round(approved / decided * 100, 1)


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


def user_badge(is_banned: bool, is_verified: bool) -> str:
    if is_banned:
        return "Banned"
    if is_verified:
        return "Verified"
    return "Active"

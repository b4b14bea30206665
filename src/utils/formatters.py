"""
Display formatting helpers for listing values.
"""

import re

CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
}

PRICE_ON_REQUEST = "Price on request"


def format_amount(value: float) -> str:
    """
    Format a number with thousands separators.

    Examples:
        >>> format_amount(285000)
        '285,000'
        >>> format_amount(1234.5)
        '1,234.50'
    """
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def format_price(value: float, currency: str = "EUR") -> str:
    """
    Format a numeric price for display.

    Args:
        value: Clean numeric price
        currency: ISO currency code

    Returns:
        Display string like "€285,000" or "285,000 CHF"

    Examples:
        >>> format_price(285000)
        '€285,000'
        >>> format_price(1500, "usd")
        '$1,500'
        >>> format_price(990000, "CHF")
        '990,000 CHF'
    """
    code = (currency or "EUR").upper()
    amount = format_amount(value)
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{symbol}{amount}"
    return f"{amount} {code}"


def display_price(price: float | str | None) -> str:
    """
    Normalize a price of unknown shape for display.

    Examples:
        >>> display_price(285000)
        '€285,000'
        >>> display_price("€ 285.000")
        '€ 285.000'
        >>> display_price("285000 EUR")
        '€285,000'
        >>> display_price("")
        'Price on request'
    """
    if isinstance(price, (int, float)) and not isinstance(price, bool):
        if price > 0:
            return format_price(price)
        return PRICE_ON_REQUEST

    if isinstance(price, str):
        if "€" in price:
            return price
        digits = re.sub(r"[^\d]", "", price)
        if digits and int(digits) > 0:
            return format_price(int(digits))
        return price or PRICE_ON_REQUEST

    return PRICE_ON_REQUEST

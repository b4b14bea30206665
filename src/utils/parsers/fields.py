"""
Field resolution utilities.

Pick typed values out of a raw row by trying column name aliases in order.
Exports from different sources name the same column differently
("ProjectTitle" vs "Title"), so every lookup takes an ordered alias list.
"""

import math
import re
from collections.abc import Mapping

# Currency symbols, whitespace and thousands separators
NUMBER_NOISE_PATTERN = re.compile(r"[€$£\s,]")


def _first_value(row: Mapping[str, str], aliases: tuple[str, ...]) -> str:
    """Return the first non-empty value found under any alias."""
    for alias in aliases:
        value = row.get(alias)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return ""


def parse_number(value: str | None) -> float | None:
    """
    Parse a loosely formatted number.

    Args:
        value: Raw string like "€1,234.50" or " 85 "

    Returns:
        Parsed float, or None if the value is empty, invalid or not finite

    Examples:
        >>> parse_number("€1,234.50")
        1234.5
        >>> parse_number("$ 2,000")
        2000.0
        >>> parse_number("on request") is None
        True
        >>> parse_number("nan") is None
        True
    """
    if not value:
        return None

    cleaned = NUMBER_NOISE_PATTERN.sub("", str(value))
    if not cleaned:
        return None

    try:
        number = float(cleaned)
    except ValueError:
        return None

    if not math.isfinite(number):
        return None
    return number


def resolve_string(row: Mapping[str, str], *aliases: str) -> str:
    """
    Resolve a string field.

    Args:
        row: Raw row (header -> value)
        *aliases: Column names to try, in order

    Returns:
        First non-empty value, or "" if no alias matches

    Examples:
        >>> resolve_string({"Title": "", "Name": "Villa"}, "Title", "Name")
        'Villa'
        >>> resolve_string({}, "Title")
        ''
    """
    return _first_value(row, aliases)


def resolve_number(row: Mapping[str, str], *aliases: str) -> float:
    """
    Resolve a numeric field.

    The first alias holding a non-empty value decides the result. When that
    value does not parse the result is 0; later aliases are not consulted.

    Args:
        row: Raw row (header -> value)
        *aliases: Column names to try, in order

    Returns:
        Parsed number, or 0 if nothing matches or the match does not parse

    Examples:
        >>> resolve_number({"Price": "€1,234.50"}, "Price")
        1234.5
        >>> resolve_number({}, "Price")
        0.0
        >>> resolve_number({"CleanPrice": "n/a", "Price": "100"}, "CleanPrice", "Price")
        0.0
    """
    number = parse_number(_first_value(row, aliases))
    return number if number is not None else 0.0


def resolve_optional_number(row: Mapping[str, str], *aliases: str) -> float | None:
    """
    Resolve a numeric field that has no meaningful default (coordinates).

    Same first-match rule as resolve_number.

    Args:
        row: Raw row (header -> value)
        *aliases: Column names to try, in order

    Returns:
        Parsed number, or None if nothing matches or the match does not parse

    Examples:
        >>> resolve_optional_number({"Latitude": "34.68"}, "Latitude", "lat")
        34.68
        >>> resolve_optional_number({"lat": "north"}, "Latitude", "lat") is None
        True
    """
    return parse_number(_first_value(row, aliases))

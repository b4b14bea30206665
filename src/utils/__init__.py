"""
Utility modules for listing ingestion.

src.utils.transformers is imported by path (it depends on src.modules).
"""

from src.utils.formatters import display_price, format_amount, format_price
from src.utils.parsers import (
    normalize_photos,
    parse_number,
    resolve_number,
    resolve_optional_number,
    resolve_string,
    split_line,
    tokenize,
)

__all__ = [
    # Formatters
    "format_amount",
    "format_price",
    "display_price",
    # Parsers
    "split_line",
    "tokenize",
    "parse_number",
    "resolve_string",
    "resolve_number",
    "resolve_optional_number",
    "normalize_photos",
]

"""
Parser utilities for listing exports.

Contains functions to split export text and parse row fields.
"""

from src.utils.parsers.codes import (
    build_property_id,
    extract_project_code,
    stable_hash,
)
from src.utils.parsers.fields import (
    parse_number,
    resolve_number,
    resolve_optional_number,
    resolve_string,
)
from src.utils.parsers.photos import (
    MAX_PHOTOS,
    canonicalize_photo_url,
    extract_drive_file_id,
    is_local_path,
    normalize_photos,
    split_photo_field,
)
from src.utils.parsers.table import RawRow, iter_rows, split_line, tokenize

__all__ = [
    "RawRow",
    "split_line",
    "iter_rows",
    "tokenize",
    "parse_number",
    "resolve_string",
    "resolve_number",
    "resolve_optional_number",
    "MAX_PHOTOS",
    "is_local_path",
    "extract_drive_file_id",
    "canonicalize_photo_url",
    "split_photo_field",
    "normalize_photos",
    "extract_project_code",
    "stable_hash",
    "build_property_id",
]

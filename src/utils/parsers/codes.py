"""
Project code and stable ID utilities.

Listing IDs must come out the same every time an unchanged export is
imported and must not move when unrelated rows are added or removed, so
they are built from row content only, never from Python's salted hash()
or from the row position.
"""

import hashlib
import re
from collections.abc import Sequence

# Letter prefix immediately followed by digits at the start of the title: "A100 - ..."
PROJECT_CODE_PATTERN = re.compile(r"^([A-Z]+\d+)")
DEFAULT_PROJECT_CODE = "PROP"

HASH_LENGTH = 12
UNIT_HASH_LENGTH = 8


def extract_project_code(title: str | None) -> str | None:
    """
    Extract the project code from a listing title.

    Best-effort heuristic: the code is only a prefix convention, so it is
    never used as an ID on its own.

    Args:
        title: Listing title like "A100 - ARARAT Gardens"

    Returns:
        Project code, or None if the title does not start with one

    Examples:
        >>> extract_project_code("A100 - ARARAT Gardens")
        'A100'
        >>> extract_project_code("KA48 Sea View")
        'KA48'
        >>> extract_project_code("Villa in Paphos") is None
        True
        >>> extract_project_code(None) is None
        True
    """
    if not title:
        return None
    match = PROJECT_CODE_PATTERN.match(title.strip())
    return match.group(1) if match else None


def stable_hash(*parts: object) -> str:
    """
    Hash parts into a short deterministic hex string.

    Examples:
        >>> stable_hash("A100 - Villa", 3) == stable_hash("A100 - Villa", 3)
        True
        >>> len(stable_hash("x"))
        12
    """
    key = "\x1f".join(str(part) for part in parts)
    return hashlib.sha1(key.encode("utf-8")).hexdigest()[:HASH_LENGTH]


def build_property_id(
    title: str,
    apartment_no: str,
    identity: Sequence[str] = (),
) -> str:
    """
    Build a stable property ID from structural row fields.

    - Title with project code + unit number: "A100_601"
    - Unit number without project code: "PROP<identity hash>_601"
    - No unit number: "prop_<identity hash>"

    Args:
        title: Listing title
        apartment_no: Unit number, may be empty
        identity: Identifying row values (title, url, location, ...),
            defaults to the title alone

    Returns:
        Non-empty ID string

    Examples:
        >>> build_property_id("A100 - Villa", "601")
        'A100_601'
        >>> build_property_id("A100 - Villa", "").startswith("prop_")
        True
    """
    parts = tuple(identity) or (title,)

    if apartment_no:
        code = extract_project_code(title)
        if code is None:
            code = f"{DEFAULT_PROJECT_CODE}{stable_hash(*parts)[:UNIT_HASH_LENGTH]}"
        return f"{code}_{apartment_no}"

    return f"prop_{stable_hash(*parts)}"


def with_occurrence(base_id: str, occurrence: int) -> str:
    """
    Disambiguate the n-th listing that shares a base ID.

    The first occurrence keeps the base ID, so a listing's ID only depends
    on the rows that share its identity.

    Examples:
        >>> with_occurrence("A100_601", 1)
        'A100_601'
        >>> with_occurrence("A100_601", 2)
        'A100_601-2'
    """
    if occurrence <= 1:
        return base_id
    return f"{base_id}-{occurrence}"

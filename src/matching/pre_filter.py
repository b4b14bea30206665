"""
Post-resolution filters.

Applied after a selection's order is established; they only remove
entries and never reorder the rest.
"""

from collections.abc import Iterable, Sequence

from loguru import logger

from src.modules.properties.models import Property

pre_filter_log = logger.bind(module="PreFilter")


def exclude_reviewed(
    properties: Sequence[Property],
    reviewed_ids: Iterable[str] | None,
) -> tuple[list[Property], int]:
    """
    Drop properties the client has already reviewed.

    Args:
        properties: Resolved properties, in presentation order
        reviewed_ids: IDs that already have a reaction

    Returns:
        Tuple of (remaining properties in the same order, removed count)
    """
    reviewed = set(reviewed_ids or ())
    if not reviewed:
        return list(properties), 0

    remaining = [prop for prop in properties if prop.id not in reviewed]
    removed = len(properties) - len(remaining)

    if removed:
        pre_filter_log.debug(f"Excluded {removed}/{len(properties)} already reviewed")

    return remaining, removed


def attach_broker_phone(
    properties: Sequence[Property],
    phone: str | None,
) -> list[Property]:
    """
    Return copies of the properties carrying the broker's phone.

    The canonical instances from the dataset are left untouched.
    """
    if not phone:
        return list(properties)
    return [prop.with_broker_phone(phone) for prop in properties]

"""
Selection resolution.

Maps a broker's ordered list of property ids back onto the loaded dataset.

Matching runs in stages, from the most forgiving key to exact equality.
Stages are whole-strategy fallbacks: the first stage that resolves at least
one id is used for the entire selection, and its misses are reported as
unresolved. Within a stage, a key shared by two different properties is
ambiguous and matches nothing, so a looser stage never picks the wrong
listing.
"""

from collections.abc import Callable, Hashable, Sequence
import math
from dataclasses import dataclass
from typing import Any

from loguru import logger

from src.matching.types import ResolutionDiagnostics, ResolutionResult, ResolutionStatus
from src.modules.properties.models import Property

resolver_log = logger.bind(module="Resolver")

DEFAULT_SAMPLE_SIZE = 5


@dataclass(frozen=True)
class Matcher:
    """A named key function; None means "cannot be matched in this stage"."""

    name: str
    key: Callable[[Any], Hashable | None]


def _as_text(value: Any) -> str:
    """Render an id as text; integral floats lose their '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def casefold_key(value: Any) -> str | None:
    """
    Trimmed, lowercased key.

    Examples:
        >>> casefold_key("  A100_601 ")
        'a100_601'
        >>> casefold_key(601.0)
        '601'
        >>> casefold_key("  ") is None
        True
    """
    text = _as_text(value).strip().lower()
    return text or None


def trimmed_key(value: Any) -> str | None:
    """
    Trimmed, case-preserved key.

    Examples:
        >>> trimmed_key(" A100_601 ")
        'A100_601'
    """
    text = _as_text(value).strip()
    return text or None


def raw_key(value: Any) -> Hashable | None:
    """Value unchanged."""
    return value


DEFAULT_MATCHERS: tuple[Matcher, ...] = (
    Matcher("casefold", casefold_key),
    Matcher("trimmed", trimmed_key),
    Matcher("raw", raw_key),
)


def validate_ids(ordered_ids: Any) -> str | None:
    """
    Check that the input is an ordered list of scalar ids.

    Blank strings are scalars: they pass here and come back as unresolved
    ids, like any other miss.

    Args:
        ordered_ids: Candidate id list

    Returns:
        None if valid, otherwise the reason it is malformed

    Examples:
        >>> validate_ids(["A100_601", 7, 601.0, "  "]) is None
        True
        >>> validate_ids(None)
        'missing'
        >>> validate_ids("A100_601")
        'not_a_list'
        >>> validate_ids([{"id": 1}])
        'non_scalar_id'
        >>> validate_ids([float("nan")])
        'non_scalar_id'
    """
    if ordered_ids is None:
        return "missing"

    # Strings, dicts and sets are iterable but not ordered id lists
    if not isinstance(ordered_ids, (list, tuple)):
        return "not_a_list"

    for item in ordered_ids:
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            return "non_scalar_id"
        if isinstance(item, float) and not math.isfinite(item):
            return "non_scalar_id"

    return None


def build_lookup(
    dataset: Sequence[Property],
    key: Callable[[Any], Hashable | None],
) -> dict[Hashable, Property]:
    """
    Index the dataset by a key function, dropping ambiguous keys.

    Args:
        dataset: Properties to index
        key: Key function applied to each property id

    Returns:
        Mapping of unambiguous key -> Property
    """
    lookup: dict[Hashable, Property] = {}
    ambiguous: set[Hashable] = set()

    for prop in dataset:
        k = key(prop.id)
        if k is None or k in ambiguous:
            continue
        existing = lookup.get(k)
        if existing is None:
            lookup[k] = prop
        elif existing.id != prop.id:
            ambiguous.add(k)
            del lookup[k]

    return lookup


def match_stage(
    ordered_ids: Sequence[Any],
    dataset: Sequence[Property],
    matcher: Matcher,
) -> tuple[list[Property], list[Any]]:
    """
    Run a single matching stage.

    Args:
        ordered_ids: Requested ids, in presentation order
        dataset: Properties to search
        matcher: Key strategy

    Returns:
        (resolved properties in requested order, unresolved ids)
    """
    lookup = build_lookup(dataset, matcher.key)

    resolved: list[Property] = []
    unresolved: list[Any] = []
    for requested in ordered_ids:
        k = matcher.key(requested)
        prop = lookup.get(k) if k is not None else None
        if prop is None:
            unresolved.append(requested)
        else:
            resolved.append(prop)

    return resolved, unresolved


def resolve_selection(
    ordered_ids: Any,
    dataset: Sequence[Property],
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    matchers: Sequence[Matcher] = DEFAULT_MATCHERS,
) -> ResolutionResult:
    """
    Resolve an ordered id list against the dataset.

    Never raises; every outcome is a ResolutionResult.

    Args:
        ordered_ids: Requested ids (order is preserved in the output)
        dataset: Loaded properties
        sample_size: How many unresolved ids to echo in diagnostics
        matchers: Matching stages, tried in order

    Returns:
        ResolutionResult
    """
    dataset_size = len(dataset)

    reason = validate_ids(ordered_ids)
    if reason is not None:
        resolver_log.debug(f"Malformed selection ids ({reason})")
        return ResolutionResult(
            status=ResolutionStatus.MALFORMED,
            diagnostics=ResolutionDiagnostics(dataset_size=dataset_size, reason=reason),
        )

    ids = list(ordered_ids)
    if not ids:
        return ResolutionResult(
            status=ResolutionStatus.EMPTY,
            diagnostics=ResolutionDiagnostics(dataset_size=dataset_size, reason="empty"),
        )

    for matcher in matchers:
        resolved, unresolved = match_stage(ids, dataset, matcher)
        if not resolved:
            continue

        resolver_log.debug(
            f"Resolved {len(resolved)}/{len(ids)} ids with '{matcher.name}' matching"
        )
        return ResolutionResult(
            status=ResolutionStatus.PARTIAL if unresolved else ResolutionStatus.OK,
            properties=resolved,
            unresolved=unresolved,
            strategy=matcher.name,
            diagnostics=ResolutionDiagnostics(
                expected=len(ids),
                resolved=len(resolved),
                dataset_size=dataset_size,
                sample_unresolved=unresolved[:sample_size],
                reason="partial" if unresolved else "",
            ),
        )

    return ResolutionResult(
        status=ResolutionStatus.NOT_FOUND,
        unresolved=ids,
        diagnostics=ResolutionDiagnostics(
            expected=len(ids),
            resolved=0,
            dataset_size=dataset_size,
            sample_unresolved=ids[:sample_size],
            reason="not_found",
        ),
    )

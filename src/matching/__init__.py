"""
Matching module for selection resolution.

This module maps ordered id lists onto the loaded dataset and filters
the result for presentation.
"""

from src.matching.pre_filter import attach_broker_phone, exclude_reviewed
from src.matching.resolver import (
    DEFAULT_MATCHERS,
    Matcher,
    build_lookup,
    casefold_key,
    match_stage,
    raw_key,
    resolve_selection,
    trimmed_key,
    validate_ids,
)
from src.matching.types import (
    ResolutionDiagnostics,
    ResolutionResult,
    ResolutionStatus,
)

__all__ = [
    # Key functions
    "casefold_key",
    "trimmed_key",
    "raw_key",
    "Matcher",
    "DEFAULT_MATCHERS",
    # Resolution
    "validate_ids",
    "build_lookup",
    "match_stage",
    "resolve_selection",
    # Result types
    "ResolutionStatus",
    "ResolutionDiagnostics",
    "ResolutionResult",
    # Post filters
    "exclude_reviewed",
    "attach_broker_phone",
]

"""
Result types for selection resolution.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from src.modules.properties.models import Property


class ResolutionStatus(Enum):
    """Selection resolution outcomes."""

    OK = "ok"  # Every requested id resolved
    PARTIAL = "partial"  # Some ids resolved, the rest are in `unresolved`
    EMPTY = "empty"  # The selection is deliberately empty
    MALFORMED = "malformed"  # The id list is missing or not a list of ids
    NOT_FOUND = "not_found"  # No requested id resolved under any strategy
    EXPIRED = "expired"  # The selection link has expired

    @property
    def is_success(self) -> bool:
        """Whether there is something to present."""
        return self in (ResolutionStatus.OK, ResolutionStatus.PARTIAL)


@dataclass
class ResolutionDiagnostics:
    """
    Counts the host needs to render a precise message.

    Attributes:
        expected: Number of ids requested
        resolved: Number of ids resolved
        dataset_size: Number of properties searched
        sample_unresolved: First few ids that did not resolve
        reason: Short machine-friendly explanation
    """

    expected: int = 0
    resolved: int = 0
    dataset_size: int = 0
    sample_unresolved: list[Any] = field(default_factory=list)
    reason: str = ""

    def summary(self) -> str:
        """One-line human readable summary."""
        text = f"resolved {self.resolved}/{self.expected} ids against {self.dataset_size} properties"
        if self.sample_unresolved:
            sample = ", ".join(str(item) for item in self.sample_unresolved)
            text += f" (unresolved: {sample})"
        if self.reason:
            text = f"{self.reason}: {text}"
        return text


@dataclass
class ResolutionResult:
    """
    Ordered subset of the dataset matching a selection.

    Attributes:
        status: Outcome
        properties: Resolved properties in the requested order
        unresolved: Requested ids that did not resolve
        strategy: Name of the matching stage that produced the result
        diagnostics: Counts for error rendering
    """

    status: ResolutionStatus
    properties: list[Property] = field(default_factory=list)
    unresolved: list[Any] = field(default_factory=list)
    strategy: Optional[str] = None
    diagnostics: ResolutionDiagnostics = field(default_factory=ResolutionDiagnostics)

    @property
    def success(self) -> bool:
        """Whether there is something to present."""
        return self.status.is_success

"""Immutable records passed between pipeline stages.

Each record is created by exactly one stage and only read afterwards, so the
channels can hand them across threads without copying.
"""

from dataclasses import dataclass
from typing import Dict

__all__ = [
    "METRIC_FIELDS",
    "ActivityRecord",
    "GeometryDescriptor",
    "GraphDescriptor",
    "RenderedFrame",
]

METRIC_FIELDS = ("commits", "issues", "prs", "code_reviews")


@dataclass(frozen=True)
class ActivityRecord:
    """Activity percentages of one subject for one period.

    Metrics are integers in [0, 100]. A metric missing from the source page
    is 0.
    """
    subject: str
    period: str
    commits: int = 0
    issues: int = 0
    prs: int = 0
    code_reviews: int = 0

    @classmethod
    def from_fields(cls, subject: str, period: str, fields: Dict[str, int]) -> "ActivityRecord":
        """Build a record from the sparse field map returned by the parser."""
        return cls(
            subject=subject,
            period=period,
            **{name: fields.get(name, 0) for name in METRIC_FIELDS},
        )


@dataclass(frozen=True)
class GeometryDescriptor:
    """Canvas measurements and the four vertices of the activity polygon.

    ``code_review_y`` and ``prs_y`` lie on the vertical axis through the
    center; ``issues_x`` and ``commits_x`` on the horizontal one.
    """
    width: float
    height: float
    mid: float
    factor: float
    axis_margin: float
    code_review_y: float
    issues_x: float
    prs_y: float
    commits_x: float


@dataclass(frozen=True)
class GraphDescriptor:
    record: ActivityRecord
    geometry: GeometryDescriptor


@dataclass(frozen=True)
class RenderedFrame:
    """A rasterized graph (PNG bytes) tagged with its period for ordering."""
    image: bytes
    period: str

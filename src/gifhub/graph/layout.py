"""Coordinate mapping from activity percentages to polygon vertices.

Each metric is mapped through a saturating curve ``1 - e^(-n/decay)`` onto
its half-axis. Above the configured threshold the ratio snaps to 1.0 so that
markers of high percentages sit at the axis end instead of crowding just
short of it.
"""

import math
from typing import TYPE_CHECKING

from gifhub.models import ActivityRecord, GeometryDescriptor

if TYPE_CHECKING:
    from gifhub.schemas.internal import InternalLayoutConfig

__all__ = ['capped_delta', 'coordinates']


def capped_delta(n: float, axis_length: float, threshold: float, decay: float = 50.0) -> float:
    """Offset of a metric value along an axis of length ``axis_length``.

    Parameters
    ----------
    n : float
        Metric value, a percentage in [0, 100].
    axis_length : float
        Maximum offset.
    threshold : float
        Ratios strictly above this become 1.0.
    decay : float, optional
        Curve scale; ``n == decay`` gives a ratio of ``1 - 1/e``.

    Returns
    -------
    float
        ``axis_length * ratio``.

    Examples
    --------
    >>> capped_delta(0, 67.5, 0.8)
    0.0
    >>> capped_delta(100, 67.5, 0.8)
    67.5
    """
    # see: https://www.desmos.com/calculator/8pcvpgftdv
    ratio = 1.0 - math.exp(-n / decay)
    if ratio > threshold:
        ratio = 1.0
    return axis_length * ratio


def coordinates(record: ActivityRecord, layout: "InternalLayoutConfig") -> GeometryDescriptor:
    """Compute the polygon vertices of a record.

    Code review points up, pull requests down, issues right and commits left
    of the canvas center (image coordinates, y grows downwards).
    """
    w, h = layout.width, layout.height
    mid = w / 2
    factor = w / 10
    axis_margin = layout.axis_offset * factor
    axis_length = mid - axis_margin

    def delta(value: int) -> float:
        return capped_delta(float(value), axis_length, layout.threshold, layout.decay)

    return GeometryDescriptor(
        width=w,
        height=h,
        mid=mid,
        factor=factor,
        axis_margin=axis_margin,
        code_review_y=mid - delta(record.code_reviews),
        issues_x=mid + delta(record.issues),
        prs_y=mid + delta(record.prs),
        commits_x=mid - delta(record.commits),
    )

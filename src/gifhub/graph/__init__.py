"""Activity graph geometry and drawing.

- layout: Saturating coordinate mapper
- renderer: matplotlib frame rendering
"""

from gifhub.graph.layout import capped_delta, coordinates
from gifhub.graph.renderer import ActivityRenderer

__all__ = ['capped_delta', 'coordinates', 'ActivityRenderer']

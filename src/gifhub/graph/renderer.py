"""Activity graph rendering.

Draws one frame per GraphDescriptor with matplotlib and serializes it as PNG
(raster) or SVG (vector, for external rasterizers).
"""

import io
import logging
import threading
from typing import Tuple, TYPE_CHECKING

import numpy as np
import matplotlib
matplotlib.use('Agg')
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Polygon

from gifhub.models import GraphDescriptor

if TYPE_CHECKING:
    from gifhub.schemas import InternalConfig

__all__ = ['ActivityRenderer']

logger = logging.getLogger(__name__)

# Figures are independent, but text layout goes through matplotlib's shared
# font cache; drawing is serialized, everything around it is not.
_DRAW_LOCK = threading.Lock()

CAPTIONS = {
    "code_reviews": "Code Review",
    "issues": "Issues",
    "prs": "Pull Requests",
    "commits": "Commits",
}


class ActivityRenderer:
    """Generates activity graph frames from graph descriptors.

    **Frame Layout** (``width`` x ``height`` pixels, white background):

    - Filled and stroked quadrilateral through the four metric vertices
    - Horizontal and vertical axis lines crossing at the center
    - A ringed marker on every nonzero metric vertex
    - Captions at the four axis ends with their percentages
    - Subject and period centered below the graph

    **Units:**

    Every size in the style config is in pixels. matplotlib works in points,
    so sizes are converted with the configured DPI; the saved image is
    exactly ``width`` x ``height`` pixels.

    **Thread Safety:**

    Each call builds its own Figure without pyplot, so renderers can be
    shared by worker threads.

    Example usage::

        renderer = ActivityRenderer(config)
        png = renderer.render(graph, fmt="png")
    """

    def __init__(self, config: "InternalConfig"):
        """Initialize renderer.

        Parameters
        ----------
        config : InternalConfig
            Runtime configuration; the ``style`` section is read.
        """
        style = config.style
        self.dpi = style.dpi
        self.background_color = style.background_color
        self.label_color = style.label_color
        self.value_color = style.value_color
        self.axis_color = style.axis_color
        self.poly_color = style.poly_color
        self.font_family = style.font_family
        self.label_font_size = style.label_font_size
        self.value_font_size = style.value_font_size
        self.marker_radius = style.marker_radius
        self.poly_linewidth = style.poly_linewidth
        self.axis_linewidth = style.axis_linewidth

        logger.debug("✓ ActivityRenderer initialized (dpi=%d)", self.dpi)

    def _pt(self, px: float) -> float:
        """Convert pixels to points."""
        return px * 72.0 / self.dpi

    def _setup_figure(self, width: float, height: float) -> Tuple[Figure, "matplotlib.axes.Axes"]:
        """Create a figure whose data coordinates are image pixels."""
        fig = Figure(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)
        fig.patch.set_facecolor(self.background_color)

        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)  # y grows downwards
        ax.axis('off')
        return fig, ax

    def _draw_polygon(self, ax, graph: GraphDescriptor) -> None:
        g = graph.geometry
        vertices = np.array([
            [g.mid, g.code_review_y],
            [g.issues_x, g.mid],
            [g.mid, g.prs_y],
            [g.commits_x, g.mid],
        ])
        ax.add_patch(Polygon(
            vertices,
            closed=True,
            facecolor=self.poly_color,
            edgecolor=self.poly_color,
            linewidth=self._pt(self.poly_linewidth),
            joinstyle='round',
            zorder=1,
        ))

    def _draw_axes(self, ax, graph: GraphDescriptor) -> None:
        g = graph.geometry
        lw = self._pt(self.axis_linewidth)
        ax.plot([g.axis_margin, g.width - g.axis_margin], [g.mid, g.mid],
                color=self.axis_color, linewidth=lw, solid_capstyle='butt', zorder=2)
        ax.plot([g.mid, g.mid], [g.axis_margin, g.width - g.axis_margin],
                color=self.axis_color, linewidth=lw, solid_capstyle='butt', zorder=2)

    def _draw_marker(self, ax, x: float, y: float) -> None:
        """Ring of outer radius r and stroke r/2 around a white disc."""
        ax.add_patch(Circle(
            (x, y),
            self.marker_radius,
            facecolor=self.background_color,
            edgecolor=self.axis_color,
            linewidth=self._pt(self.marker_radius / 2),
            zorder=3,
        ))

    def _draw_markers(self, ax, graph: GraphDescriptor) -> None:
        g = graph.geometry
        record = graph.record
        if record.code_reviews > 0:
            self._draw_marker(ax, g.mid, g.code_review_y)
        if record.issues > 0:
            self._draw_marker(ax, g.issues_x, g.mid)
        if record.prs > 0:
            self._draw_marker(ax, g.mid, g.prs_y)
        if record.commits > 0:
            self._draw_marker(ax, g.commits_x, g.mid)

    def _text(self, ax, s: str, x: float, y: float, size_px: float, color: str) -> None:
        ax.text(x, y, s, ha='center', va='center', fontsize=self._pt(size_px),
                color=color, family=self.font_family, zorder=4)

    def _draw_labels(self, ax, graph: GraphDescriptor) -> None:
        g = graph.geometry
        r = graph.record
        f, w, h, mid = g.factor, g.width, g.height, g.mid

        label = lambda s, x, y: self._text(ax, s, x, y, self.label_font_size, self.label_color)
        value = lambda n, x, y: self._text(ax, f"{n}%", x, y, self.value_font_size, self.value_color)

        label(r.subject, mid, h - 1.25 * f)
        label(r.period, mid, h - 0.75 * f)
        label(CAPTIONS["code_reviews"], mid, 1.5 * f)
        label(CAPTIONS["issues"], w - 1.25 * f, mid + 0.25 * f)
        label(CAPTIONS["prs"], mid, w - 1.25 * f)
        label(CAPTIONS["commits"], 1.25 * f, mid + 0.25 * f)

        value(r.code_reviews, mid, f)
        value(r.issues, w - 1.25 * f, mid - 0.25 * f)
        value(r.prs, mid, w - 1.75 * f)
        value(r.commits, 1.25 * f, mid - 0.25 * f)

    def draw(self, graph: GraphDescriptor) -> Figure:
        """Build the figure of one graph descriptor."""
        g = graph.geometry
        fig, ax = self._setup_figure(g.width, g.height)

        self._draw_polygon(ax, graph)
        self._draw_axes(ax, graph)
        self._draw_markers(ax, graph)
        self._draw_labels(ax, graph)
        return fig

    def to_bytes(self, fig: Figure, fmt: str = "png") -> bytes:
        """Serialize a figure as ``png`` or ``svg``."""
        buf = io.BytesIO()
        with _DRAW_LOCK:
            fig.savefig(buf, format=fmt, dpi=self.dpi, facecolor=fig.get_facecolor())
        return buf.getvalue()

    def render(self, graph: GraphDescriptor, fmt: str = "png") -> bytes:
        """Draw a graph descriptor and serialize it.

        Parameters
        ----------
        graph : GraphDescriptor
            Record and geometry of one period.
        fmt : str, optional
            ``"png"`` (default) or ``"svg"``.

        Returns
        -------
        bytes
            The encoded frame.
        """
        fig = self.draw(graph)
        data = self.to_bytes(fig, fmt)
        logger.debug("Rendered %s/%s as %s (%d bytes)",
                     graph.record.subject, graph.record.period, fmt, len(data))
        return data

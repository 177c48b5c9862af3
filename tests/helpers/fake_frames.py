"""Fast stand-ins for the matplotlib renderer in pipeline tests."""

import io
import random
import time

from PIL import Image


def png_bytes(size=(20, 24), color=(255, 255, 255)):
    """Encode a single-color RGB PNG."""
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


def period_color(period):
    """Distinct color per period so GIF frames never merge."""
    n = int(period)
    return ((n * 37) % 256, (n * 91) % 256, (n * 13) % 256)


class FakeRenderer:
    """Draws a solid frame colored by period, with an optional random delay."""

    def __init__(self, size=(20, 24), max_delay=0.0, sizes=None):
        self.size = size
        self.sizes = sizes or {}
        self.max_delay = max_delay
        self.formats = []

    def render(self, graph, fmt="png"):
        self.formats.append(fmt)
        if self.max_delay:
            time.sleep(random.uniform(0, self.max_delay))
        period = graph.record.period
        return png_bytes(self.sizes.get(period, self.size), period_color(period))


class FailingRenderer(FakeRenderer):
    """Raises for the given periods, renders the rest."""

    def __init__(self, failing, **kwargs):
        super().__init__(**kwargs)
        self.failing = set(failing)

    def render(self, graph, fmt="png"):
        if graph.record.period in self.failing:
            raise RuntimeError(f"cannot draw {graph.record.period}")
        return super().render(graph, fmt)

"""Pipeline sink: collects rendered frames and restores period order."""

import logging
from typing import List

from gifhub.contracts import assert_uniform_frames
from gifhub.contracts.failure import EmptyResultError, RenderError
from gifhub.models import RenderedFrame
from gifhub.pipeline.channel import Channel
from gifhub.pipeline.stages import RenderFailure

__all__ = ['FrameSink']

logger = logging.getLogger(__name__)


class FrameSink:
    """Drains the render channel and returns frames sorted by period.

    The sort is the only ordering guarantee of the whole pipeline; frames
    arrive in completion order.
    """

    def __init__(self, input_channel: Channel):
        self.input_channel = input_channel

    def collect(self) -> List[RenderedFrame]:
        """Block until the render channel closes, then sort.

        Returns
        -------
        list of RenderedFrame
            Ascending by period.

        Raises
        ------
        RenderError
            If any render worker reported a failure.
        EmptyResultError
            If no frame arrived.
        """
        frames = []
        failures = []
        for item in self.input_channel:
            if isinstance(item, RenderFailure):
                failures.append(item)
            else:
                frames.append(item)

        if failures:
            first = min(failures, key=lambda f: f.period)
            raise RenderError(
                f"failed to render {len(failures)} frame(s), first {first.period}: {first.error}"
            ) from first.error

        if not frames:
            raise EmptyResultError("render", "no frames reached the sink")

        frames.sort(key=lambda f: f.period)
        logger.info("Collected %d frames: %s", len(frames), [f.period for f in frames])
        return frames

    def images(self) -> List[bytes]:
        """Raster images in period order, ready for the encoder."""
        images = [frame.image for frame in self.collect()]
        width, height = assert_uniform_frames(images)
        logger.debug("Frame size %dx%d", width, height)
        return images

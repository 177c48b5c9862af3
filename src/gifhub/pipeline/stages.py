"""Pipeline stages: period source, fetch/parse, layout and render.

The fetch and render stages fan out: one worker thread per input item, no
cap. A stage closes its output channel once the completion barrier has
counted every worker it launched, regardless of how many produced output.
Completion order inside a fan-out stage is unspecified.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, TYPE_CHECKING

from gifhub.contracts import assert_activity
from gifhub.contracts.failure import ExtractionError, NetworkError, ParseError
from gifhub.graph.layout import coordinates
from gifhub.models import ActivityRecord, GraphDescriptor, RenderedFrame
from gifhub.pipeline.channel import Channel, CompletionBarrier

if TYPE_CHECKING:
    from gifhub.encoding.base import FrameEncoder
    from gifhub.graph.renderer import ActivityRenderer
    from gifhub.schemas.internal import InternalLayoutConfig
    from gifhub.scraper.client import ProfileClient

__all__ = [
    'unique_periods',
    'period_source',
    'FanOutStage',
    'FetchStage',
    'LayoutStage',
    'RenderStage',
    'RenderFailure',
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderFailure:
    """Sent downstream in place of a frame when rendering a period failed."""
    period: str
    error: BaseException


# ============================================================================
# Source
# ============================================================================

def unique_periods(periods: Iterable[str]) -> List[str]:
    """Drop repeated periods, keeping first occurrences in order."""
    seen = set()
    unique = []
    for period in periods:
        if period in seen:
            logger.warning("Duplicate period %s ignored", period)
            continue
        seen.add(period)
        unique.append(period)
    return unique


def period_source(periods: Iterable[str]) -> Channel:
    """Emit every requested period into a closed channel.

    Returns
    -------
    Channel
        Already closed; holds each distinct period once.
    """
    unique = unique_periods(periods)
    out = Channel("periods", capacity=len(unique))
    for period in unique:
        out.put(period)
    out.close()
    return out


# ============================================================================
# Fan-out base
# ============================================================================

class FanOutStage(threading.Thread):
    """Dispatcher thread launching one worker thread per input item.

    Subclasses implement :meth:`process`, which runs in the worker and puts
    zero or one item on the output channel. Exceptions must be handled in
    ``process``; an escaping exception is logged and counts as no output.
    """

    def __init__(self, input_channel: Channel, output_channel: Channel, name: str):
        super().__init__(daemon=True, name=name)
        self.input_channel = input_channel
        self.output_channel = output_channel
        self.barrier = CompletionBarrier()
        self.launched = 0

    def item_key(self, item: Any) -> str:
        """Short identifier of an item for thread names and logs."""
        return str(item)

    def process(self, item: Any) -> None:
        raise NotImplementedError

    def _run_task(self, item: Any) -> None:
        try:
            self.process(item)
        except Exception:
            logger.exception("%s task for %s failed", self.name, self.item_key(item))
        finally:
            self.barrier.done()

    def run(self):
        logger.info("Starting %s", self.name)
        try:
            for item in self.input_channel:
                worker = threading.Thread(
                    target=self._run_task,
                    args=(item,),
                    name=f"{self.name}-{self.item_key(item)}",
                    daemon=True,
                )
                worker.start()
                self.launched += 1
        finally:
            self.barrier.expect(self.launched)
            self.barrier.wait()
            self.output_channel.close()
            logger.info("%s finished %d tasks", self.name, self.launched)


# ============================================================================
# Fetch / parse
# ============================================================================

class FetchStage(FanOutStage):
    """Fetches and parses the activity of every period in parallel.

    **Failure handling:** transport errors, non-200 responses, extraction and
    parse errors are caught in the worker, logged with the period and turn
    into "no record for this period". Sibling workers are unaffected.

    **Cancellation:** each worker checks ``cancel_event`` before issuing its
    request and emits nothing once it is set.

    Example usage (typically called by orchestrator)::

        fetch = FetchStage("octocat", client, period_ch, activity_ch)
        fetch.start()
    """

    def __init__(
        self,
        subject: str,
        client: "ProfileClient",
        input_channel: Channel,
        output_channel: Channel,
        cancel_event: Optional[threading.Event] = None,
        name: str = "Fetch",
    ):
        super().__init__(input_channel, output_channel, name=name)
        self.subject = subject
        self.client = client
        self.cancel_event = cancel_event or threading.Event()

    def process(self, period: str) -> None:
        if self.cancel_event.is_set():
            logger.info("Skipping %s: pipeline cancelled", period)
            return

        try:
            record = self.client.fetch_activity(self.subject, period)
            assert_activity(record, self.subject, period)
        except (NetworkError, ExtractionError, ParseError) as e:
            logger.warning("Scrape activity for %s: %s", period, e)
            return

        logger.info("Activity: %s", record)
        self.output_channel.put(record)


# ============================================================================
# Layout
# ============================================================================

class LayoutStage(threading.Thread):
    """Turns activity records into graph descriptors, one at a time.

    Keeps every record it forwards in ``records``; read it only after
    :meth:`join`.
    """

    def __init__(
        self,
        layout: "InternalLayoutConfig",
        input_channel: Channel,
        output_channel: Channel,
        name: str = "Layout",
    ):
        super().__init__(daemon=True, name=name)
        self.layout = layout
        self.input_channel = input_channel
        self.output_channel = output_channel
        self.records: List[ActivityRecord] = []

    def run(self):
        logger.info("Starting %s", self.name)
        try:
            for record in self.input_channel:
                graph = GraphDescriptor(record, coordinates(record, self.layout))
                self.records.append(record)
                self.output_channel.put(graph)
        finally:
            self.output_channel.close()
            logger.info("%s finished %d graphs", self.name, len(self.records))


# ============================================================================
# Render
# ============================================================================

class RenderStage(FanOutStage):
    """Renders and rasterizes every graph descriptor in parallel.

    A failing worker sends a :class:`RenderFailure` downstream instead of a
    frame; the sink turns it into a pipeline-level ``RenderError``.
    """

    def __init__(
        self,
        renderer: "ActivityRenderer",
        encoder: "FrameEncoder",
        input_channel: Channel,
        output_channel: Channel,
        name: str = "Render",
    ):
        super().__init__(input_channel, output_channel, name=name)
        self.renderer = renderer
        self.encoder = encoder

    def item_key(self, item: GraphDescriptor) -> str:
        return item.record.period

    def process(self, graph: GraphDescriptor) -> None:
        period = graph.record.period
        try:
            source = self.renderer.render(graph, fmt=self.encoder.source_format)
            image = self.encoder.rasterize(source)
        except Exception as e:
            logger.error("Render failed for %s: %s", period, e)
            self.output_channel.put(RenderFailure(period, e))
            return

        logger.info("✓ Rendered %s", period)
        self.output_channel.put(RenderedFrame(image=image, period=period))

"""Multi-threaded pipeline orchestration.

Wires source, fetch, layout and render stages with channels, drains the sink
and hands the ordered frames to the encoder. Manages logging, output paths
and temporary artifacts.
"""

import logging
import threading
import time
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd

from gifhub.contracts.failure import EmptyResultError
from gifhub.encoding.base import FrameEncoder, create_encoder
from gifhub.graph.renderer import ActivityRenderer
from gifhub.models import METRIC_FIELDS, ActivityRecord
from gifhub.pipeline.artifact_tracker import ArtifactTracker
from gifhub.pipeline.channel import Channel
from gifhub.pipeline.sink import FrameSink
from gifhub.pipeline.stages import (
    FetchStage,
    LayoutStage,
    RenderStage,
    period_source,
    unique_periods,
)
from gifhub.schemas import InternalConfig
from gifhub.scraper.client import ProfileClient
from gifhub.setup_directories import (
    get_log_path,
    get_output_path,
    get_summary_path,
    setup_output_directories,
)

__all__ = ['PipelineOrchestrator']

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ["subject", "period", *METRIC_FIELDS]


class PipelineOrchestrator:
    """Runs the activity GIF pipeline for one subject.

    This is the main entry point for running ``gifhub``. One call to
    :meth:`run` builds a fresh set of channels and stage threads:

    **Pipeline Architecture:**

    1. **Source**: emits every requested period once (duplicates dropped)
       into a closed channel.

    2. **Fetch** (fan-out): one thread per period fetches and parses the
       activity overview. Failed periods are logged and dropped.

    3. **Layout**: one thread maps every record onto polygon geometry.

    4. **Render** (fan-out): one thread per graph draws the frame and
       rasterizes it through the encoder.

    5. **Sink**: drains the render channel and sorts frames by period.

    6. **Encoder**: bundles the ordered frames into one looping GIF.

    **Channels:**

    Every channel is sized to the period count, so no producer ever waits.
    Completion order inside a fan-out stage is unspecified; the sink's sort
    is the only ordering guarantee.

    **Failures:**

    - No periods, no fetched record, or no rendered frame raise
      ``EmptyResultError`` naming the stage.
    - Any render failure raises ``RenderError`` after the sink has drained.
    - Encoding failures raise ``EncodeError``.

    **Logging:**

    :meth:`start` sends output to the console and to
    ``logs/gifhub_<subject>.log`` at the configured level. :meth:`run` leaves
    logging untouched.

    Example usage::

        from gifhub.schemas import resolve_config, ParamConfig
        from gifhub.pipeline.orchestrator import PipelineOrchestrator

        config = resolve_config(ParamConfig(), {"PERIODS": "2019,2020"})
        orch = PipelineOrchestrator(config)
        gif_path = orch.start("octocat")
    """

    def __init__(
        self,
        config: InternalConfig,
        output_dirs: Optional[Dict[str, Path]] = None,
        client: Optional[ProfileClient] = None,
        renderer: Optional[ActivityRenderer] = None,
        encoder: Optional[FrameEncoder] = None,
        tracker: Optional[ArtifactTracker] = None,
    ):
        """Initialize orchestrator.

        Parameters
        ----------
        config : InternalConfig
            Fully resolved runtime configuration.
        output_dirs : dict, optional
            Paths from ``setup_output_directories()``. Created from
            ``config.output.out_dir`` if not provided.
        client, renderer, encoder, tracker : optional
            Collaborators; built from ``config`` when omitted. Allows
            injection for testing.
        """
        self.config = config
        self.output_dirs = output_dirs or setup_output_directories(config.output.out_dir)

        self.client = client or ProfileClient(config)
        self.renderer = renderer or ActivityRenderer(config)
        self.tracker = tracker if tracker is not None else ArtifactTracker()
        self.encoder = encoder or create_encoder(
            config, work_dir=self.output_dirs["tmp"], tracker=self.tracker
        )

        self._cancel_event = threading.Event()
        self._records: List[ActivityRecord] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _setup_logging(self, subject: str):
        """Configure console and file logging for one run.

        Replaces every handler of the root logger.
        """
        log_level = getattr(logging, self.config.logging.level, logging.INFO)
        log_path = get_log_path(self.output_dirs, subject)

        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        root = logging.getLogger()
        root.setLevel(log_level)
        for handler in root.handlers[:]:
            root.removeHandler(handler)

        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

        ch = logging.StreamHandler()
        ch.setLevel(log_level)
        ch.setFormatter(formatter)
        root.addHandler(ch)

        logger.info("Logging: level=%s, file=%s", self.config.logging.level, log_path)

    def start(self, subject: str, periods: Optional[Sequence[str]] = None) -> Path:
        """Configure logging, run the pipeline and clean up.

        Parameters
        ----------
        subject : str
            Account whose activity is graphed.
        periods : sequence of str, optional
            Periods to graph. Falls back to ``config.periods``, then to
            discovery from the profile page.

        Returns
        -------
        Path
            The written GIF.

        Raises
        ------
        GifhubError
            Any stage-level failure, after it has been logged.
        KeyboardInterrupt
            User pressed Ctrl+C; outstanding fetches are cancelled.
        """
        self._setup_logging(subject)

        logger.info("=" * 60)
        logger.info("Starting Activity GIF Pipeline for %s", subject)
        logger.info("=" * 60)

        started = time.time()
        try:
            path = self.run(subject, periods)
            logger.info("Created: %s", path)
            return path
        except KeyboardInterrupt:
            logger.info("Shutdown signal received (Ctrl+C)")
            self.cancel()
            raise
        except Exception as e:
            logger.error("Pipeline failed: %s", e)
            raise
        finally:
            if self.config.encoder.keep_artifacts:
                logger.info("Keeping %d temporary artifacts", len(self.tracker))
            else:
                self.tracker.cleanup()
            logger.info("=" * 60)
            logger.info("Pipeline stopped. Runtime: %.1f seconds", time.time() - started)
            logger.info("=" * 60)

    def cancel(self):
        """Ask fetch workers that have not yet issued their request to skip it."""
        logger.info("Cancelling pipeline...")
        self._cancel_event.set()

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _resolve_periods(self, subject: str, periods: Optional[Sequence[str]]) -> List[str]:
        if periods is None:
            periods = self.config.periods
        if periods is None:
            logger.info("Discovering periods for %s...", subject)
            periods = self.client.discover_periods(subject)
            logger.info("Periods: %s", periods)

        periods = unique_periods(periods)
        if not periods:
            raise EmptyResultError("source", f"no periods to fetch for {subject}")
        return periods

    def run(self, subject: str, periods: Optional[Sequence[str]] = None) -> Path:
        """Run every stage once and write the GIF.

        Blocks until all stage threads have finished. Does not configure
        logging; see :meth:`start`.

        Returns
        -------
        Path
            ``<out_dir>/<filename_pattern>`` with ``{subject}`` substituted.
        """
        self._records = []
        periods = self._resolve_periods(subject, periods)
        n = len(periods)
        logger.info("Fetching %d periods: %s", n, ", ".join(periods))

        period_ch = period_source(periods)
        activity_ch = Channel("activities", capacity=n)
        graph_ch = Channel("graphs", capacity=n)
        frame_ch = Channel("frames", capacity=n)

        fetch = FetchStage(subject, self.client, period_ch, activity_ch,
                           cancel_event=self._cancel_event)
        layout = LayoutStage(self.config.layout, activity_ch, graph_ch)
        render = RenderStage(self.renderer, self.encoder, graph_ch, frame_ch)

        for stage in (fetch, layout, render):
            stage.start()
            logger.debug("✓ %s started", stage.name)

        fetch.join()
        layout.join()
        self._records = list(layout.records)
        if not self._records:
            render.join()
            raise EmptyResultError("fetch", f"no activity fetched for {subject}")
        logger.info("Fetched %d/%d periods", len(self._records), n)

        images = FrameSink(frame_ch).images()
        render.join()

        gif = self.encoder.bundle(
            images,
            duration_ms=self.config.encoder.duration_ms,
            scale=self.config.encoder.scale,
        )

        path = get_output_path(self.output_dirs, subject, self.config.output.filename_pattern)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(gif)
        logger.info("✅ Wrote %d frames to %s", len(images), path)

        if self.config.output.save_summary:
            self.save_results(subject)

        return path

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def get_results(self) -> pd.DataFrame:
        """Return the activity records of the last run as a DataFrame.

        Returns
        -------
        pd.DataFrame
            One row per fetched period, sorted by period, with columns
            ``subject``, ``period`` and one per metric. Empty if nothing
            was fetched yet.
        """
        if not self._records:
            return pd.DataFrame(columns=SUMMARY_COLUMNS)

        df = pd.DataFrame([asdict(r) for r in self._records], columns=SUMMARY_COLUMNS)
        return df.sort_values("period").reset_index(drop=True)

    def save_results(self, subject: str) -> Path:
        """Export the activity records of the last run to CSV."""
        filepath = get_summary_path(self.output_dirs, subject)
        df = self.get_results()
        df.to_csv(filepath, index=False)
        logger.info("Exported %d rows to: %s", len(df), filepath)
        return filepath

"""Pipeline orchestration and stage threads.

- channel: Close-on-completion channels and the fan-out completion barrier
- stages: Source, fetch, layout and render stages
- sink: Frame collection and period ordering
- artifact_tracker: Thread-safe temporary file bookkeeping
- orchestrator: Wires the stages and writes the GIF
"""

from gifhub.pipeline.artifact_tracker import ArtifactTracker
from gifhub.pipeline.channel import Channel, ChannelClosed, CompletionBarrier
from gifhub.pipeline.stages import FetchStage, LayoutStage, RenderStage, period_source
from gifhub.pipeline.sink import FrameSink
from gifhub.pipeline.orchestrator import PipelineOrchestrator

__all__ = [
    'ArtifactTracker',
    'Channel',
    'ChannelClosed',
    'CompletionBarrier',
    'FetchStage',
    'LayoutStage',
    'RenderStage',
    'period_source',
    'FrameSink',
    'PipelineOrchestrator',
]

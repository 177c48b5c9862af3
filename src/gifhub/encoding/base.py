"""Encoder boundary between the pipeline and image tooling.

The pipeline only ever calls two operations:

- ``rasterize(source bytes) -> PNG bytes`` from a render worker
- ``bundle(PNG frames, duration, scale) -> GIF bytes`` after the sink

so an in-process and a subprocess backed implementation are interchangeable.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, TYPE_CHECKING

from gifhub.contracts.failure import EncodeError

if TYPE_CHECKING:
    from gifhub.schemas import InternalConfig
    from gifhub.pipeline.artifact_tracker import ArtifactTracker

__all__ = ['FrameEncoder', 'create_encoder']


class FrameEncoder(ABC):
    """Rasterize frames and bundle them into an animated image.

    Attributes
    ----------
    source_format : str
        Format the renderer must serialize frames in before
        :meth:`rasterize` is called (``"png"`` or ``"svg"``).
    """

    source_format = "png"

    @abstractmethod
    def rasterize(self, source: bytes) -> bytes:
        """Turn one serialized frame into PNG bytes."""

    @abstractmethod
    def bundle(self, frames: List[bytes], duration_ms: int, scale: float) -> bytes:
        """Assemble PNG frames, in display order, into one animated GIF."""

    @staticmethod
    def check_bundle_args(frames: List[bytes], duration_ms: int, scale: float) -> None:
        """Reject arguments no backend can encode.

        Raises
        ------
        EncodeError
            No frames, a non-positive duration or a non-positive scale.
        """
        if not frames:
            raise EncodeError("no frames to bundle")
        if duration_ms <= 0:
            raise EncodeError(f"frame duration must be positive, got {duration_ms}")
        if scale <= 0:
            raise EncodeError(f"scale must be positive, got {scale}")


def create_encoder(
    config: "InternalConfig",
    work_dir: Optional[Path] = None,
    tracker: Optional["ArtifactTracker"] = None,
) -> FrameEncoder:
    """Build the encoder selected by ``config.encoder.backend``.

    Parameters
    ----------
    config : InternalConfig
        Runtime configuration.
    work_dir : Path, optional
        Directory for intermediate files (subprocess backend only).
    tracker : ArtifactTracker, optional
        Receives every intermediate path (subprocess backend only).
    """
    if config.encoder.backend == "subprocess":
        from gifhub.encoding.subprocess_encoder import SubprocessEncoder
        from gifhub.pipeline.artifact_tracker import ArtifactTracker

        if work_dir is None:
            raise ValueError("work_dir is required for the subprocess backend")
        return SubprocessEncoder(
            rasterizer_command=config.encoder.rasterizer_command,
            bundler_command=config.encoder.bundler_command,
            work_dir=work_dir,
            tracker=tracker if tracker is not None else ArtifactTracker(),
        )

    from gifhub.encoding.pillow_encoder import PillowEncoder
    return PillowEncoder()

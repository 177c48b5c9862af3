"""Rasterize/bundle backend that shells out to external tools.

Defaults to ``rsvg-convert`` for SVG rasterization and ImageMagick
``convert`` for GIF bundling. Both command lines are templates from the
encoder config.
"""

import logging
import subprocess
import uuid
from pathlib import Path
from typing import Callable, List, Optional

from gifhub.contracts.failure import EncodeError
from gifhub.encoding.base import FrameEncoder
from gifhub.pipeline.artifact_tracker import ArtifactTracker

__all__ = ['SubprocessEncoder']

logger = logging.getLogger(__name__)


class SubprocessEncoder(FrameEncoder):
    """Encode frames through external executables.

    **Command templates:**

    - Rasterizer: ``{input}`` (SVG path) and ``{output}`` (PNG path)
    - Bundler: ``{inputs}`` (expands to one argument per frame, in order),
      ``{output}`` (GIF path), ``{delay_cs}`` (frame delay in hundredths of
      a second) and ``{scale_pct}`` (resize percentage)

    **Artifacts:** every file written in ``work_dir`` is recorded in the
    shared :class:`ArtifactTracker`. Render workers call :meth:`rasterize`
    concurrently; file names are unique per call.

    Example usage::

        encoder = SubprocessEncoder(
            rasterizer_command=["rsvg-convert", "-f", "png", "-o", "{output}", "{input}"],
            bundler_command=["convert", "-delay", "{delay_cs}", "-loop", "0",
                             "-resize", "{scale_pct}%", "{inputs}", "{output}"],
            work_dir=Path("out/tmp"),
            tracker=ArtifactTracker(),
        )
    """

    source_format = "svg"

    def __init__(
        self,
        rasterizer_command: List[str],
        bundler_command: List[str],
        work_dir: Path,
        tracker: ArtifactTracker,
        runner: Optional[Callable] = None,
    ):
        """Initialize encoder.

        Parameters
        ----------
        rasterizer_command, bundler_command : list of str
            Argument templates, see class docstring.
        work_dir : Path
            Directory for intermediate files. Created if missing.
        tracker : ArtifactTracker
            Shared list receiving every intermediate path.
        runner : callable, optional
            ``subprocess.run`` compatible callable (for testing).
        """
        self.rasterizer_command = list(rasterizer_command)
        self.bundler_command = list(bundler_command)
        self.work_dir = Path(work_dir)
        self.tracker = tracker
        self._run = runner or subprocess.run

        self.work_dir.mkdir(parents=True, exist_ok=True)

    def _new_path(self, prefix: str, suffix: str) -> Path:
        path = self.work_dir / f"{prefix}-{uuid.uuid4().hex}{suffix}"
        self.tracker.add(path)
        return path

    def _execute(self, cmd: List[str]) -> None:
        logger.debug("Running: %s", " ".join(cmd))
        try:
            self._run(cmd, check=True, capture_output=True)
        except FileNotFoundError as e:
            raise EncodeError(f"executable not found: {cmd[0]}") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode(errors="replace").strip()
            raise EncodeError(f"{cmd[0]} exited with {e.returncode}: {stderr}") from e

    @staticmethod
    def _read_output(path: Path, tool: str) -> bytes:
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise EncodeError(f"{tool} produced no output at {path}") from e

    def rasterize(self, source: bytes) -> bytes:
        svg_path = self._new_path("frame", ".svg")
        png_path = self._new_path("frame", ".png")
        svg_path.write_bytes(source)

        cmd = [arg.format(input=svg_path, output=png_path) for arg in self.rasterizer_command]
        self._execute(cmd)
        return self._read_output(png_path, cmd[0])

    def bundle(self, frames: List[bytes], duration_ms: int, scale: float) -> bytes:
        self.check_bundle_args(frames, duration_ms, scale)

        batch = uuid.uuid4().hex
        inputs = []
        for i, data in enumerate(frames):
            path = self.work_dir / f"bundle-{batch}-{i:04d}.png"
            self.tracker.add(path)
            path.write_bytes(data)
            inputs.append(str(path))

        gif_path = self._new_path("bundle", ".gif")
        values = {
            "output": gif_path,
            "delay_cs": max(1, round(duration_ms / 10)),
            "scale_pct": format(scale * 100, "g"),
        }

        cmd = []
        for arg in self.bundler_command:
            if arg == "{inputs}":
                cmd.extend(inputs)
            else:
                cmd.append(arg.format(**values))

        self._execute(cmd)
        logger.info("Bundled %d frames with %s", len(frames), cmd[0])
        return self._read_output(gif_path, cmd[0])

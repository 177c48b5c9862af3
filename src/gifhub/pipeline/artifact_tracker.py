"""Thread-safe bookkeeping of temporary files produced during a run.

Render workers of the subprocess backend append the intermediate SVG and PNG
paths concurrently; the orchestrator removes them once the GIF is written.
"""

import logging
import threading
from pathlib import Path
from typing import List, Union

__all__ = ['ArtifactTracker']

logger = logging.getLogger(__name__)


class ArtifactTracker:
    """Append-only list of temporary artifact paths guarded by a lock.

    Every append, snapshot and cleanup holds the lock, so any number of
    worker threads may call :meth:`add` at the same time.

    Example usage::

        tracker = ArtifactTracker()
        tracker.add(work_dir / "frame-2019.svg")
        ...
        removed = tracker.cleanup()
    """

    def __init__(self):
        self._paths: List[Path] = []
        self._lock = threading.Lock()

    def add(self, path: Union[str, Path]) -> None:
        with self._lock:
            self._paths.append(Path(path))

    def paths(self) -> List[Path]:
        """Snapshot of the tracked paths, in append order."""
        with self._lock:
            return list(self._paths)

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)

    def cleanup(self) -> int:
        """Delete every tracked file that still exists and forget all paths.

        Returns
        -------
        int
            Number of files removed.
        """
        with self._lock:
            paths, self._paths = self._paths, []

        removed = 0
        for path in paths:
            try:
                path.unlink()
                removed += 1
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.warning("Could not remove artifact %s: %s", path, e)

        logger.debug("Removed %d/%d temporary artifacts", removed, len(paths))
        return removed

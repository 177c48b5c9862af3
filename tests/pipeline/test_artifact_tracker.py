"""Tests for the lock-guarded artifact tracker."""

import threading

import pytest

from gifhub.pipeline.artifact_tracker import ArtifactTracker

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]


def test_concurrent_adds_are_all_kept(temp_dir):
    tracker = ArtifactTracker()

    def add_many(worker):
        for i in range(200):
            tracker.add(temp_dir / f"w{worker}-{i}.png")

    threads = [threading.Thread(target=add_many, args=(w,)) for w in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(tracker) == 8 * 200
    assert len(set(tracker.paths())) == 8 * 200


def test_cleanup_removes_existing_files(temp_dir):
    tracker = ArtifactTracker()
    existing = temp_dir / "frame.svg"
    existing.write_text("<svg/>")
    tracker.add(existing)
    tracker.add(temp_dir / "never-written.png")

    assert tracker.cleanup() == 1
    assert not existing.exists()
    assert len(tracker) == 0


def test_paths_is_snapshot(temp_dir):
    tracker = ArtifactTracker()
    tracker.add(str(temp_dir / "a"))
    snapshot = tracker.paths()
    tracker.add(temp_dir / "b")

    assert snapshot == [temp_dir / "a"]

"""Unit tests for catalog/artifacts.py."""
from __future__ import annotations

from pathlib import Path

from catalog.artifacts import ArtifactTracker


def _touch(path: Path) -> Path:
    path.write_text("x", encoding="utf-8")
    return path


def test_release_all_removes_tracked_files(tmp_path):
    tracker = ArtifactTracker()
    paths = [_touch(tmp_path / f"page{i}.html") for i in range(3)]
    for path in paths:
        tracker.track(path)

    assert len(tracker) == 3
    assert tracker.release_all() == 3
    assert not any(path.exists() for path in paths)
    assert len(tracker) == 0


def test_release_continues_past_failures(tmp_path):
    tracker = ArtifactTracker()
    blocker = tmp_path / "not-a-file"
    blocker.mkdir()
    after = _touch(tmp_path / "after.html")

    tracker.track(tmp_path / "missing.html")
    tracker.track(blocker)
    tracker.track(after)

    assert tracker.release_all() == 1
    assert not after.exists()
    assert blocker.exists()


def test_release_runs_once(tmp_path):
    tracker = ArtifactTracker()
    tracker.track(_touch(tmp_path / "a.html"))

    assert tracker.release_all() == 1
    assert tracker.released

    late = _touch(tmp_path / "late.html")
    tracker.track(late)
    assert tracker.release_all() == 0
    assert late.exists()


def test_iteration_yields_paths_in_order(tmp_path):
    tracker = ArtifactTracker()
    tracker.track(str(tmp_path / "a"))
    tracker.track(tmp_path / "b")

    assert list(tracker) == [tmp_path / "a", tmp_path / "b"]

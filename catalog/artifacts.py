"""
Temporary artifact tracking.

Every full render writes a fresh file; the tracker remembers them so the
catalog can delete them all at teardown.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List

logger = logging.getLogger(__name__)


class ArtifactTracker:
    """Append-only register of transient files, removed in one pass."""

    def __init__(self):
        self._paths: List[Path] = []
        self._released = False

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self._paths))

    @property
    def released(self) -> bool:
        return self._released

    def track(self, path: Path) -> None:
        """Register a transient file for removal at teardown."""
        if self._released:
            logger.warning(f"Tracking {path} after release; it will not be cleaned up")
        self._paths.append(Path(path))

    def release_all(self) -> int:
        """Remove every tracked file.

        Removal is best-effort: a failure is logged and the next file is tried.
        Only the first call does anything.

        Returns:
            Number of files actually removed
        """
        if self._released:
            return 0
        self._released = True

        removed = 0
        for path in self._paths:
            try:
                path.unlink()
                removed += 1
            except FileNotFoundError:
                logger.debug(f"Artifact already gone: {path}")
            except OSError as exc:
                logger.warning(f"Failed to remove artifact {path}: {exc}")

        logger.debug(f"Released {removed} of {len(self._paths)} artifacts")
        self._paths.clear()
        return removed

"""Polling file-change watcher.

Compares modification-time snapshots of the watched paths at a fixed
interval and reports added, changed and removed files.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional


logger = logging.getLogger(__name__)


@dataclass
class WatchConfig:
    """Configuration for the change watcher."""
    paths: List[Path]
    poll_ms: int = 500


@dataclass
class ChangeEvent:
    """A single detected change."""
    kind: str  # added | changed | removed
    path: Path


class ChangeWatcher:
    """Detects file changes under a set of files and directories."""

    def __init__(self, config: WatchConfig):
        """
        Initialize watcher and take the baseline snapshot.

        Args:
            config: WatchConfig with watched paths and polling interval
        """
        self.config = config
        self.paths = [Path(p) for p in config.paths]
        self._snapshot = self.snapshot()
        self.poll_count = 0

    def snapshot(self) -> Dict[Path, float]:
        """Map every watched file to its modification time."""
        mtimes: Dict[Path, float] = {}
        for path in self.paths:
            if path.is_file():
                self._record(mtimes, path)
            elif path.is_dir():
                for child in path.rglob("*"):
                    if child.is_file():
                        self._record(mtimes, child)
        return mtimes

    @staticmethod
    def _record(mtimes: Dict[Path, float], path: Path):
        try:
            mtimes[path] = path.stat().st_mtime
        except FileNotFoundError:
            # Removed between listing and stat
            pass

    def poll(self) -> List[ChangeEvent]:
        """Take a new snapshot and diff it against the previous one."""
        self.poll_count += 1
        current = self.snapshot()
        previous = self._snapshot

        events = []
        for path in sorted(current.keys() | previous.keys()):
            if path not in previous:
                events.append(ChangeEvent("added", path))
            elif path not in current:
                events.append(ChangeEvent("removed", path))
            elif current[path] != previous[path]:
                events.append(ChangeEvent("changed", path))

        self._snapshot = current
        return events

    def run(
        self,
        on_change: Callable[[List[ChangeEvent]], None],
        max_polls: Optional[int] = None
    ) -> None:
        """
        Poll until interrupted (or max_polls is reached).

        Args:
            on_change: Called with each non-empty batch of events
            max_polls: Stop after this many polls (None polls forever)
        """
        poll_interval_sec = self.config.poll_ms / 1000.0
        polls = 0

        while max_polls is None or polls < max_polls:
            time.sleep(poll_interval_sec)
            polls += 1

            events = self.poll()
            if events:
                on_change(events)

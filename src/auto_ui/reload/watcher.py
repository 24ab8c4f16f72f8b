"""Polling file watcher that posts changed paths into a channel."""

import queue
import threading
from pathlib import Path

from ..core.logging_config import get_logger

logger = get_logger(__name__)


class FileWatcher:
    """
    Watches files for changes using mtime polling on a daemon thread.

    Changed (or newly created) paths are put into `channel`; the UI thread
    drains it. Nothing else crosses the thread boundary.
    """

    def __init__(
        self,
        paths: list[Path],
        channel: "queue.Queue[Path]",
        patterns: list[str] | None = None,
        poll_interval: float = 0.5,
    ):
        """
        Initialize the file watcher.

        Args:
            paths: Directories or files to watch
            channel: Queue receiving changed file paths
            patterns: Glob patterns matched inside directories
            poll_interval: Seconds between scans
        """
        self.paths = [Path(p) for p in paths]
        self.channel = channel
        self.patterns = patterns or ["*.at"]
        self.poll_interval = poll_interval

        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._file_mtimes: dict[Path, float] = {}

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Record current mtimes and start the polling thread."""
        self._file_mtimes = self.scan_files()
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._watch_loop, name="auto-ui-watcher", daemon=True)
        self._thread.start()
        logger.info("watcher_started", paths=[str(p) for p in self.paths], files=len(self._file_mtimes))

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=2)
            self._thread = None
        logger.info("watcher_stopped")

    def scan_files(self) -> dict[Path, float]:
        """Current mtimes of every watched file."""
        mtimes: dict[Path, float] = {}

        for watch_path in self.paths:
            if not watch_path.exists():
                continue

            if watch_path.is_file():
                self._record(watch_path, mtimes)
            else:
                for pattern in self.patterns:
                    for file_path in watch_path.rglob(pattern):
                        self._record(file_path, mtimes)

        return mtimes

    @staticmethod
    def _record(path: Path, mtimes: dict[Path, float]) -> None:
        try:
            mtimes[path] = path.stat().st_mtime
        except OSError:
            # Deleted between listing and stat
            logger.debug("watch_stat_failed", path=str(path))

    def poll_once(self) -> list[Path]:
        """Scan once and post changed files; returns what was posted."""
        current = self.scan_files()
        changed = [
            path
            for path, mtime in current.items()
            if path not in self._file_mtimes or mtime > self._file_mtimes[path]
        ]
        self._file_mtimes = current

        for path in changed:
            logger.debug("file_changed", path=str(path))
            self.channel.put(path)
        return changed

    def _watch_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.poll_once()
            except Exception as e:
                logger.error("watcher_error", error=str(e), exc_info=True)
            self._stop_event.wait(self.poll_interval)

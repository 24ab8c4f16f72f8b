"""Hot-reload session: watcher thread → channel → bridge reload on the UI thread."""

import queue
from pathlib import Path

from ..bridge import BridgeError, InterpreterBridge, read_source
from ..core.config import Settings, get_settings
from ..core.hash import fingerprint
from ..core.logging_config import LogContext, get_logger
from .watcher import FileWatcher

logger = get_logger(__name__)


class HotReloadSession:
    """
    Keeps one bridge in sync with one source file.

    The watcher only posts paths; `poll()` runs on the UI thread, so every
    bridge call stays on that thread.

    Example:
        session = HotReloadSession(bridge, Path("counter.at"))
        session.start()
        while running:
            if session.poll():
                redraw(bridge.render())
    """

    def __init__(
        self,
        bridge: InterpreterBridge,
        path: str | Path,
        settings: Settings | None = None,
    ) -> None:
        self.bridge = bridge
        self.path = Path(path)
        self.settings = settings or get_settings()
        self.channel: "queue.Queue[Path]" = queue.Queue()
        self.watcher = FileWatcher(
            paths=[self.path],
            channel=self.channel,
            patterns=self.settings.watch_patterns,
            poll_interval=self.settings.watch_poll_interval,
        )
        self.fingerprint: str | None = None
        self.reload_count = 0
        self.last_error: BridgeError | None = None

    def load(self) -> None:
        """Initial load of the source file."""
        source = read_source(self.path, self.settings.max_source_size)
        self.bridge.interpret(source)
        self.bridge.source_path = self.path
        self.fingerprint = fingerprint(source, self.settings.fingerprint_algorithm)

    def start(self) -> None:
        if self.fingerprint is None:
            self.load()
        self.bridge.enable_hot_reload()
        self.watcher.start()

    def stop(self) -> None:
        self.watcher.stop()

    def poll(self) -> bool:
        """
        Apply pending changes.

        Drains the channel, skips content identical to what is loaded and
        reloads the bridge otherwise. A failed reload is logged and leaves the
        bridge on its previous program.

        Returns:
            True when the bridge was reloaded
        """
        pending = False
        while True:
            try:
                self.channel.get_nowait()
            except queue.Empty:
                break
            pending = True

        if not pending:
            return False
        return self.reload()

    def reload(self) -> bool:
        with LogContext(source=str(self.path)):
            try:
                source = read_source(self.path, self.settings.max_source_size)
            except BridgeError as e:
                self.last_error = e
                logger.warning("reload_read_failed", error=str(e))
                return False

            digest = fingerprint(source, self.settings.fingerprint_algorithm)
            if digest == self.fingerprint:
                logger.debug("reload_skipped_unchanged")
                return False

            try:
                self.bridge.reload(source)
            except BridgeError as e:
                self.last_error = e
                logger.warning("reload_failed", error=str(e))
                return False

            self.fingerprint = digest
            self.last_error = None
            self.reload_count += 1
            logger.info("reload_applied", count=self.reload_count)
            return True

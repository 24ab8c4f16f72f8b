"""Hot reload: file watching and state-preserving reloads."""

from .session import HotReloadSession
from .watcher import FileWatcher

__all__ = ["FileWatcher", "HotReloadSession"]

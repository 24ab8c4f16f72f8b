"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from ..bridge import InterpreterBridge, InterpreterRuntime
from ..lang import AutoInterpreter
from ..trans import TypeMap
from .config import Settings, get_settings


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide settings (explicit override or cached environment settings)."""
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_runtime(self) -> InterpreterRuntime:
        """Provide the reference Auto interpreter."""
        return AutoInterpreter()

    @singleton
    @provider
    def provide_type_map(self) -> TypeMap:
        return TypeMap()

    @singleton
    @provider
    def provide_bridge(self, runtime: InterpreterRuntime, settings: Settings) -> InterpreterBridge:
        """Provide the interpreter bridge wired to the runtime."""
        return InterpreterBridge(runtime, settings=settings)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])

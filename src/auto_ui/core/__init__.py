"""Core utilities and infrastructure."""

from .config import Policy, Settings, get_settings
from .hash import Algorithm, fingerprint, hash_bytes
from .json import JSONParseError, load_json, safe_json_dumps, validate_json_depth
from .logging_config import LogContext, configure_logging, get_logger


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Policy",
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "load_json",
    "safe_json_dumps",
    "JSONParseError",
    "validate_json_depth",
    # DI
    "create_container",
    # Hashing
    "Algorithm",
    "hash_bytes",
    "fingerprint",
]

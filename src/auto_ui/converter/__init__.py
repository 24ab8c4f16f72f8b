"""Node→View conversion."""

from .convert import KNOWN_KINDS, convert_node, convert_node_result
from .errors import (
    ConversionError,
    InvalidPropType,
    MessageRequired,
    MissingProp,
    UnknownKind,
)

__all__ = [
    "convert_node",
    "convert_node_result",
    "KNOWN_KINDS",
    "ConversionError",
    "UnknownKind",
    "MissingProp",
    "InvalidPropType",
    "MessageRequired",
]

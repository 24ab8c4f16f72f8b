"""auto-ui: backend-agnostic component model, Auto UI transpiler and interpreter bridge."""

from .component import Component
from .node import Node, placeholder_node
from .view import View

__version__ = "0.3.0"

__all__ = ["Component", "Node", "View", "placeholder_node", "__version__"]

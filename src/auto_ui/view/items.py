"""Auxiliary value types carried by composite View variants."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TabsPosition(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class SidebarPosition(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class AccordionItem:
    """One collapsible section of an Accordion."""

    title: str
    icon: str | None = None
    expanded: bool = False
    children: tuple[Any, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class NavItem:
    """One destination of a NavigationRail."""

    icon: str
    label: str
    badge: str | None = None

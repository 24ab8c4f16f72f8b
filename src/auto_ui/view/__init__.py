"""Backend-agnostic View IR."""

from .items import AccordionItem, NavItem, SidebarPosition, TabsPosition
from .serialize import view_to_dict
from .view import (
    INTERACTIVE_VARIANTS,
    Accordion,
    Button,
    Checkbox,
    Column,
    Container,
    ContainerBuilder,
    Empty,
    Input,
    InputBuilder,
    LayoutBuilder,
    List,
    ListBuilder,
    NavigationRail,
    ProgressBar,
    Radio,
    Row,
    Scrollable,
    ScrollableBuilder,
    Select,
    Sidebar,
    Slider,
    Table,
    TableBuilder,
    Tabs,
    Text,
    View,
    message_for,
)

__all__ = [
    # Base
    "View",
    "message_for",
    "view_to_dict",
    "INTERACTIVE_VARIANTS",
    # Variants
    "Empty",
    "Text",
    "Button",
    "Input",
    "Checkbox",
    "Radio",
    "Select",
    "Slider",
    "ProgressBar",
    "Row",
    "Column",
    "Container",
    "Scrollable",
    "List",
    "Table",
    "Tabs",
    "Accordion",
    "NavigationRail",
    "Sidebar",
    # Builders
    "LayoutBuilder",
    "ContainerBuilder",
    "ScrollableBuilder",
    "InputBuilder",
    "ListBuilder",
    "TableBuilder",
    # Items
    "AccordionItem",
    "NavItem",
    "TabsPosition",
    "SidebarPosition",
]

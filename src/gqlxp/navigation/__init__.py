"""Explorer navigation state: panel stack, breadcrumbs and category selector."""

from .breadcrumbs import Breadcrumbs
from .keys import GLOBAL_KEY_BINDINGS, KeyBinding, find_binding
from .manager import NavigationManager
from .panels import ListItem, ListPanel, Panel, StaticItem, empty_panel, panel_of
from .stack import PanelStack
from .type_selector import ALL_TYPES, GQLType, TypeSelector

__all__ = [
    "ALL_TYPES",
    "Breadcrumbs",
    "GLOBAL_KEY_BINDINGS",
    "GQLType",
    "KeyBinding",
    "ListItem",
    "ListPanel",
    "NavigationManager",
    "Panel",
    "PanelStack",
    "StaticItem",
    "TypeSelector",
    "empty_panel",
    "find_binding",
    "panel_of",
]

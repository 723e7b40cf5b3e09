"""Panel and list item capabilities consumed by the navigation manager.

Adapters that turn schema definitions into browsable content implement
``ListItem``; navigation never sees concrete schema types.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence


class ListItem(ABC):
    @property
    @abstractmethod
    def title(self) -> str: ...

    @property
    @abstractmethod
    def description(self) -> str: ...

    @property
    @abstractmethod
    def ref_name(self) -> str:
        """Stable identity used for breadcrumbs and select-by-name."""
        ...

    @property
    def filter_value(self) -> str:
        return self.title

    @property
    def type_name(self) -> str:
        """Named type this item resolves to, or "" when it has none."""
        return ""

    def open_panel(self) -> Optional["Panel"]:
        """Return the child panel for this item, if it has one."""
        return None


class Panel(ABC):
    @property
    @abstractmethod
    def title(self) -> str: ...

    @abstractmethod
    def items(self) -> List[ListItem]: ...

    @abstractmethod
    def selected_item(self) -> Optional[ListItem]: ...


@dataclass
class StaticItem(ListItem):
    """List item with fixed text and an optional child panel factory."""

    item_title: str
    item_description: str = ""
    item_type_name: str = ""
    item_ref_name: str = ""
    child: Optional[Callable[[], Optional[Panel]]] = None

    @property
    def title(self) -> str:
        return self.item_title

    @property
    def description(self) -> str:
        return self.item_description

    @property
    def ref_name(self) -> str:
        return self.item_ref_name or self.item_title

    @property
    def type_name(self) -> str:
        return self.item_type_name

    def open_panel(self) -> Optional[Panel]:
        return self.child() if self.child else None


@dataclass
class ListPanel(Panel):
    """Ordered list of items with a selection cursor and an optional filter."""

    all_items: List[ListItem] = field(default_factory=list)
    panel_title: str = ""
    selected_index: int = 0
    filter_text: str = ""

    @property
    def title(self) -> str:
        return self.panel_title

    def items(self) -> List[ListItem]:
        if not self.filter_text:
            return list(self.all_items)
        needle = self.filter_text.lower()
        return [item for item in self.all_items if needle in item.filter_value.lower()]

    def selected_item(self) -> Optional[ListItem]:
        visible = self.items()
        if 0 <= self.selected_index < len(visible):
            return visible[self.selected_index]
        return None

    def select_next(self) -> bool:
        if self.selected_index + 1 < len(self.items()):
            self.selected_index += 1
            return True
        return False

    def select_previous(self) -> bool:
        if self.selected_index > 0:
            self.selected_index -= 1
            return True
        return False

    def select_by_name(self, ref_name: str) -> bool:
        """Move the cursor to the visible item with ``ref_name``."""
        for index, item in enumerate(self.items()):
            if item.ref_name == ref_name:
                self.selected_index = index
                return True
        return False

    def set_filter(self, filter_text: str) -> None:
        self.filter_text = filter_text
        self.selected_index = 0

    def open_selected(self) -> Optional[Panel]:
        item = self.selected_item()
        return item.open_panel() if item else None


def empty_panel(title: str = "") -> ListPanel:
    return ListPanel(panel_title=title)


def panel_of(items: Sequence[ListItem], title: str = "") -> ListPanel:
    return ListPanel(all_items=list(items), panel_title=title)

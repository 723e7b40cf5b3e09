"""Coordinates the panel stack, breadcrumbs and category selection.

Edge-of-stack and edge-of-list moves are not errors: operations report them
through their return value and leave state untouched.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from .breadcrumbs import Breadcrumbs
from .keys import NEXT_PANEL, NEXT_TYPE, PREV_PANEL, PREV_TYPE, find_binding
from .panels import Panel, empty_panel
from .stack import PanelStack
from .type_selector import GQLType, TypeSelector

DEFAULT_VISIBLE_PANELS = 2


class NavigationManager:
    def __init__(
        self,
        visible_panels: int = DEFAULT_VISIBLE_PANELS,
        panel_factory: Callable[[], Panel] = empty_panel,
    ) -> None:
        if visible_panels < 1:
            raise ValueError("visible_panels must be at least 1")
        self.visible_panels = visible_panels
        self._panel_factory = panel_factory
        self._stack = PanelStack()
        self._breadcrumbs = Breadcrumbs()
        self._type_selector = TypeSelector()

    @property
    def stack(self) -> PanelStack:
        return self._stack

    def navigate_forward(self) -> bool:
        """Move focus to the next panel.

        The selected item's ``ref_name`` in the current panel becomes a
        breadcrumb before the position advances.
        """
        if not self._stack.can_move_forward():
            return False
        current = self._stack.current()
        selected = current.selected_item() if current is not None else None
        if selected is not None and selected.ref_name:
            self._breadcrumbs.push(selected.ref_name)
        self._stack.move_forward()
        return True

    def navigate_backward(self) -> bool:
        if self._stack.move_backward():
            self._breadcrumbs.pop()
            return True
        return False

    def open_panel(self, panel: Panel) -> None:
        """Place ``panel`` after the current one without focusing it."""
        self._stack.push(panel)

    def switch_type(self, gql_type: GQLType | str) -> None:
        self._type_selector.set(gql_type)
        self._breadcrumbs.reset()

    def cycle_type_forward(self) -> GQLType:
        self._breadcrumbs.reset()
        return self._type_selector.next()

    def cycle_type_backward(self) -> GQLType:
        self._breadcrumbs.reset()
        return self._type_selector.previous()

    def reset(self) -> None:
        """Replace the stack with empty panels and clear breadcrumbs."""
        self._stack.replace([self._panel_factory() for _ in range(self.visible_panels)])
        self._breadcrumbs.reset()

    def set_current_panel(self, panel: Panel) -> bool:
        return self._stack.set_current(panel)

    def current_panel(self) -> Optional[Panel]:
        return self._stack.current()

    def next_panel(self) -> Optional[Panel]:
        return self._stack.next()

    def current_type(self) -> GQLType:
        return self._type_selector.current()

    def all_types(self) -> Tuple[GQLType, ...]:
        return self._type_selector.all()

    def breadcrumbs(self) -> List[str]:
        return self._breadcrumbs.get()

    def is_at_top_level_panel(self) -> bool:
        return self._stack.position == 0

    def handle_key(self, key: str) -> Optional[str]:
        """Apply the navigation action bound to ``key``.

        Returns the action name when a navigation binding matched, else None.
        Category changes also reset the panel stack.
        """
        binding = find_binding(key)
        if binding is None:
            return None
        if binding is NEXT_PANEL:
            self.navigate_forward()
        elif binding is PREV_PANEL:
            self.navigate_backward()
        elif binding is NEXT_TYPE:
            self.cycle_type_forward()
            self.reset()
        elif binding is PREV_TYPE:
            self.cycle_type_backward()
            self.reset()
        else:
            return None
        return binding.action

"""Truncating stack of open panels with a focus position."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .panels import Panel


class PanelStack:
    """Browser-history style stack: pushing from the middle drops later panels."""

    def __init__(self) -> None:
        self._panels: List[Panel] = []
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    def __len__(self) -> int:
        return len(self._panels)

    @property
    def panels(self) -> tuple[Panel, ...]:
        return tuple(self._panels)

    def current(self) -> Optional[Panel]:
        if 0 <= self._position < len(self._panels):
            return self._panels[self._position]
        return None

    def next(self) -> Optional[Panel]:
        next_pos = self._position + 1
        if next_pos < len(self._panels):
            return self._panels[next_pos]
        return None

    def can_move_forward(self) -> bool:
        return self._position + 1 < len(self._panels)

    def move_forward(self) -> bool:
        if self.can_move_forward():
            self._position += 1
            return True
        return False

    def move_backward(self) -> bool:
        if self._position > 0:
            self._position -= 1
            return True
        return False

    def push(self, panel: Panel) -> None:
        """Append ``panel`` after the current position, truncating the rest."""
        if self._position + 1 < len(self._panels):
            del self._panels[self._position + 1:]
        self._panels.append(panel)

    def replace(self, panels: Sequence[Panel]) -> None:
        self._panels = list(panels)
        self._position = 0

    def set_current(self, panel: Panel) -> bool:
        if not self._panels:
            return False
        self._panels[self._position] = panel
        return True

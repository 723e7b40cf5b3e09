from __future__ import annotations

from typing import List


class Breadcrumbs:
    """Trail of labels for the current drill-down path."""

    def __init__(self) -> None:
        self._crumbs: List[str] = []

    def push(self, title: str) -> None:
        self._crumbs.append(title)

    def pop(self) -> None:
        if self._crumbs:
            self._crumbs.pop()

    def reset(self) -> None:
        self._crumbs = []

    def __len__(self) -> int:
        return len(self._crumbs)

    def get(self) -> List[str]:
        # Copy so callers cannot mutate the trail
        return list(self._crumbs)

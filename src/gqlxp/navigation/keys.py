"""Key bindings for the explorer, declared as an explicit list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class KeyBinding:
    action: str
    keys: Tuple[str, ...]
    help: str


NEXT_PANEL = KeyBinding("next_panel", ("]", "tab"), "next")
PREV_PANEL = KeyBinding("prev_panel", ("[", "shift+tab"), "prev")
NEXT_TYPE = KeyBinding("next_type", ("}",), "next type")
PREV_TYPE = KeyBinding("prev_type", ("{",), "prev type")
TOGGLE_OVERLAY = KeyBinding("toggle_overlay", (" ",), "details")
SEARCH_FOCUS = KeyBinding("search_focus", ("/",), "search")
COMMAND_PALETTE = KeyBinding("command_palette", ("ctrl+p",), "command palette")
QUIT = KeyBinding("quit", ("ctrl+c", "ctrl+d"), "quit")

GLOBAL_KEY_BINDINGS: Tuple[KeyBinding, ...] = (
    NEXT_PANEL,
    PREV_PANEL,
    NEXT_TYPE,
    PREV_TYPE,
    TOGGLE_OVERLAY,
    SEARCH_FOCUS,
    COMMAND_PALETTE,
    QUIT,
)


def find_binding(key: str) -> Optional[KeyBinding]:
    for binding in GLOBAL_KEY_BINDINGS:
        if key in binding.keys:
            return binding
    return None

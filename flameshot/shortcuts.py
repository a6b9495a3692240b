"""The table of keyboard shortcuts available in capture mode."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Iterable, Optional

ESCAPE = "Esc"
BACKSPACE = "Backspace"
MAC_BACKSPACE = "Ctrl+Backspace"

_EXTRA_SHORTCUTS = (
    ("TYPE_TOGGLE_PANEL", "Toggle side panel"),
    ("TYPE_RESIZE_LEFT", "Resize selection left 1px"),
    ("TYPE_RESIZE_RIGHT", "Resize selection right 1px"),
    ("TYPE_RESIZE_UP", "Resize selection up 1px"),
    ("TYPE_RESIZE_DOWN", "Resize selection down 1px"),
    ("TYPE_SELECT_ALL", "Select entire screen"),
    ("TYPE_MOVE_LEFT", "Move selection left 1px"),
    ("TYPE_MOVE_RIGHT", "Move selection right 1px"),
    ("TYPE_MOVE_UP", "Move selection up 1px"),
    ("TYPE_MOVE_DOWN", "Move selection down 1px"),
    ("TYPE_COMMIT_CURRENT_TOOL", "Commit text in text area"),
    ("TYPE_DELETE_CURRENT_TOOL", "Delete current tool"),
)

_NATIVE_SYMBOLS = (
    ("Ctrl+", "\u2318"),
    ("Alt+", "\u2325"),
    ("Meta+", "\u2303"),
    ("Shift+", "\u21e7"),
)


def native_hotkey_text(text: str) -> str:
    """Write modifiers the way macOS shows them."""
    for name, symbol in _NATIVE_SYMBOLS:
        text = text.replace(name, symbol)
    return text


@dataclass(frozen=True)
class ShortcutRow:
    """One row: an identifier (empty when fixed), a description and keys."""

    identifier: str
    description: str
    key_sequence: str

    @property
    def editable(self) -> bool:
        return bool(self.identifier)


class ShortcutTable:
    """Shortcuts of the capture tools plus the fixed ones.

    ``tools`` yields ``(shortcut_name, description)`` for every capture
    button; ``config`` provides ``shortcut(name)`` and
    ``set_shortcut(name, sequence) -> bool``.
    """

    def __init__(
        self,
        config: Any,
        tools: Iterable[tuple[str, str]] = (),
        platform: Optional[str] = None,
    ) -> None:
        self.config = config
        self.tools = list(tools)
        self.platform = platform if platform is not None else sys.platform
        self.rows: list[ShortcutRow] = []
        self.load()

    def _configured(self, name: str, description: str) -> ShortcutRow:
        sequence = self.config.shortcut(name) or ""
        return ShortcutRow(name, description, sequence.replace("Return", "Enter"))

    def load(self) -> list[ShortcutRow]:
        """Rebuild the rows from the configuration and return them."""
        rows = []
        for name, description in self.tools:
            rows.append(self._configured(name, description))
            if name == "TYPE_COPY":
                rows.append(ShortcutRow("", description, "Left Double-click"))
        rows.extend(self._configured(name, desc) for name, desc in _EXTRA_SHORTCUTS)

        rows.append(ShortcutRow("", "Quit capture", ESCAPE))
        if self.platform == "darwin":
            rows.append(ShortcutRow("", "Screenshot history", "\u21e7\u2318\u2325H"))
            rows.append(ShortcutRow("", "Capture screen", "\u21e7\u2318\u23254"))
        elif self.platform == "win32":
            rows.append(ShortcutRow("", "Screenshot history", "Shift+Print Screen"))
            rows.append(ShortcutRow("", "Capture screen", "Print Screen"))
        rows.append(ShortcutRow("", "Show color picker", "Right Click"))
        rows.append(ShortcutRow("", "Change the tool's size", "Mouse Wheel"))
        self.rows = rows
        return rows

    def set_shortcut(self, row: int, sequence: str) -> bool:
        """Assign keys to an editable row; Backspace clears the shortcut.

        Returns whether the configuration accepted the change.
        """
        entry = self.rows[row]
        if not entry.editable:
            return False
        clear = MAC_BACKSPACE if self.platform == "darwin" else BACKSPACE
        if sequence == clear:
            sequence = ""
        if self.config.set_shortcut(entry.identifier, sequence):
            self.load()
            return True
        return False
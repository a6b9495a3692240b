"""Records a keyboard shortcut from key presses."""

from __future__ import annotations

import enum

ESCAPE = "Esc"


class Modifier(enum.IntFlag):
    """Keyboard modifiers held during a key press."""

    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4
    META = 8


_PREFIXES = (
    (Modifier.SHIFT, "Shift+"),
    (Modifier.CONTROL, "Ctrl+"),
    (Modifier.ALT, "Alt+"),
    (Modifier.META, "Meta+"),
)


class ShortcutRecorder:
    """Builds a shortcut text such as ``Shift+Ctrl+A`` from key events.

    Modifier prefixes accumulate over every press of one recording session.
    """

    def __init__(self) -> None:
        self._modifier = ""
        self.shortcut = ""
        self.cancelled = False
        self.accepted = False

    def key_press(self, key: str, modifiers: Modifier = Modifier.NONE) -> str:
        """Record a key press and return the shortcut built so far."""
        self._modifier += "".join(
            prefix for flag, prefix in _PREFIXES if flag in modifiers
        )
        self.shortcut = self._modifier + key
        return self.shortcut

    def key_release(self) -> bool:
        """Finish recording; returns whether the recording was accepted.

        Escape marks the recording as cancelled, yet the dialog still
        ends accepted afterwards.
        """
        self.cancelled = self.shortcut == ESCAPE
        self.accepted = True
        return self.accepted
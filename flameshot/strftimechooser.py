"""Buttons that insert strftime variables into a filename pattern."""

from __future__ import annotations

import sys
from typing import Callable, Optional

# (label, variable, available on Windows)
_ENTRIES = (
    ("Century (00-99)", "%C", True),
    ("Year (00-99)", "%y", True),
    ("Year (2000)", "%Y", True),
    ("Month Name (jan)", "%b", False),
    ("Month Name (january)", "%B", False),
    ("Month (01-12)", "%m", True),
    ("Week Day (1-7)", "%u", True),
    ("Week (01-53)", "%V", True),
    ("Day Name (mon)", "%a", False),
    ("Day Name (monday)", "%A", False),
    ("Day (01-31)", "%d", True),
    ("Day of Month (1-31)", "%e", True),
    ("Day (001-366)", "%j", True),
    ("Time (%H-%M-%S)", "%T", False),
    ("Time (%H-%M)", "%R", False),
    ("Hour (00-23)", "%H", True),
    ("Hour (01-12)", "%I", True),
    ("Minute (00-59)", "%M", True),
    ("Second (00-59)", "%S", True),
    ("Full Date (%m/%d/%y)", "%D", False),
    ("Full Date (%Y-%m-%d)", "%F", True),
)


class StrftimeChooser:
    """Labelled strftime variables laid out in two equal columns."""

    def __init__(self, windows: Optional[bool] = None) -> None:
        if windows is None:
            windows = sys.platform == "win32"
        self.button_data = {
            label: variable
            for label, variable, portable in _ENTRIES
            if portable or not windows
        }
        self.listeners: list[Callable[[str], None]] = []

    def columns(self) -> list[list[tuple[str, str]]]:
        """Two columns of (label, variable), filled from the last label back.

        With an odd number of labels the first one in sort order is left out.
        """
        keys = sorted(self.button_data, reverse=True)
        middle = len(keys) // 2
        return [
            [(key, self.button_data[key]) for key in keys[:middle]],
            [(key, self.button_data[key]) for key in keys[middle : 2 * middle]],
        ]

    def choose(self, label: str) -> str:
        """Emit and return the variable of the button with ``label``."""
        variable = self.button_data[label]
        for listener in self.listeners:
            listener(variable)
        return variable
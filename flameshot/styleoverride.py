"""Style hints with a shorter tooltip delay than the base style."""

from __future__ import annotations

import enum
from typing import Callable, Optional

TOOLTIP_WAKE_UP_DELAY_MS = 600


class StyleHint(enum.Enum):
    """Style hints that can be queried."""

    TOOLTIP_WAKE_UP_DELAY = enum.auto()
    TOOLTIP_FALL_ASLEEP_DELAY = enum.auto()
    TOOLTIP_LABEL_OPACITY = enum.auto()


class StyleOverride:
    """Answers the tooltip wake-up delay itself and defers everything else."""

    def __init__(self, base: Optional[Callable[[StyleHint], int]] = None) -> None:
        self._base = base if base is not None else (lambda _hint: 0)

    def style_hint(self, hint: StyleHint) -> int:
        """The value of ``hint``."""
        if hint is StyleHint.TOOLTIP_WAKE_UP_DELAY:
            return TOOLTIP_WAKE_UP_DELAY_MS
        return self._base(hint)
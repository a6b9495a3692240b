"""Screen geometry and finding the screen under a point."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rect:
    """An integer rectangle with its top-left corner at (x, y)."""

    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        """Return whether the point lies inside, edges included."""
        return (
            self.x <= x < self.x + self.width
            and self.y <= y < self.y + self.height
        )


@dataclass(frozen=True)
class Screen:
    """A monitor with its place on the virtual desktop."""

    name: str
    geometry: Rect


class ScreenLocator:
    """Finds which screen contains a point, falling back to the primary one."""

    def __init__(
        self,
        screens: Iterable[Screen],
        primary: Optional[Screen] = None,
        adjust_edges: Optional[bool] = None,
    ) -> None:
        self.screens = list(screens)
        self.primary = primary if primary is not None else next(
            iter(self.screens), None
        )
        if adjust_edges is None:
            adjust_edges = sys.platform == "darwin"
        self.adjust_edges = adjust_edges

    def screen_at(self, x: int, y: int) -> Optional[Screen]:
        """The first screen containing the point, or None."""
        return next((s for s in self.screens if s.geometry.contains(x, y)), None)

    def current_screen(self, x: int, y: int) -> Screen:
        """The screen under the point, else the primary screen.

        With edge adjustment, a point just past the right or bottom edge
        is moved one pixel back inside before giving up.
        """
        screen = self.screen_at(x, y)
        if self.adjust_edges:
            if screen is None and x > 0:
                screen = self.screen_at(x - 1, y)
            if screen is None and y > 0:
                screen = self.screen_at(x, y - 1)
            if screen is None and x > 0 and y > 0:
                screen = self.screen_at(x - 1, y - 1)
        if screen is None:
            logger.critical(
                "Unable to get current screen, starting to use primary screen. "
                "It may be a cause of logical error and working with a wrong screen."
            )
            if self.primary is None:
                raise LookupError("no screens available")
            screen = self.primary
        return screen
"""A slider model that maps its position onto other ranges."""

from __future__ import annotations

import threading
from typing import Callable, Optional


class ExtendedSlider:
    """Integer slider with value mapping, a tooltip and a debounced end signal."""

    def __init__(
        self,
        minimum: int = 0,
        maximum: int = 99,
        value: int = 0,
        debounce: float = 0.5,
    ) -> None:
        self.minimum = minimum
        self.maximum = max(minimum, maximum)
        self.debounce = debounce
        self.value_changed: list[Callable[[int], None]] = []
        self.modifications_ended: list[Callable[[], None]] = []
        self._timer: Optional[threading.Timer] = None
        self._value = self._clamp(value)

    def _clamp(self, value: int) -> int:
        return min(max(value, self.minimum), self.maximum)

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        value = self._clamp(value)
        if value != self._value:
            self._value = value
            for listener in self.value_changed:
                listener(value)

    def set_range(self, minimum: int, maximum: int) -> None:
        """Change the range, keeping the value inside it."""
        self.minimum = minimum
        self.maximum = max(minimum, maximum)
        self.value = self._value

    def mapped_value(self, low: int, high: int) -> int:
        """The slider position projected onto ``low..high``."""
        progress = (self.value - self.minimum) / (self.maximum - self.minimum)
        return int(low + (high - low) * progress)

    def set_mapped_value(self, low: int, value: int, high: int) -> None:
        """Position the slider where ``value`` sits within ``low..high``."""
        progress = ((value - low) + 1) / (high - low)
        self.value = int(self.minimum + (self.maximum - self.minimum) * progress)

    def tooltip(self) -> str:
        """The value shown as a percentage."""
        return f"{self.value}%"

    def slider_moved(self, value: int) -> None:
        """Move the slider by hand; listeners hear when movement pauses."""
        self.value = value
        if self._timer is not None:
            self._timer.cancel()
        self._timer = threading.Timer(self.debounce, self._fire_ended)
        self._timer.daemon = True
        self._timer.start()

    def _fire_ended(self) -> None:
        for listener in self.modifications_ended:
            listener()
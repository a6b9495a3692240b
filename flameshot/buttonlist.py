"""The checkable list of capture buttons shown in the configuration."""

from __future__ import annotations

from typing import Any, Callable, Hashable, Iterable, Optional


class ButtonList:
    """Which capture buttons are enabled, kept in step with the configuration.

    ``tools`` yields ``(name, button_type)`` in display order; ``config`` has
    a readable and writable ``buttons`` list of button types. Enabled buttons
    are kept sorted by ``priority``, which defaults to display order.
    """

    def __init__(
        self,
        tools: Iterable[tuple[str, Hashable]],
        config: Any,
        priority: Optional[Callable[[Hashable], int]] = None,
    ) -> None:
        self._types_by_name = dict(tools)
        self.config = config
        if priority is None:
            order = {t: i for i, t in enumerate(self._types_by_name.values())}
            priority = order.__getitem__
        self._priority = priority
        self._checked = {name: False for name in self._types_by_name}
        self.active: list = []
        self.update_components()

    @property
    def names(self) -> list[str]:
        return list(self._types_by_name)

    def update_components(self) -> None:
        """Reload the enabled buttons from the configuration."""
        self.active = list(self.config.buttons)
        for name, button_type in self._types_by_name.items():
            self._checked[name] = button_type in self.active

    def is_checked(self, name: str) -> bool:
        """Whether the button called ``name`` is enabled."""
        return self._checked[name]

    def toggle(self, name: str) -> bool:
        """Flip a button, store the result and return its new state."""
        button_type = self._types_by_name[name]
        checked = not self._checked[name]
        self._checked[name] = checked
        if checked:
            self.active.append(button_type)
            self.active.sort(key=self._priority)
        elif button_type in self.active:
            self.active.remove(button_type)
        self.config.buttons = list(self.active)
        return checked

    def select_all(self) -> None:
        """Enable every button."""
        self.config.buttons = sorted(self._types_by_name.values(), key=self._priority)
        self.update_components()
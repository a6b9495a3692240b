"""Dashed options of the command line."""

from dataclasses import dataclass, field
from typing import Callable, Iterable, Union


def _accept_all(_value: str) -> bool:
    return True


@dataclass
class CommandOption:
    """An option such as ``-p/--path`` that may take a value.

    Two options are equal when their names, description and value name
    match; the current value and the checker do not take part.
    """

    names: Union[str, Iterable[str]]
    description: str
    value_name: str = ""
    value: str = field(default="", compare=False)
    checker: Callable[[str], bool] = field(
        default=_accept_all, init=False, compare=False, repr=False
    )
    error_msg: str = field(default="", init=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.names, str):
            self.names = [self.names]
        else:
            self.names = list(self.names)

    def dashed_names(self) -> list[str]:
        """Names with ``-`` for single characters and ``--`` otherwise."""
        return [f"-{name}" if len(name) == 1 else f"--{name}" for name in self.names]

    def add_checker(self, checker: Callable[[str], bool], error_msg: str) -> None:
        """Install a validator for values and the message shown when it fails."""
        self.checker = checker
        self.error_msg = error_msg

    def check_value(self, value: str) -> bool:
        """Return whether ``value`` is acceptable for this option."""
        return bool(self.checker(value))

    def set_value(self, value: str) -> None:
        """Store a value; an option without a value name gets ``value``."""
        if not self.value_name:
            self.value_name = "value"
        self.value = value
"""Positional arguments (sub-commands) of the command line."""

from dataclasses import dataclass


@dataclass
class CommandArgument:
    """A named sub-command such as ``gui`` or ``config``.

    An argument with neither a name nor a description is the root of the
    command tree.
    """

    name: str = ""
    description: str = ""

    def is_root(self) -> bool:
        """Return True for the unnamed, undescribed root argument."""
        return not self.name and not self.description
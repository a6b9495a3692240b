"""A tree-shaped command line parser with sub-commands and options."""

import copy
import sys
from dataclasses import dataclass, field
from typing import Iterable, Optional, TextIO, Union

from flameshot.commandargument import CommandArgument
from flameshot.commandoption import CommandOption

_VERSION_OPTION = CommandOption(["v", "version"], "Displays version information")
_HELP_OPTION = CommandOption(["h", "help"], "Displays this help")

_DEFAULT_BEHAVIOUR = (
    "Per default runs Flameshot in the background and "
    "adds a tray icon for configuration."
)


class CommandLineError(Exception):
    """Raised when the command line cannot be parsed."""


@dataclass
class _Node:
    argument: CommandArgument = field(default_factory=CommandArgument)
    options: list = field(default_factory=list)
    subnodes: list = field(default_factory=list)


def _options_to_string(
    options: list[CommandOption], arguments: list[CommandArgument]
) -> str:
    dashed = []
    for option in options:
        text = ", ".join(option.dashed_names())
        if option.value_name:
            text += f" <{option.value_name}>"
        dashed.append(text)
    size = max(
        [len(text) for text in dashed] + [len(arg.name) for arg in arguments],
        default=0,
    )

    parts = []
    if dashed:
        parts.append("Options:\n")
        padding = "\n" + " " * (size + 4)
        for text, option in zip(dashed, options):
            description = option.description.replace("\n", padding)
            parts.append(f"  {text.ljust(size)}  {description}\n")
        if arguments:
            parts.append("\n")
    if arguments:
        parts.append("Arguments:\n")
        for arg in arguments:
            parts.append(f"  {arg.name.ljust(size)}  {arg.description}\n")
    return "".join(parts)


class CommandLineParser:
    """Parses ``[program, argument..., option...]`` against a command tree."""

    def __init__(
        self,
        app_name: str = "flameshot",
        version_info: str = "",
        out: Optional[TextIO] = None,
    ) -> None:
        self.app_name = app_name
        self.version_info = version_info
        self.description = app_name
        self.general_error_message = ""
        self._out = out
        self._with_help = False
        self._with_version = False
        self._tree = _Node()
        self._found_options: list[CommandOption] = []
        self._found_args: list[CommandArgument] = []

    @property
    def root_argument(self) -> CommandArgument:
        return CommandArgument()

    def _write(self, text: str) -> None:
        (self._out or sys.stdout).write(text)

    # -- building the tree -------------------------------------------------

    def add_version_option(self) -> CommandOption:
        """Enable ``-v/--version`` and return the option."""
        self._with_version = True
        return _VERSION_OPTION

    def add_help_option(self) -> CommandOption:
        """Enable ``-h/--help`` and return the option."""
        self._with_help = True
        return _HELP_OPTION

    def _find_node(self, argument: CommandArgument) -> Optional[_Node]:
        if argument == CommandArgument():
            return self._tree

        def search(node: _Node) -> Optional[_Node]:
            if node.argument == argument:
                return node
            for child in node.subnodes:
                found = search(child)
                if found is not None:
                    return found
            return None

        for child in self._tree.subnodes:
            found = search(child)
            if found is not None:
                return found
        return None

    def _parent_node(self, parent: Optional[CommandArgument]) -> _Node:
        node = self._find_node(parent if parent is not None else CommandArgument())
        if node is None:
            raise ValueError(f"unknown parent argument '{parent.name}'")
        return node

    def add_argument(
        self, arg: CommandArgument, parent: Optional[CommandArgument] = None
    ) -> None:
        """Add a sub-command under ``parent`` (the root by default)."""
        self._parent_node(parent).subnodes.append(_Node(argument=arg))

    def add_option(
        self, option: CommandOption, parent: Optional[CommandArgument] = None
    ) -> None:
        """Make ``option`` valid after ``parent`` (the root by default)."""
        self._parent_node(parent).options.append(option)

    def add_options(
        self,
        options: Iterable[CommandOption],
        parent: Optional[CommandArgument] = None,
    ) -> None:
        """Add several options under the same parent."""
        for option in options:
            self.add_option(option, parent)

    # -- parsing -----------------------------------------------------------

    def parse(self, args: Iterable[str]) -> None:
        """Parse a full command line whose first item is the program name.

        Raises CommandLineError describing the first problem found.
        """
        args = list(args)
        self._found_args.clear()
        self._found_options.clear()

        if (
            self._with_version
            and len(args) > 1
            and args[1] in _VERSION_OPTION.dashed_names()
        ):
            if len(args) != 2:
                raise CommandLineError("Invalid arguments after the version option.")
            self._write(f"{self.version_info}\n")
            self._found_options.append(_VERSION_OPTION)
            return

        node = self._tree
        try:
            index = self._consume_help(args, 1, node)
            while index < len(args):
                if args[index].startswith("-"):
                    index = self._process_option(args, index, node)
                else:
                    index, node = self._process_argument(args, index, node)
                index += 1
        except CommandLineError as error:
            if self.general_error_message:
                raise CommandLineError(
                    f"{error} {self.general_error_message}"
                ) from None
            raise

    def _consume_help(self, args: list[str], index: int, node: _Node) -> int:
        if (
            self._with_help
            and index < len(args)
            and args[index] in _HELP_OPTION.dashed_names()
        ):
            if index + 1 != len(args):
                raise CommandLineError("Invalid arguments after the help option.")
            self._found_options.append(_HELP_OPTION)
            self._write(self._help_for(args[:-1], node))
            return index + 1
        return index

    def _process_argument(
        self, args: list[str], index: int, node: _Node
    ) -> tuple[int, _Node]:
        name = args[index]
        for child in node.subnodes:
            if child.argument.name == name:
                break
        else:
            raise CommandLineError(f"'{name}' is not a valid argument.")
        self._found_args.append(child.argument)
        return self._consume_help(args, index + 1, child) - 1, child

    def _process_option(self, args: list[str], index: int, node: _Node) -> int:
        arg = args[index]
        has_equals = "=" in arg
        value = ""
        if has_equals:
            arg, value = arg.split("=", 1)

        double_dashed = arg.startswith("--")
        if (len(arg) <= 3) if double_dashed else (len(arg) != 2):
            raise CommandLineError(f"the option {arg} has a wrong format.")
        name = arg[2:] if double_dashed else arg[1:]

        option = next((o for o in node.options if name in o.names), None)
        if option is None:
            arg_name = node.argument.name or self.app_name
            raise CommandLineError(
                f"the option '{name}' is not a valid option "
                f"for the argument '{arg_name}'."
            )

        requires_value = bool(option.value_name)
        if not requires_value and has_equals:
            raise CommandLineError(
                f"the option '{name}' contains a '=' and it doesn't require a value."
            )
        if requires_value and not value:
            if index + 1 >= len(args):
                raise CommandLineError(f"Expected value after the option '{name}'.")
            index += 1
            value = args[index]

        found = copy.copy(option)
        if requires_value:
            if not option.check_value(value):
                message = option.error_msg
                if not message.endswith("."):
                    message += "."
                raise CommandLineError(message)
            found.set_value(value)
        self._found_options.append(found)
        return index

    # -- results -----------------------------------------------------------

    def is_set(self, item: Union[CommandArgument, CommandOption]) -> bool:
        """Return whether an argument or option appeared in the last parse."""
        if isinstance(item, CommandArgument):
            return item in self._found_args
        return item in self._found_options

    def value(self, option: CommandOption) -> str:
        """The parsed value of ``option``, or its default when absent."""
        for found in self._found_options:
            if found == option:
                return found.value
        return option.value

    # -- help --------------------------------------------------------------

    def help_text(
        self, args: Iterable[str], argument: Optional[CommandArgument] = None
    ) -> str:
        """Help for ``argument`` (the root by default); ``args`` is the usage prefix."""
        return self._help_for(list(args), self._parent_node(argument))

    def _help_for(self, args: list[str], node: _Node) -> str:
        arg_name = node.argument.name or self.app_name
        arg_text = "[arguments]" if node.subnodes else ""
        usage = " ".join(args)
        text = f"Usage: {usage} [{arg_name}-options] {arg_text}\n\n"
        text += _DEFAULT_BEHAVIOUR + "\n\n"

        options = list(node.options)
        if self._with_help:
            options.append(_HELP_OPTION)
        if self._with_version and node is self._tree:
            options.append(_VERSION_OPTION)
        text += _options_to_string(options, [child.argument for child in node.subnodes])
        return text
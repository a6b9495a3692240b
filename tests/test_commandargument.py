from flameshot.commandargument import CommandArgument


def test_default_argument_is_root():
    assert CommandArgument().is_root() is True


def test_named_argument_is_not_root():
    assert CommandArgument("gui", "Start a manual capture in GUI mode.").is_root() is False


def test_argument_with_only_description_is_not_root():
    assert CommandArgument("", "something").is_root() is False


def test_equality_uses_name_and_description():
    first = CommandArgument("full", "Capture the entire desktop.")
    second = CommandArgument("full", "Capture the entire desktop.")
    assert first == second
    assert first != CommandArgument("full", "other")
    assert first != CommandArgument("screen", "Capture the entire desktop.")


def test_renaming_changes_identity():
    argument = CommandArgument("gui", "desc")
    argument.name = "launcher"
    assert argument == CommandArgument("launcher", "desc")
    assert argument.is_root() is False


def test_clearing_fields_makes_root():
    argument = CommandArgument("gui", "desc")
    argument.name = ""
    argument.description = ""
    assert argument.is_root() is True
    assert argument == CommandArgument()
# flameshot

The core logic of a screenshot tool, written as plain Python objects: a
tree-shaped command-line parser, capture requests with a binary encoding,
screen lookup, a capture controller, and the models behind the settings
pages (shortcuts, capture buttons, general options, filename variables).

## Installation

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Modules

- `flameshot.commandargument` – `CommandArgument`, a named sub-command;
  the unnamed one is the root (`is_root()`).
- `flameshot.commandoption` – `CommandOption`, a dashed option with an
  optional value, a value checker (`add_checker`, `check_value`) and
  `dashed_names()`.
- `flameshot.commandlineparser` – `CommandLineParser`, which parses a full
  command line against a tree of arguments and options and raises
  `CommandLineError` on the first problem. It offers `-h/--help` and
  `-v/--version` through `add_help_option()` and `add_version_option()`,
  and `help_text()` for the help of any argument.
- `flameshot.capturerequest` – `CaptureMode`, `ExportTask` and
  `CaptureRequest`, with `serialize()` / `deserialize()` and
  `export_capture()`, which hands each requested task to an exporter object.
- `flameshot.screens` – `Rect`, `Screen` and `ScreenLocator`, which finds
  the screen under a point and falls back to the primary screen.
- `flameshot.controller` – `Controller`, which registers capture requests,
  starts them after their delay, passes results to the exporter, keeps the
  tray menu state and processes release-check replies. Grabbing, windows,
  notifications and scheduling are supplied by the caller.
- `flameshot.slider` – `ExtendedSlider`, mapping a slider position onto
  other ranges.
- `flameshot.strftimechooser` – `StrftimeChooser`, labelled strftime
  variables for filename patterns, laid out in two columns.
- `flameshot.shortcutrecorder` – `ShortcutRecorder` and `Modifier`, building
  a shortcut text such as `Shift+Ctrl+A` from key presses.
- `flameshot.shortcuts` – `ShortcutTable`, `ShortcutRow` and
  `native_hotkey_text()`.
- `flameshot.buttonlist` – `ButtonList`, which capture buttons are enabled.
- `flameshot.styleoverride` – `StyleOverride` and `StyleHint`, answering
  the tooltip wake-up delay (600 ms).
- `flameshot.generalconf` – `GeneralSettings` and `GeneralConf`: options,
  limits, the save path, and importing, exporting and resetting the
  configuration file.

## Examples

The command-line parser works as a tree of arguments, each with its own
options:

    from flameshot.commandargument import CommandArgument
    from flameshot.commandoption import CommandOption
    from flameshot.commandlineparser import CommandLineParser

    parser = CommandLineParser()
    gui = CommandArgument("gui", "Start a manual capture in GUI mode.")
    delay = CommandOption(["d", "delay"], "Delay time in milliseconds", "milliseconds")
    parser.add_argument(gui, None)
    parser.add_options([delay], gui)
    parser.parse(["flameshot", "gui", "-d", "500"])
    assert parser.is_set(gui)
    assert parser.value(delay) == "500"

Capture requests encode to bytes and decode back:

    from flameshot.capturerequest import CaptureMode, CaptureRequest, ExportTask

    request = CaptureRequest(CaptureMode.FULLSCREEN_MODE, delay=0)
    request.add_task(ExportTask.COPY)
    data = request.serialize()
    same = CaptureRequest.deserialize(data)
    assert same.tasks == ExportTask.COPY

## What this package does not do

- It installs no command to run: there is no ready-made `flameshot`
  command line wired to these parts.
- It has no D-Bus service or client, so nothing sends requests to a
  running instance.
- It grabs no pixels and opens no windows, tray icon or dialogs; the
  `Controller` expects the caller to provide the grabber, exporter and
  user-interface objects.
- It registers no global hotkeys with the operating system.
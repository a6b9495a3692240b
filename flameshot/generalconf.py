"""General settings page: toggles, save path, limits and the config file."""

from __future__ import annotations

import dataclasses
import locale
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union

UNDO_LIMIT_MIN = 1
UNDO_LIMIT_MAX = 999
UPLOAD_HISTORY_MIN = 0
UPLOAD_HISTORY_MAX = 50

READ_ERROR = "Unable to read file."
WRITE_ERROR = "Unable to write file."
DIRECTORY_ERROR = "Unable to write to directory."
RESET_QUESTION = "Are you sure you want to reset the configuration?"

PathLike = Union[str, "os.PathLike[str]"]


@dataclass
class GeneralSettings:
    """The values edited on the general settings page."""

    show_help: bool = True
    show_side_panel_button: bool = True
    show_desktop_notification: bool = True
    disabled_tray_icon: bool = False
    history_confirmation_to_delete: bool = True
    check_for_updates: bool = True
    startup_launch: bool = False
    show_startup_launch_message: bool = True
    copy_and_close_after_upload: bool = True
    copy_path_after_save: bool = False
    antialiasing_pin_zoom: bool = True
    use_jpg_for_clipboard: bool = False
    save_after_copy: bool = False
    save_path: str = ""
    save_path_fixed: bool = False
    save_as_file_extension: str = ""
    upload_history_max: int = 25
    undo_limit: int = 100


# Options that map straight onto a boolean setting.
_BOOLEAN_OPTIONS = frozenset(
    {
        "show_help",
        "show_side_panel_button",
        "show_desktop_notification",
        "history_confirmation_to_delete",
        "startup_launch",
        "show_startup_launch_message",
        "copy_and_close_after_upload",
        "copy_path_after_save",
        "antialiasing_pin_zoom",
        "use_jpg_for_clipboard",
        "save_after_copy",
        "save_path_fixed",
    }
)


class GeneralConf:
    """Applies changes from the general settings page to the settings.

    ``controller`` (optional) receives tray icon and update-check changes;
    ``confirm`` is asked before a reset and answers True or False.
    """

    def __init__(
        self,
        settings: Optional[GeneralSettings] = None,
        config_file_path: Optional[PathLike] = None,
        *,
        controller: Any = None,
        confirm: Optional[Callable[[str], bool]] = None,
    ) -> None:
        self.settings = settings if settings is not None else GeneralSettings()
        self.config_file_path = (
            Path(config_file_path) if config_file_path is not None else None
        )
        self.controller = controller
        self._confirm = confirm or (lambda _question: True)
        self.save_path_text = self.settings.save_path

    def update_components(self, allow_empty_save_path: bool = False) -> None:
        """Refresh the shown save path from the settings."""
        if allow_empty_save_path or self.settings.save_path:
            self.save_path_text = self.settings.save_path

    # -- options -----------------------------------------------------------

    def set_option(self, name: str, value: Any) -> None:
        """Change one option by its settings name; raises KeyError if unknown."""
        if name in _BOOLEAN_OPTIONS:
            setattr(self.settings, name, bool(value))
        elif name == "show_tray_icon":
            self._set_tray_icon(bool(value))
        elif name == "check_for_updates":
            self.settings.check_for_updates = bool(value)
            if self.controller is not None:
                self.controller.set_check_for_updates_enabled(bool(value))
        elif name == "save_as_file_extension":
            self.settings.save_as_file_extension = str(value)
        elif name == "undo_limit":
            self.set_undo_limit(int(value))
        elif name == "upload_history_max":
            self.set_upload_history_max(int(value))
        else:
            raise KeyError(f"unknown option '{name}'")

    def _set_tray_icon(self, shown: bool) -> None:
        if self.controller is None:
            self.settings.disabled_tray_icon = not shown
        elif shown:
            self.controller.enable_tray_icon()
        else:
            self.controller.disable_tray_icon()

    def set_undo_limit(self, limit: int) -> int:
        """Store the undo limit, kept within 1..999, and return it."""
        limit = min(max(limit, UNDO_LIMIT_MIN), UNDO_LIMIT_MAX)
        self.settings.undo_limit = limit
        return limit

    def set_upload_history_max(self, maximum: int) -> int:
        """Store the upload history size, kept within 0..50, and return it."""
        maximum = min(max(maximum, UPLOAD_HISTORY_MIN), UPLOAD_HISTORY_MAX)
        self.settings.upload_history_max = maximum
        return maximum

    # -- save path ---------------------------------------------------------

    def change_save_path(self, path: PathLike) -> str:
        """Use ``path`` as the save folder; an empty path changes nothing.

        Raises PermissionError when the folder cannot be written to.
        """
        chosen = os.fspath(path) if path else ""
        if not chosen:
            return ""
        if not os.path.isdir(chosen) or not os.access(chosen, os.W_OK):
            raise PermissionError(DIRECTORY_ERROR)
        self.save_path_text = chosen
        self.settings.save_path = chosen
        return chosen

    # -- configuration file ------------------------------------------------

    def _require_config_path(self) -> Path:
        if self.config_file_path is None:
            raise ValueError("no configuration file path set")
        return self.config_file_path

    def import_configuration(self, source: Optional[PathLike]) -> bool:
        """Replace the configuration file with ``source``.

        Returns False when no file was given; raises OSError on failure.
        """
        if not source:
            return False
        target = self._require_config_path()
        encoding = locale.getpreferredencoding(False)
        try:
            text = Path(source).read_text(encoding=encoding)
        except OSError as error:
            raise OSError(READ_ERROR) from error
        try:
            target.write_text(text, encoding=encoding)
        except OSError as error:
            raise OSError(WRITE_ERROR) from error
        return True

    def export_configuration(self, target: Optional[PathLike]) -> bool:
        """Copy the configuration file to ``target``.

        Returns False when cancelled or when ``target`` is the file itself;
        raises OSError if the copy fails.
        """
        if not target:
            return False
        config_path = self._require_config_path()
        target_path = Path(target)
        if os.path.abspath(target_path) == os.path.abspath(config_path):
            return False
        try:
            if target_path.exists():
                target_path.unlink()
            shutil.copyfile(config_path, target_path)
        except OSError as error:
            raise OSError(WRITE_ERROR) from error
        return True

    def reset_configuration(self) -> bool:
        """Restore every default after confirmation; returns whether it did."""
        if not self._confirm(RESET_QUESTION):
            return False
        defaults = GeneralSettings()
        for item in dataclasses.fields(GeneralSettings):
            setattr(self.settings, item.name, getattr(defaults, item.name))
        self.update_components(allow_empty_save_path=True)
        return True
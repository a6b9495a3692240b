"""The core of the application: runs capture requests and owns the tray icon."""

from __future__ import annotations

import json
import logging
import sys
import threading
import time
import webbrowser
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from flameshot.capturerequest import CaptureMode, CaptureRequest, ExportTask
from flameshot.screens import Rect

logger = logging.getLogger(__name__)

APP_NAME = "Flameshot"
UPDATE_CHECK_INTERVAL_MS = 1000 * 60 * 60 * 24
MODAL_CLOSE_TIMEOUT_MS = 5000
MODAL_CLOSE_STEP_MS = 100
TRAY_MENU_CLICK_DELAY_MS = 400
STARTUP_MESSAGE = (
    "Hello, I'm here! Click icon in the tray to take a screenshot or "
    "click with a right button to see more options."
)
CHECK_FOR_UPDATES = "Check for updates"
LATEST_VERSION_MESSAGE = "You have the latest version"
UPDATE_FAILED_MESSAGE = "Failed to get information about the latest version."
MODAL_ERROR_MESSAGE = "Unable to close active modal widgets"

# None marks a separator.
TRAY_MENU = (
    "&Take Screenshot",
    "&Open Launcher",
    None,
    "&Latest Uploads",
    None,
    "&Configuration",
    None,
    CHECK_FOR_UPDATES,
    "&About",
    None,
    "&Quit",
)


@dataclass
class _Settings:
    disabled_tray_icon: bool = False
    check_for_updates: bool = False
    show_startup_launch_message: bool = True
    ignore_update_to_version: str = ""


@dataclass
class _MenuAction:
    text: str
    visible: bool = True
    enabled: bool = True


@dataclass
class _TrayIcon:
    menu: list = field(default_factory=list)
    tooltip: str = APP_NAME
    visible: bool = False


def _parse_version(text: str) -> tuple[int, ...]:
    """Leading numeric dot-separated segments of ``text``."""
    segments = []
    for part in text.strip().split("."):
        digits = ""
        for char in part:
            if not char.isdigit():
                break
            digits += char
        if not digits:
            break
        segments.append(int(digits))
        if len(digits) != len(part):
            break
    return tuple(segments)


def _default_scheduler(msec: int, func: Callable[[], None]) -> None:
    timer = threading.Timer(msec / 1000, func)
    timer.daemon = True
    timer.start()


def _emit(listeners: list, *args: Any) -> None:
    for listener in list(listeners):
        listener(*args)


class Controller:
    """Schedules captures, hands results to the exporter and runs the tray.

    ``grabber`` provides ``grab_entire_desktop()``, ``grab_screen(n)``,
    ``screen_geometry(n)`` and ``cursor_screen()``; grabbing returns None on
    failure. ``ui`` provides ``active_modal_widget()``,
    ``create_capture_window(request_id, forced_save_path)`` and
    ``show_error(title, text)``.
    """

    def __init__(
        self,
        grabber: Any,
        exporter: Any,
        *,
        settings: Any = None,
        ui: Any = None,
        scheduler: Optional[Callable[[int, Callable[[], None]], None]] = None,
        notifier: Optional[Callable[[str, str, int], None]] = None,
        open_url: Optional[Callable[[str], Any]] = None,
        update_fetcher: Optional[Callable[[], Any]] = None,
        app_version: str = "0.0.0",
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.grabber = grabber
        self.exporter = exporter
        self.settings = settings if settings is not None else _Settings()
        self.ui = ui
        self._schedule = scheduler or _default_scheduler
        self._notifier = notifier or (lambda title, text, timeout: None)
        self._open_url = open_url or webbrowser.open
        self._update_fetcher = update_fetcher
        self._sleep = sleep

        self.app_version = app_version.replace("v", "")
        self.app_latest_version = self.app_version
        self.app_latest_url = ""
        self._show_update_status = False

        self.requests: dict[int, CaptureRequest] = {}
        self.capture_taken: list[Callable[[int, Any, Optional[Rect]], None]] = []
        self.capture_failed: list[Callable[[int], None]] = []
        self.capture_saved: list[Callable[[int, str], None]] = []

        self.capture_window: Any = None
        self.tray: Optional[_TrayIcon] = None
        self.updates_action: Optional[_MenuAction] = None

        if sys.platform == "win32" or not self.settings.disabled_tray_icon:
            self.enable_tray_icon()
        if self.settings.check_for_updates:
            self._get_latest_available_version()

    # -- exports -----------------------------------------------------------

    def enable_exports(self) -> None:
        """Export captures when taken and drop requests that failed."""
        self.capture_taken.append(
            lambda request_id, capture, _selection: self.handle_capture_taken(
                request_id, capture
            )
        )
        self.capture_failed.append(self.handle_capture_failed)

    def handle_capture_taken(self, request_id: int, capture: Any) -> None:
        """Run the export tasks of the request and forget it."""
        request = self.requests.pop(request_id, None)
        if request is not None:
            request.export_capture(capture, self.exporter)

    def handle_capture_failed(self, request_id: int) -> None:
        """Forget a request whose capture failed."""
        self.requests.pop(request_id, None)

    def send_capture_saved(self, request_id: int, save_path: str) -> None:
        """Tell listeners that a capture was written to ``save_path``."""
        _emit(self.capture_saved, request_id, save_path)

    # -- captures ----------------------------------------------------------

    def request_capture(self, request: CaptureRequest) -> int:
        """Register the request and start it after its delay; returns its id."""
        request_id = request.request_id()
        self.requests[request_id] = request

        if request.mode is CaptureMode.FULLSCREEN_MODE:
            self._schedule(
                request.delay, lambda: self.start_fullscreen_capture(request_id)
            )
        elif request.mode is CaptureMode.SCREEN_MODE:
            number = request.data if isinstance(request.data, int) else -1
            self._schedule(
                request.delay,
                lambda: self.start_screen_grab(request_id, number),
            )
        elif request.mode is CaptureMode.GRAPHICAL_MODE:
            path = request.path
            self._schedule(
                request.delay,
                lambda: self.start_visual_capture(request_id, path),
            )
        else:
            _emit(self.capture_failed, request_id)
        return request_id

    def start_fullscreen_capture(self, request_id: int = 0) -> None:
        """Grab the whole desktop."""
        capture = self.grabber.grab_entire_desktop()
        if capture is None:
            _emit(self.capture_failed, request_id)
        else:
            _emit(self.capture_taken, request_id, capture, None)

    def start_screen_grab(self, request_id: int = 0, screen_number: int = -1) -> None:
        """Grab one screen; a negative number means the screen under the cursor."""
        number = screen_number
        if number < 0:
            number = self.grabber.cursor_screen()
        capture = self.grabber.grab_screen(number)
        if capture is None:
            _emit(self.capture_failed, request_id)
            return
        geometry = self.grabber.screen_geometry(number)
        request = self.requests.get(request_id)
        if request is not None and request.tasks & ExportTask.PIN:
            request.add_pin_task(geometry)
        _emit(self.capture_taken, request_id, capture, geometry)

    def start_visual_capture(
        self, request_id: int = 0, forced_save_path: str = ""
    ) -> None:
        """Open the interactive capture window unless one is already open."""
        if sys.platform == "darwin" and self.capture_window is not None:
            self.capture_window.close()
            self.capture_window = None

        if self.capture_window is not None or self.ui is None:
            _emit(self.capture_failed, request_id)
            return

        timeout = MODAL_CLOSE_TIMEOUT_MS
        while timeout >= 0:
            modal = self.ui.active_modal_widget()
            if modal is None:
                break
            modal.close()
            self._sleep(MODAL_CLOSE_STEP_MS / 1000)
            timeout -= MODAL_CLOSE_STEP_MS
        if timeout == 0:
            self.ui.show_error("Error", MODAL_ERROR_MESSAGE)
            return

        window = self.ui.create_capture_window(request_id, forced_save_path)
        self.capture_window = window
        if (
            self.app_latest_url
            and self.settings.ignore_update_to_version < self.app_latest_version
        ):
            window.show_app_update_notification(
                self.app_latest_version, self.app_latest_url
            )

    def capture_window_closed(self) -> None:
        """Forget the capture window once it has gone."""
        self.capture_window = None

    # -- tray icon ---------------------------------------------------------

    def enable_tray_icon(self) -> None:
        """Show the tray icon, building its menu the first time."""
        self.settings.disabled_tray_icon = False
        if self.tray is not None:
            self.tray.visible = True
            return

        self.updates_action = _MenuAction(CHECK_FOR_UPDATES)
        self.tray = _TrayIcon(menu=list(TRAY_MENU))
        self.set_check_for_updates_enabled(self.settings.check_for_updates)
        self.tray.visible = True
        if self.settings.show_startup_launch_message:
            self._notifier(APP_NAME, STARTUP_MESSAGE, 3000)

    def disable_tray_icon(self) -> None:
        """Hide the tray icon and remember that it is disabled."""
        if sys.platform == "win32":
            return
        if self.tray is not None:
            self.tray.visible = False
        self.settings.disabled_tray_icon = True

    def tray_clicked(self) -> None:
        """A click on the tray icon starts a visual capture."""
        self.start_visual_capture()

    def take_screenshot_from_menu(self) -> None:
        """Start a visual capture once the tray menu has had time to close."""
        self._schedule(TRAY_MENU_CLICK_DELAY_MS, self.start_visual_capture)

    def send_tray_notification(
        self, text: str, title: str = "Flameshot Info", timeout: int = 5000
    ) -> None:
        """Show a message from the tray icon, if there is one."""
        if self.tray is not None:
            self._notifier(title, text, timeout)

    # -- updates -----------------------------------------------------------

    def set_check_for_updates_enabled(self, enabled: bool) -> None:
        """Show or hide the update menu entry; check now when enabling."""
        if self.updates_action is not None:
            self.updates_action.visible = enabled
            self.updates_action.enabled = enabled
        if enabled:
            self._get_latest_available_version()

    def app_updates(self) -> None:
        """Open the release page, or check for a release and report it."""
        if not self.app_latest_url:
            self._show_update_status = True
            self._get_latest_available_version()
        else:
            self._open_url(self.app_latest_url)

    def _get_latest_available_version(self) -> None:
        if self._update_fetcher is not None:
            try:
                payload = self._update_fetcher()
            except OSError as error:
                payload = error
            self.handle_update_reply(payload)

        def recheck() -> None:
            if self.settings.check_for_updates:
                self._get_latest_available_version()

        self._schedule(UPDATE_CHECK_INTERVAL_MS, recheck)

    def handle_update_reply(self, payload: Any) -> None:
        """Process the latest-release document, or a failure (None or an error)."""
        if not self.settings.check_for_updates:
            return
        if payload is None or isinstance(payload, Exception):
            logger.warning(
                "Failed to get information about the latest version. %s", payload
            )
            if self._show_update_status:
                self.send_tray_notification(UPDATE_FAILED_MESSAGE, APP_NAME)
        else:
            document = self._decode(payload)
            self.app_latest_version = str(document.get("tag_name", "")).replace(
                "v", ""
            )
            if _parse_version(self.app_version) < _parse_version(
                self.app_latest_version
            ):
                self.app_latest_url = str(document.get("html_url", ""))
                message = f"New version {self.app_latest_version} is available"
                if self.updates_action is not None:
                    self.updates_action.text = message
                if self._show_update_status:
                    self.send_tray_notification(message, APP_NAME)
                    self._open_url(self.app_latest_url)
            elif self._show_update_status:
                self.send_tray_notification(LATEST_VERSION_MESSAGE, APP_NAME)
        self._show_update_status = False

    @staticmethod
    def _decode(payload: Any) -> dict:
        if isinstance(payload, dict):
            return payload
        try:
            document = json.loads(payload)
        except (TypeError, ValueError):
            return {}
        return document if isinstance(document, dict) else {}
import sys
from types import SimpleNamespace

import pytest

from flameshot.capturerequest import CaptureMode, CaptureRequest, ExportTask
from flameshot.controller import (
    CHECK_FOR_UPDATES,
    LATEST_VERSION_MESSAGE,
    STARTUP_MESSAGE,
    TRAY_MENU,
    UPDATE_FAILED_MESSAGE,
    Controller,
)
from flameshot.screens import Rect


class FakeGrabber:
    def __init__(self, ok=True):
        self.ok = ok
        self.grabbed = []

    def grab_entire_desktop(self):
        return "desktop" if self.ok else None

    def grab_screen(self, number):
        self.grabbed.append(number)
        return f"screen{number}" if self.ok else None

    def screen_geometry(self, number):
        return Rect(number * 100, 0, 100, 50)

    def cursor_screen(self):
        return 3


class FakeExporter:
    def __init__(self):
        self.calls = []

    def save_gui(self, capture, request_id):
        self.calls.append(("save_gui", capture))

    def save(self, capture, path, request_id):
        self.calls.append(("save", capture, path))

    def copy(self, capture):
        self.calls.append(("copy", capture))

    def pin(self, capture, geometry):
        self.calls.append(("pin", capture, geometry))

    def notify(self, message):
        self.calls.append(("notify", message))

    def upload(self, capture, copy_requested):
        self.calls.append(("upload", capture, copy_requested))


class FakeWindow:
    def __init__(self, request_id, path):
        self.request_id = request_id
        self.path = path
        self.notifications = []

    def show_app_update_notification(self, version, url):
        self.notifications.append((version, url))

    def close(self):
        pass


class FakeModal:
    def __init__(self, ui):
        self.ui = ui

    def close(self):
        self.ui.modals -= 1


class FakeUI:
    def __init__(self, modals=0):
        self.modals = modals
        self.windows = []
        self.errors = []

    def active_modal_widget(self):
        return FakeModal(self) if self.modals > 0 else None

    def create_capture_window(self, request_id, path):
        window = FakeWindow(request_id, path)
        self.windows.append(window)
        return window

    def show_error(self, title, text):
        self.errors.append(text)


class Scheduler:
    def __init__(self):
        self.pending = []

    def __call__(self, msec, func):
        self.pending.append((msec, func))

    def run(self):
        pending, self.pending = self.pending, []
        for _msec, func in pending:
            func()


def settings(**kwargs):
    values = dict(
        disabled_tray_icon=True,
        check_for_updates=False,
        show_startup_launch_message=False,
        ignore_update_to_version="",
    )
    values.update(kwargs)
    return SimpleNamespace(**values)


def make(grabber=None, ui=None, **kwargs):
    scheduler = Scheduler()
    exporter = FakeExporter()
    notes = []
    urls = []
    controller = Controller(
        grabber or FakeGrabber(),
        exporter,
        settings=kwargs.pop("config", settings()),
        ui=ui,
        scheduler=scheduler,
        notifier=lambda title, text, timeout: notes.append((title, text)),
        open_url=urls.append,
        sleep=lambda _seconds: None,
        **kwargs,
    )
    return controller, scheduler, exporter, notes, urls


def test_fullscreen_request_is_exported_after_its_delay():
    controller, scheduler, exporter, _, _ = make()
    controller.enable_exports()
    request = CaptureRequest(CaptureMode.FULLSCREEN_MODE, 250)
    request.add_save_task()
    request.set_static_id(7)
    request_id = controller.request_capture(request)
    assert request_id == 7
    assert scheduler.pending[0][0] == 250
    assert 7 in controller.requests
    scheduler.run()
    assert exporter.calls == [("save_gui", "desktop")]
    assert controller.requests == {}


def test_failed_capture_is_reported_and_dropped():
    controller, scheduler, exporter, _, _ = make(grabber=FakeGrabber(ok=False))
    controller.enable_exports()
    failed = []
    controller.capture_failed.append(failed.append)
    request = CaptureRequest(CaptureMode.FULLSCREEN_MODE)
    request.set_static_id(5)
    controller.request_capture(request)
    scheduler.run()
    assert failed == [5]
    assert controller.requests == {}
    assert exporter.calls == []


def test_screen_grab_uses_cursor_screen_and_pin_geometry():
    grabber = FakeGrabber()
    controller, scheduler, exporter, _, _ = make(grabber=grabber)
    controller.enable_exports()
    taken = []
    controller.capture_taken.append(lambda *args: taken.append(args))
    request = CaptureRequest(CaptureMode.SCREEN_MODE, 0, -1)
    request.add_task(ExportTask.PIN)
    request.set_static_id(9)
    controller.request_capture(request)
    scheduler.run()
    assert grabber.grabbed == [3]
    assert taken == [(9, "screen3", Rect(300, 0, 100, 50))]
    assert exporter.calls[0] == ("pin", "screen3", Rect(300, 0, 100, 50))


def test_visual_capture_opens_one_window_at_a_time():
    ui = FakeUI()
    controller, scheduler, _, _, _ = make(ui=ui)
    failed = []
    controller.capture_failed.append(failed.append)
    controller.start_visual_capture(1, "/tmp/out.png")
    assert ui.windows[0].path == "/tmp/out.png"
    if sys.platform != "darwin":
        controller.start_visual_capture(2, "")
        assert failed == [2]
        assert len(ui.windows) == 1
    controller.capture_window_closed()
    controller.start_visual_capture(3, "")
    assert ui.windows[-1].request_id == 3


def test_visual_capture_closes_modal_widgets_first():
    ui = FakeUI(modals=2)
    controller, _, _, _, _ = make(ui=ui)
    controller.start_visual_capture(4, "")
    assert ui.modals == 0
    assert len(ui.windows) == 1
    assert ui.errors == []


def test_visual_capture_without_ui_fails():
    controller, _, _, _, _ = make()
    failed = []
    controller.capture_failed.append(failed.append)
    controller.start_visual_capture(11, "")
    assert failed == [11]


def test_tray_icon_enable_and_disable(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    config = settings(show_startup_launch_message=True)
    controller, _, _, notes, _ = make(config=config)
    assert controller.tray is None
    controller.enable_tray_icon()
    assert controller.tray.menu == list(TRAY_MENU)
    assert controller.tray.visible
    assert config.disabled_tray_icon is False
    assert notes == [("Flameshot", STARTUP_MESSAGE)]
    assert controller.updates_action.visible is False
    controller.disable_tray_icon()
    assert controller.tray.visible is False
    assert config.disabled_tray_icon is True
    controller.enable_tray_icon()
    assert controller.tray.visible
    assert len(notes) == 1


def test_newer_version_reply_updates_menu_and_opens_page():
    config = settings(disabled_tray_icon=False, check_for_updates=True)
    replies = iter([{"tag_name": "v1.0.0"}] * 3)
    controller, _, _, notes, urls = make(
        config=config, app_version="v1.0.0", update_fetcher=lambda: next(replies)
    )
    assert controller.updates_action.text == CHECK_FOR_UPDATES
    controller.app_updates()
    assert notes[-1] == ("Flameshot", LATEST_VERSION_MESSAGE)

    payload = b'{"tag_name": "v2.1.0", "html_url": "https://example.com/r"}'
    controller._show_update_status = True
    controller.handle_update_reply(payload)
    assert controller.app_latest_version == "2.1.0"
    assert controller.app_latest_url == "https://example.com/r"
    assert controller.updates_action.text == "New version 2.1.0 is available"
    assert urls == ["https://example.com/r"]
    controller.app_updates()
    assert urls[-1] == "https://example.com/r"


def test_update_failure_is_reported_when_asked():
    config = settings(disabled_tray_icon=False, check_for_updates=True)

    def fetch():
        raise OSError("offline")

    controller, _, _, notes, _ = make(config=config, update_fetcher=fetch)
    assert notes == []
    controller.app_updates()
    assert notes == [("Flameshot", UPDATE_FAILED_MESSAGE)]
    assert controller.app_latest_url == ""


def test_update_reply_ignored_when_checks_disabled():
    controller, _, _, _, _ = make(app_version="1.0")
    controller.handle_update_reply({"tag_name": "v9.0", "html_url": "x"})
    assert controller.app_latest_url == ""
    assert controller.app_latest_version == "1.0"


def test_recheck_is_scheduled_daily():
    config = settings(check_for_updates=True)
    calls = []
    controller, scheduler, _, _, _ = make(
        config=config, update_fetcher=lambda: calls.append(1) or {}
    )
    assert calls == [1]
    assert scheduler.pending[-1][0] == 1000 * 60 * 60 * 24
    scheduler.run()
    assert calls == [1, 1]
    config.check_for_updates = False
    scheduler.run()
    assert calls == [1, 1]


def test_update_notification_shown_in_capture_window():
    config = settings(check_for_updates=True, ignore_update_to_version="")
    ui = FakeUI()
    controller, _, _, _, _ = make(config=config, ui=ui, app_version="1.0")
    controller.handle_update_reply({"tag_name": "v2.0", "html_url": "u"})
    controller.start_visual_capture(1, "")
    assert ui.windows[0].notifications == [("2.0", "u")]


def test_set_check_for_updates_toggles_action():
    controller, _, _, _, _ = make(config=settings(disabled_tray_icon=False))
    controller.set_check_for_updates_enabled(True)
    assert controller.updates_action.visible and controller.updates_action.enabled
    controller.set_check_for_updates_enabled(False)
    assert not controller.updates_action.visible


def test_send_capture_saved_emits():
    controller, _, _, _, _ = make()
    saved = []
    controller.capture_saved.append(lambda *args: saved.append(args))
    controller.send_capture_saved(3, "/tmp/shot.png")
    assert saved == [(3, "/tmp/shot.png")]


def test_handle_capture_taken_unknown_id_is_ignored():
    controller, _, exporter, _, _ = make()
    controller.handle_capture_taken(42, "img")
    assert exporter.calls == []
    with pytest.raises(KeyError):
        controller.requests[42]
"""Capture requests: what to capture and what to do with the result."""

from __future__ import annotations

import enum
import struct
import time
from typing import Any, Optional, Protocol, Union

from flameshot.screens import Rect

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_NULL_STRING = 0xFFFFFFFF

# Variant type identifiers used on the wire.
_VARIANT_INVALID = 0
_VARIANT_BOOL = 1
_VARIANT_INT = 2
_VARIANT_STRING = 10

PIN_NOTIFICATION = "Full screen screenshot pinned to screen"

VariantData = Union[None, bool, int, str]


class CaptureMode(enum.IntEnum):
    """How the screen is captured."""

    FULLSCREEN_MODE = 0
    GRAPHICAL_MODE = 1
    SCREEN_MODE = 2


class ExportTask(enum.IntFlag):
    """What happens to a capture once it is taken."""

    NO_TASK = 0
    COPY = 1
    SAVE = 2
    PRINT_RAW = 4
    PRINT_GEOMETRY = 8
    PIN = 16
    UPLOAD = 32
    ACCEPT_ON_SELECT = 64


class Exporter(Protocol):
    """The side effects a finished capture can be sent to."""

    def save_gui(self, capture: Any, request_id: int) -> None: ...

    def save(self, capture: Any, path: str, request_id: int) -> None: ...

    def copy(self, capture: Any) -> None: ...

    def pin(self, capture: Any, geometry: Optional[Rect]) -> None: ...

    def notify(self, message: str) -> None: ...

    def upload(self, capture: Any, copy_requested: bool) -> None: ...


def _hash_int64(key: int) -> int:
    key &= _MASK64
    return ((key >> 31) ^ key) & _MASK32


def _hash_string(text: str) -> int:
    result = 0
    units = text.encode("utf-16-le")
    for (unit,) in struct.iter_unpack("<H", units):
        result = (31 * result + unit) & _MASK32
    return result


def _variant_to_int(data: VariantData) -> int:
    if data is None:
        return 0
    if isinstance(data, str):
        try:
            return int(data.strip())
        except ValueError:
            return 0
    return int(data)


def _pack_string(text: str) -> bytes:
    if not text:
        return struct.pack(">I", _NULL_STRING)
    encoded = text.encode("utf-16-be")
    return struct.pack(">I", len(encoded)) + encoded


def _pack_variant(data: VariantData) -> bytes:
    if data is None:
        return struct.pack(">IB", _VARIANT_INVALID, 1)
    if isinstance(data, bool):
        return struct.pack(">IB?", _VARIANT_BOOL, 0, data)
    if isinstance(data, int):
        if not -(2**31) <= data < 2**31:
            raise ValueError(f"integer data out of range: {data}")
        return struct.pack(">IBi", _VARIANT_INT, 0, data)
    if isinstance(data, str):
        return struct.pack(">IB", _VARIANT_STRING, 0) + _pack_string(data)
    raise TypeError(f"unsupported request data type: {type(data).__name__}")


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._view = memoryview(bytes(data))
        self._pos = 0

    def take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._view):
            raise ValueError("truncated capture request data")
        chunk = self._view[self._pos:end].tobytes()
        self._pos = end
        return chunk

    def unpack(self, fmt: str) -> tuple:
        return struct.unpack(fmt, self.take(struct.calcsize(fmt)))

    def string(self) -> str:
        (length,) = self.unpack(">I")
        if length == _NULL_STRING:
            return ""
        return self.take(length).decode("utf-16-be")

    def variant(self) -> VariantData:
        type_id, _is_null = self.unpack(">IB")
        if type_id == _VARIANT_INVALID:
            return None
        if type_id == _VARIANT_BOOL:
            return self.unpack(">?")[0]
        if type_id == _VARIANT_INT:
            return self.unpack(">i")[0]
        if type_id == _VARIANT_STRING:
            return self.string()
        raise ValueError(f"unsupported variant type {type_id}")


class CaptureRequest:
    """A request to capture the screen and export the result."""

    def __init__(
        self,
        mode: CaptureMode,
        delay: int = 0,
        data: VariantData = None,
        tasks: ExportTask = ExportTask.NO_TASK,
    ) -> None:
        if delay < 0:
            raise ValueError("delay must not be negative")
        self.mode = CaptureMode(mode)
        self.delay = delay
        self.data = data
        self.tasks = ExportTask(tasks)
        self.path = ""
        self.pin_geometry: Optional[Rect] = None
        self._forced_id = False
        self._id = 0

    def set_static_id(self, request_id: int) -> None:
        """Fix the identifier so later calls of request_id() return it."""
        self._forced_id = True
        self._id = request_id & _MASK32

    def request_id(self) -> int:
        """The fixed identifier, or one derived from the request and time."""
        if self._forced_id:
            return self._id
        now_ms = time.time_ns() // 1_000_000
        values = (
            int(self.mode),
            _hash_int64(self.delay * now_ms),
            _hash_string(self.path),
            int(self.tasks),
            _variant_to_int(self.data),
        )
        result = 0
        for value in values:
            value &= _MASK32
            result ^= (value + 0x9E3779B9 + (result << 6) + (result >> 2)) & _MASK32
        return result

    def serialize(self) -> bytes:
        """Encode the request as big-endian binary data."""
        return b"".join(
            (
                struct.pack(">iIi", int(self.mode), self.delay, int(self.tasks)),
                _pack_variant(self.data),
                struct.pack(">?I", self._forced_id, self._id),
                _pack_string(self.path),
            )
        )

    @classmethod
    def deserialize(cls, data: bytes) -> "CaptureRequest":
        """Decode data produced by serialize(); raises ValueError if malformed."""
        reader = _Reader(data)
        mode, delay, tasks = reader.unpack(">iIi")
        request = cls(CaptureMode(mode), delay)
        request.data = reader.variant()
        request._forced_id, request._id = reader.unpack(">?I")
        request.path = reader.string()
        request.tasks = ExportTask(tasks)
        return request

    def add_task(self, task: ExportTask) -> None:
        """Add a task; saving must go through add_save_task()."""
        if task == ExportTask.SAVE:
            raise ValueError("SAVE task must be added using add_save_task")
        self.tasks |= task

    def add_save_task(self, path: str = "") -> None:
        """Save the capture to ``path``, or ask where when it is empty."""
        self.tasks |= ExportTask.SAVE
        self.path = path

    def add_pin_task(self, geometry: Rect) -> None:
        """Pin the capture in a window with the given geometry."""
        self.tasks |= ExportTask.PIN
        self.pin_geometry = geometry

    def export_capture(self, capture: Any, exporter: Exporter) -> None:
        """Carry out every requested task on ``capture``."""
        if self.tasks & ExportTask.SAVE:
            if self.path:
                exporter.save(capture, self.path, self._id)
            else:
                exporter.save_gui(capture, self._id)

        if self.tasks & ExportTask.COPY:
            exporter.copy(capture)

        if self.tasks & ExportTask.PIN:
            exporter.pin(capture, self.pin_geometry)
            if self.mode in (CaptureMode.SCREEN_MODE, CaptureMode.FULLSCREEN_MODE):
                exporter.notify(PIN_NOTIFICATION)

        if self.tasks & ExportTask.UPLOAD:
            exporter.upload(capture, bool(self.tasks & ExportTask.COPY))
"""Windows clipboard capture via pywin32."""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager

import win32clipboard
import win32con

from .models import FileReference, ImageFormat, StaticSnapshot
from .type_mapper import PLAIN_TEXT_FORMAT, PlatformFormatId, TypeRegistry, map_content_type

log = logging.getLogger(__name__)


# Registered name browsers and Office use for PNG payloads.
PNG_FORMAT_NAME = "PNG"


@contextmanager
def open_clipboard(hwnd: int | None, retries: int = 10, delay_s: float = 0.02):
    """Open the Windows clipboard with retry logic, yielding inside the lock."""
    last_exc: Exception | None = None
    for _ in range(max(1, retries)):
        try:
            win32clipboard.OpenClipboard(hwnd)
            last_exc = None
            break
        except Exception as exc:
            last_exc = exc
            time.sleep(delay_s)
    if last_exc is not None:
        raise last_exc
    try:
        yield
    finally:
        try:
            win32clipboard.CloseClipboard()
        except Exception:
            log.debug("CloseClipboard 异常", exc_info=True)


def native_format(fmt_id: PlatformFormatId) -> int:
    if fmt_id == PLAIN_TEXT_FORMAT:
        return win32con.CF_UNICODETEXT
    if fmt_id == ImageFormat.TIFF.mime:
        return win32con.CF_TIFF
    if fmt_id == ImageFormat.PNG.mime:
        return win32clipboard.RegisterClipboardFormat(PNG_FORMAT_NAME)
    return win32clipboard.RegisterClipboardFormat(fmt_id)


def _read_bytes(fmt: int) -> bytes | None:
    if not win32clipboard.IsClipboardFormatAvailable(fmt):
        return None
    raw = win32clipboard.GetClipboardData(fmt)
    if not isinstance(raw, (bytes, bytearray)) or not raw:
        return None
    return bytes(raw)


def capture_clipboard(hwnd: int | None = None, registry: TypeRegistry | None = None) -> StaticSnapshot:
    with open_clipboard(hwnd):
        files: tuple[FileReference, ...] = ()
        if win32clipboard.IsClipboardFormatAvailable(win32con.CF_HDROP):
            files = tuple(FileReference.local(str(p)) for p in win32clipboard.GetClipboardData(win32con.CF_HDROP))

        text: str | None = None
        text_fmt = native_format(map_content_type("text/plain", registry))
        if win32clipboard.IsClipboardFormatAvailable(text_fmt):
            raw = win32clipboard.GetClipboardData(text_fmt)
            if isinstance(raw, bytes):
                raw = raw.decode("utf-16-le", errors="replace")
            text = str(raw) or None

        images: dict[ImageFormat, bytes] = {}
        for fmt in ImageFormat:
            data = _read_bytes(native_format(map_content_type(fmt.mime, registry)))
            if data:
                images[fmt] = data

    return StaticSnapshot(files=files, plain_text=text, images=images)

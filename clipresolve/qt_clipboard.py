from __future__ import annotations

import logging

from PySide6.QtCore import QMimeData, QObject, QUrl, Signal
from PySide6.QtGui import QClipboard, QGuiApplication

from .models import ClipboardKind, FileReference, ImageFormat, StaticSnapshot
from .type_mapper import PLAIN_TEXT_FORMAT, TypeRegistry, map_content_type

log = logging.getLogger(__name__)


_QT_MODES = {
    ClipboardKind.STANDARD: QClipboard.Mode.Clipboard,
    ClipboardKind.SELECTION: QClipboard.Mode.Selection,
}


class PasteNotifier(QObject):
    """Event channel for UI that reacts to an image paste (e.g. a toast)."""

    image_did_paste = Signal()

    def notify(self) -> None:
        self.image_did_paste.emit()


def file_reference_from_url(url: QUrl) -> FileReference:
    if url.isLocalFile():
        return FileReference.local(url.toLocalFile())
    return FileReference.remote(bytes(url.toEncoded().data()).decode("ascii", errors="replace"))


def capture_mime_data(mime: QMimeData | None, registry: TypeRegistry | None = None) -> StaticSnapshot:
    if mime is None:
        return StaticSnapshot()

    files: tuple[FileReference, ...] = ()
    if mime.hasUrls():
        files = tuple(file_reference_from_url(u) for u in mime.urls())

    text: str | None = None
    if mime.hasFormat(PLAIN_TEXT_FORMAT) or mime.hasText():
        text = mime.text() or None

    images: dict[ImageFormat, bytes] = {}
    for fmt in ImageFormat:
        fmt_id = map_content_type(fmt.mime, registry)
        if not mime.hasFormat(fmt_id):
            continue
        raw = bytes(mime.data(fmt_id).data())
        if raw:
            images[fmt] = raw

    return StaticSnapshot(files=files, plain_text=text, images=images)


def read_clipboard(
    kind: ClipboardKind = ClipboardKind.STANDARD,
    registry: TypeRegistry | None = None,
) -> StaticSnapshot:
    if not isinstance(QGuiApplication.instance(), QGuiApplication):
        raise RuntimeError("读取剪贴板需要先创建 QGuiApplication")
    cb = QGuiApplication.clipboard()
    if kind is ClipboardKind.SELECTION and not cb.supportsSelection():
        log.debug("当前平台不支持选择剪贴板")
        return StaticSnapshot()
    return capture_mime_data(cb.mimeData(_QT_MODES[kind]), registry)

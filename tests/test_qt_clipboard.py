"""Tests for the PySide6 clipboard backend."""

import pytest
from PySide6.QtCore import QByteArray, QCoreApplication, QMimeData, QUrl

from clipresolve.models import ClipboardKind, ContentKind, FileReference, ImageFormat
from clipresolve.qt_clipboard import (
    PasteNotifier,
    capture_mime_data,
    file_reference_from_url,
    read_clipboard,
)
from clipresolve.type_mapper import StaticTypeRegistry


@pytest.fixture(scope="module")
def qcore():
    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture
def registry() -> StaticTypeRegistry:
    return StaticTypeRegistry({"image/png": "image/png", "image/tiff": "image/tiff"})


def test_local_url_becomes_path() -> None:
    ref = file_reference_from_url(QUrl.fromLocalFile("/Users/a/My File.txt"))

    assert ref == FileReference.local("/Users/a/My File.txt")


def test_remote_url_uses_encoded_form() -> None:
    ref = file_reference_from_url(QUrl("https://example.com/a b"))

    assert ref == FileReference.remote("https://example.com/a%20b")


def test_capture_urls_and_text(registry: StaticTypeRegistry) -> None:
    mime = QMimeData()
    mime.setUrls([QUrl.fromLocalFile("/tmp/x y"), QUrl("https://example.com/")])
    mime.setText("hello")

    snap = capture_mime_data(mime, registry)

    assert snap.file_references() == (
        FileReference.local("/tmp/x y"),
        FileReference.remote("https://example.com/"),
    )
    assert snap.text() == "hello"


def test_capture_images(registry: StaticTypeRegistry, png_bytes: bytes, tiff_bytes: bytes) -> None:
    mime = QMimeData()
    mime.setData("image/png", QByteArray(png_bytes))
    mime.setData("image/tiff", QByteArray(tiff_bytes))

    snap = capture_mime_data(mime, registry)

    assert snap.kinds() == frozenset({ContentKind.RASTER_IMAGE})
    assert snap.image(ImageFormat.PNG) == png_bytes
    assert snap.image(ImageFormat.TIFF) == tiff_bytes


def test_capture_uses_mapped_format(png_bytes: bytes) -> None:
    mime = QMimeData()
    mime.setData("public.png", QByteArray(png_bytes))

    snap = capture_mime_data(mime, StaticTypeRegistry({"image/png": "public.png"}))

    assert snap.image(ImageFormat.PNG) == png_bytes


def test_capture_none_is_empty() -> None:
    assert capture_mime_data(None).kinds() == frozenset()


def test_read_clipboard_requires_gui_application(qcore) -> None:
    with pytest.raises(RuntimeError):
        read_clipboard(ClipboardKind.STANDARD)


def test_notifier_emits(qcore) -> None:
    notifier = PasteNotifier()
    seen: list[bool] = []
    notifier.image_did_paste.connect(lambda: seen.append(True))

    notifier.notify()

    assert seen == [True]

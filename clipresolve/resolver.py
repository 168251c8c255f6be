"""Turn a clipboard snapshot into one string for a terminal's input stream.

Tiers, first hit wins:

1. file references, local paths shell-escaped, joined with spaces
2. plain text, verbatim
3. image data, written to a temp PNG whose escaped path is returned

Nothing raises out of here; anything unusable collapses to ``None``.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from .artifacts import TempArtifactStore
from .images import tiff_to_png
from .models import ClipboardSnapshot, ContentKind, FileReference, ImageFormat
from .shell import shell_escape

log = logging.getLogger(__name__)


Strategy = Callable[[ClipboardSnapshot], "str | None"]
ImagePasteCallback = Callable[[], None]


def render_file_reference(ref: FileReference) -> str:
    if ref.is_local:
        return shell_escape(ref.value) if ref.value else ""
    return ref.value


def resolve_file_references(snapshot: ClipboardSnapshot) -> str | None:
    """Every reference rendered, joined with single spaces.

    A non-empty list claims the tier even when every item renders empty; that
    case yields ``""``, which stops resolution without falling through.
    """
    if ContentKind.FILE_REFERENCES not in snapshot.kinds():
        return None
    refs = snapshot.file_references()
    if not refs:
        return None
    rendered = [render_file_reference(r) for r in refs]
    if not any(rendered):
        return ""
    return " ".join(rendered)


def resolve_plain_text(snapshot: ClipboardSnapshot) -> str | None:
    if ContentKind.PLAIN_TEXT not in snapshot.kinds():
        return None
    return snapshot.text() or None


class ImageResolver:
    def __init__(
        self,
        artifacts: TempArtifactStore | None = None,
        on_image_pasted: ImagePasteCallback | None = None,
    ) -> None:
        self.artifacts = artifacts if artifacts is not None else TempArtifactStore()
        self.on_image_pasted = on_image_pasted

    def png_bytes(self, snapshot: ClipboardSnapshot) -> bytes | None:
        png = snapshot.image(ImageFormat.PNG)
        if png:
            return png
        tiff = snapshot.image(ImageFormat.TIFF)
        if tiff:
            return tiff_to_png(tiff)
        return None

    def __call__(self, snapshot: ClipboardSnapshot) -> str | None:
        if ContentKind.RASTER_IMAGE not in snapshot.kinds():
            return None
        png = self.png_bytes(snapshot)
        if not png:
            return None

        path = self.artifacts.write_png(png)
        if path is None:
            return None

        self._notify()
        return shell_escape(str(path))

    def _notify(self) -> None:
        if self.on_image_pasted is None:
            return
        try:
            self.on_image_pasted()
        except Exception:
            log.debug("图片粘贴通知回调异常", exc_info=True)


class ContentResolver:
    def __init__(self, strategies: Iterable[Strategy]) -> None:
        self._strategies: Sequence[Strategy] = tuple(strategies)

    @classmethod
    def default(
        cls,
        artifacts: TempArtifactStore | None = None,
        on_image_pasted: ImagePasteCallback | None = None,
    ) -> ContentResolver:
        return cls(
            [
                resolve_file_references,
                resolve_plain_text,
                ImageResolver(artifacts=artifacts, on_image_pasted=on_image_pasted),
            ]
        )

    @property
    def strategies(self) -> Sequence[Strategy]:
        return self._strategies

    def resolve(self, snapshot: ClipboardSnapshot) -> str | None:
        for strategy in self._strategies:
            try:
                result = strategy(snapshot)
            except Exception:
                log.debug("剪贴板解析策略异常: %r", strategy, exc_info=True)
                continue
            if result is not None:
                return result or None
        return None


def resolve_opinionated_string(
    snapshot: ClipboardSnapshot,
    *,
    artifacts: TempArtifactStore | None = None,
    on_image_pasted: ImagePasteCallback | None = None,
) -> str | None:
    return ContentResolver.default(artifacts=artifacts, on_image_pasted=on_image_pasted).resolve(snapshot)


def extract_image_as_tempfile(
    snapshot: ClipboardSnapshot,
    *,
    artifacts: TempArtifactStore | None = None,
    on_image_pasted: ImagePasteCallback | None = None,
) -> str | None:
    try:
        return ImageResolver(artifacts=artifacts, on_image_pasted=on_image_pasted)(snapshot)
    except Exception:
        log.debug("提取剪贴板图片异常", exc_info=True)
        return None

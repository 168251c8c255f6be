from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Protocol


class ContentKind(Enum):
    FILE_REFERENCES = "files"
    PLAIN_TEXT = "text"
    RASTER_IMAGE = "image"


class ImageFormat(Enum):
    # Declaration order is the lookup order.
    PNG = "image/png"
    TIFF = "image/tiff"

    @property
    def mime(self) -> str:
        return self.value


class ClipboardKind(Enum):
    STANDARD = "standard"
    SELECTION = "selection"


@dataclass(frozen=True, slots=True)
class FileReference:
    value: str
    is_local: bool = True

    @classmethod
    def local(cls, path: str) -> FileReference:
        return cls(value=path, is_local=True)

    @classmethod
    def remote(cls, url: str) -> FileReference:
        return cls(value=url, is_local=False)


class ClipboardSnapshot(Protocol):
    def kinds(self) -> frozenset[ContentKind]: ...

    def file_references(self) -> tuple[FileReference, ...]: ...

    def text(self) -> str | None: ...

    def image(self, fmt: ImageFormat) -> bytes | None: ...


@dataclass(frozen=True, slots=True)
class StaticSnapshot:
    """Clipboard contents captured in one pass.

    Backends fill this while they hold the clipboard, so resolution never goes
    back to shared state once it starts writing files.
    """

    files: tuple[FileReference, ...] = ()
    plain_text: str | None = None
    images: Mapping[ImageFormat, bytes] = field(default_factory=dict)

    def kinds(self) -> frozenset[ContentKind]:
        kinds: set[ContentKind] = set()
        if self.files:
            kinds.add(ContentKind.FILE_REFERENCES)
        if self.plain_text:
            kinds.add(ContentKind.PLAIN_TEXT)
        if any(self.images.get(fmt) for fmt in ImageFormat):
            kinds.add(ContentKind.RASTER_IMAGE)
        return frozenset(kinds)

    def file_references(self) -> tuple[FileReference, ...]:
        return tuple(self.files)

    def text(self) -> str | None:
        return self.plain_text or None

    def image(self, fmt: ImageFormat) -> bytes | None:
        data = self.images.get(fmt)
        return bytes(data) if data else None

    def describe(self) -> str:
        parts: list[str] = []
        if self.files:
            parts.append(f"files={len(self.files)}")
        if self.plain_text:
            parts.append(f"text={len(self.plain_text)} chars")
        for fmt in ImageFormat:
            data = self.images.get(fmt)
            if data:
                parts.append(f"{fmt.name.lower()}={len(data)} bytes")
        return ", ".join(parts) or "(empty)"

"""Map MIME type strings to the clipboard format identifiers backends read."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Mapping, Protocol

from PySide6.QtCore import QMimeDatabase

log = logging.getLogger(__name__)


PlatformFormatId = str

# Generic lookup may hand back a more specific type for text/plain, which not
# every consumer reads.
PLAIN_TEXT_FORMAT: PlatformFormatId = "text/plain"


class TypeRegistry(Protocol):
    def resolve_canonical_type(self, mime: str) -> str | None: ...


class MimeDatabaseRegistry:
    """Canonical types from Qt's shared MIME database (aliases resolved)."""

    def __init__(self, db: QMimeDatabase | None = None) -> None:
        self._db = db if db is not None else QMimeDatabase()

    def resolve_canonical_type(self, mime: str) -> str | None:
        mt = self._db.mimeTypeForName(mime)
        if not mt.isValid():
            return None
        return mt.name() or None


class StaticTypeRegistry:
    def __init__(self, table: Mapping[str, str] | None = None) -> None:
        self._table = dict(table or {})

    def resolve_canonical_type(self, mime: str) -> str | None:
        return self._table.get(mime)


@lru_cache(maxsize=1)
def default_registry() -> TypeRegistry:
    return MimeDatabaseRegistry()


def map_content_type(mime: str, registry: TypeRegistry | None = None) -> PlatformFormatId:
    """Return the clipboard format identifier for ``mime``.

    ``text/plain`` always maps to :data:`PLAIN_TEXT_FORMAT`. Other strings go
    through ``registry``; when it knows nothing about them the raw string is
    used as the identifier. Never raises.
    """
    if mime == "text/plain":
        return PLAIN_TEXT_FORMAT

    reg = registry if registry is not None else default_registry()
    try:
        canonical = reg.resolve_canonical_type(mime)
    except Exception:
        log.debug("类型注册表查询异常: %r", mime, exc_info=True)
        canonical = None

    if canonical:
        return PlatformFormatId(canonical)
    return PlatformFormatId(mime)

"""Temp files written for pasted images.

Every file this module creates lives in one directory under a reserved name
prefix. Each write first deletes everything under that prefix, so after a
successful write exactly one artifact remains.
"""
from __future__ import annotations

import logging
import os
import shutil
import tempfile
import uuid
from pathlib import Path
from threading import RLock
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .settings import AppSettings

log = logging.getLogger(__name__)


DEFAULT_PREFIX = "clipresolve-paste"
ARTIFACT_SUFFIX = ".png"


class TempArtifactStore:
    def __init__(self, temp_dir: str | os.PathLike[str] | None = None, prefix: str = DEFAULT_PREFIX) -> None:
        if not prefix:
            raise ValueError("prefix must not be empty")
        self._temp_dir = Path(temp_dir or tempfile.gettempdir()).absolute()
        self._prefix = prefix
        self._lock = RLock()

    @classmethod
    def from_settings(cls, settings: AppSettings) -> TempArtifactStore:
        return cls(temp_dir=settings.temp_dir, prefix=settings.temp_prefix)

    @property
    def temp_dir(self) -> Path:
        return self._temp_dir

    @property
    def prefix(self) -> str:
        return self._prefix

    def _is_reserved(self, name: str) -> bool:
        return name.startswith(self._prefix + "-")

    def new_path(self) -> Path:
        return self._temp_dir / f"{self._prefix}-{uuid.uuid4()}{ARTIFACT_SUFFIX}"

    def artifacts(self) -> list[Path]:
        try:
            with os.scandir(self._temp_dir) as it:
                return sorted(Path(e.path) for e in it if self._is_reserved(e.name))
        except OSError:
            return []

    def purge(self) -> int:
        """Delete every reserved entry. Failures are per entry and non-fatal."""
        with self._lock:
            try:
                with os.scandir(self._temp_dir) as it:
                    entries = [e for e in it if self._is_reserved(e.name)]
            except OSError:
                log.debug("列出临时目录失败: %s", self._temp_dir, exc_info=True)
                return 0

            removed = 0
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        shutil.rmtree(entry.path)
                    else:
                        os.unlink(entry.path)
                    removed += 1
                except OSError:
                    log.debug("删除临时文件失败: %s", entry.path, exc_info=True)
            return removed

    def write_png(self, data: bytes) -> Path | None:
        """Replace whatever is in the reserved namespace with ``data``."""
        with self._lock:
            self.purge()
            path = self.new_path()
            try:
                os.makedirs(self._temp_dir, exist_ok=True)
                with open(path, "wb") as f:
                    f.write(data)
            except OSError:
                log.debug("写入临时文件失败: %s", path, exc_info=True)
                try:
                    os.unlink(path)
                except OSError:
                    pass
                return None
            log.debug("已写入粘贴图片: %s (%d bytes)", path, len(data))
            return path

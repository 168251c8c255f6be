from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass

from .artifacts import DEFAULT_PREFIX
from .models import ClipboardKind

log = logging.getLogger(__name__)


BACKENDS: tuple[str, ...] = ("auto", "qt", "win32")


@dataclass(frozen=True, slots=True)
class AppSettings:
    temp_dir: str | None = None
    temp_prefix: str = DEFAULT_PREFIX
    clipboard: str = ClipboardKind.STANDARD.value
    backend: str = "auto"

    @property
    def clipboard_kind(self) -> ClipboardKind:
        return ClipboardKind(self.clipboard)


def default_app_dir() -> str:
    base = os.environ.get("APPDATA") or os.environ.get("XDG_CONFIG_HOME")
    if not base:
        base = os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(base, "ClipResolve")


def default_config_path() -> str:
    return os.path.join(default_app_dir(), "config.json")


def load_settings(path: str | None = None) -> AppSettings:
    path = path or default_config_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except Exception:
        data = {}
    if not isinstance(data, dict):
        log.debug("配置文件格式无效: %s", path)
        data = {}

    temp_dir = data.get("temp_dir") or None
    temp_prefix = str(data.get("temp_prefix") or DEFAULT_PREFIX)
    clipboard = str(data.get("clipboard") or ClipboardKind.STANDARD.value)
    if clipboard not in {k.value for k in ClipboardKind}:
        clipboard = ClipboardKind.STANDARD.value
    backend = str(data.get("backend") or "auto")
    if backend not in BACKENDS:
        backend = "auto"
    return AppSettings(
        temp_dir=str(temp_dir) if temp_dir else None,
        temp_prefix=temp_prefix,
        clipboard=clipboard,
        backend=backend,
    )


def save_settings(settings: AppSettings, path: str | None = None) -> None:
    path = path or default_config_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    data = asdict(settings)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

import argparse
import logging
import os
import sys

log = logging.getLogger("clipresolve")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr or open(os.devnull, "w")),
        ],
    )


_DEPENDENCY_MODULES = ("PySide6", "PIL", "win32clipboard", "win32con")


def _uses_win32(settings) -> bool:
    return settings.backend == "win32" or (settings.backend == "auto" and os.name == "nt")


def _load_modules(use_win32: bool = False):
    try:
        from clipresolve import qt_clipboard, resolver

        win_clipboard = None
        if use_win32:
            from clipresolve import win_clipboard
    except ModuleNotFoundError as e:
        missing = getattr(e, "name", "") or ""
        if missing.split(".")[0] in _DEPENDENCY_MODULES:
            sys.stderr.write(
                f"依赖缺失：{missing}\n"
                "请使用当前解释器安装依赖：\n"
                f"  {sys.executable} -m pip install -e .\n"
            )
        raise
    return qt_clipboard, resolver, win_clipboard


def _ensure_app():
    from PySide6.QtGui import QGuiApplication

    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication(sys.argv[:1])
        app.setQuitOnLastWindowClosed(False)
    return app


def _capture(settings, qt_clipboard, win_clipboard):
    from clipresolve.models import ClipboardKind

    kind = settings.clipboard_kind
    if win_clipboard is not None:
        if kind is not ClipboardKind.STANDARD:
            log.warning("Windows 剪贴板不支持 %s，改用标准剪贴板", kind.value)
        return win_clipboard.capture_clipboard()
    return qt_clipboard.read_clipboard(kind)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="clipresolve",
        description="Print the clipboard as one shell-safe string.",
    )
    parser.add_argument("--selection", action="store_true", help="read the selection clipboard")
    parser.add_argument("--config", default=None, help="path to config.json")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    from dataclasses import replace

    from clipresolve.models import ClipboardKind
    from clipresolve.settings import load_settings

    settings = load_settings(args.config)
    if args.selection:
        settings = replace(settings, clipboard=ClipboardKind.SELECTION.value)

    qt_clipboard, resolver, win_clipboard = _load_modules(_uses_win32(settings))
    from clipresolve.artifacts import TempArtifactStore

    app = _ensure_app()
    notifier = qt_clipboard.PasteNotifier()
    notifier.image_did_paste.connect(lambda: log.info("已粘贴剪贴板图片"))

    try:
        snapshot = _capture(settings, qt_clipboard, win_clipboard)
    except Exception:
        log.exception("读取剪贴板失败")
        return 2
    log.debug("剪贴板内容: %s", snapshot.describe())

    text = resolver.resolve_opinionated_string(
        snapshot,
        artifacts=TempArtifactStore.from_settings(settings),
        on_image_pasted=notifier.notify,
    )
    if text is None:
        return 1
    sys.stdout.write(text)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

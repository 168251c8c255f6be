from __future__ import annotations

import io
import logging

from PIL import Image

log = logging.getLogger(__name__)


_PNG_MODES = frozenset({"1", "L", "LA", "I;16", "P", "RGB", "RGBA"})


def tiff_to_png(data: bytes) -> bytes | None:
    """Re-encode TIFF bytes as PNG. Returns None if either step fails."""
    if not data:
        return None
    try:
        with Image.open(io.BytesIO(data), formats=["TIFF"]) as im:
            im.load()
            if im.mode not in _PNG_MODES and im.mode.split(";")[0] in ("I", "F"):
                # 32-bit integer and float rasters go to 16-bit grayscale.
                im = im.convert("I").convert("I;16")
            elif im.mode not in _PNG_MODES:
                im = im.convert("RGBA" if "A" in im.getbands() else "RGB")
            out = io.BytesIO()
            im.save(out, format="PNG")
    except Exception:
        log.debug("TIFF 转 PNG 失败", exc_info=True)
        return None
    return out.getvalue()

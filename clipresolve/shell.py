from __future__ import annotations

import re

SHELL_SPECIAL_CHARS = "\\ ()[]{}<>\"'`!#$&;|*?\t"
_RE_SHELL_SPECIAL = re.compile("([" + re.escape(SHELL_SPECIAL_CHARS) + "])")


def shell_escape(s: str) -> str:
    """Backslash-escape characters the shell would otherwise interpret."""
    return _RE_SHELL_SPECIAL.sub(r"\\\1", s)

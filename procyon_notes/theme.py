"""Application style sheet loading, saving and preprocessing."""

from __future__ import annotations

import logging
import os
import re
import sys
from typing import Dict, Optional

log = logging.getLogger(__name__)

_VAR_EXPR = re.compile(r"(\$[a-zA-Z_][a-zA-Z_-]*)\s*:\s*(.+);")

_PLATFORMS = ("windows", "linux", "macos")


def _platform_expr(name: str) -> re.Pattern:
    return re.compile(rf"^\s*{name}:(.*)$", re.IGNORECASE | re.MULTILINE)


def _current_platform() -> Optional[str]:
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform == "darwin":
        return "macos"
    return None


def load_text_resource(path: str) -> str:
    """Read a UTF-8 text file; an unreadable file gives an empty string."""
    try:
        with open(path, "rb") as stream:
            return stream.read().decode("utf-8", errors="replace")
    except OSError as exc:
        log.warning("Unable to open resource file %s: %s", path, exc)
        return ""


def save_raw_style_sheet(text: str, path: str) -> None:
    """Overwrite an existing style sheet file with ``text``."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"File doesn't exist: {path}")
    try:
        stream = open(path, "w", encoding="utf-8")
    except OSError as exc:
        raise OSError(f'Failed to open "{path}" for writing: {exc}') from exc
    with stream:
        try:
            stream.write(text)
        except OSError as exc:
            raise OSError(f'Failed to write file "{path}": {exc}') from exc


def make_style_sheet(raw_style_sheet: str, platform: Optional[str] = None) -> str:
    """Interpolate ``$variables`` and keep only the lines for the given platform.

    ``platform`` is one of "windows", "linux" or "macos"; when omitted the
    running platform is used. Any other value leaves platform lines untouched.
    """
    variables: Dict[str, str] = {}
    for match in _VAR_EXPR.finditer(raw_style_sheet):
        variables[match.group(1)] = match.group(2)

    style_sheet = _VAR_EXPR.sub("", raw_style_sheet)
    for name in sorted(variables):
        style_sheet = style_sheet.replace(name, variables[name])

    if platform is None:
        platform = _current_platform()
    if platform is not None:
        platform = platform.lower()
    if platform in _PLATFORMS:
        style_sheet = _platform_expr(platform).sub(r"\1", style_sheet)
        for other in _PLATFORMS:
            if other != platform:
                style_sheet = _platform_expr(other).sub("", style_sheet)

    return style_sheet
"""Character formats for highlighted text and hyperlink lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class CharFormat:
    """Resolved character format of a text range."""

    font_family: Optional[str] = None
    foreground: Optional[str] = None
    background: Optional[str] = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strike_out: bool = False
    anchor: bool = False
    anchor_href: str = ""
    underline_color: Optional[str] = None
    spell_check_underline: bool = False


@dataclass(frozen=True)
class FormatRange:
    """A format applied to ``length`` characters starting at ``start``."""

    start: int
    length: int
    format: CharFormat


class TextFormat:
    """Chainable builder of a character format."""

    def __init__(self, color_name: str = "") -> None:
        self._color_name = color_name
        self._font_family = ""
        self._back_color_name = ""
        self._bold = False
        self._italic = False
        self._underline = False
        self._anchor = False
        self._spell_error = False
        self._strike_out = False

    def family(self, family: str) -> "TextFormat":
        self._font_family = family
        return self

    def bold(self) -> "TextFormat":
        self._bold = True
        return self

    def italic(self) -> "TextFormat":
        self._italic = True
        return self

    def underline(self) -> "TextFormat":
        self._underline = True
        return self

    def strike_out(self) -> "TextFormat":
        self._strike_out = True
        return self

    def anchor(self) -> "TextFormat":
        self._anchor = True
        return self

    def spell_error(self) -> "TextFormat":
        self._spell_error = True
        return self

    def background(self, color_name: str) -> "TextFormat":
        self._back_color_name = color_name
        return self

    def get(self) -> CharFormat:
        return CharFormat(
            font_family=self._font_family or None,
            foreground=self._color_name or None,
            background=self._back_color_name or None,
            bold=self._bold,
            italic=self._italic,
            underline=self._underline,
            strike_out=self._strike_out,
            anchor=self._anchor,
            underline_color="red" if self._spell_error else None,
            spell_check_underline=self._spell_error,
        )


def hyperlink_at(formats: Iterable[FormatRange], position: int) -> str:
    """Target of the first anchor range covering ``position``, or ""."""
    for rng in formats:
        fmt = rng.format
        if fmt.anchor and rng.start <= position < rng.start + rng.length:
            if fmt.anchor_href:
                return fmt.anchor_href
    return ""
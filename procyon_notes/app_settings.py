"""Application-wide settings with change notification."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, MutableMapping, Optional

from .theme import load_text_resource


class AppSettingsOption(enum.Enum):
    """Individual settings that listeners may be told about."""

    MARKDOWN_CSS = "markdown_css"


@dataclass(frozen=True)
class Font:
    """A font family and point size."""

    family: str
    point_size: int


def _to_font(value: Any) -> Font:
    if isinstance(value, Font):
        return value
    text = str(value)
    family, _, size = text.rpartition(",")
    if not family:
        return Font(text.strip(), 12)
    try:
        return Font(family.strip(), int(float(size.strip())))
    except ValueError:
        return Font(family.strip(), 12)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return bool(value)


@dataclass
class Option:
    """Description of one persisted setting and the attribute it fills."""

    category: str
    name: str
    title: str
    description: str
    default: Any
    attribute: str
    convert: Callable[[Any], Any] = field(repr=False, default=lambda v: v)

    @property
    def key(self) -> str:
        return f"{self.category}/{self.name}"


class AppSettingsListener:
    """Receiver of settings changes; forwards them to optional callbacks."""

    def __init__(
        self,
        on_settings_changed: Optional[Callable[[], None]] = None,
        on_option_changed: Optional[Callable[[AppSettingsOption], None]] = None,
    ) -> None:
        self._on_settings_changed = on_settings_changed
        self._on_option_changed = on_option_changed

    def settings_changed(self) -> None:
        callback = getattr(self, "_on_settings_changed", None)
        if callback is not None:
            callback()

    def option_changed(self, option: AppSettingsOption) -> None:
        callback = getattr(self, "_on_option_changed", None)
        if callback is not None:
            callback(option)


_DEFAULT_FONT = Font("Arial", 12)


class AppSettings:
    """Settings of the application, loaded from and saved to a key mapping."""

    def __init__(self, markdown_css_path: Optional[str] = None) -> None:
        self.markdown_css_path = markdown_css_path
        self.use_native_menu_bar = not sys.platform.startswith("win")
        self.is_dev_mode = False
        self.memo_font = _DEFAULT_FONT
        self.memo_word_wrap = False
        self._markdown_css = ""
        self._listeners: List[AppSettingsListener] = []

    def options(self) -> List[Option]:
        return [
            Option(
                "Memo",
                "defaultFont",
                "Default memo font",
                "Default font used for displaying memo content",
                _DEFAULT_FONT,
                "memo_font",
                _to_font,
            ),
            Option(
                "Memo",
                "defaultWordWrap",
                "Word-wrap memo by default",
                "Whether memo texts should be wrapped by default",
                False,
                "memo_word_wrap",
                _to_bool,
            ),
            Option(
                "View",
                "useNativeMenuBar",
                "Use native menu bar",
                "Use menu bar specfic to Ubuntu Unity or MacOS (on sceern's top)",
                not sys.platform.startswith("win"),
                "use_native_menu_bar",
                _to_bool,
            ),
        ]

    def load(self, settings: Mapping[str, Any]) -> None:
        """Fill options from ``settings`` keyed by "Category/name"."""
        for option in self.options():
            value = settings.get(option.key, option.default)
            setattr(self, option.attribute, option.convert(value))

    def save(self, settings: MutableMapping[str, Any]) -> None:
        for option in self.options():
            settings[option.key] = getattr(self, option.attribute)

    def markdown_css(self) -> str:
        if not self._markdown_css and self.markdown_css_path is not None:
            self._markdown_css = load_text_resource(self.markdown_css_path)
        return self._markdown_css

    def update_markdown_css(self, css: str) -> None:
        self._markdown_css = css
        for listener in list(self._listeners):
            listener.option_changed(AppSettingsOption.MARKDOWN_CSS)

    def register_listener(self, listener: AppSettingsListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unregister_listener(self, listener: AppSettingsListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
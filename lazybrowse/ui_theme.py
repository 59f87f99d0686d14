"""UI theme definitions and selection helpers.

Themes style the chrome (path bar, entry list, borders, key hints). Syntax
highlighting style for previewed files remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass

from .highlight import PLAIN_STYLE, SpanStyle


@dataclass(frozen=True)
class UITheme:
    """Semantic palette used by the render projector."""

    name: str
    border: SpanStyle
    title: SpanStyle
    path_text: SpanStyle
    entry_text: SpanStyle
    entry_selected: SpanStyle
    preview_border: SpanStyle
    hint_key: SpanStyle
    hint_text: SpanStyle


DEFAULT_THEME = UITheme(
    name="default",
    border=PLAIN_STYLE,
    title=SpanStyle(bold=True),
    path_text=SpanStyle(foreground=6),
    entry_text=PLAIN_STYLE,
    entry_selected=SpanStyle(foreground=3, bold=True),
    preview_border=SpanStyle(foreground=3),
    hint_key=SpanStyle(foreground=8),
    hint_text=PLAIN_STYLE,
)

OCEAN_THEME = UITheme(
    name="ocean",
    border=SpanStyle(foreground=31),
    title=SpanStyle(foreground=45, bold=True),
    path_text=SpanStyle(foreground=117),
    entry_text=SpanStyle(foreground=252),
    entry_selected=SpanStyle(foreground=215, bold=True),
    preview_border=SpanStyle(foreground=39),
    hint_key=SpanStyle(foreground=153),
    hint_text=SpanStyle(foreground=110),
)

PLAIN_THEME = UITheme(
    name="plain",
    border=PLAIN_STYLE,
    title=PLAIN_STYLE,
    path_text=PLAIN_STYLE,
    entry_text=PLAIN_STYLE,
    entry_selected=SpanStyle(bold=True),
    preview_border=PLAIN_STYLE,
    hint_key=PLAIN_STYLE,
    hint_text=PLAIN_STYLE,
)

THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    return tuple(THEMES)


def resolve_theme(name: str | None) -> UITheme:
    """Return the theme called ``name``, falling back to the default theme."""
    if not name:
        return DEFAULT_THEME
    return THEMES.get(name.strip().lower(), DEFAULT_THEME)


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "THEMES",
    "available_theme_names",
    "resolve_theme",
]

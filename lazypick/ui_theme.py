"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the picker chrome, assembled from the SGR codes
pygments ships in ``pygments.console``.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygments.console import codes


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    header: str
    prompt: str
    query: str
    placeholder: str
    indicator: str
    cursor_row: str
    selected: str
    unselected: str
    message: str


DEFAULT_THEME = UITheme(
    name="default",
    reset=codes["reset"],
    header=codes["bold"],
    prompt=codes["cyan"],
    query=codes["bold"],
    placeholder=codes["faint"],
    indicator=codes["yellow"],
    cursor_row=codes["bold"],
    selected=codes["green"],
    unselected=codes["faint"],
    message=codes["faint"],
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset=codes["reset"],
    header=codes["bold"] + codes["blue"],
    prompt=codes["blue"],
    query=codes["bold"] + codes["cyan"],
    placeholder=codes["faint"] + codes["blue"],
    indicator=codes["cyan"],
    cursor_row=codes["bold"] + codes["cyan"],
    selected=codes["cyan"],
    unselected=codes["faint"] + codes["blue"],
    message=codes["faint"] + codes["blue"],
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    header="",
    prompt="",
    query="",
    placeholder="",
    indicator="",
    cursor_row="",
    selected="",
    unselected="",
    message="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def is_known_theme(name: str | None) -> bool:
    return name is None or str(name).strip().lower() in _THEMES or str(name).strip().lower() == PLAIN_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color or (name is not None and str(name).strip().lower() == PLAIN_THEME.name):
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]

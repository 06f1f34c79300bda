"""Per-session configuration.

Every glyph and prompt string lives on a ``SessionOptions`` instance, so two
sessions never share decoration state. Validation runs before the terminal
is touched.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import InvalidOptionsError
from .ui_theme import is_known_theme

DEFAULT_HEADER = "Search"
DEFAULT_PLACEHOLDER = "Filter..."
DEFAULT_PROMPT = "> "
DEFAULT_INDICATOR = "•"
DEFAULT_SELECTED_PREFIX = " ◉ "
DEFAULT_UNSELECTED_PREFIX = " ○ "

_GLYPH_FIELDS = ("header", "placeholder", "query", "prompt", "indicator", "selected_prefix", "unselected_prefix")


@dataclass(frozen=True)
class SessionOptions:
    """Options for one interactive list session.

    ``placeholder`` doubles as the typing switch: an empty placeholder means
    the query cannot be edited, as in the ``choose_*`` entry points.
    """

    header: str = DEFAULT_HEADER
    placeholder: str = DEFAULT_PLACEHOLDER
    query: str = ""
    limit: int | None = None
    indicator: str = DEFAULT_INDICATOR
    selected_prefix: str = DEFAULT_SELECTED_PREFIX
    unselected_prefix: str = DEFAULT_UNSELECTED_PREFIX
    prompt: str = DEFAULT_PROMPT
    multi: bool = True
    regex: bool = True
    free_text: bool = False
    height: int | None = None
    reverse: bool = False
    theme: str | None = None
    no_color: bool = False

    @property
    def filterable(self) -> bool:
        return bool(self.placeholder)

    def replace(self, **changes: object) -> SessionOptions:
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object] | None) -> SessionOptions:
        """Build options from a mapping, ignoring unknown keys."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise InvalidOptionsError(f"options must be a mapping, got {type(data).__name__}")
        names = {f.name for f in dataclasses.fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in names})

    def validate(self) -> SessionOptions:
        """Raise ``InvalidOptionsError`` on malformed values; return ``self``."""
        for name in _GLYPH_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise InvalidOptionsError(f"{name} must be a string, got {value!r}")
        for name in ("limit", "height"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidOptionsError(f"{name} must be a positive integer, got {value!r}")
        if self.theme is not None and not is_known_theme(self.theme):
            raise InvalidOptionsError(f"unknown theme: {self.theme!r}")
        return self


def coerce_options(options: SessionOptions | Mapping[str, object] | None, **overrides: object) -> SessionOptions:
    """Accept options as an instance or mapping and apply ``overrides``."""
    if isinstance(options, SessionOptions):
        base = options
    else:
        base = SessionOptions.from_mapping(options)
    if overrides:
        base = base.replace(**overrides)
    return base.validate()

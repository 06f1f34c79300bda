"""Screen composition for the picker.

Rows are decorated from ``(label, is_cursor, is_selected)`` at draw time and
never written back into labels. ``ScreenRenderer`` redraws the whole region
on every call; the list scrolls to keep the cursor row on screen.
"""

from __future__ import annotations

import os
from collections.abc import Callable

from .ansi import clip_ansi_line, display_width
from .options import SessionOptions
from .selection import SelectorState
from .terminal import get_terminal_size
from .ui_theme import UITheme

CLEAR_SCREEN = "\x1b[2J\x1b[H"
ROW_SEPARATOR = "\r\n"


def _styled(style: str, text: str, reset: str) -> str:
    if not text:
        return ""
    if not style:
        return text
    return f"{style}{text}{reset}"


def decorate_label(
    label: str,
    *,
    is_cursor: bool,
    is_selected: bool,
    options: SessionOptions,
    theme: UITheme,
) -> str:
    """Return the display row for one label."""
    if is_cursor:
        lead = _styled(theme.indicator, options.indicator, theme.reset)
    else:
        lead = " " * display_width(options.indicator)
    if is_selected:
        prefix = _styled(theme.selected, options.selected_prefix, theme.reset)
    else:
        prefix = _styled(theme.unselected, options.unselected_prefix, theme.reset)
    body = _styled(theme.cursor_row, label, theme.reset) if is_cursor else label
    return f"{lead}{prefix}{body}"


def decorate_rows(state: SelectorState, options: SessionOptions, theme: UITheme) -> list[str]:
    return [
        decorate_label(
            label,
            is_cursor=idx == state.cursor,
            is_selected=state.is_selected(label),
            options=options,
            theme=theme,
        )
        for idx, label in enumerate(state.visible)
    ]


def status_message(state: SelectorState, *, multi: bool) -> str:
    """Return the match counter line, e.g. ``3/10`` or ``3/10 (2 selected)``."""
    if not state.visible:
        return " no matches" if state.all_items else " no items"
    text = f" {len(state.visible)}/{len(state.all_items)}"
    if multi and state.selected:
        text += f" ({len(state.selected)} selected)"
    return text


def window_start(total: int, cursor: int, rows: int, start: int) -> int:
    """Return a scroll offset that keeps ``cursor`` inside ``rows`` rows."""
    if total <= 0 or rows <= 0:
        return 0
    if cursor < start:
        start = cursor
    elif cursor >= start + rows:
        start = cursor - rows + 1
    return max(0, min(start, max(0, total - rows)))


class ScreenRenderer:
    """Full-region redraw of header, prompt line, counter, and list rows."""

    def __init__(
        self,
        write: Callable[[str], None],
        *,
        theme: UITheme,
        prompt: str = "",
        height: int | None = None,
        reverse: bool = False,
        size: Callable[[], os.terminal_size] = get_terminal_size,
    ) -> None:
        self.write = write
        self.theme = theme
        self.prompt = prompt
        self.height = height
        self.reverse = reverse
        self.size = size
        self.list_start = 0

    def list_rows(self, chrome_rows: int) -> int:
        """Rows available to the list after header/prompt/counter rows."""
        available = max(1, self.size().lines - chrome_rows)
        if self.height is not None:
            return max(1, min(self.height, available))
        return available

    def compose(
        self,
        header: str,
        query_text: str,
        lines: list[str],
        *,
        cursor: int | None = None,
        placeholder: bool = False,
        message: str = "",
    ) -> list[str]:
        """Return screen rows top to bottom for one frame."""
        theme = self.theme
        header_rows: list[str] = []
        prompt_rows: list[str] = []
        message_rows: list[str] = []
        if header:
            header_rows.append(_styled(theme.header, header, theme.reset))
        if query_text:
            query_style = theme.placeholder if placeholder else theme.query
            prompt_rows.append(
                _styled(theme.prompt, self.prompt, theme.reset) + _styled(query_style, query_text, theme.reset)
            )
        if message:
            message_rows.append(_styled(theme.message, message, theme.reset))
        chrome_rows = len(header_rows) + len(prompt_rows) + len(message_rows)

        rows = self.list_rows(chrome_rows)
        self.list_start = window_start(len(lines), cursor or 0, rows, self.list_start)
        shown = lines[self.list_start : self.list_start + rows]

        size = self.size()
        if self.reverse:
            # Bottom-anchored: prompt on the last row, list growing upwards.
            frame = list(reversed(shown)) + header_rows + message_rows + prompt_rows
            frame = [""] * max(0, size.lines - len(frame)) + frame
        else:
            frame = header_rows + prompt_rows + message_rows + shown

        width = max(1, size.columns)
        return [clip_ansi_line(row, width) + theme.reset for row in frame]

    def draw(
        self,
        header: str,
        query_text: str,
        lines: list[str],
        *,
        cursor: int | None = None,
        placeholder: bool = False,
        message: str = "",
    ) -> None:
        """Clear the region and draw one complete frame."""
        screen = self.compose(
            header,
            query_text,
            lines,
            cursor=cursor,
            placeholder=placeholder,
            message=message,
        )
        self.write(CLEAR_SCREEN + ROW_SEPARATOR.join(screen))

"""Interactive list session: key bindings wired to the selection engine.

A session validates its items and options, draws once, then pumps decoded
keys into engine operations, redrawing after each one, until a handler
submits or cancels. The public entry points return exactly once.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, Sequence
from typing import Any

from .input import KeyComboBinding, KeyHandler, KeyRegistry, QuitSignal, handle_keys_press
from .input.key_sequences import (
    ARROW_DOWN,
    ARROW_UP,
    BACKSPACE,
    CAPITAL_LETTERS,
    CTRL_C,
    DEFAULT,
    ENTER,
    ESCAPE,
    NUMBERS,
    SHIFT_TAB,
    SMALL_LETTERS,
    TAB,
)
from .input.reader import CharReader, FdReader
from .options import SessionOptions, coerce_options
from .render import ScreenRenderer, decorate_rows, status_message
from .selection import ListItem, SelectionEngine, SessionOutcome, build_items
from .terminal import TerminalController
from .ui_theme import resolve_theme

logger = logging.getLogger(__name__)

OptionsArg = SessionOptions | Mapping[str, object] | None


class SelectionSession:
    """One interactive pick over a fixed list of items."""

    def __init__(
        self,
        items: Sequence[Any],
        options: OptionsArg = None,
        *,
        reader: CharReader,
        renderer: ScreenRenderer | None = None,
    ) -> None:
        self.options = coerce_options(options)
        self.items = build_items(items)
        self.theme = resolve_theme(self.options.theme, no_color=self.options.no_color)
        self.engine = SelectionEngine(
            self.items,
            query=self.options.query,
            limit=self.options.limit,
            regex=self.options.regex,
        )
        self.reader = reader
        self.renderer = renderer
        self.quit = QuitSignal()
        self.registry = KeyRegistry.from_bindings(*self.key_bindings())

    # bindings
    def key_bindings(self) -> list[KeyComboBinding]:
        """Return the key table for this session's options."""
        bindings = [
            KeyComboBinding((ARROW_UP, SHIFT_TAB), self._on_prev),
            KeyComboBinding((ARROW_DOWN, TAB), self._on_next),
            KeyComboBinding((ENTER,), self._on_submit),
            KeyComboBinding((ESCAPE, CTRL_C), self._on_cancel),
        ]
        if self.options.filterable:
            bindings.append(KeyComboBinding((BACKSPACE,), self._on_backspace))
            bindings.append(KeyComboBinding((CAPITAL_LETTERS, SMALL_LETTERS, NUMBERS), self._on_char))
            if self.options.free_text:
                bindings.append(KeyComboBinding((DEFAULT,), self._on_free_text))
        if self.options.multi:
            bindings.append(KeyComboBinding(("+",), self._on_mark))
            bindings.append(KeyComboBinding(("-",), self._on_unmark))
        return bindings

    # handlers
    def _on_prev(self, key: str, quit: QuitSignal) -> None:
        self.engine.move_prev()
        self.redraw()

    def _on_next(self, key: str, quit: QuitSignal) -> None:
        self.engine.move_next()
        self.redraw()

    def _on_char(self, key: str, quit: QuitSignal) -> None:
        self.engine.append_char(key)
        self.redraw()

    def _on_free_text(self, key: str, quit: QuitSignal) -> None:
        if key.startswith(ESCAPE):
            return
        text = "".join(ch for ch in key if ch.isprintable())
        if not text:
            return
        self.engine.append_char(text)
        self.redraw()

    def _on_backspace(self, key: str, quit: QuitSignal) -> None:
        self.engine.backspace()
        self.redraw()

    def _on_mark(self, key: str, quit: QuitSignal) -> None:
        self.engine.mark()
        self.redraw()

    def _on_unmark(self, key: str, quit: QuitSignal) -> None:
        self.engine.unmark()
        self.redraw()

    def _on_submit(self, key: str, quit: QuitSignal) -> None:
        quit()
        self.engine.submit()

    def _on_cancel(self, key: str, quit: QuitSignal) -> None:
        quit()
        self.engine.cancel()

    # drawing
    def query_text(self) -> tuple[str, bool]:
        """Return the prompt-line text and whether it is the placeholder."""
        state = self.engine.state
        if state.has_query and self.options.filterable:
            return state.query, False
        return self.options.placeholder, True

    def display_lines(self) -> list[str]:
        return decorate_rows(self.engine.state, self.options, self.theme)

    def redraw(self) -> None:
        if self.renderer is None:
            return
        state = self.engine.state
        query_text, is_placeholder = self.query_text()
        self.renderer.draw(
            self.options.header,
            query_text,
            self.display_lines(),
            cursor=state.cursor,
            placeholder=is_placeholder,
            message=status_message(state, multi=self.options.multi),
        )

    def run(self) -> SessionOutcome:
        """Block until the session resolves and return its outcome."""
        logger.debug("session started with %d items", len(self.items))
        self.redraw()
        handle_keys_press(self.registry, self.reader, self.quit)
        outcome = self.engine.outcome
        if outcome is None:
            # Quit without submit: double-Escape with no handler, or input closed.
            outcome = self.engine.cancel()
        logger.debug("session resolved: cancelled=%s items=%d", outcome.cancelled, len(outcome.items))
        return outcome


def run_selection(
    items: Sequence[Any],
    options: OptionsArg = None,
    *,
    reader: CharReader | None = None,
    renderer: ScreenRenderer | None = None,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> SessionOutcome:
    """Run one session and return its ``SessionOutcome``.

    With ``reader`` given no terminal is touched; otherwise ``stdin_fd`` and
    ``stdout_fd`` (default: the process stdin/stdout) are switched to raw
    mode for the session's duration. Items and options are validated first.
    """
    opts = coerce_options(options)
    built = build_items(items)

    if reader is not None:
        return SelectionSession(built, opts, reader=reader, renderer=renderer).run()

    in_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    out_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    terminal = TerminalController(in_fd, out_fd)
    if renderer is None:
        renderer = ScreenRenderer(
            terminal.write,
            theme=resolve_theme(opts.theme, no_color=opts.no_color),
            prompt=opts.prompt,
            height=opts.height,
            reverse=opts.reverse,
            size=terminal.size,
        )
    session = SelectionSession(built, opts, reader=FdReader(in_fd), renderer=renderer)
    with terminal.raw_mode():
        return session.run()


def filter_items_from_list(
    items: Sequence[Any],
    options: OptionsArg = None,
    **session_kwargs: Any,
) -> list[ListItem[Any]] | None:
    """Pick any number of items (``+``/``-`` to mark, Enter to confirm).

    Returns ``None`` when cancelled and an empty list when confirmed with
    nothing matching.
    """
    outcome = run_selection(items, coerce_options(options, multi=True), **session_kwargs)
    if outcome.cancelled:
        return None
    return list(outcome.items)


def filter_item_from_list(
    items: Sequence[Any],
    options: OptionsArg = None,
    **session_kwargs: Any,
) -> ListItem[Any] | None:
    """Pick one item; ``None`` when cancelled or nothing matched."""
    single = coerce_options(options, multi=False, limit=1, selected_prefix="", unselected_prefix="")
    outcome = run_selection(items, single, **session_kwargs)
    if outcome.cancelled:
        return None
    return outcome.item


def choose_item_from_list(
    items: Sequence[Any],
    options: OptionsArg = None,
    **session_kwargs: Any,
) -> ListItem[Any] | None:
    """Single pick by navigation only: no header, no query editing."""
    return filter_item_from_list(items, coerce_options(options, header="", placeholder=""), **session_kwargs)


def choose_items_from_list(
    items: Sequence[Any],
    options: OptionsArg = None,
    **session_kwargs: Any,
) -> list[ListItem[Any]] | None:
    """Multi pick by navigation only: no header, no query editing."""
    return filter_items_from_list(items, coerce_options(options, header="", placeholder=""), **session_kwargs)

"""Selection engine: filter, cursor, and multi-select state transitions.

The engine never does I/O. Every operation mutates one ``SelectorState`` and
hands it back so the caller can redraw; ``submit`` and ``cancel`` produce the
``SessionOutcome`` that ends a session.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .items import ListItem, find_item
from .matching import match_labels

logger = logging.getLogger(__name__)


@dataclass
class SelectorState:
    all_items: tuple[ListItem[Any], ...]
    query: str = ""
    visible: list[str] = field(default_factory=list)
    cursor: int = 0
    selected: set[str] = field(default_factory=set)
    limit: int | None = None
    regex: bool = True

    @property
    def labels(self) -> list[str]:
        return [item.text for item in self.all_items]

    @property
    def has_query(self) -> bool:
        """False while the query is still in its placeholder state."""
        return bool(self.query)

    def current_label(self) -> str | None:
        if not self.visible:
            return None
        return self.visible[self.cursor]

    def is_selected(self, label: str) -> bool:
        return label in self.selected


@dataclass(frozen=True)
class SessionOutcome:
    """How a session ended.

    ``cancelled`` is true only when the user aborted. An empty ``items`` with
    ``cancelled`` false means the user confirmed while nothing matched.
    """

    items: tuple[ListItem[Any], ...] = ()
    cancelled: bool = False

    @property
    def item(self) -> ListItem[Any] | None:
        return self.items[0] if self.items else None


class SelectionEngine:
    """Pure state transitions over one ``SelectorState``."""

    def __init__(
        self,
        items: Sequence[ListItem[Any]],
        *,
        query: str = "",
        limit: int | None = None,
        regex: bool = True,
    ) -> None:
        self.state = SelectorState(all_items=tuple(items), limit=limit, regex=regex)
        self.outcome: SessionOutcome | None = None
        self.set_query(query)

    @property
    def resolved(self) -> bool:
        return self.outcome is not None

    # filtering
    def set_query(self, text: str) -> SelectorState:
        """Replace the query and recompute visible labels."""
        state = self.state
        state.query = text
        state.visible = match_labels(text, state.labels, regex=state.regex)
        state.cursor = 0
        return state

    def append_char(self, ch: str) -> SelectorState:
        return self.set_query(self.state.query + ch)

    def backspace(self) -> SelectorState:
        """Drop the last query character; no-op once the query is empty."""
        if not self.state.query:
            return self.state
        return self.set_query(self.state.query[:-1])

    # navigation
    def move_next(self) -> SelectorState:
        state = self.state
        if state.visible:
            state.cursor = (state.cursor + 1) % len(state.visible)
        return state

    def move_prev(self) -> SelectorState:
        state = self.state
        if state.visible:
            state.cursor = (state.cursor - 1 + len(state.visible)) % len(state.visible)
        return state

    # multi-select
    def mark(self) -> SelectorState:
        """Select the label under the cursor and advance.

        No-op when the limit is reached or the label is already selected.
        """
        state = self.state
        label = state.current_label()
        if label is None:
            return state
        if state.limit is not None and len(state.selected) >= state.limit:
            logger.debug("selection limit %d reached; ignoring mark", state.limit)
            return state
        if label in state.selected:
            return state
        state.selected.add(label)
        return self.move_next()

    def unmark(self) -> SelectorState:
        state = self.state
        label = state.current_label()
        if label is None or label not in state.selected:
            return state
        state.selected.discard(label)
        return self.move_next()

    # resolution
    def submit(self) -> SessionOutcome:
        """Resolve with the selected items, else the item under the cursor."""
        state = self.state
        if state.selected:
            items = self.selected_items()
        else:
            label = state.current_label()
            current = find_item(state.all_items, label) if label is not None else None
            items = [current] if current is not None else []
        self.outcome = SessionOutcome(items=tuple(items), cancelled=False)
        return self.outcome

    def cancel(self) -> SessionOutcome:
        self.outcome = SessionOutcome(cancelled=True)
        return self.outcome

    def selected_items(self) -> list[ListItem[Any]]:
        """Selected items in list order, whatever order they were marked in."""
        return [item for item in self.state.all_items if item.text in self.state.selected]

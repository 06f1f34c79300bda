"""Public package surface for lazypick.

Session entry points, the item type, and the options object are exported
here. The key decoder lives in ``lazypick.input`` and the state machine in
``lazypick.selection``.
"""

from __future__ import annotations

from .errors import InvalidItemsError, InvalidOptionsError, KeyBindingConflictError, LazyPickError
from .options import SessionOptions
from .selection import ListItem, SessionOutcome
from .session import (
    SelectionSession,
    choose_item_from_list,
    choose_items_from_list,
    filter_item_from_list,
    filter_items_from_list,
    run_selection,
)


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "ListItem",
    "SessionOptions",
    "SessionOutcome",
    "SelectionSession",
    "run_selection",
    "filter_items_from_list",
    "filter_item_from_list",
    "choose_item_from_list",
    "choose_items_from_list",
    "LazyPickError",
    "InvalidItemsError",
    "InvalidOptionsError",
    "KeyBindingConflictError",
    "main",
]

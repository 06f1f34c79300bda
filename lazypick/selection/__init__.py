"""Selection layer: list items, query matching, and the selection engine."""

from .engine import SelectionEngine, SelectorState, SessionOutcome
from .items import ListItem, build_items, find_item
from .matching import compile_query, match_labels

__all__ = [
    "ListItem",
    "build_items",
    "find_item",
    "compile_query",
    "match_labels",
    "SelectionEngine",
    "SelectorState",
    "SessionOutcome",
]

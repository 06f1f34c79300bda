"""List items: display label plus an opaque caller value."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..errors import InvalidItemsError

T = TypeVar("T")


@dataclass(frozen=True)
class ListItem(Generic[T]):
    """Label shown and filtered on, with the value returned on resolution."""

    text: str
    value: T


def build_items(raw: Sequence[Any]) -> list[ListItem[Any]]:
    """Normalize strings, ``ListItem``s, and ``(text, value)`` pairs.

    Anything else raises ``InvalidItemsError``; this runs before the terminal
    is touched.
    """
    if isinstance(raw, (str, bytes)) or not isinstance(raw, (list, tuple)):
        raise InvalidItemsError(f"expected a list of items, got {type(raw).__name__}")

    items: list[ListItem[Any]] = []
    for idx, entry in enumerate(raw):
        if isinstance(entry, ListItem):
            if not isinstance(entry.text, str):
                raise InvalidItemsError(f"item {idx} has non-string text {entry.text!r}")
            items.append(entry)
        elif isinstance(entry, str):
            items.append(ListItem(text=entry, value=entry))
        elif isinstance(entry, tuple) and len(entry) == 2 and isinstance(entry[0], str):
            items.append(ListItem(text=entry[0], value=entry[1]))
        else:
            raise InvalidItemsError(f"item {idx} is not a string or ListItem: {entry!r}")
    return items


def find_item(items: Iterable[ListItem[T]], label: str) -> ListItem[T] | None:
    """Return the first item whose label is ``label``."""
    for item in items:
        if item.text == label:
            return item
    return None


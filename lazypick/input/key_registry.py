"""Key binding table with registration-time group expansion.

Group tokens (all capitals, all small letters, all digits) are replaced by
one literal binding per member character before any input is decoded.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass

from ..errors import KeyBindingConflictError
from .key_sequences import DEFAULT, KEY_GROUPS, KEY_SEQUENCES, is_group_token, key_name

QuitFunction = Callable[[], None]
KeyHandler = Callable[[str, QuitFunction], object]


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single handler."""

    combos: tuple[str, ...]
    handler: KeyHandler


class KeyRegistry:
    """Resolved binding table used by the key decoder.

    Literal bindings and group bindings must not overlap: a single-character
    key bound explicitly and also covered by a bound group raises
    ``KeyBindingConflictError`` instead of letting one silently win.
    """

    def __init__(self, bindings: Mapping[str, KeyHandler] | None = None) -> None:
        self._handlers: dict[str, KeyHandler] = {}
        self._group_keys: set[str] = set()
        self._prefixes: frozenset[str] = frozenset()
        if bindings:
            self.register_table(bindings)

    @classmethod
    def from_bindings(cls, *bindings: KeyComboBinding) -> KeyRegistry:
        """Build a registry from combo bindings in one call."""
        table: dict[str, KeyHandler] = {}
        for binding in bindings:
            for combo in binding.combos:
                table[combo] = binding.handler
        return cls(table)

    def register_table(self, bindings: Mapping[str, KeyHandler]) -> KeyRegistry:
        """Register a whole binding table, expanding group tokens first."""
        literal: dict[str, KeyHandler] = {}
        groups: dict[str, KeyHandler] = {}
        for token, handler in bindings.items():
            if not isinstance(token, str) or not token:
                raise KeyBindingConflictError(f"invalid key token: {token!r}")
            if not callable(handler):
                raise KeyBindingConflictError(f"handler for {key_name(token)} is not callable")
            if is_group_token(token):
                groups[token] = handler
            else:
                literal[token] = handler

        expanded: dict[str, KeyHandler] = {}
        for group, handler in groups.items():
            for ch in KEY_GROUPS[group]:
                expanded[ch] = handler

        for token in literal:
            if token in expanded or token in self._group_keys:
                raise KeyBindingConflictError(
                    f"key {key_name(token)!r} is bound directly and through a key group"
                )
        for token in expanded:
            if token in self._handlers:
                raise KeyBindingConflictError(
                    f"key {key_name(token)!r} is already bound and is covered by a key group"
                )

        self._handlers.update(literal)
        self._handlers.update(expanded)
        self._group_keys.update(expanded)
        self._rebuild_prefixes()
        return self

    def _rebuild_prefixes(self) -> None:
        # Known sequences are consumed whole even when unbound, so their tail
        # bytes never leak out as literal keys.
        prefixes: set[str] = set()
        for token in set(self._handlers) | set(KEY_SEQUENCES.values()):
            if token == DEFAULT:
                continue
            for end in range(1, len(token)):
                prefixes.add(token[:end])
        self._prefixes = frozenset(prefixes)

    def handler_for(self, token: str) -> KeyHandler | None:
        """Return the handler bound exactly to ``token``."""
        if token == DEFAULT:
            return None
        return self._handlers.get(token)

    @property
    def default_handler(self) -> KeyHandler | None:
        return self._handlers.get(DEFAULT)

    def is_bound(self, token: str) -> bool:
        return token != DEFAULT and token in self._handlers

    def is_prefix(self, partial: str) -> bool:
        """Return whether ``partial`` starts some longer bound sequence."""
        return partial in self._prefixes

    def __contains__(self, token: object) -> bool:
        return token in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

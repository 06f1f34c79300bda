"""Input-layer public API: key table, binding registry, and decoder."""

from .decoder import KeyDecoder, KeyEvent, QuitSignal, dispatch_event, handle_keys_press
from .key_registry import KeyComboBinding, KeyHandler, KeyRegistry, QuitFunction
from .key_sequences import (
    CAPITAL_LETTERS,
    DEFAULT,
    KEY_GROUPS,
    KEY_SEQUENCES,
    NUMBERS,
    SMALL_LETTERS,
)
from .reader import BytesReader, CharReader, FdReader

__all__ = [
    "KEY_SEQUENCES",
    "KEY_GROUPS",
    "CAPITAL_LETTERS",
    "SMALL_LETTERS",
    "NUMBERS",
    "DEFAULT",
    "KeyComboBinding",
    "KeyHandler",
    "KeyRegistry",
    "QuitFunction",
    "KeyDecoder",
    "KeyEvent",
    "QuitSignal",
    "dispatch_event",
    "handle_keys_press",
    "CharReader",
    "FdReader",
    "BytesReader",
]

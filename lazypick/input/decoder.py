"""Byte-stream key decoder and the blocking dispatch loop.

``KeyDecoder.read_event`` blocks on single-character reads until the buffer
resolves to one event. ``handle_keys_press`` pumps events into handlers until
one of them calls the quit function.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from .key_registry import KeyHandler, KeyRegistry
from .key_sequences import ESCAPE, key_name
from .reader import CharReader

logger = logging.getLogger(__name__)

EVENT_BOUND = "bound"
EVENT_DEFAULT = "default"
EVENT_DOUBLE_ESCAPE = "double_escape"
EVENT_DROPPED = "dropped"
EVENT_EOF = "eof"


@dataclass(frozen=True)
class KeyEvent:
    """One resolved key event.

    ``kind`` is one of ``bound``, ``default``, ``double_escape``, ``dropped``
    or ``eof``. ``sequence`` is the buffer text that produced the event.
    """

    kind: str
    sequence: str
    handler: KeyHandler | None = None


class QuitSignal:
    """Cooperative quit flag handed to every key handler."""

    def __init__(self) -> None:
        self.requested = False

    def __call__(self) -> None:
        self.requested = True


class KeyDecoder:
    """Resolve a live character stream into key events, one at a time."""

    def __init__(self, registry: KeyRegistry, reader: CharReader) -> None:
        self.registry = registry
        self.reader = reader
        self._buffer = ""

    @property
    def buffer(self) -> str:
        return self._buffer

    def _take(self, kind: str, handler: KeyHandler | None = None) -> KeyEvent:
        event = KeyEvent(kind=kind, sequence=self._buffer, handler=handler)
        self._buffer = ""
        return event

    def read_event(self) -> KeyEvent:
        """Block until the buffer resolves to an event, then reset it."""
        while True:
            ch = self.reader.read_char()
            if not ch:
                return self._take(EVENT_EOF)
            self._buffer += ch

            if self._buffer == ESCAPE:
                nxt = self.reader.read_char()
                if not nxt:
                    return self._take(EVENT_EOF)
                if nxt == ESCAPE:
                    return self._take(EVENT_DOUBLE_ESCAPE, self.registry.handler_for(ESCAPE))
                # Lone Escape vs. start of a sequence: keep reading, no match yet.
                self._buffer += nxt
                continue

            handler = self.registry.handler_for(self._buffer)
            if handler is not None:
                return self._take(EVENT_BOUND, handler)
            if self.registry.is_prefix(self._buffer):
                continue
            default = self.registry.default_handler
            if default is not None:
                return self._take(EVENT_DEFAULT, default)
            logger.debug("dropping unbound key sequence %s", key_name(self._buffer))
            return self._take(EVENT_DROPPED)


def dispatch_event(event: KeyEvent, quit: QuitSignal) -> None:
    """Run the handler for ``event``; double-Escape without one quits."""
    if event.kind == EVENT_EOF:
        logger.debug("input closed; ending key loop")
        quit()
        return
    if event.kind == EVENT_DOUBLE_ESCAPE and event.handler is None:
        quit()
        return
    if event.handler is not None:
        event.handler(event.sequence, quit)


def handle_keys_press(
    bindings: Mapping[str, KeyHandler] | KeyRegistry,
    reader: CharReader,
    quit: QuitSignal | None = None,
) -> QuitSignal:
    """Dispatch decoded keys to ``bindings`` until a handler calls ``quit``.

    Handlers receive ``(key, quit)``. Each handler returns before the next
    character is read. Returns the quit signal so callers can inspect it.
    """
    registry = bindings if isinstance(bindings, KeyRegistry) else KeyRegistry(bindings)
    quit = quit if quit is not None else QuitSignal()
    decoder = KeyDecoder(registry, reader)
    while not quit.requested:
        dispatch_event(decoder.read_event(), quit)
    return quit

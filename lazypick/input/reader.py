"""Blocking character sources for the key decoder.

``FdReader`` pulls raw bytes from a terminal file descriptor. ``BytesReader``
replays a canned feed so decoding can be driven without a terminal.
Both decode UTF-8 incrementally and hand out one character per read.
"""

from __future__ import annotations

import codecs
import os
from typing import Protocol


class CharReader(Protocol):
    def read_char(self) -> str:
        """Block until one character is available; return ``""`` at end of input."""
        ...


class _Utf8Reader:
    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def _read_byte(self) -> bytes:
        raise NotImplementedError

    def read_char(self) -> str:
        while True:
            raw = self._read_byte()
            if not raw:
                return self._decoder.decode(b"", final=True)
            text = self._decoder.decode(raw)
            if text:
                return text


class FdReader(_Utf8Reader):
    """Read one byte at a time from ``fd`` with no timeout."""

    def __init__(self, fd: int) -> None:
        super().__init__()
        self.fd = fd

    def _read_byte(self) -> bytes:
        return os.read(self.fd, 1)


class BytesReader(_Utf8Reader):
    """Replay ``data`` byte by byte, then report end of input."""

    def __init__(self, data: bytes | str) -> None:
        super().__init__()
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = data
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _read_byte(self) -> bytes:
        if self._pos >= len(self._data):
            return b""
        ch = self._data[self._pos : self._pos + 1]
        self._pos += 1
        return ch

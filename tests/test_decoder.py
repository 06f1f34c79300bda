"""Tests for byte-stream key decoding and the dispatch loop.

Uses a canned byte feed instead of a terminal. Covers single keys, escape
sequences, the double-Escape quit gesture, default fallback, and dropping.
"""

from __future__ import annotations

import unittest

from lazypick.input import BytesReader, KeyDecoder, KeyRegistry, QuitSignal, handle_keys_press
from lazypick.input.decoder import (
    EVENT_BOUND,
    EVENT_DEFAULT,
    EVENT_DOUBLE_ESCAPE,
    EVENT_DROPPED,
    EVENT_EOF,
)
from lazypick.input.key_sequences import (
    ARROW_DOWN,
    ARROW_UP,
    DEFAULT,
    ENTER,
    ESCAPE,
    KEY_SEQUENCES,
    NUMBERS,
    SHIFT_TAB,
    SMALL_LETTERS,
)


class Recorder:
    """Handler that records every key it receives."""

    def __init__(self, quits: bool = False) -> None:
        self.keys: list[str] = []
        self.quits = quits

    def __call__(self, key: str, quit) -> None:
        self.keys.append(key)
        if self.quits:
            quit()


class KeyDecoderEventTests(unittest.TestCase):
    def test_single_character_tokens_fire_once_and_clear_buffer(self) -> None:
        for token in ("a", "+", "-", "7", ENTER):
            handler = Recorder()
            registry = KeyRegistry({token: handler})
            decoder = KeyDecoder(registry, BytesReader(token))

            event = decoder.read_event()

            self.assertEqual(event.kind, EVENT_BOUND, token)
            self.assertEqual(event.sequence, token)
            self.assertIs(event.handler, handler)
            self.assertEqual(decoder.buffer, "")

    def test_arrow_sequences_resolve_to_their_tokens(self) -> None:
        up = Recorder()
        down = Recorder()
        registry = KeyRegistry({ARROW_UP: up, ARROW_DOWN: down})
        decoder = KeyDecoder(registry, BytesReader(ARROW_DOWN + ARROW_UP))

        first = decoder.read_event()
        second = decoder.read_event()

        self.assertIs(first.handler, down)
        self.assertIs(second.handler, up)
        self.assertEqual(decoder.buffer, "")

    def test_long_function_key_sequence_is_matched(self) -> None:
        f5 = KEY_SEQUENCES["F5"]
        handler = Recorder()
        decoder = KeyDecoder(KeyRegistry({f5: handler}), BytesReader(f5))

        event = decoder.read_event()

        self.assertEqual(event.kind, EVENT_BOUND)
        self.assertEqual(event.sequence, f5)

    def test_double_escape_reports_bound_escape_handler(self) -> None:
        handler = Recorder()
        decoder = KeyDecoder(KeyRegistry({ESCAPE: handler}), BytesReader(ESCAPE * 2))

        event = decoder.read_event()

        self.assertEqual(event.kind, EVENT_DOUBLE_ESCAPE)
        self.assertIs(event.handler, handler)
        self.assertEqual(decoder.buffer, "")

    def test_escape_then_other_byte_is_not_matched_alone(self) -> None:
        fallback = Recorder()
        decoder = KeyDecoder(KeyRegistry({DEFAULT: fallback, SMALL_LETTERS: Recorder()}), BytesReader(b"\x1bxa"))

        event = decoder.read_event()

        self.assertEqual(event.kind, EVENT_DEFAULT)
        self.assertEqual(event.sequence, "\x1bxa")

    def test_unmatched_input_goes_to_default(self) -> None:
        fallback = Recorder()
        decoder = KeyDecoder(KeyRegistry({DEFAULT: fallback}), BytesReader("é"))

        event = decoder.read_event()

        self.assertEqual(event.kind, EVENT_DEFAULT)
        self.assertEqual(event.sequence, "é")
        self.assertIs(event.handler, fallback)

    def test_unmatched_input_without_default_is_dropped(self) -> None:
        decoder = KeyDecoder(KeyRegistry({ENTER: Recorder()}), BytesReader("x"))

        event = decoder.read_event()

        self.assertEqual(event.kind, EVENT_DROPPED)
        self.assertIsNone(event.handler)
        self.assertEqual(decoder.buffer, "")

    def test_end_of_input_is_reported(self) -> None:
        decoder = KeyDecoder(KeyRegistry({ENTER: Recorder()}), BytesReader(b""))
        self.assertEqual(decoder.read_event().kind, EVENT_EOF)

    def test_end_of_input_after_lone_escape_is_reported(self) -> None:
        decoder = KeyDecoder(KeyRegistry({ESCAPE: Recorder()}), BytesReader(ESCAPE))
        self.assertEqual(decoder.read_event().kind, EVENT_EOF)


class HandleKeysPressTests(unittest.TestCase):
    def test_handlers_run_in_input_order_until_quit(self) -> None:
        letters = Recorder()
        enter = Recorder(quits=True)
        reader = BytesReader(b"ab\rzz")

        quit = handle_keys_press({SMALL_LETTERS: letters, ENTER: enter}, reader)

        self.assertTrue(quit.requested)
        self.assertEqual(letters.keys, ["a", "b"])
        self.assertEqual(enter.keys, [ENTER])
        # Nothing after the quitting key is read.
        self.assertEqual(reader.remaining, 2)

    def test_group_handlers_receive_the_resolved_character(self) -> None:
        digits = Recorder()
        handle_keys_press({NUMBERS: digits, ENTER: Recorder(quits=True)}, BytesReader(b"0123456789\r"))
        self.assertEqual(digits.keys, list("0123456789"))

    def test_double_escape_invokes_bound_escape_handler(self) -> None:
        escape = Recorder(quits=True)
        other = Recorder()

        quit = handle_keys_press({ESCAPE: escape, "a": other}, BytesReader(b"\x1b\x1ba"))

        self.assertTrue(quit.requested)
        self.assertEqual(escape.keys, [ESCAPE])
        self.assertEqual(other.keys, [])

    def test_double_escape_without_handler_quits(self) -> None:
        other = Recorder()
        reader = BytesReader(b"\x1b\x1ba")

        quit = handle_keys_press({"a": other}, reader)

        self.assertTrue(quit.requested)
        self.assertEqual(other.keys, [])
        self.assertEqual(reader.remaining, 1)

    def test_escape_handler_that_does_not_quit_keeps_loop_running(self) -> None:
        escape = Recorder()
        enter = Recorder(quits=True)

        handle_keys_press({ESCAPE: escape, ENTER: enter}, BytesReader(b"\x1b\x1b\r"))

        self.assertEqual(escape.keys, [ESCAPE])
        self.assertEqual(enter.keys, [ENTER])

    def test_unbound_bytes_are_dropped_and_decoding_continues(self) -> None:
        plus = Recorder()
        handle_keys_press({"+": plus, ENTER: Recorder(quits=True)}, BytesReader(b"x+?+\r"))
        self.assertEqual(plus.keys, ["+", "+"])

    def test_unbound_known_sequence_does_not_leak_digits(self) -> None:
        digits = Recorder()
        f5 = KEY_SEQUENCES["F5"]

        handle_keys_press({NUMBERS: digits, ENTER: Recorder(quits=True)}, BytesReader(f5 + "\r"))

        self.assertEqual(digits.keys, [])

    def test_shift_tab_is_distinct_from_escape(self) -> None:
        shift_tab = Recorder()
        escape = Recorder()

        handle_keys_press(
            {SHIFT_TAB: shift_tab, ESCAPE: escape, ENTER: Recorder(quits=True)},
            BytesReader(SHIFT_TAB + "\r"),
        )

        self.assertEqual(shift_tab.keys, [SHIFT_TAB])
        self.assertEqual(escape.keys, [])

    def test_end_of_input_stops_the_loop(self) -> None:
        letters = Recorder()
        quit = handle_keys_press({SMALL_LETTERS: letters}, BytesReader(b"abc"))
        self.assertTrue(quit.requested)
        self.assertEqual(letters.keys, ["a", "b", "c"])

    def test_caller_supplied_quit_signal_is_used(self) -> None:
        signal = QuitSignal()
        returned = handle_keys_press({ENTER: Recorder(quits=True)}, BytesReader(b"\r"), signal)
        self.assertIs(returned, signal)
        self.assertTrue(signal.requested)

    def test_multibyte_utf8_reaches_default_as_one_character(self) -> None:
        fallback = Recorder()
        handle_keys_press({DEFAULT: fallback}, BytesReader("日本".encode("utf-8")))
        self.assertEqual(fallback.keys, ["日", "本"])


if __name__ == "__main__":
    unittest.main()

"""Tests for binding-table registration and key-group expansion.

Covers group expansion, the literal/group conflict rule, and the prefix
index the decoder uses to keep reading multi-byte sequences.
"""

from __future__ import annotations

import string
import unittest

from lazypick.errors import KeyBindingConflictError
from lazypick.input import KeyComboBinding, KeyRegistry
from lazypick.input.key_sequences import (
    ARROW_UP,
    CAPITAL_LETTERS,
    DEFAULT,
    ENTER,
    KEY_SEQUENCES,
    NUMBERS,
    SMALL_LETTERS,
    is_group_token,
    key_name,
)


def _noop(key: str, quit) -> None:
    return None


class KeyGroupExpansionTests(unittest.TestCase):
    def test_each_group_expands_to_every_member(self) -> None:
        def capitals(key, quit):
            return None

        def smalls(key, quit):
            return None

        def digits(key, quit):
            return None

        registry = KeyRegistry({CAPITAL_LETTERS: capitals, SMALL_LETTERS: smalls, NUMBERS: digits})

        for ch in string.ascii_uppercase:
            self.assertIs(registry.handler_for(ch), capitals)
        for ch in string.ascii_lowercase:
            self.assertIs(registry.handler_for(ch), smalls)
        for ch in string.digits:
            self.assertIs(registry.handler_for(ch), digits)
        self.assertEqual(len(registry), 26 + 26 + 10)

    def test_group_tokens_are_removed_after_expansion(self) -> None:
        registry = KeyRegistry({CAPITAL_LETTERS: _noop, SMALL_LETTERS: _noop, NUMBERS: _noop})

        for token in (CAPITAL_LETTERS, SMALL_LETTERS, NUMBERS):
            self.assertNotIn(token, registry)
            self.assertIsNone(registry.handler_for(token))

    def test_literal_outside_group_coexists(self) -> None:
        def upper_a(key, quit):
            return None

        registry = KeyRegistry({"A": upper_a, SMALL_LETTERS: _noop, "+": _noop})

        self.assertIs(registry.handler_for("A"), upper_a)
        self.assertIs(registry.handler_for("a"), _noop)
        self.assertIs(registry.handler_for("+"), _noop)


class KeyConflictTests(unittest.TestCase):
    def test_literal_covered_by_group_in_same_table_raises(self) -> None:
        with self.assertRaises(KeyBindingConflictError):
            KeyRegistry({"a": _noop, SMALL_LETTERS: _noop})

    def test_group_registered_after_literal_raises(self) -> None:
        registry = KeyRegistry({"7": _noop})
        with self.assertRaises(KeyBindingConflictError):
            registry.register_table({NUMBERS: _noop})
        self.assertIs(registry.handler_for("7"), _noop)
        self.assertIsNone(registry.handler_for("8"))

    def test_literal_registered_after_group_raises(self) -> None:
        registry = KeyRegistry({CAPITAL_LETTERS: _noop})
        with self.assertRaises(KeyBindingConflictError):
            registry.register_table({"Q": _noop})

    def test_conflict_error_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            KeyRegistry({"z": _noop, SMALL_LETTERS: _noop})

    def test_non_callable_handler_is_rejected(self) -> None:
        with self.assertRaises(KeyBindingConflictError):
            KeyRegistry({ENTER: "not callable"})

    def test_empty_token_is_rejected(self) -> None:
        with self.assertRaises(KeyBindingConflictError):
            KeyRegistry({"": _noop})


class KeyRegistryLookupTests(unittest.TestCase):
    def test_default_is_fallback_not_an_exact_binding(self) -> None:
        def fallback(key, quit):
            return None

        registry = KeyRegistry({DEFAULT: fallback})

        self.assertIs(registry.default_handler, fallback)
        self.assertIsNone(registry.handler_for(DEFAULT))
        self.assertFalse(registry.is_bound(DEFAULT))

    def test_from_bindings_maps_every_combo(self) -> None:
        def move(key, quit):
            return None

        registry = KeyRegistry.from_bindings(KeyComboBinding((ARROW_UP, "k"), move))

        self.assertIs(registry.handler_for(ARROW_UP), move)
        self.assertIs(registry.handler_for("k"), move)

    def test_prefixes_cover_bound_and_known_sequences(self) -> None:
        registry = KeyRegistry({ARROW_UP: _noop})

        self.assertTrue(registry.is_prefix("\x1b["))
        # F5 is unbound but still known, so its partial form is a prefix.
        self.assertTrue(registry.is_prefix("\x1b[1"))
        self.assertTrue(registry.is_prefix("\x1b[15"))
        self.assertFalse(registry.is_prefix("\x1b[A"))
        self.assertFalse(registry.is_prefix("a"))

    def test_key_name_reports_table_names(self) -> None:
        self.assertEqual(key_name(KEY_SEQUENCES["F5"]), "F5")
        self.assertEqual(key_name("x"), "x")
        self.assertEqual(key_name("\x01"), repr("\x01"))

    def test_group_tokens_are_recognized(self) -> None:
        self.assertTrue(is_group_token(NUMBERS))
        self.assertFalse(is_group_token("a"))
        self.assertFalse(is_group_token(DEFAULT))


if __name__ == "__main__":
    unittest.main()

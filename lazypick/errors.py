"""Errors raised for caller-contract violations.

Everything here is raised during session setup, before the terminal is put
into raw mode. Nothing in the decode/select path raises these mid-session.
"""

from __future__ import annotations


class LazyPickError(Exception):
    """Base class for lazypick setup errors."""


class InvalidItemsError(LazyPickError, TypeError):
    """The list handed to a session is not a list of strings or items."""


class InvalidOptionsError(LazyPickError, ValueError):
    """Session options are out of range or of the wrong type."""


class KeyBindingConflictError(LazyPickError, ValueError):
    """A binding table cannot be registered unambiguously."""

"""Fixed table of terminal key sequences and registration-time key groups.

Named keys map to the raw text a terminal sends for them. A bound token is
the sequence text itself, so decoded input compares directly against it.
"""

from __future__ import annotations

import string

# Arrow keys
ARROW_UP = "\x1b[A"
ARROW_DOWN = "\x1b[B"
ARROW_RIGHT = "\x1b[C"
ARROW_LEFT = "\x1b[D"

# Editing and control keys
SPACE = " "
ENTER = "\r"
ESCAPE = "\x1b"
TAB = "\t"
SHIFT_TAB = "\x1b[Z"
BACKSPACE = "\x7f"
CTRL_C = "\x03"
CTRL_D = "\x04"
CTRL_Z = "\x1a"

# Group tokens, expanded into literal keys when a binding table is registered.
CAPITAL_LETTERS = "capitalLetters"
SMALL_LETTERS = "smallLetters"
NUMBERS = "numbers"

# Fallback token for sequences that match nothing else.
DEFAULT = "default"

KEY_SEQUENCES: dict[str, str] = {
    "ArrowUp": ARROW_UP,
    "ArrowDown": ARROW_DOWN,
    "ArrowRight": ARROW_RIGHT,
    "ArrowLeft": ARROW_LEFT,
    "F1": "\x1bOP",
    "F2": "\x1bOQ",
    "F3": "\x1bOR",
    "F4": "\x1bOS",
    "F5": "\x1b[15~",
    "F6": "\x1b[17~",
    "F7": "\x1b[18~",
    "F8": "\x1b[19~",
    "F9": "\x1b[20~",
    "F10": "\x1b[21~",
    "F11": "\x1b[23~",
    "F12": "\x1b[24~",
    "Home": "\x1b[H",
    "End": "\x1b[F",
    "PageUp": "\x1b[5~",
    "PageDown": "\x1b[6~",
    "Insert": "\x1b[2~",
    "Delete": "\x1b[3~",
    "Space": SPACE,
    "Enter": ENTER,
    "Escape": ESCAPE,
    "Tab": TAB,
    "ShiftTab": SHIFT_TAB,
    "Backspace": BACKSPACE,
    "Ctrl+C": CTRL_C,
    "Ctrl+Z": CTRL_Z,
    "Ctrl+D": CTRL_D,
}

KEY_GROUPS: dict[str, str] = {
    CAPITAL_LETTERS: string.ascii_uppercase,
    SMALL_LETTERS: string.ascii_lowercase,
    NUMBERS: string.digits,
}


def key_name(sequence: str) -> str:
    """Return a readable name for ``sequence`` (table name or ``repr``)."""
    for name, value in KEY_SEQUENCES.items():
        if value == sequence:
            return name
    if len(sequence) == 1 and sequence.isprintable():
        return sequence
    return repr(sequence)


def is_group_token(token: str) -> bool:
    return token in KEY_GROUPS

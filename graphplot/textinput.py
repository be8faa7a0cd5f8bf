"""Keyboard-driven entry of an expression string."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional


class Key(IntEnum):
    """Key codes; printable keys carry their ASCII value."""

    SPACE = 32
    APOSTROPHE = 39
    COMMA = 44
    MINUS = 45
    PERIOD = 46
    SLASH = 47
    ZERO = 48
    ONE = 49
    TWO = 50
    THREE = 51
    FOUR = 52
    FIVE = 53
    SIX = 54
    SEVEN = 55
    EIGHT = 56
    NINE = 57
    SEMICOLON = 59
    EQUAL = 61
    A = 65
    B = 66
    C = 67
    D = 68
    E = 69
    F = 70
    G = 71
    H = 72
    I = 73  # noqa: E741
    J = 74
    K = 75
    L = 76
    M = 77
    N = 78
    O = 79  # noqa: E741
    P = 80
    Q = 81
    R = 82
    S = 83
    T = 84
    U = 85
    V = 86
    W = 87
    X = 88
    Y = 89
    Z = 90
    LEFT_BRACKET = 91
    BACKSLASH = 92
    RIGHT_BRACKET = 93
    GRAVE = 96
    ENTER = 257
    BACKSPACE = 259
    RIGHT = 262
    LEFT = 263
    DOWN = 264
    UP = 265
    LEFT_SHIFT = 340
    RIGHT_SHIFT = 344


_SHIFTED: dict[int, str] = {
    Key.ONE: "!",
    Key.TWO: "@",
    Key.THREE: "#",
    Key.FOUR: "$",
    Key.FIVE: "%",
    Key.SIX: "^",
    Key.SEVEN: "&",
    Key.EIGHT: "*",
    Key.NINE: "(",
    Key.ZERO: ")",
    Key.MINUS: "_",
    Key.EQUAL: "+",
    Key.LEFT_BRACKET: "{",
    Key.RIGHT_BRACKET: "}",
    Key.BACKSLASH: "|",
    Key.SEMICOLON: ":",
    Key.APOSTROPHE: '"',
    Key.COMMA: "<",
    Key.PERIOD: ">",
    Key.SLASH: "?",
    Key.A: "A",
    Key.B: "B",
}

_UNSHIFTED: dict[int, str] = {
    Key.MINUS: "-",
    Key.EQUAL: "=",
}


def char_for_key(key: int, shift: bool = False) -> Optional[str]:
    """Return the character a key produces, or None if it produces none."""
    if not 32 <= key <= 126:
        return None
    if shift:
        return _SHIFTED.get(key)
    return _UNSHIFTED.get(key, chr(key))


class ExpressionInput:
    """Accumulates typed characters until Enter is pressed."""

    def __init__(self, max_length: int = 100) -> None:
        self.max_length = max_length
        self._chars: list[str] = []
        self.done = False

    def press(self, key: int, shift: bool = False) -> bool:
        """Handle one key press; return True once input is complete."""
        if self.done:
            return True
        char = char_for_key(key, shift)
        if char is not None:
            if len(self._chars) < self.max_length:
                self._chars.append(char)
        elif key == Key.BACKSPACE:
            if self._chars:
                self._chars.pop()
        elif key == Key.ENTER:
            self.done = True
        return self.done

    @property
    def text(self) -> str:
        return "".join(self._chars)
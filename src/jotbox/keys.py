"""Discrete key events and their translation from curses input."""

import curses
from dataclasses import dataclass
from typing import Literal, Optional, Union

KeyKind = Literal["char", "ctrl", "up", "down", "left", "right", "esc", "backspace"]


@dataclass(frozen=True)
class Key:
    """One key press. `char` is set for "char" and "ctrl" kinds only."""

    kind: KeyKind
    char: str = ""

    @classmethod
    def ch(cls, c: str) -> "Key":
        return cls("char", c)

    @classmethod
    def ctrl(cls, c: str) -> "Key":
        return cls("ctrl", c.lower())

    def __str__(self) -> str:
        if self.kind == "char":
            return {"\n": "Enter", "\t": "Tab"}.get(self.char, self.char)
        if self.kind == "ctrl":
            return f"Ctrl-{self.char}"
        return self.kind.capitalize()


ENTER = Key.ch("\n")
TAB = Key.ch("\t")
ESC = Key("esc")
BACKSPACE = Key("backspace")
UP = Key("up")
DOWN = Key("down")
LEFT = Key("left")
RIGHT = Key("right")

SPECIAL_KEYS = {
    curses.KEY_UP: UP,
    curses.KEY_DOWN: DOWN,
    curses.KEY_LEFT: LEFT,
    curses.KEY_RIGHT: RIGHT,
    curses.KEY_BACKSPACE: BACKSPACE,
    curses.KEY_ENTER: ENTER,
}


def key_from_curses(wch: Union[str, int]) -> Optional[Key]:
    """Translate a `window.get_wch()` result; None for keys we do not use."""
    if isinstance(wch, int):
        return SPECIAL_KEYS.get(wch)
    if wch in ("\n", "\r"):
        return ENTER
    if wch == "\t":
        return TAB
    if wch == "\x1b":
        return ESC
    if wch in ("\x7f", "\x08"):
        return BACKSPACE
    code = ord(wch)
    if 1 <= code <= 26:
        return Key.ctrl(chr(code + 96))
    if code < 32:
        return None
    return Key.ch(wch)

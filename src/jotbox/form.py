"""Multi-field text form used to author or edit one note."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .core import Snapshot
from .errors import InvariantViolation
from .keys import Key
from .models import FieldSpec

NEXT_FIELD = Key.ctrl("n")
PREV_FIELD = Key.ctrl("b")
SAVE = Key.ctrl("s")


@dataclass
class Field:
    """One input box: label, long-form flag, content buffer and scroll offset."""

    label: str
    long_form: bool
    weight: int = 10
    content: str = ""
    scroll: int = 0

    def clear(self) -> None:
        self.content = ""
        self.scroll = 0


@dataclass
class FieldView:
    """What the renderer needs to draw one field."""

    label: str
    content: str
    focused: bool
    scroll: int
    weight: int


class FieldForm:
    """Idle -> Authoring -> (save | cancel) -> Idle.

    keystroke() returns (snapshot, ended): snapshot is the field contents
    when the user saved, ended is True once authoring has stopped.
    """

    def __init__(self, specs: List[FieldSpec]):
        if not specs:
            raise InvariantViolation("A form needs at least one field")
        self.fields = [Field(s.label, s.long_form, s.weight) for s in specs]
        self.focus_index = 0
        self.active = False

    @property
    def labels(self) -> List[str]:
        return [f.label for f in self.fields]

    @property
    def focused(self) -> Field:
        return self.fields[self.focus_index]

    def begin(self, prefill: Optional[Snapshot] = None) -> None:
        for f in self.fields:
            f.clear()
            if prefill is not None:
                f.content = prefill.get(f.label, "")
        self.focus_index = 0
        self.active = True

    def next_field(self) -> None:
        self.focus_index = (self.focus_index + 1) % len(self.fields)

    def previous_field(self) -> None:
        self.focus_index = (self.focus_index - 1) % len(self.fields)

    def snapshot(self) -> Snapshot:
        return {f.label: f.content for f in self.fields}

    def _finish(self) -> None:
        for f in self.fields:
            f.clear()
        self.focus_index = 0
        self.active = False

    def keystroke(self, key: Key) -> Tuple[Optional[Snapshot], bool]:
        if not self.active:
            raise InvariantViolation("Keystroke sent to a form that is not authoring")

        if key == SAVE:
            snap = self.snapshot()
            self._finish()
            return snap, True
        if key.kind == "esc":
            self._finish()
            return None, True

        field = self.focused
        if key == NEXT_FIELD:
            self.next_field()
        elif key == PREV_FIELD:
            self.previous_field()
        elif key.kind == "char":
            if key.char == "\n" and not field.long_form:
                self.next_field()
            else:
                field.content += key.char
        elif key.kind == "backspace":
            field.content = field.content[:-1]
        elif key.kind == "up":
            field.scroll = max(0, field.scroll - 1)
        elif key.kind == "down":
            field.scroll += 1
        return None, False

    def views(self) -> List[FieldView]:
        return [
            FieldView(f.label, f.content, self.active and i == self.focus_index, f.scroll, f.weight)
            for i, f in enumerate(self.fields)
        ]

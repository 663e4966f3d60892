"""Category tabs and the tab set that routes keystrokes between them."""

from typing import List, Optional

from loguru import logger

from .catalog import Catalog
from .core import fields_to_note, merge_on_edit, note_to_fields
from .errors import InvariantViolation, JotboxError
from .form import FieldForm, FieldView
from .keys import Key
from .models import CATEGORY_ORDER, FIELD_LAYOUTS, Category, Note
from .picker import TargetPicker
from .render import DONE_MARK, NOT_DONE_MARK, Fragment, browse_fragments
from .storage import RecordStore

EDIT, DELETE, TOGGLE = "e", "d", "t"
DIGITS = "0123456789"


class CategoryTab:
    """One category's catalog, form and picker, plus view state.

    While the form is active every keystroke goes to it; otherwise the
    browsing keymap applies.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self.category = catalog.category
        self.title = str(self.category)
        self.form = FieldForm(FIELD_LAYOUTS[self.category])
        self.picker = TargetPicker()
        self.fold = False
        self.scroll = 0
        self.editing: Optional[Note] = None
        self.status = ""

    @property
    def is_authoring(self) -> bool:
        return self.form.active

    @property
    def commands(self) -> List[str]:
        if self.category is Category.TASK:
            return [EDIT, DELETE, TOGGLE]
        return [EDIT, DELETE]

    def keypress(self, key: Key) -> None:
        if self.is_authoring:
            self._authoring_keypress(key)
        else:
            self._browsing_keypress(key)

    def _browsing_keypress(self, key: Key) -> None:
        if key.kind != "char":
            if key.kind == "up":
                self.scroll = max(0, self.scroll - 1)
            elif key.kind == "down":
                self.scroll += 1
            elif key.kind == "esc":
                self.picker.reset()
            return

        c = key.char
        if c == "n":
            self.start_new()
        elif c == "\t":
            self.fold = not self.fold
        elif c in self.commands:
            self.picker.arm(c)
        elif c in DIGITS:
            self.picker.digit(int(c))
        elif c == "\n":
            picked = self.picker.confirm()
            if picked is not None:
                self.dispatch(*picked)

    def _authoring_keypress(self, key: Key) -> None:
        snapshot, ended = self.form.keystroke(key)
        if snapshot is not None:
            original, self.editing = self.editing, None
            if original is not None:
                note = merge_on_edit(original, snapshot)
            else:
                note = fields_to_note(self.category, snapshot, self.catalog.next_available_id())
            try:
                self.catalog.add(note)
            except JotboxError:
                # keep the draft so the user can retry or cancel
                self.editing = original
                self.form.begin(snapshot)
                raise
            self.status = f"Saved {self.category} {note.id}."
        elif ended:
            self.editing = None
            self.status = "Writing cancelled."

    def start_new(self) -> None:
        self.picker.reset()
        self.editing = None
        self.form.begin()

    def start_editing(self, note_id: int) -> None:
        """Load an existing note into the form; NotFound leaves the tab browsing."""
        note = self.catalog.get(note_id)
        self.editing = note
        self.form.begin(note_to_fields(note))

    def dispatch(self, command: str, note_id: int) -> None:
        logger.debug("{} tab: command {!r} on ID {}", self.category, command, note_id)
        if command == EDIT:
            self.start_editing(note_id)
            self.status = f"Editing {self.category} {note_id}."
        elif command == TOGGLE:
            note = self.catalog.toggle_done(note_id)
            self.status = f"{self.category} {note_id} marked {'done' if note.done else 'not done'}."
        elif command == DELETE:
            self.catalog.remove(note_id)
            self.status = f"Deleted {self.category} {note_id}."
        else:
            raise InvariantViolation(f"Unknown command {command!r}")

    def fragments(
        self, width: int, done_mark: str = DONE_MARK, not_done_mark: str = NOT_DONE_MARK
    ) -> List[Fragment]:
        return browse_fragments(
            self.category, self.catalog.visible(), width, self.fold, done_mark, not_done_mark
        )

    def field_views(self) -> List[FieldView]:
        return self.form.views()


class TabSet:
    """Ordered, cyclic tabs with one active index; the top-level key router."""

    QUIT = "q"

    def __init__(self, tabs: List[CategoryTab]):
        if not tabs:
            raise InvariantViolation("A tab set needs at least one tab")
        self.tabs = tabs
        self.index = 0

    @classmethod
    def from_store(cls, store: RecordStore) -> "TabSet":
        """Load one tab per category, in the standard order."""
        return cls([CategoryTab(Catalog.load(c, store)) for c in CATEGORY_ORDER])

    @property
    def active(self) -> CategoryTab:
        return self.tabs[self.index]

    @property
    def titles(self) -> List[str]:
        return [t.title for t in self.tabs]

    def is_authoring(self) -> bool:
        return self.active.is_authoring

    def next(self) -> None:
        self.index = (self.index + 1) % len(self.tabs)

    def previous(self) -> None:
        self.index = (self.index - 1) % len(self.tabs)

    def keypress(self, key: Key) -> bool:
        """Route one key; returns True when the user asked to quit."""
        if self.is_authoring():
            self.active.keypress(key)
            return False
        if key == Key.ch(self.QUIT):
            return True
        if key.kind == "right":
            self.next()
        elif key.kind == "left":
            self.previous()
        else:
            self.active.keypress(key)
        return False

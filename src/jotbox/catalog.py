"""In-memory collection of one category's notes."""

from typing import Dict, List

from loguru import logger

from .codec import decode
from .core import next_id_after, toggle_done
from .errors import InvariantViolation, NotFound, WrongVariant
from .models import Category, Note, TaskNote
from .storage import RecordStore


def order_by_timestamp(entries: Dict[int, Note]) -> List[int]:
    """Display order for freshly loaded notes: oldest first, ties by id."""
    return [n.id for n in sorted(entries.values(), key=lambda n: (n.timestamp, n.id))]


class Catalog:
    """Notes of one category keyed by id, with a display order and id allocator.

    Mutations go to the store first; in-memory state only changes once the
    write or removal has succeeded.
    """

    def __init__(self, category: Category, store: RecordStore):
        self.category = category
        self.store = store
        self.entries: Dict[int, Note] = {}
        self.visible_order: List[int] = []
        self.next_id = 1

    @classmethod
    def load(cls, category: Category, store: RecordStore) -> "Catalog":
        """Decode every record of a category; any bad record aborts the load."""
        catalog = cls(category, store)
        for path, text in store.list_records(category):
            note = decode(text)
            if note.category is not category:
                raise WrongVariant(category, note.category)
            if note.id in catalog.entries:
                raise InvariantViolation(
                    f"Duplicate {category} ID {note.id} in {path}"
                )
            catalog.entries[note.id] = note
        catalog.visible_order = order_by_timestamp(catalog.entries)
        catalog.next_id = next_id_after(catalog.entries)
        logger.debug("Loaded {} {} entries from {}", len(catalog.entries), category, store.folder)
        return catalog

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, note_id: int) -> bool:
        return note_id in self.entries

    def visible(self) -> List[Note]:
        return [self.entries[i] for i in self.visible_order]

    def next_available_id(self) -> int:
        return self.next_id

    def get(self, note_id: int) -> Note:
        try:
            return self.entries[note_id]
        except KeyError:
            raise NotFound(self.category, note_id) from None

    def add(self, note: Note) -> None:
        """Insert or overwrite a note, persisting it first."""
        if note.category is not self.category:
            raise WrongVariant(self.category, note.category)
        self.store.write(note)
        self.entries[note.id] = note
        if note.id not in self.visible_order:
            self.visible_order.append(note.id)
        self.next_id = max(self.next_id, note.id + 1)

    def remove(self, note_id: int) -> Note:
        """Delete a note and its backing record; returns the removed note."""
        if note_id not in self.entries:
            raise NotFound(self.category, note_id)
        self.store.remove(self.category, note_id)
        note = self.entries.pop(note_id)
        self.visible_order.remove(note_id)
        return note

    def toggle_done(self, note_id: int) -> TaskNote:
        """Flip a task's done flag and persist it."""
        if self.category is not Category.TASK:
            raise WrongVariant(Category.TASK, self.category)
        toggled = toggle_done(self.get(note_id))
        self.add(toggled)
        return toggled

    def check_invariants(self) -> None:
        """Raise InvariantViolation if entries, order and next_id disagree."""
        if len(set(self.visible_order)) != len(self.visible_order):
            raise InvariantViolation(f"{self.category} display order has duplicate IDs")
        if set(self.visible_order) != set(self.entries):
            raise InvariantViolation(f"{self.category} display order does not match entries")
        if self.entries and self.next_id <= max(self.entries):
            raise InvariantViolation(f"{self.category} next ID {self.next_id} is already used")

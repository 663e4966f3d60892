"""Note/field mapping helpers (pure functions, no I/O)."""

from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional

from .codec import join_list, split_list
from .errors import InvariantViolation, WrongVariant
from .models import (
    FIELD_LAYOUTS,
    Category,
    EventNote,
    JournalNote,
    Note,
    ResearchNote,
    TaskNote,
    utc_now,
)

Snapshot = Dict[str, str]


def next_id_after(ids) -> int:
    """Return max(ids) + 1, or 1 if there are none."""
    return max(ids, default=0) + 1


def one_line(value: str) -> str:
    """Join a value's lines with spaces; short fields are stored in the header."""
    return " ".join(part.strip() for part in value.splitlines() if part.strip())


def note_to_fields(note: Note) -> Snapshot:
    """Return the editable field contents for a note, keyed by field label."""
    if isinstance(note, TaskNote):
        return {
            "Task": note.summary,
            "Description": note.details,
            "Tags": join_list(note.tags),
        }
    if isinstance(note, JournalNote):
        return {"Description": note.details, "Tags": join_list(note.tags)}
    if isinstance(note, ResearchNote):
        return {"Title": note.title, "Notes": note.notes, "Tags": join_list(note.tags)}
    if isinstance(note, EventNote):
        return {
            "Title": note.title,
            "Notes": note.notes,
            "People": join_list(note.people),
            "Tags": join_list(note.tags),
        }
    raise TypeError(f"not a note: {note!r}")


def fields_to_note(
    category: Category,
    fields: Snapshot,
    note_id: int,
    timestamp: Optional[datetime] = None,
) -> Note:
    """Build a fresh note of the given category from a form snapshot."""
    labels = [spec.label for spec in FIELD_LAYOUTS[category]]
    missing = [label for label in labels if label not in fields]
    if missing:
        raise InvariantViolation(
            f"{category} form snapshot is missing fields: {', '.join(missing)}"
        )
    fields = {
        spec.label: fields[spec.label] if spec.long_form else one_line(fields[spec.label])
        for spec in FIELD_LAYOUTS[category]
    }
    ts = timestamp or utc_now()
    tags: List[str] = split_list(fields["Tags"])

    if category is Category.TASK:
        return TaskNote(
            id=note_id,
            timestamp=ts,
            summary=fields["Task"].strip(),
            details=fields["Description"],
            done=False,
            tags=tags,
        )
    if category is Category.JOURNAL:
        return JournalNote(
            id=note_id, timestamp=ts, details=fields["Description"].strip(), tags=tags
        )
    if category is Category.RESEARCH:
        return ResearchNote(
            id=note_id,
            timestamp=ts,
            title=fields["Title"].strip(),
            notes=fields["Notes"],
            tags=tags,
        )
    return EventNote(
        id=note_id,
        timestamp=ts,
        title=fields["Title"].strip(),
        people=split_list(fields["People"]),
        notes=fields["Notes"],
        tags=tags,
    )


def merge_on_edit(original: Note, fields: Snapshot) -> Note:
    """Rebuild an edited note, keeping id, timestamp and done from the original.

    Only the form-editable fields come from the snapshot.
    """
    edited = fields_to_note(original.category, fields, original.id, original.timestamp)
    if isinstance(original, TaskNote):
        edited = replace(edited, done=original.done)
    return edited


def toggle_done(note: Note) -> TaskNote:
    """Return a copy of a task with its done flag flipped."""
    if not isinstance(note, TaskNote):
        raise WrongVariant(Category.TASK, note.category)
    return replace(note, done=not note.done)

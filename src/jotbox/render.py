"""Browsing-view text for a tab, as styled fragments.

Fragments are (text, style) pairs; a fragment ending in a newline ends the
row. Style names are mapped to terminal attributes by the TUI.
"""

import unicodedata
from dataclasses import dataclass
from datetime import datetime, timezone
from itertools import groupby
from typing import Iterable, List

from .models import Category, EventNote, JournalNote, Note, ResearchNote, TaskNote

DONE_MARK = "✓"
NOT_DONE_MARK = "✕"
SEPARATOR = "---"

STYLES = ("title", "metadata", "people", "done", "not_done", "body", "date_header")


@dataclass(frozen=True)
class Fragment:
    text: str
    style: str = "body"

    def __post_init__(self):
        if self.style not in STYLES:
            raise ValueError(f"unknown fragment style {self.style!r}")


def text_width(s: str) -> int:
    """Display width, counting East Asian wide characters as two columns."""
    return sum(2 if unicodedata.east_asian_width(c) in ("W", "F") else 1 for c in s)


def right_format(text: str, right: str, width: int, left_too_long: bool) -> str:
    """Put `right` at the right edge of the row holding `text`.

    If both don't fit with a space between them, `right` goes on its own row.
    """
    tw, rw = text_width(text), text_width(right)
    if width < tw + rw + 1:
        if left_too_long:
            return f"{text}\n{right}\n"
        return f"{text}\n{right_format('', right, width, True)}"
    return f"{text}{' ' * (width - tw - rw)}{right}\n"


def _utc(ts: datetime) -> datetime:
    return ts.astimezone(timezone.utc) if ts.tzinfo else ts


def format_date(ts: datetime) -> str:
    return _utc(ts).strftime("%b %d %Y")


def format_time(ts: datetime) -> str:
    return _utc(ts).strftime("%I:%M:%S %p")


def format_datetime(ts: datetime) -> str:
    return _utc(ts).strftime("%I:%M:%S %p %a %b %d %Y")


def title_fragments(
    note: Note, width: int, done_mark: str = DONE_MARK, not_done_mark: str = NOT_DONE_MARK
) -> List[Fragment]:
    frags = []
    if isinstance(note, TaskNote):
        if note.done:
            frags.append(Fragment(f"{done_mark} ", "done"))
        else:
            frags.append(Fragment(f"{not_done_mark} ", "not_done"))
        width -= 2
    title = note.title.strip().replace("\n", " ")
    frags.append(Fragment(right_format(title, str(note.id), width, False), "title"))
    return frags


def metadata_fragment(note: Note, width: int, time_only: bool = False) -> Fragment:
    when = format_time(note.timestamp) if time_only else format_datetime(note.timestamp)
    return Fragment(right_format(",".join(note.tags), when, width, True), "metadata")


def body_of(note: Note) -> str:
    if isinstance(note, TaskNote):
        return note.details
    if isinstance(note, (ResearchNote, EventNote)):
        return note.notes
    return ""


def note_fragments(
    note: Note,
    width: int,
    fold: bool,
    done_mark: str = DONE_MARK,
    not_done_mark: str = NOT_DONE_MARK,
) -> List[Fragment]:
    """One note: title row, metadata row, people, then body unless folded."""
    frags = title_fragments(note, width, done_mark, not_done_mark)
    frags.append(metadata_fragment(note, width, time_only=isinstance(note, JournalNote)))
    if isinstance(note, EventNote) and note.people:
        frags.append(Fragment(", ".join(note.people) + "\n", "people"))
    if not fold:
        body = body_of(note).strip()
        if body:
            frags.append(Fragment(body + "\n", "body"))
        frags.append(Fragment(SEPARATOR + "\n", "body"))
    return frags


def journal_fragments(notes: Iterable[Note], width: int, fold: bool) -> List[Fragment]:
    """Journal notes grouped by day, each day headed by its entry count."""
    frags: List[Fragment] = []
    for _, day in groupby(notes, key=lambda n: _utc(n.timestamp).date()):
        day_notes = list(day)
        count = len(day_notes)
        label = f"{count} {'entries' if count > 1 else 'entry'}"
        frags.append(
            Fragment(right_format(format_date(day_notes[0].timestamp), label, width, True), "date_header")
        )
        for note in day_notes:
            frags.extend(note_fragments(note, width, fold))
    return frags


def browse_fragments(
    category: Category,
    notes: List[Note],
    width: int,
    fold: bool,
    done_mark: str = DONE_MARK,
    not_done_mark: str = NOT_DONE_MARK,
) -> List[Fragment]:
    if not notes:
        return [Fragment(f"No {category} entries yet. Press 'n' to add one.\n", "metadata")]
    if category is Category.JOURNAL:
        return journal_fragments(notes, width, fold)
    frags: List[Fragment] = []
    for note in notes:
        frags.extend(note_fragments(note, width, fold, done_mark, not_done_mark))
    return frags

"""Record codec: text <-> Note (pure, no I/O).

A record looks like::

    ---
    Type: Task
    ID: 3
    DateTime: Jan 01 2023 12:00:00 AM
    Tags: x, y
    Task: buy milk
    Done: false
    ---
    buy 2% milk
"""

import re
from datetime import datetime, timezone
from typing import Dict, List, Tuple

from .errors import (
    InvariantViolation,
    MalformedField,
    MissingHeader,
    MissingHeaderField,
    UnrecognizedVariant,
)
from .models import (
    DATETIME_FORMAT,
    HEADER_MARK,
    Category,
    EventNote,
    JournalNote,
    Note,
    ResearchNote,
    TaskNote,
)


def split_list(value: str) -> List[str]:
    """Split a comma-separated header value, trimming and dropping blanks."""
    return [part.strip() for part in value.split(",") if part.strip()]


def join_list(items: List[str]) -> str:
    return ", ".join(items)


ID_RE = re.compile(r"[0-9]+")


def format_timestamp(ts: datetime) -> str:
    """Format an aware, whole-second timestamp as UTC record text.

    Naive or sub-second values would not decode back to the same datetime,
    so they are rejected rather than silently adjusted.
    """
    if ts.tzinfo is None:
        raise InvariantViolation(f"Timestamp {ts.isoformat()} has no timezone")
    if ts.microsecond:
        raise InvariantViolation(f"Timestamp {ts.isoformat()} is not whole seconds")
    return ts.astimezone(timezone.utc).strftime(DATETIME_FORMAT)


def parse_timestamp(value: str) -> datetime:
    return datetime.strptime(value.strip(), DATETIME_FORMAT).replace(tzinfo=timezone.utc)


def split_record(text: str) -> Tuple[Dict[str, str], str]:
    """Split record text into (header mapping, body).

    Raises MissingHeader if the opening or closing delimiter is absent.
    """
    lines = text.split("\n")
    if not lines or lines[0].rstrip("\r") != HEADER_MARK:
        raise MissingHeader()

    header: Dict[str, str] = {}
    for i in range(1, len(lines)):
        line = lines[i].rstrip("\r")
        if line == HEADER_MARK:
            return header, "\n".join(lines[i + 1 :])
        key, sep, value = line.partition(": ")
        if not sep:
            if line.endswith(":"):
                key, value = line[:-1], ""
            else:
                raise MalformedField(line, "expected 'Key: Value'")
        header[key.strip()] = value
    raise MissingHeader("header is never closed")


def _require(header: Dict[str, str], name: str) -> str:
    try:
        return header[name]
    except KeyError:
        raise MissingHeaderField(name) from None


def _parse_id(value: str) -> int:
    value = value.strip()
    if not ID_RE.fullmatch(value):
        raise MalformedField("ID", f"{value!r} is not an unsigned integer")
    return int(value)


def _parse_bool(name: str, value: str) -> bool:
    value = value.strip()
    if value == "true":
        return True
    if value == "false":
        return False
    raise MalformedField(name, f"{value!r} is not true or false")


def decode(text: str) -> Note:
    """Decode one record into a Note."""
    header, body = split_record(text)

    type_name = _require(header, "Type").strip()
    try:
        category = Category(type_name)
    except ValueError:
        raise UnrecognizedVariant(type_name) from None

    note_id = _parse_id(_require(header, "ID"))
    raw_ts = _require(header, "DateTime")
    try:
        timestamp = parse_timestamp(raw_ts)
    except ValueError as exc:
        raise MalformedField("DateTime", str(exc)) from None
    tags = split_list(_require(header, "Tags"))

    if category is Category.TASK:
        return TaskNote(
            id=note_id,
            timestamp=timestamp,
            summary=_require(header, "Task").strip(),
            details=body,
            done=_parse_bool("Done", _require(header, "Done")),
            tags=tags,
        )
    if category is Category.JOURNAL:
        return JournalNote(id=note_id, timestamp=timestamp, details=body, tags=tags)
    if category is Category.RESEARCH:
        return ResearchNote(
            id=note_id,
            timestamp=timestamp,
            title=_require(header, "Title").strip(),
            notes=body,
            tags=tags,
        )
    return EventNote(
        id=note_id,
        timestamp=timestamp,
        title=_require(header, "Title").strip(),
        people=split_list(_require(header, "People")),
        notes=body,
        tags=tags,
    )


def _header_fields(note: Note) -> Tuple[List[Tuple[str, str]], str]:
    common = [
        ("Type", note.category.value),
        ("ID", str(note.id)),
        ("DateTime", format_timestamp(note.timestamp)),
        ("Tags", join_list(note.tags)),
    ]
    if isinstance(note, TaskNote):
        extra = [("Task", note.summary), ("Done", "true" if note.done else "false")]
        return common + extra, note.details
    if isinstance(note, JournalNote):
        return common, note.details
    if isinstance(note, ResearchNote):
        return common + [("Title", note.title)], note.notes
    if isinstance(note, EventNote):
        return common + [("Title", note.title), ("People", join_list(note.people))], note.notes
    raise TypeError(f"not a note: {note!r}")


def encode(note: Note) -> str:
    """Encode a Note as record text (header block then body, verbatim)."""
    fields, body = _header_fields(note)
    for key, value in fields:
        if "\n" in value or "\r" in value:
            raise MalformedField(key, "header values must fit on one line")
    lines = [HEADER_MARK]
    lines.extend(f"{key}: {value}" for key, value in fields)
    lines.append(HEADER_MARK)
    return "\n".join(lines) + "\n" + body

"""Data models and constants for jotbox."""

import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, List, Union

DEFAULT_DIR = os.path.expanduser("~/.jotbox")
DEFAULT_CONFIG = os.path.join(DEFAULT_DIR, "config.yaml")
DEFAULT_LOG = os.path.join(DEFAULT_DIR, "jotbox.log")

HEADER_MARK = "---"
RECORD_EXT = "md"
DATETIME_FORMAT = "%b %d %Y %I:%M:%S %p"


class Category(Enum):
    """The four kinds of note, each with its own file namespace."""

    TASK = "Task"
    JOURNAL = "Journal"
    RESEARCH = "Research"
    EVENT = "Event"

    def __str__(self) -> str:
        return self.value

    @property
    def record_re(self) -> "re.Pattern":
        return re.compile(rf"^{self.value}_(\d+)\.{RECORD_EXT}$")


CATEGORY_ORDER = [Category.TASK, Category.JOURNAL, Category.RESEARCH, Category.EVENT]


def record_filename(category: Category, note_id: int) -> str:
    """Return the file name for a record: {Category}_{id}.md"""
    return f"{category.value}_{note_id}.{RECORD_EXT}"


def utc_now() -> datetime:
    """Current UTC time at the precision the record format keeps."""
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass
class TaskNote:
    """A to-do item with a one-line summary and markdown details."""

    category: ClassVar[Category] = Category.TASK

    id: int
    timestamp: datetime
    summary: str
    details: str = ""
    done: bool = False
    tags: List[str] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.summary


@dataclass
class JournalNote:
    category: ClassVar[Category] = Category.JOURNAL

    id: int
    timestamp: datetime
    details: str
    tags: List[str] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.details


@dataclass
class ResearchNote:
    category: ClassVar[Category] = Category.RESEARCH

    id: int
    timestamp: datetime
    title: str
    notes: str = ""
    tags: List[str] = field(default_factory=list)


@dataclass
class EventNote:
    """Something that happened, with who was there."""

    category: ClassVar[Category] = Category.EVENT

    id: int
    timestamp: datetime
    title: str
    people: List[str] = field(default_factory=list)
    notes: str = ""
    tags: List[str] = field(default_factory=list)


Note = Union[TaskNote, JournalNote, ResearchNote, EventNote]

NOTE_TYPES = {
    Category.TASK: TaskNote,
    Category.JOURNAL: JournalNote,
    Category.RESEARCH: ResearchNote,
    Category.EVENT: EventNote,
}


@dataclass(frozen=True)
class FieldSpec:
    """Layout of one input field: label, long-form flag, height weight (percent)."""

    label: str
    long_form: bool
    weight: int


FIELD_LAYOUTS = {
    Category.TASK: [
        FieldSpec("Task", False, 10),
        FieldSpec("Description", True, 60),
        FieldSpec("Tags", False, 10),
    ],
    Category.JOURNAL: [
        FieldSpec("Description", False, 10),
        FieldSpec("Tags", False, 10),
    ],
    Category.RESEARCH: [
        FieldSpec("Title", False, 10),
        FieldSpec("Notes", True, 60),
        FieldSpec("Tags", False, 10),
    ],
    Category.EVENT: [
        FieldSpec("Title", False, 10),
        FieldSpec("Notes", True, 50),
        FieldSpec("People", False, 10),
        FieldSpec("Tags", False, 10),
    ],
}

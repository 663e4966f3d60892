"""jotbox - tasks, journal lines, research notes and events in the terminal."""

__version__ = "1.0.0"

from .models import (
    Category,
    TaskNote,
    JournalNote,
    ResearchNote,
    EventNote,
    Note,
    DEFAULT_DIR,
)
from .codec import decode, encode
from .catalog import Catalog
from .form import FieldForm
from .picker import TargetPicker
from .tabs import CategoryTab, TabSet
from .storage import RecordStore

__all__ = [
    "Category",
    "TaskNote",
    "JournalNote",
    "ResearchNote",
    "EventNote",
    "Note",
    "DEFAULT_DIR",
    "decode",
    "encode",
    "Catalog",
    "FieldForm",
    "TargetPicker",
    "CategoryTab",
    "TabSet",
    "RecordStore",
]

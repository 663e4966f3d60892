"""File I/O for jotbox record directories."""

import os
from typing import List, Tuple

from loguru import logger

from .codec import encode
from .errors import MalformedField, StorageError
from .models import DEFAULT_DIR, Category, Note, record_filename


class RecordStore:
    """One directory of records, one file per note: {Category}_{id}.md"""

    def __init__(self, folder: str = DEFAULT_DIR):
        self.folder = os.path.abspath(os.path.expanduser(folder))

    def path_for(self, category: Category, note_id: int) -> str:
        return os.path.join(self.folder, record_filename(category, note_id))

    def list_records(self, category: Category) -> List[Tuple[str, str]]:
        """Return (path, text) for every record file of a category.

        Files are returned in name order; callers that need a display order
        must sort the decoded notes themselves.
        """
        if not os.path.isdir(self.folder):
            return []
        pattern = category.record_re
        try:
            names = sorted(os.listdir(self.folder))
        except OSError as exc:
            raise StorageError("read", self.folder, exc) from exc
        records = []
        for name in names:
            if not pattern.match(name):
                continue
            path = os.path.join(self.folder, name)
            try:
                with open(path, "r", encoding="utf-8") as f:
                    records.append((path, f.read()))
            except UnicodeDecodeError as exc:
                raise MalformedField(path, f"not valid UTF-8 ({exc.reason})") from exc
            except OSError as exc:
                raise StorageError("read", path, exc) from exc
        return records

    def write(self, note: Note) -> str:
        """Encode and write a note; returns the path written."""
        path = self.path_for(note.category, note.id)
        text = encode(note)
        tmp_path = path + ".tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_path, path)
        except OSError as exc:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError("write", path, exc) from exc
        logger.info("Wrote {} {} to {}", note.category, note.id, path)
        return path

    def remove(self, category: Category, note_id: int) -> None:
        path = self.path_for(category, note_id)
        try:
            os.remove(path)
        except OSError as exc:
            raise StorageError("remove", path, exc) from exc
        logger.info("Removed {} {} ({})", category, note_id, path)


def ensure_dir_exists(folder: str = DEFAULT_DIR) -> None:
    """Ensure the records directory exists."""
    os.makedirs(os.path.abspath(os.path.expanduser(folder)), exist_ok=True)

import contextlib
import io
import os
import tempfile
import unittest

from loguru import logger

from jotbox.catalog import Catalog
from jotbox.cli import main
from jotbox.models import Category
from jotbox.storage import RecordStore


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        root = self._tmp.name
        self.notes = os.path.join(root, "notes")
        self.config = os.path.join(root, "config.yaml")
        with open(self.config, "w", encoding="utf-8") as f:
            f.write(f"log_file: {os.path.join(root, 'jotbox.log')}\n")

    def tearDown(self) -> None:
        logger.remove()
        self._tmp.cleanup()

    def run_cli(self, *args: str) -> str:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            main(["--config", self.config, "-d", self.notes, *args])
        return out.getvalue()

    def test_add_list_toggle_delete(self) -> None:
        self.assertIn("Added Task 1: buy milk", self.run_cli("add", "task", "buy milk", "2%", "home"))
        self.run_cli("add", "Event", "dinner", "", "ana, bo")

        listing = self.run_cli("list", "--fold")
        self.assertIn("== Task (1) ==", listing)
        self.assertIn("buy milk", listing)
        self.assertIn("ana, bo", listing)

        self.assertIn("marked done", self.run_cli("toggle", "1"))
        self.assertTrue(Catalog.load(Category.TASK, RecordStore(self.notes)).get(1).done)

        self.assertIn("Deleted Event 1.", self.run_cli("delete", "event", "1"))
        self.assertFalse(os.path.exists(os.path.join(self.notes, "Event_1.md")))

    def test_multi_line_arguments_become_one_line(self) -> None:
        self.assertIn("Added Task 1: a b", self.run_cli("add", "task", "a\nb", "line one\nline two", "x,\ny"))
        note = Catalog.load(Category.TASK, RecordStore(self.notes)).get(1)
        self.assertEqual(note.summary, "a b")
        self.assertEqual(note.details, "line one\nline two")
        self.assertEqual(note.tags, ["x", "y"])
        self.assertIn("a b", self.run_cli("list", "task"))

    def test_path(self) -> None:
        self.assertEqual(self.run_cli("path").strip(), os.path.abspath(self.notes))

    def test_errors_exit_with_message(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("delete", "task", "9")
        self.assertIn("No Task entry with ID 9", str(ctx.exception.code))

        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("add", "journal", "a", "b", "c")
        self.assertIn("at most 2 fields", str(ctx.exception.code))

    def test_unknown_category(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                self.run_cli("list", "recipes")


if __name__ == "__main__":
    unittest.main()

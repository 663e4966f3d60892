import unittest
from datetime import datetime, timezone

from jotbox.models import Category, EventNote, JournalNote, TaskNote
from jotbox.render import Fragment, browse_fragments, right_format
from jotbox.tui import fragments_to_rows, wrap_text

T = datetime(2023, 1, 1, 12, 0, tzinfo=timezone.utc)


class RightFormatTests(unittest.TestCase):
    def test_fits_on_one_row(self) -> None:
        self.assertEqual(right_format("abc", "7", 10, False), "abc      7\n")

    def test_overflow_moves_right_text_down(self) -> None:
        self.assertEqual(right_format("abcdef", "xyz", 8, True), "abcdef\nxyz\n")
        self.assertEqual(right_format("abcdef", "xyz", 8, False), "abcdef\n     xyz\n")


class BrowseFragmentTests(unittest.TestCase):
    def test_task_marks_and_fold(self) -> None:
        notes = [
            TaskNote(id=1, timestamp=T, summary="one", details="body text", done=True, tags=["a"]),
            TaskNote(id=2, timestamp=T, summary="two", done=False),
        ]
        unfolded = browse_fragments(Category.TASK, notes, 40, fold=False)
        styles = [f.style for f in unfolded]
        self.assertEqual(styles[0], "done")
        self.assertIn("not_done", styles)
        self.assertIn("body text\n", [f.text for f in unfolded])

        folded = browse_fragments(Category.TASK, notes, 40, fold=True)
        self.assertNotIn("body", [f.style for f in folded])

    def test_event_people(self) -> None:
        note = EventNote(id=4, timestamp=T, title="dinner", people=["ana", "bo"])
        frags = browse_fragments(Category.EVENT, [note], 40, fold=True)
        self.assertIn(("ana, bo\n", "people"), [(f.text, f.style) for f in frags])

    def test_journal_grouped_by_day(self) -> None:
        notes = [
            JournalNote(id=1, timestamp=T, details="morning"),
            JournalNote(id=2, timestamp=T.replace(hour=20), details="evening"),
            JournalNote(id=3, timestamp=T.replace(day=2), details="next day"),
        ]
        frags = browse_fragments(Category.JOURNAL, notes, 40, fold=True)
        headers = [f.text for f in frags if f.style == "date_header"]
        self.assertEqual(len(headers), 2)
        self.assertTrue(headers[0].startswith("Jan 01 2023"))
        self.assertTrue(headers[0].rstrip().endswith("2 entries"))
        self.assertTrue(headers[1].rstrip().endswith("1 entry"))

    def test_empty_catalog(self) -> None:
        frags = browse_fragments(Category.RESEARCH, [], 40, fold=False)
        self.assertEqual(len(frags), 1)
        self.assertIn("No Research entries", frags[0].text)


class FragmentTests(unittest.TestCase):
    def test_unknown_style_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Fragment("x", "bold")
        self.assertEqual(Fragment("x").style, "body")


class RowLayoutTests(unittest.TestCase):
    def test_fragments_to_rows(self) -> None:
        frags = browse_fragments(
            Category.TASK, [TaskNote(id=1, timestamp=T, summary="one")], 30, fold=True
        )
        rows = fragments_to_rows(frags, 30)
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[0][0], ("✕ ", "not_done"))
        self.assertTrue(rows[0][1][0].endswith("1"))

    def test_wrap_text(self) -> None:
        self.assertEqual(wrap_text("abcdef\n\nxy", 4), ["abcd", "ef", "", "xy"])


if __name__ == "__main__":
    unittest.main()

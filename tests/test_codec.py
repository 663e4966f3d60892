import unittest
from datetime import datetime, timedelta, timezone

from jotbox.codec import decode, encode, split_list
from jotbox.errors import (
    InvariantViolation,
    MalformedField,
    MissingHeader,
    MissingHeaderField,
    UnrecognizedVariant,
)
from jotbox.models import EventNote, JournalNote, ResearchNote, TaskNote

TS = datetime(2023, 1, 1, 0, 0, 0, tzinfo=timezone.utc)

TASK_TEXT = (
    "---\nType: Task\nID: 3\nDateTime: Jan 01 2023 12:00:00 AM\nTags: x, y\n"
    "Task: buy milk\nDone: false\n---\nbuy 2% milk"
)


class DecodeTests(unittest.TestCase):
    def test_decode_task_record(self) -> None:
        note = decode(TASK_TEXT)
        self.assertIsInstance(note, TaskNote)
        self.assertEqual(note.id, 3)
        self.assertEqual(note.tags, ["x", "y"])
        self.assertEqual(note.summary, "buy milk")
        self.assertFalse(note.done)
        self.assertEqual(note.details, "buy 2% milk")
        self.assertEqual(note.timestamp, TS)

    def test_decode_event_people(self) -> None:
        text = (
            "---\nType: Event\nID: 1\nDateTime: Mar 14 2024 03:15:09 PM\nTags: \n"
            "Title: standup\nPeople: ana,  bo\n---\nnotes here\nline two"
        )
        note = decode(text)
        self.assertIsInstance(note, EventNote)
        self.assertEqual(note.people, ["ana", "bo"])
        self.assertEqual(note.tags, [])
        self.assertEqual(note.notes, "notes here\nline two")
        self.assertEqual(note.timestamp, datetime(2024, 3, 14, 15, 15, 9, tzinfo=timezone.utc))

    def test_empty_tags_without_trailing_space(self) -> None:
        text = "---\nType: Journal\nID: 2\nDateTime: Jan 01 2023 12:00:00 AM\nTags:\n---\nslept well"
        note = decode(text)
        self.assertIsInstance(note, JournalNote)
        self.assertEqual(note.tags, [])
        self.assertEqual(note.details, "slept well")

    def test_missing_header(self) -> None:
        with self.assertRaises(MissingHeader):
            decode("Type: Task\nID: 1")
        with self.assertRaises(MissingHeader):
            decode("")

    def test_unterminated_header(self) -> None:
        with self.assertRaises(MissingHeader):
            decode("---\nType: Task\nID: 1\n")

    def test_missing_field(self) -> None:
        text = "---\nType: Task\nID: 3\nDateTime: Jan 01 2023 12:00:00 AM\nTags: x\nTask: t\n---\n"
        with self.assertRaises(MissingHeaderField) as ctx:
            decode(text)
        self.assertEqual(ctx.exception.name, "Done")

    def test_missing_type(self) -> None:
        with self.assertRaises(MissingHeaderField) as ctx:
            decode("---\nID: 3\n---\n")
        self.assertEqual(ctx.exception.name, "Type")

    def test_unrecognized_variant(self) -> None:
        with self.assertRaises(UnrecognizedVariant) as ctx:
            decode("---\nType: Recipe\nID: 3\n---\n")
        self.assertEqual(ctx.exception.name, "Recipe")

    def test_malformed_fields(self) -> None:
        bad_id = TASK_TEXT.replace("ID: 3", "ID: -3")
        with self.assertRaises(MalformedField) as ctx:
            decode(bad_id)
        self.assertEqual(ctx.exception.name, "ID")

        for raw in ("\u00b2", "1\u00b2", "\u0663"):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedField) as ctx:
                    decode(TASK_TEXT.replace("ID: 3", f"ID: {raw}"))
                self.assertEqual(ctx.exception.name, "ID")

        bad_date = TASK_TEXT.replace("Jan 01 2023 12:00:00 AM", "2023-01-01")
        with self.assertRaises(MalformedField) as ctx:
            decode(bad_date)
        self.assertEqual(ctx.exception.name, "DateTime")

        bad_done = TASK_TEXT.replace("Done: false", "Done: maybe")
        with self.assertRaises(MalformedField) as ctx:
            decode(bad_done)
        self.assertEqual(ctx.exception.name, "Done")

    def test_header_line_without_separator(self) -> None:
        with self.assertRaises(MalformedField):
            decode(TASK_TEXT.replace("Tags: x, y", "Tags x y"))


class EncodeTests(unittest.TestCase):
    def test_encode_key_order(self) -> None:
        note = TaskNote(id=3, timestamp=TS, summary="buy milk", details="buy 2% milk", tags=["x", "y"])
        self.assertEqual(encode(note), TASK_TEXT)

    def test_round_trip_every_variant(self) -> None:
        notes = [
            TaskNote(id=7, timestamp=TS, summary="ship it", details="# plan\n- a\n", done=True, tags=["work"]),
            JournalNote(id=1, timestamp=TS, details="quiet day", tags=[]),
            ResearchNote(id=12, timestamp=TS, title="CRDTs", notes="see paper\n\n---\nnot a header", tags=["cs", "dist"]),
            EventNote(id=4, timestamp=TS, title="dinner", people=["ana", "bo"], notes="", tags=["family"]),
        ]
        for note in notes:
            with self.subTest(note=type(note).__name__):
                self.assertEqual(decode(encode(note)), note)

    def test_header_values_must_fit_on_one_line(self) -> None:
        notes = [
            TaskNote(id=1, timestamp=TS, summary="a\nb"),
            ResearchNote(id=2, timestamp=TS, title="t\r"),
            EventNote(id=3, timestamp=TS, title="t", people=["ana\nbo"]),
        ]
        for note in notes:
            with self.subTest(note=type(note).__name__):
                with self.assertRaises(MalformedField):
                    encode(note)

    def test_timestamps_must_be_aware_whole_seconds(self) -> None:
        for ts in (datetime(2023, 1, 1), TS.replace(microsecond=5)):
            with self.subTest(ts=ts):
                with self.assertRaises(InvariantViolation):
                    encode(TaskNote(id=1, timestamp=ts, summary="s"))

        local = TS.astimezone(timezone(timedelta(hours=-5)))
        note = TaskNote(id=1, timestamp=local, summary="s")
        self.assertEqual(decode(encode(note)), note)

    def test_split_list(self) -> None:
        self.assertEqual(split_list(" a ,b,, c "), ["a", "b", "c"])
        self.assertEqual(split_list(""), [])


if __name__ == "__main__":
    unittest.main()

import queue
import threading
import unittest

from jotbox.events import Events, InputClosed, InputEvent, TickEvent
from jotbox.keys import Key


class EventsTests(unittest.TestCase):
    def test_keys_arrive_in_order(self) -> None:
        keys = iter([Key.ch("a"), None, Key.ch("b")])
        done = threading.Event()

        def read_key():
            try:
                return next(keys)
            except StopIteration:
                done.wait()
                return None

        events = Events(read_key, tick_rate=60).start()
        try:
            seen = []
            while len(seen) < 2:
                event = events.next(timeout=2)
                if isinstance(event, InputEvent):
                    seen.append(event.key)
                else:
                    self.assertIsInstance(event, TickEvent)
            self.assertEqual(seen, [Key.ch("a"), Key.ch("b")])
        finally:
            events.stop()
            done.set()

    def test_reader_failure_closes_input(self) -> None:
        def read_key():
            raise OSError("stdin closed")

        events = Events(read_key, tick_rate=60).start()
        try:
            kinds = []
            for _ in range(2):
                try:
                    kinds.append(events.next(timeout=2))
                except queue.Empty:
                    break
            closed = [e for e in kinds if isinstance(e, InputClosed)]
            self.assertEqual(len(closed), 1)
            self.assertIn("stdin closed", closed[0].reason)
        finally:
            events.stop()


if __name__ == "__main__":
    unittest.main()

"""Input and tick producers feeding one ordered event channel."""

import queue
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from loguru import logger

from .keys import Key


@dataclass(frozen=True)
class InputEvent:
    key: Key


@dataclass(frozen=True)
class TickEvent:
    pass


@dataclass(frozen=True)
class InputClosed:
    reason: str


Event = Union[InputEvent, TickEvent, InputClosed]


class Events:
    """Two background producers (keys, ticks) and a blocking `next()`.

    `read_key` blocks until a key is available and returns a Key, or None
    for input the core does not use.
    """

    def __init__(self, read_key: Callable[[], Optional[Key]], tick_rate: float = 0.25):
        self._queue: "queue.Queue[Event]" = queue.Queue()
        self._stop = threading.Event()
        self._read_key = read_key
        self.tick_rate = tick_rate
        self._input_thread = threading.Thread(target=self._input_loop, name="jotbox-input", daemon=True)
        self._tick_thread = threading.Thread(target=self._tick_loop, name="jotbox-tick", daemon=True)

    def start(self) -> "Events":
        self._input_thread.start()
        self._tick_thread.start()
        return self

    def _input_loop(self) -> None:
        while not self._stop.is_set():
            try:
                key = self._read_key()
            except Exception as exc:
                logger.error("Input reader stopped: {}", exc)
                self._queue.put(InputClosed(str(exc)))
                return
            if key is not None:
                self._queue.put(InputEvent(key))

    def _tick_loop(self) -> None:
        while not self._stop.is_set():
            self._queue.put(TickEvent())
            time.sleep(self.tick_rate)

    def next(self, timeout: Optional[float] = None) -> Event:
        """Block until the next event; raises queue.Empty on timeout."""
        return self._queue.get(timeout=timeout)

    def stop(self) -> None:
        self._stop.set()

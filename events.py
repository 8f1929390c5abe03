import collections
import queue
import threading
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class InputEvent:
    key: int | str


@dataclass(frozen=True)
class TickEvent:
    pass


TICK = TickEvent()

# posted by the producer when input is pending; never returned from get()
_INPUT_READY = object()


class EventSource:
    """Single producer merging key input and timer ticks onto one FIFO queue.

    The producer thread only waits: ``wait_fn(timeout_seconds)`` returns True
    once input is pending and False when the timeout passed. Keys are read by
    ``read_fn()`` inside ``get``, on the consuming thread, so curses is only
    ever touched by one thread. ``read_fn`` returns every key it can read
    without blocking, possibly none.

    A tick is emitted only after a full interval passes with no input.
    """

    def __init__(self, wait_fn, read_fn, tick_interval: float = 0.2, clock=time.monotonic):
        self.wait_fn = wait_fn
        self.read_fn = read_fn
        self.tick_interval = tick_interval
        self.clock = clock
        self.events: queue.Queue = queue.Queue()
        self._pending: collections.deque = collections.deque()
        self._read_done = threading.Event()
        self._read_done.set()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self):
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="event-source", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float | None = 1.0):
        self._stop.set()
        t = self._thread
        self._thread = None
        if t is not None and t is not threading.current_thread():
            t.join(timeout)

    def get(self, timeout: float | None = None):
        """Block until the next event. Call from the thread that owns curses."""
        while not self._pending:
            event = self.events.get(timeout=timeout)
            if event is _INPUT_READY:
                try:
                    self._collect()
                finally:
                    self._read_done.set()
                continue
            # a resize reaches curses without making stdin readable
            self._collect()
            return event
        return self._pending.popleft()

    def _collect(self):
        self._pending.extend(InputEvent(key) for key in self.read_fn())

    def _run(self):
        last_tick = self.clock()
        while not self._stop.is_set():
            last_tick = self.step(last_tick)
            # pending input stays readable until the consumer has read it
            while not self._read_done.wait(0.05):
                if self._stop.is_set():
                    return

    def step(self, last_tick: float) -> float:
        """One wait cycle. Returns the timestamp the next tick is measured from."""
        remaining = self.tick_interval - (self.clock() - last_tick)
        if self.wait_fn(max(0.0, remaining)):
            self._read_done.clear()
            self.events.put(_INPUT_READY)
            return self.clock()
        if self.clock() - last_tick >= self.tick_interval:
            self.events.put(TICK)
            return self.clock()
        return last_tick

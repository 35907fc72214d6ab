# busdepot/ticker.py
from __future__ import annotations
import queue
import threading
import time
from dataclasses import dataclass
from typing import Optional

from busdepot.core import Clock


@dataclass(frozen=True)
class Tick:
    seq: int            # 1 for the first period, 2 for the second, ...
    sim_time: float     # clock.now() when the tick was emitted


class Ticker(threading.Thread):
    """
    Periodic trigger: puts a Tick into `channel` every `interval` simulated units.

    The default channel holds a single tick; if the reader has not consumed the
    previous one the new tick is dropped rather than queued. stop() halts the
    ticker; once it returns no further tick is put on the channel, although a
    tick already sitting there is left as is.
    """

    def __init__(self, interval: float, clock: Clock, channel: Optional[queue.Queue] = None):
        super().__init__(daemon=True)
        if interval <= 0:
            raise ValueError(f"ticker interval must be positive, got {interval!r}")
        self.interval = float(interval)
        self.clock = clock
        self.channel = channel if channel is not None else queue.Queue(maxsize=1)
        self._stopped = threading.Event()
        self._lock = threading.Lock()   # orders stop() against the next put
        self._seq = 0

    @property
    def ticks(self) -> int:
        """How many ticks have been emitted so far."""
        return self._seq

    def run(self):
        period = self.clock.seconds(self.interval)
        next_fire = time.monotonic() + period
        while True:
            delay = max(0.0, next_fire - time.monotonic())
            if self._stopped.wait(delay):
                return
            with self._lock:
                if self._stopped.is_set():
                    return
                self._seq += 1
                try:
                    self.channel.put_nowait(Tick(self._seq, self.clock.now()))
                except queue.Full:
                    pass  # reader is behind; drop this tick
            next_fire += period

    def stop(self):
        with self._lock:
            self._stopped.set()

    def stopped(self) -> bool:
        return self._stopped.is_set()

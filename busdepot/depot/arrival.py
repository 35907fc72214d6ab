# busdepot/depot/arrival.py
import threading
from typing import List, Optional, Tuple

import numpy as np

from busdepot.passengers.base import Passenger


def _check_range(name: str, bounds) -> Tuple[float, float]:
    lo, hi = (float(b) for b in bounds)
    if lo < 0 or hi < lo:
        raise ValueError(f"{name} must satisfy 0 <= lo <= hi, got {bounds!r}")
    return lo, hi


class ArrivalGenerator(threading.Thread):
    """
    Sends passengers to the bus stop at irregular intervals until cancelled.

    - inter_arrival: (lo, hi) simulated units between two arrivals, uniform
    - dwell:         (lo, hi) simulated units a passenger keeps their seat, uniform
    - walk_up:       (lo, hi) delay a spawned passenger takes before trying to board
    - cancel:        set by the arbiter once the bus leaves; no arrival after that

    Each passenger runs in its own thread; the generator never waits for one.
    """

    def __init__(self, clock, pool, arbiter, ids, cancel: threading.Event,
                 inter_arrival, dwell, metrics=None, rng: Optional[np.random.Generator] = None,
                 trip: int = 0, walk_up=(0.0, 0.0)):
        super().__init__(daemon=True, name=f"arrivals-{trip}")
        self.clock = clock
        self.pool = pool
        self.arbiter = arbiter
        self.ids = ids
        self.cancel = cancel
        self.metrics = metrics
        self.trip = trip
        self.rng = rng if rng is not None else np.random.default_rng()

        self.inter_arrival = _check_range("inter_arrival", inter_arrival)
        self.dwell = _check_range("dwell", dwell)
        self.walk_up = _check_range("walk_up", walk_up)

        self.passengers: List[Passenger] = []

    def _draw(self, bounds: Tuple[float, float]) -> float:
        lo, hi = bounds
        if hi == lo:
            return lo
        return float(self.rng.uniform(lo, hi))

    def spawn(self) -> Passenger:
        """Create and start one passenger."""
        passenger = Passenger(
            self.ids.passenger(),
            pool=self.pool,
            arbiter=self.arbiter,
            clock=self.clock,
            dwell=self._draw(self.dwell),
            cancel=self.cancel,
            metrics=self.metrics,
            trip=self.trip,
            walk_up=self._draw(self.walk_up),
        )
        self.passengers.append(passenger)
        if self.metrics:
            self.metrics.record_arrival(self.trip, passenger.pid, self.clock.now())
        passenger.start()
        return passenger

    # ---- thread loop ----
    def run(self):
        while not self.clock.should_stop():
            delay = self._draw(self.inter_arrival)
            # blocks until the next arrival is due or the bus has left
            if self.cancel.wait(self.clock.seconds(delay)):
                break
            if self.clock.should_stop():
                break
            self.spawn()

    def join_passengers(self, timeout: Optional[float] = None):
        for p in list(self.passengers):
            p.join(timeout)

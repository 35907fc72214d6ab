# busdepot/vehicle/dispatch.py
from __future__ import annotations
import queue
import threading
from dataclasses import dataclass
from typing import Optional, Tuple

from busdepot.core import DispatchReason
from busdepot.errors import DoubleOutcomeError
from busdepot.ticker import Tick, Ticker


@dataclass(frozen=True)
class DispatchOutcome:
    trip: int
    reason: DispatchReason
    occupant_count: int
    timestamp: float            # simulated time of the decision
    seated: Tuple[int, ...] = ()


@dataclass(frozen=True)
class PoolFull:
    pid: int


class DispatchArbiter(threading.Thread):
    """
    Decides when the bus leaves: on the first tick or the first "bus is full"
    report, whichever it sees first.

    Ticks and full reports land in the same inbox, so the decision is simply the
    first item taken out of it. This thread is the only one that ever reads the
    inbox, which makes it the single decider: one trip, one outcome. Anything
    arriving after the decision stays unread.

    Once decided it stops the ticker, cancels arrivals, closes the pool and
    freezes the seated count into a DispatchOutcome.
    """

    def __init__(self, pool, clock, cancel: threading.Event, period: float,
                 metrics=None, trip: int = 0):
        super().__init__(daemon=True, name=f"arbiter-{trip}")
        self.pool = pool
        self.clock = clock
        self.cancel = cancel
        self.metrics = metrics
        self.trip = trip

        self.inbox: queue.Queue = queue.Queue()
        self.ticker = Ticker(period, clock, channel=self.inbox)
        self.generator = None

        self._outcome: Optional[DispatchOutcome] = None
        self._lock = threading.Lock()
        self.done = threading.Event()

    @property
    def outcome(self) -> Optional[DispatchOutcome]:
        return self._outcome

    def attach(self, generator):
        """Arrival generator to start with the trip (and stop via the cancel token)."""
        self.generator = generator

    # ---- signals from passengers ----
    def notify_full(self, passenger):
        """Called by a passenger who found no free seat."""
        if self.done.is_set():
            return
        self.inbox.put(PoolFull(getattr(passenger, "pid", passenger)))

    # ---- thread loop ----
    def run(self):
        self.ticker.start()
        if self.generator is not None:
            self.generator.start()

        signal = self.inbox.get()
        if isinstance(signal, Tick):
            reason = DispatchReason.PERIOD_ELAPSED
            if self.metrics:
                self.metrics.record_tick(self.trip, signal.seq, self.pool.capacity, signal.sim_time)
        else:
            reason = DispatchReason.CAPACITY_REACHED
        self._decide(reason)

    def _decide(self, reason: DispatchReason):
        self.ticker.stop()
        self.cancel.set()
        seated = self.pool.close()
        outcome = DispatchOutcome(
            trip=self.trip,
            reason=reason,
            occupant_count=len(seated),
            timestamp=self.clock.now(),
            seated=tuple(seated),
        )
        self._finalize(outcome)

    def _finalize(self, outcome: DispatchOutcome):
        with self._lock:
            if self._outcome is not None:
                raise DoubleOutcomeError(
                    f"trip {self.trip} already dispatched ({self._outcome.reason.value})")
            self._outcome = outcome
        if self.metrics:
            self.metrics.record_dispatch(self.trip, outcome.reason.value, list(outcome.seated),
                                         self.pool.capacity, outcome.timestamp)
        self.done.set()

    def wait(self, timeout: Optional[float] = None) -> Optional[DispatchOutcome]:
        """Block until the bus leaves; returns the outcome (None on timeout)."""
        self.done.wait(timeout)
        return self._outcome

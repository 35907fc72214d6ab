# busdepot/vehicle/bus.py
import threading
from typing import Optional

from busdepot.depot.arrival import ArrivalGenerator
from busdepot.vehicle.dispatch import DispatchArbiter, DispatchOutcome
from busdepot.vehicle.pool import OccupancyPool


class Bus:
    """
    One trip of the bus: a fresh seat pool, ticker, arbiter and arrival stream.

    Nothing is shared with the next trip except the clock, the id sequence,
    the RNG and the metrics sink. Passengers still seated when the bus leaves
    are abandoned with this object.
    """

    def __init__(self, trip: int, capacity: int, period: float, inter_arrival, dwell,
                 clock, ids, metrics=None, rng=None, walk_up=(0.0, 0.0)):
        self.trip = trip
        self.clock = clock
        self.cancel = threading.Event()
        self.pool = OccupancyPool(capacity)
        self.arbiter = DispatchArbiter(self.pool, clock, self.cancel, period,
                                       metrics=metrics, trip=trip)
        self.arrivals = ArrivalGenerator(
            clock=clock,
            pool=self.pool,
            arbiter=self.arbiter,
            ids=ids,
            cancel=self.cancel,
            inter_arrival=inter_arrival,
            dwell=dwell,
            metrics=metrics,
            rng=rng,
            trip=trip,
            walk_up=walk_up,
        )
        self.arbiter.attach(self.arrivals)

    def start(self):
        self.arbiter.start()

    def wait(self, timeout: Optional[float] = None) -> Optional[DispatchOutcome]:
        outcome = self.arbiter.wait(timeout)
        # arrivals notice the cancel token within one wait; don't leave it running
        if outcome is not None:
            self.arrivals.join(timeout=max(1.0, self.clock.seconds(self.arrivals.inter_arrival[1])))
        return outcome

    def run(self, timeout: Optional[float] = None) -> Optional[DispatchOutcome]:
        """Start the trip and block until the bus leaves."""
        self.start()
        return self.wait(timeout)

    @property
    def outcome(self) -> Optional[DispatchOutcome]:
        return self.arbiter.outcome

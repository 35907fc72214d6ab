# busdepot/depot/depot.py
from typing import List

import numpy as np

from busdepot.core import Clock, DispatchReason, Ids
from busdepot.vehicle.bus import Bus
from busdepot.vehicle.dispatch import DispatchOutcome


class Depot:
    """Runs consecutive bus trips with the same settings."""

    def __init__(self, config, clock: Clock, metrics=None):
        self.config = config
        self.clock = clock
        self.metrics = metrics
        self.ids = Ids()
        self.rng = np.random.default_rng(config.seed)
        self.outcomes: List[DispatchOutcome] = []

    def make_bus(self, trip: int) -> Bus:
        cfg = self.config
        return Bus(
            trip=trip,
            capacity=cfg.capacity,
            period=cfg.period,
            inter_arrival=cfg.inter_arrival,
            dwell=cfg.dwell,
            clock=self.clock,
            ids=self.ids,
            metrics=self.metrics,
            rng=self.rng,
            walk_up=cfg.walk_up,
        )

    def run(self) -> List[DispatchOutcome]:
        for trip in range(1, self.config.trips + 1):
            if self.clock.should_stop():
                print(f"⚠️ Clock stopped, {self.config.trips - trip + 1} trips cancelled")
                break
            bus = self.make_bus(trip)
            bus.start()
            # the arbiter wakes on every tick, so each wait is bounded by one period
            outcome = None
            while outcome is None and not self.clock.should_stop():
                outcome = bus.wait(self.clock.seconds(self.config.period))
            if outcome is not None:
                self.outcomes.append(outcome)
        return self.outcomes

    def summary(self) -> dict:
        by_reason = {r.value: 0 for r in DispatchReason}
        for o in self.outcomes:
            by_reason[o.reason.value] += 1
        loads = [o.occupant_count for o in self.outcomes]
        return {
            "trips": len(self.outcomes),
            "by_reason": by_reason,
            "mean_load": float(np.mean(loads)) if loads else 0.0,
            "max_load": max(loads) if loads else 0,
        }

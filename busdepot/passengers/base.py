# busdepot/passengers/base.py
import threading

from busdepot.core import PassengerState


class Passenger(threading.Thread):
    """
    One passenger's lifecycle: BOARDING -> SEATED -> ALIGHTED.

    If there is no free seat the passenger tells the arbiter the bus is full
    and goes home, staying in BOARDING with turned_away set.
    """

    def __init__(self, pid, pool, arbiter, clock, dwell: float, cancel: threading.Event,
                 metrics=None, trip: int = 0, walk_up: float = 0.0):
        super().__init__(daemon=True, name=f"passenger-{pid}")
        self.pid = pid
        self.pool = pool
        self.arbiter = arbiter
        self.clock = clock
        self.dwell = dwell
        self.walk_up = walk_up
        self.cancel = cancel
        self.metrics = metrics
        self.trip = trip

        self.state = PassengerState.BOARDING
        self.turned_away = False
        self.boarded_at = None
        self.alighted_at = None

    def run(self):
        if self.walk_up > 0 and not self.clock.sleep(self.walk_up):
            return

        if not self.board():
            return

        # hold the seat; if the whole simulation is shut down meanwhile the
        # passenger is abandoned in place
        if not self.clock.sleep(self.dwell):
            return
        self.alight()

    def board(self) -> bool:
        now = self.clock.now()
        if self.pool.try_admit(self):
            self.state = PassengerState.SEATED
            self.boarded_at = now
            if self.metrics:
                self.metrics.record_board(self.trip, self.pid, self.pool.members(), self.pool.capacity, now)
            return True

        self.turned_away = True
        # a closed pool means the bus already left; nobody to tell
        if self.cancel.is_set():
            return False
        if self.metrics:
            self.metrics.record_turned_away(self.trip, self.pid, self.pool.capacity, now)
        self.arbiter.notify_full(self)
        return False

    def alight(self):
        self.pool.release(self)
        self.state = PassengerState.ALIGHTED
        self.alighted_at = self.clock.now()
        if self.metrics:
            self.metrics.record_alight(self.trip, self.pid, self.pool.members(), self.pool.capacity,
                                       self.alighted_at)

"""Small stand-ins shared by the test modules."""

import threading

from busdepot.core import Clock

FAST = 0.01  # real seconds per simulated unit


def fast_clock(speed: float = FAST) -> Clock:
    return Clock(speed_factor=speed)


class RecordingArbiter:
    """Collects "bus is full" reports instead of deciding anything."""

    def __init__(self):
        self.full_reports = []
        self._lock = threading.Lock()

    def notify_full(self, passenger):
        with self._lock:
            self.full_reports.append(passenger.pid)


class RecordingMetrics:
    """In-memory sink with the MetricsRecorder record_* surface."""

    def __init__(self):
        self.events = []
        self._lock = threading.Lock()

    def _add(self, name, *args):
        with self._lock:
            self.events.append((name,) + args)

    def named(self, name):
        with self._lock:
            return [e for e in self.events if e[0] == name]

    def record_arrival(self, trip, passenger_id, sim_time):
        self._add("arrival", trip, passenger_id)

    def record_board(self, trip, passenger_id, members, capacity, sim_time):
        self._add("board", trip, passenger_id, list(members))

    def record_turned_away(self, trip, passenger_id, capacity, sim_time):
        self._add("turned_away", trip, passenger_id)

    def record_alight(self, trip, passenger_id, members, capacity, sim_time):
        self._add("alight", trip, passenger_id, list(members))

    def record_tick(self, trip, seq, capacity, sim_time):
        self._add("tick", trip, seq)

    def record_dispatch(self, trip, reason, seated, capacity, sim_time):
        self._add("dispatch", trip, reason, list(seated))

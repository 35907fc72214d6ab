import threading
import time
from enum import Enum


# ---------- Clock (controls simulated time) ----------
class Clock:
    """
    Simulated clock for the depot.
    - speed_factor: how many real seconds one simulated time unit lasts
    """

    def __init__(self, speed_factor: float = 1.0):
        self._speed = max(speed_factor, 0.001)  # prevent zero or negative
        self._started = time.monotonic()
        self._stop = threading.Event()

    def now(self) -> float:
        """Return the simulated time units elapsed since the clock was built."""
        return (time.monotonic() - self._started) / self._speed

    def seconds(self, units: float) -> float:
        """Convert simulated units into real seconds."""
        return max(0.0, units) * self._speed

    def sleep(self, units: float) -> bool:
        """
        Sleep for a number of simulated units (scaled by speed).
        Returns False if the clock was stopped before the time was up.
        """
        return not self._stop.wait(self.seconds(units))

    def stop(self):
        """Stop the simulation clock."""
        self._stop.set()

    def should_stop(self) -> bool:
        return self._stop.is_set()

    def seconds_per_unit(self) -> float:
        """Return how many real seconds equal one simulated unit."""
        return self._speed


# ---------- Passenger ids ----------
class Ids:
    """Monotonically increasing passenger ids, safe to share between threads."""

    def __init__(self):
        self._passenger_id = 0
        self._lock = threading.Lock()

    def passenger(self) -> int:
        with self._lock:
            self._passenger_id += 1
            return self._passenger_id


# ---------- Status Enums ----------
class PassengerState(Enum):
    BOARDING = "boarding"
    SEATED = "seated"
    ALIGHTED = "alighted"


class DispatchReason(Enum):
    PERIOD_ELAPSED = "period_elapsed"
    CAPACITY_REACHED = "capacity_reached"

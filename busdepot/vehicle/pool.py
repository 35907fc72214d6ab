# busdepot/vehicle/pool.py
from __future__ import annotations
import threading
from typing import List, Set

from busdepot.errors import CapacityViolation


def _pid(passenger) -> int:
    # accept either a Passenger or a bare id
    return getattr(passenger, "pid", passenger)


class OccupancyPool:
    """
    Thread-safe seat pool for one bus trip.

    try_admit() and release() are the only mutating operations and both run
    under the same lock, so the size check and the insert happen as one step:
    two passengers can never both see the last free seat.

    Reads (size, members, is_full) are snapshots. They can be stale by the time
    the caller acts on them; deciding to board from size() and then boarding is
    NOT atomic. Use try_admit() and look at its return value instead.
    """

    def __init__(self, capacity: int):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValueError(f"capacity must be a positive integer, got {capacity!r}")
        self._capacity = capacity
        self._lock = threading.Lock()   # protects _members and _closed
        self._members: Set[int] = set()
        self._closed = False

    @property
    def capacity(self) -> int:
        return self._capacity

    # ----------------------- Query helpers -----------------------

    def size(self) -> int:
        with self._lock:
            return len(self._members)

    def members(self) -> List[int]:
        with self._lock:
            return sorted(self._members)

    def is_full(self) -> bool:
        with self._lock:
            return len(self._members) >= self._capacity

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    # ----------------------- Core operations -----------------------

    def try_admit(self, passenger) -> bool:
        """
        Seat the passenger if a seat is free right now.
        Returns False, changing nothing, if the bus is full, already gone,
        or the passenger is already seated.
        """
        pid = _pid(passenger)
        with self._lock:
            if self._closed or pid in self._members:
                return False
            if len(self._members) >= self._capacity:
                return False
            self._members.add(pid)
            self._check()
            return True

    def release(self, passenger) -> bool:
        """
        Free the passenger's seat.
        Returns True if they were seated; releasing twice is a no-op.
        """
        pid = _pid(passenger)
        with self._lock:
            if pid not in self._members:
                return False
            self._members.discard(pid)
            self._check()
            return True

    def close(self) -> List[int]:
        """
        Stop admitting for good and return who is seated at this instant.
        Later releases still free seats, later admissions are refused.
        """
        with self._lock:
            self._closed = True
            return sorted(self._members)

    def _check(self) -> None:
        # caller holds the lock
        size = len(self._members)
        if size < 0 or size > self._capacity:
            raise CapacityViolation(size, self._capacity)

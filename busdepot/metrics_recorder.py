import csv
import os
import threading
from collections import defaultdict
try:
    import matplotlib
    matplotlib.use('Agg')  # Non-interactive backend
    import matplotlib.pyplot as plt
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

FIELDS = [
    "sim_time",
    "trip",
    "event",
    # common fields
    "passenger_id",
    "count",
    "capacity",
    "reason",
    "members",
]


class MetricsRecorder:
    """
    Thread-safe CSV logger for simulation events.
    Call record_* methods from any thread (arbiter, arrivals, passengers).
    With echo=True every event is also printed to the console.
    """

    def __init__(self, out_dir: str = "results", filename: str = "metrics.csv", echo: bool = False):
        self.out_dir = out_dir
        self.filename = filename
        self.echo = echo
        self._path = os.path.join(out_dir, filename)
        os.makedirs(out_dir, exist_ok=True)

        # Create file with header if new/empty
        self._lock = threading.Lock()
        new_file = not os.path.exists(self._path) or os.path.getsize(self._path) == 0
        self._fh = open(self._path, "a", newline="", encoding="utf-8")
        self._writer = csv.DictWriter(self._fh, fieldnames=FIELDS)
        if new_file:
            self._writer.writeheader()
            self._fh.flush()

    @property
    def path(self) -> str:
        return self._path

    # ---------- low-level write ----------
    def _write(self, row: dict, sim_time: float, line: str = None):
        row["sim_time"] = f"{sim_time:.3f}"
        if isinstance(row.get("members"), list):
            row["members"] = " ".join(str(m) for m in row["members"])
        with self._lock:
            if self._fh.closed:
                return  # late events from abandoned passengers
            self._writer.writerow(row)
            self._fh.flush()
            if self.echo and line:
                print(f"[t={sim_time:6.2f}] trip {row.get('trip')}: {line}")

    # ---------- arrivals ----------
    def record_arrival(self, trip: int, passenger_id: int, sim_time: float):
        self._write({
            "trip": trip,
            "event": "arrival",
            "passenger_id": passenger_id,
        }, sim_time, f"🚶 passenger {passenger_id} arrives")

    # ---------- seats ----------
    def record_board(self, trip: int, passenger_id: int, members, capacity: int, sim_time: float):
        self._write({
            "trip": trip,
            "event": "board",
            "passenger_id": passenger_id,
            "count": len(members),
            "capacity": capacity,
            "members": list(members),
        }, sim_time, f"🪑 passenger {passenger_id} boards ({len(members)}/{capacity}) {list(members)}")

    def record_turned_away(self, trip: int, passenger_id: int, capacity: int, sim_time: float):
        self._write({
            "trip": trip,
            "event": "turned_away",
            "passenger_id": passenger_id,
            "capacity": capacity,
            "reason": "full",
        }, sim_time, f"⛔ passenger {passenger_id} finds the bus full")

    def record_alight(self, trip: int, passenger_id: int, members, capacity: int, sim_time: float):
        self._write({
            "trip": trip,
            "event": "alight",
            "passenger_id": passenger_id,
            "count": len(members),
            "capacity": capacity,
            "members": list(members),
        }, sim_time, f"👋 passenger {passenger_id} gets off ({len(members)}/{capacity}) {list(members)}")

    # ---------- dispatch ----------
    def record_tick(self, trip: int, seq: int, capacity: int, sim_time: float):
        self._write({
            "trip": trip,
            "event": "tick",
            "count": seq,
            "capacity": capacity,
        }, sim_time, f"⏰ period {seq} elapsed")

    def record_dispatch(self, trip: int, reason: str, seated, capacity: int, sim_time: float):
        self._write({
            "trip": trip,
            "event": "dispatch",
            "count": len(seated),
            "capacity": capacity,
            "reason": reason,
            "members": list(seated),
        }, sim_time, f"🚌 departs ({reason}) with {len(seated)}/{capacity} seated {list(seated)}")

    # ---------- cleanup ----------
    def close(self):
        with self._lock:
            if self._fh.closed:
                return
            try:
                self._fh.flush()
            finally:
                self._fh.close()

    # ---------- reading back ----------
    def occupancy_series(self):
        """{trip: [(sim_time, seated_count), ...]} from board/alight/dispatch rows."""
        series = defaultdict(list)
        with open(self._path, 'r', newline='', encoding='utf-8') as f:
            for row in csv.DictReader(f):
                if row['event'] not in ('board', 'alight', 'dispatch'):
                    continue
                series[int(row['trip'])].append((float(row['sim_time']), int(row['count'])))
        for points in series.values():
            points.sort()
        return dict(series)

    # ---------- visualization ----------
    def generate_occupancy_graph(self, filename: str = 'occupancy_graph.png'):
        """Plot seated passengers over time, one line per trip. Returns the image path or None."""
        if not HAS_MATPLOTLIB:
            print("⚠️  matplotlib not available, skipping graph generation")
            return None

        series = self.occupancy_series()
        if not series:
            print("⚠️  No occupancy data available for graphing")
            return None

        plt.figure(figsize=(14, 6))
        plt.style.use('dark_background')

        for trip, points in sorted(series.items()):
            times = [t for t, _ in points]
            counts = [c for _, c in points]
            plt.step(times, counts, where='post', label=f"trip {trip}", linewidth=1.5, alpha=0.8)

        plt.xlabel('Simulated time', fontsize=12)
        plt.ylabel('Seated passengers', fontsize=12)
        plt.title('Bus Occupancy per Trip', fontsize=14, fontweight='bold')
        plt.legend(loc='upper right', fontsize=9)
        plt.grid(True, alpha=0.3)
        plt.tight_layout()

        graph_path = os.path.join(self.out_dir, filename)
        plt.savefig(graph_path, dpi=150, facecolor='black')
        plt.close()

        print(f"📊 Occupancy graph saved to: {graph_path}")
        return graph_path

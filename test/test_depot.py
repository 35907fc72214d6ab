"""
Tests for consecutive trips and the command line entry point.
"""

import os
import tempfile
import unittest

import yaml

from busdepot.config import DepotConfig
from busdepot.core import Clock, DispatchReason
from busdepot.depot.depot import Depot
from helpers import RecordingMetrics

import main as entry


def small_config(**bus):
    cfg = {
        "time": {"speed_factor": 0.01},
        "bus": {"capacity": 3, "period": 5, "trips": 3},
        "passengers": {"inter_arrival": [0.0, 0.2], "dwell": [50, 60]},
        "seed": 3,
        "metrics": {"echo": False},
    }
    cfg["bus"].update(bus)
    return cfg


class TestDepot(unittest.TestCase):

    def setUp(self):
        self.clock = Clock(0.01)

    def tearDown(self):
        self.clock.stop()

    def test_runs_every_trip(self):
        cfg = DepotConfig.from_dict(small_config())
        metrics = RecordingMetrics()
        depot = Depot(cfg, self.clock, metrics)
        outcomes = depot.run()
        self.assertEqual([o.trip for o in outcomes], [1, 2, 3])
        self.assertEqual(len(metrics.named("dispatch")), 3)
        for o in outcomes:
            self.assertEqual(o.reason, DispatchReason.CAPACITY_REACHED)
            self.assertEqual(o.occupant_count, 3)

    def test_ids_never_repeat_across_trips(self):
        cfg = DepotConfig.from_dict(small_config())
        outcomes = Depot(cfg, self.clock).run()
        seated = [pid for o in outcomes for pid in o.seated]
        self.assertEqual(len(seated), len(set(seated)))

    def test_summary(self):
        cfg = DepotConfig.from_dict(small_config(capacity=50, period=1, trips=2))
        depot = Depot(cfg, self.clock)
        depot.run()
        summary = depot.summary()
        self.assertEqual(summary["trips"], 2)
        self.assertEqual(summary["by_reason"]["period_elapsed"], 2)
        self.assertEqual(summary["by_reason"]["capacity_reached"], 0)
        self.assertLess(summary["max_load"], 50)

    def test_stopped_clock_cancels_remaining_trips(self):
        cfg = DepotConfig.from_dict(small_config())
        self.clock.stop()
        self.assertEqual(Depot(cfg, self.clock).run(), [])


class TestMain(unittest.TestCase):

    def test_main_writes_metrics(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = small_config(trips=2)
            cfg["metrics"]["out_dir"] = os.path.join(tmp, "results")
            path = os.path.join(tmp, "bus.yaml")
            with open(path, "w") as f:
                yaml.safe_dump(cfg, f)
            self.assertEqual(entry.main([path]), 0)
            self.assertTrue(os.path.exists(os.path.join(tmp, "results", "metrics.csv")))


if __name__ == '__main__':
    unittest.main()

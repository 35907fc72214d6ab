"""
Tests for the CSV metrics recorder.
"""

import csv
import os
import tempfile
import unittest

from busdepot.metrics_recorder import FIELDS, MetricsRecorder


class TestMetricsRecorder(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.out_dir = self._tmp.name
        self.metrics = MetricsRecorder(out_dir=self.out_dir)

    def tearDown(self):
        self.metrics.close()
        self._tmp.cleanup()

    def rows(self):
        with open(self.metrics.path, newline="", encoding="utf-8") as f:
            return list(csv.DictReader(f))

    def test_header_and_rows(self):
        self.metrics.record_arrival(1, 4, 0.5)
        self.metrics.record_board(1, 4, [2, 4], 10, 0.6)
        self.metrics.record_dispatch(1, "capacity_reached", [2, 4], 10, 1.25)
        rows = self.rows()
        self.assertEqual(list(rows[0].keys()), FIELDS)
        self.assertEqual([r["event"] for r in rows], ["arrival", "board", "dispatch"])
        self.assertEqual(rows[1]["members"], "2 4")
        self.assertEqual(rows[1]["count"], "2")
        self.assertEqual(rows[2]["reason"], "capacity_reached")
        self.assertEqual(rows[2]["sim_time"], "1.250")

    def test_appends_without_second_header(self):
        self.metrics.record_arrival(1, 1, 0.0)
        self.metrics.close()
        again = MetricsRecorder(out_dir=self.out_dir)
        again.record_arrival(2, 2, 0.0)
        again.close()
        self.assertEqual(len(self.rows()), 2)

    def test_writes_after_close_are_dropped(self):
        self.metrics.record_arrival(1, 1, 0.0)
        self.metrics.close()
        self.metrics.record_alight(1, 1, [], 10, 5.0)
        self.metrics.close()
        self.assertEqual(len(self.rows()), 1)

    def test_occupancy_series(self):
        self.metrics.record_board(1, 1, [1], 3, 0.1)
        self.metrics.record_board(1, 2, [1, 2], 3, 0.2)
        self.metrics.record_tick(1, 1, 3, 0.25)
        self.metrics.record_alight(1, 1, [2], 3, 0.3)
        self.metrics.record_board(2, 3, [3], 3, 1.0)
        series = self.metrics.occupancy_series()
        self.assertEqual(series[1], [(0.1, 1), (0.2, 2), (0.3, 1)])
        self.assertEqual(series[2], [(1.0, 1)])

    def test_occupancy_graph(self):
        self.metrics.record_board(1, 1, [1], 3, 0.1)
        self.metrics.record_alight(1, 1, [], 3, 0.5)
        path = self.metrics.generate_occupancy_graph()
        self.assertIsNotNone(path)
        self.assertTrue(os.path.exists(path))

    def test_no_graph_without_data(self):
        self.assertIsNone(self.metrics.generate_occupancy_graph())


if __name__ == '__main__':
    unittest.main()

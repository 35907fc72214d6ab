#!/usr/bin/env python3
"""
Main entry point for the bus dispatch simulation.
Loads configuration, runs the configured number of trips and reports each departure.
"""

import sys

from busdepot.config import load_config
from busdepot.core import Clock
from busdepot.depot.depot import Depot
from busdepot.metrics_recorder import MetricsRecorder


def main(argv=None):
    """Main simulation entry point."""
    argv = sys.argv[1:] if argv is None else argv
    path = argv[0] if argv else "Config/bus.yaml"

    print("🚌 Starting Bus Dispatch Simulation...")

    cfg = load_config(path)
    clock = Clock(cfg.speed_factor)
    metrics = MetricsRecorder(out_dir=cfg.out_dir, echo=cfg.echo)
    depot = Depot(cfg, clock, metrics)

    print(f"📊 Depot setup complete:")
    print(f"  - Capacity: {cfg.capacity} seats")
    print(f"  - Period: {cfg.period} units ({clock.seconds(cfg.period):.2f} real sec)")
    print(f"  - Trips: {cfg.trips}")
    print(f"  - Arrivals every {cfg.inter_arrival[0]}-{cfg.inter_arrival[1]} units, "
          f"seats held {cfg.dwell[0]}-{cfg.dwell[1]} units")
    print("\n🚀 Opening the stop...\n")

    try:
        outcomes = depot.run()
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user")
        outcomes = depot.outcomes
    finally:
        # passengers still seated are abandoned with the last bus
        clock.stop()
        metrics.close()

    print("\n" + "=" * 60)
    for o in outcomes:
        print(f"Trip {o.trip}: {o.reason.value} at t={o.timestamp:.2f} "
              f"with {o.occupant_count}/{cfg.capacity} seated")
    summary = depot.summary()
    print(f"Departures by reason: {summary['by_reason']}")
    print(f"Mean load: {summary['mean_load']:.2f}  Max load: {summary['max_load']}")
    print("=" * 60)
    metrics.generate_occupancy_graph()
    print(f"📈 Metrics saved to: {metrics.path}")
    print("✅ Simulation complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())

# busdepot/config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

import yaml

from busdepot.errors import ConfigError


@dataclass(frozen=True)
class DepotConfig:
    capacity: int = 10
    period: float = 3.0                                 # simulated units between scheduled departures
    trips: int = 1
    inter_arrival: Tuple[float, float] = (0.0, 0.5)     # simulated units between arrivals
    dwell: Tuple[float, float] = (0.0, 5.0)             # simulated units a seat is held
    walk_up: Tuple[float, float] = (0.0, 0.0)
    speed_factor: float = 1.0                           # real seconds per simulated unit
    seed: Optional[int] = None
    out_dir: str = "results"
    echo: bool = True

    @classmethod
    def from_dict(cls, cfg: Optional[dict]) -> "DepotConfig":
        """Build from the parsed YAML layout; missing sections use defaults."""
        cfg = cfg or {}
        if not isinstance(cfg, dict):
            raise ConfigError(f"config must be a mapping, got {type(cfg).__name__}")
        time_cfg = cfg.get("time") or {}
        bus_cfg = cfg.get("bus") or {}
        p_cfg = cfg.get("passengers") or {}
        m_cfg = cfg.get("metrics") or {}
        d = cls()

        config = cls(
            capacity=bus_cfg.get("capacity", d.capacity),
            period=_number("bus.period", bus_cfg.get("period", d.period)),
            trips=bus_cfg.get("trips", d.trips),
            inter_arrival=_range("passengers.inter_arrival", p_cfg.get("inter_arrival", d.inter_arrival)),
            dwell=_range("passengers.dwell", p_cfg.get("dwell", d.dwell)),
            walk_up=_range("passengers.walk_up", p_cfg.get("walk_up", d.walk_up)),
            speed_factor=_number("time.speed_factor", time_cfg.get("speed_factor", d.speed_factor)),
            seed=cfg.get("seed", d.seed),
            out_dir=str(m_cfg.get("out_dir", d.out_dir)),
            echo=bool(m_cfg.get("echo", d.echo)),
        )
        config.validate()
        return config

    def validate(self):
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, int) or self.capacity <= 0:
            raise ConfigError(f"bus.capacity must be a positive integer, got {self.capacity!r}")
        if self.period <= 0:
            raise ConfigError(f"bus.period must be positive, got {self.period!r}")
        if isinstance(self.trips, bool) or not isinstance(self.trips, int) or self.trips < 1:
            raise ConfigError(f"bus.trips must be an integer >= 1, got {self.trips!r}")
        if self.speed_factor <= 0:
            raise ConfigError(f"time.speed_factor must be positive, got {self.speed_factor!r}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigError(f"seed must be an integer, got {self.seed!r}")


def _number(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    return float(value)


def _range(name: str, value) -> Tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(f"{name} must be a [lo, hi] pair, got {value!r}")
    lo, hi = (_number(name, v) for v in value)
    if lo < 0 or hi < lo:
        raise ConfigError(f"{name} must satisfy 0 <= lo <= hi, got {list(value)!r}")
    return lo, hi


def load_config(path: str) -> DepotConfig:
    with open(path, encoding="utf-8") as f:
        try:
            cfg = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"cannot parse {path}: {e}") from e
    return DepotConfig.from_dict(cfg)

"""Central pattern generator producing periodic foot swing heights."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np

_TWO_PI = 2.0 * math.pi


class CentralPatternGenerator:
    """Per-leg phase oscillator with a cubic swing trajectory."""

    def __init__(self, period: float, swing_height: float, time_offsets: Sequence[float]) -> None:
        self.period = float(period)
        self.swing_height = float(swing_height)
        self.time_offsets = np.asarray(time_offsets, dtype=float)
        self.time = 0.0

    def reset(self) -> None:
        """Set the internal clock back to zero."""
        self.time = 0.0

    def step(self, dt: float) -> None:
        """Advance the internal clock by ``dt``."""
        self.time += dt

    def compute_phases(self, phase_offsets: Sequence[float] | None = None) -> np.ndarray:
        """Leg phases in radians, optionally shifted by ``phase_offsets``."""
        phases = np.fmod((self.time_offsets + self.time) / self.period, 1.0) * _TWO_PI
        if phase_offsets is not None:
            phases = np.fmod(phases + np.asarray(phase_offsets, dtype=float), _TWO_PI)
        return phases

    def observation(self) -> np.ndarray:
        """Cosines of the four leg phases followed by their sines."""
        phases = self.compute_phases()
        return np.concatenate([np.cos(phases), np.sin(phases)])

    def leg_heights(self, phase_offsets: Sequence[float] | None = None) -> np.ndarray:
        """Desired foot heights for all legs."""
        return np.array([self._height(p) for p in self.compute_phases(phase_offsets)])

    def _height(self, phase: float) -> float:
        if phase <= math.pi / 2:
            t = phase * (2 / math.pi)
            return self.swing_height * (-2 * t**3 + 3 * t**2)
        if phase <= math.pi:
            t = phase * (2 / math.pi) - 1
            return self.swing_height * (2 * t**3 - 3 * t**2 + 1.0)
        return 0.0


def _lookup(config: Mapping[str, Any], path: str) -> Any:
    if path in config:
        return config[path]
    node: Any = config
    try:
        for part in path.split("/"):
            node = node[part]
    except (KeyError, TypeError) as exc:
        raise KeyError(f"Missing configuration value: {path}") from exc
    return node


def make_central_pattern_generator(config: Mapping[str, Any]) -> CentralPatternGenerator:
    """Build a pattern generator from configuration values."""
    return CentralPatternGenerator(
        float(_lookup(config, "bob_controller/cpg/period")),
        float(_lookup(config, "bob_controller/cpg/swing_height")),
        _lookup(config, "bob_controller/cpg/time_offsets"),
    )
"""Observation building blocks for the learned locomotion controller."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from quadctl.markers import State

_RING_COUNTS = (6, 8, 10, 12, 16)
_RING_RADII = (0.1, 0.3, 0.5, 0.7, 0.9)
_LEGS = 4


def generate_sampling_positions() -> np.ndarray:
    """Height sampling pattern around a foot as a 3x52 matrix.

    Points lie on concentric rings in the xy plane; the z row is zero.
    """
    columns = [
        (radius * math.cos(2 * math.pi * j / count), radius * math.sin(2 * math.pi * j / count), 0.0)
        for count, radius in zip(_RING_COUNTS, _RING_RADII)
        for j in range(count)
    ]
    return np.array(columns, dtype=float).T


class HistoryBuffer:
    """Fixed-size ring buffer of equally sized observation vectors."""

    def __init__(self, size: int, item_size: int) -> None:
        if size <= 0 or item_size <= 0:
            raise ValueError("History size and item size must be positive")
        self.size = size
        self.item_size = item_size
        self._items: list[np.ndarray] = []
        self._index = 0
        self.reset()

    def __len__(self) -> int:
        return self.size

    def reset(self) -> None:
        """Fill the buffer with zero vectors and rewind the write position."""
        self._items = [np.zeros(self.item_size) for _ in range(self.size)]
        self._index = 0

    def push(self, item: Sequence[float]) -> None:
        """Overwrite the oldest slot with ``item``."""
        values = np.array(item, dtype=float).reshape(-1)
        if values.shape[0] != self.item_size:
            raise ValueError(f"Expected an item of size {self.item_size}, got {values.shape[0]}")
        self._items[self._index] = values
        self._index = (self._index + 1) % self.size

    def ordered(self) -> np.ndarray:
        """Buffer contents flattened, starting from the most recent item."""
        start = (self._index - 1) % self.size
        return np.concatenate([self._items[(start + i) % self.size] for i in range(self.size)])


def _quaternion_to_matrix(xyzw: Sequence[float]) -> np.ndarray:
    x, y, z, w = (float(v) for v in xyzw)
    norm = math.sqrt(x * x + y * y + z * z + w * w)
    x, y, z, w = x / norm, y / norm, z / norm, w / norm
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
            [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
            [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
        ]
    )


def _yaw_from_matrix(rotation: np.ndarray) -> float:
    pitch = math.atan2(-rotation[2, 0], math.hypot(rotation[2, 1], rotation[2, 2]))
    if abs(abs(pitch) - math.pi / 2) < 1e-3:
        return math.atan2(-rotation[0, 1], rotation[1, 1])
    return math.atan2(rotation[1, 0], rotation[0, 0])


def sample_footholds(state: State, sampling_positions: np.ndarray) -> np.ndarray:
    """Sampling pattern rotated by base yaw and placed around each foot.

    Returns a 3x(4N) matrix with blocks for the LF, LH, RF and RH feet.
    """
    pattern = np.asarray(sampling_positions, dtype=float)
    yaw = _yaw_from_matrix(_quaternion_to_matrix(state.base_orientation_world))
    c, s = math.cos(yaw), math.sin(yaw)
    rotation = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
    rotated = rotation @ pattern

    feet = (
        state.lf_foot_position_world,
        state.lh_foot_position_world,
        state.rf_foot_position_world,
        state.rh_foot_position_world,
    )
    blocks = []
    for foot in feet:
        block = rotated.copy()
        block[0] += float(foot[0])
        block[1] += float(foot[1])
        blocks.append(block)
    return np.hstack(blocks)


def height_observation(sampled: np.ndarray, base_height: float, scale: float) -> np.ndarray:
    """Clamped base-relative heights from the terrain heights in row 2 of ``sampled``."""
    heights = np.asarray(sampled, dtype=float)[2]
    relative = (base_height - heights) - 0.5
    return (np.clip(relative, -1.0, 1.0) * scale).astype(np.float32)
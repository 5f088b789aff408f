"""Robot state container and sphere markers for sampled terrain heights."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import numpy as np

_MARKER_SIZE = 0.03
_LEGS = 4
_GROUND_TRUTH_RGB = (1.0, 0.0, 0.0)
_RECONSTRUCTED_RGB = (0.0, 0.0, 1.0)


def _zeros(n: int) -> Callable[[], np.ndarray]:
    return lambda: np.zeros(n)


@dataclass
class State:
    """Robot state used by the learned controller.

    The base orientation is an xyzw quaternion. Base velocities are in the
    base frame. Foot positions are in the world frame.
    """

    base_position_world: np.ndarray = field(default_factory=_zeros(3))
    base_orientation_world: np.ndarray = field(
        default_factory=lambda: np.array([0.0, 0.0, 0.0, 1.0])
    )
    base_linear_velocity_base: np.ndarray = field(default_factory=_zeros(3))
    base_angular_velocity_base: np.ndarray = field(default_factory=_zeros(3))
    normalized_gravity_base: np.ndarray = field(
        default_factory=lambda: np.array([0.0, 0.0, -1.0])
    )
    joint_positions: np.ndarray = field(default_factory=_zeros(12))
    joint_velocities: np.ndarray = field(default_factory=_zeros(12))
    lf_foot_position_world: np.ndarray = field(default_factory=_zeros(3))
    lh_foot_position_world: np.ndarray = field(default_factory=_zeros(3))
    rf_foot_position_world: np.ndarray = field(default_factory=_zeros(3))
    rh_foot_position_world: np.ndarray = field(default_factory=_zeros(3))


@dataclass(frozen=True)
class Marker:
    """A sphere marker placed at a point in the given frame."""

    frame_id: str
    namespace: str
    id: int
    position: tuple[float, float, float]
    color: tuple[float, float, float, float]
    scale: tuple[float, float, float] = (_MARKER_SIZE, _MARKER_SIZE, _MARKER_SIZE)
    orientation: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
    shape: str = "sphere"
    action: str = "add"


def build_markers(
    sampled: np.ndarray,
    rgb: Sequence[float],
    prefix: str,
    odom_frame: str,
    height_function: Callable[[int], float],
) -> list[Marker]:
    """Sphere markers for a 3xN point matrix split evenly over four legs.

    Each marker takes x and y from ``sampled`` and z from ``height_function``
    called with the point's column index.
    """
    points = np.asarray(sampled, dtype=float)
    points_per_leg = points.shape[1] // _LEGS
    r, g, b = (float(c) for c in rgb)
    markers = []
    for leg in range(_LEGS):
        namespace = f"{prefix}{leg}"
        for column in range(leg * points_per_leg, (leg + 1) * points_per_leg):
            markers.append(
                Marker(
                    frame_id=odom_frame,
                    namespace=namespace,
                    id=column,
                    position=(
                        float(points[0, column]),
                        float(points[1, column]),
                        float(height_function(column)),
                    ),
                    color=(r, g, b, 1.0),
                )
            )
    return markers


def height_markers(
    state: State,
    sampled: np.ndarray,
    reconstructed: Sequence[float],
    odom_frame: str,
    blind: bool,
) -> list[Marker]:
    """Markers for measured (unless blind) and reconstructed terrain heights."""
    points = np.asarray(sampled, dtype=float)
    values = np.asarray(reconstructed, dtype=np.float32)
    base_z = float(state.base_position_world[2])

    markers: list[Marker] = []
    if not blind:
        markers.extend(
            build_markers(
                points,
                _GROUND_TRUTH_RGB,
                "ground_truth",
                odom_frame,
                lambda i: -(points[2, i] / 1.0 + 0.5 - base_z),
            )
        )
    markers.extend(
        build_markers(
            points,
            _RECONSTRUCTED_RGB,
            "nn_reconstructed",
            odom_frame,
            lambda i: float(np.float32(-(values[i] / 1.0 + 0.5 - base_z))),
        )
    )
    return markers
"""Static stand/sit controller that blends between fixed joint poses."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

_JOINT_SLICE = slice(12, 24)
_SUPPORTED = ("STAND", "SIT")


@dataclass(frozen=True)
class JointCommand:
    """PD command for a single joint."""

    joint_name: str
    desired_position: float
    kp: float
    kd: float
    desired_velocity: float = 0.0
    torque_ff: float = 0.0


def pack_commands(
    joint_names: Sequence[str], joint_angles: Sequence[float], kp: float, kd: float
) -> list[JointCommand]:
    """Pair joint names with desired angles into PD commands."""
    return [
        JointCommand(joint_name=name, desired_position=float(angle), kp=kp, kd=kd)
        for name, angle in zip(joint_names, joint_angles, strict=True)
    ]


class StaticController:
    """Holds the robot standing or sitting, interpolating on every switch."""

    def __init__(
        self,
        state_provider: Callable[[], Sequence[float]],
        kp: float,
        kd: float,
        rate: float,
        stand_joint_angles: Sequence[float],
        sit_joint_angles: Sequence[float],
        joint_names: Sequence[str],
        interpolation_time: float,
    ) -> None:
        self.state_provider = state_provider
        self.kp = float(kp)
        self.kd = float(kd)
        self._rate = float(rate)
        self.stand_joint_angles = np.asarray(stand_joint_angles, dtype=float)
        self.sit_joint_angles = np.asarray(sit_joint_angles, dtype=float)
        self.joint_names = list(joint_names)
        self.interpolation_time = float(interpolation_time)
        self.controller_type = "SIT"
        self._alpha: float | None = None
        self._interp_from = self.sit_joint_angles
        self._interp_to = self.sit_joint_angles

    @classmethod
    def from_config(
        cls, config: Mapping[str, Any], state_provider: Callable[[], Sequence[float]]
    ) -> StaticController:
        """Build a controller from configuration values."""
        return cls(
            state_provider,
            kp=float(_lookup(config, "static_controller/kp")),
            kd=float(_lookup(config, "static_controller/kd")),
            rate=float(_lookup(config, "static_controller/rate")),
            stand_joint_angles=_lookup(config, "static_controller/stand_controller/joint_angles"),
            sit_joint_angles=_lookup(config, "static_controller/sit_controller/joint_angles"),
            joint_names=_lookup(config, "joint_names"),
            interpolation_time=float(_lookup(config, "static_controller/interpolation_time")),
        )

    @property
    def interpolating(self) -> bool:
        """Whether a transition between poses is still in progress."""
        return self._alpha is not None

    def command(self, current_time: float, dt: float) -> list[JointCommand]:
        """Joint commands for the current control step."""
        if self._alpha is not None:
            return self._interpolated_command(dt)
        if self.controller_type == "STAND":
            return self._pack(self.stand_joint_angles)
        if self.controller_type == "SIT":
            return self._pack(self.sit_joint_angles)
        raise ValueError(f"Unsupported controller type: {self.controller_type}")

    def change_controller(self, controller_type: str, current_time: float) -> None:
        """Start interpolating from the measured joints towards the new pose."""
        if controller_type == "STAND":
            target = self.stand_joint_angles
        elif controller_type == "SIT":
            target = self.sit_joint_angles
        else:
            raise ValueError(f"Unsupported controller type: {controller_type}")
        state = np.asarray(self.state_provider(), dtype=float)
        self.controller_type = controller_type
        self._alpha = 0.0
        self._interp_from = state[_JOINT_SLICE].copy()
        self._interp_to = target

    def is_supported(self, controller_type: str) -> bool:
        """Whether this controller handles ``controller_type``."""
        return controller_type in _SUPPORTED

    def rate(self) -> float:
        """Rate in Hz at which the controller should run."""
        return self._rate

    def check_stability(self) -> bool:
        """The static poses are always considered stable."""
        return True

    def _interpolated_command(self, dt: float) -> list[JointCommand]:
        assert self._alpha is not None
        alpha = min(self._alpha + dt / self.interpolation_time, 1.0)
        angles = (1.0 - alpha) * self._interp_from + alpha * self._interp_to
        self._alpha = None if alpha == 1.0 else alpha
        return self._pack(angles)

    def _pack(self, angles: Sequence[float]) -> list[JointCommand]:
        return pack_commands(self.joint_names, angles, self.kp, self.kd)


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
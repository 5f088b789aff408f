"""Reference velocity commands for the locomotion controllers."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ReferenceVelocity:
    """Desired base velocity: linear x/y in m/s and yaw rate in rad/s."""

    velocity_x: float = 0.0
    velocity_y: float = 0.0
    yaw_rate: float = 0.0


class ReferenceVelocityGenerator(ABC):
    """Source of reference velocities for a controller."""

    @abstractmethod
    def reference_velocity(self, time: float, dt: float) -> ReferenceVelocity:
        """Return the reference velocity at ``time``, ``dt`` after the last call."""


def _ramp(current: float, desired: float, max_step: float) -> float:
    diff = desired - current
    return current + math.copysign(1.0, 1.0 if diff >= 0 else -1.0) * min(abs(diff), max_step)


class JoystickReferenceVelocityGenerator(ReferenceVelocityGenerator):
    """Reference from joystick axes, ramped towards the stick command."""

    def __init__(
        self,
        ramped_velocity: float,
        x_index: int = 0,
        y_index: int = 1,
        yaw_index: int = 2,
        x_scale: float = 1.0,
        y_scale: float = 1.0,
        yaw_scale: float = 1.0,
        topic: str | None = None,
    ) -> None:
        self.ramped_velocity = ramped_velocity
        self.x_index = x_index
        self.y_index = y_index
        self.yaw_index = yaw_index
        self.x_scale = x_scale
        self.y_scale = y_scale
        self.yaw_scale = yaw_scale
        self.topic = topic
        self._reference = ReferenceVelocity()
        self._desired = ReferenceVelocity()

    def on_joy(self, axes: Sequence[float]) -> None:
        """Take a new set of joystick axes as the desired velocity."""
        self._desired = ReferenceVelocity(
            axes[self.x_index] * self.x_scale,
            axes[self.y_index] * self.y_scale,
            axes[self.yaw_index] * self.yaw_scale,
        )

    def reference_velocity(self, time: float, dt: float) -> ReferenceVelocity:
        max_step = self.ramped_velocity * dt
        self._reference = ReferenceVelocity(
            _ramp(self._reference.velocity_x, self._desired.velocity_x, max_step),
            _ramp(self._reference.velocity_y, self._desired.velocity_y, max_step),
            _ramp(self._reference.yaw_rate, self._desired.yaw_rate, max_step),
        )
        return self._reference


class TwistReferenceVelocityGenerator(ReferenceVelocityGenerator):
    """Reference taken directly from the latest twist message."""

    def __init__(self, topic: str | None = None) -> None:
        self.topic = topic
        self._reference = ReferenceVelocity()

    def on_twist(self, linear_x: float, linear_y: float, angular_z: float) -> None:
        """Take a twist as the new reference."""
        self._reference = ReferenceVelocity(linear_x, linear_y, angular_z)

    def reference_velocity(self, time: float, dt: float) -> ReferenceVelocity:
        return self._reference


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


def make_reference_generator(config: Mapping[str, Any]) -> ReferenceVelocityGenerator:
    """Build a reference generator from configuration values."""
    kind = _lookup(config, "reference_generator/type")
    if kind == "joystick":
        prefix = "reference_generator/joystick/"
        return JoystickReferenceVelocityGenerator(
            float(_lookup(config, prefix + "ramped_velocity")),
            x_index=int(_lookup(config, prefix + "x_index")),
            y_index=int(_lookup(config, prefix + "y_index")),
            yaw_index=int(_lookup(config, prefix + "yaw_index")),
            x_scale=float(_lookup(config, prefix + "x_scale")),
            y_scale=float(_lookup(config, prefix + "y_scale")),
            yaw_scale=float(_lookup(config, prefix + "yaw_scale")),
            topic=str(_lookup(config, prefix + "topic")),
        )
    if kind == "twist":
        return TwistReferenceVelocityGenerator(
            topic=str(_lookup(config, "reference_generator/twist/topic"))
        )
    raise ValueError("Unknown reference generator type")
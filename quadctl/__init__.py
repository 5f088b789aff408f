"""Quadruped locomotion building blocks: reference velocities, gait patterns, static posture control and policy observations."""

__version__ = "0.1.0"
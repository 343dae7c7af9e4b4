"""Steering engine: per-agent controller and scene tick driver."""

from steerengine.engine.simulation import run_scene, tick_scene
from steerengine.engine.steering import (
    SteeringController,
    SteeringResult,
    apply_steering,
    arrive_factor,
    desired_velocity,
    resolve_motion_state,
    step,
)

__all__ = [
    "SteeringController",
    "SteeringResult",
    "apply_steering",
    "arrive_factor",
    "desired_velocity",
    "resolve_motion_state",
    "run_scene",
    "step",
    "tick_scene",
]

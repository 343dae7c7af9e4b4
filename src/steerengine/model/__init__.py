"""Domain model: Vector2, steering configuration, agents and scenes."""

from steerengine.model.kinematics import (
    AgentKinematics,
    Behavior,
    ConfigurationError,
    MotionState,
    SteeringParameters,
)
from steerengine.model.scene import Scene, SteeringAgent
from steerengine.model.vector import Vector2

__all__ = [
    "AgentKinematics",
    "Behavior",
    "ConfigurationError",
    "MotionState",
    "Scene",
    "SteeringAgent",
    "SteeringParameters",
    "Vector2",
]

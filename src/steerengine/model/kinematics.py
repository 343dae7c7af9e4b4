"""Steering data model: behaviors, motion states, kinematics and parameters."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from steerengine.model.vector import Vector2


class ConfigurationError(ValueError):
    """Exception raised when steering configuration is invalid."""

    pass


class Behavior(Enum):
    """Steering policy selected by the agent's owner."""

    IDLE = "idle"
    SEEK = "seek"
    EVADE = "evade"
    FLEE = "flee"


class MotionState(Enum):
    """Display state derived each tick. Never fed back into the next tick."""

    IDLE = "idle"
    ARRIVE = "arrive"
    SEEK = "seek"
    EVADE = "evade"
    FLEE = "flee"

    @property
    def display_text(self) -> str:
        """Upper-case label shown above the agent."""
        return self.name


@dataclass
class AgentKinematics:
    """Position and velocity of an agent's physics body."""

    position: Vector2 = field(default_factory=Vector2.zero)
    velocity: Vector2 = field(default_factory=Vector2.zero)


@dataclass(frozen=True)
class SteeringParameters:
    """Configuration for a steering controller. Immutable during a run."""

    max_speed: float = 4.0  # Speed clamp applied after every tick
    deceleration_factor: float = 0.75  # Velocity multiplier while braking
    arrive_radius: float = 1.2  # Below this the approach is smoothed
    stop_radius: float = 0.5  # Below this the agent brakes to rest
    evade_radius: float = 5.0  # Trigger radius for Evade
    flee_radius: float = 5.0  # Trigger radius for Flee

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate parameter ranges.

        Raises:
            ConfigurationError: If any parameter is out of range.
        """
        for name in (
            "max_speed",
            "deceleration_factor",
            "arrive_radius",
            "stop_radius",
            "evade_radius",
            "flee_radius",
        ):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be a finite number, got {value!r}")

        if self.max_speed <= 0:
            raise ConfigurationError(f"max_speed must be positive, got {self.max_speed}")
        if not 0 < self.deceleration_factor < 1:
            raise ConfigurationError(
                f"deceleration_factor must be in (0, 1), got {self.deceleration_factor}"
            )
        if self.stop_radius < 0:
            raise ConfigurationError(f"stop_radius must be >= 0, got {self.stop_radius}")
        if self.arrive_radius <= self.stop_radius:
            raise ConfigurationError(
                f"arrive_radius ({self.arrive_radius}) must be greater than "
                f"stop_radius ({self.stop_radius})"
            )
        if self.evade_radius < 0:
            raise ConfigurationError(f"evade_radius must be >= 0, got {self.evade_radius}")
        if self.flee_radius < 0:
            raise ConfigurationError(f"flee_radius must be >= 0, got {self.flee_radius}")

    def trigger_radius(self, behavior: Behavior) -> float | None:
        """Get the trigger radius gating a behavior, if it has one."""
        if behavior == Behavior.EVADE:
            return self.evade_radius
        if behavior == Behavior.FLEE:
            return self.flee_radius
        return None

"""Configuration loading for steering settings.

Pydantic-based settings loaded from environment variables (prefix ``STEER_``)
and an optional .env file.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from steerengine.model.kinematics import Behavior, SteeringParameters

logger = logging.getLogger(__name__)


class SteeringSettings(BaseSettings):
    """Steering configuration.

    Environment Variables:
        STEER_MAX_SPEED: Speed clamp (default: 4.0)
        STEER_DECELERATION_FACTOR: Braking multiplier in (0, 1) (default: 0.75)
        STEER_ARRIVE_RADIUS: Radius where arrival smoothing starts (default: 1.2)
        STEER_STOP_RADIUS: Radius where the agent brakes to rest (default: 0.5)
        STEER_EVADE_RADIUS: Evade trigger radius (default: 5.0)
        STEER_FLEE_RADIUS: Flee trigger radius (default: 5.0)
        STEER_FIXED_DELTA_TIME: Fixed physics step in seconds (default: 0.02)
        STEER_DEFAULT_BEHAVIOR: Behavior for new agents (default: seek)

    Example:
        >>> settings = SteeringSettings()  # Loads from environment
        >>> params = settings.to_parameters()
    """

    model_config = SettingsConfigDict(
        env_prefix="STEER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_speed: float = Field(default=4.0, gt=0, description="Maximum speed")
    deceleration_factor: float = Field(
        default=0.75,
        gt=0.0,
        lt=1.0,
        description="Velocity multiplier applied while braking",
    )
    arrive_radius: float = Field(default=1.2, gt=0, description="Arrival smoothing radius")
    stop_radius: float = Field(default=0.5, ge=0, description="Stop radius")
    evade_radius: float = Field(default=5.0, ge=0, description="Evade trigger radius")
    flee_radius: float = Field(default=5.0, ge=0, description="Flee trigger radius")

    fixed_delta_time: float = Field(
        default=0.02,
        gt=0,
        le=1.0,
        description="Fixed physics step in seconds",
    )
    default_behavior: Behavior = Field(
        default=Behavior.SEEK,
        description="Behavior assigned to new agents",
    )

    @field_validator("default_behavior", mode="before")
    @classmethod
    def normalize_behavior(cls, v: Any) -> Behavior:
        """Normalize behavior string to enum."""
        if isinstance(v, str):
            return Behavior(v.strip().lower())
        return v

    @model_validator(mode="after")
    def check_radii(self) -> SteeringSettings:
        """Validate arrive_radius > stop_radius."""
        if self.arrive_radius <= self.stop_radius:
            raise ValueError(
                f"arrive_radius ({self.arrive_radius}) must be greater than "
                f"stop_radius ({self.stop_radius})"
            )
        return self

    def to_parameters(self) -> SteeringParameters:
        """Build SteeringParameters from these settings."""
        return SteeringParameters(
            max_speed=self.max_speed,
            deceleration_factor=self.deceleration_factor,
            arrive_radius=self.arrive_radius,
            stop_radius=self.stop_radius,
            evade_radius=self.evade_radius,
            flee_radius=self.flee_radius,
        )


@lru_cache
def get_steering_settings() -> SteeringSettings:
    """Get cached steering settings singleton.

    To reload configuration, call get_steering_settings.cache_clear() first.
    """
    settings = SteeringSettings()
    logger.info("Loaded steering settings: %s", settings)
    return settings

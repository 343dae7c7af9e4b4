"""API endpoints for stateless steering evaluation.

The caller supplies everything a tick needs (kinematics, target, behavior,
optional parameters and dt) and gets back the new velocity and display
state. Nothing is stored between requests.
"""

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from steerengine.config import get_steering_settings
from steerengine.engine.steering import step
from steerengine.model import (
    AgentKinematics,
    Behavior,
    ConfigurationError,
    SteeringParameters,
    Vector2,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/steering", tags=["steering"])


class VectorModel(BaseModel):
    """A 2D vector in request/response bodies."""

    x: float = Field(default=0.0, allow_inf_nan=False, description="X component")
    y: float = Field(default=0.0, allow_inf_nan=False, description="Y component")

    def to_vector(self) -> Vector2:
        """Convert to a Vector2."""
        return Vector2(self.x, self.y)

    @classmethod
    def from_vector(cls, v: Vector2) -> "VectorModel":
        """Build from a Vector2."""
        return cls(x=v.x, y=v.y)


class ParametersOverride(BaseModel):
    """Steering parameters. Omitted fields fall back to configured settings."""

    max_speed: float | None = Field(default=None, description="Maximum speed")
    deceleration_factor: float | None = Field(default=None, description="Braking multiplier")
    arrive_radius: float | None = Field(default=None, description="Arrival smoothing radius")
    stop_radius: float | None = Field(default=None, description="Stop radius")
    evade_radius: float | None = Field(default=None, description="Evade trigger radius")
    flee_radius: float | None = Field(default=None, description="Flee trigger radius")

    def resolve(self, base: SteeringParameters) -> SteeringParameters:
        """Merge explicit values over the base parameters.

        Raises:
            ConfigurationError: If the merged parameters are invalid.
        """
        values = {
            "max_speed": base.max_speed,
            "deceleration_factor": base.deceleration_factor,
            "arrive_radius": base.arrive_radius,
            "stop_radius": base.stop_radius,
            "evade_radius": base.evade_radius,
            "flee_radius": base.flee_radius,
        }
        values.update(self.model_dump(exclude_none=True))
        return SteeringParameters(**values)


class StepRequest(BaseModel):
    """Request body for one steering tick.

    Attributes:
        behavior: Behavior to evaluate.
        position: Agent position.
        velocity: Agent velocity carried over from the previous tick.
        target: Target position; omit or null for no target.
        parameters: Optional parameter overrides.
        dt: Tick duration; defaults to the configured fixed step.
    """

    behavior: Behavior = Field(description="Behavior to evaluate")
    position: VectorModel = Field(default_factory=VectorModel, description="Agent position")
    velocity: VectorModel = Field(default_factory=VectorModel, description="Agent velocity")
    target: VectorModel | None = Field(default=None, description="Target position")
    parameters: ParametersOverride | None = Field(default=None, description="Parameter overrides")
    dt: float | None = Field(default=None, description="Tick duration in seconds")


class StepResponse(BaseModel):
    """Response body for one steering tick."""

    velocity: VectorModel = Field(description="New velocity, clamped to max_speed")
    motion_state: str = Field(description="Motion state applied this tick")
    display_text: str = Field(description="Upper-case motion state label")
    distance: float | None = Field(description="Distance to target, null without a target")


@router.post(
    "/step",
    response_model=StepResponse,
    responses={
        200: {"description": "Tick evaluated"},
        400: {"description": "Invalid steering configuration or dt"},
        422: {"description": "Malformed request body"},
    },
)
async def evaluate_step(request: StepRequest) -> StepResponse:
    """Evaluate one steering tick.

    Raises:
        HTTPException: 400 if the parameters or dt are invalid.
    """
    settings = get_steering_settings()
    dt = request.dt if request.dt is not None else settings.fixed_delta_time

    try:
        params = settings.to_parameters()
        if request.parameters is not None:
            params = request.parameters.resolve(params)
        kinematics = AgentKinematics(
            position=request.position.to_vector(),
            velocity=request.velocity.to_vector(),
        )
        target = request.target.to_vector() if request.target is not None else None
        result = step(params, request.behavior, kinematics, target, dt)
    except ConfigurationError as e:
        logger.warning("Rejected steering request: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    return StepResponse(
        velocity=VectorModel.from_vector(result.velocity),
        motion_state=result.motion_state.value,
        display_text=result.motion_state.display_text,
        distance=kinematics.position.distance_to(target) if target is not None else None,
    )

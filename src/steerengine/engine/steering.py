"""Steering controller: maps behavior, distance and velocity to a new velocity.

One pass per physics tick:
1. No target - brake, display Idle
2. Behavior dispatch - steering vector toward (Seek) or away from (Evade/Flee)
   the target; Idle and out-of-radius Evade/Flee brake instead
3. Motion state from distance thresholds, overriding the behavior
4. Velocity change for that state (brake, ramped arrive, or full strength)
5. Clamp to max_speed

Nothing is remembered between ticks. The velocity passed in is the only
carried-forward state and it belongs to the caller.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from steerengine.model.kinematics import (
    AgentKinematics,
    Behavior,
    ConfigurationError,
    MotionState,
    SteeringParameters,
)
from steerengine.model.vector import Vector2

logger = logging.getLogger(__name__)

# Smoothing floor at the stop radius so an arriving agent never stalls completely
ARRIVE_FACTOR_FLOOR = 0.01


@dataclass(frozen=True)
class SteeringResult:
    """Output of one steering tick."""

    velocity: Vector2
    motion_state: MotionState


def desired_velocity(position: Vector2, target: Vector2, max_speed: float) -> Vector2:
    """Velocity pointing straight at the target at full speed.

    Zero when the target sits exactly on the agent.
    """
    return (target - position).normalized() * max_speed


def seek_steering(kinematics: AgentKinematics, target: Vector2, max_speed: float) -> Vector2:
    """Velocity change that turns the current velocity into the desired one."""
    return desired_velocity(kinematics.position, target, max_speed) - kinematics.velocity


def resolve_motion_state(
    params: SteeringParameters,
    behavior: Behavior,
    distance: float,
) -> MotionState:
    """Derive the motion state from distance thresholds.

    Thresholds override the behavior: inside stop_radius the agent is Idle,
    inside arrive_radius it is Arriving. Beyond that, any active behavior
    other than Seek displays as Evade, Flee included.
    """
    if distance < params.stop_radius:
        return MotionState.IDLE
    if distance < params.arrive_radius:
        return MotionState.ARRIVE
    if behavior == Behavior.IDLE:
        return MotionState.IDLE
    if behavior == Behavior.SEEK:
        return MotionState.SEEK
    return MotionState.EVADE


def arrive_factor(params: SteeringParameters, distance: float) -> float:
    """Steering strength ramp between stop_radius (~0.01) and arrive_radius (~1.0)."""
    return ARRIVE_FACTOR_FLOOR + (distance - params.stop_radius) / (
        params.arrive_radius - params.stop_radius
    )


def brake(params: SteeringParameters, velocity: Vector2) -> Vector2:
    """Scale velocity toward rest by the deceleration factor."""
    return velocity * params.deceleration_factor


def apply_steering(
    params: SteeringParameters,
    behavior: Behavior,
    velocity: Vector2,
    steering: Vector2,
    distance: float,
    dt: float,
) -> SteeringResult:
    """Apply a steering vector according to the distance-derived motion state.

    Returns the unclamped velocity and the state that was applied.
    """
    state = resolve_motion_state(params, behavior, distance)

    if state == MotionState.IDLE:
        new_velocity = brake(params, velocity)
    elif state == MotionState.ARRIVE:
        new_velocity = velocity + steering * (arrive_factor(params, distance) * dt)
    else:
        new_velocity = velocity + steering * dt

    return SteeringResult(new_velocity, state)


def _select_steering(
    params: SteeringParameters,
    behavior: Behavior,
    kinematics: AgentKinematics,
    target: Vector2,
    distance: float,
) -> Vector2 | None:
    """Pick the steering vector for a behavior. None means brake."""
    if behavior == Behavior.SEEK:
        return seek_steering(kinematics, target, params.max_speed)

    radius = params.trigger_radius(behavior)
    if radius is not None and distance < radius:
        # Away from the target: the negated seek vector
        return -seek_steering(kinematics, target, params.max_speed)

    return None


def validate_dt(dt: float) -> None:
    """Check a tick duration.

    Raises:
        ConfigurationError: If dt is not a positive finite number.
    """
    if not math.isfinite(dt) or dt <= 0:
        raise ConfigurationError(f"dt must be a positive finite number, got {dt!r}")


def _validate_inputs(kinematics: AgentKinematics, target: Vector2 | None) -> None:
    """Reject NaN or infinite kinematics and target."""
    vectors = {"position": kinematics.position, "velocity": kinematics.velocity}
    if target is not None:
        vectors["target"] = target
    for name, vector in vectors.items():
        if not vector.is_finite():
            raise ConfigurationError(f"{name} must be finite, got {vector!r}")


def step(
    params: SteeringParameters,
    behavior: Behavior,
    kinematics: AgentKinematics,
    target: Vector2 | None,
    dt: float,
) -> SteeringResult:
    """Compute one tick of steering.

    Args:
        params: Steering parameters
        behavior: Selected behavior for this tick
        kinematics: Agent position and current velocity (not mutated)
        target: Target position, or None when there is no target
        dt: Fixed tick duration in seconds

    Returns:
        SteeringResult with the new velocity (clamped to max_speed) and the
        motion state to display

    Raises:
        ConfigurationError: If dt is not positive, or any input vector is
            NaN or infinite
    """
    validate_dt(dt)
    _validate_inputs(kinematics, target)

    if target is None:
        result = SteeringResult(brake(params, kinematics.velocity), MotionState.IDLE)
    else:
        distance = kinematics.position.distance_to(target)
        steering = _select_steering(params, behavior, kinematics, target, distance)
        if steering is None:
            result = SteeringResult(brake(params, kinematics.velocity), MotionState.IDLE)
        else:
            result = apply_steering(
                params, behavior, kinematics.velocity, steering, distance, dt
            )

    return SteeringResult(result.velocity.clamp(params.max_speed), result.motion_state)


class SteeringController:
    """Per-agent steering controller.

    Holds configuration only. The behavior may be changed between ticks;
    parameters and dt are fixed for the controller's lifetime.
    """

    def __init__(
        self,
        params: SteeringParameters | None = None,
        behavior: Behavior = Behavior.SEEK,
        dt: float = 0.02,
    ) -> None:
        """Initialize the controller.

        Args:
            params: Steering parameters (defaults if None)
            behavior: Initial behavior
            dt: Fixed tick duration in seconds

        Raises:
            ConfigurationError: If dt is not positive
        """
        validate_dt(dt)
        self.params = params if params is not None else SteeringParameters()
        self.behavior = behavior
        self.dt = dt
        logger.debug(
            "Steering controller created: behavior=%s, dt=%s, params=%s",
            behavior.value,
            dt,
            self.params,
        )

    def step(self, kinematics: AgentKinematics, target: Vector2 | None) -> SteeringResult:
        """Compute one tick for the current behavior."""
        return step(self.params, self.behavior, kinematics, target, self.dt)

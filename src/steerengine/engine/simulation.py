"""Scene tick driver: runs every agent's steering controller for one fixed step."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from steerengine.engine.steering import step, validate_dt

if TYPE_CHECKING:
    from steerengine.model.scene import Scene
    from steerengine.model.vector import Vector2

logger = logging.getLogger(__name__)


def tick_scene(scene: Scene) -> None:
    """Execute one simulation tick.

    Tick sequence:
    1. Snapshot every agent's target position
    2. Step each agent's controller, write the velocity back
    3. Integrate positions (position += velocity * dt)
    4. Increment scene.tick and scene.time

    Targets are resolved before any agent moves, so the outcome does not
    depend on agent iteration order.

    Args:
        scene: The scene to advance

    Side effects:
        - Mutates agent kinematics and motion_state
        - Mutates scene.tick and scene.time

    Raises:
        ConfigurationError: If scene.dt is not positive
    """
    validate_dt(scene.dt)

    # 1. Snapshot targets
    targets = _snapshot_targets(scene)

    # 2. Steer
    _steer_all_agents(scene, targets)

    # 3. Integrate
    _integrate_positions(scene)

    # 4. Advance clock
    scene.tick += 1
    scene.time += scene.dt

    # Debug log every 100 ticks to avoid log spam
    if scene.tick % 100 == 0:
        logger.debug(
            "Scene tick %d: agents=%d, time=%.2fs",
            scene.tick,
            len(scene.agents),
            scene.time,
        )


def _snapshot_targets(scene: Scene) -> dict[str, Vector2 | None]:
    """Resolve every agent's target position before anyone moves."""
    return {agent_id: scene.resolve_target(agent) for agent_id, agent in scene.agents.items()}


def _steer_all_agents(scene: Scene, targets: dict[str, Vector2 | None]) -> None:
    """Run the steering step for each agent and write back the result."""
    for agent_id, agent in scene.agents.items():
        result = step(
            scene.parameters_for(agent),
            agent.behavior,
            agent.kinematics,
            targets[agent_id],
            scene.dt,
        )

        if result.motion_state != agent.motion_state:
            logger.debug(
                "Agent '%s' state %s -> %s at tick %d",
                agent_id,
                agent.motion_state.display_text,
                result.motion_state.display_text,
                scene.tick,
            )

        agent.kinematics.velocity = result.velocity
        agent.motion_state = result.motion_state


def _integrate_positions(scene: Scene) -> None:
    """Move each kinematic body along its velocity."""
    for agent in scene.agents.values():
        kinematics = agent.kinematics
        kinematics.position = kinematics.position + kinematics.velocity * scene.dt


def run_scene(scene: Scene, ticks: int) -> None:
    """Advance a scene by a number of ticks."""
    for _ in range(ticks):
        tick_scene(scene)

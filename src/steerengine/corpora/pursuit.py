"""The Pursuit corpus: four agents around a fixed beacon.

- seeker seeks the beacon and settles inside its stop radius
- evader and fleer both react to the seeker once it comes within range
- drifter starts moving with Idle behavior and coasts to rest
"""

from __future__ import annotations

from steerengine.model import (
    AgentKinematics,
    Behavior,
    Scene,
    SteeringAgent,
    SteeringParameters,
    Vector2,
)

BEACON = "beacon"


def create_markers() -> dict[str, Vector2]:
    """Create the fixed target markers."""
    return {BEACON: Vector2(0.0, 0.0)}


def create_agents() -> dict[str, SteeringAgent]:
    """Create the four pursuit agents keyed by id."""
    agents = [
        SteeringAgent(
            id="seeker",
            name="Seeker",
            behavior=Behavior.SEEK,
            target_id=BEACON,
            kinematics=AgentKinematics(position=Vector2(-8.0, 3.0)),
        ),
        SteeringAgent(
            id="evader",
            name="Evader",
            behavior=Behavior.EVADE,
            target_id="seeker",
            kinematics=AgentKinematics(position=Vector2(-2.0, 2.0)),
        ),
        SteeringAgent(
            id="fleer",
            name="Fleer",
            behavior=Behavior.FLEE,
            target_id="seeker",
            kinematics=AgentKinematics(position=Vector2(1.0, -2.0)),
        ),
        SteeringAgent(
            id="drifter",
            name="Drifter",
            behavior=Behavior.IDLE,
            target_id=BEACON,
            kinematics=AgentKinematics(
                position=Vector2(4.0, 4.0),
                velocity=Vector2(3.0, 0.0),
            ),
        ),
    ]
    return {agent.id: agent for agent in agents}


def create_scene(
    parameters: SteeringParameters | None = None,
    dt: float = 0.02,
) -> Scene:
    """Create the complete Pursuit scene.

    Args:
        parameters: Scene-wide steering parameters (defaults if None)
        dt: Fixed step duration in seconds

    Returns:
        Scene: A fresh scene at tick 0.
    """
    return Scene(
        agents=create_agents(),
        markers=create_markers(),
        parameters=parameters if parameters is not None else SteeringParameters(),
        dt=dt,
    )

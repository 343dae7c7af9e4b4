"""Scene and SteeringAgent dataclasses: the host state a controller is driven from."""

from __future__ import annotations

from dataclasses import dataclass, field

from steerengine.model.kinematics import (
    AgentKinematics,
    Behavior,
    MotionState,
    SteeringParameters,
)
from steerengine.model.vector import Vector2


@dataclass
class SteeringAgent:
    """A steered body in the scene.

    The host owns the kinematics; the controller only reads them and returns
    a new velocity which the host writes back.
    """

    # Identity
    id: str
    name: str

    # Configuration
    behavior: Behavior = Behavior.SEEK
    target_id: str | None = None  # marker name or another agent's id
    parameters: SteeringParameters | None = None  # None = scene parameters

    # State
    kinematics: AgentKinematics = field(default_factory=AgentKinematics)
    motion_state: MotionState = MotionState.IDLE  # last displayed state


@dataclass
class Scene:
    """Container holding all host-side simulation state."""

    agents: dict[str, SteeringAgent] = field(default_factory=dict)  # id → SteeringAgent
    markers: dict[str, Vector2] = field(default_factory=dict)  # name → fixed target position

    parameters: SteeringParameters = field(default_factory=SteeringParameters)

    # Simulation clock
    dt: float = 0.02  # fixed step duration in seconds
    tick: int = 0
    time: float = 0.0

    def parameters_for(self, agent: SteeringAgent) -> SteeringParameters:
        """Get the parameters an agent is steered with."""
        return agent.parameters if agent.parameters is not None else self.parameters

    def resolve_target(self, agent: SteeringAgent) -> Vector2 | None:
        """Resolve an agent's target id to a position.

        Markers take precedence over agents. An agent never targets itself.
        Returns None when the agent has no target or the id is unknown.
        """
        if agent.target_id is None:
            return None
        if agent.target_id in self.markers:
            return self.markers[agent.target_id]
        other = self.agents.get(agent.target_id)
        if other is None or other.id == agent.id:
            return None
        return other.kinematics.position

"""Frame projector: Scene state to visual Frame for rendering.

Each Frame is a snapshot of the agents plus the debug gizmos drawn around
them: arrive and stop circles, the active behavior's trigger circle, and a
line to the target. Projection never changes the scene.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from steerengine.model.kinematics import Behavior

if TYPE_CHECKING:
    from steerengine.model.scene import Scene, SteeringAgent
    from steerengine.model.vector import Vector2


@dataclass
class AgentVisual:
    """Visual representation of an agent for rendering."""

    id: str
    name: str

    x: float
    y: float
    vx: float
    vy: float
    speed: float

    behavior: str
    motion_state: str
    display_text: str  # text label drawn on the agent
    color: str = "#4a90d9"


@dataclass
class CircleGizmo:
    """Debug wire circle centered on an agent."""

    agent_id: str
    kind: str  # "arrive", "stop", "evade", "flee"
    x: float
    y: float
    radius: float
    color: str


@dataclass
class LineGizmo:
    """Debug line from an agent to its target."""

    agent_id: str
    start: tuple[float, float]
    end: tuple[float, float]
    color: str = "#808080"  # Gray


@dataclass
class Frame:
    """A complete visual frame for rendering."""

    tick: int
    time: float

    agents: list[AgentVisual] = field(default_factory=list)
    circles: list[CircleGizmo] = field(default_factory=list)
    lines: list[LineGizmo] = field(default_factory=list)
    markers: dict[str, tuple[float, float]] = field(default_factory=dict)


# Motion state to agent fill color
STATE_COLORS: dict[str, str] = {
    "idle": "#95a5a6",  # Gray
    "arrive": "#f1c40f",  # Yellow
    "seek": "#2ecc71",  # Green
    "evade": "#e74c3c",  # Red
    "flee": "#3498db",  # Blue
}

# Gizmo kind to circle color
GIZMO_COLORS: dict[str, str] = {
    "arrive": "#ffffff",  # White
    "stop": "#00ff00",  # Green
    "evade": "#ff0000",  # Red
    "flee": "#0000ff",  # Blue
}


def project(scene: Scene) -> Frame:
    """Project Scene state into a visual Frame.

    Args:
        scene: The simulation scene

    Returns:
        Frame containing all visual elements for rendering
    """
    frame = Frame(tick=scene.tick, time=scene.time)

    for agent in scene.agents.values():
        frame.agents.append(_project_agent(agent))

        target = scene.resolve_target(agent)
        if target is None:
            continue  # Gizmos only make sense with a target
        frame.circles.extend(_project_circles(agent, scene))
        frame.lines.append(_project_line(agent, target))

    frame.markers = {name: pos.as_tuple() for name, pos in scene.markers.items()}

    return frame


def _project_agent(agent: SteeringAgent) -> AgentVisual:
    """Project a SteeringAgent into an AgentVisual."""
    position = agent.kinematics.position
    velocity = agent.kinematics.velocity

    return AgentVisual(
        id=agent.id,
        name=agent.name,
        x=position.x,
        y=position.y,
        vx=velocity.x,
        vy=velocity.y,
        speed=velocity.magnitude(),
        behavior=agent.behavior.value,
        motion_state=agent.motion_state.value,
        display_text=agent.motion_state.display_text,
        color=STATE_COLORS[agent.motion_state.value],
    )


def _project_circles(agent: SteeringAgent, scene: Scene) -> list[CircleGizmo]:
    """Build the radius circles drawn around an agent.

    Arrive and stop circles are always drawn; Evade and Flee add their
    trigger radius.
    """
    params = scene.parameters_for(agent)
    position = agent.kinematics.position

    radii = [("arrive", params.arrive_radius), ("stop", params.stop_radius)]
    trigger = params.trigger_radius(agent.behavior)
    if trigger is not None:
        kind = "evade" if agent.behavior == Behavior.EVADE else "flee"
        radii.append((kind, trigger))

    return [
        CircleGizmo(
            agent_id=agent.id,
            kind=kind,
            x=position.x,
            y=position.y,
            radius=radius,
            color=GIZMO_COLORS[kind],
        )
        for kind, radius in radii
    ]


def _project_line(agent: SteeringAgent, target: Vector2) -> LineGizmo:
    """Build the agent-to-target line."""
    return LineGizmo(
        agent_id=agent.id,
        start=agent.kinematics.position.as_tuple(),
        end=target.as_tuple(),
    )

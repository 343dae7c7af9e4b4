"""Tests for the scene tick driver."""

import logging

import pytest

from steerengine.corpora import create_scene
from steerengine.engine.simulation import run_scene, tick_scene
from steerengine.model import (
    AgentKinematics,
    Behavior,
    ConfigurationError,
    MotionState,
    Scene,
    SteeringAgent,
    SteeringParameters,
    Vector2,
)


def make_agent(
    agent_id: str,
    x: float = 0.0,
    y: float = 0.0,
    vx: float = 0.0,
    vy: float = 0.0,
    behavior: Behavior = Behavior.SEEK,
    target_id: str | None = None,
) -> SteeringAgent:
    """Create a test agent."""
    return SteeringAgent(
        id=agent_id,
        name=f"Agent {agent_id}",
        behavior=behavior,
        target_id=target_id,
        kinematics=AgentKinematics(position=Vector2(x, y), velocity=Vector2(vx, vy)),
    )


def make_scene(*agents: SteeringAgent, **markers: Vector2) -> Scene:
    """Create a scene holding the given agents and markers."""
    return Scene(agents={a.id: a for a in agents}, markers=dict(markers))


class TestTickScene:
    """Tests for tick_scene()."""

    def test_advances_clock(self):
        """Each tick increments tick and adds dt to time."""
        scene = make_scene()

        tick_scene(scene)
        tick_scene(scene)

        assert scene.tick == 2
        assert scene.time == pytest.approx(0.04)

    def test_writes_velocity_back_and_integrates_position(self):
        """The new velocity is stored and the body moves by velocity * dt."""
        agent = make_agent("a1", target_id="goal")
        scene = make_scene(agent, goal=Vector2(10.0, 0.0))

        tick_scene(scene)

        assert agent.kinematics.velocity.x == pytest.approx(0.08)
        assert agent.kinematics.position.x == pytest.approx(0.08 * 0.02)
        assert agent.motion_state == MotionState.SEEK

    def test_unknown_target_brakes(self):
        """An unresolvable target id behaves like no target."""
        agent = make_agent("a1", vx=2.0, target_id="ghost")
        scene = make_scene(agent)

        tick_scene(scene)

        assert agent.kinematics.velocity == Vector2(1.5, 0.0)
        assert agent.motion_state == MotionState.IDLE

    def test_behavior_unchanged_by_missing_target(self):
        """Losing the target does not rewrite the agent's configured behavior."""
        agent = make_agent("a1", behavior=Behavior.FLEE)
        scene = make_scene(agent)

        tick_scene(scene)

        assert agent.behavior == Behavior.FLEE

    def test_agent_parameters_override_scene(self):
        """An agent with its own parameters is clamped by its own max_speed."""
        agent = make_agent("a1", vx=3.0, behavior=Behavior.SEEK, target_id="goal")
        agent.parameters = SteeringParameters(max_speed=1.0)
        scene = make_scene(agent, goal=Vector2(50.0, 0.0))

        tick_scene(scene)

        assert agent.kinematics.velocity.magnitude() == pytest.approx(1.0)

    def test_result_independent_of_agent_order(self):
        """Targets are snapshotted, so iteration order does not matter."""

        def build(order: list[str]) -> Scene:
            agents = {
                "chaser": make_agent("chaser", x=0.0, target_id="runner"),
                "runner": make_agent(
                    "runner", x=3.0, behavior=Behavior.FLEE, target_id="chaser"
                ),
            }
            return make_scene(*(agents[name] for name in order))

        forward = build(["chaser", "runner"])
        backward = build(["runner", "chaser"])
        for _ in range(5):
            tick_scene(forward)
            tick_scene(backward)

        for agent_id in ("chaser", "runner"):
            assert (
                forward.agents[agent_id].kinematics == backward.agents[agent_id].kinematics
            )

    def test_invalid_dt_raises(self):
        """A scene with a non-positive dt cannot be ticked."""
        scene = make_scene()
        scene.dt = 0.0

        with pytest.raises(ConfigurationError):
            tick_scene(scene)

    def test_logs_state_changes(self, caplog):
        """A change of displayed state is logged at debug level."""
        agent = make_agent("a1", target_id="goal")
        scene = make_scene(agent, goal=Vector2(10.0, 0.0))

        with caplog.at_level(logging.DEBUG, logger="steerengine.engine.simulation"):
            tick_scene(scene)

        assert "IDLE -> SEEK" in caplog.text


class TestRunScene:
    """Longer runs of the host loop."""

    def test_seeker_settles_inside_stop_radius(self):
        """A seeker approaches its marker and comes to rest near it."""
        agent = make_agent("seeker", x=-8.0, y=3.0, target_id="beacon")
        scene = make_scene(agent, beacon=Vector2(0.0, 0.0))

        run_scene(scene, 1000)

        distance = agent.kinematics.position.distance_to(Vector2(0.0, 0.0))
        assert distance < scene.parameters.stop_radius
        assert agent.kinematics.velocity.magnitude() < 1e-6
        assert agent.motion_state == MotionState.IDLE

    def test_speed_bound_holds_every_tick(self):
        """No agent in the demo scene ever exceeds max_speed."""
        scene = create_scene()

        for _ in range(300):
            tick_scene(scene)
            for agent in scene.agents.values():
                speed = agent.kinematics.velocity.magnitude()
                assert speed <= scene.parameters_for(agent).max_speed + 1e-9

    def test_evader_moves_away_from_approaching_threat(self):
        """An evader inside the trigger radius increases its distance."""
        threat = make_agent("threat", x=0.0, behavior=Behavior.IDLE)
        evader = make_agent("evader", x=3.0, behavior=Behavior.EVADE, target_id="threat")
        scene = make_scene(threat, evader)

        run_scene(scene, 20)

        assert evader.kinematics.position.x > 3.0
        assert evader.motion_state == MotionState.EVADE

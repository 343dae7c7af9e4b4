"""FastAPI server with REST API and WebSocket frame streaming.

Provides:
- WebSocket /ws/frames: Stream projected Frame objects
- REST API for scene state, agents and playback control
- Stateless steering evaluation under /api/v1/steering
"""

from __future__ import annotations

import asyncio
import logging
import threading
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect, status
from pydantic import BaseModel, Field

from steerengine.api.steering import VectorModel
from steerengine.api.steering import router as steering_router
from steerengine.config import get_steering_settings
from steerengine.corpora import DEFAULT_CORPUS, create_scene
from steerengine.engine.simulation import tick_scene
from steerengine.model import Behavior, Scene, SteeringAgent
from steerengine.projection.projector import Frame, project

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


def _new_scene(corpus_name: str = DEFAULT_CORPUS) -> Scene:
    """Build a corpus scene from the configured settings."""
    settings = get_steering_settings()
    return create_scene(
        corpus_name,
        parameters=settings.to_parameters(),
        dt=settings.fixed_delta_time,
    )


class SimulationState:
    """Thread-safe simulation state manager.

    Owns the scene and a background thread that ticks it at the fixed step
    rate. Starts paused.
    """

    def __init__(self) -> None:
        """Initialize simulation state with the default corpus."""
        self._corpus = DEFAULT_CORPUS
        self._scene = _new_scene(self._corpus)
        self._running = False
        self._speed = 1.0  # Simulation speed multiplier
        self._paused = True
        self._lock = threading.RLock()
        self._latest_frame: Frame | None = None
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def scene(self) -> Scene:
        """Get current scene (thread-safe)."""
        with self._lock:
            return self._scene

    @property
    def corpus(self) -> str:
        """Name of the loaded corpus."""
        with self._lock:
            return self._corpus

    @property
    def paused(self) -> bool:
        """Check if simulation is paused."""
        with self._lock:
            return self._paused

    @paused.setter
    def paused(self, value: bool) -> None:
        """Set paused state."""
        with self._lock:
            self._paused = value

    @property
    def speed(self) -> float:
        """Get simulation speed multiplier."""
        with self._lock:
            return self._speed

    @speed.setter
    def speed(self, value: float) -> None:
        """Set simulation speed (clamped to 0.1-10.0)."""
        with self._lock:
            self._speed = max(0.1, min(10.0, value))

    @property
    def latest_frame(self) -> Frame | None:
        """Get the latest projected frame."""
        with self._lock:
            return self._latest_frame

    def tick(self) -> None:
        """Execute one simulation tick (thread-safe)."""
        with self._lock:
            tick_scene(self._scene)
            self._latest_frame = project(self._scene)

    def reset(self) -> None:
        """Rebuild the loaded corpus at tick 0."""
        with self._lock:
            self._scene = _new_scene(self._corpus)
            self._latest_frame = None

    def load_corpus(self, corpus_name: str) -> None:
        """Load a named corpus.

        Raises:
            ValueError: If corpus name is not recognized.
        """
        with self._lock:
            self._scene = _new_scene(corpus_name)
            self._corpus = corpus_name
            self._latest_frame = None

    def agent(self, agent_id: str) -> AgentResponse:
        """Snapshot one agent.

        Raises:
            KeyError: If the agent does not exist.
        """
        with self._lock:
            return _agent_response(self._scene.agents[agent_id])

    def agents(self) -> list[AgentResponse]:
        """Snapshot every agent at the same tick."""
        with self._lock:
            return [_agent_response(agent) for agent in self._scene.agents.values()]

    def summary(self) -> SceneStateResponse:
        """Snapshot the scene counters and markers."""
        with self._lock:
            scene = self._scene
            return SceneStateResponse(
                corpus=self._corpus,
                tick=scene.tick,
                time=scene.time,
                dt=scene.dt,
                speed=self._speed,
                paused=self._paused,
                agent_count=len(scene.agents),
                markers={name: VectorModel.from_vector(p) for name, p in scene.markers.items()},
            )

    def set_behavior(self, agent_id: str, behavior: Behavior) -> SteeringAgent:
        """Change an agent's behavior between ticks."""
        with self._lock:
            agent = self._scene.agents[agent_id]
            agent.behavior = behavior
            return agent

    def set_target(self, agent_id: str, target_id: str | None) -> SteeringAgent:
        """Point an agent at a marker or another agent (None clears it)."""
        with self._lock:
            agent = self._scene.agents[agent_id]
            agent.target_id = target_id
            return agent

    def start(self) -> None:
        """Start the background simulation thread."""
        if self._running:
            return
        self._running = True
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._simulation_loop, daemon=True)
        self._thread.start()
        logger.info("Simulation thread started")

    def stop(self) -> None:
        """Stop the background simulation thread."""
        if not self._running:
            return
        self._running = False
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=2.0)
        logger.info("Simulation thread stopped")

    def _simulation_loop(self) -> None:
        """Background loop ticking at the scene's fixed step rate."""
        while self._running and not self._stop_event.is_set():
            if not self.paused:
                try:
                    self.tick()
                except Exception:
                    logger.exception("Simulation tick failed at tick %d", self.scene.tick)

            effective_speed = self.speed if not self.paused else 1.0
            self._stop_event.wait(timeout=self.scene.dt / effective_speed)


# Global simulation state
_sim_state: SimulationState | None = None


def get_sim_state() -> SimulationState:
    """Get or create the global simulation state."""
    global _sim_state
    if _sim_state is None:
        _sim_state = SimulationState()
    return _sim_state


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager: start/stop simulation thread."""
    sim = get_sim_state()
    sim.start()
    yield
    sim.stop()


app = FastAPI(
    title="SteerEngine",
    description="Per-agent 2D steering controller with a live debug scene",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(steering_router)


# Pydantic models for REST responses


class AgentResponse(BaseModel):
    """Response model for agent information."""

    id: str = Field(description="Agent ID")
    name: str = Field(description="Agent name")
    behavior: str = Field(description="Selected behavior")
    target_id: str | None = Field(description="Marker or agent being targeted")
    position: VectorModel = Field(description="Current position")
    velocity: VectorModel = Field(description="Current velocity")
    motion_state: str = Field(description="Motion state from the last tick")
    display_text: str = Field(description="Upper-case motion state label")


class SceneStateResponse(BaseModel):
    """Response model for scene state summary."""

    corpus: str = Field(description="Loaded corpus name")
    tick: int = Field(description="Current simulation tick")
    time: float = Field(description="Elapsed simulation time in seconds")
    dt: float = Field(description="Fixed step duration in seconds")
    speed: float = Field(description="Simulation speed multiplier")
    paused: bool = Field(description="Whether simulation is paused")
    agent_count: int = Field(description="Number of agents")
    markers: dict[str, VectorModel] = Field(description="Fixed target markers")


class BehaviorUpdateRequest(BaseModel):
    """Request model for changing an agent's behavior."""

    behavior: Behavior = Field(description="New behavior")


class TargetUpdateRequest(BaseModel):
    """Request model for changing an agent's target."""

    target_id: str | None = Field(default=None, description="Marker or agent id, null to clear")


class ControlCommandResponse(BaseModel):
    """Response for control commands."""

    success: bool = Field(description="Whether command succeeded")
    message: str = Field(description="Status message")


def _agent_response(agent: SteeringAgent) -> AgentResponse:
    """Convert a SteeringAgent to its REST representation."""
    return AgentResponse(
        id=agent.id,
        name=agent.name,
        behavior=agent.behavior.value,
        target_id=agent.target_id,
        position=VectorModel.from_vector(agent.kinematics.position),
        velocity=VectorModel.from_vector(agent.kinematics.velocity),
        motion_state=agent.motion_state.value,
        display_text=agent.motion_state.display_text,
    )


def _require_agent(sim: SimulationState, agent_id: str) -> AgentResponse:
    """Snapshot an agent or raise 404."""
    try:
        return sim.agent(agent_id)
    except KeyError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agent '{agent_id}' not found",
        ) from e


# REST endpoints


@app.get("/api/scene", response_model=SceneStateResponse, tags=["scene"])
async def get_scene() -> SceneStateResponse:
    """Get current scene state summary."""
    return get_sim_state().summary()


@app.get("/api/agents", response_model=list[AgentResponse], tags=["agents"])
async def get_agents() -> list[AgentResponse]:
    """Get all agents in the scene."""
    return get_sim_state().agents()


@app.get("/api/agents/{agent_id}", response_model=AgentResponse, tags=["agents"])
async def get_agent(agent_id: str) -> AgentResponse:
    """Get a specific agent by ID."""
    return _require_agent(get_sim_state(), agent_id)


@app.put("/api/agents/{agent_id}/behavior", response_model=AgentResponse, tags=["agents"])
async def update_behavior(agent_id: str, request: BehaviorUpdateRequest) -> AgentResponse:
    """Change an agent's behavior. Takes effect on the next tick."""
    sim = get_sim_state()
    _require_agent(sim, agent_id)
    sim.set_behavior(agent_id, request.behavior)
    logger.info("Agent '%s' behavior set to %s", agent_id, request.behavior.value)
    return sim.agent(agent_id)


@app.put("/api/agents/{agent_id}/target", response_model=AgentResponse, tags=["agents"])
async def update_target(agent_id: str, request: TargetUpdateRequest) -> AgentResponse:
    """Change an agent's target. Unknown ids behave as no target."""
    sim = get_sim_state()
    _require_agent(sim, agent_id)
    sim.set_target(agent_id, request.target_id)
    logger.info("Agent '%s' target set to %s", agent_id, request.target_id)
    return sim.agent(agent_id)


@app.post("/api/scene/reset", response_model=ControlCommandResponse, tags=["scene"])
async def reset_scene() -> ControlCommandResponse:
    """Reset the scene to its initial state."""
    get_sim_state().reset()
    return ControlCommandResponse(success=True, message="Scene reset")


@app.post("/api/scene/load_corpus", response_model=ControlCommandResponse, tags=["scene"])
async def load_corpus(corpus_name: str = DEFAULT_CORPUS) -> ControlCommandResponse:
    """Load a named corpus."""
    try:
        get_sim_state().load_corpus(corpus_name)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    return ControlCommandResponse(success=True, message=f"Loaded corpus: {corpus_name}")


@app.post("/api/scene/pause", response_model=ControlCommandResponse, tags=["scene"])
async def pause_simulation() -> ControlCommandResponse:
    """Pause the simulation."""
    get_sim_state().paused = True
    return ControlCommandResponse(success=True, message="Simulation paused")


@app.post("/api/scene/play", response_model=ControlCommandResponse, tags=["scene"])
async def play_simulation() -> ControlCommandResponse:
    """Resume the simulation."""
    get_sim_state().paused = False
    return ControlCommandResponse(success=True, message="Simulation playing")


@app.post("/api/scene/step", response_model=ControlCommandResponse, tags=["scene"])
async def step_simulation(ticks: int = 1) -> ControlCommandResponse:
    """Advance the simulation manually by a number of ticks."""
    if ticks < 1 or ticks > 10000:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="ticks must be between 1 and 10000",
        )
    sim = get_sim_state()
    for _ in range(ticks):
        sim.tick()
    return ControlCommandResponse(success=True, message=f"Advanced {ticks} tick(s)")


@app.post("/api/scene/speed", response_model=ControlCommandResponse, tags=["scene"])
async def set_speed(speed: float = 1.0) -> ControlCommandResponse:
    """Set the simulation speed multiplier (clamped to 0.1-10.0)."""
    sim = get_sim_state()
    sim.speed = speed
    return ControlCommandResponse(success=True, message=f"Speed set to {sim.speed}")


def _frame_to_dict(frame: Frame) -> dict[str, Any]:
    """Convert a Frame dataclass to a JSON-serializable dict."""
    return asdict(frame)


@app.websocket("/ws/frames")
async def websocket_frames(websocket: WebSocket) -> None:
    """WebSocket endpoint streaming frames at ~30 FPS.

    Sends a frame with tick -1 until the first tick has been projected.
    """
    await websocket.accept()
    sim = get_sim_state()
    interval = 1.0 / 30.0

    try:
        while True:
            frame = sim.latest_frame
            if frame is not None:
                await websocket.send_json(_frame_to_dict(frame))
            else:
                await websocket.send_json(_frame_to_dict(Frame(tick=-1, time=0.0)))
            await asyncio.sleep(interval)
    except WebSocketDisconnect:
        logger.debug("Frame stream client disconnected")
    except Exception as e:
        logger.error("Frame streaming error: %s", str(e))


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}

"""Frame projection: Scene state to visual frame snapshots."""

from steerengine.projection.projector import (
    AgentVisual,
    CircleGizmo,
    Frame,
    LineGizmo,
    project,
)

__all__ = [
    "AgentVisual",
    "CircleGizmo",
    "Frame",
    "LineGizmo",
    "project",
]

"""Corpora: prebuilt demo scenes."""

from __future__ import annotations

from collections.abc import Callable

from steerengine.corpora import pursuit
from steerengine.model import Scene, SteeringParameters

CORPORA: dict[str, Callable[..., Scene]] = {
    "pursuit": pursuit.create_scene,
}

DEFAULT_CORPUS = "pursuit"


def create_scene(
    name: str = DEFAULT_CORPUS,
    parameters: SteeringParameters | None = None,
    dt: float = 0.02,
) -> Scene:
    """Build a named corpus scene.

    Raises:
        ValueError: If the corpus name is not recognized.
    """
    factory = CORPORA.get(name)
    if factory is None:
        raise ValueError(f"Unknown corpus: {name}")
    return factory(parameters=parameters, dt=dt)


__all__ = ["CORPORA", "DEFAULT_CORPUS", "create_scene"]

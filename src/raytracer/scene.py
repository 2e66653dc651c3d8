"""Lights and the scene container handed to the renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .primitives import Color, Primitive
from .vector import Vec3


@dataclass(frozen=True, slots=True)
class Light:
    """Directional light; ``direction`` points from the surface towards the light."""

    direction: Vec3
    color: Color

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalized())


@dataclass
class Scene:
    """Ordered primitives and lights.

    Primitive order only matters as a tie-break when two surfaces report the
    same hit distance: the earlier one wins.
    """

    primitives: List[Primitive] = field(default_factory=list)
    lights: List[Light] = field(default_factory=list)

    def add(self, primitive: Primitive) -> None:
        self.primitives.append(primitive)

    def add_light(self, light: Light) -> None:
        self.lights.append(light)

"""Ray-traceable surfaces: spheres, infinite planes and oriented boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence, Tuple

from .vector import Ray, Vec3

Color = Tuple[int, int, int]

PARALLEL_EPSILON = 1e-6


class Primitive(Protocol):
    """Anything the renderer can intersect and shade."""

    color: Color

    def intersect(self, ray: Ray) -> Optional[float]:
        """Return the hit distance in front of the ray origin, or ``None``."""
        ...

    def normal_at(self, point: Vec3) -> Vec3:
        """Return the unit normal at ``point``, pointing out of the solid."""
        ...


@dataclass(frozen=True, slots=True)
class Sphere:
    center: Vec3
    radius: float
    color: Color

    def intersect(self, ray: Ray) -> Optional[float]:
        # a*t^2 + b*t + c = 0
        center_to_origin = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        b = 2.0 * center_to_origin.dot(ray.direction)
        c = center_to_origin.dot(center_to_origin) - self.radius * self.radius

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return None

        distance = (-b - math.sqrt(discriminant)) / (2.0 * a)
        if distance <= 0.0:
            return None
        return distance

    def normal_at(self, point: Vec3) -> Vec3:
        return (point - self.center).normalized()


@dataclass(frozen=True, slots=True)
class Plane:
    """Infinite plane through ``point``; ``normal`` is normalised on construction."""

    point: Vec3
    normal: Vec3
    color: Color

    def __post_init__(self) -> None:
        object.__setattr__(self, "normal", self.normal.normalized())

    def intersect(self, ray: Ray) -> Optional[float]:
        denominator = self.normal.dot(ray.direction)
        if abs(denominator) < PARALLEL_EPSILON:
            return None
        distance = (self.point - ray.origin).dot(self.normal) / denominator
        if distance <= 0.0:
            return None
        return distance

    def normal_at(self, point: Vec3) -> Vec3:
        return self.normal


@dataclass(frozen=True, slots=True)
class Box:
    """Oriented box with three orthonormal ``axes`` and matching ``half_extents``.

    By default the normal varies smoothly across each face (the hit offset
    projected on the local axes, weighted by the half extents), which gives
    the box a soft gradient look. Pass ``faceted=True`` for the six flat
    face normals instead.
    """

    center: Vec3
    axes: Tuple[Vec3, Vec3, Vec3]
    half_extents: Tuple[float, float, float]
    color: Color
    faceted: bool = field(default=False)

    def __post_init__(self) -> None:
        if len(self.axes) != 3 or len(self.half_extents) != 3:
            raise ValueError("Box requires exactly three axes and three half extents")
        object.__setattr__(self, "axes", tuple(axis.normalized() for axis in self.axes))
        object.__setattr__(self, "half_extents", tuple(float(h) for h in self.half_extents))

    @classmethod
    def from_edges(
        cls,
        center: Vec3,
        u: Vec3,
        v: Vec3,
        w: Vec3,
        color: Color,
        *,
        faceted: bool = False,
    ) -> "Box":
        """Build a box from three full-length, mutually orthogonal edge vectors."""
        edges: Sequence[Vec3] = (u, v, w)
        return cls(
            center,
            (u, v, w),
            tuple(edge.length() / 2.0 for edge in edges),  # type: ignore[arg-type]
            color,
            faceted=faceted,
        )

    def intersect(self, ray: Ray) -> Optional[float]:
        offset = ray.origin - self.center

        entry = -math.inf
        exit_ = math.inf
        for axis, half in zip(self.axes, self.half_extents):
            near, far = self._slab(half, offset.dot(axis), ray.direction.dot(axis))
            entry = max(entry, near)
            exit_ = min(exit_, far)

        if entry <= exit_ and exit_ > 0.0:
            return entry if entry >= 0.0 else exit_
        return None

    @staticmethod
    def _slab(half: float, origin: float, direction: float) -> Tuple[float, float]:
        if direction == 0.0:
            # Parallel to the slab: either always inside it or never.
            if -half <= origin <= half:
                return -math.inf, math.inf
            return math.inf, -math.inf
        near = (-half - origin) / direction
        far = (half - origin) / direction
        if far < near:
            near, far = far, near
        return near, far

    def normal_at(self, point: Vec3) -> Vec3:
        offset = point - self.center
        projections = [offset.dot(axis) for axis in self.axes]

        if self.faceted:
            ratios = [
                abs(p / h) if h else 0.0 for p, h in zip(projections, self.half_extents)
            ]
            index = ratios.index(max(ratios))
            axis = self.axes[index]
            return axis if projections[index] >= 0.0 else -axis

        u, v, w = self.axes
        hu, hv, hw = self.half_extents
        pu, pv, pw = projections
        return (u * (pu * hu) + v * (pv * hv) + w * (pw * hw)).normalized()

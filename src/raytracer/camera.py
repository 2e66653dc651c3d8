"""Yaw/pitch camera with a scripted orbit path."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

from .vector import WORLD_UP, Vec3

PITCH_LIMIT_DEGREES = 89.9999


class CameraBasis(NamedTuple):
    forward: Vec3
    right: Vec3
    up: Vec3


@dataclass
class Camera:
    """World position plus yaw (left/right) and pitch (up/down) in degrees."""

    position: Vec3
    yaw_degrees: float = 0.0
    pitch_degrees: float = 0.0

    def __post_init__(self) -> None:
        self.normalize_orientation()

    def basis(self) -> CameraBasis:
        yaw = math.radians(self.yaw_degrees)
        pitch = math.radians(self.pitch_degrees)

        forward = Vec3(
            math.cos(pitch) * math.sin(yaw),
            math.sin(pitch),
            math.cos(pitch) * math.cos(yaw),
        )
        right = forward.cross(WORLD_UP).normalized()
        up = right.cross(forward).normalized()
        return CameraBasis(forward, right, up)

    def normalize_orientation(self) -> None:
        """Clamp pitch short of the poles and wrap yaw into [0, 360)."""
        self.pitch_degrees = max(-PITCH_LIMIT_DEGREES, min(PITCH_LIMIT_DEGREES, self.pitch_degrees))
        yaw = self.yaw_degrees % 360.0
        # A tiny negative yaw rounds up to exactly 360.0.
        if yaw >= 360.0:
            yaw = 0.0
        self.yaw_degrees = yaw

    def move(self, offset: Vec3) -> None:
        self.position = self.position + offset

    def rotate(self, yaw_delta: float, pitch_delta: float) -> None:
        self.yaw_degrees += yaw_delta
        self.pitch_degrees += pitch_delta
        self.normalize_orientation()

    def look_at(self, target: Vec3) -> None:
        to_target = target - self.position
        horizontal_distance = math.hypot(to_target.x, to_target.z)
        self.yaw_degrees = math.degrees(math.atan2(to_target.x, to_target.z))
        self.pitch_degrees = math.degrees(math.atan2(to_target.y, horizontal_distance))
        self.normalize_orientation()

    def orbit(
        self,
        frame_index: int,
        focal_point: Vec3,
        radius: float,
        direction_mask: Vec3,
        degrees_per_frame: float,
    ) -> None:
        """Place the camera on a circle around ``focal_point`` and face it.

        ``direction_mask`` components are -1, 0 or 1 and pick which axes the
        orbit sweeps along (x and y follow the sine term, z the cosine).
        """
        angle = frame_index * math.radians(degrees_per_frame)
        self.position = Vec3(
            focal_point.x + direction_mask.x * radius * math.sin(angle),
            focal_point.y + direction_mask.y * radius * math.sin(angle),
            focal_point.z + direction_mask.z * radius * math.cos(angle),
        )
        self.look_at(focal_point)

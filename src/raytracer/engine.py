"""Brute-force ray tracing renderer producing RGB frame buffers."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from .camera import Camera
from .primitives import Color, Primitive
from .scene import Light, Scene
from .vector import Ray, Vec3

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """Engine-wide constants threaded into each ``RenderEngine``.

    ``pixel_aspect`` is the width of one sample relative to its height. A
    terminal cell is about twice as tall as it is wide, so callers drawing
    one sample per cell pass 0.5.
    """

    fov_degrees: float = 90.0
    shininess: float = 32.0
    rgb_max: float = 255.0
    pixel_aspect: float = 1.0
    background: Color = (0, 0, 0)


class FrameBuffer:
    """Row-major grid of ``(r, g, b)`` pixels."""

    def __init__(self, width: int, height: int, fill: Color = (0, 0, 0)) -> None:
        if width < 1 or height < 1:
            raise ValueError("FrameBuffer requires width and height >= 1")
        self.width = width
        self.height = height
        self.pixels: List[Color] = [fill] * (width * height)

    def pixel_at(self, row: int, col: int) -> Color:
        return self.pixels[row * self.width + col]

    def set_pixel(self, row: int, col: int, color: Color) -> None:
        self.pixels[row * self.width + col] = color

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def clear(self, fill: Color = (0, 0, 0)) -> None:
        self.pixels[:] = [fill] * (self.width * self.height)

    def resize(self, width: int, height: int, fill: Color = (0, 0, 0)) -> None:
        if width < 1 or height < 1:
            raise ValueError("FrameBuffer requires width and height >= 1")
        self.width = width
        self.height = height
        self.pixels = [fill] * (width * height)

    def rows(self) -> Iterator[Sequence[Color]]:
        for start in range(0, len(self.pixels), self.width):
            yield self.pixels[start:start + self.width]


@dataclass(frozen=True, slots=True)
class Hit:
    distance: float
    primitive: Primitive


class RenderEngine:
    """Per-pixel, per-primitive, per-light ray tracer.

    ``render`` is a pure function of the scene, the camera and the buffer
    size; the only state kept between frames is the reused frame buffer.
    """

    def __init__(self, width: int, height: int, settings: Optional[RenderSettings] = None) -> None:
        self.settings = settings or RenderSettings()
        self.buffer = FrameBuffer(width, height, self.settings.background)
        self._update_plane()

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    def resize(self, width: int, height: int) -> None:
        if width == self.width and height == self.height:
            return
        self.buffer.resize(width, height, self.settings.background)
        self._update_plane()

    def _update_plane(self) -> None:
        # Image plane measured one unit along the camera's forward axis.
        aspect = (self.width * self.settings.pixel_aspect) / self.height
        self._plane_height = 2.0 * math.tan(math.radians(self.settings.fov_degrees) / 2.0)
        self._plane_width = self._plane_height * aspect

    def primary_ray(self, camera: Camera, row: int, col: int) -> Ray:
        forward, right, up = camera.basis()
        return self._ray_through(camera.position, forward, right, up, row, col)

    def _ray_through(
        self,
        origin: Vec3,
        forward: Vec3,
        right: Vec3,
        up: Vec3,
        row: int,
        col: int,
    ) -> Ray:
        # x is negated so screen columns grow in the same direction as world x.
        x = -((col + 0.5) / self.width - 0.5) * self._plane_width
        y = ((row + 0.5) / self.height - 0.5) * self._plane_height
        pixel_position = origin + forward + right * x + up * y
        return Ray(origin, pixel_position - origin)

    @staticmethod
    def closest_hit(ray: Ray, primitives: Sequence[Primitive]) -> Optional[Hit]:
        closest: Optional[Hit] = None
        for primitive in primitives:
            distance = primitive.intersect(ray)
            if distance is None:
                continue
            if closest is None or distance < closest.distance:
                closest = Hit(distance, primitive)
        return closest

    def shade(self, ray: Ray, hit: Hit, lights: Sequence[Light]) -> Color:
        """Lambert diffuse plus Blinn-Phong specular, summed over ``lights``."""
        rgb_max = self.settings.rgb_max
        shininess = self.settings.shininess

        point = ray.point_at(hit.distance)
        normal = hit.primitive.normal_at(point)
        to_viewer = -ray.direction
        surface = hit.primitive.color

        red = green = blue = 0.0
        for light in lights:
            diffuse = max(0.0, normal.dot(light.direction))

            halfway = light.direction + to_viewer
            specular = 0.0
            if halfway.length_squared() > 0.0:
                spec_angle = max(0.0, normal.dot(halfway.normalized()))
                specular = spec_angle ** shininess

            lr, lg, lb = light.color
            red += surface[0] * diffuse * (lr / rgb_max) + rgb_max * specular * (lr / rgb_max)
            green += surface[1] * diffuse * (lg / rgb_max) + rgb_max * specular * (lg / rgb_max)
            blue += surface[2] * diffuse * (lb / rgb_max) + rgb_max * specular * (lb / rgb_max)

        return (
            self._clamp_channel(red),
            self._clamp_channel(green),
            self._clamp_channel(blue),
        )

    def _clamp_channel(self, value: float) -> int:
        return int(max(0.0, min(self.settings.rgb_max, value)))

    def trace(self, ray: Ray, scene: Scene) -> Optional[Color]:
        hit = self.closest_hit(ray, scene.primitives)
        if hit is None:
            return None
        return self.shade(ray, hit, scene.lights)

    def render(self, scene: Scene, camera: Camera) -> FrameBuffer:
        buffer = self.buffer
        background = self.settings.background
        buffer.clear(background)

        logger.debug(
            "Rendering %dx%d frame: %d primitives, %d lights",
            buffer.width,
            buffer.height,
            len(scene.primitives),
            len(scene.lights),
        )

        origin = camera.position
        forward, right, up = camera.basis()
        for row in range(buffer.height):
            for col in range(buffer.width):
                ray = self._ray_through(origin, forward, right, up, row, col)
                color = self.trace(ray, scene)
                if color is not None:
                    buffer.set_pixel(row, col, color)
        return buffer

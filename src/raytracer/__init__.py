"""Terminal ray tracing toolkit."""

from .camera import Camera, CameraBasis
from .engine import FrameBuffer, Hit, RenderEngine, RenderSettings
from .primitives import Box, Plane, Primitive, Sphere
from .scene import Light, Scene
from .scenes import showcase_scene, single_sphere_scene
from .terminal import InputState, TerminalController, compose_frame
from .vector import Ray, Vec3

__all__ = [
    "Box",
    "Camera",
    "CameraBasis",
    "FrameBuffer",
    "Hit",
    "InputState",
    "Light",
    "Plane",
    "Primitive",
    "Ray",
    "RenderEngine",
    "RenderSettings",
    "Scene",
    "Sphere",
    "TerminalController",
    "Vec3",
    "compose_frame",
    "showcase_scene",
    "single_sphere_scene",
]

"""Predefined demo scenes.

World axes: +x is right, +y is down and +z points away from the viewer.
"""

from __future__ import annotations

from dataclasses import replace

from .primitives import Box, Plane, Sphere
from .scene import Light, Scene
from .vector import Vec3

WHITE = (255, 255, 255)


def single_sphere_scene() -> Scene:
    """Return one white sphere at the origin lit from the front top right."""

    scene = Scene()
    scene.add(Sphere(Vec3(0.0, 0.0, 0.0), 25.0, WHITE))
    scene.add_light(Light(Vec3(1.0, -1.0, -1.0), WHITE))
    return scene


def showcase_scene() -> Scene:
    """Return a floor, two spheres and a box under three coloured lights."""

    scene = Scene()
    scene.add(Plane(Vec3(0.0, 25.0, 0.0), Vec3(0.0, 1.0, 0.0), (230, 230, 230)))
    scene.add(Sphere(Vec3(0.0, 0.0, 0.0), 25.0, WHITE))
    scene.add(Sphere(Vec3(30.0, 20.0, -15.0), 10.0, (255, 255, 140)))
    scene.add(
        Box.from_edges(
            Vec3(0.0, 10.0, 0.0),
            Vec3(20.0, 0.0, 0.0),
            Vec3(0.0, 40.0, 0.0),
            Vec3(0.0, 0.0, 30.0),
            WHITE,
        )
    )

    scene.add_light(Light(Vec3(5.0, -10.0, 1.0), (182, 34, 228)))  # magenta, back top right
    scene.add_light(Light(Vec3(-10.0, 3.0, -1.0), (24, 236, 238)))  # cyan, front bottom left
    scene.add_light(Light(Vec3(1.0, 4.0, -1.0), (100, 100, 100)))  # dim white
    return scene


SCENES = {
    "sphere": single_sphere_scene,
    "showcase": showcase_scene,
}


def drift_sphere(scene: Scene, index: int, step: Vec3) -> None:
    """Nudge the sphere at ``scene.primitives[index]`` by ``step``.

    Non-sphere entries are left alone.
    """

    primitive = scene.primitives[index]
    if isinstance(primitive, Sphere):
        scene.primitives[index] = replace(primitive, center=primitive.center + step)

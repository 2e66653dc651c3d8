"""Translate polled terminal input into camera motion."""

from __future__ import annotations

from .camera import Camera
from .terminal import InputState

MOVE_STEP = 2.0
ROTATE_STEP = 3.0
MOUSE_SENSITIVITY = 0.7


def apply_input(
    camera: Camera,
    state: InputState,
    *,
    move_step: float = MOVE_STEP,
    rotate_step: float = ROTATE_STEP,
    mouse_sensitivity: float = MOUSE_SENSITIVITY,
) -> bool:
    """Update ``camera`` from one frame of input. Returns ``False`` on quit.

    Screen-right and screen-up are the negated basis vectors because world
    +y points down the screen.
    """

    keys = set(state.keys)
    if "q" in keys:
        return False

    dx, dy = state.mouse_delta
    if dx or dy:
        camera.rotate(dx * mouse_sensitivity, dy * mouse_sensitivity)

    forward, right, up = camera.basis()
    screen_right = -right
    screen_up = -up

    if "w" in keys:
        camera.move(forward * move_step)
    if "s" in keys:
        camera.move(forward * -move_step)
    if "a" in keys:
        camera.move(screen_right * -move_step)
    if "d" in keys:
        camera.move(screen_right * move_step)
    if " " in keys:
        camera.move(screen_up * move_step)
    if "x" in keys:
        camera.move(screen_up * -move_step)

    yaw_delta = 0.0
    pitch_delta = 0.0
    if "UP" in keys:
        pitch_delta -= rotate_step
    if "DOWN" in keys:
        pitch_delta += rotate_step
    if "LEFT" in keys:
        yaw_delta -= rotate_step
    if "RIGHT" in keys:
        yaw_delta += rotate_step
    if yaw_delta or pitch_delta:
        camera.rotate(yaw_delta, pitch_delta)

    return True

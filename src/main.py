"""Command-line entry point for the terminal ray tracer."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from contextlib import ExitStack
from dataclasses import dataclass
from typing import IO, Optional, Sequence

from .raytracer.camera import Camera
from .raytracer.controls import apply_input
from .raytracer.engine import RenderEngine, RenderSettings
from .raytracer.image import demo_canvas, downscale, load_image
from .raytracer.logging_config import setup_logging
from .raytracer.playback import read_frames, replay
from .raytracer.scene import Scene
from .raytracer.scenes import SCENES, drift_sphere
from .raytracer.terminal import TerminalController, compose_frame
from .raytracer.vector import Vec3

# Named explicitly so "python -m src.main" still logs under the "src" logger.
logger = logging.getLogger("src.main")

# Terminal cells are roughly twice as tall as they are wide.
CELL_ASPECT = 0.5


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ray-traced scenes in your terminal")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostics written to stderr (default: WARNING)",
    )
    commands = parser.add_subparsers(dest="command")

    trace = commands.add_parser("trace", help="Render a scene interactively (default)")
    trace.add_argument("--scene", type=str, default="showcase", choices=sorted(SCENES), help="Which demo scene to render")
    trace.add_argument("--fps", type=float, default=30.0, help="Target frames per second (default: 30)")
    trace.add_argument("--fov", type=float, default=90.0, help="Field of view in degrees (default: 90)")
    trace.add_argument("--shininess", type=float, default=32.0, help="Specular exponent (default: 32)")
    trace.add_argument("--frames", type=int, default=0, help="Run for a fixed number of frames (0 = infinite)")
    trace.add_argument("--width", type=int, default=0, help="Override the terminal width in cells")
    trace.add_argument("--height", type=int, default=0, help="Override the terminal height in cells")
    trace.add_argument("--orbit", action="store_true", help="Circle the scene origin instead of free-flying")
    trace.add_argument("--orbit-radius", type=float, default=60.0, help="Orbit radius (default: 60)")
    trace.add_argument("--orbit-speed", type=float, default=2.0, help="Orbit degrees per frame (default: 2)")
    trace.add_argument("--drift", action="store_true", help="Slowly move the first sphere every frame")
    trace.add_argument("--record", type=str, default=None, metavar="FILE", help="Also write every frame to FILE")

    image = commands.add_parser("image", help="Show a downscaled image file")
    image.add_argument("path", type=str, nargs="?", default=None, help="Image file (optional with --demo)")
    image.add_argument("--demo", action="store_true", help="Overlay a rectangle and a circle")

    playback = commands.add_parser("replay", help="Play back a file written with --record")
    playback.add_argument("path", type=str)
    playback.add_argument("--fps", type=float, default=30.0, help="Playback speed (default: 30)")

    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args([*(argv if argv is not None else sys.argv[1:]), "trace"])
    return args


@dataclass
class RuntimeConfig:
    scene: Scene
    camera: Camera
    settings: RenderSettings
    frame_duration: float
    frames: int
    width: int
    height: int
    orbit: bool
    orbit_radius: float
    orbit_speed: float
    drift: bool
    record: Optional[str]


def _setup_runtime(args: argparse.Namespace) -> RuntimeConfig:
    settings = RenderSettings(
        fov_degrees=args.fov,
        shininess=max(1.0, args.shininess),
        pixel_aspect=CELL_ASPECT,
    )
    return RuntimeConfig(
        scene=SCENES[args.scene](),
        camera=Camera(Vec3(0.0, 0.0, -60.0)),
        settings=settings,
        frame_duration=1.0 / max(1.0, args.fps),
        frames=max(0, args.frames),
        width=max(0, args.width),
        height=max(0, args.height),
        orbit=args.orbit,
        orbit_radius=args.orbit_radius,
        orbit_speed=args.orbit_speed,
        drift=args.drift,
        record=args.record,
    )


def _frame_size(config: RuntimeConfig, terminal: TerminalController) -> tuple[int, int]:
    columns, lines = terminal.size_tuple()
    # Leave the last line free so the terminal never scrolls.
    width = config.width or columns
    height = config.height or max(1, lines - 1)
    return max(1, width), max(1, height)


def _run_trace(config: RuntimeConfig) -> None:
    with ExitStack() as stack:
        record: Optional[IO[str]] = None
        if config.record:
            record = stack.enter_context(open(config.record, "w", encoding="utf-8"))
        terminal = stack.enter_context(TerminalController(record=record))

        width, height = _frame_size(config, terminal)
        engine = RenderEngine(width, height, config.settings)
        camera = config.camera
        scene = config.scene

        frame_counter = 0
        try:
            while True:
                frame_start = time.perf_counter()

                if not apply_input(camera, terminal.poll_input()):
                    break

                if config.orbit:
                    camera.orbit(frame_counter, Vec3(0.0, 0.0, 0.0), config.orbit_radius, Vec3(1.0, 1.0, -1.0), config.orbit_speed)
                if config.drift and scene.primitives:
                    index = 1 if len(scene.primitives) > 1 else 0
                    drift_sphere(scene, index, Vec3(-0.1, -0.1, 0.0))

                engine.resize(*_frame_size(config, terminal))
                terminal.draw(compose_frame(engine.render(scene, camera)))

                frame_counter += 1
                if config.frames and frame_counter >= config.frames:
                    break

                sleep_time = config.frame_duration - (time.perf_counter() - frame_start)
                if sleep_time > 0:
                    time.sleep(sleep_time)
        except KeyboardInterrupt:  # pragma: no cover - interactive loop
            terminal.restore()
            sys.stdout.write("\nInterrupted. Bye!\n")
            sys.stdout.flush()

    logger.info("Rendered %d frames", frame_counter)


def _run_image(path: Optional[str], demo: bool = False) -> int:
    if path is None and not demo:
        logger.error("image needs a PATH, --demo, or both")
        return 1

    if path is None:
        source = demo_canvas()
    else:
        try:
            source = load_image(path)
        except OSError as exc:
            logger.error("Could not load image %s: %s", path, exc)
            return 1
        if demo:
            demo_canvas(source)

    columns, lines = TerminalController().size_tuple()
    height = max(1, lines - 1)
    width = max(1, min(columns, round(source.width / source.height * height / CELL_ASPECT)))
    logger.debug("Downscaling %dx%d image to %dx%d", source.width, source.height, width, height)

    sys.stdout.write("\033[2J\033[H")
    sys.stdout.write(compose_frame(downscale(source, width, height)))
    sys.stdout.write("\n")
    sys.stdout.flush()
    return 0


def _run_replay(path: str, fps: float) -> int:
    try:
        frames = read_frames(path)
    except OSError as exc:
        logger.error("Could not read recording %s: %s", path, exc)
        return 1
    if not frames:
        logger.error("No frames found in %s", path)
        return 1

    def write(frame: str) -> None:
        sys.stdout.write(frame)
        sys.stdout.flush()

    replay(frames, write, fps=fps)
    return 0


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    setup_logging(args.log_level)

    if args.command == "image":
        return _run_image(args.path, args.demo)
    if args.command == "replay":
        return _run_replay(args.path, args.fps)

    _run_trace(_setup_runtime(args))
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()

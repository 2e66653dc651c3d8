import io
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from src.main import CELL_ASPECT, _setup_runtime, parse_arguments, run
from src.raytracer.terminal import TerminalController

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class ArgumentTests(unittest.TestCase):
    def test_trace_is_the_default_command(self) -> None:
        args = parse_arguments([])
        self.assertEqual(args.command, "trace")
        self.assertEqual(args.scene, "showcase")

    def test_global_options_before_default_command(self) -> None:
        args = parse_arguments(["--log-level", "DEBUG"])
        self.assertEqual(args.command, "trace")
        self.assertEqual(args.log_level, "DEBUG")

    def test_runtime_config(self) -> None:
        args = parse_arguments(["trace", "--scene", "sphere", "--fps", "0", "--fov", "60", "--orbit"])
        config = _setup_runtime(args)
        self.assertEqual(config.frame_duration, 1.0)
        self.assertEqual(config.settings.fov_degrees, 60.0)
        self.assertEqual(config.settings.pixel_aspect, CELL_ASPECT)
        self.assertTrue(config.orbit)
        self.assertEqual(len(config.scene.primitives), 1)


class CommandTests(unittest.TestCase):
    def test_replay_missing_file_fails(self) -> None:
        self.assertEqual(run(["--log-level", "ERROR", "replay", "/nonexistent/recording.txt"]), 1)

    def test_replay_writes_frames(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "session.txt"
            path.write_text("\033[Ha\033[0m\033[Hb\033[0m", encoding="utf-8")
            with mock.patch("sys.stdout", new_callable=io.StringIO) as stdout:
                status = run(["replay", str(path), "--fps", "60"])
        self.assertEqual(status, 0)
        self.assertEqual(stdout.getvalue(), "\033[Ha\033[0m\033[Hb\033[0m")

    def test_image_missing_file_fails(self) -> None:
        self.assertEqual(run(["--log-level", "ERROR", "image", "/nonexistent/picture.png"]), 1)

    def test_image_without_path_or_demo_fails(self) -> None:
        self.assertEqual(run(["--log-level", "ERROR", "image"]), 1)

    def test_image_demo_draws_shapes(self) -> None:
        with mock.patch.object(TerminalController, "size_tuple", return_value=(50, 101)), mock.patch(
            "sys.stdout", new_callable=io.StringIO
        ) as stdout:
            status = run(["image", "--demo"])
        self.assertEqual(status, 0)
        self.assertIn("\033[48;2;34;150;228m", stdout.getvalue())
        self.assertIn("\033[48;2;182;34;228m", stdout.getvalue())


class ModuleEntryPointTests(unittest.TestCase):
    def test_log_level_applies_when_run_as_module(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "src.main", "--log-level", "DEBUG", "image", "/nonexistent/picture.png"],
            cwd=PROJECT_ROOT,
            capture_output=True,
            text=True,
            timeout=60,
        )
        self.assertEqual(result.returncode, 1)
        self.assertIn("[src.main] ERROR: Could not load image /nonexistent/picture.png", result.stderr)


if __name__ == "__main__":
    unittest.main()

import unittest

from src.raytracer.camera import Camera
from src.raytracer.controls import apply_input
from src.raytracer.terminal import InputState
from src.raytracer.vector import Vec3


class ApplyInputTests(unittest.TestCase):
    def setUp(self) -> None:
        self.camera = Camera(Vec3(0.0, 0.0, -60.0))

    def assertPosition(self, x: float, y: float, z: float) -> None:
        self.assertAlmostEqual(self.camera.position.x, x)
        self.assertAlmostEqual(self.camera.position.y, y)
        self.assertAlmostEqual(self.camera.position.z, z)

    def test_quit(self) -> None:
        self.assertFalse(apply_input(self.camera, InputState(keys=["w", "q"])))
        self.assertEqual(self.camera.position, Vec3(0.0, 0.0, -60.0))

    def test_no_input_changes_nothing(self) -> None:
        self.assertTrue(apply_input(self.camera, InputState()))
        self.assertEqual(self.camera, Camera(Vec3(0.0, 0.0, -60.0)))

    def test_forward_and_back(self) -> None:
        apply_input(self.camera, InputState(keys=["w"]))
        self.assertPosition(0.0, 0.0, -58.0)
        apply_input(self.camera, InputState(keys=["s"]), move_step=5.0)
        self.assertPosition(0.0, 0.0, -63.0)

    def test_strafe_moves_along_screen_right(self) -> None:
        apply_input(self.camera, InputState(keys=["d"]))
        self.assertPosition(2.0, 0.0, -60.0)
        apply_input(self.camera, InputState(keys=["a", "a"]))
        self.assertPosition(0.0, 0.0, -60.0)

    def test_rise_and_fall(self) -> None:
        apply_input(self.camera, InputState(keys=[" "]))
        self.assertPosition(0.0, -2.0, -60.0)
        apply_input(self.camera, InputState(keys=["x"]))
        self.assertPosition(0.0, 0.0, -60.0)

    def test_arrow_keys_rotate(self) -> None:
        apply_input(self.camera, InputState(keys=["UP", "LEFT"]))
        self.assertAlmostEqual(self.camera.pitch_degrees, -3.0)
        self.assertAlmostEqual(self.camera.yaw_degrees, 357.0)
        apply_input(self.camera, InputState(keys=["DOWN", "RIGHT"]))
        self.assertAlmostEqual(self.camera.pitch_degrees, 0.0)
        self.assertAlmostEqual(self.camera.yaw_degrees, 0.0)

    def test_mouse_look(self) -> None:
        apply_input(self.camera, InputState(mouse_delta=(10, -4)))
        self.assertAlmostEqual(self.camera.yaw_degrees, 7.0)
        self.assertAlmostEqual(self.camera.pitch_degrees, -2.8)

    def test_mouse_look_respects_pitch_limit(self) -> None:
        apply_input(self.camera, InputState(mouse_delta=(0, 500)))
        self.assertLess(self.camera.pitch_degrees, 90.0)


if __name__ == "__main__":
    unittest.main()

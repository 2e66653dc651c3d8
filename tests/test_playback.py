import tempfile
import unittest
from pathlib import Path

from src.raytracer.playback import read_frames, replay, split_frames


class PlaybackTests(unittest.TestCase):
    def test_split_frames(self) -> None:
        data = "\033[Hone\033[0m\033[Htwo\033[0m"
        self.assertEqual(split_frames(data), ["\033[Hone\033[0m", "\033[Htwo\033[0m"])

    def test_text_before_first_frame_is_kept_unchanged(self) -> None:
        data = "\033[2J\033[Hone\033[0m"
        self.assertEqual(split_frames(data), ["\033[2J", "\033[Hone\033[0m"])

    def test_split_frames_empty(self) -> None:
        self.assertEqual(split_frames(""), [])

    def test_read_frames_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "session.txt"
            path.write_text("\033[Ha\033[0m\033[Hb\033[0m", encoding="utf-8")
            self.assertEqual(read_frames(path), ["\033[Ha\033[0m", "\033[Hb\033[0m"])

    def test_replay_paces_frames(self) -> None:
        written = []
        delays = []
        shown = replay(["a", "b", "c"], written.append, fps=20.0, sleep=delays.append)
        self.assertEqual(shown, 3)
        self.assertEqual(written, ["a", "b", "c"])
        self.assertEqual(delays, [0.05, 0.05, 0.05])


if __name__ == "__main__":
    unittest.main()

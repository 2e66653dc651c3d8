"""Replay a recorded terminal session frame by frame."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, List, Sequence, Union

from .terminal import CURSOR_HOME


def split_frames(data: str) -> List[str]:
    """Split recorded output into frames at each cursor-home.

    Anything written before the first cursor-home (a screen clear, say) is
    kept unchanged as its own leading frame.
    """

    preamble, *chunks = data.split(CURSOR_HOME)
    frames: List[str] = [preamble] if preamble else []
    frames.extend(CURSOR_HOME + chunk for chunk in chunks)
    return frames


def read_frames(path: Union[str, Path]) -> List[str]:
    return split_frames(Path(path).read_text(encoding="utf-8"))


def replay(
    frames: Sequence[str],
    write: Callable[[str], object],
    *,
    fps: float = 30.0,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Write each frame through ``write`` at ``fps``; returns the count shown."""

    delay = 1.0 / max(1.0, fps)
    shown = 0
    for frame in frames:
        write(frame)
        shown += 1
        sleep(delay)
    return shown

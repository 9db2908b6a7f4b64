"""Headless frame loop for running an interpreter without a window."""

from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from chip8core.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chip8core.interpreter import Interpreter, AdvanceResult

# frame index -> list of (key, pressed) events submitted before that frame
KeySchedule = Dict[int, List[Tuple[int, bool]]]


def run_frames(
    interpreter: Interpreter,
    num_frames: int,
    key_schedule: Optional[KeySchedule] = None,
    ticks_per_frame: Optional[int] = None,
    stop_on_error: bool = True,
    progress: bool = False,
    on_frame: Optional[Callable[[int, np.ndarray], None]] = None,
) -> Tuple[List[AdvanceResult], np.ndarray]:
    """Drive an interpreter for a number of frames.

    Each frame submits the scheduled key events, advances the interpreter,
    decays the timers once and snapshots the framebuffer.

    Args:
        interpreter: Interpreter with a program already loaded
        num_frames: Number of frames to run
        key_schedule: Key events to submit, keyed by frame index
        ticks_per_frame: Instructions per frame; defaults to the interpreter config
        stop_on_error: Stop after the first frame that reports a failure
        progress: Show a tqdm progress bar
        on_frame: Callback receiving (frame index, framebuffer) after every frame

    Returns:
        Tuple of per-frame advance results and a (frames, 32, 64) boolean array
    """
    key_schedule = key_schedule or {}
    results = []
    frames = []

    for frame in tqdm(range(num_frames), desc="Running frames", unit="frame", disable=not progress):
        for key, pressed in key_schedule.get(frame, ()):
            interpreter.submit_key(key, pressed)

        result = interpreter.advance(ticks_per_frame)
        interpreter.tick_timers()

        snapshot = interpreter.framebuffer()
        results.append(result)
        frames.append(snapshot)
        if on_frame is not None:
            on_frame(frame, snapshot)

        if not result.ok and stop_on_error:
            break

    if not frames:
        return results, np.zeros((0, SCREEN_HEIGHT, SCREEN_WIDTH), dtype=np.bool_)
    return results, np.stack(frames)

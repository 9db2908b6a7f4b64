"""Tests for the headless frame loop."""

import numpy as np
from chip8core import run_frames, UnknownOpcode, SCREEN_WIDTH, SCREEN_HEIGHT
from conftest import assemble


def test_frames_shape(interpreter):
    interpreter.load(assemble(0x1200))

    results, frames = run_frames(interpreter, 5)

    assert len(results) == 5
    assert all(result.ok for result in results)
    assert frames.shape == (5, SCREEN_HEIGHT, SCREEN_WIDTH)
    assert frames.dtype == np.bool_


def test_zero_frames(interpreter):
    interpreter.load(assemble(0x1200))
    results, frames = run_frames(interpreter, 0)
    assert results == []
    assert frames.shape == (0, SCREEN_HEIGHT, SCREEN_WIDTH)


def test_ticks_per_frame_override(interpreter):
    interpreter.load(assemble(0x7001, 0x1200))
    results, _ = run_frames(interpreter, 3, ticks_per_frame=2)
    assert [result.ticks_executed for result in results] == [2, 2, 2]
    assert interpreter.state.V[0] == 3


def test_stop_on_error(interpreter):
    interpreter.load(assemble(0x6001, 0xFFFF))

    results, frames = run_frames(interpreter, 10)

    assert len(results) == 1
    assert isinstance(results[0].error, UnknownOpcode)
    assert frames.shape[0] == 1


def test_keep_running_after_error(interpreter):
    interpreter.load(assemble(0xFFFF))
    results, _ = run_frames(interpreter, 3, stop_on_error=False)
    assert len(results) == 3
    assert not any(result.ok for result in results)


def test_key_schedule_unblocks_wait(interpreter):
    """A key pressed before frame 2 is picked up by FX0A."""
    interpreter.load(assemble(0xF30A, 0x1202))

    run_frames(interpreter, 3, key_schedule={2: [(0x9, True)]})

    assert interpreter.state.V[3] == 0x9
    assert interpreter.state.pc == 0x202


def test_timers_decay_once_per_frame(interpreter):
    interpreter.load(assemble(0x6005, 0xF015, 0x1204))
    run_frames(interpreter, 3)
    assert interpreter.state.delay_timer == 2


def test_on_frame_callback(interpreter):
    """Draws the font glyph for 0 in frame 0 and erases it in frame 1."""
    interpreter.load(assemble(0xA050, 0xD005, 0xD005, 0x1206))
    seen = []

    run_frames(interpreter, 2, ticks_per_frame=2,
               on_frame=lambda index, frame: seen.append((index, int(frame.sum()))))

    assert seen == [(0, 14), (1, 0)]


def test_progress_bar(interpreter):
    interpreter.load(assemble(0x1200))
    results, _ = run_frames(interpreter, 2, progress=True)
    assert len(results) == 2

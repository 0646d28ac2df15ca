"""Framebuffer conversion for the window and headless output."""

import numpy as np

from pychip8 import MachineState
from pychip8.display import OFF, ON, to_rgba, to_text


def test_to_rgba_shape_and_scale():
    state = MachineState()
    frame = to_rgba(state.display, scale=3)
    assert frame.shape == (32 * 3, 64 * 3, 4)
    assert frame.dtype == np.uint8
    assert (frame == np.array(OFF, dtype=np.uint8)).all()

def test_to_rgba_puts_row_zero_at_the_top():
    state = MachineState()
    state.display[0] = True  # (0, 0)
    frame = to_rgba(state.display, scale=2)
    assert tuple(frame[-1, 0]) == ON
    assert tuple(frame[-2, 1]) == ON
    assert tuple(frame[-3, 0]) == OFF
    assert tuple(frame[0, 0]) == OFF

    unflipped = to_rgba(state.display, scale=1, flip=False)
    assert tuple(unflipped[0, 0]) == ON

def test_to_text():
    state = MachineState()
    state.display[5 + 2 * 64] = True
    lines = to_text(state.display).split("\n")
    assert len(lines) == 32
    assert all(len(line) == 64 for line in lines)
    assert lines[2][5] == "#"
    assert lines[2].count("#") == 1

import numpy as np

from .config import HEIGHT, SCALE, WIDTH

ON = (255, 255, 255, 255)
OFF = (0, 0, 0, 255)


def to_rgba(display, scale=SCALE, flip=True):
    """Render the boolean framebuffer as a (HEIGHT*scale, WIDTH*scale, 4) uint8 array.

    pyglet images start at the bottom-left corner, so rows are flipped
    by default to keep row 0 at the top of the window.
    """
    grid = np.asarray(display, dtype=bool).reshape(HEIGHT, WIDTH)
    if flip:
        grid = grid[::-1]
    frame = np.where(grid[..., None], np.array(ON, dtype=np.uint8), np.array(OFF, dtype=np.uint8))
    if scale != 1:
        frame = np.repeat(np.repeat(frame, scale, axis=0), scale, axis=1)
    return np.ascontiguousarray(frame, dtype=np.uint8)


def to_text(display, on_pixel="#", off_pixel=" "):
    grid = np.asarray(display, dtype=bool).reshape(HEIGHT, WIDTH)
    return "\n".join(
        "".join(on_pixel if lit else off_pixel for lit in row) for row in grid
    )

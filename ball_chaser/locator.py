import numpy as np

from . import constants as const
from .frame import PixelCoordinate


def locate_target(frame, intensity=const.WHITE_PIXEL):
    """Return the first pixel, in row-major order, whose components all equal
    ``intensity``, or None if the frame has no such pixel.

    The scan stops at the first hit, so the result is biased toward the top-left
    of the ball rather than its center.
    """
    if frame.is_empty:
        return None

    # Validates the buffer before anything is read
    pixels = frame.pixels()
    is_white = np.all(pixels == intensity, axis=2)
    hits = np.flatnonzero(is_white)
    if hits.size == 0:
        return None

    row, column = divmod(int(hits[0]), frame.width)
    return PixelCoordinate(row, column)

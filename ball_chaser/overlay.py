import cv2
import numpy as np

from . import constants as const

# Channel order conversions to BGR, keyed by (encoding, components)
_TO_BGR = {
    ('rgb8', 3): cv2.COLOR_RGB2BGR,
    ('rgba8', 4): cv2.COLOR_RGBA2BGR,
    ('bgra8', 4): cv2.COLOR_BGRA2BGR,
}


def to_bgr(frame):
    """Copy of ``frame`` as a BGR image OpenCV can draw on."""
    pixels = frame.pixels()
    comps = frame.components
    if comps < 3:
        # mono8, or the first byte of a two byte pixel
        return cv2.cvtColor(np.ascontiguousarray(pixels[:, :, 0]), cv2.COLOR_GRAY2BGR)
    code = _TO_BGR.get((frame.encoding, comps))
    if code is not None:
        return cv2.cvtColor(pixels, code)
    if comps == 4:
        return cv2.cvtColor(pixels, cv2.COLOR_BGRA2BGR)
    return pixels[:, :, :3].copy()


def render_overlay(frame, target):
    """Frame with the center column and, if found, the target marked."""
    if frame.is_empty:
        return np.zeros((frame.height, frame.width, 3), dtype=np.uint8)

    image = to_bgr(frame)
    cx = frame.width // 2
    cv2.line(image, (cx, 0), (cx, frame.height - 1), const.CENTER_LINE_COLOR, 1)
    if target is not None:
        cv2.circle(image, (target.column, target.row), const.TARGET_RADIUS, const.TARGET_COLOR, 2)
    return image

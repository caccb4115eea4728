"""Immutable view over a raw camera frame.

Frames are assumed to carry 8-bit channels and no row padding, so the number
of components per pixel is derived as ``step // width``.
"""
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np


class MalformedFrameError(ValueError):
    """Raised when a frame's geometry does not match its buffer."""


class PixelCoordinate(NamedTuple):
    row: int
    column: int


@dataclass(frozen=True)
class ImageFrame:
    width: int
    height: int
    step: int
    data: bytes
    encoding: str = ''

    @classmethod
    def from_msg(cls, msg):
        """Build a frame from a ``sensor_msgs/Image`` message."""
        return cls(
            width=msg.width,
            height=msg.height,
            step=msg.step,
            data=bytes(msg.data),
            encoding=msg.encoding,
        )

    @property
    def is_empty(self):
        return self.width == 0 or self.height == 0

    @property
    def components(self):
        if self.width == 0:
            return 0
        return self.step // self.width

    def validate(self):
        """Raise MalformedFrameError unless the buffer can hold every pixel."""
        if self.width < 0 or self.height < 0 or self.step < 0:
            raise MalformedFrameError(
                f'negative frame geometry: width={self.width} '
                f'height={self.height} step={self.step}')
        if self.is_empty:
            return
        if self.step == 0 or self.step % self.width != 0:
            raise MalformedFrameError(
                f'row stride {self.step} is not a whole number of pixels '
                f'for width {self.width} (padded rows are not supported)')
        expected = self.step * self.height
        if len(self.data) < expected:
            raise MalformedFrameError(
                f'buffer holds {len(self.data)} bytes, '
                f'{self.height} rows of {self.step} bytes need {expected}')

    def pixels(self):
        """Read-only ``(height, width, components)`` uint8 view of the buffer."""
        self.validate()
        if self.is_empty:
            return np.empty((self.height, self.width, self.components), dtype=np.uint8)
        buf = np.frombuffer(self.data, dtype=np.uint8, count=self.step * self.height)
        return buf.reshape(self.height, self.width, self.components)

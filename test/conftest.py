"""
Test Configuration
==================

Pytest fixtures shared by the ball_chaser tests.
"""

from unittest.mock import MagicMock

import pytest

from ball_chaser.frame import ImageFrame


def build_frame(width, height, comps=3, fill=0, white=(), encoding='rgb8'):
    """Frame of ``fill`` bytes with the pixels listed in ``white`` saturated."""
    step = width * comps
    data = bytearray([fill]) * (step * height)
    for row, col in white:
        offset = step * row + col * comps
        data[offset:offset + comps] = b'\xff' * comps
    return ImageFrame(width=width, height=height, step=step, data=bytes(data), encoding=encoding)


@pytest.fixture
def make_frame():
    """Factory for synthetic frames; see build_frame for the arguments."""
    return build_frame


@pytest.fixture
def logger():
    """Stand-in for an rclpy logger."""
    return MagicMock(name='logger')


class RecordingActuator:
    """Actuator that remembers every command, optionally failing each send."""

    def __init__(self, error=None):
        self.sent = []
        self.error = error

    def send(self, cmd):
        self.sent.append(cmd)
        if self.error is not None:
            raise self.error


@pytest.fixture
def actuator():
    return RecordingActuator()


@pytest.fixture
def failing_actuator():
    from ball_chaser.drive import ActuatorError

    return RecordingActuator(error=ActuatorError('service /ball_chaser/command_robot is not available'))

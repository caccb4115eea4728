from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple

from . import constants as const
from .locator import locate_target


class DriveCommand(NamedTuple):
    linear_x: float
    angular_z: float


STOP = DriveCommand(0.0, 0.0)


class ActuatorError(RuntimeError):
    """Raised by an actuator when a drive command could not be delivered."""


def center_error(img_width, column):
    """How far ``column`` is from the image center as a fraction of half the width.

    Positive means the pixel is left of center, negative right of it. Half the
    width is taken with integer division so the center lines up with a pixel
    column: for a 5 pixel wide image column 2 is dead center.
    """
    half = img_width // 2
    if half == 0:
        return 0.0
    return (half - column) / half


def quantize_error(error, quantum=const.ERROR_QUANTUM):
    """Round ``error`` to the closest multiple of ``quantum``; ``quantum <= 0``
    leaves it untouched.

    Ties go away from zero, so 0.35 becomes 0.4 and -0.35 becomes -0.4. The
    arithmetic is done on the shortest decimal form of each float, which keeps
    ties exact where binary division by 0.1 would land either side of them.
    """
    if quantum <= 0:
        return error
    q = Decimal(repr(quantum))
    steps = (Decimal(repr(error)) / q).to_integral_value(rounding=ROUND_HALF_UP)
    return float(steps * q)


def decide_drive_command(img_width, column,
                         linear_x=const.LINEAR_X,
                         max_angular_z=const.MAX_ANGULAR_Z,
                         error_quantum=const.ERROR_QUANTUM):
    """Velocities that bring the pixel at ``column`` back to the image center."""
    error = quantize_error(center_error(img_width, column), error_quantum)
    ang_z = max(min(error * max_angular_z, max_angular_z), -max_angular_z)
    return DriveCommand(float(linear_x), float(ang_z))


class DriveCommandGenerator:
    """Turns frames into drive commands and forwards them to an actuator.

    ``actuator`` is anything with a ``send(DriveCommand)`` method that raises
    ActuatorError on failure. ``logger`` needs ``info`` and ``error``.
    Holds no per-frame state, so the same frame always yields the same command.
    """

    def __init__(self, actuator, logger,
                 linear_x=const.LINEAR_X,
                 max_angular_z=const.MAX_ANGULAR_Z,
                 error_quantum=const.ERROR_QUANTUM):
        self._actuator = actuator
        self._logger = logger
        self.linear_x = linear_x
        self.max_angular_z = max_angular_z
        self.error_quantum = error_quantum

    def decide(self, img_width, target):
        if target is None:
            return STOP
        cmd = decide_drive_command(
            img_width, target.column,
            linear_x=self.linear_x,
            max_angular_z=self.max_angular_z,
            error_quantum=self.error_quantum,
        )
        self._logger.info(
            f'target at row={target.row} col={target.column} '
            f'ang_z={cmd.angular_z:.3f}')
        return cmd

    def drive(self, cmd):
        """Forward ``cmd`` to the actuator; failures are logged, not raised."""
        try:
            self._actuator.send(cmd)
        except ActuatorError as e:
            self._logger.error(f'Failed to send drive command: {e}')

    def handle(self, frame):
        """Locate, decide and drive for one frame; returns ``(target, cmd)``."""
        target = locate_target(frame)
        cmd = self.decide(frame.width, target)
        self.drive(cmd)
        return target, cmd

    def process(self, frame):
        return self.handle(frame)[1]

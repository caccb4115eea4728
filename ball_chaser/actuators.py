"""Ways of handing a DriveCommand to the robot's motion controller."""
import rclpy

from .drive import ActuatorError


class ServiceActuator:
    """Calls the ``DriveToTarget`` service and waits for the reply.

    ``node`` must be a node of its own, not the one whose callback is calling
    ``send``: it is spun here until the reply arrives or ``timeout_sec`` runs
    out, which keeps a hung ``drive_bot`` from stalling the caller for good.
    """

    def __init__(self, node, srv_type, service_name, timeout_sec):
        self._node = node
        self._srv_type = srv_type
        self._service_name = service_name
        self._timeout_sec = timeout_sec
        self._cli = node.create_client(srv_type, service_name)

    def send(self, cmd):
        if not self._cli.service_is_ready():
            raise ActuatorError(f'service {self._service_name} is not available')

        req = self._srv_type.Request()
        req.linear_x = float(cmd.linear_x)
        req.angular_z = float(cmd.angular_z)

        fut = self._cli.call_async(req)
        rclpy.spin_until_future_complete(self._node, fut, timeout_sec=self._timeout_sec)

        if not fut.done():
            fut.cancel()
            raise ActuatorError(
                f'no reply from {self._service_name} within {self._timeout_sec:.2f}s')
        if fut.exception() is not None:
            raise ActuatorError(f'{self._service_name} failed: {fut.exception()}')
        if fut.result() is None:
            raise ActuatorError(f'{self._service_name} returned no result')
        return fut.result()


class TwistActuator:
    """Publishes the command straight to a velocity topic, no reply expected."""

    def __init__(self, node, topic, msg_type, qos=10):
        self._msg_type = msg_type
        self._vel_publisher = node.create_publisher(msg_type, topic, qos)

    def send(self, cmd):
        t = self._msg_type()
        t.linear.x = float(cmd.linear_x)
        t.angular.z = float(cmd.angular_z)
        self._vel_publisher.publish(t)
        return t

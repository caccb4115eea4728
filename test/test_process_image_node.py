import math
from types import SimpleNamespace

import pytest

rclpy = pytest.importorskip('rclpy')
pytest.importorskip('cv_bridge')
pytest.importorskip('ball_chaser_interfaces')

from rclpy.parameter import Parameter  # noqa: E402
from sensor_msgs.msg import CompressedImage, Image  # noqa: E402

from ball_chaser.actuators import ServiceActuator, TwistActuator  # noqa: E402
from ball_chaser.drive import STOP, DriveCommand, decide_drive_command  # noqa: E402
from ball_chaser.frame import MalformedFrameError  # noqa: E402
from ball_chaser.process_image_node import ProcessImageNode, main  # noqa: E402


@pytest.fixture
def ros():
    rclpy.init()
    yield
    rclpy.shutdown()


def make_node(actuator='twist', **params):
    overrides = [Parameter('actuator', value=actuator)]
    overrides += [Parameter(name, value=value) for name, value in params.items()]
    return ProcessImageNode(parameter_overrides=overrides)


def image_msg(width, height, white=(), comps=3):
    msg = Image()
    msg.width = width
    msg.height = height
    msg.step = width * comps
    msg.encoding = 'rgb8'
    data = bytearray(msg.step * height)
    for row, col in white:
        offset = msg.step * row + col * comps
        data[offset:offset + comps] = b'\xff' * comps
    msg.data = bytes(data)
    return msg


class TestProcessImageNode:

    def test_drives_toward_white_pixel(self, ros, actuator):
        node = make_node()
        node.generator._actuator = actuator
        try:
            node._image_callback(image_msg(8, 4, white=[(0, 5), (0, 2)]))
            assert len(actuator.sent) == 1
            assert actuator.sent[0].linear_x == 0.5
            assert actuator.sent[0].angular_z == pytest.approx(math.pi / 4)
        finally:
            node.destroy_node()

    def test_stops_without_target(self, ros, actuator):
        node = make_node()
        node.generator._actuator = actuator
        try:
            node._image_callback(image_msg(8, 4))
            assert actuator.sent == [STOP]
        finally:
            node.destroy_node()

    def test_parameters_reach_generator(self, ros, actuator):
        node = make_node(linear_x=0.2, max_angular_z=1.0, error_quantum=0.0)
        node.generator._actuator = actuator
        try:
            node._image_callback(image_msg(8, 1, white=[(0, 0)]))
            assert actuator.sent == [DriveCommand(0.2, 1.0)]
        finally:
            node.destroy_node()

    def test_malformed_frame_stops_then_raises(self, ros, actuator):
        node = make_node()
        node.generator._actuator = actuator
        msg = image_msg(4, 2)
        msg.step = 10
        try:
            with pytest.raises(MalformedFrameError):
                node._image_callback(msg)
            assert actuator.sent == [STOP]
        finally:
            node.destroy_node()

    def test_unknown_actuator_rejected(self, ros):
        with pytest.raises(ValueError, match='actuator must be one of'):
            ProcessImageNode(parameter_overrides=[Parameter('actuator', value='telepathy')])

    def test_twist_actuator_wiring(self, ros):
        node = make_node()
        try:
            assert isinstance(node.generator._actuator, TwistActuator)
            assert node._client_node is None
            assert node._debug_publisher is None
        finally:
            node.destroy_node()

    def test_debug_image_published_with_frame_header(self, ros, actuator):
        node = make_node(publish_debug_image=True)
        node.generator._actuator = actuator
        published = []
        node._debug_publisher = SimpleNamespace(publish=published.append)
        msg = image_msg(16, 8, white=[(4, 3)])
        msg.header.frame_id = 'camera_link'
        msg.header.stamp.sec = 12
        try:
            node._image_callback(msg)
            assert len(published) == 1
            debug_msg = published[0]
            assert isinstance(debug_msg, CompressedImage)
            assert debug_msg.header.frame_id == 'camera_link'
            assert debug_msg.header.stamp.sec == 12
            assert len(debug_msg.data) > 0
            assert 'jp' in debug_msg.format
            assert actuator.sent == [decide_drive_command(16, 3)]
        finally:
            node.destroy_node()

    def test_debug_image_off_by_default(self, ros, actuator):
        node = make_node()
        node.generator._actuator = actuator
        try:
            node._image_callback(image_msg(8, 4, white=[(1, 1)]))
            assert node.bridge is None
        finally:
            node.destroy_node()

    def test_service_actuator_uses_own_client_node(self, ros, monkeypatch):
        node = make_node(actuator='service', service_timeout_sec=0.5)
        client_node = node._client_node
        assert client_node is not None
        assert client_node.get_name() == 'process_image_drive_client'
        assert isinstance(node.generator._actuator, ServiceActuator)

        destroyed = []
        original = client_node.destroy_node

        def destroy_client():
            destroyed.append(client_node.get_name())
            return original()

        monkeypatch.setattr(client_node, 'destroy_node', destroy_client)
        node.destroy_node()
        assert destroyed == ['process_image_drive_client']

    def test_non_positive_timeout_rejected(self, ros):
        with pytest.raises(ValueError, match='service_timeout_sec'):
            make_node(actuator='service', service_timeout_sec=0.0)


def test_main_shuts_down_when_node_cannot_start():
    with pytest.raises(ValueError, match='actuator must be one of'):
        main(args=['--ros-args', '-p', 'actuator:=telepathy'])
    assert not rclpy.ok()

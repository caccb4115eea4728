#!/usr/bin/env python3
# process_image_node.py
# Drives the robot toward the first white pixel the camera sees.
# Subscribes: /camera/rgb/image_raw (Image)
# Calls:      /ball_chaser/command_robot (DriveToTarget), or publishes /cmd_vel (Twist)
# Publishes:  /ball_chaser/debug_image/compressed (CompressedImage), when enabled

import rclpy
from rclpy.node import Node
from sensor_msgs.msg import Image, CompressedImage
from geometry_msgs.msg import Twist
from cv_bridge import CvBridge
from ball_chaser_interfaces.srv import DriveToTarget

from . import constants as const
from .actuators import ServiceActuator, TwistActuator
from .drive import STOP, DriveCommandGenerator
from .frame import ImageFrame, MalformedFrameError
from .overlay import render_overlay


class ProcessImageNode(Node):
    def __init__(self, **kwargs):
        super().__init__('process_image', **kwargs)

        # Parameters
        self.declare_parameter('image_topic', const.RAW_IMAGE_TOPIC)
        self.declare_parameter('actuator', const.ACTUATOR_SERVICE)
        self.declare_parameter('command_service', const.COMMAND_ROBOT_SERVICE)
        self.declare_parameter('cmd_vel_topic', const.CMD_VEL_TOPIC)
        self.declare_parameter('service_timeout_sec', const.SERVICE_TIMEOUT_S)
        self.declare_parameter('linear_x', const.LINEAR_X)
        self.declare_parameter('max_angular_z', const.MAX_ANGULAR_Z)
        self.declare_parameter('error_quantum', const.ERROR_QUANTUM)
        self.declare_parameter('publish_debug_image', False)
        self.declare_parameter('debug_image_topic', const.DEBUG_IMAGE_TOPIC)

        image_topic = self.get_parameter('image_topic').get_parameter_value().string_value
        actuator_kind = self.get_parameter('actuator').get_parameter_value().string_value
        timeout_sec = self.get_parameter('service_timeout_sec').get_parameter_value().double_value
        linear_x = self.get_parameter('linear_x').get_parameter_value().double_value
        max_angular_z = self.get_parameter('max_angular_z').get_parameter_value().double_value
        error_quantum = self.get_parameter('error_quantum').get_parameter_value().double_value
        self.publish_debug_image = self.get_parameter('publish_debug_image').get_parameter_value().bool_value

        if actuator_kind not in const.ACTUATOR_KINDS:
            raise ValueError(
                f"actuator must be one of {', '.join(const.ACTUATOR_KINDS)}, got '{actuator_kind}'")
        if timeout_sec <= 0.0:
            raise ValueError(f'service_timeout_sec must be positive, got {timeout_sec}')
        if linear_x < 0.0 or max_angular_z < 0.0:
            raise ValueError('linear_x and max_angular_z must not be negative')

        # --- Actuator ---
        self._client_node = None
        if actuator_kind == const.ACTUATOR_SERVICE:
            # The client gets a node of its own so it can be spun from inside _image_callback
            self._client_node = rclpy.create_node(f'{self.get_name()}_drive_client')
            service = self.get_parameter('command_service').get_parameter_value().string_value
            actuator = ServiceActuator(self._client_node, DriveToTarget, service, timeout_sec)
        else:
            topic = self.get_parameter('cmd_vel_topic').get_parameter_value().string_value
            actuator = TwistActuator(self, topic, Twist)

        self.generator = DriveCommandGenerator(
            actuator, self.get_logger(),
            linear_x=linear_x,
            max_angular_z=max_angular_z,
            error_quantum=error_quantum,
        )

        # --- Subscriber & Publishers ---
        self._image_subscriber = self.create_subscription(
            Image, image_topic, self._image_callback, const.IMAGE_QUEUE_DEPTH)

        self.bridge = None
        self._debug_publisher = None
        if self.publish_debug_image:
            self.bridge = CvBridge()
            debug_topic = self.get_parameter('debug_image_topic').get_parameter_value().string_value
            self._debug_publisher = self.create_publisher(CompressedImage, debug_topic, 10)

        self.get_logger().info('Process Image Node is up and running')

    def _image_callback(self, msg):
        frame = ImageFrame.from_msg(msg)
        try:
            frame.validate()
        except MalformedFrameError as e:
            self.get_logger().error(f'Malformed image, stopping: {e}')
            self.generator.drive(STOP)
            raise

        target, _ = self.generator.handle(frame)

        if self._debug_publisher is not None:
            self._publish_debug_image(frame, target, msg.header)

    def _publish_debug_image(self, frame, target, header):
        image = render_overlay(frame, target)
        debug_msg = self.bridge.cv2_to_compressed_imgmsg(image, dst_format='jpg')
        debug_msg.header = header
        self._debug_publisher.publish(debug_msg)

    def destroy_node(self):
        if self._client_node is not None:
            self._client_node.destroy_node()
        super().destroy_node()


def main(args=None):
    rclpy.init(args=args)
    node = None
    try:
        node = ProcessImageNode()
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        if node is not None:
            node.destroy_node()
        rclpy.shutdown()


if __name__ == '__main__':
    main()

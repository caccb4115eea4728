# ball_chaser/constants.py
import math

# --- ROS Topic / Service Names ---
RAW_IMAGE_TOPIC = '/camera/rgb/image_raw'
COMMAND_ROBOT_SERVICE = '/ball_chaser/command_robot'
CMD_VEL_TOPIC = '/cmd_vel'
DEBUG_IMAGE_TOPIC = '/ball_chaser/debug_image/compressed'

# --- Image Processing Parameters ---
# A pixel is part of the ball only if every channel is saturated
WHITE_PIXEL = 255
IMAGE_QUEUE_DEPTH = 10

# --- Robot Control Parameters ---
# Constant forward speed while the ball is in view (m/s)
LINEAR_X = 0.5
# Maximum turn rate (rad/s)
MAX_ANGULAR_Z = math.pi / 2
# Error is rounded to the closest multiple of this to reduce rotation noise
ERROR_QUANTUM = 0.1

# --- Actuator ---
ACTUATOR_SERVICE = 'service'
ACTUATOR_TWIST = 'twist'
ACTUATOR_KINDS = (ACTUATOR_SERVICE, ACTUATOR_TWIST)
SERVICE_TIMEOUT_S = 1.0

# --- Debug Overlay ---
CENTER_LINE_COLOR = (255, 0, 0)  # BGR
TARGET_COLOR = (0, 0, 255)  # BGR
TARGET_RADIUS = 7

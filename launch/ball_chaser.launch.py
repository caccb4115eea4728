#!/usr/bin/env python3
# ball_chaser.launch.py
# Starts the process_image node with config/params.yaml

from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration, PathJoinSubstitution
from launch_ros.actions import Node
from launch_ros.substitutions import FindPackageShare


def generate_launch_description():
    """
    Assumes the robot, its camera and a drive_bot node serving
    /ball_chaser/command_robot are already running.
    """
    use_sim_time = LaunchConfiguration('use_sim_time')
    params = PathJoinSubstitution(
        [FindPackageShare('ball_chaser'), 'config', 'params.yaml']
    )

    return LaunchDescription([
        DeclareLaunchArgument('use_sim_time', default_value='false'),
        Node(
            package='ball_chaser',
            executable='process_image',
            name='process_image',
            output='screen',
            emulate_tty=True,
            parameters=[params, {'use_sim_time': use_sim_time}],
        ),
    ])

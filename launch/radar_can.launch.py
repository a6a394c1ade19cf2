import os

from ament_index_python.packages import get_package_prefix, get_package_share_directory
from launch import LaunchDescription
from launch.actions import ExecuteProcess, IncludeLaunchDescription, LogInfo, RegisterEventHandler
from launch.event_handlers import OnProcessExit
from launch.launch_description_sources import PythonLaunchDescriptionSource

from radar_can_setup.config import DEFAULT_CONFIG
from radar_can_setup.launcher import PACKAGE_NAME, setup_executable


def generate_launch_description():
    # needs root: sudo -E ros2 launch radar_can_setup radar_can.launch.py
    # absolute path, lib/<pkg> is not on PATH (and sudo resets PATH anyway)
    setup_can = ExecuteProcess(
        cmd=[setup_executable(get_package_prefix(PACKAGE_NAME)), 'setup'],
        name='setup_radar_can',
        output='screen',
    )

    driver_launch = os.path.join(
        get_package_share_directory(DEFAULT_CONFIG.driver_package),
        'launch',
        DEFAULT_CONFIG.driver_launch_file,
    )

    def on_setup_exit(event, context):
        if event.returncode != 0:
            return [LogInfo(msg=f'CAN setup failed (exit {event.returncode}), radar driver not started')]
        return [IncludeLaunchDescription(PythonLaunchDescriptionSource(driver_launch))]

    return LaunchDescription([
        setup_can,
        RegisterEventHandler(OnProcessExit(target_action=setup_can, on_exit=on_setup_exit)),
    ])

import os

from ament_index_python.packages import get_package_share_directory
from launch import LaunchDescription
from launch_ros.actions import Node
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration


def generate_launch_description():
    default_params = os.path.join(
        get_package_share_directory('depth_follower'), 'config', 'follower_params.yaml'
    )
    params_file = LaunchConfiguration('params_file', default=default_params)

    declare_params_cmd = DeclareLaunchArgument(
        'params_file',
        default_value=default_params,
        description='Bounding box and enable parameters for the follower'
    )

    return LaunchDescription([
        declare_params_cmd,

        Node(
            package='depth_follower',
            executable='depth_follower_node',
            name='depth_follower',
            output='screen',
            parameters=[params_file],
            remappings=[
                ('depth/image_rect', '/camera/depth/image_rect_raw'),
                ('blobs/count', '/blobs/count'),
                ('cmd_vel', '/cmd_vel'),
            ],
        ),
    ])

"""
Depth Follower Package

A ROS2 package that follows a color-blob target using a depth camera,
circumventing obstacles with a timed turn-then-advance maneuver.

Modules:
    config          - Configuration constants and the FollowerConfig record
    states          - Controller states and change-state vocabulary
    depth_frame     - Depth frame container and decoding
    geometry        - Pixel-to-angle sine tables
    centroid        - Bounding box centroid extraction
    presence        - Target visibility from blob reports
    motion          - Velocity command record
    avoidance       - Obstacle avoidance state machine
    markers         - Visualization geometry
    follower        - Host-agnostic follower component

Main Nodes:
    follower_node   - ROS2 host

Usage:
    ros2 run depth_follower depth_follower_node

Import example:
    from depth_follower.config import FollowerConfig
    from depth_follower.follower import DepthFollower
"""

__version__ = '0.1.0'

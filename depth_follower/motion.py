#!/usr/bin/env python3
"""
motion.py - Velocity command record for Depth Follower

MotionCommand is transport-neutral; the ROS host turns it into a Twist.
"""

from dataclasses import dataclass

from .config import (
    AVOID_TURN_SPEED,
    AVOID_FORWARD_SPEED,
    APPROACH_SPEED,
    SEARCH_ROTATION_SPEED,
)


@dataclass(frozen=True)
class MotionCommand:
    """Forward velocity (m/s) and yaw rate (rad/s)."""
    linear_x: float = 0.0
    angular_z: float = 0.0

    @classmethod
    def stop(cls) -> 'MotionCommand':
        return cls()

    @classmethod
    def rotate(cls, speed: float) -> 'MotionCommand':
        return cls(angular_z=float(speed))

    @classmethod
    def forward(cls, speed: float) -> 'MotionCommand':
        return cls(linear_x=float(speed))


STOP = MotionCommand.stop()
SEARCH = MotionCommand.rotate(SEARCH_ROTATION_SPEED)
APPROACH = MotionCommand.forward(APPROACH_SPEED)
AVOID_TURN = MotionCommand.rotate(AVOID_TURN_SPEED)
AVOID_FORWARD = MotionCommand.forward(AVOID_FORWARD_SPEED)

#!/usr/bin/env python3
"""
states.py - State definitions for Depth Follower

Defines the controller states reported each frame and the vocabulary of the
enable/disable request channel.
"""

from enum import Enum, IntEnum


class FollowerState(str, Enum):
    """
    Controller state for one processed frame.

    - SEARCHING: No obstacle, target not visible; rotate in place
    - APPROACHING: No obstacle, target visible; drive forward
    - TURNING: Circumventing an obstacle, first phase (rotate)
    - ADVANCING: Circumventing an obstacle, second phase (drive forward)
    - GOAL_REACHED: Something is in the box and it is the target; stop
    - DISABLED: Following switched off; no motion commands
    """
    SEARCHING = "SEARCHING"
    APPROACHING = "APPROACHING"
    TURNING = "TURNING"
    ADVANCING = "ADVANCING"
    GOAL_REACHED = "GOAL_REACHED"
    DISABLED = "DISABLED"


class FollowState(IntEnum):
    """Desired state carried by a change-state request."""
    STOPPED = 0
    FOLLOW = 1


class ChangeStateResult(IntEnum):
    """Result code carried by a change-state response."""
    OK = 0



def follow_state_from_bool(follow: bool) -> FollowState:
    """Map a boolean request (True = follow) onto FollowState."""
    return FollowState.FOLLOW if follow else FollowState.STOPPED

#!/usr/bin/env python3
"""
avoidance.py - Obstacle avoidance state machine for Depth Follower

Turns the per-frame centroid, target visibility and the persisted
ControllerState into the next MotionCommand.

State Machine (enabled):
    obstacle-or-near, target hidden  -> TURNING -> ADVANCING -> reset (stop)
    obstacle-or-near, target visible -> GOAL_REACHED (stop)
    clear, target visible            -> APPROACHING
    clear, target hidden             -> SEARCHING

"Obstacle-or-near" holds when more than OBSTACLE_POINT_THRESHOLD points are
in the box, or while an avoidance cycle is already running. Once started, a
cycle runs to completion on its own frame counter.

GOAL_REACHED leaves currently_avoiding as it was. If the target is lost
afterwards with the flag still set, the controller goes straight back into
the avoidance cycle.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from .centroid import Centroid
from .config import (
    OBSTACLE_POINT_THRESHOLD,
    TURN_THRES,
    AVOID_TURN_SPEED,
)
from .motion import MotionCommand, STOP, SEARCH, APPROACH, AVOID_FORWARD
from .states import FollowerState


@dataclass(frozen=True)
class ControllerState:
    """Memory carried from one frame to the next."""
    currently_avoiding: bool = False
    turn_counter: int = 0
    direction: int = 1  # +1 turns left, -1 turns right


INITIAL_STATE = ControllerState()


@dataclass(frozen=True)
class ControlDecision:
    """Outcome of one controller step."""
    state: ControllerState
    phase: FollowerState
    command: Optional[MotionCommand]


class AvoidanceController:
    """
    Finite-state controller for reactive following with obstacle avoidance.

    The controller itself is stateless; callers pass the ControllerState in
    and keep the one handed back in the ControlDecision.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 point_threshold: int = OBSTACLE_POINT_THRESHOLD,
                 turn_threshold: int = TURN_THRES):
        """
        Initialize avoidance controller.

        Args:
            logger: Optional logger
            point_threshold: Accepted points above which the box holds an obstacle
            turn_threshold: Frames spent turning, and then advancing
        """
        self._logger = logger or logging.getLogger(__name__)
        self._point_threshold = point_threshold
        self._turn_threshold = turn_threshold

    def is_obstacle_or_near(self, state: ControllerState, count: int) -> bool:
        return count > self._point_threshold or state.currently_avoiding

    def step(self, state: ControllerState, centroid: Centroid,
             target_visible: bool, enabled: bool = True) -> ControlDecision:
        """
        Advance the controller by one frame.

        Args:
            state: State produced by the previous step
            centroid: This frame's centroid
            target_visible: Latest target presence flag
            enabled: Following enabled flag

        Returns:
            ControlDecision; command is None when disabled
        """
        if not enabled:
            return ControlDecision(state, FollowerState.DISABLED, None)

        obstacle = self.is_obstacle_or_near(state, centroid.count)
        self._logger.debug(
            f"[AVOID] points={centroid.count} obstacle={obstacle} "
            f"target={target_visible} counter={state.turn_counter}"
        )
        return self.decide(state, obstacle, target_visible)

    def decide(self, state: ControllerState, obstacle_or_near: bool,
               target_visible: bool) -> ControlDecision:
        """Transition table, evaluated for an enabled controller."""
        if obstacle_or_near and not target_visible:
            return self._avoid(state)

        if obstacle_or_near:
            self._logger.debug("[AVOID] Reached goal")
            return ControlDecision(state, FollowerState.GOAL_REACHED, STOP)

        if target_visible:
            return ControlDecision(
                replace(state, turn_counter=0), FollowerState.APPROACHING, APPROACH
            )

        return ControlDecision(state, FollowerState.SEARCHING, SEARCH)

    def _avoid(self, state: ControllerState) -> ControlDecision:
        counter = state.turn_counter

        if counter < self._turn_threshold:
            if counter == 0:
                self._logger.info("[AVOID] Obstacle ahead, turning away")
            turn = MotionCommand.rotate(AVOID_TURN_SPEED * state.direction)
            return ControlDecision(
                replace(state, currently_avoiding=True, turn_counter=counter + 1),
                FollowerState.TURNING,
                turn,
            )

        if counter < 2 * self._turn_threshold:
            if counter == self._turn_threshold:
                self._logger.info("[AVOID] Turn complete, advancing past obstacle")
            return ControlDecision(
                replace(state, currently_avoiding=True, turn_counter=counter + 1),
                FollowerState.ADVANCING,
                AVOID_FORWARD,
            )

        # Obstacle should be out of sight by now
        self._logger.info("[AVOID] Avoidance cycle complete, resetting")
        return ControlDecision(
            replace(state, currently_avoiding=False, turn_counter=0),
            FollowerState.ADVANCING,
            STOP,
        )

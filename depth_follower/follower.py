#!/usr/bin/env python3
"""
follower.py - Host-agnostic depth follower component

Wires the pieces together for one frame:

    FollowerConfig (box) -> extract_centroid (sine tables per frame size)
        -> AvoidanceController (+ target presence, enabled flag) -> MotionCommand

Blob reports, reconfiguration and enable/disable requests may arrive on other
threads. They only touch state guarded by a single lock; a frame scans a
snapshot of the configuration outside the lock and applies the controller
step under it.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Tuple

from .avoidance import AvoidanceController, ControllerState, INITIAL_STATE
from .centroid import BoundingBox, Centroid, extract_centroid
from .config import FollowerConfig
from .depth_frame import DepthFrame, MalformedFrameError
from .markers import MarkerGeometry, centroid_marker, bbox_marker
from .motion import MotionCommand, STOP
from .presence import TargetPresenceTracker
from .states import FollowerState, FollowState, ChangeStateResult


@dataclass(frozen=True)
class FrameResult:
    """Everything derived from one processed frame."""
    centroid: Centroid
    phase: FollowerState
    command: Optional[MotionCommand]
    controller_state: ControllerState
    markers: Tuple[MarkerGeometry, ...] = ()


class DepthFollower:
    """
    Follow a visual target from depth frames while avoiding obstacles.

    Usage:
        follower = DepthFollower(FollowerConfig())
        follower.update_blobs(blob_count)
        cmd = follower.process_frame(frame)
        if cmd is not None:
            cmd_vel_pub.publish(to_twist(cmd))
    """

    def __init__(self, config: Optional[FollowerConfig] = None,
                 logger: Optional[logging.Logger] = None,
                 controller: Optional[AvoidanceController] = None):
        """
        Initialize follower.

        Args:
            config: Initial configuration (defaults if None)
            logger: Optional logger, shared with the sub-components
            controller: Avoidance controller (default thresholds if None)
        """
        self._logger = logger or logging.getLogger(__name__)
        self._config = (config or FollowerConfig()).validate()
        self._controller = controller or AvoidanceController(logger=self._logger)
        self._presence = TargetPresenceTracker(logger=self._logger)
        self._state = INITIAL_STATE
        self._phase: Optional[FollowerState] = None
        # Whether the motion sink is live; cleared once the stop for a
        # disable has been emitted
        self._commanding = self._config.enabled
        self._lock = threading.Lock()

    # ==================== Input channels ====================

    def configure(self, config: FollowerConfig):
        """
        Replace the whole configuration.

        Raises:
            ConfigError: if the new configuration is invalid; the previous
                one stays in effect
        """
        config.validate()
        with self._lock:
            self._config = config
        self._logger.info(
            f"[CONFIG] box x=({config.min_x:.2f}, {config.max_x:.2f}) "
            f"y=({config.min_y:.2f}, {config.max_y:.2f}) max_z={config.max_z:.2f} "
            f"enabled={config.enabled}"
        )

    def update_blobs(self, blob_count: int) -> bool:
        """Record a blob detector report; returns the new visibility flag."""
        with self._lock:
            return self._presence.update(blob_count)

    def set_enabled(self, enabled: bool) -> Optional[MotionCommand]:
        """
        Switch following on or off.

        Returns:
            A stop command when following was enabled and is now disabled,
            otherwise None
        """
        with self._lock:
            was_enabled = self._config.enabled
            if was_enabled and not enabled:
                self._config = self._config.replace(enabled=False)
                self._commanding = False
                self._logger.info("[STATE] Following stopped")
                return STOP
            if not was_enabled and enabled:
                self._config = self._config.replace(enabled=True)
                self._logger.info("[STATE] Following (re)started")
            return None

    def change_state(self, requested: FollowState) -> Tuple[ChangeStateResult, Optional[MotionCommand]]:
        """Request/response form of set_enabled."""
        cmd = self.set_enabled(requested == FollowState.FOLLOW)
        return ChangeStateResult.OK, cmd

    # ==================== Frame processing ====================

    def process_frame(self, frame: DepthFrame) -> Optional[MotionCommand]:
        """
        Process one depth frame.

        Returns:
            The command to publish, or None when nothing should be published
            (disabled, or the frame was malformed)
        """
        result = self.process_frame_detailed(frame)
        return result.command if result is not None else None

    def process_frame_detailed(self, frame: DepthFrame) -> Optional[FrameResult]:
        """
        Process one depth frame and return the centroid, phase and markers too.

        Returns:
            FrameResult, or None if the frame was malformed and dropped
        """
        with self._lock:
            config = self._config

        try:
            centroid = extract_centroid(frame, BoundingBox.from_config(config))
        except MalformedFrameError as e:
            self._logger.warning(f"[FRAME] Dropping malformed frame: {e}")
            return None

        with self._lock:
            enabled = self._config.enabled
            decision = self._controller.step(
                self._state, centroid, self._presence.visible, enabled
            )
            command = decision.command
            if enabled:
                self._commanding = True
            elif self._commanding:
                # Disabled since the last frame without an explicit request
                self._commanding = False
                command = STOP
            self._state = decision.state
            if decision.phase != self._phase:
                previous = self._phase.value if self._phase else 'START'
                self._logger.info(f"[STATE] {previous} -> {decision.phase.value}")
                self._phase = decision.phase
            state = self._state

        return FrameResult(
            centroid=centroid,
            phase=decision.phase,
            command=command,
            controller_state=state,
            markers=(centroid_marker(centroid), bbox_marker(config)),
        )

    # ==================== Accessors ====================

    @property
    def config(self) -> FollowerConfig:
        with self._lock:
            return self._config

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    @property
    def controller_state(self) -> ControllerState:
        with self._lock:
            return self._state

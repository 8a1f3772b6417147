#!/usr/bin/env python3
"""
config.py - Configuration constants for Depth Follower

All tunables in one place, plus the FollowerConfig record that holds the
reconfigurable bounding box geometry and scale factors.
"""

from dataclasses import dataclass, asdict, replace as _replace


# =============================================================================
# BOUNDING BOX DEFAULTS (camera-relative meters)
# =============================================================================
DEFAULT_MIN_X = -0.2             # Left edge of the point-of-interest box
DEFAULT_MAX_X = 0.2              # Right edge
DEFAULT_MIN_Y = 0.1              # Bottom edge (y is up)
DEFAULT_MAX_Y = 0.5              # Top edge
DEFAULT_MAX_Z = 0.8              # Farthest depth accepted into the box
DEFAULT_GOAL_Z = 1.2             # Distance to hold the centroid (proportional mode only)
DEFAULT_Z_SCALE = 1.0            # Translational speed scale (proportional mode only)
DEFAULT_X_SCALE = 5.0            # Rotational speed scale (proportional mode only)
DEFAULT_ENABLED = True

# =============================================================================
# CAMERA FIELD OF VIEW
# =============================================================================
# Angles are in degrees converted with the 57 deg/rad approximation.
HORIZONTAL_FOV_DEG = 60.0
VERTICAL_FOV_DEG = 45.0
DEG_PER_RAD = 57.0

# =============================================================================
# OBSTACLE AVOIDANCE
# =============================================================================
OBSTACLE_POINT_THRESHOLD = 3000  # Accepted points above this => obstacle
TURN_THRES = 90                  # Frames spent in each avoidance phase

# =============================================================================
# MOTION SPEEDS
# =============================================================================
AVOID_TURN_SPEED = 0.6           # rad/s while turning away from an obstacle
AVOID_FORWARD_SPEED = 0.3        # m/s while advancing past an obstacle
APPROACH_SPEED = 0.5             # m/s toward a visible target
SEARCH_ROTATION_SPEED = 0.5      # rad/s rotating in place to find the target

# =============================================================================
# DEPTH ENCODINGS
# =============================================================================
MM_TO_M = 0.001                  # 16UC1 samples are millimetres

# =============================================================================
# VISUALIZATION
# =============================================================================
MARKER_FRAME_ID = 'camera_rgb_optical_frame'
MARKER_NAMESPACE = 'depth_follower'
CENTROID_MARKER_SIZE = 0.2

# =============================================================================
# TOPICS & SERVICES (relative, remap in launch)
# =============================================================================
DEPTH_TOPIC = 'depth/image_rect'
BLOB_COUNT_TOPIC = 'blobs/count'
CMD_VEL_TOPIC = 'cmd_vel'
MARKER_TOPIC = 'marker'
BBOX_TOPIC = 'bbox'
CHANGE_STATE_SERVICE = 'change_state'


class ConfigError(ValueError):
    """Raised when a configuration violates the bounding box invariants."""


@dataclass(frozen=True)
class FollowerConfig:
    """
    Bounding box geometry, scale factors and the enabled flag.

    Replaced wholesale on every reconfiguration. goal_z, z_scale and x_scale
    are carried as configuration surface only; the avoidance controller
    does not read them.
    """
    min_x: float = DEFAULT_MIN_X
    max_x: float = DEFAULT_MAX_X
    min_y: float = DEFAULT_MIN_Y
    max_y: float = DEFAULT_MAX_Y
    max_z: float = DEFAULT_MAX_Z
    goal_z: float = DEFAULT_GOAL_Z
    z_scale: float = DEFAULT_Z_SCALE
    x_scale: float = DEFAULT_X_SCALE
    enabled: bool = DEFAULT_ENABLED

    def validate(self) -> 'FollowerConfig':
        """
        Check the geometry invariants.

        Returns:
            self, so construction can be chained

        Raises:
            ConfigError: if min_x >= max_x, min_y >= max_y or max_z <= 0
        """
        if not self.min_x < self.max_x:
            raise ConfigError(
                f"min_x ({self.min_x}) must be less than max_x ({self.max_x})"
            )
        if not self.min_y < self.max_y:
            raise ConfigError(
                f"min_y ({self.min_y}) must be less than max_y ({self.max_y})"
            )
        if not self.max_z > 0:
            raise ConfigError(f"max_z ({self.max_z}) must be positive")
        return self

    def replace(self, **changes) -> 'FollowerConfig':
        """Return a validated copy with the given fields changed."""
        return _replace(self, **changes).validate()

    def with_parameters(self, items) -> 'FollowerConfig':
        """
        Merge (name, value) pairs over this configuration.

        enabled is coerced to bool and every other field to float. Names
        that are not configuration fields are ignored.

        Raises:
            ConfigError: if the merged configuration is invalid
        """
        values = self.as_dict()
        for name, value in items:
            if name not in values:
                continue
            values[name] = bool(value) if name == 'enabled' else float(value)
        return FollowerConfig(**values).validate()

    def as_dict(self) -> dict:
        return asdict(self)


# Names of the fields exposed as ROS parameters, in declaration order.
PARAMETER_NAMES = tuple(FollowerConfig.__dataclass_fields__.keys())

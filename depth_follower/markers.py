#!/usr/bin/env python3
"""
markers.py - Visualization geometry for Depth Follower

Pure data describing the centroid and bounding box markers. The ROS host
turns these into visualization_msgs/Marker messages.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from .centroid import Centroid
from .config import FollowerConfig, CENTROID_MARKER_SIZE, MARKER_FRAME_ID


SPHERE = 'sphere'
CUBE = 'cube'

CENTROID_MARKER_ID = 0
BBOX_MARKER_ID = 1


@dataclass(frozen=True)
class MarkerGeometry:
    """Shape, pose and color of one marker."""
    marker_id: int
    shape: str
    position: Tuple[float, float, float]
    scale: Tuple[float, float, float]
    color: Tuple[float, float, float, float]  # r, g, b, a
    frame_id: str = MARKER_FRAME_ID


def centroid_marker(centroid: Centroid) -> MarkerGeometry:
    """Red sphere at the centroid; an empty observation is drawn at z = 0."""
    z = centroid.z if math.isfinite(centroid.z) else 0.0
    size = CENTROID_MARKER_SIZE
    return MarkerGeometry(
        marker_id=CENTROID_MARKER_ID,
        shape=SPHERE,
        position=(centroid.x, centroid.y, z),
        scale=(size, size, size),
        color=(1.0, 0.0, 0.0, 1.0),
    )


def bbox_marker(config: FollowerConfig) -> MarkerGeometry:
    """Translucent green cube spanning the bounding box from the camera to max_z."""
    x = (config.min_x + config.max_x) / 2.0
    y = (config.min_y + config.max_y) / 2.0
    z = config.max_z / 2.0
    return MarkerGeometry(
        marker_id=BBOX_MARKER_ID,
        shape=CUBE,
        # y is up in the box, down in the optical frame
        position=(x, -y, z),
        scale=(
            (config.max_x - x) * 2.0,
            (config.max_y - y) * 2.0,
            (config.max_z - z) * 2.0,
        ),
        color=(0.0, 1.0, 0.0, 0.5),
    )

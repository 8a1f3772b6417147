#!/usr/bin/env python3
"""
centroid.py - Bounding box centroid extraction for Depth Follower

Scans the processed half of a depth frame, keeps the samples that project
inside the configured bounding box and reduces them to a mean x/y, the
nearest accepted depth and a point count.
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import FollowerConfig
from .depth_frame import DepthFrame, MalformedFrameError
from .geometry import SinTables, compute_sin_tables


# z of an empty observation: nothing accepted, so no range.
NO_OBSERVATION_Z = math.inf


@dataclass(frozen=True)
class BoundingBox:
    """Camera-relative region of interest in meters."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    max_z: float

    @classmethod
    def from_config(cls, config: FollowerConfig) -> 'BoundingBox':
        return cls(min_x=config.min_x, max_x=config.max_x,
                   min_y=config.min_y, max_y=config.max_y,
                   max_z=config.max_z)


@dataclass(frozen=True)
class Centroid:
    """Mean x/y, minimum depth and number of accepted points."""
    x: float = 0.0
    y: float = 0.0
    z: float = NO_OBSERVATION_Z
    count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.count == 0


EMPTY_CENTROID = Centroid()


def extract_centroid(frame: DepthFrame,
                     box: BoundingBox,
                     tables: Optional[SinTables] = None) -> Centroid:
    """
    Compute the centroid of the samples inside box.

    A sample is skipped when it is invalid or deeper than box.max_z. It is
    accepted when min_y < y < max_y and min_x < x < max_x (boundaries
    excluded), with x = sin_x[u] * depth and y = sin_y[v] * depth.

    Args:
        frame: Depth frame to scan
        box: Region of interest
        tables: Precomputed sine tables; built from the frame size if None

    Returns:
        Centroid; count == 0 yields x = y = 0 and z = NO_OBSERVATION_Z

    Raises:
        MalformedFrameError: if the frame is inconsistent or the tables do not
            match its size
    """
    meters = frame.to_meters()
    if tables is None:
        tables = compute_sin_tables(frame.width, frame.height)
    if tables.half_width != frame.width // 2 or tables.height != frame.height:
        raise MalformedFrameError(
            f"Sine tables ({tables.half_width}x{tables.height}) do not match "
            f"frame {frame.width}x{frame.height}"
        )

    depth = meters[:, :tables.half_width]
    if depth.size == 0:
        return EMPTY_CENTROID

    x_val = tables.sin_x[np.newaxis, :] * depth
    y_val = tables.sin_y[:, np.newaxis] * depth

    # NaN compares False, so invalid samples drop out here too
    with np.errstate(invalid='ignore'):
        accepted = (
            (depth <= box.max_z)
            & (y_val > box.min_y) & (y_val < box.max_y)
            & (x_val > box.min_x) & (x_val < box.max_x)
        )

    count = int(np.count_nonzero(accepted))
    if count == 0:
        return EMPTY_CENTROID

    return Centroid(
        x=float(x_val[accepted].sum() / count),
        y=float(y_val[accepted].sum() / count),
        z=float(depth[accepted].min()),
        count=count,
    )

#!/usr/bin/env python3
"""
geometry.py - Pixel-to-angle projection tables for Depth Follower

Precomputes per-column and per-row sines so a (pixel, depth) sample can be
turned into a lateral and vertical offset from the camera axis.

Only the left half of the image columns is covered: the processed width is
floor(W / 2). The vertical angle step is also divided by that half width
rather than by the image height. Both match the behaviour of the deployed
follower and are kept as-is.
"""

from dataclasses import dataclass

import numpy as np

from .config import HORIZONTAL_FOV_DEG, VERTICAL_FOV_DEG, DEG_PER_RAD


@dataclass(frozen=True)
class SinTables:
    """Lookup tables for one frame resolution."""
    sin_x: np.ndarray  # shape (half_width,)
    sin_y: np.ndarray  # shape (height,)

    @property
    def half_width(self) -> int:
        return int(self.sin_x.shape[0])

    @property
    def height(self) -> int:
        return int(self.sin_y.shape[0])


def angle_steps(width: int):
    """
    Radians per pixel for a frame of the given width.

    Returns:
        (x_radians_per_pixel, y_radians_per_pixel); both 0.0 when the
        processed half width is empty
    """
    half_width = width // 2
    if half_width == 0:
        return 0.0, 0.0
    x_step = HORIZONTAL_FOV_DEG / DEG_PER_RAD / half_width
    y_step = VERTICAL_FOV_DEG / DEG_PER_RAD / half_width
    return x_step, y_step


def compute_sin_tables(width: int, height: int) -> SinTables:
    """
    Build the sine tables for a width x height frame.

    sin_x[u] = sin((u - half_width) * x_step)  for u in [0, half_width)
    sin_y[v] = sin((height / 2 - v) * y_step)  for v in [0, height)

    y grows upward, hence the opposite sign to x.
    """
    if width < 0 or height < 0:
        raise ValueError(f"Frame size must be non-negative, got {width}x{height}")

    half_width = width // 2
    x_step, y_step = angle_steps(width)

    u = np.arange(half_width, dtype=np.float64)
    v = np.arange(height, dtype=np.float64)
    sin_x = np.sin((u - half_width) * x_step)
    sin_y = np.sin((height / 2.0 - v) * y_step)
    return SinTables(sin_x=sin_x, sin_y=sin_y)


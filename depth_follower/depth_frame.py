#!/usr/bin/env python3
"""
depth_frame.py - Depth frame container for Depth Follower

Wraps a row-major depth buffer (as delivered by a depth camera driver) and
converts it to a 2D array of meters with invalid samples marked as NaN.
"""

from dataclasses import dataclass

import numpy as np

from .config import MM_TO_M


ENCODING_32FC1 = '32FC1'
ENCODING_16UC1 = '16UC1'

# encoding -> (numpy dtype char, bytes per sample)
SUPPORTED_ENCODINGS = {
    ENCODING_32FC1: ('f4', 4),
    ENCODING_16UC1: ('u2', 2),
}


class MalformedFrameError(ValueError):
    """Raised when a frame's dimensions, stride or buffer are inconsistent."""


@dataclass(frozen=True)
class DepthFrame:
    """
    One depth image.

    step is the row stride in bytes and may include padding past
    width * bytes_per_sample.
    """
    width: int
    height: int
    step: int
    data: bytes
    encoding: str = ENCODING_32FC1
    is_bigendian: bool = False

    @classmethod
    def from_array(cls, depth: np.ndarray, encoding: str = ENCODING_32FC1) -> 'DepthFrame':
        """Build a tightly packed frame from a (height, width) array."""
        if encoding not in SUPPORTED_ENCODINGS:
            raise MalformedFrameError(f"Unsupported depth encoding '{encoding}'")
        dtype_char, size = SUPPORTED_ENCODINGS[encoding]
        arr = np.ascontiguousarray(depth, dtype='<' + dtype_char)
        if arr.ndim != 2:
            raise MalformedFrameError(f"Depth array must be 2D, got shape {arr.shape}")
        height, width = arr.shape
        return cls(width=width, height=height, step=width * size,
                   data=arr.tobytes(), encoding=encoding)

    def to_meters(self) -> np.ndarray:
        """
        Decode the buffer into a (height, width) float64 array of meters.

        Invalid samples (non-finite floats, zero millimetre readings) become NaN.

        Raises:
            MalformedFrameError: if the frame cannot be decoded
        """
        if self.encoding not in SUPPORTED_ENCODINGS:
            raise MalformedFrameError(f"Unsupported depth encoding '{self.encoding}'")
        dtype_char, size = SUPPORTED_ENCODINGS[self.encoding]

        if self.width <= 0 or self.height <= 0:
            raise MalformedFrameError(
                f"Invalid frame size {self.width}x{self.height}"
            )
        if self.step < self.width * size or self.step % size != 0:
            raise MalformedFrameError(
                f"Row step {self.step} inconsistent with width {self.width} "
                f"and {size}-byte samples"
            )
        if len(self.data) < self.step * self.height:
            raise MalformedFrameError(
                f"Buffer holds {len(self.data)} bytes, expected "
                f"{self.step * self.height}"
            )

        byte_order = '>' if self.is_bigendian else '<'
        row_len = self.step // size
        raw = np.frombuffer(self.data, dtype=byte_order + dtype_char,
                            count=row_len * self.height)
        raw = raw.reshape(self.height, row_len)[:, :self.width]

        if self.encoding == ENCODING_16UC1:
            meters = raw.astype(np.float64) * MM_TO_M
            meters[raw == 0] = np.nan
        else:
            meters = raw.astype(np.float64)
            meters[~np.isfinite(meters)] = np.nan
        return meters

import math

import numpy as np
import pytest

from depth_follower.centroid import (
    BoundingBox,
    Centroid,
    NO_OBSERVATION_Z,
    extract_centroid,
)
from depth_follower.config import FollowerConfig
from depth_follower.depth_frame import (
    DepthFrame,
    MalformedFrameError,
    ENCODING_16UC1,
)
from depth_follower.geometry import compute_sin_tables


WIDE_BOX = BoundingBox(min_x=-10.0, max_x=10.0, min_y=-10.0, max_y=10.0, max_z=5.0)


def _frame(values):
    return DepthFrame.from_array(np.asarray(values, dtype=np.float32))


def test_all_invalid_frame_is_empty():
    depth = np.full((6, 8), np.nan, dtype=np.float32)
    depth[0, 0] = np.inf
    centroid = extract_centroid(_frame(depth), WIDE_BOX)
    assert centroid.count == 0
    assert centroid.is_empty
    assert centroid.x == 0.0
    assert centroid.y == 0.0
    assert centroid.z == NO_OBSERVATION_Z
    assert not math.isnan(centroid.x)


def test_mean_and_min_depth_of_accepted_points():
    width, height = 8, 6
    depth = np.full((height, width), np.nan, dtype=np.float32)
    samples = {(1, 0): 0.5, (2, 3): 1.0, (4, 1): 2.0}
    for (v, u), d in samples.items():
        depth[v, u] = d

    centroid = extract_centroid(_frame(depth), WIDE_BOX)

    tables = compute_sin_tables(width, height)
    points = [(tables.sin_x[u] * d, tables.sin_y[v] * d) for (v, u), d in samples.items()]
    assert centroid.count == 3
    assert centroid.x == pytest.approx(sum(p[0] for p in points) / 3)
    assert centroid.y == pytest.approx(sum(p[1] for p in points) / 3)
    assert centroid.z == pytest.approx(0.5)


def test_right_half_is_never_scanned():
    depth = np.full((4, 8), np.nan, dtype=np.float32)
    depth[:, 4:] = 1.0
    assert extract_centroid(_frame(depth), WIDE_BOX).count == 0


def test_samples_beyond_max_z_are_skipped():
    depth = np.full((4, 8), np.nan, dtype=np.float32)
    depth[1, 1] = 1.0
    depth[2, 2] = 3.0
    box = BoundingBox(min_x=-10.0, max_x=10.0, min_y=-10.0, max_y=10.0, max_z=2.0)
    centroid = extract_centroid(_frame(depth), box)
    assert centroid.count == 1
    assert centroid.z == pytest.approx(1.0)


def test_box_boundaries_are_exclusive():
    width, height = 8, 4
    depth = np.full((height, width), np.nan, dtype=np.float32)
    depth[0, 1] = 1.0
    tables = compute_sin_tables(width, height)
    x = float(tables.sin_x[1])
    y = float(tables.sin_y[0])

    on_edge = BoundingBox(min_x=x, max_x=10.0, min_y=-10.0, max_y=10.0, max_z=5.0)
    assert extract_centroid(_frame(depth), on_edge).count == 0

    on_top = BoundingBox(min_x=-10.0, max_x=10.0, min_y=-10.0, max_y=y, max_z=5.0)
    assert extract_centroid(_frame(depth), on_top).count == 0

    inside = BoundingBox(min_x=x - 0.01, max_x=x + 0.01,
                         min_y=y - 0.01, max_y=y + 0.01, max_z=5.0)
    assert extract_centroid(_frame(depth), inside).count == 1


def test_raising_max_z_never_loses_points():
    rng = np.random.default_rng(7)
    depth = rng.uniform(0.1, 3.0, size=(24, 32)).astype(np.float32)
    depth[rng.random(depth.shape) < 0.2] = np.nan
    frame = _frame(depth)

    counts = []
    for max_z in (0.2, 0.5, 1.0, 1.5, 2.5, 4.0):
        box = BoundingBox(min_x=-1.0, max_x=1.0, min_y=-1.0, max_y=1.0, max_z=max_z)
        counts.append(extract_centroid(frame, box).count)
    assert counts == sorted(counts)
    assert counts[-1] > 0


def test_same_frame_same_result():
    rng = np.random.default_rng(3)
    frame = _frame(rng.uniform(0.2, 1.0, size=(12, 16)).astype(np.float32))
    box = BoundingBox.from_config(FollowerConfig())
    assert extract_centroid(frame, box) == extract_centroid(frame, box)


def test_default_box_sees_a_close_wall():
    # A wall 0.6 m away fills the view
    frame = _frame(np.full((480, 640), 0.6, dtype=np.float32))
    centroid = extract_centroid(frame, BoundingBox.from_config(FollowerConfig()))
    assert centroid.count > 0
    assert centroid.z == pytest.approx(0.6)
    assert -0.2 < centroid.x < 0.2
    assert 0.1 < centroid.y < 0.5


def test_millimetre_encoding():
    raw = np.zeros((4, 8), dtype=np.uint16)
    raw[1, 1] = 1500
    frame = DepthFrame.from_array(raw, encoding=ENCODING_16UC1)
    centroid = extract_centroid(frame, WIDE_BOX)
    assert centroid.count == 1
    assert centroid.z == pytest.approx(1.5)


def test_padded_rows_are_honoured():
    width, height = 4, 2
    row_len = 6
    padded = np.full((height, row_len), 9.0, dtype='<f4')
    padded[:, :width] = np.nan
    padded[0, 0] = 1.0
    frame = DepthFrame(width=width, height=height, step=row_len * 4,
                       data=padded.tobytes())
    centroid = extract_centroid(frame, WIDE_BOX)
    assert centroid.count == 1
    assert centroid.z == pytest.approx(1.0)


def test_big_endian_buffer():
    depth = np.full((2, 4), np.nan, dtype='>f4')
    depth[0, 1] = 0.75
    frame = DepthFrame(width=4, height=2, step=16, data=depth.tobytes(),
                       is_bigendian=True)
    assert extract_centroid(frame, WIDE_BOX).z == pytest.approx(0.75)


@pytest.mark.parametrize('frame', [
    DepthFrame(width=4, height=2, step=8, data=bytes(32)),
    DepthFrame(width=4, height=2, step=16, data=bytes(20)),
    DepthFrame(width=0, height=2, step=0, data=b''),
    DepthFrame(width=4, height=2, step=18, data=bytes(36)),
    DepthFrame(width=4, height=2, step=16, data=bytes(32), encoding='rgb8'),
])
def test_malformed_frames_raise(frame):
    with pytest.raises(MalformedFrameError):
        extract_centroid(frame, WIDE_BOX)


def test_mismatched_tables_raise():
    frame = _frame(np.ones((4, 8), dtype=np.float32))
    with pytest.raises(MalformedFrameError):
        extract_centroid(frame, WIDE_BOX, compute_sin_tables(16, 4))


def test_empty_centroid_defaults():
    assert Centroid() == Centroid(0.0, 0.0, NO_OBSERVATION_Z, 0)

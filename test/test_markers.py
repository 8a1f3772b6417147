import pytest

from depth_follower.centroid import Centroid
from depth_follower.config import FollowerConfig
from depth_follower.markers import centroid_marker, bbox_marker, SPHERE, CUBE


def test_centroid_marker_position():
    marker = centroid_marker(Centroid(x=0.1, y=0.2, z=0.7, count=50))
    assert marker.shape == SPHERE
    assert marker.position == (0.1, 0.2, 0.7)
    assert marker.scale == (0.2, 0.2, 0.2)
    assert marker.color == (1.0, 0.0, 0.0, 1.0)


def test_empty_centroid_marker_at_origin():
    assert centroid_marker(Centroid()).position == (0.0, 0.0, 0.0)


def test_bbox_marker_spans_box():
    marker = bbox_marker(FollowerConfig())
    assert marker.shape == CUBE
    x, y, z = marker.position
    assert x == pytest.approx(0.0)
    assert y == pytest.approx(-0.3)
    assert z == pytest.approx(0.4)
    assert marker.scale == pytest.approx((0.4, 0.4, 0.8))
    assert marker.color[3] == 0.5

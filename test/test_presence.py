from depth_follower.presence import TargetPresenceTracker


def test_latest_report_wins():
    tracker = TargetPresenceTracker()
    assert tracker.visible is False
    assert tracker.update(3) is True
    assert tracker.visible
    assert tracker.update(0) is False
    assert not tracker.visible


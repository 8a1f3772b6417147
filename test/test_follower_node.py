import pytest

rclpy = pytest.importorskip('rclpy')
std_srvs = pytest.importorskip('std_srvs.srv')

from rclpy.parameter import Parameter  # noqa: E402

from depth_follower.follower_node import DepthFollowerNode  # noqa: E402


@pytest.fixture
def node():
    rclpy.init()
    n = DepthFollowerNode()
    yield n
    n.destroy_node()
    rclpy.shutdown()


def _change_state(node, follow):
    request = std_srvs.SetBool.Request()
    request.data = follow
    return node._change_state_callback(request, std_srvs.SetBool.Response())


def test_change_state_syncs_enabled_parameter(node):
    response = _change_state(node, False)
    assert response.success
    assert response.message == 'OK'
    assert node.get_parameter('enabled').value is False
    assert not node._follower.enabled

    _change_state(node, True)
    assert node.get_parameter('enabled').value is True
    assert node._follower.enabled


def test_single_parameter_update_keeps_box(node):
    node.set_parameters([Parameter('max_z', value=1.5)])
    node.set_parameters([Parameter('min_x', value=-0.4)])
    config = node._follower.config
    assert config.max_z == 1.5
    assert config.min_x == -0.4
    assert config.max_x == 0.2


def test_invalid_parameter_is_rejected(node):
    results = node.set_parameters([Parameter('max_z', value=-1.0)])
    assert not results[0].successful
    assert node._follower.config.max_z == 0.8

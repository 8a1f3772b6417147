#!/usr/bin/env python3
"""
follower_node.py - ROS2 host for the Depth Follower

Subscriptions:
    depth/image_rect (sensor_msgs/Image)   - depth frames, 32FC1 or 16UC1
    blobs/count      (std_msgs/Int32)      - blob detector report

Publications:
    cmd_vel (geometry_msgs/Twist)          - motion commands
    marker  (visualization_msgs/Marker)    - centroid sphere
    bbox    (visualization_msgs/Marker)    - bounding box cube

Services:
    change_state (std_srvs/SetBool)        - True = FOLLOW, False = STOPPED

Parameters (runtime reconfigurable):
    min_x, max_x, min_y, max_y, max_z, goal_z, z_scale, x_scale, enabled
"""

import rclpy
from rclpy.node import Node
from rclpy.parameter import Parameter
from rclpy.qos import QoSProfile, ReliabilityPolicy, DurabilityPolicy

from geometry_msgs.msg import Twist
from rcl_interfaces.msg import SetParametersResult
from sensor_msgs.msg import Image
from std_msgs.msg import Int32
from std_srvs.srv import SetBool
from visualization_msgs.msg import Marker

from .config import (
    FollowerConfig,
    ConfigError,
    PARAMETER_NAMES,
    MARKER_NAMESPACE,
    DEPTH_TOPIC,
    BLOB_COUNT_TOPIC,
    CMD_VEL_TOPIC,
    MARKER_TOPIC,
    BBOX_TOPIC,
    CHANGE_STATE_SERVICE,
)
from .depth_frame import DepthFrame
from .follower import DepthFollower
from .markers import MarkerGeometry, SPHERE
from .motion import MotionCommand, STOP
from .states import ChangeStateResult, follow_state_from_bool


def to_twist(cmd: MotionCommand) -> Twist:
    twist = Twist()
    twist.linear.x = float(cmd.linear_x)
    twist.angular.z = float(cmd.angular_z)
    return twist


def frame_from_image(msg: Image) -> DepthFrame:
    return DepthFrame(
        width=int(msg.width),
        height=int(msg.height),
        step=int(msg.step),
        data=bytes(msg.data),
        encoding=msg.encoding,
        is_bigendian=bool(msg.is_bigendian),
    )


class DepthFollowerNode(Node):
    """ROS2 wiring around DepthFollower."""

    def __init__(self):
        super().__init__('depth_follower')

        # ==================== Parameters ====================

        defaults = FollowerConfig()
        for name in PARAMETER_NAMES:
            self.declare_parameter(name, getattr(defaults, name))
        config = self._config_from_parameters()

        # ==================== Core ====================

        self._follower = DepthFollower(config, logger=self.get_logger())

        # ==================== Publishers ====================

        self._cmd_vel_pub = self.create_publisher(Twist, CMD_VEL_TOPIC, 1)
        self._marker_pub = self.create_publisher(Marker, MARKER_TOPIC, 1)
        self._bbox_pub = self.create_publisher(Marker, BBOX_TOPIC, 1)

        # ==================== Subscriptions ====================

        qos_sensor = QoSProfile(
            reliability=ReliabilityPolicy.BEST_EFFORT,
            durability=DurabilityPolicy.VOLATILE,
            depth=1
        )
        self.create_subscription(Image, DEPTH_TOPIC, self._depth_callback, qos_sensor)
        self.create_subscription(Int32, BLOB_COUNT_TOPIC, self._blobs_callback, 1)

        # ==================== Services ====================

        self.create_service(SetBool, CHANGE_STATE_SERVICE, self._change_state_callback)
        self.add_on_set_parameters_callback(self._parameters_callback)

        self.get_logger().info(
            f"Depth follower started ({'enabled' if config.enabled else 'disabled'})"
        )

    # ==================== Callbacks (ROS) ====================

    def _depth_callback(self, msg: Image):
        """Run the follower on a depth frame and publish its outputs."""
        result = self._follower.process_frame_detailed(frame_from_image(msg))
        if result is None:
            return

        if result.command is not None:
            self._publish_command(result.command)

        centroid_geom, bbox_geom = result.markers
        self._marker_pub.publish(self._to_marker(centroid_geom))
        self._bbox_pub.publish(self._to_marker(bbox_geom))

    def _blobs_callback(self, msg: Int32):
        self._follower.update_blobs(int(msg.data))

    def _change_state_callback(self, request, response):
        """Handle a change_state request (True = FOLLOW, False = STOPPED)."""
        requested = follow_state_from_bool(request.data)
        self.get_logger().info(f"Change mode service request: {requested.name}")
        result, cmd = self._follower.change_state(requested)
        if cmd is not None:
            self._publish_command(cmd)
        self._sync_enabled_parameter()
        response.success = result == ChangeStateResult.OK
        response.message = result.name
        return response

    def _parameters_callback(self, params) -> SetParametersResult:
        """Apply a reconfiguration; invalid geometry is rejected."""
        try:
            self._follower.configure(
                self._follower.config.with_parameters((p.name, p.value) for p in params)
            )
        except ConfigError as e:
            self.get_logger().warning(f"Rejected reconfiguration: {e}")
            return SetParametersResult(successful=False, reason=str(e))
        return SetParametersResult(successful=True)

    # ==================== Helpers ====================

    def _config_from_parameters(self) -> FollowerConfig:
        return FollowerConfig().with_parameters(
            (name, self.get_parameter(name).value) for name in PARAMETER_NAMES
        )

    def _sync_enabled_parameter(self):
        """Keep the enabled parameter in step with change_state requests."""
        enabled = self._follower.enabled
        if self.get_parameter('enabled').value != enabled:
            self.set_parameters([Parameter('enabled', value=enabled)])

    def _publish_command(self, cmd: MotionCommand):
        self._cmd_vel_pub.publish(to_twist(cmd))

    def stop_motion(self):
        """Publish a stop command."""
        self._publish_command(STOP)

    def _to_marker(self, geom: MarkerGeometry) -> Marker:
        m = Marker()
        m.header.frame_id = geom.frame_id
        m.header.stamp = self.get_clock().now().to_msg()
        m.ns = MARKER_NAMESPACE
        m.id = geom.marker_id
        m.type = Marker.SPHERE if geom.shape == SPHERE else Marker.CUBE
        m.action = Marker.ADD
        m.pose.position.x, m.pose.position.y, m.pose.position.z = (
            float(v) for v in geom.position
        )
        m.pose.orientation.w = 1.0
        m.scale.x, m.scale.y, m.scale.z = (float(v) for v in geom.scale)
        m.color.r, m.color.g, m.color.b, m.color.a = (float(v) for v in geom.color)
        return m


def main(args=None):
    rclpy.init(args=args)
    node = DepthFollowerNode()
    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        node.stop_motion()
        node.destroy_node()
        rclpy.shutdown()


if __name__ == '__main__':
    main()

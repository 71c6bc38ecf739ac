import math

import pytest

from turtlekit.messages import Odometry, Point, Pose, Quaternion, Stamp
from turtlekit.waypoints import Waypoint, WaypointFollower, planar_yaw, wrap_angle


def _odom(x, y, yaw=0.0):
    q = Quaternion(0.0, 0.0, math.sin(yaw / 2), math.cos(yaw / 2))
    return Odometry(pose=Pose(position=Point(x, y, 0.0), orientation=q))


def test_planar_yaw_identity_and_quarter_turn():
    assert planar_yaw(Quaternion()) == 0.0
    q = Quaternion(0.0, 0.0, math.sin(math.pi / 4), math.cos(math.pi / 4))
    assert planar_yaw(q) == pytest.approx(math.pi / 2)


@pytest.mark.parametrize("angle", [-3.0, -1.0, 0.0, 0.5, 3.0])
def test_wrap_angle_leaves_inner_values(angle):
    assert wrap_angle(angle) == angle


@pytest.mark.parametrize("angle", [1.5 * math.pi, -1.5 * math.pi, 1.9 * math.pi])
def test_wrap_angle_brings_into_range(angle):
    wrapped = wrap_angle(angle)
    assert -math.pi <= wrapped <= math.pi
    assert math.isclose(math.sin(wrapped), math.sin(angle), abs_tol=1e-12)
    assert math.isclose(math.cos(wrapped), math.cos(angle), abs_tol=1e-12)


def test_default_route_and_start():
    f = WaypointFollower()
    assert f.waypoints == [Waypoint(1.0, 0.0), Waypoint(1.0, 1.0), Waypoint(0.0, 1.0), Waypoint(0.0, 0.0)]
    assert (f.x, f.y, f.yaw) == (5.5, 5.5, 0.0)
    assert not f.finished()


def test_update_odometry():
    f = WaypointFollower()
    f.update_odometry(_odom(2.0, -1.0, 0.7))
    assert f.x == 2.0
    assert f.y == -1.0
    assert f.yaw == pytest.approx(0.7)


def test_large_heading_error_turns_in_place():
    f = WaypointFollower()
    stamp = Stamp(12, 34)
    cmd = f.step(stamp)
    assert cmd.twist.linear.x == 0.0
    assert abs(cmd.twist.angular.z) == f.max_angular_speed
    assert cmd.header.frame_id == "base_link"
    assert cmd.header.stamp == stamp
    assert f.index == 0


def test_facing_target_drives_at_capped_speed():
    f = WaypointFollower()
    f.update_odometry(_odom(0.0, 0.0, 0.0))
    cmd = f.step(Stamp())
    assert cmd.twist.linear.x == f.max_linear_speed
    assert cmd.twist.angular.z == pytest.approx(0.0)


def test_linear_speed_never_exceeds_limits():
    f = WaypointFollower()
    for x in (0.0, 0.3, 0.6, 0.85):
        f.update_odometry(_odom(x, 0.0, 0.0))
        cmd = f.step(Stamp())
        assert 0.0 <= cmd.twist.linear.x <= f.max_linear_speed
        assert abs(cmd.twist.angular.z) <= f.max_angular_speed


def test_arrival_advances_and_stops():
    f = WaypointFollower()
    f.update_odometry(_odom(1.0, 0.05, 0.0))
    cmd = f.step(Stamp(1, 0))
    assert cmd.twist.linear.x == 0.0
    assert cmd.twist.angular.z == 0.0
    assert cmd.header.frame_id == ""
    assert f.index == 1


def test_full_route_finishes():
    f = WaypointFollower()
    for wp in list(f.waypoints):
        f.update_odometry(_odom(wp.x, wp.y))
        f.step(Stamp())
    assert f.finished()
    after = f.step(Stamp(5, 0))
    assert after.twist.linear.x == 0.0
    assert after.twist.angular.z == 0.0
    assert f.index == len(f.waypoints)


def test_custom_route():
    f = WaypointFollower(waypoints=[Waypoint(2.0, 2.0)], x=2.0, y=2.0)
    f.step(Stamp())
    assert f.finished()
    assert WaypointFollower(waypoints=[]).finished()
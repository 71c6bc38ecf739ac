import math

import pytest

from turtlekit.motion_sequence import MotionController, MovementType


def _is_zero(twist):
    return twist.linear.x == 0.0 and twist.angular.z == 0.0


def test_defaults_from_source():
    c = MotionController()
    assert c.linear_speed == 0.2
    assert c.angular_speed == 0.5
    assert c.default_distance == 1.0
    assert c.default_angle == pytest.approx(math.pi / 2)
    assert c.default_time == 5.0
    assert c.movement_type is MovementType.STOP


def test_tick_while_stopped_returns_none():
    assert MotionController().tick(10.0) is None


def test_move_for_time_runs_then_stops():
    c = MotionController()
    cmd = c.move_for_time(5.0, now=0.0)
    assert cmd.linear.x == c.linear_speed
    assert cmd.angular.z == 0.0
    assert c.movement_type is MovementType.TIME
    during = c.tick(4.0)
    assert during.linear.x == c.linear_speed
    done = c.tick(5.0)
    assert _is_zero(done)
    assert c.movement_type is MovementType.STOP
    assert c.tick(6.0) is None


def test_move_distance_duration_from_speed():
    c = MotionController(linear_speed=0.5)
    c.move_distance(2.0, now=10.0)
    assert c.movement_type is MovementType.DISTANCE
    assert c.target_duration == pytest.approx(2.0 / 0.5)
    assert c.tick(10.0 + c.target_duration - 0.01).linear.x == 0.5
    assert _is_zero(c.tick(10.0 + c.target_duration))


@pytest.mark.parametrize("angle, sign", [(math.pi / 2, 1.0), (-math.pi / 2, -1.0)])
def test_rotate_direction_follows_sign(angle, sign):
    c = MotionController()
    cmd = c.rotate(angle, now=0.0)
    assert cmd.linear.x == 0.0
    assert cmd.angular.z == sign * c.angular_speed
    assert c.target_duration == pytest.approx(abs(angle) / c.angular_speed)
    assert c.movement_type is MovementType.ROTATION


def test_returned_command_is_a_copy():
    c = MotionController()
    cmd = c.move_for_time(1.0, now=0.0)
    cmd.linear.x = 99.0
    assert c.tick(0.5).linear.x == c.linear_speed


def test_new_motion_replaces_old():
    c = MotionController()
    c.move_for_time(5.0, now=0.0)
    c.rotate(1.0, now=1.0)
    held = c.tick(1.5)
    assert held.linear.x == 0.0
    assert held.angular.z == c.angular_speed


def test_stop_cancels():
    c = MotionController()
    c.move_for_time(5.0, now=0.0)
    assert _is_zero(c.stop())
    assert c.tick(1.0) is None


def test_zero_speeds_raise():
    with pytest.raises(ValueError):
        MotionController(linear_speed=0.0).move_distance(1.0, now=0.0)
    with pytest.raises(ValueError):
        MotionController(angular_speed=0.0).rotate(1.0, now=0.0)


def test_demo_schedule_order_and_waits():
    c = MotionController()
    steps = c.demo_schedule()
    assert [s.kind for s in steps] == [
        MovementType.STOP,
        MovementType.DISTANCE,
        MovementType.ROTATION,
        MovementType.TIME,
        MovementType.STOP,
    ]
    assert steps[1].value == c.default_distance
    assert steps[2].value == c.default_angle
    assert steps[3].value == c.default_time
    starters = {
        MovementType.DISTANCE: c.move_distance,
        MovementType.ROTATION: c.rotate,
        MovementType.TIME: c.move_for_time,
    }
    for step in steps[1:4]:
        starters[step.kind](step.value, 0.0)
        assert c.target_duration == pytest.approx(step.wait - 1.0)
        assert c.tick(step.wait - 1.0 + 1e-9) is not None
        assert c.movement_type is MovementType.STOP
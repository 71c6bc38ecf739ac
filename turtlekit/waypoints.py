"""Following a list of waypoints from odometry: turn to face, then drive."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace

from turtlekit.geometry import clamp
from turtlekit.messages import Header, Odometry, Quaternion, Stamp, TwistStamped

logger = logging.getLogger(__name__)

COMMAND_FRAME = "base_link"


@dataclass(frozen=True)
class Waypoint:
    x: float
    y: float


def _default_route() -> list[Waypoint]:
    return [Waypoint(1.0, 0.0), Waypoint(1.0, 1.0), Waypoint(0.0, 1.0), Waypoint(0.0, 0.0)]


def planar_yaw(q: Quaternion) -> float:
    """Heading of a rotation about z only: ``2 * atan2(z, w)``."""
    return 2 * math.atan2(q.z, q.w)


def wrap_angle(angle: float) -> float:
    """Bring an angle into [-pi, pi] with a single turn of correction."""
    if angle > math.pi:
        return angle - 2 * math.pi
    if angle < -math.pi:
        return angle + 2 * math.pi
    return angle


@dataclass
class WaypointFollower:
    """Steers towards each waypoint in turn until the last is reached."""

    waypoints: list[Waypoint] = field(default_factory=_default_route)
    x: float = 5.5
    y: float = 5.5
    yaw: float = 0.0
    distance_tolerance: float = 0.1
    angle_tolerance: float = 0.3
    max_linear_speed: float = 0.2
    max_angular_speed: float = 0.5
    index: int = field(default=0, init=False)
    _announced: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        logger.info("waypoint follower started with %d waypoints", len(self.waypoints))

    def update_odometry(self, odom: Odometry) -> None:
        """Take the robot's position and heading from an odometry message."""
        self.x = odom.pose.position.x
        self.y = odom.pose.position.y
        self.yaw = planar_yaw(odom.pose.orientation)

    def finished(self) -> bool:
        """True once every waypoint has been reached."""
        return self.index >= len(self.waypoints)

    def step(self, stamp: Stamp) -> TwistStamped:
        """One control cycle; returns the velocity command to publish."""
        if self.finished():
            if not self._announced:
                logger.info("all waypoints reached")
                self._announced = True
            return TwistStamped()

        target = self.waypoints[self.index]
        dx = target.x - self.x
        dy = target.y - self.y
        distance = math.hypot(dx, dy)
        yaw_error = wrap_angle(math.atan2(dy, dx) - self.yaw)

        if distance < self.distance_tolerance:
            self.index += 1
            if not self.finished():
                nxt = self.waypoints[self.index]
                logger.info(
                    "reached waypoint %d, heading to next: (%.2f, %.2f)",
                    self.index,
                    nxt.x,
                    nxt.y,
                )
            return TwistStamped()

        command = TwistStamped(header=Header(stamp=replace(stamp), frame_id=COMMAND_FRAME))
        command.twist.angular.z = clamp(
            2.0 * yaw_error, -self.max_angular_speed, self.max_angular_speed
        )
        if abs(yaw_error) > self.angle_tolerance:
            command.twist.linear.x = 0.0
        else:
            command.twist.linear.x = clamp(0.5 * distance, 0.0, self.max_linear_speed)
        return command
"""Odometry monitoring: state extraction, boundary and speed checks, CSV trajectory."""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, field
from os import PathLike
from types import TracebackType

from turtlekit.geometry import quaternion_to_euler, yaw_degrees
from turtlekit.messages import Header, Odometry, Pose, Stamp, TwistStamped

logger = logging.getLogger(__name__)

CSV_HEADER = "timestamp,sec,nanosec,x(m),y(m),yaw(deg),linear_x(m/s),angular_z(deg/s)\n"


def describe_odometry(odom: Odometry) -> str:
    """Summary of an odometry message; angles and angular rates in degrees."""
    stamp = odom.header.stamp
    euler = quaternion_to_euler(odom.pose.orientation)
    pos = odom.pose.position
    lin = odom.twist.linear
    ang = odom.twist.angular
    return (
        "\n Odometry Data:"
        f"\n  Timestamp: {stamp.sec}.{stamp.nanosec:09d}"
        f"\n  Frame ID: {odom.header.frame_id}, Child Frame ID: {odom.child_frame_id}"
        f"\n  Position (m): x={pos.x:.2f}, y={pos.y:.2f}, z={pos.z:.2f}"
        f"\n  Orientation (deg): roll={math.degrees(euler.roll):.2f}, "
        f"pitch={math.degrees(euler.pitch):.2f}, yaw={math.degrees(euler.yaw):.2f}"
        f"\n  Linear Velocity (m/s): x={lin.x:.2f}, y={lin.y:.2f}, z={lin.z:.2f}"
        f"\n  Angular Velocity (deg/s): x={math.degrees(ang.x):.2f}, "
        f"y={math.degrees(ang.y):.2f}, z={math.degrees(ang.z):.2f}"
    )


@dataclass(frozen=True)
class RobotState:
    """Planar robot state; yaw in degrees, angular rate in degrees per second."""

    x: float
    y: float
    yaw: float
    linear_x: float
    angular_z: float
    stamp: Stamp = field(default_factory=Stamp)

    @classmethod
    def from_odometry(cls, odom: Odometry) -> RobotState:
        """Extract the state carried by an odometry message."""
        return cls(
            x=odom.pose.position.x,
            y=odom.pose.position.y,
            yaw=yaw_degrees(odom.pose.orientation),
            linear_x=odom.twist.linear.x,
            angular_z=math.degrees(odom.twist.angular.z),
            stamp=Stamp(odom.header.stamp.sec, odom.header.stamp.nanosec),
        )


@dataclass(frozen=True)
class MonitorConfig:
    """Limits and logging settings for an :class:`OdomMonitor`.

    ``max_angular_speed`` is in rad/s. A ``traj_log_path`` of None disables
    the CSV trajectory.
    """

    x_min: float = 0.0
    x_max: float = 7.0
    y_min: float = 0.0
    y_max: float = 7.0
    max_linear_speed: float = 1.0
    max_angular_speed: float = 1.0
    traj_log_path: str | PathLike[str] | None = "trajectory.csv"
    log_interval: float = 1.0
    enable_stop_on_boundary: bool = False

    @classmethod
    def centered(cls) -> MonitorConfig:
        """A 10 m square around the origin with a 1.5 rad/s turn limit."""
        return cls(
            x_min=-5.0,
            x_max=5.0,
            y_min=-5.0,
            y_max=5.0,
            max_linear_speed=1.0,
            max_angular_speed=1.5,
        )


@dataclass
class OdomReport:
    """What one odometry message led to."""

    state: RobotState
    header: Header
    pose: Pose
    out_of_boundary: bool
    speed_abnormal: bool
    stop_command: TwistStamped | None
    logged: bool


class OdomMonitor:
    """Checks odometry against a motion boundary and speed limits.

    Times passed to :meth:`process` are plain seconds; ``start`` is the time
    from which the first logging interval is counted.
    """

    def __init__(self, config: MonitorConfig | None = None, start: float = 0.0) -> None:
        self.config = config if config is not None else MonitorConfig()
        self.last_log_time = start
        self.current_state: RobotState | None = None
        self._file = None
        if self.config.traj_log_path is not None:
            self._file = open(self.config.traj_log_path, "w", encoding="utf-8", newline="")
            self._file.write(CSV_HEADER)
            self._file.flush()
        c = self.config
        logger.info(
            "motion boundary: x=[%.2f, %.2f], y=[%.2f, %.2f]",
            c.x_min,
            c.x_max,
            c.y_min,
            c.y_max,
        )

    @property
    def closed(self) -> bool:
        return self._file is None or self._file.closed

    def is_out_of_boundary(self, x: float, y: float) -> bool:
        c = self.config
        return x < c.x_min or x > c.x_max or y < c.y_min or y > c.y_max

    def is_speed_abnormal(self, linear_x: float, angular_z: float) -> bool:
        """True if either speed exceeds its limit; ``angular_z`` in rad/s."""
        return (
            abs(linear_x) > self.config.max_linear_speed
            or abs(angular_z) > self.config.max_angular_speed
        )

    def _write(self, state: RobotState) -> bool:
        if self.closed:
            return False
        values = [state.x, state.y, state.yaw, state.linear_x, state.angular_z]
        fields = [str(state.stamp.sec), str(state.stamp.nanosec)]
        fields.extend(f"{v:.6f}" for v in values)
        self._file.write(",".join(fields) + "\n")
        self._file.flush()
        return True

    def process(self, odom: Odometry, now: float) -> OdomReport:
        """Handle one odometry message received at time ``now``."""
        state = RobotState.from_odometry(odom)
        self.current_state = state

        out = self.is_out_of_boundary(state.x, state.y)
        stop = None
        if out:
            logger.warning("Robot out of boundary! (x=%.2f, y=%.2f)", state.x, state.y)
            if self.config.enable_stop_on_boundary:
                stop = TwistStamped(
                    header=Header(stamp=Stamp.from_nanoseconds(round(now * 1e9)))
                )
                logger.warning("sent stop command due to boundary violation")

        abnormal = self.is_speed_abnormal(state.linear_x, odom.twist.angular.z)
        if abnormal:
            logger.warning(
                "Abnormal speed detected! linear=%.2f, angular=%.2f",
                state.linear_x,
                odom.twist.angular.z,
            )

        logged = False
        if now - self.last_log_time >= self.config.log_interval:
            logged = self._write(state)
            self.last_log_time = now

        logger.debug(
            "position (%.2f, %.2f), yaw %.2f deg, linear %.2f m/s, angular %.2f deg/s",
            state.x,
            state.y,
            state.yaw,
            state.linear_x,
            state.angular_z,
        )
        return OdomReport(
            state=state,
            header=copy.deepcopy(odom.header),
            pose=copy.deepcopy(odom.pose),
            out_of_boundary=out,
            speed_abnormal=abnormal,
            stop_command=stop,
            logged=logged,
        )

    def close(self) -> None:
        """Close the trajectory file; further calls do nothing."""
        if not self.closed:
            self._file.close()
            logger.info("trajectory log saved to: %s", self.config.traj_log_path)

    def __enter__(self) -> OdomMonitor:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
"""IMU and odometry fusion by complementary filtering, and sensor preprocessing."""

from __future__ import annotations

import copy
import logging
from typing import NamedTuple

from turtlekit.geometry import slerp
from turtlekit.messages import Header, Imu, LaserScan, Odometry, Stamp, Vector3
from turtlekit.scan import filter_scan

logger = logging.getLogger(__name__)

FUSED_FRAME = "map"
FUSED_CHILD_FRAME = "odom"


def _stamp_at(seconds: float) -> Stamp:
    return Stamp.from_nanoseconds(round(seconds * 1e9))


class ImuOdomFusion:
    """Blends IMU and odometry into a fused odometry estimate.

    ``alpha`` weighs the IMU-propagated previous estimate, ``beta`` the fresh
    odometry; ``beta`` is also the interpolation fraction from the IMU
    orientation towards the odometry orientation. Times are plain seconds;
    ``start`` is the time the first interval is measured from.
    """

    def __init__(self, alpha: float = 0.9, beta: float = 0.1, start: float = 0.0) -> None:
        self.alpha = alpha
        self.beta = beta
        self.last_time = start
        self.fused: Odometry | None = None

    @property
    def initialized(self) -> bool:
        return self.fused is not None

    def update(self, imu: Imu, odom: Odometry, now: float) -> Odometry | None:
        """Fuse one synchronised pair received at ``now``.

        The first pair only seeds the estimate and returns None; later pairs
        return the new fused odometry.
        """
        dt = now - self.last_time
        self.last_time = now

        if self.fused is None:
            self.fused = copy.deepcopy(odom)
            return None

        previous = self.fused
        alpha, beta = self.alpha, self.beta
        acc = imu.linear_acceleration

        fused = Odometry(
            header=Header(stamp=_stamp_at(now), frame_id=FUSED_FRAME),
            child_frame_id=FUSED_CHILD_FRAME,
        )
        fused.pose.orientation = slerp(imu.orientation, odom.pose.orientation, beta)

        prev_pos = previous.pose.position
        odom_pos = odom.pose.position
        dt2 = dt * dt
        fused.pose.position.x = alpha * (prev_pos.x + acc.x * dt2) + beta * odom_pos.x
        fused.pose.position.y = alpha * (prev_pos.y + acc.y * dt2) + beta * odom_pos.y
        fused.pose.position.z = alpha * (prev_pos.z + acc.z * dt2) + beta * odom_pos.z

        prev_lin = previous.twist.linear
        odom_lin = odom.twist.linear
        fused.twist.linear = Vector3(
            alpha * (prev_lin.x + acc.x * dt) + beta * odom_lin.x,
            alpha * (prev_lin.y + acc.y * dt) + beta * odom_lin.y,
            alpha * (prev_lin.z + acc.z * dt) + beta * odom_lin.z,
        )

        self.fused = fused
        return copy.deepcopy(fused)


class ImuLowPass:
    """First-order low-pass filter on angular velocity and linear acceleration."""

    def __init__(self, alpha: float = 0.3) -> None:
        self.alpha = alpha
        self.last: Imu | None = None

    @staticmethod
    def _blend(alpha: float, current: Vector3, previous: Vector3) -> Vector3:
        return Vector3(
            alpha * current.x + (1 - alpha) * previous.x,
            alpha * current.y + (1 - alpha) * previous.y,
            alpha * current.z + (1 - alpha) * previous.z,
        )

    def filter(self, imu: Imu) -> Imu:
        """Filtered copy of ``imu``; the first sample passes through unchanged."""
        filtered = copy.deepcopy(imu)
        if self.last is not None:
            filtered.angular_velocity = self._blend(
                self.alpha, imu.angular_velocity, self.last.angular_velocity
            )
            filtered.linear_acceleration = self._blend(
                self.alpha, imu.linear_acceleration, self.last.linear_acceleration
            )
        self.last = copy.deepcopy(filtered)
        return filtered


class _Preprocessed(NamedTuple):
    scan: LaserScan
    imu: Imu
    odom: Odometry


class SensorPreprocessor:
    """Cleans a synchronised laser scan, IMU sample and odometry message."""

    def __init__(
        self,
        ground_threshold: float = 0.1,
        noise_threshold: float = 0.5,
        imu_alpha: float = 0.3,
    ) -> None:
        self.ground_threshold = ground_threshold
        self.noise_threshold = noise_threshold
        self.low_pass = ImuLowPass(imu_alpha)
        logger.info("Sensor preprocessor initialized")

    def process(self, scan: LaserScan, imu: Imu, odom: Odometry) -> _Preprocessed:
        """Filtered scan, low-passed IMU and the odometry forwarded unchanged."""
        filtered_scan = filter_scan(scan, self.ground_threshold, self.noise_threshold)
        filtered_imu = self.low_pass.filter(imu)
        return _Preprocessed(filtered_scan, filtered_imu, copy.deepcopy(odom))
"""IMU readings: CSV trajectory logging and a still/moving detector."""

from __future__ import annotations

import enum
import logging
import math
from collections import deque
from dataclasses import dataclass, field
from os import PathLike
from types import TracebackType

from turtlekit.messages import Imu

logger = logging.getLogger(__name__)

GRAVITY = 9.8

CSV_HEADER = (
    "时间戳(秒),时间戳(纳秒),"
    "加速度x(m/s²),加速度y(m/s²),加速度z(m/s²),"
    "角速度x(rad/s),角速度y(rad/s),角速度z(rad/s),"
    "四元数x,四元数y,四元数z,四元数w\n"
)


def format_imu(imu: Imu) -> str:
    """Human-readable summary of one IMU message."""
    q = imu.orientation
    av = imu.angular_velocity
    la = imu.linear_acceleration
    stamp = imu.header.stamp
    return (
        f"\n Frame: {imu.header.frame_id}, Time: {stamp.sec}.{stamp.nanosec:09d}"
        f"\n Orientation: x={q.x:.2f}, y={q.y:.2f}, z={q.z:.2f}, w={q.w:.2f}"
        f"\n Angular Velocity角速度: x={av.x:.2f}, y={av.y:.2f}, z={av.z:.2f} rad/s"
        f"\n Linear Acceleration线加速度: x={la.x:.2f}, y={la.y:.2f}, z={la.z:.2f} m/s²"
    )


class ImuCsvLogger:
    """Writes IMU samples to a CSV file, at most one per ``interval`` seconds.

    The file is truncated and given a header when the logger is created.
    Times are plain seconds supplied by the caller; ``start`` is the time
    from which the first interval is counted.
    """

    def __init__(
        self,
        path: str | PathLike[str] = "imu_trajectory.csv",
        interval: float = 1.0,
        start: float = 0.0,
    ) -> None:
        self.path = path
        self.interval = interval
        self.last_log_time = start
        self._file = open(path, "w", encoding="utf-8", newline="")
        self._file.write(CSV_HEADER)
        self._file.flush()

    @property
    def closed(self) -> bool:
        return self._file.closed

    def log(self, imu: Imu, now: float) -> bool:
        """Append ``imu`` if the interval has passed; True if a row was written."""
        if self._file.closed:
            return False
        if now - self.last_log_time < self.interval:
            return False
        la = imu.linear_acceleration
        av = imu.angular_velocity
        q = imu.orientation
        values = [la.x, la.y, la.z, av.x, av.y, av.z, q.x, q.y, q.z, q.w]
        fields = [str(imu.header.stamp.sec), str(imu.header.stamp.nanosec)]
        fields.extend(f"{v:g}" for v in values)
        self._file.write(",".join(fields) + "\n")
        self._file.flush()
        self.last_log_time = now
        return True

    def close(self) -> None:
        """Close the file; further calls do nothing."""
        if not self._file.closed:
            self._file.close()
            logger.info("trajectory saved to: %s", self.path)

    def __enter__(self) -> ImuCsvLogger:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class MovingAverage:
    """Mean of the most recent ``window`` values."""

    def __init__(self, window: int = 5) -> None:
        if window < 1:
            raise ValueError("window must be at least 1")
        self._history: deque[float] = deque(maxlen=window)

    def add(self, value: float) -> float:
        """Add ``value`` and return the mean of the values in the window."""
        self._history.append(value)
        return sum(self._history) / len(self._history)


class MotionEvent(enum.Enum):
    STARTED = "started"
    STOPPED = "stopped"


@dataclass
class MotionDetector:
    """Decides whether the robot is moving from smoothed IMU magnitudes.

    A change of state is accepted only after ``stable_frames`` consecutive
    frames agree.
    """

    accel_threshold: float = 0.2
    angular_threshold: float = 0.1
    stable_frames: int = 10
    window: int = 5
    is_moving: bool = field(default=False, init=False)
    moving_count: int = field(default=0, init=False)
    stopped_count: int = field(default=0, init=False)
    _accel: MovingAverage = field(init=False, repr=False)
    _angular: MovingAverage = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._accel = MovingAverage(self.window)
        self._angular = MovingAverage(self.window)

    def update(self, imu: Imu) -> MotionEvent | None:
        """Feed one sample; returns an event when the accepted state changes."""
        la = imu.linear_acceleration
        av = imu.angular_velocity
        raw_accel = math.sqrt(la.x**2 + la.y**2 + (la.z - GRAVITY) ** 2)
        raw_angular = math.sqrt(av.x**2 + av.y**2 + av.z**2)
        accel = self._accel.add(raw_accel)
        angular = self._angular.add(raw_angular)

        if accel > self.accel_threshold or angular > self.angular_threshold:
            self.moving_count += 1
            self.stopped_count = 0
        else:
            self.stopped_count += 1
            self.moving_count = 0

        was_moving = self.is_moving
        if self.moving_count >= self.stable_frames:
            self.is_moving = True
        elif self.stopped_count >= self.stable_frames:
            self.is_moving = False

        if self.is_moving and not was_moving:
            logger.info("robot started moving")
            return MotionEvent.STARTED
        if was_moving and not self.is_moving:
            logger.info("robot stopped")
            return MotionEvent.STOPPED
        return None
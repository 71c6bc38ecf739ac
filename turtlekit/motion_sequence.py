"""Timed open-loop motions: drive for a time or a distance, or turn on the spot."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field, replace
from typing import NamedTuple

from turtlekit.messages import Twist, Vector3

logger = logging.getLogger(__name__)

SETTLE_SECONDS = 1.0


class MovementType(enum.Enum):
    """What the controller is currently doing."""

    STOP = "stop"
    TIME = "time"
    DISTANCE = "distance"
    ROTATION = "rotation"


class _Step(NamedTuple):
    kind: MovementType
    value: float
    wait: float


@dataclass
class MotionController:
    """Runs one timed motion at a time and reports the command to send.

    Times are plain seconds on any monotonic clock supplied by the caller.
    """

    linear_speed: float = 0.2
    angular_speed: float = 0.5
    default_distance: float = 1.0
    default_angle: float = math.pi / 2
    default_time: float = 5.0
    movement_type: MovementType = field(default=MovementType.STOP, init=False)
    twist: Twist = field(default_factory=Twist, init=False)
    start_time: float = field(default=0.0, init=False)
    target_duration: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        logger.info("Robot movement controller initialized")
        logger.info("Linear speed: %.2f m/s", self.linear_speed)
        logger.info("Angular speed: %.2f rad/s", self.angular_speed)

    def _begin(self, kind: MovementType, duration: float, now: float, twist: Twist) -> Twist:
        self.stop()
        self.movement_type = kind
        self.target_duration = duration
        self.start_time = now
        self.twist = twist
        return replace(twist, linear=replace(twist.linear), angular=replace(twist.angular))

    def move_for_time(self, seconds: float, now: float) -> Twist:
        """Drive forward for ``seconds``; returns the command to hold."""
        logger.info("Moving forward for %.2f seconds", seconds)
        return self._begin(
            MovementType.TIME, seconds, now, Twist(linear=Vector3(x=self.linear_speed))
        )

    def move_distance(self, distance: float, now: float) -> Twist:
        """Drive forward for the time ``distance`` takes at the linear speed."""
        if self.linear_speed == 0.0:
            raise ValueError("linear speed must be non-zero to cover a distance")
        logger.info("Moving %.2f meters", distance)
        return self._begin(
            MovementType.DISTANCE,
            distance / self.linear_speed,
            now,
            Twist(linear=Vector3(x=self.linear_speed)),
        )

    def rotate(self, angle: float, now: float) -> Twist:
        """Turn by ``angle`` radians; the sign of the angle picks the direction."""
        if self.angular_speed == 0.0:
            raise ValueError("angular speed must be non-zero to rotate")
        logger.info("Rotating %.2f degrees", math.degrees(angle))
        turn = self.angular_speed if angle > 0 else -self.angular_speed
        return self._begin(
            MovementType.ROTATION,
            abs(angle) / self.angular_speed,
            now,
            Twist(angular=Vector3(z=turn)),
        )

    def stop(self) -> Twist:
        """Cancel any motion; returns the zero command to send."""
        self.movement_type = MovementType.STOP
        self.twist = Twist()
        return Twist()

    def tick(self, now: float) -> Twist | None:
        """Command for the periodic timer, or None while stopped.

        When the motion's time is up the controller stops and the zero
        command is returned.
        """
        if self.movement_type is MovementType.STOP:
            return None
        if now - self.start_time >= self.target_duration:
            logger.info("Movement completed")
            return self.stop()
        return replace(
            self.twist,
            linear=replace(self.twist.linear),
            angular=replace(self.twist.angular),
        )

    def demo_schedule(self) -> list[_Step]:
        """The demonstration sequence: settle, drive, turn, drive for a time, stop.

        Each step gives the motion, its argument and the seconds to wait after
        starting it: the motion's own duration plus one second of margin.
        """
        if self.linear_speed == 0.0 or self.angular_speed == 0.0:
            raise ValueError("speeds must be non-zero for the demonstration")
        return [
            _Step(MovementType.STOP, 0.0, SETTLE_SECONDS),
            _Step(
                MovementType.DISTANCE,
                self.default_distance,
                self.default_distance / self.linear_speed + SETTLE_SECONDS,
            ),
            _Step(
                MovementType.ROTATION,
                self.default_angle,
                abs(self.default_angle) / self.angular_speed + SETTLE_SECONDS,
            ),
            _Step(MovementType.TIME, self.default_time, self.default_time + SETTLE_SECONDS),
            _Step(MovementType.STOP, 0.0, 0.0),
        ]
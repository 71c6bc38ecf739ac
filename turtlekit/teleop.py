"""Velocity commands: a switchable constant-speed driver and keyboard teleop."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from turtlekit.messages import Header, Stamp, Twist, TwistStamped, Vector3

logger = logging.getLogger(__name__)

DEFAULT_LOOP_RATE = 2.0
COMMAND_FRAME = "base_link"

KEY_LINEAR_SPEED = 0.5
KEY_ANGULAR_SPEED = 1.0

START_MESSAGE = "机器人开始移动"
STOP_MESSAGE = "机器人已停止"


@dataclass(frozen=True)
class ControlResponse:
    """Reply to a start/stop request."""

    success: bool
    message: str


@dataclass
class VelocityController:
    """Publishes a fixed forward and turning speed while switched on.

    A non-positive loop rate is replaced by the default of 2 Hz.
    """

    linear_speed: float = 0.3
    angular_speed: float = 0.2
    loop_rate: float = DEFAULT_LOOP_RATE
    is_moving: bool = True

    def __post_init__(self) -> None:
        if self.loop_rate <= 0.0:
            logger.warning(
                "invalid loop rate %s, using default %.1f Hz",
                self.loop_rate,
                DEFAULT_LOOP_RATE,
            )
            self.loop_rate = DEFAULT_LOOP_RATE
        logger.info(
            "linear speed: %.2f m/s, angular speed: %.2f rad/s",
            self.linear_speed,
            self.angular_speed,
        )

    def set_moving(self, moving: bool) -> ControlResponse:
        """Switch motion on or off and report the new state."""
        self.is_moving = bool(moving)
        if self.is_moving:
            logger.info("start moving")
            return ControlResponse(True, START_MESSAGE)
        logger.info("stop moving")
        return ControlResponse(True, STOP_MESSAGE)

    def command(self, stamp: Stamp) -> TwistStamped:
        """The velocity command for the current state, stamped ``stamp``."""
        twist = Twist()
        if self.is_moving:
            twist.linear.x = self.linear_speed
            twist.angular.z = self.angular_speed
        return TwistStamped(
            header=Header(stamp=replace(stamp), frame_id=COMMAND_FRAME),
            twist=twist,
        )

    def apply_parameters(self, params: Mapping[str, object]) -> list[str]:
        """Take new values for ``is_moving``, ``linear_speed`` and ``angular_speed``.

        Other names are accepted and ignored. Returns the names applied.
        """
        applied = []
        for name, value in params.items():
            if name == "is_moving":
                self.is_moving = bool(value)
                logger.info(
                    "parameter is_moving updated to: %s",
                    "true" if self.is_moving else "false",
                )
            elif name == "linear_speed":
                self.linear_speed = float(value)
            elif name == "angular_speed":
                self.angular_speed = float(value)
            else:
                continue
            applied.append(name)
        return applied

    def period(self) -> float:
        """Timer period in seconds, truncated to whole milliseconds."""
        return int(1000.0 / self.loop_rate) / 1000.0


def usage_lines() -> list[str]:
    """Help text for keyboard control."""
    return [
        "键盘控制机器人运动:",
        "------------------------",
        "w/W: 前进",
        "s/S: 后退",
        "a/A: 左转",
        "d/D: 右转",
        "x/X: 停止",
        "h/H: 显示帮助",
        "Ctrl+C: 退出程序",
    ]


_KEY_ACTIONS: dict[str, tuple[float, float, str]] = {
    "x": (0.0, 0.0, "停止运动"),
    "w": (KEY_LINEAR_SPEED, 0.0, "前进"),
    "s": (-KEY_LINEAR_SPEED, 0.0, "后退"),
    "a": (0.0, KEY_ANGULAR_SPEED, "左转"),
    "d": (0.0, -KEY_ANGULAR_SPEED, "右转"),
}


@dataclass
class KeyboardTeleop:
    """Turns single key presses into a held velocity command."""

    twist: Twist = field(default_factory=Twist)

    def handle_key(self, key: str) -> str | None:
        """Update the held command for ``key``.

        Returns a description of what the key did, the help text for ``h``,
        or None for a key with no meaning (the command is then unchanged).
        """
        lowered = key.lower()
        if lowered == "h":
            text = "\n".join(usage_lines())
            logger.info("%s", text)
            return text
        action = _KEY_ACTIONS.get(lowered)
        if action is None:
            return None
        linear, angular, label = action
        self.twist = Twist(linear=Vector3(x=linear), angular=Vector3(z=angular))
        logger.info("%s", label)
        return label
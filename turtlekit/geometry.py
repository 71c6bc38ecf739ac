"""Quaternion and angle helpers."""

from __future__ import annotations

import math
from typing import NamedTuple, TypeVar

from turtlekit.messages import Quaternion

_T = TypeVar("_T", int, float)


class _Euler(NamedTuple):
    roll: float
    pitch: float
    yaw: float


def _rotation_matrix(q: Quaternion) -> list[list[float]]:
    d = q.x * q.x + q.y * q.y + q.z * q.z + q.w * q.w
    if d == 0.0:
        raise ValueError("quaternion has zero length")
    s = 2.0 / d
    xs, ys, zs = q.x * s, q.y * s, q.z * s
    wx, wy, wz = q.w * xs, q.w * ys, q.w * zs
    xx, xy, xz = q.x * xs, q.x * ys, q.x * zs
    yy, yz, zz = q.y * ys, q.y * zs, q.z * zs
    return [
        [1.0 - (yy + zz), xy - wz, xz + wy],
        [xy + wz, 1.0 - (xx + zz), yz - wx],
        [xz - wy, yz + wx, 1.0 - (xx + yy)],
    ]


def quaternion_to_euler(q: Quaternion) -> _Euler:
    """Roll, pitch and yaw in radians, taken from the rotation matrix."""
    m = _rotation_matrix(q)
    if abs(m[2][0]) >= 1.0:
        delta = math.atan2(m[2][1], m[2][2])
        pitch = math.pi / 2 if m[2][0] < 0 else -math.pi / 2
        return _Euler(delta, pitch, 0.0)
    pitch = -math.asin(m[2][0])
    c = math.cos(pitch)
    roll = math.atan2(m[2][1] / c, m[2][2] / c)
    yaw = math.atan2(m[1][0] / c, m[0][0] / c)
    return _Euler(roll, pitch, yaw)


def direct_euler(q: Quaternion) -> _Euler:
    """Closed-form roll, pitch and yaw as printed by the IMU monitor.

    The yaw term uses ``z*y`` in its denominator, exactly as the monitor does;
    a pitch argument outside [-1, 1] gives NaN.
    """
    x, y, z, w = q.x, q.y, q.z, q.w
    roll = math.atan2(2 * (w * x + y * z), 1 - 2 * (x * x + y * y))
    sin_pitch = 2 * (w * y - z * x)
    pitch = math.asin(sin_pitch) if -1.0 <= sin_pitch <= 1.0 else math.nan
    yaw = math.atan2(2 * (w * z + x * y), 1 - 2 * (y * y + z * y))
    return _Euler(roll, pitch, yaw)


def yaw_degrees(q: Quaternion) -> float:
    """Heading of ``q`` in degrees."""
    return math.degrees(quaternion_to_euler(q).yaw)


def slerp(a: Quaternion, b: Quaternion, t: float) -> Quaternion:
    """Spherical interpolation from ``a`` (t=0) towards ``b`` (t=1)."""
    magnitude = math.sqrt(
        (a.x**2 + a.y**2 + a.z**2 + a.w**2) * (b.x**2 + b.y**2 + b.z**2 + b.w**2)
    )
    if magnitude <= 0.0:
        raise ValueError("cannot interpolate a zero-length quaternion")
    product = (a.x * b.x + a.y * b.y + a.z * b.z + a.w * b.w) / magnitude
    if abs(product) >= 1.0:
        return Quaternion(a.x, a.y, a.z, a.w)
    sign = -1.0 if product < 0 else 1.0
    theta = math.acos(sign * product)
    s1 = math.sin(sign * t * theta)
    d = 1.0 / math.sin(theta)
    s0 = math.sin((1.0 - t) * theta)
    return Quaternion(
        (a.x * s0 + b.x * s1) * d,
        (a.y * s0 + b.y * s1) * d,
        (a.z * s0 + b.z * s1) * d,
        (a.w * s0 + b.w * s1) * d,
    )


def clamp(value: _T, low: _T, high: _T) -> _T:
    """Limit ``value`` to the closed range [low, high]."""
    if value < low:
        return low
    if value > high:
        return high
    return value
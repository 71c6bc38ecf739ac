"""Camera message summaries and a depth-image obstacle check."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from turtlekit.messages import CameraInfo, Image, Stamp

logger = logging.getLogger(__name__)

SAFETY_DISTANCE = 0.5
MIN_VALID_DEPTH = 0.01


@dataclass(frozen=True)
class ObstacleCheck:
    """Depth at the image centre and whether it is too close."""

    distance: float
    obstacle: bool


def stamp_difference_ns(a: Stamp, b: Stamp) -> int:
    """Absolute difference between two stamps in nanoseconds."""
    return abs(a.nanoseconds() - b.nanoseconds())


def describe_image(image: Image) -> str:
    """Summary of a raw image message."""
    stamp = image.header.stamp
    return (
        "/camera/image_raw 数据:"
        f"\n frame_id:{image.header.frame_id}"
        f"\n Time:{stamp.sec} s,{stamp.nanosec:09d} ns"
        f"\n height:{image.height} ,width:{image.width} "
        f"\n encoding: {image.encoding}"
        f"\n is_bigendian: {image.is_bigendian}"
        f"\n step: {image.step}"
        "\n "
    )


def describe_camera_info(info: CameraInfo) -> str:
    """Summary of camera intrinsics.

    Raises ValueError if K has fewer than 9, D fewer than 5 or P fewer
    than 12 entries.
    """
    if len(info.k) < 9 or len(info.d) < 5 or len(info.p) < 12:
        raise ValueError("camera info needs 9 K, 5 D and 12 P coefficients")
    k = [f"{v:.2f}" for v in info.k[:9]]
    d = [f"{v:.4f}" for v in info.d[:5]]
    p = [f"{v:.2f}" for v in info.p[:12]]
    stamp = info.header.stamp
    k_text = "; ".join(", ".join(k[i : i + 3]) for i in range(0, 9, 3))
    p_text = "; ".join(", ".join(p[i : i + 4]) for i in range(0, 12, 4))
    return (
        "/camera/camera_info 数据:"
        f"\n frame_id:{info.header.frame_id}"
        f"\n Time:{stamp.sec} s,{stamp.nanosec:09d} ns"
        f"\n 图像宽度: {info.width}, 高度: {info.height}"
        f"\n 相机矩阵 K: [{k_text}]"
        f"\n 畸变系数 D: [{', '.join(d)}]"
        f"\n 投影矩阵 P: [{p_text}]"
        "\n "
    )


def check_depth_center(
    depth_rows: Sequence[Sequence[float]], safety_distance: float = SAFETY_DISTANCE
) -> ObstacleCheck:
    """Look at the centre pixel of a depth image given as rows of metres.

    Raises ValueError for an empty image.
    """
    if not depth_rows or not depth_rows[0]:
        raise ValueError("depth image is empty")
    row = depth_rows[len(depth_rows) // 2]
    distance = float(row[len(depth_rows[0]) // 2])
    obstacle = MIN_VALID_DEPTH < distance < safety_distance
    if obstacle:
        logger.info("obstacle at %.2f m, closer than the safety distance", distance)
    else:
        logger.info("path clear, distance %.2f m", distance)
    return ObstacleCheck(distance, obstacle)
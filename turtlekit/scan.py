"""Reading and cleaning laser scans."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import replace

from turtlekit.messages import LaserScan

logger = logging.getLogger(__name__)

DEFAULT_DIRECTIONS = (0, 45, 90, 135, 180, 225, 270, 315)
DEFAULT_PROBE_INDICES = (0, 45, 90, 135, 180, 225, 270, 315, 360)


def index_for_angle(scan: LaserScan, degrees: float) -> int:
    """Index into ``scan.ranges`` for a bearing in degrees.

    Raises ValueError if the bearing is outside the scan's field of view or
    the computed index falls outside the ranges.
    """
    target = math.radians(degrees)
    if target < scan.angle_min or target > scan.angle_max:
        raise ValueError(
            f"angle {degrees:.1f} deg outside scan range "
            f"[{math.degrees(scan.angle_min):.1f}, {math.degrees(scan.angle_max):.1f}]"
        )
    index = int((target - scan.angle_min) / scan.angle_increment)
    if index < 0 or index >= len(scan.ranges):
        raise ValueError(
            f"index {index} out of bounds (valid 0..{len(scan.ranges) - 1})"
        )
    return index


def _valid(distance: float, scan: LaserScan) -> bool:
    return not math.isnan(distance) and scan.range_min <= distance <= scan.range_max


def sample_directions(
    scan: LaserScan, degrees: Iterable[float] = DEFAULT_DIRECTIONS
) -> list[tuple[float, int, float | None]]:
    """Distances at the given bearings as ``(degrees, index, distance)``.

    Bearings outside the scan are skipped; a reading that is NaN or outside
    the sensor's range gives ``None`` for the distance.
    """
    samples = []
    for angle in degrees:
        try:
            index = index_for_angle(scan, angle)
        except ValueError as exc:
            logger.warning("%s", exc)
            continue
        distance = scan.ranges[index]
        samples.append((angle, index, distance if _valid(distance, scan) else None))
    return samples


def probe_indices(
    scan: LaserScan, indices: Iterable[int] = DEFAULT_PROBE_INDICES
) -> list[tuple[int, float]]:
    """Raw readings at fixed indices; IndexError if one lies past the end."""
    result = []
    for index in indices:
        if not 0 <= index < len(scan.ranges):
            raise IndexError(f"scan has no reading at index {index}")
        result.append((index, scan.ranges[index]))
    return result


def is_clear(distance: float, range_max: float) -> bool:
    """True when a reading shows no obstacle."""
    return math.isnan(distance) or distance > range_max


def filter_scan(
    scan: LaserScan, ground_threshold: float = 0.1, noise_threshold: float = 0.5
) -> LaserScan:
    """Copy of ``scan`` with out-of-range, ground and jump readings set to inf.

    If nothing survives, an unmodified copy is returned instead.
    """
    filtered = []
    valid_count = 0
    last_valid = -1.0
    for value in scan.ranges:
        if value < scan.range_min or value > scan.range_max:
            filtered.append(math.inf)
            continue
        if value < ground_threshold:
            filtered.append(math.inf)
            continue
        if last_valid > 0.0 and abs(value - last_valid) > noise_threshold:
            filtered.append(math.inf)
            continue
        filtered.append(value)
        last_valid = value
        valid_count += 1
    if valid_count == 0:
        logger.warning("No valid laser points! Using original data.")
        return replace(scan, ranges=list(scan.ranges))
    logger.debug(
        "Laser filtered: %d valid points (total: %d)", valid_count, len(scan.ranges)
    )
    return replace(scan, ranges=filtered)
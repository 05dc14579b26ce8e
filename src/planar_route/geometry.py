"""Distance and angle primitives between points."""

from __future__ import annotations

import math

from planar_route.model import Node


def distance(a: Node, b: Node) -> float:
    """Euclidean distance between two nodes."""
    return math.hypot(a.x - b.x, a.y - b.y)


def bearing(origin: Node, target: Node) -> float:
    """Angle of the vector origin -> target, atan2 convention, in (-pi, pi]."""
    return math.atan2(target.y - origin.y, target.x - origin.x)


def normalize_angle(angle: float) -> float:
    """Wrap an angle into (-pi, pi]."""
    while angle <= -math.pi:
        angle += 2 * math.pi
    while angle > math.pi:
        angle -= 2 * math.pi
    return angle


def angular_deviation(a: float, b: float) -> float:
    """Absolute difference between two bearings along the shorter arc, in [0, pi]."""
    diff = abs(a - b) % (2 * math.pi)
    if diff > math.pi:
        diff = 2 * math.pi - diff
    return diff


def clamp_point(
    x: float,
    y: float,
    width: float,
    height: float,
    margin: float = 0.0,
) -> tuple[float, float]:
    """Clamp (x, y) into [margin, width - margin] x [margin, height - margin]."""
    cx = max(margin, min(x, width - margin))
    cy = max(margin, min(y, height - margin))
    return cx, cy

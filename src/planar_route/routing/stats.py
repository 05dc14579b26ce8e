"""Path statistics for completed routes."""

from __future__ import annotations

__all__ = ["compute_route_stats"]

import math
from collections.abc import Sequence

from planar_route.model import RouteEdge, RouteStats


def compute_route_stats(edges: Sequence[RouteEdge]) -> RouteStats:
    """Edge count, summed edge length and endpoint distance of a route.

    The straight-line distance runs from the first edge's start to the
    last edge's end. Raises ValueError for an empty route.
    """
    if not edges:
        raise ValueError("Cannot compute statistics for an empty route")

    total = sum(edge.length for edge in edges)
    first, last = edges[0], edges[-1]
    direct = math.hypot(last.x2 - first.x1, last.y2 - first.y1)
    return RouteStats(
        num_edges=len(edges),
        total_length=total,
        direct_distance=direct,
    )

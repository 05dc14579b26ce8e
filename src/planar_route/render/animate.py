"""Animation support: the packet travelling along its route."""

from __future__ import annotations

__all__ = ["render_packet_animation"]

from collections.abc import Sequence

import drawsvg as draw

from planar_route.constants import HOP_DURATION_S
from planar_route.model import RouteEdge


def render_packet_animation(
    d: draw.Drawing,
    route: Sequence[RouteEdge],
    radius: float,
    hop_duration: float = HOP_DURATION_S,
) -> None:
    """Add a packet circle that replays ``route`` hop by hop.

    Uses an invisible motion path and <animateMotion>, one
    ``hop_duration`` per edge, holding at the last node when done.
    """
    if not route:
        return

    d_attr = _route_to_svg_path(route)
    dur = hop_duration * len(route)
    color = route[-1].address

    d.append(
        draw.Raw(
            f'<path id="packet-motion-path" d="{d_attr}" fill="none" stroke="none"/>'
        )
    )
    d.append(
        draw.Raw(
            f'<circle r="{radius}" fill="{color}" opacity="0.9">'
            f'<animateMotion dur="{dur:.2f}s" fill="freeze" calcMode="linear" '
            f'keyPoints="{_key_points(route)}" keyTimes="{_key_times(len(route))}">'
            f'<mpath href="#packet-motion-path"/>'
            f"</animateMotion>"
            f"</circle>"
        )
    )


def _route_to_svg_path(route: Sequence[RouteEdge]) -> str:
    """Polyline through every hop endpoint."""
    parts = [f"M {route[0].x1:.2f} {route[0].y1:.2f}"]
    for edge in route:
        parts.append(f"L {edge.x2:.2f} {edge.y2:.2f}")
    return " ".join(parts)


def _key_times(n_hops: int) -> str:
    """Evenly spaced times so each hop takes the same duration."""
    return ";".join(f"{i / n_hops:.4f}" for i in range(n_hops + 1))


def _key_points(route: Sequence[RouteEdge]) -> str:
    """Fraction of total path length reached at the end of each hop.

    animateMotion moves at constant speed by default; pairing these with
    evenly spaced keyTimes gives a fixed time per hop instead.
    """
    total = sum(edge.length for edge in route)
    if total == 0:
        return ";".join("0" for _ in range(len(route) + 1))
    points = [0.0]
    run = 0.0
    for edge in route:
        run += edge.length
        points.append(run / total)
    points[-1] = 1.0
    return ";".join(f"{p:.4f}" for p in points)

"""SVG snapshot of a session: canvas, triangulation, route, nodes, packet."""

from __future__ import annotations

__all__ = ["render_svg"]

import drawsvg as draw

from planar_route.constants import PACKET_RADIUS_EXTRA, TEXT_LINE_HEIGHT, TEXT_MARGIN
from planar_route.model import RouteStats
from planar_route.render.animate import render_packet_animation
from planar_route.render.style import DEFAULT_THEME, Theme
from planar_route.session import Session


def render_svg(
    session: Session,
    theme: Theme = DEFAULT_THEME,
    animate: bool = False,
    show_text: bool = True,
) -> str:
    """Render the current session state to an SVG string.

    With ``animate`` the packet replays the accumulated route instead of
    sitting on its current node. With ``show_text`` the route statistics
    and latest message are written below the canvas.
    """
    lines = _text_lines(session) if show_text else []
    text_height = len(lines) * TEXT_LINE_HEIGHT + (2 * TEXT_MARGIN if lines else 0)

    d = draw.Drawing(session.width, session.height + text_height)
    d.append(
        draw.Rectangle(
            0,
            0,
            session.width,
            session.height + text_height,
            fill=theme.background_color,
        )
    )
    d.append(
        draw.Rectangle(
            0,
            0,
            session.width,
            session.height,
            fill="none",
            stroke=theme.border_color,
            stroke_width=theme.border_width,
        )
    )

    _render_triangulation(d, session, theme)
    _render_route(d, session, theme)
    _render_nodes(d, session)

    packet_radius = session.radius + PACKET_RADIUS_EXTRA
    if animate:
        render_packet_animation(d, session.route, packet_radius)
    elif session.packet is not None:
        pkt = session.packet
        d.append(
            draw.Circle(
                pkt.current.x,
                pkt.current.y,
                packet_radius,
                fill=pkt.destination.address,
            )
        )

    for i, (text, color_key) in enumerate(lines):
        color = theme.text_color if color_key == "message" else theme.stats_color
        d.append(
            draw.Text(
                text,
                theme.font_size,
                TEXT_MARGIN,
                session.height + TEXT_MARGIN + (i + 1) * TEXT_LINE_HEIGHT,
                fill=color,
                font_family=theme.font_family,
            )
        )

    return d.as_svg()


def _render_triangulation(d: draw.Drawing, session: Session, theme: Theme) -> None:
    positions = {n.id: n.position for n in session.nodes}
    for a, b in session.edges():
        (x1, y1), (x2, y2) = positions[a], positions[b]
        d.append(
            draw.Line(
                x1,
                y1,
                x2,
                y2,
                stroke=theme.triangulation_color,
                stroke_width=theme.triangulation_width,
            )
        )


def _render_route(d: draw.Drawing, session: Session, theme: Theme) -> None:
    for edge in session.route:
        d.append(
            draw.Line(
                edge.x1,
                edge.y1,
                edge.x2,
                edge.y2,
                stroke=edge.address,
                stroke_width=theme.route_width,
            )
        )


def _render_nodes(d: draw.Drawing, session: Session) -> None:
    for node in session.nodes:
        d.append(draw.Circle(node.x, node.y, session.radius, fill=node.address))


def _text_lines(session: Session) -> list[tuple[str, str]]:
    """Statistics block followed by the latest message, as (text, kind) pairs."""
    lines: list[tuple[str, str]] = []
    stats = session.last_stats
    if stats is not None:
        lines.extend((text, "stats") for text in _format_stats(stats))
    if session.message:
        lines.append((session.message, "message"))
    return lines


def _format_stats(stats: RouteStats) -> list[str]:
    lines = [
        f"Route edges: {stats.num_edges}",
        f"Total route length: {stats.total_length:.2f}",
        f"Direct distance: {stats.direct_distance:.2f}",
    ]
    if stats.direct_distance > 0:
        lines.append(
            f"The route is {stats.stretch:.2f} times longer than the straight line."
        )
    return lines

"""Theme definition for SVG snapshots."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    background_color: str = "#ffffff"
    border_color: str = "#000000"
    border_width: float = 1.0
    triangulation_color: str = "#cccccc"
    triangulation_width: float = 1.0
    route_width: float = 2.0
    text_color: str = "#2563eb"
    stats_color: str = "#111111"
    font_family: str = "Helvetica, Arial, sans-serif"
    font_size: float = 13.0


DEFAULT_THEME = Theme()

DARK_THEME = Theme(
    background_color="#1e1e1e",
    border_color="#d0d0d0",
    triangulation_color="#555555",
    text_color="#93c5fd",
    stats_color="#eeeeee",
)

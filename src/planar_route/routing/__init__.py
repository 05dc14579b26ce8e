"""Packet routing subpackage.

Public API:
- select_next_hop: Strategy dispatcher
- Simulation / start_run / step / cancel_run: Single-run state machine
- compute_route_stats: Path statistics for an arrived route
"""

from planar_route.routing.simulator import (
    Simulation,
    cancel_run,
    choose_endpoints,
    give_up,
    start_run,
    step,
)
from planar_route.routing.stats import compute_route_stats
from planar_route.routing.strategies import resolve_strategy, select_next_hop

__all__ = [
    "Simulation",
    "cancel_run",
    "choose_endpoints",
    "compute_route_stats",
    "give_up",
    "resolve_strategy",
    "select_next_hop",
    "start_run",
    "step",
]

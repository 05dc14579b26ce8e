"""Data model: nodes, route edges, packets, run outcomes and statistics."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from planar_route.constants import INACTIVE_ADDRESS


class StrategyKind(str, Enum):
    """Next-hop selection strategies."""

    CLOSEST_TO_DESTINATION = "closestToDestination"
    SMALLEST_JUMP = "smallestJump"
    ANGLE_CLOSEST = "angleClosest"
    FIRST_LEFT = "firstLeft"
    RANDOM = "random"


class RunState(Enum):
    IDLE = "idle"
    AWAITING_FIRST_HOP = "awaiting_first_hop"
    IN_TRANSIT = "in_transit"
    ARRIVED = "arrived"
    LOST = "lost"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (RunState.ARRIVED, RunState.LOST, RunState.CANCELLED)

    @property
    def is_active(self) -> bool:
        return self in (RunState.AWAITING_FIRST_HOP, RunState.IN_TRANSIT)


class StartFailureKind(Enum):
    INSUFFICIENT_ACTIVE_NODES = "insufficient_active_nodes"
    NO_DESTINATION_CANDIDATE = "no_destination_candidate"
    RUN_ALREADY_ACTIVE = "run_already_active"


@dataclass
class Node:
    """A placed node: stable id, mutable position and address."""

    id: int
    x: float
    y: float
    address: str = INACTIVE_ADDRESS

    @property
    def is_active(self) -> bool:
        return self.address != INACTIVE_ADDRESS

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class RouteEdge:
    """One traversed hop, with endpoint coordinates captured at hop time.

    ``address`` is the destination's address, so every segment of a route
    is drawn in the same color.
    """

    start_id: int
    end_id: int
    x1: float
    y1: float
    x2: float
    y2: float
    address: str

    @property
    def length(self) -> float:
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)

    def touches(self, node_id: int) -> bool:
        return self.start_id == node_id or self.end_id == node_id

    def connects(self, a: int, b: int) -> bool:
        """True if this edge joins a and b in either direction."""
        return (self.start_id == a and self.end_id == b) or (
            self.start_id == b and self.end_id == a
        )


@dataclass
class Packet:
    current: Node
    destination: Node


@dataclass(frozen=True)
class RouteStats:
    num_edges: int
    total_length: float
    direct_distance: float

    @property
    def stretch(self) -> float:
        """Path length over straight-line distance (inf when endpoints coincide)."""
        if self.direct_distance == 0:
            return math.inf
        return self.total_length / self.direct_distance


@dataclass(frozen=True)
class StartFailure:
    kind: StartFailureKind
    message: str


@dataclass(frozen=True)
class Outcome:
    """Terminal result of a run.

    ``route`` is the route as it stood at termination (empty for
    cancelled runs); ``stats`` is only set for arrived runs.
    """

    state: RunState
    reason: str
    route: tuple[RouteEdge, ...] = field(default_factory=tuple)
    stats: RouteStats | None = None

"""Topology state and the single active run.

A Session owns the node set, the selected strategy and at most one
routing run. It is the inbound surface for a presentation layer: node
placement, address cycling, node moves, strategy selection, run start
and single-hop stepping.
"""

from __future__ import annotations

__all__ = ["Session"]

import random

import networkx as nx

from planar_route.constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    HOP_LIMIT_FACTOR,
    NODE_RADIUS,
    PALETTE,
)
from planar_route.geometry import clamp_point
from planar_route.model import (
    Node,
    Outcome,
    Packet,
    RouteEdge,
    RouteStats,
    StartFailure,
    StrategyKind,
)
from planar_route.routing.simulator import (
    MSG_CANCELLED,
    Simulation,
    cancel_run,
    give_up,
    start_run,
    step,
)
from planar_route.routing.strategies import DEFAULT_STRATEGY, resolve_strategy
from planar_route.topology.proximity import build_proximity_graph, graph_edges

MSG_HOP_LIMIT = "Packet lost: hop limit of {limit} reached."


class Session:
    """Interactive routing session over a bounded canvas."""

    def __init__(
        self,
        width: float = CANVAS_WIDTH,
        height: float = CANVAS_HEIGHT,
        radius: float = NODE_RADIUS,
        strategy: StrategyKind | str = DEFAULT_STRATEGY,
        rng: random.Random | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.radius = radius
        self.strategy = strategy
        self.rng = rng
        self.nodes: list[Node] = []
        self.run: Simulation | None = None
        self.message: str | None = None
        self._next_id = 0

    # --- Topology ---

    def add_node(self, x: float, y: float) -> Node:
        """Place a new inactive node, clamped into the canvas."""
        cx, cy = self._clamp(x, y)
        node = Node(id=self._next_id, x=cx, y=cy)
        self._next_id += 1
        self.nodes.append(node)
        return node

    def cycle_node_address(self, node_id: int) -> Node:
        """Advance a node's address to the next palette entry."""
        node = self.node(node_id)
        idx = PALETTE.index(node.address) if node.address in PALETTE else -1
        node.address = PALETTE[(idx + 1) % len(PALETTE)]
        return node

    def move_node(self, node_id: int, x: float, y: float) -> Node:
        """Relocate a node; resets the route if the node lies on it."""
        node = self.node(node_id)
        node.x, node.y = self._clamp(x, y)

        if self.run is not None and self.run.references(node_id):
            if self.run.state.is_active:
                cancel_run(self.run)
            else:
                self.run = None
            self.message = MSG_CANCELLED
        return node

    def node(self, node_id: int) -> Node:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(f"Unknown node id {node_id}")

    def proximity_graph(self) -> nx.Graph:
        return build_proximity_graph(self.nodes)

    def edges(self) -> list[tuple[int, int]]:
        """Proximity graph edges as sorted (low id, high id) pairs."""
        return graph_edges(self.proximity_graph())

    def _clamp(self, x: float, y: float) -> tuple[float, float]:
        return clamp_point(x, y, self.width, self.height, self.radius)

    # --- Routing ---

    def set_strategy(self, kind: StrategyKind | str) -> None:
        """Select the strategy for the next run; a run in flight keeps its own."""
        self.strategy = kind

    @property
    def is_running(self) -> bool:
        return self.run is not None and self.run.state.is_active

    def start_simulation(self) -> StartFailure | None:
        """Start a run between two random same-address active nodes.

        Returns None on success, otherwise the reason no run was started.
        """
        self.message = None
        if self.is_running:
            failure = start_run(self.run, self.nodes)
            self.message = failure.message
            return failure

        sim = Simulation(strategy=resolve_strategy(self.strategy), rng=self.rng)
        failure = start_run(sim, self.nodes)
        if failure is not None:
            self.message = failure.message
            return failure

        self.run = sim
        return None

    def advance_one_hop(self) -> Outcome | None:
        """Forward the active packet one hop; returns the Outcome once terminal."""
        if not self.is_running:
            raise RuntimeError("No active routing run")
        outcome = step(self.run, self.nodes)
        if outcome is not None:
            self.message = outcome.reason
        return outcome

    def run_to_completion(self, max_hops: int | None = None) -> Outcome:
        """Step the active run until it terminates.

        Greedy strategies can cycle forever, so after ``max_hops`` hops
        (default HOP_LIMIT_FACTOR per node) the packet is declared lost.
        """
        if max_hops is None:
            max_hops = max(1, HOP_LIMIT_FACTOR * len(self.nodes))
        for _ in range(max_hops):
            outcome = self.advance_one_hop()
            if outcome is not None:
                return outcome

        outcome = give_up(self.run, MSG_HOP_LIMIT.format(limit=max_hops))
        self.message = outcome.reason
        return outcome

    # --- Observables ---

    @property
    def packet(self) -> Packet | None:
        return self.run.packet if self.run is not None else None

    @property
    def route(self) -> list[RouteEdge]:
        return list(self.run.route) if self.run is not None else []

    @property
    def last_outcome(self) -> Outcome | None:
        return self.run.outcome if self.run is not None else None

    @property
    def last_stats(self) -> RouteStats | None:
        outcome = self.last_outcome
        return outcome.stats if outcome is not None else None

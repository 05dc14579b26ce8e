"""Step-by-step packet forwarding.

A run is held in a Simulation record and advanced by step(), one hop per
call. Scheduling between hops (animation delays, user stepping) belongs
to the caller; nothing here blocks or recurses.

State machine::

    IDLE --start_run--> AWAITING_FIRST_HOP --step--> IN_TRANSIT --step--> ...
    any active state --step--> ARRIVED | LOST
    any active state --cancel_run--> CANCELLED
"""

from __future__ import annotations

__all__ = [
    "Simulation",
    "cancel_run",
    "choose_endpoints",
    "give_up",
    "start_run",
    "step",
]

import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from planar_route.constants import MIN_ACTIVE_NODES
from planar_route.model import (
    Node,
    Outcome,
    Packet,
    RouteEdge,
    RunState,
    StartFailure,
    StartFailureKind,
    StrategyKind,
)
from planar_route.routing.stats import compute_route_stats
from planar_route.routing.strategies import select_next_hop
from planar_route.topology.proximity import build_proximity_graph, neighbor_nodes

MSG_ARRIVED = "Packet arrived at destination."
MSG_LOST = "Packet lost: no neighbor available."
MSG_CANCELLED = "Route reset because a node on it was moved."
MSG_INSUFFICIENT = "At least two active nodes are required to start routing."
MSG_NO_DESTINATION = "No destination node found for address {address}."
MSG_ALREADY_ACTIVE = "A routing run is already active."


@dataclass
class Simulation:
    """State of a single routing run.

    The strategy is fixed when the record is created; changing the
    session's strategy later does not affect a run in flight.
    """

    strategy: StrategyKind
    rng: random.Random | None = None
    state: RunState = RunState.IDLE
    packet: Packet | None = None
    route: list[RouteEdge] = field(default_factory=list)
    outcome: Outcome | None = None

    def references(self, node_id: int) -> bool:
        """True if node_id lies on the accumulated route or is a packet endpoint."""
        if any(edge.touches(node_id) for edge in self.route):
            return True
        if self.packet is not None:
            return node_id in (self.packet.current.id, self.packet.destination.id)
        return False


def choose_endpoints(
    nodes: Sequence[Node],
    rng: random.Random | None = None,
) -> tuple[Node, Node] | StartFailure:
    """Pick a random active source and a random active partner sharing its address."""
    rng = rng or random
    active = [n for n in nodes if n.is_active]
    if len(active) < MIN_ACTIVE_NODES:
        return StartFailure(StartFailureKind.INSUFFICIENT_ACTIVE_NODES, MSG_INSUFFICIENT)

    source = rng.choice(active)
    partners = [n for n in active if n.address == source.address and n.id != source.id]
    if not partners:
        return StartFailure(
            StartFailureKind.NO_DESTINATION_CANDIDATE,
            MSG_NO_DESTINATION.format(address=source.address),
        )
    return source, rng.choice(partners)


def start_run(sim: Simulation, nodes: Sequence[Node]) -> StartFailure | None:
    """Assign a packet to an idle run.

    Returns a StartFailure (and leaves the run idle) when the run is not
    idle or no source/destination pair exists.
    """
    if sim.state is not RunState.IDLE:
        return StartFailure(StartFailureKind.RUN_ALREADY_ACTIVE, MSG_ALREADY_ACTIVE)

    picked = choose_endpoints(nodes, sim.rng)
    if isinstance(picked, StartFailure):
        return picked

    source, destination = picked
    sim.route = []
    sim.outcome = None
    sim.packet = Packet(current=source, destination=destination)
    sim.state = RunState.AWAITING_FIRST_HOP
    return None


def step(sim: Simulation, nodes: Sequence[Node]) -> Outcome | None:
    """Forward the packet by one hop.

    Rebuilds the proximity graph from ``nodes``, asks the run's strategy
    for the next hop and appends the edge. Returns the terminal Outcome
    when the packet arrives or is lost, otherwise None.
    """
    if not sim.state.is_active or sim.packet is None:
        raise RuntimeError(f"Cannot step a run in state {sim.state.value}")

    nodes_by_id = {n.id: n for n in nodes}
    current = nodes_by_id[sim.packet.current.id]
    destination = nodes_by_id[sim.packet.destination.id]

    G = build_proximity_graph(nodes)
    candidates = neighbor_nodes(G, nodes_by_id, current.id)
    nxt = select_next_hop(
        current, destination, candidates, sim.route, sim.strategy, sim.rng
    )
    if nxt is None:
        return give_up(sim, MSG_LOST)

    sim.route.append(
        RouteEdge(
            start_id=current.id,
            end_id=nxt.id,
            x1=current.x,
            y1=current.y,
            x2=nxt.x,
            y2=nxt.y,
            address=destination.address,
        )
    )

    if nxt.id == destination.id:
        sim.packet = None
        sim.state = RunState.ARRIVED
        sim.outcome = Outcome(
            state=RunState.ARRIVED,
            reason=MSG_ARRIVED,
            route=tuple(sim.route),
            stats=compute_route_stats(sim.route),
        )
        return sim.outcome

    sim.packet = Packet(current=nxt, destination=destination)
    sim.state = RunState.IN_TRANSIT
    return None


def give_up(sim: Simulation, reason: str) -> Outcome:
    """End an active run as lost, keeping the route for display."""
    sim.packet = None
    sim.state = RunState.LOST
    sim.outcome = Outcome(state=RunState.LOST, reason=reason, route=tuple(sim.route))
    return sim.outcome


def cancel_run(sim: Simulation, reason: str = MSG_CANCELLED) -> Outcome:
    """Discard the route and packet of an active run."""
    sim.route = []
    sim.packet = None
    sim.state = RunState.CANCELLED
    sim.outcome = Outcome(state=RunState.CANCELLED, reason=reason)
    return sim.outcome

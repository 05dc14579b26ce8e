"""Next-hop selection strategies.

Each strategy sees only local information: the current node, the
destination, the current node's neighbors (ascending id order) and,
for ``random``, the edges already traversed in this run. A strategy
returns the chosen neighbor or None when the packet is stuck.

Ties go to the first neighbor in enumeration order.
"""

from __future__ import annotations

__all__ = ["resolve_strategy", "select_next_hop"]

import random
import warnings
from collections.abc import Callable, Sequence

from planar_route.geometry import angular_deviation, bearing, distance, normalize_angle
from planar_route.model import Node, RouteEdge, StrategyKind


def closest_to_destination(
    current: Node,
    destination: Node,
    candidates: Sequence[Node],
    traversed: Sequence[RouteEdge],
    rng: random.Random | None = None,
) -> Node | None:
    """Neighbor nearest to the destination."""
    if not candidates:
        return None
    return min(candidates, key=lambda n: distance(n, destination))


def smallest_jump(
    current: Node,
    destination: Node,
    candidates: Sequence[Node],
    traversed: Sequence[RouteEdge],
    rng: random.Random | None = None,
) -> Node | None:
    """Shortest hop among neighbors strictly closer to the destination."""
    here = distance(current, destination)
    closer = [n for n in candidates if distance(n, destination) < here]
    if not closer:
        return None
    return min(closer, key=lambda n: distance(current, n))


def angle_closest(
    current: Node,
    destination: Node,
    candidates: Sequence[Node],
    traversed: Sequence[RouteEdge],
    rng: random.Random | None = None,
) -> Node | None:
    """Neighbor whose bearing deviates least from the destination bearing."""
    if not candidates:
        return None
    baseline = bearing(current, destination)
    return min(
        candidates,
        key=lambda n: angular_deviation(bearing(current, n), baseline),
    )


def first_left(
    current: Node,
    destination: Node,
    candidates: Sequence[Node],
    traversed: Sequence[RouteEdge],
    rng: random.Random | None = None,
) -> Node | None:
    """First neighbor counter-clockwise from the destination direction.

    Relative angles are measured from the destination bearing and wrapped
    into (-pi, pi]. The smallest positive angle wins; when every neighbor
    lies on the right (or straight ahead), the largest angle wins instead.
    """
    if not candidates:
        return None
    baseline = bearing(current, destination)
    relative = [
        (n, normalize_angle(bearing(current, n) - baseline)) for n in candidates
    ]
    left = [item for item in relative if item[1] > 0]
    if left:
        return min(left, key=lambda item: item[1])[0]
    return max(relative, key=lambda item: item[1])[0]


def random_unused(
    current: Node,
    destination: Node,
    candidates: Sequence[Node],
    traversed: Sequence[RouteEdge],
    rng: random.Random | None = None,
) -> Node | None:
    """Uniformly random neighbor whose edge to current has not been used yet."""
    unused = [
        n
        for n in candidates
        if not any(edge.connects(current.id, n.id) for edge in traversed)
    ]
    if not unused:
        return None
    return (rng or random).choice(unused)


StrategyFn = Callable[..., "Node | None"]

STRATEGIES: dict[StrategyKind, StrategyFn] = {
    StrategyKind.CLOSEST_TO_DESTINATION: closest_to_destination,
    StrategyKind.SMALLEST_JUMP: smallest_jump,
    StrategyKind.ANGLE_CLOSEST: angle_closest,
    StrategyKind.FIRST_LEFT: first_left,
    StrategyKind.RANDOM: random_unused,
}

DEFAULT_STRATEGY = StrategyKind.CLOSEST_TO_DESTINATION


def resolve_strategy(kind: StrategyKind | str) -> StrategyKind:
    """Map a strategy tag to a StrategyKind, falling back to the default.

    Unknown tags warn and resolve to closestToDestination.
    """
    try:
        return StrategyKind(kind)
    except ValueError:
        warnings.warn(
            f"Unknown routing strategy {kind!r}, "
            f"using {DEFAULT_STRATEGY.value!r}",
            stacklevel=2,
        )
        return DEFAULT_STRATEGY


def select_next_hop(
    current: Node,
    destination: Node,
    candidates: Sequence[Node],
    traversed: Sequence[RouteEdge],
    strategy: StrategyKind | str,
    rng: random.Random | None = None,
) -> Node | None:
    """Pick the next hop from ``candidates`` using ``strategy``.

    Returns None when the neighbor set is empty or the strategy finds no
    acceptable neighbor. Unrecognized tags select like closestToDestination.
    """
    if not candidates:
        return None
    try:
        kind = StrategyKind(strategy)
    except ValueError:
        kind = DEFAULT_STRATEGY
    return STRATEGIES[kind](current, destination, candidates, traversed, rng)

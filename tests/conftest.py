"""Shared test fixtures and helpers for the planar-route test suite."""

from __future__ import annotations

import random

import pytest

from planar_route.model import Node, RouteEdge
from planar_route.session import Session

# --- Node set constants: (x, y, number of address cycles) ---

# Scenario A: two red corners and one grey corner of a triangle.
TRIANGLE = [
    (100.0, 100.0, 1),
    (300.0, 100.0, 1),
    (200.0, 250.0, 0),
]

# Scenario B: exactly collinear, red endpoints at both ends.
COLLINEAR_CHAIN = [
    (50.0, 200.0, 1),
    (150.0, 200.0, 0),
    (250.0, 200.0, 0),
    (350.0, 200.0, 1),
]

# Scenario B, slightly off the line so Qhull triangulates it.
NEAR_COLLINEAR_CHAIN = [
    (50.0, 200.0, 2),
    (150.0, 205.0, 0),
    (250.0, 198.0, 0),
    (350.0, 202.0, 2),
]

# Five nodes in general position, red at the far left and far right.
PENTAGON = [
    (60.0, 200.0, 1),
    (200.0, 80.0, 0),
    (210.0, 320.0, 0),
    (380.0, 150.0, 0),
    (520.0, 230.0, 1),
]


# --- Builders ---


def make_session(layout, strategy="closestToDestination", seed: int = 0) -> Session:
    """Session with nodes placed and addresses cycled as in ``layout``."""
    session = Session(strategy=strategy, rng=random.Random(seed))
    for x, y, cycles in layout:
        node = session.add_node(x, y)
        for _ in range(cycles):
            session.cycle_node_address(node.id)
    return session


def make_nodes(points) -> list[Node]:
    """Plain nodes with ids 0..n-1 at the given (x, y) points."""
    return [Node(id=i, x=x, y=y) for i, (x, y) in enumerate(points)]


def make_edge(a: Node, b: Node, address: str = "red") -> RouteEdge:
    return RouteEdge(
        start_id=a.id,
        end_id=b.id,
        x1=a.x,
        y1=a.y,
        x2=b.x,
        y2=b.y,
        address=address,
    )


def random_points(seed: int, n: int) -> list[tuple[float, float]]:
    rng = random.Random(seed)
    return [(rng.uniform(0, 600), rng.uniform(0, 400)) for _ in range(n)]


# --- Pytest fixtures ---


@pytest.fixture
def triangle_session() -> Session:
    return make_session(TRIANGLE)


@pytest.fixture
def chain_session() -> Session:
    return make_session(COLLINEAR_CHAIN, strategy="smallestJump")


@pytest.fixture
def pentagon_session() -> Session:
    return make_session(PENTAGON)

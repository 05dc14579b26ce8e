"""Delaunay proximity graph.

The graph is a pure function of the current positions: it is rebuilt
from scratch on every call and never patched. Nodes whose positions
coincide with an earlier node's are kept in the graph but left without
edges, since Qhull drops duplicate input points from the triangulation.
"""

from __future__ import annotations

__all__ = ["build_proximity_graph", "graph_edges", "neighbor_nodes", "neighbors"]

import warnings
from collections.abc import Sequence

import networkx as nx
import numpy as np
from scipy.spatial import Delaunay, QhullError

from planar_route.constants import COLLINEAR_TOLERANCE, MIN_TRIANGULATION_NODES
from planar_route.model import Node


def build_proximity_graph(nodes: Sequence[Node]) -> nx.Graph:
    """Build the undirected Delaunay graph keyed by node id.

    Every node is present in the returned graph. With fewer than
    MIN_TRIANGULATION_NODES nodes the graph has no edges.
    """
    G = nx.Graph()
    for node in nodes:
        G.add_node(node.id, pos=node.position)

    if len(nodes) < MIN_TRIANGULATION_NODES:
        return G

    ids = [node.id for node in nodes]
    points = np.array([node.position for node in nodes], dtype=float)

    if _is_collinear(points):
        G.add_edges_from(_chain_edges(ids, points))
        return G

    try:
        tri = Delaunay(points)
    except QhullError as exc:
        warnings.warn(
            f"Delaunay triangulation failed for {len(nodes)} nodes ({exc}); "
            "falling back to a collinear chain",
            stacklevel=2,
        )
        G.add_edges_from(_chain_edges(ids, points))
        return G

    for simplex in tri.simplices:
        a, b, c = (ids[int(i)] for i in simplex)
        G.add_edge(a, b)
        G.add_edge(b, c)
        G.add_edge(c, a)
    return G


def neighbors(nodes: Sequence[Node], of: int) -> set[int]:
    """Ids of the nodes sharing a triangulation edge with node ``of``."""
    G = build_proximity_graph(nodes)
    if of not in G:
        raise KeyError(f"Unknown node id {of}")
    return set(G.neighbors(of))


def neighbor_nodes(
    G: nx.Graph,
    nodes_by_id: dict[int, Node],
    of: int,
) -> list[Node]:
    """Adjacent nodes of ``of`` in ascending id order.

    The fixed order makes tie-breaking in the strategies independent of
    triangulation internals.
    """
    if of not in G:
        return []
    return [nodes_by_id[nid] for nid in sorted(G.neighbors(of))]


def graph_edges(G: nx.Graph) -> list[tuple[int, int]]:
    """Sorted list of (low id, high id) edge pairs."""
    return sorted((min(u, v), max(u, v)) for u, v in G.edges())


def _is_collinear(points: np.ndarray) -> bool:
    """True when all points lie on a single line (or coincide)."""
    centered = points - points.mean(axis=0)
    singular = np.linalg.svd(centered, compute_uv=False)
    if singular[0] == 0:
        return True
    return singular[1] <= COLLINEAR_TOLERANCE * singular[0]


def _chain_edges(
    ids: list[int],
    points: np.ndarray,
) -> list[tuple[int, int]]:
    """Link points in order along their principal direction.

    This is the degenerate-input triangulation: consecutive points along
    the line are adjacent. Duplicate positions after the first are left
    out, matching how Qhull treats coincident points.
    """
    centered = points - points.mean(axis=0)
    _, _, vt = np.linalg.svd(centered)
    projection = centered @ vt[0]

    order = sorted(range(len(ids)), key=lambda i: (projection[i], ids[i]))
    chain: list[int] = []
    seen: set[tuple[float, float]] = set()
    for i in order:
        key = (float(points[i][0]), float(points[i][1]))
        if key in seen:
            continue
        seen.add(key)
        chain.append(ids[i])

    return list(zip(chain, chain[1:]))

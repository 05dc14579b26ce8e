"""Proximity graph construction over node positions.

Public API:
- build_proximity_graph: Delaunay graph over the current node set
- neighbors: ids adjacent to one node
- neighbor_nodes: adjacent Node objects in ascending id order
- graph_edges: sorted edge list for display
"""

from planar_route.topology.proximity import (
    build_proximity_graph,
    graph_edges,
    neighbor_nodes,
    neighbors,
)

__all__ = [
    "build_proximity_graph",
    "graph_edges",
    "neighbor_nodes",
    "neighbors",
]

"""planar-route: greedy geometric packet routing over Delaunay proximity graphs."""

__version__ = "0.1.0"

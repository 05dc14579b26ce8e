"""SVG snapshots of a routing session."""

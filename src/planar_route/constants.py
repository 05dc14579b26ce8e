"""Shared constants for the session, routing and rendering layers."""

# --- Canvas ---

CANVAS_WIDTH: float = 600.0
CANVAS_HEIGHT: float = 400.0
NODE_RADIUS: float = 5.0

# --- Addresses ---

INACTIVE_ADDRESS: str = "grey"
ACTIVE_ADDRESSES: tuple[str, ...] = ("red", "blue", "green", "orange")
# Cycling order: inactive first, then each active address.
PALETTE: tuple[str, ...] = (INACTIVE_ADDRESS, *ACTIVE_ADDRESSES)

# --- Routing ---

MIN_TRIANGULATION_NODES: int = 3
MIN_ACTIVE_NODES: int = 2
# run_to_completion() gives up after HOP_LIMIT_FACTOR * node count hops.
HOP_LIMIT_FACTOR: int = 4
COLLINEAR_TOLERANCE: float = 1e-9

# --- Rendering ---

PACKET_RADIUS_EXTRA: float = 2.0
HOP_DURATION_S: float = 1.0
TEXT_LINE_HEIGHT: float = 18.0
TEXT_MARGIN: float = 10.0

#!/usr/bin/env python3
"""Compare the routing strategies on random node sets.

Each trial places random nodes, activates a few of them with one shared
address, then routes the same source/destination pair with every
strategy. Prints arrival ratio, mean hop count and mean stretch per
strategy, alongside the stretch of the shortest path in the same graph.

Usage:
    python scripts/compare_strategies.py --trials 200 --nodes 30
"""

from __future__ import annotations

import argparse
import math
import random
import sys
from pathlib import Path

import networkx as nx

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from planar_route.model import RunState, StrategyKind  # noqa: E402
from planar_route.render.svg import render_svg  # noqa: E402
from planar_route.session import Session  # noqa: E402


def _build_session(
    seed: int, n_nodes: int, n_active: int, strategy: StrategyKind
) -> Session:
    """Random node placement; reseeding gives every strategy the same layout and pair."""
    layout_rng = random.Random(seed)
    session = Session(strategy=strategy, rng=random.Random(seed + 1))
    for _ in range(n_nodes):
        session.add_node(
            layout_rng.uniform(0, session.width),
            layout_rng.uniform(0, session.height),
        )
    for node in layout_rng.sample(session.nodes, n_active):
        session.cycle_node_address(node.id)
    return session


def _shortest_stretch(session: Session, source_id: int, target_id: int) -> float | None:
    """Stretch of the length-weighted shortest path, or None if unreachable."""
    G = session.proximity_graph()
    pos = nx.get_node_attributes(G, "pos")
    for u, v in G.edges():
        G[u][v]["length"] = math.dist(pos[u], pos[v])
    try:
        best = nx.shortest_path_length(G, source_id, target_id, weight="length")
    except nx.NetworkXNoPath:
        return None
    direct = math.dist(pos[source_id], pos[target_id])
    return best / direct if direct > 0 else None


def run_trial(
    seed: int,
    n_nodes: int,
    n_active: int,
    svg_dir: Path | None = None,
) -> tuple[dict[StrategyKind, tuple[RunState, int, float]], float | None]:
    """Route one random instance with every strategy.

    Returns per-strategy (final state, hops, stretch) and the shortest-path
    stretch for the pair.
    """
    results: dict[StrategyKind, tuple[RunState, int, float]] = {}
    optimal: float | None = None

    for kind in StrategyKind:
        session = _build_session(seed, n_nodes, n_active, kind)
        if session.start_simulation() is not None:
            return {}, None

        pkt = session.packet
        if optimal is None:
            optimal = _shortest_stretch(session, pkt.current.id, pkt.destination.id)

        outcome = session.run_to_completion()
        stretch = outcome.stats.stretch if outcome.stats else math.nan
        results[kind] = (outcome.state, len(outcome.route), stretch)

        if svg_dir is not None:
            (svg_dir / f"trial{seed}_{kind.value}.svg").write_text(render_svg(session))

    return results, optimal


def main():
    parser = argparse.ArgumentParser(description="Compare greedy routing strategies")
    parser.add_argument("--trials", type=int, default=100, help="Number of random instances")
    parser.add_argument("--nodes", type=int, default=25, help="Nodes per instance")
    parser.add_argument("--active", type=int, default=2, help="Active nodes per instance")
    parser.add_argument("--seed", type=int, default=0, help="Base random seed")
    parser.add_argument(
        "--svg-dir", type=Path, default=None,
        help="Write an SVG snapshot of the first trial for each strategy",
    )
    args = parser.parse_args()

    if args.active < 2 or args.active > args.nodes:
        parser.error("--active must be between 2 and --nodes")

    if args.svg_dir is not None:
        args.svg_dir.mkdir(parents=True, exist_ok=True)

    arrived = {kind: 0 for kind in StrategyKind}
    hops = {kind: [] for kind in StrategyKind}
    stretches = {kind: [] for kind in StrategyKind}
    optimal: list[float] = []
    completed = 0

    for trial in range(args.trials):
        seed = args.seed + 2 * trial
        results, best = run_trial(
            seed, args.nodes, args.active,
            svg_dir=args.svg_dir if trial == 0 else None,
        )
        if not results:
            continue
        completed += 1
        if best is not None:
            optimal.append(best)
        for kind, (state, n_hops, stretch) in results.items():
            if state is RunState.ARRIVED:
                arrived[kind] += 1
                hops[kind].append(n_hops)
                stretches[kind].append(stretch)

    print(f"{completed} instances, {args.nodes} nodes each\n")
    print(f"  {'strategy':<22} {'arrived':>8} {'hops':>7} {'stretch':>8}")
    for kind in StrategyKind:
        ratio = arrived[kind] / completed if completed else 0.0
        mean_hops = sum(hops[kind]) / len(hops[kind]) if hops[kind] else math.nan
        mean_stretch = (
            sum(stretches[kind]) / len(stretches[kind]) if stretches[kind] else math.nan
        )
        print(f"  {kind.value:<22} {ratio:>8.2%} {mean_hops:>7.2f} {mean_stretch:>8.3f}")
    if optimal:
        print(f"\n  shortest-path stretch: {sum(optimal) / len(optimal):.3f}")

    if completed == 0:
        sys.exit(1)


if __name__ == "__main__":
    main()

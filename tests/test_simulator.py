"""Tests for the single-run routing state machine."""

import random

import pytest
from conftest import make_nodes, random_points

from planar_route.model import RunState, StartFailureKind, StrategyKind
from planar_route.routing.simulator import (
    MSG_ARRIVED,
    MSG_LOST,
    Simulation,
    cancel_run,
    choose_endpoints,
    give_up,
    start_run,
    step,
)


def _with_addresses(points, addresses):
    nodes = make_nodes(points)
    for node, address in zip(nodes, addresses):
        node.address = address
    return nodes


def _run(sim, nodes, limit=200):
    for _ in range(limit):
        outcome = step(sim, nodes)
        if outcome is not None:
            return outcome
    raise AssertionError("run did not terminate")


# --- Endpoint selection ---


def test_choose_endpoints_pairs_same_address():
    nodes = _with_addresses(
        [(0, 0), (100, 0), (50, 80), (150, 90)],
        ["red", "grey", "red", "grey"],
    )
    for seed in range(10):
        source, dest = choose_endpoints(nodes, random.Random(seed))
        assert {source.id, dest.id} == {0, 2}


def test_choose_endpoints_insufficient_active():
    nodes = _with_addresses([(0, 0), (100, 0), (50, 80)], ["red", "grey", "grey"])
    failure = choose_endpoints(nodes, random.Random(0))
    assert failure.kind is StartFailureKind.INSUFFICIENT_ACTIVE_NODES


def test_choose_endpoints_no_partner():
    nodes = _with_addresses([(0, 0), (100, 0), (50, 80)], ["red", "blue", "grey"])
    failure = choose_endpoints(nodes, random.Random(0))
    assert failure.kind is StartFailureKind.NO_DESTINATION_CANDIDATE
    assert "red" in failure.message or "blue" in failure.message


def test_choose_endpoints_seeded_is_reproducible():
    points = random_points(5, 12)
    nodes = _with_addresses(points, ["green"] * 12)
    a = choose_endpoints(nodes, random.Random(42))
    b = choose_endpoints(nodes, random.Random(42))
    assert (a[0].id, a[1].id) == (b[0].id, b[1].id)


# --- Start / step ---


def test_start_run_enters_awaiting_first_hop():
    nodes = _with_addresses([(0, 0), (100, 0), (50, 80)], ["red", "red", "grey"])
    sim = Simulation(strategy=StrategyKind.CLOSEST_TO_DESTINATION, rng=random.Random(0))
    assert start_run(sim, nodes) is None
    assert sim.state is RunState.AWAITING_FIRST_HOP
    assert sim.packet is not None
    assert sim.packet.current.address == sim.packet.destination.address
    assert sim.route == []


def test_start_run_failure_stays_idle():
    nodes = _with_addresses([(0, 0), (100, 0), (50, 80)], ["red", "grey", "grey"])
    sim = Simulation(strategy=StrategyKind.CLOSEST_TO_DESTINATION)
    failure = start_run(sim, nodes)
    assert failure.kind is StartFailureKind.INSUFFICIENT_ACTIVE_NODES
    assert sim.state is RunState.IDLE
    assert sim.packet is None


def test_start_run_rejected_while_active():
    nodes = _with_addresses([(0, 0), (100, 0), (50, 80)], ["red", "red", "grey"])
    sim = Simulation(strategy=StrategyKind.CLOSEST_TO_DESTINATION, rng=random.Random(0))
    start_run(sim, nodes)
    failure = start_run(sim, nodes)
    assert failure.kind is StartFailureKind.RUN_ALREADY_ACTIVE


def test_step_without_packet_raises():
    sim = Simulation(strategy=StrategyKind.CLOSEST_TO_DESTINATION)
    with pytest.raises(RuntimeError):
        step(sim, [])


def test_arrival_in_one_hop_on_triangle():
    nodes = _with_addresses(
        [(100, 100), (300, 100), (200, 250)], ["red", "red", "grey"]
    )
    sim = Simulation(strategy=StrategyKind.CLOSEST_TO_DESTINATION, rng=random.Random(3))
    start_run(sim, nodes)
    outcome = step(sim, nodes)
    assert outcome.state is RunState.ARRIVED
    assert outcome.reason == MSG_ARRIVED
    assert sim.packet is None
    assert len(sim.route) == 1
    assert outcome.stats.num_edges == 1
    assert outcome.stats.stretch == pytest.approx(1.0)


def test_in_transit_after_intermediate_hop():
    nodes = _with_addresses(
        [(50, 200), (150, 200), (250, 200), (350, 200)],
        ["blue", "grey", "grey", "blue"],
    )
    sim = Simulation(strategy=StrategyKind.SMALLEST_JUMP, rng=random.Random(0))
    start_run(sim, nodes)
    assert step(sim, nodes) is None
    assert sim.state is RunState.IN_TRANSIT
    assert sim.packet.current.id in (1, 2)


def test_undersized_graph_loses_packet_on_first_step():
    nodes = _with_addresses([(0, 0), (100, 0)], ["red", "red"])
    sim = Simulation(strategy=StrategyKind.CLOSEST_TO_DESTINATION, rng=random.Random(0))
    assert start_run(sim, nodes) is None
    outcome = step(sim, nodes)
    assert outcome.state is RunState.LOST
    assert outcome.reason == MSG_LOST
    assert outcome.stats is None
    assert sim.packet is None
    assert sim.route == []


def test_route_edges_carry_destination_address():
    nodes = _with_addresses(
        [(50, 200), (150, 200), (250, 200), (350, 200)],
        ["blue", "grey", "grey", "blue"],
    )
    sim = Simulation(strategy=StrategyKind.SMALLEST_JUMP, rng=random.Random(0))
    start_run(sim, nodes)
    _run(sim, nodes)
    assert {edge.address for edge in sim.route} == {"blue"}


# --- Termination helpers ---


def test_give_up_keeps_route():
    nodes = _with_addresses(
        [(50, 200), (150, 200), (250, 200), (350, 200)],
        ["blue", "grey", "grey", "blue"],
    )
    sim = Simulation(strategy=StrategyKind.SMALLEST_JUMP, rng=random.Random(0))
    start_run(sim, nodes)
    step(sim, nodes)
    outcome = give_up(sim, "stuck")
    assert outcome.state is RunState.LOST
    assert len(outcome.route) == 1
    assert sim.route and sim.packet is None


def test_cancel_run_clears_route_and_packet():
    nodes = _with_addresses(
        [(50, 200), (150, 200), (250, 200), (350, 200)],
        ["blue", "grey", "grey", "blue"],
    )
    sim = Simulation(strategy=StrategyKind.SMALLEST_JUMP, rng=random.Random(0))
    start_run(sim, nodes)
    step(sim, nodes)
    outcome = cancel_run(sim)
    assert outcome.state is RunState.CANCELLED
    assert sim.route == []
    assert sim.packet is None
    assert outcome.route == ()


# --- Properties over random instances ---


@pytest.mark.parametrize("seed", range(10))
def test_greedy_closest_always_arrives_on_delaunay(seed):
    points = random_points(seed, 30)
    nodes = _with_addresses(points, ["red", "red"] + ["grey"] * 28)
    sim = Simulation(strategy=StrategyKind.CLOSEST_TO_DESTINATION, rng=random.Random(seed))
    start_run(sim, nodes)
    outcome = _run(sim, nodes)

    assert outcome.state is RunState.ARRIVED
    stats = outcome.stats
    assert stats.num_edges == len(outcome.route)
    assert stats.total_length >= stats.direct_distance - 1e-9
    assert stats.stretch >= 1.0 - 1e-9


@pytest.mark.parametrize("strategy", list(StrategyKind))
@pytest.mark.parametrize("seed", range(4))
def test_route_is_continuous(strategy, seed):
    points = random_points(100 + seed, 20)
    nodes = _with_addresses(points, ["orange", "orange"] + ["grey"] * 18)
    sim = Simulation(strategy=strategy, rng=random.Random(seed))
    start_run(sim, nodes)
    for _ in range(80):
        if step(sim, nodes) is not None:
            break
    for prev, nxt in zip(sim.route, sim.route[1:]):
        assert nxt.start_id == prev.end_id


@pytest.mark.parametrize("seed", range(6))
def test_random_strategy_never_reuses_an_edge(seed):
    points = random_points(200 + seed, 15)
    nodes = _with_addresses(points, ["green", "green"] + ["grey"] * 13)
    sim = Simulation(strategy=StrategyKind.RANDOM, rng=random.Random(seed))
    start_run(sim, nodes)
    _run(sim, nodes, limit=500)
    used = [frozenset((e.start_id, e.end_id)) for e in sim.route]
    assert len(used) == len(set(used))

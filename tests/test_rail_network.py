import random

import pytest
import numpy as np
import networkx as nx
from networkx.generators.random_graphs import fast_gnp_random_graph

from world.rail_network import NetworkGraph
from world.transit import INF, InvalidStation, LineType

A, B, C, D = range(4)


@pytest.fixture
def chain():
    network = NetworkGraph(4)
    network.add_track(A, B, 3, 2, LineType.WESTERN)
    network.add_track(B, C, 4, 2, LineType.WESTERN)
    network.add_track(C, D, 5, 3, LineType.WESTERN)
    return network


def get_random_network(nn, pp, seed):
    rng = random.Random(seed)
    grph = fast_gnp_random_graph(nn, pp, seed=seed)
    network = NetworkGraph(nn)
    for uu, vv in grph.edges():
        minutes = rng.randint(0, 10)
        km = rng.randint(1, 10)
        network.add_track(uu, vv, minutes, km)
    return network


def route_minutes(network, path):
    total = 0
    for uu, vv in zip(path[:-1], path[1:]):
        weights = [ee.weight for ee in network.neighbours(uu) if ee.to == vv]
        assert len(weights) > 0, f"{uu} -> {vv} is not a track"
        total += min(weights)
    return total


def test_chain_route(chain):
    route = chain.find_fastest_route(A, D)
    assert route.path == [A, B, C, D]
    assert route.total_minutes == 12
    assert route.total_km == 7
    assert route.hops() == [(A, B), (B, C), (C, D)]
    # and the other way
    assert chain.find_fastest_route(D, A).path == [D, C, B, A]


def test_chain_blocked(chain):
    assert chain.block_track(B, C)
    assert chain.is_blocked(B, C) and chain.is_blocked(C, B)
    assert chain.find_fastest_route(A, D) is None
    assert chain.get_distance(A, D) is None
    # the rest of the chain still works
    assert chain.find_fastest_route(A, B).total_minutes == 3


def test_route_to_self(chain):
    for ss in range(4):
        route = chain.find_fastest_route(ss, ss)
        assert route.path == [ss]
        assert route.total_minutes == 0
    assert chain.get_distance(C, C) == 0


def test_prefers_faster_detour():
    network = NetworkGraph(3)
    network.add_track(0, 2, 20, 5)
    network.add_track(0, 1, 5, 10)
    network.add_track(1, 2, 5, 10)
    route = network.find_fastest_route(0, 2)
    assert route.path == [0, 1, 2]
    assert route.total_minutes == 10
    # distance is minimised separately from time
    assert network.get_distance(0, 2) == 5


def test_block_reroutes():
    network = NetworkGraph(4)
    network.add_track(0, 1, 1, 1)
    network.add_track(1, 3, 1, 1)
    network.add_track(0, 2, 5, 1)
    network.add_track(2, 3, 5, 1)
    assert network.find_fastest_route(0, 3).path == [0, 1, 3]
    network.block_track(1, 3)
    route = network.find_fastest_route(0, 3)
    assert route.path == [0, 2, 3]
    assert route.total_minutes == 10


def test_block_missing_track(chain):
    assert not chain.block_track(A, D)
    assert chain.find_fastest_route(A, D).total_minutes == 12


def test_invalid_stations(chain):
    with pytest.raises(InvalidStation):
        chain.add_track(0, 4, 1, 1)
    with pytest.raises(InvalidStation):
        chain.find_fastest_route(-1, 2)
    with pytest.raises(InvalidStation):
        chain.get_distance(0, 10)
    with pytest.raises(InvalidStation):
        chain.block_track(7, 0)
    with pytest.raises(InvalidStation):
        chain.connectivity(4)
    with pytest.raises(ValueError):
        chain.add_track(0, 1, -1, 1)


def test_matches_networkx_on_random_graphs():
    for seed in range(50):
        nn = 1 + seed % 10
        network = get_random_network(nn, 0.4, seed)
        nx_graph = network.to_networkx()
        for src in range(nn):
            true_times = nx.single_source_dijkstra_path_length(nx_graph, src)
            true_kms = nx.single_source_dijkstra_path_length(
                nx_graph, src, weight='distance')
            for dest in range(nn):
                route = network.find_fastest_route(src, dest)
                if dest not in true_times:
                    assert route is None
                    assert network.get_distance(src, dest) is None
                    continue
                assert route.path[0] == src and route.path[-1] == dest
                assert route.total_minutes == true_times[dest]
                assert route_minutes(network, route.path) == \
                    route.total_minutes
                assert network.get_distance(src, dest) == true_kms[dest]


def test_routes_avoid_blocked_tracks():
    rng = random.Random(0)
    for seed in range(30):
        nn = 2 + seed % 9
        network = get_random_network(nn, 0.5, seed)
        tracks = [(uu, edge.to) for uu, edge in network.tracks()]
        blocked = rng.sample(tracks, len(tracks) // 3)
        for uu, vv in blocked:
            network.block_track(uu, vv)
        blocked = set(blocked) | {(vv, uu) for uu, vv in blocked}

        open_graph = network.to_networkx(include_blocked=False)
        for src in range(nn):
            true_times = nx.single_source_dijkstra_path_length(open_graph, 
                                                               src)
            for dest in range(nn):
                route = network.find_fastest_route(src, dest)
                if dest not in true_times:
                    assert route is None
                    continue
                assert route.total_minutes == true_times[dest]
                for hop in route.hops():
                    assert hop not in blocked


def test_connectivity(chain):
    conn = chain.connectivity(B)
    assert conn.count == 4
    # breadth-first order
    assert conn.reachable == [B, A, C, D]

    network = NetworkGraph(5)
    network.add_track(0, 1, 1, 1)
    network.add_track(3, 4, 1, 1)
    assert network.connectivity(0).reachable == [0, 1]
    assert network.connectivity(2).reachable == [2]
    assert network.connectivity(4).count == 2


def test_connectivity_and_blocked_tracks(chain):
    chain.block_track(B, C)
    # blocked tracks still count as physical connections by default...
    assert chain.connectivity(A).count == 4
    # ...unless asked otherwise
    conn = chain.connectivity(A, honor_blocks=True)
    assert conn.reachable == [A, B]


def test_network_stats(chain):
    stats = chain.network_stats()
    assert stats.station_count == 4
    assert stats.track_count == 3
    assert stats.avg_degree == pytest.approx(1.5)
    # B and C both have two tracks; the first one wins
    assert stats.most_connected_station == B
    assert stats.most_connected_degree == 2
    # blocking changes nothing here
    chain.block_track(A, B)
    assert chain.network_stats() == stats


def test_empty_network_stats():
    stats = NetworkGraph(0).network_stats()
    assert stats.station_count == 0
    assert stats.most_connected_station is None


def test_travel_time_matrix(chain):
    chain.block_track(C, D)
    times = chain.travel_time_matrix()
    assert times.shape == (4, 4)
    assert np.all(np.diag(times) == 0)
    assert times[A, C] == 7
    assert times[A, D] == INF
    assert np.array_equal(times, times.T)


def test_to_networkx(chain):
    chain.block_track(A, B)
    grph = chain.to_networkx()
    assert grph.number_of_nodes() == 4
    assert grph.number_of_edges() == 3
    assert chain.to_networkx(include_blocked=False).number_of_edges() == 2

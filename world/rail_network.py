# Copyright 2023 Andrew Holliday
# 
# This file is part of the Transit Routing project.
#
# Transit Routing is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the Free 
# Software Foundation, either version 3 of the License, or (at your option) any 
# later version.
# 
# Transit Routing is distributed in the hope that it will be useful, but 
# WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or 
# FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more 
# details.
#
# You should have received a copy of the GNU General Public License along with 
# Transit Routing. If not, see <https://www.gnu.org/licenses/>.

import logging as log
from dataclasses import dataclass
from itertools import count
from typing import List, Optional

import numpy as np
import networkx as nx

from containers import Stack, Queue, MinHeap
from world.transit import INF, Edge, Route, LineType, check_station_id


@dataclass
class Connectivity:
    count: int
    # station ids in the order the search reached them
    reachable: List[int]


@dataclass
class NetworkStats:
    station_count: int
    track_count: int
    avg_degree: float
    most_connected_station: Optional[int]
    most_connected_degree: int


class NetworkGraph:
    """An adjacency-list graph of stations joined by two-way tracks.

    Station ids are the dense integers 0 to n_stations - 1.  Each track is 
    stored as a pair of directed edges, one per direction.  A blocked track 
    keeps its edges but their weight becomes INF, so routing never uses it.
    """
    def __init__(self, n_stations):
        self.n_stations = n_stations
        self._adj = [[] for _ in range(n_stations)]

    def _check(self, *station_ids):
        for station_id in station_ids:
            check_station_id(station_id, self.n_stations)

    def add_track(self, uu, vv, minutes, km, line=LineType.WESTERN):
        self._check(uu, vv)
        if minutes < 0 or km < 0:
            raise ValueError("track time and distance must be non-negative")
        self._adj[uu].append(Edge(vv, minutes, km, line))
        self._adj[vv].append(Edge(uu, minutes, km, line))

    def block_track(self, uu, vv):
        """Marks the track between uu and vv as unusable in both directions.

        Each direction is looked up and blocked on its own.  There is no way 
        to reopen a blocked track: the block stands for the lifetime of the
        network object.
        """
        self._check(uu, vv)
        n_blocked = 0
        for edge in self._adj[uu]:
            if edge.to == vv:
                edge.weight = INF
                n_blocked += 1
        for edge in self._adj[vv]:
            if edge.to == uu:
                edge.weight = INF
                n_blocked += 1
        if n_blocked == 0:
            log.warning(f"no track between {uu} and {vv} to block")
        else:
            log.warning(f"track between {uu} and {vv} blocked")
        return n_blocked > 0

    def is_blocked(self, uu, vv):
        self._check(uu, vv)
        edges = [ee for ee in self._adj[uu] if ee.to == vv]
        return len(edges) > 0 and all(ee.is_blocked for ee in edges)

    def neighbours(self, uu):
        self._check(uu)
        return list(self._adj[uu])

    def tracks(self):
        """Yields (uu, edge) once per two-way track, with uu < edge.to."""
        for uu, edges in enumerate(self._adj):
            for edge in edges:
                if uu < edge.to:
                    yield uu, edge

    def _shortest_paths(self, src, dest, cost_of):
        """Dijkstra's algorithm from src, stopping once dest is settled.  
        cost_of maps an edge to its cost, or None if the edge can't be used.
        Returns the cost and parent arrays."""
        costs = [INF] * self.n_stations
        parents = [-1] * self.n_stations
        costs[src] = 0
        # ties on cost go to whichever entry was pushed first
        tiebreak = count()
        frontier = MinHeap(key=lambda entry: entry[:2])
        frontier.push((0, next(tiebreak), src))

        while not frontier.empty():
            cost, _, uu = frontier.pop()
            if cost > costs[uu]:
                # stale entry; uu was already reached more cheaply
                continue
            if uu == dest:
                break
            for edge in self._adj[uu]:
                edge_cost = cost_of(edge)
                if edge_cost is None:
                    continue
                new_cost = cost + edge_cost
                if new_cost < costs[edge.to]:
                    costs[edge.to] = new_cost
                    parents[edge.to] = uu
                    frontier.push((new_cost, next(tiebreak), edge.to))

        return costs, parents

    def find_fastest_route(self, src, dest):
        """Returns the quickest Route from src to dest, or None if dest can't
        be reached from src."""
        self._check(src, dest)
        costs, parents = self._shortest_paths(src, dest, _minutes_cost)
        if costs[dest] == INF:
            log.info(f"no route from {src} to {dest}")
            return None

        # walk back from dest, then unwind the stack to get src -> dest
        stack = Stack()
        curr = dest
        while curr != -1:
            stack.push(curr)
            curr = parents[curr]
        path = []
        while not stack.empty():
            path.append(stack.pop())

        total_km = sum(self._hop_edge(uu, vv).distance 
                       for uu, vv in zip(path[:-1], path[1:]))
        return Route(path, costs[dest], total_km)

    def _hop_edge(self, uu, vv):
        # the cheapest open edge from uu to vv
        edges = [ee for ee in self._adj[uu] if ee.to == vv and not ee.is_blocked]
        return min(edges, key=lambda ee: ee.weight)

    def get_distance(self, src, dest):
        """Returns the shortest distance in km from src to dest, or None if 
        dest can't be reached.  Blocked tracks are not counted."""
        self._check(src, dest)
        costs, _ = self._shortest_paths(src, dest, _km_cost)
        if costs[dest] == INF:
            return None
        return costs[dest]

    def connectivity(self, start, honor_blocks=False):
        """Breadth-first search for every station reachable from start.

        By default blocked tracks are still followed, since blocking only
        changes a track's weight, so this reports physical connectivity and 
        can disagree with find_fastest_route.  Pass honor_blocks=True to 
        leave blocked tracks out of the search.
        """
        self._check(start)
        visited = [False] * self.n_stations
        visited[start] = True
        queue = Queue()
        queue.push(start)
        reachable = []

        while not queue.empty():
            uu = queue.pop()
            reachable.append(uu)
            for edge in self._adj[uu]:
                if honor_blocks and edge.is_blocked:
                    continue
                if not visited[edge.to]:
                    visited[edge.to] = True
                    queue.push(edge.to)

        return Connectivity(len(reachable), reachable)

    def network_stats(self):
        degrees = np.array([len(edges) for edges in self._adj], dtype=int)
        # every track contributes one edge in each direction
        track_count = int(degrees.sum()) // 2
        if self.n_stations == 0:
            return NetworkStats(0, 0, 0.0, None, 0)
        hub = int(np.argmax(degrees))
        avg_degree = track_count * 2 / self.n_stations
        return NetworkStats(self.n_stations, track_count, avg_degree, hub, 
                            int(degrees[hub]))

    def travel_time_matrix(self):
        """Fastest travel time in minutes between every pair of stations, 
        with INF for pairs that aren't connected."""
        times = np.full((self.n_stations, self.n_stations), INF)
        for src in range(self.n_stations):
            costs, _ = self._shortest_paths(src, None, _minutes_cost)
            times[src] = costs
        return times

    def to_networkx(self, include_blocked=True):
        graph = nx.MultiGraph()
        graph.add_nodes_from(range(self.n_stations))
        for uu, edge in self.tracks():
            if edge.is_blocked and not include_blocked:
                continue
            graph.add_edge(uu, edge.to, weight=edge.weight, 
                           distance=edge.distance, line=edge.line, 
                           blocked=edge.is_blocked)
        return graph


def _minutes_cost(edge):
    return edge.weight


def _km_cost(edge):
    if edge.is_blocked:
        return None
    return edge.distance

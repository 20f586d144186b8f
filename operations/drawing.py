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

from itertools import cycle

import networkx as nx
import matplotlib.pyplot as plt

from world.transit import LineType


def get_layout(network, seed=0):
    """Positions for the stations.  We have no real coordinates, so lay the
    graph out with a seeded spring layout."""
    nx_graph = network.to_networkx()
    return nx.spring_layout(nx_graph, seed=seed)


def draw_network(system, ax=None, route=None, pos=None):
    """
    Draw the stations and tracks, coloured by line.  Blocked tracks are 
    drawn dashed, and if a route is given it is drawn over the top.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(12, 12))
    if pos is None:
        pos = get_layout(system.network)

    # parallel tracks are drawn as one line
    nx_graph = nx.Graph(system.network.to_networkx())
    labels = {ss.id: ss.name for ss in system.stations}
    interchanges = [ss.id for ss in system.stations if ss.is_interchange]
    nx.draw_networkx_nodes(nx_graph, pos=pos, ax=ax, node_color='black', 
                           node_size=30)
    nx.draw_networkx_nodes(nx_graph, pos=pos, ax=ax, nodelist=interchanges,
                           node_color='white', edgecolors='black', 
                           node_size=80)
    nx.draw_networkx_labels(nx_graph, pos=pos, labels=labels, ax=ax, 
                            font_size=8)

    colours = plt.rcParams['axes.prop_cycle'].by_key()['color']
    line_colours = dict(zip(LineType, cycle(colours)))
    for line in LineType:
        open_edges = [(uu, vv) for uu, vv, dd in nx_graph.edges(data=True)
                      if dd['line'] == line and not dd['blocked']]
        blocked_edges = [(uu, vv) for uu, vv, dd in nx_graph.edges(data=True)
                         if dd['line'] == line and dd['blocked']]
        if open_edges:
            nx.draw_networkx_edges(nx_graph, pos=pos, ax=ax,
                                   edgelist=open_edges,
                                   edge_color=line_colours[line], width=2,
                                   label=line.display_name)
        if blocked_edges:
            nx.draw_networkx_edges(nx_graph, pos=pos, ax=ax, 
                                   edgelist=blocked_edges, 
                                   edge_color=line_colours[line], width=2,
                                   style='dashed')

    if route is not None and route.num_stops > 1:
        nx.draw_networkx_edges(nx_graph, pos=pos, ax=ax, 
                               edgelist=route.hops(), edge_color='black', 
                               width=5, alpha=0.4)

    ax.legend()
    return ax

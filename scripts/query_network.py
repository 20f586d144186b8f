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

"""Answers one question about the network per run.  The network and the 
question both come from the hydra config, eg:

    python scripts/query_network.py query.command=route \
        query.src=Churchgate query.dest=Thane
    python scripts/query_network.py query.command=route \
        query.src=Dadar query.dest=Thane "query.block=[[Kurla,Ghatkopar]]"
    python scripts/query_network.py query.command=ticket query.output_dir=out \
        "query.passengers=[{name:Asha,age:34,type:ladies,src:Dadar,dest:Thane}]"
"""

import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import logging as log

import hydra
from omegaconf import DictConfig
import matplotlib.pyplot as plt

from operations.transit_system import TransitSystem
from operations.ticketing import TicketSystem
from operations import analytics
from operations.drawing import draw_network
from world import network_io
from world.transit import Passenger, PassengerType
import config_utils


def resolve_or_report(system, name):
    station_id, suggestions = system.resolve(name)
    if station_id is None:
        print(f"Station not found: {name}")
        if suggestions:
            print("Did you mean: " + 
                  ", ".join(sname for sname, _ in suggestions))
    return station_id


def print_route(system, tickets, src, dest):
    route = system.network.find_fastest_route(src, dest)
    if route is None:
        print(f"No route found between {system.station_name(src)} and "
              f"{system.station_name(dest)}")
        return None
    print("Route: " + " -> ".join(system.path_names(route)))
    print(f"Distance (km): {route.total_km}")
    print(f"Time (min):    {route.total_minutes}")
    print(f"Cost (Rs):     {tickets.fare(system.network, src, dest)}")
    return route


def print_trains(trains):
    if len(trains) == 0:
        print("No trains scheduled.")
    for train in trains:
        print(f"{config_utils.minutes_to_str(train.arrival_time):<10}"
              f"{train.name:<20}{train.status.name}")


def block_tracks(system, pairs):
    for name1, name2 in pairs:
        uu = resolve_or_report(system, name1)
        vv = resolve_or_report(system, name2)
        if uu is None or vv is None:
            log.warning(f"not blocking {name1} - {name2}")
            continue
        system.network.block_track(uu, vv)


def sell_tickets(system, tickets, passenger_cfgs):
    """Queues up the configured passengers and serves them all.  Returns 
    the passengers that got tickets."""
    for ii, pcfg in enumerate(passenger_cfgs):
        src = resolve_or_report(system, pcfg.src)
        dest = resolve_or_report(system, pcfg.dest)
        if src is None or dest is None:
            continue
        ptype = PassengerType[pcfg.get('type', 'general').upper()]
        tickets.join_queue(Passenger(ii + 1, pcfg.name, pcfg.age, ptype, 
                                     src, dest))

    served = tickets.process_queues(system.network, system.stations)
    for passenger in served:
        print(f"{passenger.name:<20}{passenger.type.name:<10}"
              f"{system.station_name(passenger.source_id)} -> "
              f"{system.station_name(passenger.dest_id)}  "
              f"Rs. {passenger.ticket_price}")
    print(f"Tickets sold: {tickets.tickets_sold}  "
          f"Revenue: Rs. {tickets.revenue}")
    return served


def run_query(system, tickets, query):
    command = query.command
    route = None
    served = []
    if command == 'stations':
        for name, station_id in system.directory.list():
            print(f"  - {name:<20} (ID: {station_id})")

    elif command == 'search':
        station_id = resolve_or_report(system, query.station)
        if station_id is not None:
            station = system.stations[station_id]
            print(f"Name: {station.name}\nID: {station.id}\n"
                  f"Line: {station.line.display_name}\n"
                  f"Platforms: {station.platforms}\n"
                  f"Current Load: {station.passenger_count} passengers\n"
                  f"Interchange: {'Yes' if station.is_interchange else 'No'}")

    elif command == 'suggest':
        for name, station_id in system.directory.prefix_matches(query.prefix):
            print(f"  - {name:<20} (ID: {station_id})")

    elif command == 'route':
        src = resolve_or_report(system, query.src)
        dest = resolve_or_report(system, query.dest)
        if src is not None and dest is not None:
            route = print_route(system, tickets, src, dest)

    elif command == 'connectivity':
        start = resolve_or_report(system, query.station)
        if start is not None:
            conn = system.network.connectivity(
                start, honor_blocks=query.honor_blocks)
            for ii, station_id in enumerate(conn.reachable):
                print(f"  {ii + 1}. {system.station_name(station_id)} "
                      f"(ID: {station_id})")
            print(f"Total Reachable: {conn.count} stations")

    elif command == 'stats':
        stats = system.network.network_stats()
        print(f"Total Stations: {stats.station_count}")
        print(f"Total Tracks: {stats.track_count}")
        print(f"Average Connections per Station: {stats.avg_degree:.2f}")
        if stats.most_connected_station is not None:
            print("Most Connected Station (Hub): "
                  f"{system.station_name(stats.most_connected_station)} "
                  f"({stats.most_connected_degree} connections)")

    elif command == 'schedule':
        system.scheduler.optimize_frequency(query.peak)
        if query.station is None:
            print_trains(system.scheduler.upcoming())
        else:
            station_id = resolve_or_report(system, query.station)
            if station_id is not None:
                print_trains(system.scheduler.trains_at_station(station_id))

    elif command == 'platform':
        train_id = system.platforms.dequeue()
        if train_id is None:
            print("Platform queue is empty.")
        else:
            print(f"Train {train_id} departed from platform.")

    elif command == 'ticket':
        served = sell_tickets(system, tickets, query.passengers)

    elif command == 'congestion':
        analytics.simulate_passenger_load(system)
        report = analytics.congestion_report(system.stations)
        for level, stations in report.items():
            names = ", ".join(ss.name for ss in stations)
            print(f"{level.name:<8}{len(stations):>4}  {names}")

    else:
        raise ValueError(f"unknown query command: {command}")

    if query.output_dir is not None:
        network_io.save_system(system, query.output_dir)
        ticket_path = os.path.join(query.output_dir, network_io.TICKET_FILE)
        for passenger in served:
            network_io.append_ticket(passenger, ticket_path)
        draw_network(system, route=route)
        plt.savefig(os.path.join(query.output_dir, 'network.png'))
        plt.close()


@hydra.main(version_base=None, config_path="../cfg", 
            config_name="mumbai_local")
def main(cfg: DictConfig):
    log.basicConfig(level=log.INFO)
    system = TransitSystem.from_cfg(cfg)
    tickets = TicketSystem.from_cfg(cfg.fares)
    block_tracks(system, cfg.query.block)
    run_query(system, tickets, cfg.query)


if __name__ == "__main__":
    main()

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

"""Reading and writing stations, tracks and tickets as CSV files."""

import logging as log
from pathlib import Path

import pandas as pd

from world.transit import Station, LineType, Passenger, PassengerType
from world.rail_network import NetworkGraph


STATION_FILE = 'stations.csv'
TRACK_FILE = 'tracks.csv'
TICKET_FILE = 'tickets.csv'

STATION_COLUMNS = ['id', 'name', 'line', 'platforms', 'passenger_count', 
                   'is_interchange']
TRACK_COLUMNS = ['u', 'v', 'weight', 'distance', 'line']
TICKET_COLUMNS = ['id', 'name', 'age', 'type', 'source_id', 'dest_id', 
                  'ticket_price', 'entry_time']


def save_stations(stations, path):
    rows = [(ss.id, ss.name, ss.line.name, ss.platforms, ss.passenger_count,
             int(ss.is_interchange)) for ss in stations]
    df = pd.DataFrame(rows, columns=STATION_COLUMNS)
    df.to_csv(path, index=False)


def load_stations(path):
    # station names like "NA" must stay strings
    df = pd.read_csv(path, keep_default_na=False)
    stations = []
    for row in df.itertuples(index=False):
        station = Station(int(row.id), row.name, LineType.from_name(row.line),
                          int(row.platforms), int(row.passenger_count), 
                          bool(row.is_interchange))
        stations.append(station)
    # ids are dense, so a station's id must be its position in the list
    stations.sort(key=lambda ss: ss.id)
    for ii, station in enumerate(stations):
        if station.id != ii:
            raise ValueError(f"station ids in {path} are not 0 to "
                             f"{len(stations) - 1}")
    return stations


def save_tracks(network, path):
    """Writes each two-way track once.  Blocked tracks are written with an 
    infinite weight, so they stay blocked when loaded again."""
    rows = [(uu, edge.to, edge.weight, edge.distance, edge.line.name)
            for uu, edge in network.tracks()]
    df = pd.DataFrame(rows, columns=TRACK_COLUMNS)
    df.to_csv(path, index=False)


def load_tracks(path, n_stations):
    df = pd.read_csv(path)
    network = NetworkGraph(n_stations)
    for row in df.itertuples(index=False):
        network.add_track(int(row.u), int(row.v), _as_number(row.weight), 
                          _as_number(row.distance), 
                          LineType.from_name(row.line))
    log.info(f"loaded {len(df)} tracks from {path}")
    return network


def _as_number(value):
    # keep integral values as ints; blocked weights come back as inf
    value = float(value)
    if value.is_integer():
        return int(value)
    return value


def _ticket_rows(passengers):
    return [(pp.passenger_id, pp.name, pp.age, pp.type.name, pp.source_id, 
             pp.dest_id, pp.ticket_price, pp.entry_time) 
            for pp in passengers]


def save_tickets(passengers, path):
    df = pd.DataFrame(_ticket_rows(passengers), columns=TICKET_COLUMNS)
    df.to_csv(path, index=False)


def append_ticket(passenger, path):
    """Adds one ticket to the end of the file, writing the header if the 
    file doesn't exist yet."""
    path = Path(path)
    df = pd.DataFrame(_ticket_rows([passenger]), columns=TICKET_COLUMNS)
    df.to_csv(path, mode='a', header=not path.exists(), index=False)


def load_tickets(path):
    df = pd.read_csv(path, keep_default_na=False)
    return [Passenger(int(row.id), row.name, int(row.age), 
                      PassengerType[row.type], int(row.source_id), 
                      int(row.dest_id), int(row.ticket_price), 
                      float(row.entry_time))
            for row in df.itertuples(index=False)]


def save_system(system, out_dir):
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    save_stations(system.stations, out_dir / STATION_FILE)
    save_tracks(system.network, out_dir / TRACK_FILE)
    log.info(f"saved network to {out_dir}")

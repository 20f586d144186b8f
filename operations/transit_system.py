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

"""Ties the core structures together into one network instance: the stations,
their directory, the track graph, the train schedule and the platform buffer.
"""

import logging as log

import numpy as np

from containers import PlatformQueue
from world.transit import Station, LineType, check_station_id
from world.station_directory import StationDirectory
from world.rail_network import NetworkGraph
from operations.scheduler import TrainScheduler
import config_utils


class TransitSystem:
    def __init__(self, platform_capacity=5):
        self.stations = []
        self.directory = StationDirectory()
        self.network = None
        self.scheduler = None
        self.platforms = PlatformQueue(platform_capacity)
        self._ids_by_name = {}

    @classmethod
    def from_cfg(cls, cfg):
        """Builds the whole system from a network config (see 
        cfg/mumbai_local.yaml for the expected layout)."""
        system = cls(platform_capacity=cfg.platforms.capacity)
        rng = np.random.default_rng(cfg.get('seed', None))

        log.info('adding stations')
        line_ids = []
        for line_cfg in cfg.lines:
            line = LineType.from_name(line_cfg.line)
            ids = [system.add_station(name, line) 
                   for name in line_cfg.stations]
            line_ids.append((line, line_cfg, ids))

        log.info('connecting stations with tracks')
        system.network = NetworkGraph(len(system.stations))
        for line, line_cfg, ids in line_ids:
            jitters = rng.integers(0, line_cfg.jitter_minutes, len(ids) - 1, 
                                   endpoint=True)
            for uu, vv, jitter in zip(ids[:-1], ids[1:], jitters):
                minutes = line_cfg.base_minutes + int(jitter)
                system.network.add_track(uu, vv, minutes, 
                                         line_cfg.km_per_track, line)

        log.info('scheduling trains')
        peak_specials = [(ps.id, ps.name, 
                          config_utils.parse_arrival_time(ps.time),
                          system.station_id(ps.station))
                         for ps in cfg.get('peak_specials', [])]
        system.scheduler = TrainScheduler(len(system.stations), peak_specials)
        for train_cfg in cfg.get('trains', []):
            system.scheduler.schedule(
                train_cfg.id, train_cfg.name, 
                config_utils.parse_arrival_time(train_cfg.time),
                system.station_id(train_cfg.station))

        for train_id in cfg.platforms.get('waiting', []):
            if not system.platforms.enqueue(train_id):
                log.warning(f"platform buffer full, train {train_id} must "
                            "wait")

        log.info(f"built network with {len(system.stations)} stations and "
                 f"{len(system.scheduler)} trains")
        return system

    def add_station(self, name, line, platforms=2):
        """Adds a station and returns its id.  If a station with this name 
        already exists, its id is returned instead, and it is marked as an
        interchange if the new line is a different one."""
        line = LineType.from_name(line)
        name = name.strip()
        key = name.casefold()
        if key in self._ids_by_name:
            station = self.stations[self._ids_by_name[key]]
            if station.line != line:
                station.is_interchange = True
            return station.id

        if self.network is not None:
            # the graph is sized when it is built and can't grow
            raise RuntimeError("can't add stations after the network is built")
        station = Station(len(self.stations), name, line, platforms)
        self.stations.append(station)
        self._ids_by_name[key] = station.id
        self.directory.add(name, station.id)
        return station.id

    def station_id(self, name):
        """Like directory.lookup, but raises a KeyError for unknown names."""
        station_id = self.directory.lookup(name)
        if station_id is None:
            raise KeyError(f"no station named {name}")
        return station_id

    def station_name(self, station_id):
        check_station_id(station_id, len(self.stations))
        return self.stations[station_id].name

    def resolve(self, name):
        """Looks a free-text name up in the directory.  Returns the station 
        id and an empty list if found, or None and a list of (name, id) 
        suggestions that start with what was typed."""
        station_id = self.directory.lookup(name)
        if station_id is not None:
            return station_id, []
        return None, self.directory.prefix_matches(name)

    def record_passengers(self, station_id, count=1):
        check_station_id(station_id, len(self.stations))
        self.stations[station_id].add_passengers(count)

    def path_names(self, route):
        return [self.stations[ss].name for ss in route.path]

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

from dataclasses import dataclass, field
from enum import Enum
from typing import List


# the weight given to a track that has been blocked
INF = float('inf')

# minutes in a day; arrival times live in [0, MINUTES_PER_DAY)
MINUTES_PER_DAY = 24 * 60


class InvalidStation(IndexError):
    """Raised when a station id is outside the range of the network."""
    def __init__(self, station_id, n_stations):
        super().__init__(f"station id {station_id} is not in the network "
                         f"(valid ids are 0 to {n_stations - 1})")
        self.station_id = station_id


def check_station_id(station_id, n_stations):
    if not (0 <= station_id < n_stations):
        raise InvalidStation(station_id, n_stations)


class LineType(Enum):
    WESTERN = 0
    CENTRAL = 1
    HARBOUR = 2
    TRANS_HARBOUR = 3

    @property
    def display_name(self):
        return _LINE_NAMES[self]

    @classmethod
    def from_name(cls, name):
        """Accepts either the enum name ('harbour') or the display name 
        ('Harbour Line'), in any case."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().upper().replace('-', '_').replace(' ', '_')
        if key.endswith('_LINE'):
            key = key[:-len('_LINE')]
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown line: {name}")


_LINE_NAMES = {
    LineType.WESTERN: "Western Line",
    LineType.CENTRAL: "Central Line",
    LineType.HARBOUR: "Harbour Line",
    LineType.TRANS_HARBOUR: "Trans-Harbour Line",
}


class TrainStatus(Enum):
    ON_TIME = 0
    DELAYED = 1
    CANCELLED = 2


class PassengerType(Enum):
    GENERAL = 0
    LADIES = 1
    SENIOR = 2
    DISABILITY = 3


class CongestionLevel(Enum):
    LOW = 0
    MEDIUM = 1
    HIGH = 2
    SEVERE = 3


@dataclass
class Station:
    """A station on the network.  The name is fixed once created; the only 
    thing that changes afterwards is the passenger count and the interchange
    flag."""
    id: int
    _name: str
    line: LineType = LineType.WESTERN
    platforms: int = 2
    passenger_count: int = 0
    is_interchange: bool = False

    @property
    def name(self):
        return self._name

    def add_passengers(self, count):
        if count < 0:
            raise ValueError("passenger count can only increase")
        self.passenger_count += count


@dataclass
class Edge:
    """One direction of a track.  weight is in minutes, distance in km."""
    to: int
    weight: float
    distance: float
    line: LineType

    @property
    def is_blocked(self):
        return self.weight == INF


@dataclass
class Train:
    train_id: int
    name: str
    arrival_time: int
    next_station_id: int
    capacity: int = 2000
    current_load: int = 0
    status: TrainStatus = TrainStatus.ON_TIME


@dataclass
class Route:
    path: List[int]
    total_minutes: float
    total_km: float = 0

    @property
    def num_stops(self):
        return len(self.path)

    def hops(self):
        return list(zip(self.path[:-1], self.path[1:]))


@dataclass
class Passenger:
    passenger_id: int
    name: str
    age: int
    type: PassengerType = PassengerType.GENERAL
    source_id: int = 0
    dest_id: int = 0
    ticket_price: int = 0
    # unix timestamp of when the passenger joined the queue
    entry_time: float = field(default=0.0)

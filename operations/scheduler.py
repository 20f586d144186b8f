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

from containers import MinHeap
from world.transit import Train, TrainStatus, MINUTES_PER_DAY, \
    check_station_id
import config_utils


# (train id, name, arrival time, station id) of the extra trains added in
# the morning peak
DEFAULT_PEAK_SPECIALS = [
    (901, "Peak Special 1", 540, 0),
    (902, "Peak Special 2", 550, 0),
]


class TrainScheduler:
    """Keeps scheduled trains in a min-heap ordered by arrival time."""
    def __init__(self, n_stations, peak_specials=None):
        self.n_stations = n_stations
        if peak_specials is None:
            peak_specials = DEFAULT_PEAK_SPECIALS
        self.peak_specials = [tuple(ps) for ps in peak_specials]
        self._heap = MinHeap(key=_arrival_key)

    def __len__(self):
        return len(self._heap)

    def schedule(self, train_id, name, arrival_time, station_id):
        if not (0 <= arrival_time < MINUTES_PER_DAY):
            raise ValueError(f"arrival time {arrival_time} is not within a "
                             "day")
        check_station_id(station_id, self.n_stations)
        train = Train(train_id, name, arrival_time, station_id)
        self._heap.push(train)
        log.debug(f"scheduled {name} ({train_id}) at "
                  f"{config_utils.minutes_to_str(arrival_time)}")
        return train

    def upcoming(self):
        """All scheduled trains, earliest first.  Works on a copy of the 
        heap, so the schedule itself is left as it was."""
        heap = self._heap.copy()
        trains = []
        while not heap.empty():
            trains.append(heap.pop())
        return trains

    def trains_at_station(self, station_id):
        check_station_id(station_id, self.n_stations)
        return [tt for tt in self.upcoming() 
                if tt.next_station_id == station_id]

    def optimize_frequency(self, is_peak):
        """In the peak, add the special trains at short headways.  Off-peak
        the schedule is left alone.  Returns the trains that were added."""
        if not is_peak:
            log.info("off-peak: standard frequency maintained")
            return []
        log.info("peak hour: increasing train frequency")
        return [self.schedule(*special) for special in self.peak_specials]

    def set_status(self, train_id, status):
        """Sets the status of every scheduled train with this id, and returns
        how many there were."""
        if not isinstance(status, TrainStatus):
            status = TrainStatus[str(status).upper()]
        n_updated = 0
        for train in self._heap.to_list():
            if train.train_id == train_id:
                train.status = status
                n_updated += 1
        return n_updated


def _arrival_key(train):
    return train.arrival_time

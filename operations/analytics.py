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

from collections import defaultdict
from dataclasses import dataclass

import numpy as np

from world.transit import CongestionLevel
import config_utils


# lower bounds on passenger counts for each congestion level above LOW
CONGESTION_THRESHOLDS = [
    (3000, CongestionLevel.SEVERE),
    (1500, CongestionLevel.HIGH),
    (500, CongestionLevel.MEDIUM),
]


@dataclass
class PeakHourSummary:
    time_str: str
    is_peak: bool
    total_passengers: int
    # total passengers over total platform capacity
    utilization: float
    recommendation: str


def congestion_level(passenger_count):
    for threshold, level in CONGESTION_THRESHOLDS:
        if passenger_count >= threshold:
            return level
    return CongestionLevel.LOW


def busiest_stations(stations, top_n=5):
    # stable sort, so ties keep station id order
    ranked = sorted(stations, key=lambda ss: -ss.passenger_count)
    return ranked[:top_n]


def line_distribution(stations):
    """Total passengers at stations on each line."""
    totals = defaultdict(int)
    for station in stations:
        totals[station.line] += station.passenger_count
    return dict(totals)


def congestion_report(stations):
    """Maps each congestion level to the stations currently at it."""
    report = {level: [] for level in CongestionLevel}
    for station in stations:
        report[congestion_level(station.passenger_count)].append(station)
    return report


def peak_hour_summary(minutes, stations, passengers_per_platform=1000):
    counts = np.array([ss.passenger_count for ss in stations], dtype=float)
    capacity = sum(ss.platforms for ss in stations) * passengers_per_platform
    utilization = counts.sum() / capacity if capacity > 0 else 0.0
    is_peak = config_utils.is_peak_time(minutes)
    if is_peak and utilization > 0.75:
        recommendation = "run peak specials and hold extra rakes in reserve"
    elif is_peak:
        recommendation = "run peak specials"
    elif utilization > 0.75:
        recommendation = "increase off-peak frequency on the busiest lines"
    else:
        recommendation = "maintain standard frequency"
    return PeakHourSummary(config_utils.minutes_to_str(minutes), is_peak,
                           int(counts.sum()), float(utilization), 
                           recommendation)


def simulate_passenger_load(system, rng=None, max_extra=500):
    """Adds a random number of passengers, below max_extra, to every 
    station.  Returns the amounts added."""
    if rng is None:
        rng = np.random.default_rng()
    extra = rng.integers(0, max_extra, len(system.stations))
    for station, count in zip(system.stations, extra):
        station.add_passengers(int(count))
    return extra

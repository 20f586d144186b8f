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

from pathlib import Path
import datetime as dt

from omegaconf import OmegaConf


CFG_DIR = Path(__file__).parent / 'cfg'

# [start, end) windows of the day, in minutes, that count as peak hours
PEAK_WINDOWS = [(7 * 60, 11 * 60), (17 * 60, 21 * 60)]


def minutes_to_str(minutes):
    """Formats a number of minutes since midnight as HH:MM."""
    hours, mins = divmod(int(minutes), 60)
    return f"{hours:02d}:{mins:02d}"


def str_time_to_minutes(str_time):
    """Takes a string in the format %H:%M (seconds, if present, are dropped)
    and returns the number of minutes since midnight."""
    daytime = str_time_to_dt_time(str_time)
    return daytime.hour * 60 + daytime.minute


def str_time_to_dt_time(str_time):
    """Assumes time is in the format %H:%M or %H:%M:%S.  Hour values of 24 or
    more are wrapped around to the next day, which datetime.strptime won't 
    do, so we parse it ourselves."""
    time_parts = [int(part) for part in str(str_time).strip().split(':')]
    if len(time_parts) < 2:
        raise ValueError(f"can't parse time: {str_time}")
    hour, minute = time_parts[:2]
    second = time_parts[2] if len(time_parts) > 2 else 0
    hour %= 24
    return dt.time(hour=hour, minute=minute, second=second)


def parse_arrival_time(value):
    # config files may give times either as minutes or as HH:MM strings
    if isinstance(value, str):
        return str_time_to_minutes(value)
    return int(value)


def is_peak_time(minutes):
    return any(start <= minutes < end for start, end in PEAK_WINDOWS)


# utility functions for working with our own configuration files

def load_cfg(path):
    """Loads a yaml config.  A bare name is looked up in the cfg directory."""
    path = Path(path)
    if not path.suffix:
        path = CFG_DIR / (path.name + '.yaml')
    return OmegaConf.load(path)


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

"""Ticket counters with priority tiers.

Senior citizens are served before the ladies' queue, which is served before
the general queue; within a tier, passengers are served in arrival order.
"""

import logging as log
import time

from containers import Queue
from world.transit import PassengerType


SENIOR_AGE = 60


class TicketSystem:
    def __init__(self, base_fare=10, per_km=2, senior_discount=0.5):
        self.base_fare = base_fare
        self.per_km = per_km
        self.senior_discount = senior_discount
        self.senior_queue = Queue()
        self.ladies_queue = Queue()
        self.general_queue = Queue()
        self.tickets_sold = 0
        self.revenue = 0
        self.issued = []

    @classmethod
    def from_cfg(cls, fares_cfg):
        return cls(fares_cfg.base, fares_cfg.per_km, 
                   fares_cfg.senior_discount)

    def join_queue(self, passenger):
        if passenger.age > SENIOR_AGE:
            passenger.type = PassengerType.SENIOR
        if not passenger.entry_time:
            passenger.entry_time = time.time()

        if passenger.type == PassengerType.SENIOR:
            self.senior_queue.push(passenger)
        elif passenger.type == PassengerType.LADIES:
            self.ladies_queue.push(passenger)
        else:
            self.general_queue.push(passenger)
        log.debug(f"passenger {passenger.name} joined the "
                  f"{passenger.type.name} queue")

    def waiting(self):
        return len(self.senior_queue) + len(self.ladies_queue) + \
            len(self.general_queue)

    def fare(self, network, src, dest, passenger_type=PassengerType.GENERAL):
        """The fare in rupees for a trip, or None if dest can't be reached."""
        km = network.get_distance(src, dest)
        if km is None:
            return None
        fare = self.base_fare + self.per_km * km
        if passenger_type == PassengerType.SENIOR:
            fare = fare * self.senior_discount
        return int(fare)

    def process_queues(self, network, stations=None):
        """Serves every waiting passenger, tier by tier.  Returns the 
        passengers that were issued tickets.  If stations is given, each
        ticket adds one passenger to the load of its source station."""
        served = []
        for queue in (self.senior_queue, self.ladies_queue, 
                      self.general_queue):
            while not queue.empty():
                passenger = queue.pop()
                if self._issue_ticket(network, passenger):
                    served.append(passenger)
                    if stations is not None:
                        stations[passenger.source_id].add_passengers(1)
        return served

    def _issue_ticket(self, network, passenger):
        fare = self.fare(network, passenger.source_id, passenger.dest_id,
                         passenger.type)
        if fare is None:
            log.warning(f"no route for {passenger.name} from "
                        f"{passenger.source_id} to {passenger.dest_id}, "
                        "no ticket issued")
            return False
        passenger.ticket_price = fare
        self.tickets_sold += 1
        self.revenue += fare
        self.issued.append(passenger)
        log.info(f"ticket issued to {passenger.name}: Rs. {fare}")
        return True

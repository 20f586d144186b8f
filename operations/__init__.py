"""
Day-to-day operation of the network: the train schedule, ticketing, station
analytics, and tying the core structures together into a running system.
"""

"""
This module contains classes and other code for representing aspects of the
transit world we deal with: its stations, the tracks between them (the 
network), the trains that run on it, and the passengers who ride them.
"""

from .transit import *

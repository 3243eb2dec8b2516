"""
Simulation Analyzer

Recording and reporting tools that observe a run through the message
broker without influencing it.
"""

__version__ = "0.1.0"

from .travel_statistics import TravelStatistics

__all__ = ['TravelStatistics']

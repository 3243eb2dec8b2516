"""
Car Dispatch Control

This package assigns hall calls to cars using pluggable allocation
strategies, and provides the SimulationController that owns a run.
"""

__version__ = "0.1.0"

from .dispatcher import Dispatcher, create_strategy
from .simulation_controller import SimulationController, SimulationNotConfiguredError
from .algorithms.queue_cost import QueueCostStrategy
from .algorithms.nearest_idle import NearestIdleStrategy
from .interfaces.allocation_strategy import IAllocationStrategy

__all__ = [
    'Dispatcher',
    'create_strategy',
    'SimulationController',
    'SimulationNotConfiguredError',
    'QueueCostStrategy',
    'NearestIdleStrategy',
    'IAllocationStrategy',
]

"""Allocation strategies"""

from .queue_cost import QueueCostStrategy
from .nearest_idle import NearestIdleStrategy

__all__ = ['QueueCostStrategy', 'NearestIdleStrategy']

"""Interfaces for dispatch control"""

from .allocation_strategy import IAllocationStrategy

__all__ = ['IAllocationStrategy']

"""Core simulation entities"""

from .entity import Entity
from .building import Building
from .car import Car
from .call_registry import Call, CallRegistry
from .car_operator import CarOperator

__all__ = [
    'Entity',
    'Building',
    'Car',
    'Call',
    'CallRegistry',
    'CarOperator',
]

"""
Elevator Simulator - Core simulation engine

This package provides the car records, the call registry, the per-car
state machine and the notification plumbing of the simulation.
"""

__version__ = "0.1.0"

from .core.entity import Entity
from .core.building import Building
from .core.car import Car
from .core.call_registry import Call, CallRegistry
from .core.car_operator import CarOperator

from .infrastructure.message_broker import MessageBroker
from .infrastructure.realtime_env import RealtimeEnvironment

from .interfaces.presentation_sink import IPresentationSink, SinkRelay

__all__ = [
    'Entity',
    'Building',
    'Car',
    'Call',
    'CallRegistry',
    'CarOperator',
    'MessageBroker',
    'RealtimeEnvironment',
    'IPresentationSink',
    'SinkRelay',
]

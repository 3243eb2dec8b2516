"""
Configuration management package

Simulation settings as dataclasses, read from and written to YAML
scenario files.
"""

from .simulation import (
    SimulationConfig,
    BuildingConfig,
    CarConfig,
    TimingConfig,
    DispatchConfig,
    TrafficConfig,
    ScriptedCall,
    ValidationError,
    load_simulation_config,
    save_simulation_config
)

__all__ = [
    'SimulationConfig',
    'BuildingConfig',
    'CarConfig',
    'TimingConfig',
    'DispatchConfig',
    'TrafficConfig',
    'ScriptedCall',
    'ValidationError',
    'load_simulation_config',
    'save_simulation_config',
]

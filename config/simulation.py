"""
Simulation Configuration

Building size, car count, timing constants and dispatch tuning for one
simulation run. Values are fixed for the lifetime of a run; changing them
requires a full reset of the simulation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

import yaml


MIN_FLOORS = 1
MAX_FLOORS = 20
MIN_CARS = 1
MAX_CARS = 10

DISPATCH_STRATEGIES = ("QueueCost", "NearestIdle")


class ValidationError(ValueError):
    """Configuration value out of bounds. Recoverable by configuring again."""


@dataclass
class BuildingConfig:
    """Building specifications"""
    num_floors: int = 10

    def __post_init__(self):
        if not isinstance(self.num_floors, int) or isinstance(self.num_floors, bool):
            raise ValidationError(f"num_floors must be an integer, got {self.num_floors!r}")
        if not (MIN_FLOORS <= self.num_floors <= MAX_FLOORS):
            raise ValidationError(f"num_floors must be between {MIN_FLOORS} and {MAX_FLOORS}, got {self.num_floors}")


@dataclass
class CarConfig:
    """Car fleet specifications"""
    num_cars: int = 2

    def __post_init__(self):
        if not isinstance(self.num_cars, int) or isinstance(self.num_cars, bool):
            raise ValidationError(f"num_cars must be an integer, got {self.num_cars!r}")
        if not (MIN_CARS <= self.num_cars <= MAX_CARS):
            raise ValidationError(f"num_cars must be between {MIN_CARS} and {MAX_CARS}, got {self.num_cars}")


@dataclass
class TimingConfig:
    """Travel and door timing"""
    floor_travel_time: float = 1.5  # seconds per floor
    door_time: float = 1.8  # seconds per door phase (opening, then closing)

    def __post_init__(self):
        if self.floor_travel_time <= 0:
            raise ValidationError("floor_travel_time must be positive")
        if self.door_time <= 0:
            raise ValidationError("door_time must be positive")


@dataclass
class DispatchConfig:
    """Call allocation settings"""
    strategy: str = "QueueCost"
    queue_penalty: float = 0.8  # score added per queued stop
    direction_bonus: float = -1.5  # score added for en-route pickups

    def __post_init__(self):
        if self.strategy not in DISPATCH_STRATEGIES:
            raise ValidationError(f"Unknown dispatch strategy: {self.strategy}. Expected one of {DISPATCH_STRATEGIES}")
        if self.queue_penalty < 0:
            raise ValidationError("queue_penalty cannot be negative")
        if self.direction_bonus > 0:
            raise ValidationError("direction_bonus must be zero or negative")


@dataclass
class ScriptedCall:
    """A pickup request replayed at a fixed simulation time"""
    time: float
    floor: int
    direction: str

    def __post_init__(self):
        if self.time < 0:
            raise ValidationError("scripted call time cannot be negative")
        if self.direction not in ("UP", "DOWN"):
            raise ValidationError(f"scripted call direction must be 'UP' or 'DOWN', got {self.direction!r}")


@dataclass
class TrafficConfig:
    """Call traffic used by the scenario runner"""
    duration: float = 120.0  # seconds
    call_rate: float = 0.0  # random calls per second (0 = scripted calls only)
    calls: List[ScriptedCall] = field(default_factory=list)

    def __post_init__(self):
        if self.duration <= 0:
            raise ValidationError("duration must be positive")
        if self.call_rate < 0:
            raise ValidationError("call_rate cannot be negative")


@dataclass
class SimulationConfig:
    """
    Complete simulation configuration

    Combines building, car, timing, dispatch and traffic settings.
    """
    building: BuildingConfig = field(default_factory=BuildingConfig)
    car: CarConfig = field(default_factory=CarConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    dispatch: DispatchConfig = field(default_factory=DispatchConfig)
    traffic: TrafficConfig = field(default_factory=TrafficConfig)

    # Simulation control
    random_seed: Optional[int] = None
    realtime_factor: float = 0.0  # 0.0 = as fast as possible, 1.0 = realtime

    def __post_init__(self):
        if self.realtime_factor < 0:
            raise ValidationError("realtime_factor cannot be negative")

    @classmethod
    def from_dict(cls, data: dict) -> 'SimulationConfig':
        """Create SimulationConfig from dictionary"""
        sim_data = data.get('simulation', data) or {}

        building_data = sim_data.get('building', {})
        building = BuildingConfig(
            num_floors=building_data.get('num_floors', 10)
        )

        car_data = sim_data.get('car', {})
        car = CarConfig(
            num_cars=car_data.get('num_cars', 2)
        )

        timing_data = sim_data.get('timing', {})
        timing = TimingConfig(
            floor_travel_time=timing_data.get('floor_travel_time', 1.5),
            door_time=timing_data.get('door_time', 1.8)
        )

        dispatch_data = sim_data.get('dispatch', {})
        dispatch = DispatchConfig(
            strategy=dispatch_data.get('strategy', 'QueueCost'),
            queue_penalty=dispatch_data.get('queue_penalty', 0.8),
            direction_bonus=dispatch_data.get('direction_bonus', -1.5)
        )

        traffic_data = sim_data.get('traffic', {})
        traffic = TrafficConfig(
            duration=traffic_data.get('duration', 120.0),
            call_rate=traffic_data.get('call_rate', 0.0),
            calls=[
                ScriptedCall(time=c['time'], floor=c['floor'], direction=c['direction'])
                for c in traffic_data.get('calls', [])
            ]
        )

        config = cls(
            building=building,
            car=car,
            timing=timing,
            dispatch=dispatch,
            traffic=traffic,
            random_seed=sim_data.get('random_seed'),
            realtime_factor=sim_data.get('realtime_factor', 0.0)
        )
        config.validate()
        return config

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        result: Dict[str, Any] = {
            'simulation': {
                'building': {
                    'num_floors': self.building.num_floors
                },
                'car': {
                    'num_cars': self.car.num_cars
                },
                'timing': {
                    'floor_travel_time': self.timing.floor_travel_time,
                    'door_time': self.timing.door_time
                },
                'dispatch': {
                    'strategy': self.dispatch.strategy,
                    'queue_penalty': self.dispatch.queue_penalty,
                    'direction_bonus': self.dispatch.direction_bonus
                },
                'traffic': {
                    'duration': self.traffic.duration,
                    'call_rate': self.traffic.call_rate,
                    'calls': [
                        {'time': c.time, 'floor': c.floor, 'direction': c.direction}
                        for c in self.traffic.calls
                    ]
                },
                'realtime_factor': self.realtime_factor
            }
        }

        if self.random_seed is not None:
            result['simulation']['random_seed'] = self.random_seed

        return result

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'SimulationConfig':
        """
        Read a scenario file. An empty file yields the defaults.

        Raises:
            FileNotFoundError: If path does not exist
            ValidationError: If a value is out of bounds
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Scenario file not found: {path}")
        with path.open(encoding='utf-8') as f:
            return cls.from_dict(yaml.safe_load(f) or {})

    def to_yaml(self, path: Union[str, Path]):
        """Write this configuration as a scenario file, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('w', encoding='utf-8') as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)

    def validate(self):
        """Validate configuration consistency"""
        top_floor = self.building.num_floors - 1
        for call in self.traffic.calls:
            if not (0 <= call.floor <= top_floor):
                raise ValidationError(f"scripted call floor {call.floor} is outside 0..{top_floor}")
            if call.floor == 0 and call.direction == "DOWN":
                raise ValidationError("ground floor only accepts UP calls")
            if call.floor == top_floor and call.direction == "UP":
                raise ValidationError("top floor only accepts DOWN calls")


def load_simulation_config(path: Union[str, Path]) -> SimulationConfig:
    return SimulationConfig.from_yaml(path)


def save_simulation_config(config: SimulationConfig, path: Union[str, Path]):
    config.to_yaml(path)

"""
Simulation configuration tests
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
from config import (
    SimulationConfig, BuildingConfig, CarConfig, TimingConfig, DispatchConfig,
    TrafficConfig, ScriptedCall, ValidationError,
    load_simulation_config, save_simulation_config
)


def test_defaults():
    config = SimulationConfig()
    assert config.building.num_floors == 10
    assert config.car.num_cars == 2
    assert config.timing.floor_travel_time == 1.5
    assert config.timing.door_time == 1.8
    assert config.dispatch.strategy == "QueueCost"
    assert config.dispatch.queue_penalty == 0.8
    assert config.dispatch.direction_bonus == -1.5


@pytest.mark.parametrize("num_floors", [0, 21, -3])
def test_floor_bounds(num_floors):
    with pytest.raises(ValidationError):
        BuildingConfig(num_floors=num_floors)


@pytest.mark.parametrize("num_cars", [0, 11])
def test_car_bounds(num_cars):
    with pytest.raises(ValidationError):
        CarConfig(num_cars=num_cars)


def test_non_integer_counts_rejected():
    with pytest.raises(ValidationError):
        BuildingConfig(num_floors=4.5)
    with pytest.raises(ValidationError):
        CarConfig(num_cars=True)


def test_validation_error_is_a_value_error():
    assert issubclass(ValidationError, ValueError)


def test_timing_and_dispatch_checks():
    with pytest.raises(ValidationError):
        TimingConfig(floor_travel_time=0)
    with pytest.raises(ValidationError):
        TimingConfig(door_time=-1.0)
    with pytest.raises(ValidationError):
        DispatchConfig(strategy="Random")
    with pytest.raises(ValidationError):
        DispatchConfig(queue_penalty=-0.1)
    with pytest.raises(ValidationError):
        DispatchConfig(direction_bonus=0.5)


def test_scripted_call_checks():
    with pytest.raises(ValidationError):
        ScriptedCall(time=-1, floor=2, direction="UP")
    with pytest.raises(ValidationError):
        ScriptedCall(time=0, floor=2, direction="LEFT")


def test_validate_rejects_calls_without_a_button():
    config = SimulationConfig(
        building=BuildingConfig(num_floors=4),
        traffic=TrafficConfig(calls=[ScriptedCall(time=0, floor=3, direction="UP")])
    )
    with pytest.raises(ValidationError):
        config.validate()

    config.traffic.calls = [ScriptedCall(time=0, floor=0, direction="DOWN")]
    with pytest.raises(ValidationError):
        config.validate()

    config.traffic.calls = [ScriptedCall(time=0, floor=4, direction="DOWN")]
    with pytest.raises(ValidationError):
        config.validate()


def test_from_dict():
    config = SimulationConfig.from_dict({
        "simulation": {
            "building": {"num_floors": 6},
            "car": {"num_cars": 3},
            "dispatch": {"strategy": "NearestIdle"},
            "traffic": {
                "duration": 30,
                "calls": [{"time": 2.0, "floor": 5, "direction": "DOWN"}],
            },
            "random_seed": 7,
        }
    })

    assert config.building.num_floors == 6
    assert config.car.num_cars == 3
    assert config.dispatch.strategy == "NearestIdle"
    assert config.timing.door_time == 1.8
    assert config.traffic.calls == [ScriptedCall(time=2.0, floor=5, direction="DOWN")]
    assert config.random_seed == 7


def test_from_dict_rejects_out_of_range():
    with pytest.raises(ValidationError):
        SimulationConfig.from_dict({"building": {"num_floors": 25}})


def test_save_and_load(tmp_path):
    config = SimulationConfig(
        building=BuildingConfig(num_floors=7),
        car=CarConfig(num_cars=4),
        traffic=TrafficConfig(duration=45.0, calls=[ScriptedCall(time=1.0, floor=3, direction="UP")]),
        random_seed=11
    )
    path = tmp_path / "nested" / "scenario.yaml"

    save_simulation_config(config, path)
    loaded = load_simulation_config(path)

    assert loaded == config


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_simulation_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize("name", ["small_office.yaml", "lobby_watch.yaml"])
def test_shipped_scenarios_load(name):
    config = load_simulation_config(project_root / "scenarios" / "simulation" / name)
    assert config.traffic.duration > 0


def test_empty_scenario_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert SimulationConfig.from_yaml(path) == SimulationConfig()

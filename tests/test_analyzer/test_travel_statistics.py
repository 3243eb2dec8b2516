"""
Travel statistics tests
"""

import sys
import json
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import matplotlib
matplotlib.use("Agg")

import pytest
from analyzer.travel_statistics import TravelStatistics
from controller.simulation_controller import SimulationController


@pytest.fixture
def recorded_run():
    controller = SimulationController(verbose=False)
    stats = TravelStatistics()
    controller.add_listener(stats.on_message)
    controller.configure(5, 1)
    controller.request_pickup(3, "UP")
    controller.run()
    return controller, stats


def test_wait_time_runs_from_button_on_to_off(recorded_run):
    _, stats = recorded_run

    assert len(stats.call_records) == 1
    record = stats.call_records[0]
    assert (record["floor"], record["direction"]) == (3, "UP")
    assert record["wait"] == pytest.approx(8.1)
    assert stats.unserved_calls == []


def test_trajectory_and_door_openings(recorded_run):
    _, stats = recorded_run

    trajectory = stats.trajectories[0]
    assert trajectory[0] == (0.0, 0)
    assert trajectory[-1] == (pytest.approx(4.5), 3)
    assert stats.door_openings[0] == [(pytest.approx(4.5), 3)]


def test_summary_counts(recorded_run):
    controller, stats = recorded_run
    controller.request_pickup(1, "DOWN")

    summary = stats.summary()

    assert summary["served"] == 1
    assert summary["unserved"] == 1
    assert summary["assignments"] == {0: 2}
    assert summary["average_wait"] == pytest.approx(8.1)


def test_summary_without_calls():
    summary = TravelStatistics().summary()
    assert summary["served"] == 0
    assert summary["average_wait"] == 0.0


def test_save_event_log(recorded_run, tmp_path):
    _, stats = recorded_run
    stats.set_simulation_metadata({"num_floors": 5})
    path = tmp_path / "log.jsonl"

    stats.save_event_log(str(path))

    lines = path.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[0])["type"] == "metadata"
    assert json.loads(lines[0])["data"]["config"] == {"num_floors": 5}
    assert len(lines) == len(stats.event_log) + 1
    topics = [json.loads(line)["topic"] for line in lines[1:]]
    assert "hall_button/floor_3/UP" in topics


def test_plot_trajectory_diagram(recorded_run, tmp_path):
    _, stats = recorded_run
    path = tmp_path / "diagram.png"

    stats.plot_trajectory_diagram(str(path), end_time=20.0)

    assert path.exists()
    assert path.stat().st_size > 0

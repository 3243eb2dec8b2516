"""
Car state machine tests

Drives a single CarOperator on a SimPy clock with exact timings
(2.0 s per floor, 2.5 s per door phase).
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
import simpy
from simulator.infrastructure.message_broker import MessageBroker
from simulator.core.call_registry import CallRegistry
from simulator.core.car import Car, IDLE, MOVING_UP, MOVING_DOWN, DOORS_OPENING
from simulator.core.car_operator import CarOperator

FLOOR_TIME = 2.0
DOOR_TIME = 2.5


class Rig:
    def __init__(self, start_floor=0):
        self.env = simpy.Environment()
        self.broker = MessageBroker(self.env, verbose=False)
        self.messages = []
        self.broker.subscribe_all(lambda topic, message: self.messages.append((topic, message)))
        self.registry = CallRegistry(self.broker)
        self.car = Car(car_id=0, current_floor=start_floor)
        self.operator = CarOperator(self.env, self.car, self.broker, self.registry,
                                    floor_travel_time=FLOOR_TIME, door_time=DOOR_TIME)

    def serve(self, *floors):
        self.car.queue.extend(floors)
        self.operator.start_processing()

    def statuses(self):
        return [m["status"] for t, m in self.messages if t == "car/0/status"]

    def positions(self):
        return [m for t, m in self.messages if t == "car/0/position"]


def test_single_stop_full_cycle():
    rig = Rig()
    rig.serve(3)
    rig.env.run()

    assert rig.env.now == 3 * FLOOR_TIME + 2 * DOOR_TIME
    assert rig.car.current_floor == 3
    assert rig.car.state == IDLE
    assert rig.car.direction == "IDLE"
    assert rig.car.busy is False
    assert rig.statuses() == ["Moving up", "Doors opening", "Doors closing", "Idle"]


def test_current_floor_is_stale_until_travel_completes():
    rig = Rig()
    rig.serve(3)

    rig.env.run(until=5.9)
    assert rig.car.current_floor == 0
    assert rig.car.state == MOVING_UP
    assert rig.car.direction == "UP"
    assert rig.car.queue == []

    rig.env.run(until=6.1)
    assert rig.car.current_floor == 3
    assert rig.car.state == DOORS_OPENING


def test_position_notification_carries_travel_duration():
    rig = Rig(start_floor=4)
    rig.serve(1)
    rig.env.run()

    positions = rig.positions()
    assert len(positions) == 1
    assert positions[0]["from_floor"] == 4
    assert positions[0]["target_floor"] == 1
    assert positions[0]["travel_duration_ms"] == 6000
    assert rig.statuses()[0] == "Moving down"


def test_stop_at_current_floor_skips_travel():
    rig = Rig(start_floor=2)
    rig.serve(2)
    rig.env.run()

    assert rig.env.now == 2 * DOOR_TIME
    assert rig.positions() == []
    assert rig.statuses() == ["Doors opening", "Doors closing", "Idle"]


def test_multiple_stops_are_served_in_queue_order():
    rig = Rig()
    rig.serve(2, 4)
    rig.env.run()

    assert rig.env.now == (2 + 2) * FLOOR_TIME + 4 * DOOR_TIME
    assert [p["target_floor"] for p in rig.positions()] == [2, 4]
    assert rig.statuses() == [
        "Moving up", "Doors opening", "Doors closing",
        "Moving up", "Doors opening", "Doors closing",
        "Idle",
    ]


def test_door_cycle_clears_every_call_at_the_floor():
    rig = Rig()
    rig.registry.request_pickup(3, "UP")
    rig.registry.request_pickup(3, "DOWN")
    rig.registry.request_pickup(2, "UP")
    rig.serve(3)

    # Calls stay lit until the doors have closed
    rig.env.run(until=3 * FLOOR_TIME + 2 * DOOR_TIME - 0.1)
    assert len(rig.registry) == 3

    rig.env.run()
    assert [c.key for c in rig.registry.list_active()] == [(2, "UP")]


def test_start_processing_while_busy_does_not_start_a_second_process():
    rig = Rig()
    rig.serve(2)
    first = rig.operator.process

    rig.car.queue.append(4)
    rig.operator.start_processing()

    assert rig.operator.process is first
    rig.env.run()
    assert rig.car.current_floor == 4


def test_panel_reflects_direction_and_queue_during_travel():
    rig = Rig(start_floor=5)
    rig.serve(1, 0)
    rig.env.run(until=0.1)

    panels = [m for t, m in rig.messages if t == "car/0/panel"]
    assert panels[-1]["current_floor"] == 5
    assert panels[-1]["direction"] == "DOWN"
    assert panels[-1]["queue"] == [0]
    assert rig.car.state == MOVING_DOWN


def test_operator_can_restart_after_going_idle():
    rig = Rig()
    rig.serve(1)
    rig.env.run()
    assert rig.car.busy is False

    rig.serve(2)
    rig.env.run()

    assert rig.car.current_floor == 2
    assert rig.statuses().count("Idle") == 2


def test_first_departure_is_visible_before_the_clock_advances():
    rig = Rig()
    rig.serve(3, 4)

    assert rig.env.now == 0
    assert rig.car.busy is True
    assert rig.car.direction == "UP"
    assert rig.car.queue == [4]
    assert rig.car.state == MOVING_UP
    assert [p["target_floor"] for p in rig.positions()] == [3]
    assert rig.statuses() == ["Moving up"]


def test_start_processing_with_empty_queue_does_nothing():
    rig = Rig()
    rig.operator.start_processing()

    assert rig.car.busy is False
    assert rig.operator.process is None
    assert rig.messages == []

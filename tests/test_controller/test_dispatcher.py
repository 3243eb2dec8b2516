"""
Dispatcher tests

Queue insertion, ordering and wake-up of idle cars.
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
import simpy
from config.simulation import DispatchConfig
from simulator.infrastructure.message_broker import MessageBroker
from simulator.core.call_registry import CallRegistry
from simulator.core.car import Car, MOVING_UP
from simulator.core.car_operator import CarOperator
from controller.dispatcher import Dispatcher, create_strategy, ASSIGNMENT_TOPIC
from controller.algorithms.queue_cost import QueueCostStrategy
from controller.algorithms.nearest_idle import NearestIdleStrategy


@pytest.fixture
def env():
    return simpy.Environment()


@pytest.fixture
def broker(env):
    return MessageBroker(env, verbose=False)


@pytest.fixture
def registry(broker):
    return CallRegistry(broker)


def make_dispatcher(env, broker, registry, num_cars=2):
    dispatcher = Dispatcher(broker, QueueCostStrategy(verbose=False))
    for car_id in range(num_cars):
        dispatcher.register_car(CarOperator(env, Car(car_id=car_id), broker, registry))
    return dispatcher


def test_assign_wakes_idle_car(env, broker, registry):
    dispatcher = make_dispatcher(env, broker, registry)
    car = dispatcher.operators[0].car

    dispatcher.assign_to_car(0, 3)

    # The stop is taken at once and the car is already on its way
    assert car.busy is True
    assert car.queue == []
    assert car.direction == "UP"
    assert car.state == MOVING_UP
    env.run()
    assert car.current_floor == 3
    assert car.busy is False


def test_queue_has_no_duplicates_and_sorts_ascending(env, broker, registry):
    dispatcher = make_dispatcher(env, broker, registry)
    car = dispatcher.operators[0].car

    dispatcher.assign_to_car(0, 3)
    dispatcher.assign_to_car(0, 4)
    dispatcher.assign_to_car(0, 1)
    dispatcher.assign_to_car(0, 4)

    assert car.queue == [1, 4]


def test_queue_sorts_descending_while_heading_down(env, broker, registry):
    dispatcher = make_dispatcher(env, broker, registry)
    car = dispatcher.operators[1].car
    car.current_floor = 6
    car.direction = "DOWN"
    car.busy = True
    car.queue = [2]

    dispatcher.assign_to_car(1, 4)

    assert car.queue == [4, 2]


def test_lower_floor_sorts_ahead_of_car_heading_up(env, broker, registry):
    dispatcher = make_dispatcher(env, broker, registry)
    car = dispatcher.operators[0].car
    car.current_floor = 5
    car.direction = "UP"
    car.busy = True
    car.queue = [8]

    dispatcher.assign_to_car(0, 2)

    assert car.queue == [2, 8]


def test_dispatch_publishes_assignment(env, broker, registry):
    dispatcher = make_dispatcher(env, broker, registry)
    assignments = []
    broker.subscribe(ASSIGNMENT_TOPIC, assignments.append)

    call = registry.request_pickup(2, "UP")
    car_id = dispatcher.dispatch(call)

    assert car_id == 0
    assert assignments[0]["car_id"] == 0
    assert assignments[0]["floor"] == 2
    assert assignments[0]["direction"] == "UP"


def test_dispatch_without_cars_leaves_call_unassigned(env, broker, registry):
    dispatcher = Dispatcher(broker, QueueCostStrategy(verbose=False))
    call = registry.request_pickup(2, "UP")

    assert dispatcher.select_car(2, "UP") is None
    assert dispatcher.dispatch(call) is None
    assert registry.is_active(2, "UP")


def test_back_to_back_requests_ride_along_with_departing_car(env, broker, registry):
    dispatcher = make_dispatcher(env, broker, registry)

    dispatcher.dispatch(registry.request_pickup(2, "DOWN"))
    # Car 0 is already heading up from 0: 1 + 0 - 1.5 beats car 1's 1
    assert dispatcher.dispatch(registry.request_pickup(1, "UP")) == 0

    assert dispatcher.operators[0].car.queue == [1]
    assert dispatcher.operators[1].car.queue == []
    assert dispatcher.operators[1].car.busy is False


def test_cars_are_listed_by_id(env, broker, registry):
    dispatcher = Dispatcher(broker, QueueCostStrategy(verbose=False))
    for car_id in (2, 0, 1):
        dispatcher.register_car(CarOperator(env, Car(car_id=car_id), broker, registry))

    assert [car.car_id for car in dispatcher.cars] == [0, 1, 2]


def test_create_strategy():
    assert isinstance(create_strategy(DispatchConfig(), verbose=False), QueueCostStrategy)
    assert isinstance(create_strategy(DispatchConfig(strategy="NearestIdle"), verbose=False),
                      NearestIdleStrategy)

    config = DispatchConfig()
    config.strategy = "Random"
    with pytest.raises(ValueError):
        create_strategy(config)

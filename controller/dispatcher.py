from typing import Callable, Dict, List, Optional

from config.simulation import DispatchConfig
from simulator.infrastructure.message_broker import MessageBroker
from simulator.core.car import Car
from simulator.core.call_registry import Call
from simulator.core.car_operator import CarOperator
from .interfaces.allocation_strategy import IAllocationStrategy
from .algorithms.queue_cost import QueueCostStrategy
from .algorithms.nearest_idle import NearestIdleStrategy

ASSIGNMENT_TOPIC = "dispatcher/assignment"


def create_strategy(config: DispatchConfig, verbose: bool = True,
                    clock: Optional[Callable[[], float]] = None) -> IAllocationStrategy:
    """Build the allocation strategy named in the dispatch config."""
    if config.strategy == "QueueCost":
        return QueueCostStrategy(
            queue_penalty=config.queue_penalty,
            direction_bonus=config.direction_bonus,
            verbose=verbose,
            clock=clock
        )
    if config.strategy == "NearestIdle":
        return NearestIdleStrategy(verbose=verbose, clock=clock)
    raise ValueError(f"Unknown dispatch strategy: {config.strategy}")


class Dispatcher:
    """
    Assigns hall calls to cars.

    Selection is delegated to a pluggable allocation strategy. Once a car
    is chosen the dispatcher inserts the call floor into that car's queue,
    reorders the queue and wakes the car if it is idle. Assignments are
    final: a call is never moved to another car.
    """
    def __init__(self, broker: MessageBroker, strategy: IAllocationStrategy):
        self.broker = broker
        self.strategy = strategy
        self.operators: Dict[int, CarOperator] = {}

        print(f"{self.broker.get_current_time():.2f} [Dispatcher] Using strategy: {self.strategy.get_strategy_name()}")

    def register_car(self, operator: CarOperator):
        """Register a car under dispatcher management"""
        self.operators[operator.car.car_id] = operator
        print(f"{self.broker.get_current_time():.2f} [Dispatcher] {operator.name} registered.")

    @property
    def cars(self) -> List[Car]:
        return [self.operators[car_id].car for car_id in sorted(self.operators)]

    def select_car(self, target_floor: int, direction: Optional[str] = None) -> Optional[int]:
        """
        Pick the car that should serve a call at target_floor.

        Returns:
            car_id, or None when no cars are registered
        """
        if not self.operators:
            print(f"{self.broker.get_current_time():.2f} [Dispatcher] WARNING: No cars available for floor {target_floor}.")
            return None
        return self.strategy.select_car(target_floor, direction, self.cars)

    def assign_to_car(self, car_id: int, target_floor: int):
        """
        Insert target_floor into the car's queue and start the car if idle.

        The queue is re-sorted ascending while the car is heading up or
        idle and descending while it is heading down. This orders by floor
        number only, not by sweep from the current position, so a car
        going up can be handed a lower floor that sorts to the front and
        turns it around.
        """
        operator = self.operators[car_id]
        car = operator.car

        if target_floor not in car.queue:
            car.queue.append(target_floor)
        car.queue.sort(reverse=(car.direction == "DOWN"))

        print(f"{self.broker.get_current_time():.2f} [Dispatcher] {car.name} queue: {car.queue}")
        operator.report_panel()

        if not car.busy:
            operator.start_processing()

    def dispatch(self, call: Call) -> Optional[int]:
        """
        Select a car for a newly registered call and assign it.

        Returns:
            car_id the call was assigned to, or None if it stays unassigned
        """
        car_id = self.select_car(call.floor, call.direction)
        if car_id is None:
            return None

        self.assign_to_car(car_id, call.floor)

        print(f"{self.broker.get_current_time():.2f} [Dispatcher] Assigned call Floor {call.floor} {call.direction} to Car_{car_id}")
        assignment_message = {
            "timestamp": self.broker.get_current_time(),
            "floor": call.floor,
            "direction": call.direction,
            "car_id": car_id,
        }
        self.broker.put(ASSIGNMENT_TOPIC, assignment_message)
        return car_id

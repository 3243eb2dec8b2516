"""
Nearest Idle Strategy

Simple allocation: the closest car that has nothing to do, otherwise the
car with the shortest queue.
"""

from typing import Callable, Optional, Sequence
from simulator.core.car import Car
from ..interfaces.allocation_strategy import IAllocationStrategy


class NearestIdleStrategy(IAllocationStrategy):
    """
    Nearest idle car allocation strategy

    Selection Logic:
    - Idle cars (not busy, empty queue): smallest |current_floor - target|
    - No idle car: shortest queue
    - Ties go to the lowest car_id

    Call direction is ignored.
    """

    def __init__(self, verbose: bool = True, clock: Optional[Callable[[], float]] = None):
        self.verbose = verbose
        self.clock = clock

    def select_car(
        self,
        target_floor: int,
        direction: Optional[str],
        cars: Sequence[Car]
    ) -> Optional[int]:
        ordered = sorted(cars, key=lambda c: c.car_id)

        best_car = None
        best_distance = float('inf')
        for car in ordered:
            if car.busy or car.queue:
                continue
            distance = abs(car.current_floor - target_floor)
            if distance < best_distance:
                best_distance = distance
                best_car = car.car_id

        if best_car is not None:
            if self.verbose:
                self.log(f"Nearest idle car: Car_{best_car} (distance={best_distance})")
            return best_car

        # No idle car: least loaded
        best_queue = float('inf')
        for car in ordered:
            if len(car.queue) < best_queue:
                best_queue = len(car.queue)
                best_car = car.car_id

        if best_car is not None and self.verbose:
            self.log(f"No idle car. Shortest queue: Car_{best_car} ({best_queue} stops)")
        return best_car

    def get_strategy_name(self) -> str:
        return "Nearest Idle (fallback: shortest queue)"

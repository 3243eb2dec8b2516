"""
Queue Cost Strategy

Greedy per-call scoring that looks at where each car will be once its
queue is drained, how much work it already has, and whether it is already
heading past the call.
"""

from typing import Callable, Optional, Sequence
from simulator.core.car import Car
from ..interfaces.allocation_strategy import IAllocationStrategy


class QueueCostStrategy(IAllocationStrategy):
    """
    Queue cost allocation strategy

    Score per car (lower is better):
        distance        = |last_stop - target_floor|
                          last_stop is the last queued floor, or the
                          current floor when the queue is empty
        queue_penalty   = len(queue) * queue_penalty
        direction_bonus = direction_bonus when the car is moving in the
                          call's direction and the call is at or ahead of
                          its current floor, else 0

    The strictly lowest score wins; on a tie the lowest car_id wins.
    Each call is scored once and never reassigned.

    Usage:
        strategy = QueueCostStrategy(queue_penalty=0.8, direction_bonus=-1.5)
        car_id = strategy.select_car(3, "UP", cars)
    """

    def __init__(self, queue_penalty: float = 0.8, direction_bonus: float = -1.5, verbose: bool = True,
                 clock: Optional[Callable[[], float]] = None):
        """
        Args:
            queue_penalty: Score added per stop already queued
            direction_bonus: Score added (<= 0) for an en-route pickup
            verbose: Print per-car scores
            clock: Simulation time source for log lines
        """
        self.queue_penalty = queue_penalty
        self.direction_bonus = direction_bonus
        self.verbose = verbose
        self.clock = clock

    def score(self, car: Car, target_floor: int, direction: Optional[str]) -> float:
        distance = abs(car.last_stop - target_floor)
        penalty = len(car.queue) * self.queue_penalty

        bonus = 0.0
        if direction is not None and car.direction == direction and car.direction != "IDLE":
            if (direction == "UP" and target_floor >= car.current_floor) or \
               (direction == "DOWN" and target_floor <= car.current_floor):
                bonus = self.direction_bonus

        return distance + penalty + bonus

    def select_car(
        self,
        target_floor: int,
        direction: Optional[str],
        cars: Sequence[Car]
    ) -> Optional[int]:
        best_car = None
        best_score = float('inf')

        for car in sorted(cars, key=lambda c: c.car_id):
            score = self.score(car, target_floor, direction)

            if self.verbose:
                self.log(f"{car.name}: LastStop={car.last_stop}, Queue={car.queue}, "
                      f"Direction={car.direction}, Score={score:.2f}")

            if score < best_score:
                best_score = score
                best_car = car.car_id

        return best_car

    def get_strategy_name(self) -> str:
        return "Queue Cost (distance + queue penalty + direction bonus)"

"""
Allocation Strategy Interface

Defines how a car is selected for a hall call.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from simulator.core.car import Car


class IAllocationStrategy(ABC):
    """
    Interface for car allocation strategies

    A strategy is a pure function of the car records it is given: the same
    cars and the same call always produce the same selection. It never
    mutates the cars; inserting the stop is the dispatcher's job.
    """

    # Returns the simulation time used to prefix log lines
    clock: Optional[Callable[[], float]] = None

    @abstractmethod
    def select_car(
        self,
        target_floor: int,
        direction: Optional[str],
        cars: Sequence[Car]
    ) -> Optional[int]:
        """
        Select the best car for a call

        Args:
            target_floor: Floor where the call was made
            direction: 'UP', 'DOWN', or None when unknown
            cars: Car records ordered by car_id

        Returns:
            car_id of the selected car, or None when cars is empty
        """
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """
        Returns:
            str: Strategy name (for logging)
        """
        pass

    def log(self, message: str):
        if self.clock is None:
            print(f"[Dispatcher] {message}")
        else:
            print(f"{self.clock():.2f} [Dispatcher] {message}")

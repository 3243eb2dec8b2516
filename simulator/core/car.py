"""
Car - Plain data record for one elevator car

The record is shared by the dispatcher (which reads it to score calls and
inserts stops into its queue) and the CarOperator (which drains the queue).
It never holds rendering handles; observers correlate by car_id.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

# Car states
IDLE = "IDLE"
MOVING_UP = "MOVING_UP"
MOVING_DOWN = "MOVING_DOWN"
DOORS_OPENING = "DOORS_OPENING"
DOORS_CLOSING = "DOORS_CLOSING"

# Status text shown to the presentation layer for each state
STATUS_TEXT = {
    IDLE: "Idle",
    MOVING_UP: "Moving up",
    MOVING_DOWN: "Moving down",
    DOORS_OPENING: "Doors opening",
    DOORS_CLOSING: "Doors closing",
}


@dataclass
class Car:
    """
    Attributes:
        car_id: Stable index of the car (0-based)
        current_floor: Last floor the car arrived at. Stale while in transit.
        queue: Pending stops in processing order, no duplicates
        direction: 'UP', 'DOWN' or 'IDLE'
        busy: True while a drain process is running
        state: One of the car state constants above
    """
    car_id: int
    current_floor: int = 0
    queue: List[int] = field(default_factory=list)
    direction: str = "IDLE"
    busy: bool = False
    state: str = IDLE

    @property
    def name(self) -> str:
        return f"Car_{self.car_id}"

    @property
    def last_stop(self) -> int:
        """Where the car will be once its queue is drained."""
        return self.queue[-1] if self.queue else self.current_floor

    def panel(self) -> Dict[str, Any]:
        """Data shown on the car's status panel."""
        return {
            "current_floor": self.current_floor,
            "direction": self.direction,
            "queue": list(self.queue),
        }

    def snapshot(self) -> Dict[str, Any]:
        return {
            "car_id": self.car_id,
            "current_floor": self.current_floor,
            "direction": self.direction,
            "queue": list(self.queue),
            "state": self.state,
            "busy": self.busy,
        }

"""
Call Registry - Outstanding hall calls

Tracks pending pickup requests keyed by (floor, direction). A key that is
already active behaves like a lit hall button: pressing it again changes
nothing.
"""

import itertools
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Tuple

from ..infrastructure.message_broker import MessageBroker

DIRECTIONS = ("UP", "DOWN")

ACTIVE_CALLS_TOPIC = "calls/active"


def hall_button_topic(floor: int, direction: str) -> str:
    return f"hall_button/floor_{floor}/{direction}"


@dataclass(frozen=True)
class Call:
    """
    A pending pickup request.

    Attributes:
        floor: Floor where the call was made
        direction: 'UP' or 'DOWN'
        created_at: Simulation time of the request
        sequence: Insertion counter, breaks created_at ties
    """
    floor: int
    direction: str
    created_at: float
    sequence: int

    @property
    def key(self) -> Tuple[int, str]:
        return (self.floor, self.direction)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'Call':
        return cls(
            floor=data['floor'],
            direction=data['direction'],
            created_at=data['created_at'],
            sequence=data['sequence'],
        )


class CallRegistry:
    """
    Holds every active Call and publishes hall button changes.

    The registry is the only structure shared by all cars. Cars clear calls
    from their own processes, which the single-threaded SimPy scheduler
    serializes.
    """

    def __init__(self, broker: MessageBroker):
        """
        Args:
            broker (MessageBroker): Message broker used for notifications
        """
        self.broker = broker
        self._calls: Dict[Tuple[int, str], Call] = {}
        self._sequence = itertools.count()

    def request_pickup(self, floor: int, direction: str) -> Optional[Call]:
        """
        Register a call for (floor, direction).

        The caller is responsible for passing a legal floor and direction;
        the registry does not re-check building bounds.

        Returns:
            The new Call, or None when the same key is already active
        """
        if direction not in DIRECTIONS:
            raise ValueError(f"direction must be 'UP' or 'DOWN', got {direction!r}")

        key = (floor, direction)
        now = self.broker.get_current_time()
        if key in self._calls:
            print(f"{now:.2f} [CallRegistry] Call at floor {floor} ({direction}) already active. Duplicate ignored.")
            return None

        call = Call(floor=floor, direction=direction, created_at=now, sequence=next(self._sequence))
        self._calls[key] = call
        print(f"{now:.2f} [CallRegistry] Call registered at floor {floor} ({direction}). Light ON.")

        self._publish_button(floor, direction, True)
        self._publish_active_calls()
        return call

    def clear_calls_at_floor(self, floor: int):
        """
        Remove every active call at floor, whichever direction it was for.
        """
        cleared = [call for call in self.list_active() if call.floor == floor]
        if not cleared:
            return

        now = self.broker.get_current_time()
        for call in cleared:
            del self._calls[call.key]
            print(f"{now:.2f} [CallRegistry] Call served at floor {floor} ({call.direction}). Light OFF.")
            self._publish_button(call.floor, call.direction, False)

        self._publish_active_calls()

    def list_active(self) -> List[Call]:
        """Active calls, oldest first."""
        return sorted(self._calls.values(), key=lambda c: (c.created_at, c.sequence))

    def is_active(self, floor: int, direction: str) -> bool:
        return (floor, direction) in self._calls

    def clear(self):
        """Drop every call without publishing. Used when a run is discarded."""
        self._calls.clear()

    def __len__(self) -> int:
        return len(self._calls)

    def _publish_button(self, floor: int, direction: str, active: bool):
        message = {
            "timestamp": self.broker.get_current_time(),
            "floor": floor,
            "direction": direction,
            "active": active,
        }
        self.broker.put(hall_button_topic(floor, direction), message)

    def _publish_active_calls(self):
        message = {
            "timestamp": self.broker.get_current_time(),
            "calls": [call.to_dict() for call in self.list_active()],
        }
        self.broker.put(ACTIVE_CALLS_TOPIC, message)

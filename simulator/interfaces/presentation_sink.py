"""
Presentation Sink Interface

Defines what the simulation tells the presentation layer. The layer that
renders floors and cars, and that issues pickup requests, implements this
interface; the simulation never holds rendering handles and correlates
everything by car_id and floor.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..core.call_registry import Call, ACTIVE_CALLS_TOPIC


class IPresentationSink(ABC):
    """
    Receiver of one-way state-change notifications.

    Notifications are fire-and-forget: return values are ignored and a sink
    must not call back into the simulation from inside a notification.
    """

    @abstractmethod
    def on_call_button_changed(self, floor: int, direction: str, active: bool):
        """
        Hall button at (floor, direction) turned on or off.
        """
        pass

    @abstractmethod
    def on_car_status_changed(self, car_id: int, status: str):
        """
        Car entered a new state.

        status is one of 'Idle', 'Moving up', 'Moving down',
        'Doors opening', 'Doors closing'.
        """
        pass

    @abstractmethod
    def on_car_position_changed(self, car_id: int, target_floor: int, travel_duration_ms: int):
        """
        Car departed for target_floor. The sink animates from the car's last
        known position over travel_duration_ms.
        """
        pass

    @abstractmethod
    def on_car_panel_updated(self, car_id: int, panel: Dict[str, Any]):
        """
        Car panel data changed.

        panel: {'current_floor': int, 'direction': str, 'queue': List[int]}
        """
        pass

    @abstractmethod
    def on_active_calls_changed(self, calls: List[Call]):
        """
        The set of active calls changed. calls is ordered oldest first.
        """
        pass


class SinkRelay:
    """
    Routes broker messages to a presentation sink by topic.

    Subscribed to the broker as a broadcast subscriber, so it sees every
    car and floor without knowing the building size up front.
    """

    _HALL_BUTTON = re.compile(r'hall_button/floor_(\d+)/(UP|DOWN)$')
    _CAR = re.compile(r'car/(\d+)/(status|position|panel)$')

    def __init__(self, sink: IPresentationSink):
        self.sink = sink

    def __call__(self, topic: str, message: Dict[str, Any]):
        if topic == ACTIVE_CALLS_TOPIC:
            self.sink.on_active_calls_changed([Call.from_dict(c) for c in message['calls']])
            return

        button_match = self._HALL_BUTTON.match(topic)
        if button_match:
            self.sink.on_call_button_changed(message['floor'], message['direction'], message['active'])
            return

        car_match = self._CAR.match(topic)
        if not car_match:
            return
        car_id = int(car_match.group(1))
        kind = car_match.group(2)
        if kind == 'status':
            self.sink.on_car_status_changed(car_id, message['status'])
        elif kind == 'position':
            self.sink.on_car_position_changed(car_id, message['target_floor'], message['travel_duration_ms'])
        else:
            panel = {
                'current_floor': message['current_floor'],
                'direction': message['direction'],
                'queue': list(message['queue']),
            }
            self.sink.on_car_panel_updated(car_id, panel)

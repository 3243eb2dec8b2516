"""
Recording Sink

Keeps every notification in memory, in arrival order. Used by tests and by
tools that want to inspect what a front end would have been told.
"""

from typing import Any, Dict, List, Tuple

from simulator.interfaces.presentation_sink import IPresentationSink


class RecordingSink(IPresentationSink):
    """
    Attributes:
        events: List of (event_name, payload) tuples
        button_states: Latest active flag per (floor, direction)
        statuses: Status strings received per car, in order
    """

    def __init__(self):
        self.events: List[Tuple[str, Dict[str, Any]]] = []
        self.button_states: Dict[Tuple[int, str], bool] = {}
        self.statuses: Dict[int, List[str]] = {}
        self.active_calls: List = []

    def on_call_button_changed(self, floor: int, direction: str, active: bool):
        self.button_states[(floor, direction)] = active
        self.events.append(("call_button", {"floor": floor, "direction": direction, "active": active}))

    def on_car_status_changed(self, car_id: int, status: str):
        self.statuses.setdefault(car_id, []).append(status)
        self.events.append(("car_status", {"car_id": car_id, "status": status}))

    def on_car_position_changed(self, car_id: int, target_floor: int, travel_duration_ms: int):
        self.events.append(("car_position", {
            "car_id": car_id,
            "target_floor": target_floor,
            "travel_duration_ms": travel_duration_ms,
        }))

    def on_car_panel_updated(self, car_id: int, panel: Dict[str, Any]):
        self.events.append(("car_panel", {"car_id": car_id, **panel}))

    def on_active_calls_changed(self, calls: List):
        self.active_calls = list(calls)
        self.events.append(("active_calls", {"calls": list(calls)}))

    def events_named(self, name: str) -> List[Dict[str, Any]]:
        return [payload for event, payload in self.events if event == name]

    def lit_buttons(self) -> List[Tuple[int, str]]:
        return sorted(key for key, active in self.button_states.items() if active)

    def clear(self):
        self.events.clear()
        self.button_states.clear()
        self.statuses.clear()
        self.active_calls = []

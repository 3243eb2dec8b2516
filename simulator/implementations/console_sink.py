"""
Console Sink

Prints every notification as a single line. Handy for watching a scenario
from a terminal without a graphical front end.
"""

from typing import Any, Callable, Dict, List, Optional

from simulator.interfaces.presentation_sink import IPresentationSink


class ConsoleSink(IPresentationSink):
    """
    Usage:
        sink = ConsoleSink(clock=lambda: controller.now)
        controller.attach_sink(sink)
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """
        Args:
            clock: Returns the simulation time used to prefix lines
        """
        self.clock = clock

    def _prefix(self) -> str:
        if self.clock is None:
            return "[View]"
        return f"{self.clock():.2f} [View]"

    def on_call_button_changed(self, floor: int, direction: str, active: bool):
        arrow = "▲" if direction == "UP" else "▼"
        print(f"{self._prefix()} Floor {floor} {arrow} {'ON' if active else 'OFF'}")

    def on_car_status_changed(self, car_id: int, status: str):
        print(f"{self._prefix()} L{car_id + 1}: {status}")

    def on_car_position_changed(self, car_id: int, target_floor: int, travel_duration_ms: int):
        print(f"{self._prefix()} L{car_id + 1}: heading to floor {target_floor} ({travel_duration_ms} ms)")

    def on_car_panel_updated(self, car_id: int, panel: Dict[str, Any]):
        queue = ", ".join(str(f) for f in panel['queue']) or "–"
        print(f"{self._prefix()} L{car_id + 1} panel: floor={panel['current_floor']} "
              f"direction={panel['direction'].capitalize()} queue={queue}")

    def on_active_calls_changed(self, calls: List):
        if not calls:
            print(f"{self._prefix()} No pending requests")
            return
        pending = ", ".join(f"{c.floor}{'▲' if c.direction == 'UP' else '▼'}" for c in calls)
        print(f"{self._prefix()} Pending requests: {pending}")

import json
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import matplotlib.pyplot as plt


class TravelStatistics:
    """
    Listens to every broker message as an independent "recorder".

    Records each car's floor trajectory, door openings, hall call waiting
    times (button on to button off) and the full message stream in JSON
    Lines format for offline playback.

    Usage:
        stats = TravelStatistics()
        controller.add_listener(stats.on_message)
    """

    _HALL_BUTTON = re.compile(r'hall_button/floor_(\d+)/(UP|DOWN)$')
    _CAR = re.compile(r'car/(\d+)/(status|position|panel)$')

    def __init__(self):
        self.trajectories: Dict[int, List[Tuple[float, float]]] = {}
        self.door_openings: Dict[int, List[Tuple[float, int]]] = {}
        self.assignments: Dict[int, int] = {}
        self.call_records: List[Dict[str, Any]] = []
        self._pending_calls: Dict[Tuple[int, str], float] = {}
        self._last_floor: Dict[int, int] = {}
        self.last_timestamp = 0.0

        self.event_log: List[Dict[str, Any]] = []
        self.simulation_metadata: Dict[str, Any] = {}

    def set_simulation_metadata(self, metadata: Dict[str, Any]):
        """
        Set simulation metadata (called before the run starts).

        Args:
            metadata (dict): Simulation configuration (num_floors, num_cars, etc.)
        """
        self.simulation_metadata = {
            "format_version": "1.0",
            "timestamp": datetime.now().isoformat(),
            "config": metadata
        }

    def on_message(self, topic: str, message: Dict[str, Any]):
        timestamp = message.get('timestamp', self.last_timestamp)
        self.last_timestamp = max(self.last_timestamp, timestamp)
        self.event_log.append({"time": timestamp, "topic": topic, "message": message})

        if topic == 'dispatcher/assignment':
            car_id = message['car_id']
            self.assignments[car_id] = self.assignments.get(car_id, 0) + 1
            return

        button_match = self._HALL_BUTTON.match(topic)
        if button_match:
            self._record_button(message, timestamp)
            return

        car_match = self._CAR.match(topic)
        if car_match:
            car_id = int(car_match.group(1))
            kind = car_match.group(2)
            if kind == 'panel':
                self._last_floor[car_id] = message['current_floor']
                if car_id not in self.trajectories:
                    self.trajectories[car_id] = [(timestamp, message['current_floor'])]
            elif kind == 'position':
                arrival = timestamp + message['travel_duration_ms'] / 1000.0
                trajectory = self.trajectories.setdefault(car_id, [])
                trajectory.append((timestamp, message['from_floor']))
                trajectory.append((arrival, message['target_floor']))
            elif kind == 'status' and message['state'] == 'DOORS_OPENING':
                floor = self._last_floor.get(car_id, 0)
                self.door_openings.setdefault(car_id, []).append((timestamp, floor))

    def _record_button(self, message: Dict[str, Any], timestamp: float):
        key = (message['floor'], message['direction'])
        if message['active']:
            self._pending_calls[key] = timestamp
            return

        created_at = self._pending_calls.pop(key, None)
        if created_at is None:
            return
        self.call_records.append({
            "floor": key[0],
            "direction": key[1],
            "created_at": created_at,
            "cleared_at": timestamp,
            "wait": timestamp - created_at,
        })

    # --- Metrics ---

    def get_wait_times(self) -> List[float]:
        return [record['wait'] for record in self.call_records]

    @property
    def unserved_calls(self) -> List[Tuple[int, str]]:
        return sorted(self._pending_calls)

    def summary(self) -> Dict[str, Any]:
        waits = self.get_wait_times()
        return {
            "served": len(waits),
            "unserved": len(self._pending_calls),
            "average_wait": sum(waits) / len(waits) if waits else 0.0,
            "min_wait": min(waits) if waits else 0.0,
            "max_wait": max(waits) if waits else 0.0,
            "assignments": dict(sorted(self.assignments.items())),
        }

    def print_call_metrics_summary(self):
        """Print hall call waiting times and per-car assignment counts."""
        summary = self.summary()

        print("\n" + "=" * 60)
        print("   CALL METRICS SUMMARY")
        print("=" * 60)
        print(f"\nWaiting Time (Button ON to Button OFF):")
        print(f"  Served:   {summary['served']:>6} calls")
        print(f"  Pending:  {summary['unserved']:>6} calls")
        if summary['served']:
            print(f"  Average: {summary['average_wait']:>7.2f} seconds")
            print(f"  Min:     {summary['min_wait']:>7.2f} seconds")
            print(f"  Max:     {summary['max_wait']:>7.2f} seconds")

        print(f"\nAssignments per car:")
        for car_id, count in summary['assignments'].items():
            print(f"  L{car_id + 1}: {count:>6}")
        print("=" * 60)

    # --- Output ---

    def save_event_log(self, filename: str = 'simulation_log.jsonl'):
        """
        Save every recorded message as JSON Lines. The first line holds the
        simulation metadata when it was set.
        """
        with open(filename, 'w', encoding='utf-8') as f:
            if self.simulation_metadata:
                f.write(json.dumps({"type": "metadata", "data": self.simulation_metadata}, ensure_ascii=False) + "\n")
            for event in self.event_log:
                f.write(json.dumps(event, ensure_ascii=False) + "\n")
        print(f"Event log saved to {filename} ({len(self.event_log)} events)")

    def plot_trajectory_diagram(self, output_filename: Optional[str] = 'trajectory_diagram.png',
                                end_time: Optional[float] = None, show: bool = False):
        """
        Draw the travel diagram: floor against time for every car, with
        door openings marked.

        Args:
            output_filename: PNG path, or None to skip saving
            end_time: Extend each car's last position to this time
            show: Open an interactive window
        """
        end_time = self.last_timestamp if end_time is None else end_time
        colors = plt.get_cmap('tab10')

        fig = plt.figure(figsize=(14, 8))
        max_floor = 0
        for car_id in sorted(self.trajectories):
            points = list(self.trajectories[car_id])
            if points and points[-1][0] < end_time:
                points.append((end_time, points[-1][1]))
            times = [p[0] for p in points]
            floors = [p[1] for p in points]
            max_floor = max([max_floor] + floors)
            color = colors(car_id % 10)
            plt.plot(times, floors, label=f"L{car_id + 1}", linewidth=2.5, color=color, alpha=0.8)

            openings = self.door_openings.get(car_id, [])
            if openings:
                plt.scatter([t for t, _ in openings], [f for _, f in openings],
                            marker='s', s=40, color=color, zorder=3)

        for record in self.call_records:
            marker = '^' if record['direction'] == 'UP' else 'v'
            plt.scatter(record['created_at'], record['floor'], marker=marker, s=60,
                        facecolors='none', edgecolors='black', zorder=4)

        plt.title("Car Travel Diagram")
        plt.xlabel("Time (s)")
        plt.ylabel("Floor")
        plt.grid(True, which='both', linestyle='--', alpha=0.7)
        plt.yticks(range(0, int(max_floor) + 2))
        if self.trajectories:
            plt.legend(loc='upper right', fontsize=10)

        if output_filename:
            plt.savefig(output_filename, dpi=150, bbox_inches='tight')
            print(f"Trajectory diagram saved to {output_filename}")
        if show:
            plt.show()
        plt.close(fig)

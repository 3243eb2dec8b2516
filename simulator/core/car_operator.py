import simpy
from .entity import Entity
from .car import (
    Car, IDLE, MOVING_UP, MOVING_DOWN, DOORS_OPENING, DOORS_CLOSING, STATUS_TEXT
)
from .call_registry import CallRegistry
from ..infrastructure.message_broker import MessageBroker


def car_topic(car_id: int, kind: str) -> str:
    return f"car/{car_id}/{kind}"


class CarOperator(Entity):
    """
    Drives one car through its queue.

    While the queue is non-empty the operator pops the front stop, travels
    there, runs a full door cycle and clears the calls at that floor. Travel
    and each door phase are single timeouts; nothing interrupts them. When
    the queue runs dry the process ends and the car goes back to IDLE. The
    dispatcher starts a new process the next time it assigns a stop to an
    idle car.
    """

    def __init__(self, env: simpy.Environment, car: Car, broker: MessageBroker,
                 registry: CallRegistry, floor_travel_time: float = 1.5, door_time: float = 1.8):
        super().__init__(env, car.name)
        self.car = car
        self.broker = broker
        self.registry = registry
        self.floor_travel_time = floor_travel_time
        self.door_time = door_time
        self.state = car.state

    def _on_state_changed(self, old_state: str, new_state: str):
        super()._on_state_changed(old_state, new_state)
        self.car.state = new_state
        self.report_status()
        self.report_panel()

    def start_processing(self):
        """
        Mark the car busy and start draining its queue.

        The first stop is taken before returning: by the time the caller
        scores the next call, this car already shows its new direction and
        a queue without that stop.
        """
        if self.car.busy or not self.car.queue:
            return
        self.car.busy = True
        print(f"{self.env.now:.2f} [{self.name}] Starting to serve queue {self.car.queue}.")
        target = self._depart()
        self.start(target)

    def run(self, target: int):
        car = self.car
        while True:
            yield from self._travel(target)
            yield from self._door_cycle()

            self.registry.clear_calls_at_floor(target)

            if not car.queue:
                break
            target = self._depart()

        car.direction = "IDLE"
        car.busy = False
        print(f"{self.env.now:.2f} [{self.name}] Queue empty. Idle at floor {car.current_floor}.")
        self.set_state(IDLE)

    def _depart(self) -> int:
        """Pop the front stop, set the direction and leave for it."""
        car = self.car
        target = car.queue.pop(0)

        if target > car.current_floor:
            car.direction = "UP"
        elif target < car.current_floor:
            car.direction = "DOWN"
        else:
            car.direction = "IDLE"
        self.report_panel()

        if target != car.current_floor:
            duration = abs(target - car.current_floor) * self.floor_travel_time
            self.set_state(MOVING_UP if target > car.current_floor else MOVING_DOWN)
            print(f"{self.env.now:.2f} [{self.name}] Departing floor {car.current_floor} for floor {target} ({duration:.2f}s).")
            self.report_position(target, duration)
        return target

    def _travel(self, target: int):
        car = self.car
        floors = abs(target - car.current_floor)
        if floors == 0:
            return

        yield self.env.timeout(floors * self.floor_travel_time)

        # current_floor only changes once the whole trip is complete
        car.current_floor = target
        print(f"{self.env.now:.2f} [{self.name}] Arrived at floor {target}.")
        self.report_panel()

    def _door_cycle(self):
        self.set_state(DOORS_OPENING)
        yield self.env.timeout(self.door_time)
        self.set_state(DOORS_CLOSING)
        yield self.env.timeout(self.door_time)

    # --- Notifications ---

    def report_status(self):
        message = {
            "timestamp": self.env.now,
            "car_id": self.car.car_id,
            "state": self.car.state,
            "status": STATUS_TEXT[self.car.state],
        }
        self.broker.put(car_topic(self.car.car_id, "status"), message)

    def report_panel(self):
        message = {
            "timestamp": self.env.now,
            "car_id": self.car.car_id,
            **self.car.panel(),
        }
        self.broker.put(car_topic(self.car.car_id, "panel"), message)

    def report_position(self, target_floor: int, duration: float):
        message = {
            "timestamp": self.env.now,
            "car_id": self.car.car_id,
            "from_floor": self.car.current_floor,
            "target_floor": target_floor,
            "travel_duration_ms": int(round(duration * 1000)),
        }
        self.broker.put(car_topic(self.car.car_id, "position"), message)

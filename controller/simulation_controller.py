"""
Simulation Controller

Owns one simulation run: the SimPy environment (the shared logical clock),
the message broker, the call registry, the cars and the dispatcher. The
presentation layer talks to the simulation only through this class.
"""

from typing import Callable, List, Optional

import simpy

from config.simulation import (
    SimulationConfig, BuildingConfig, CarConfig, TimingConfig, DispatchConfig
)
from simulator.core.building import Building
from simulator.core.car import Car
from simulator.core.call_registry import Call, CallRegistry, ACTIVE_CALLS_TOPIC
from simulator.core.car_operator import CarOperator
from simulator.infrastructure.message_broker import MessageBroker
from simulator.infrastructure.realtime_env import RealtimeEnvironment
from simulator.interfaces.presentation_sink import IPresentationSink, SinkRelay
from .dispatcher import Dispatcher, create_strategy

BroadcastListener = Callable[[str, dict], None]


class SimulationNotConfiguredError(RuntimeError):
    """Raised when the simulation is used before configure()."""


class SimulationController:
    """
    Entry point for the presentation layer.

    Usage:
        controller = SimulationController()
        controller.attach_sink(my_view)
        controller.configure(num_floors=5, num_cars=2)
        controller.request_pickup(3, "UP")
        controller.run(until=30)

    Every configure() or reset() throws the previous run away, including
    its environment. Timers that were pending in the old environment can
    never fire into the new run.
    """

    def __init__(self, timing: Optional[TimingConfig] = None,
                 dispatch: Optional[DispatchConfig] = None,
                 realtime_factor: float = 0.0, verbose: bool = True):
        """
        Args:
            timing: Travel and door timing used by configure()
            dispatch: Allocation settings used by configure()
            realtime_factor: > 0 paces the clock against wall time
            verbose: Print simulation log lines
        """
        self.timing = timing or TimingConfig()
        self.dispatch_config = dispatch or DispatchConfig()
        self.realtime_factor = realtime_factor
        self.verbose = verbose

        self._sinks: List[IPresentationSink] = []
        self._relays: List[SinkRelay] = []
        self._listeners: List[BroadcastListener] = []

        self.config: Optional[SimulationConfig] = None
        self.env: Optional[simpy.Environment] = None
        self.broker: Optional[MessageBroker] = None
        self.building: Optional[Building] = None
        self.registry: Optional[CallRegistry] = None
        self.dispatcher: Optional[Dispatcher] = None
        self.operators: List[CarOperator] = []

    # --- Lifecycle ---

    def configure(self, num_floors: int, num_cars: int):
        """
        Start a fresh run with num_floors floors and num_cars cars.

        Raises:
            ValidationError: If either count is out of bounds. The current
                run, if any, is left untouched.
        """
        config = SimulationConfig(
            building=BuildingConfig(num_floors=num_floors),
            car=CarConfig(num_cars=num_cars),
            timing=self.timing,
            dispatch=self.dispatch_config,
            realtime_factor=self.realtime_factor
        )
        self.configure_from(config)

    def configure_from(self, config: SimulationConfig):
        """Start a fresh run from a complete SimulationConfig."""
        config.validate()
        self._teardown()

        self.config = config
        if config.realtime_factor > 0:
            self.env = RealtimeEnvironment(speed_factor=config.realtime_factor)
        else:
            self.env = simpy.Environment()

        self.broker = MessageBroker(self.env, verbose=self.verbose)
        for relay in self._relays:
            self.broker.subscribe_all(relay)
        for listener in self._listeners:
            self.broker.subscribe_all(listener)

        self.building = Building(config.building.num_floors)
        self.registry = CallRegistry(self.broker)
        self.dispatcher = Dispatcher(self.broker, create_strategy(
            config.dispatch, verbose=self.verbose, clock=self.broker.get_current_time
        ))

        self.operators = []
        for car_id in range(config.car.num_cars):
            operator = CarOperator(
                self.env, Car(car_id=car_id), self.broker, self.registry,
                floor_travel_time=config.timing.floor_travel_time,
                door_time=config.timing.door_time
            )
            self.dispatcher.register_car(operator)
            self.operators.append(operator)

        print(f"{self.env.now:.2f} [Simulation] Configured {self.building} with {config.car.num_cars} cars.")

        # Initial view: every car idle at the ground floor, no calls
        for operator in self.operators:
            operator.report_status()
            operator.report_panel()
        self.broker.put(ACTIVE_CALLS_TOPIC, {"timestamp": self.env.now, "calls": []})

    def reset(self):
        """Discard every call and car and return to the unconfigured state."""
        if self.config is not None:
            print(f"{self.env.now:.2f} [Simulation] Reset.")
        self._teardown()

    def _teardown(self):
        if self.broker is not None:
            self.broker.close()
        if self.registry is not None:
            self.registry.clear()
        self.config = None
        self.env = None
        self.broker = None
        self.building = None
        self.registry = None
        self.dispatcher = None
        self.operators = []

    @property
    def is_configured(self) -> bool:
        return self.config is not None

    def _require_configured(self):
        if not self.is_configured:
            raise SimulationNotConfiguredError("configure() must be called first")

    # --- Requests ---

    def request_pickup(self, floor: int, direction: str) -> Optional[Call]:
        """
        Register a hall call and hand it to the dispatcher.

        The caller guarantees floor and direction are legal for the
        building (see Building.available_directions).

        Returns:
            The new Call, or None if an identical call is already active
        """
        self._require_configured()
        call = self.registry.request_pickup(floor, direction)
        if call is not None:
            self.dispatcher.dispatch(call)
        return call

    # --- Clock ---

    def run(self, until: Optional[float] = None):
        """
        Advance the clock to simulation time `until`, or until no timer is
        pending when `until` is None.
        """
        self._require_configured()
        if until is not None and until <= self.env.now:
            return
        self.env.run(until=until)

    def step(self):
        """Process a single scheduled event."""
        self._require_configured()
        self.env.step()

    @property
    def now(self) -> float:
        self._require_configured()
        return self.env.now

    # --- Views ---

    @property
    def cars(self) -> List[Car]:
        return [operator.car for operator in self.operators]

    def car(self, car_id: int) -> Car:
        return self.operators[car_id].car

    def active_calls(self) -> List[Call]:
        if self.registry is None:
            return []
        return self.registry.list_active()

    # --- Observers ---

    def attach_sink(self, sink: IPresentationSink):
        """Deliver notifications to sink, for this run and every later one."""
        relay = SinkRelay(sink)
        self._sinks.append(sink)
        self._relays.append(relay)
        if self.broker is not None:
            self.broker.subscribe_all(relay)

    def detach_sink(self, sink: IPresentationSink):
        if sink not in self._sinks:
            return
        index = self._sinks.index(sink)
        relay = self._relays.pop(index)
        self._sinks.pop(index)
        if self.broker is not None:
            self.broker.unsubscribe_all(relay)

    def add_listener(self, listener: BroadcastListener):
        """Receive raw (topic, message) pairs, for this run and every later one."""
        self._listeners.append(listener)
        if self.broker is not None:
            self.broker.subscribe_all(listener)

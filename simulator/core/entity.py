import simpy
from abc import ABC, abstractmethod
from typing import Optional


class Entity(ABC):
    """
    Abstract base class for entities driven by SimPy processes.

    Unlike a long-lived daemon, an entity's run() process is started on
    demand with start() and may finish; it can be started again once the
    previous process has ended.
    """

    def __init__(self, env: simpy.Environment, name: str):
        """
        Args:
            env: The SimPy simulation environment this entity belongs to.
            name: Entity name used in log lines.
        """
        self.env = env
        self.name: str = name

        # Concrete classes set their own initial state
        self.state: str = "initial_state"

        self._process: Optional[simpy.Process] = None

        print(f'{self.env.now:.2f}: Entity "{self.name}" ({self.__class__.__name__}) created.')

    @abstractmethod
    def run(self, *args):
        """
        Generator that forms the body of the entity's SimPy process.
        Suspend with `yield self.env.timeout(delay)`.
        """
        pass

    def start(self, *args) -> simpy.Process:
        """
        Start run(*args) as a SimPy process. The generator begins executing
        at the next scheduler step of the current simulated instant, so work
        that must be visible immediately belongs in the caller.
        """
        if self.is_running:
            raise RuntimeError(f"{self.name} is already running")
        self._process = self.env.process(self.run(*args))
        return self._process

    @property
    def is_running(self) -> bool:
        return self._process is not None and self._process.is_alive

    @property
    def process(self) -> Optional[simpy.Process]:
        """The most recently started SimPy process, if any."""
        return self._process

    # --- Common utility methods ---

    def set_state(self, new_state: str):
        """
        Transition the entity's state.

        Args:
            new_state: String representing the target state for transition.
        """
        if self.state != new_state:
            old_state = self.state
            self.state = new_state
            self._on_state_changed(old_state, new_state)

    def _on_state_changed(self, old_state: str, new_state: str):
        """
        Hook called after every state change. Subclasses extend it to
        report status; the base implementation only logs.
        """
        print(f'{self.env.now:.2f}: Entity "{self.name}" state transition: {old_state} -> {new_state}')

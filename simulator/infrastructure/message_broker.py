import simpy
from typing import Any, Callable, Dict, List

Subscriber = Callable[[Any], None]
BroadcastSubscriber = Callable[[str, Any], None]


class MessageBroker:
    """
    Mediates communication between simulation components and observers.
    Implements a topic-based publish-subscribe model.

    Delivery is synchronous: put() hands the message to every subscriber of
    the topic, then to every broadcast subscriber, before returning. Publishers
    never wait on subscribers, so notifications are fire-and-forget from the
    point of view of the simulation.
    """
    def __init__(self, env: simpy.Environment, verbose: bool = True):
        """
        Initialize the message broker

        Args:
            env (simpy.Environment): SimPy environment
            verbose (bool): Print every published message
        """
        self.env = env
        self.verbose = verbose
        self.topics: Dict[str, List[Subscriber]] = {}
        self.broadcast_subscribers: List[BroadcastSubscriber] = []

    def subscribe(self, topic: str, callback: Subscriber):
        """
        Register a callback for the specified topic
        """
        self.topics.setdefault(topic, []).append(callback)

    def unsubscribe(self, topic: str, callback: Subscriber):
        subscribers = self.topics.get(topic, [])
        if callback in subscribers:
            subscribers.remove(callback)

    def subscribe_all(self, callback: BroadcastSubscriber):
        """
        Register a callback that receives (topic, message) for every publish.
        Used by recorders such as TravelStatistics.
        """
        self.broadcast_subscribers.append(callback)

    def unsubscribe_all(self, callback: BroadcastSubscriber):
        if callback in self.broadcast_subscribers:
            self.broadcast_subscribers.remove(callback)

    def close(self):
        """
        Drop every subscriber. A closed broker still accepts put() but
        delivers to nobody, so a discarded run cannot reach observers.
        """
        self.topics.clear()
        self.broadcast_subscribers.clear()

    def put(self, topic: str, message):
        """
        Publish (put) a message to the specified topic
        """
        if self.verbose:
            print(f"{self.env.now:.2f} [Broker] Publish on '{topic}': {message}")
        for callback in list(self.topics.get(topic, [])):
            callback(message)
        for callback in list(self.broadcast_subscribers):
            callback(topic, message)

    def get_current_time(self) -> float:
        """
        Get current simulation time

        Lets components that are not SimPy processes (the registry, the
        dispatcher) read the clock without holding the environment.

        Returns:
            Current simulation time
        """
        return self.env.now

"""
RealtimeEnvironment.py

A SimPy environment that paces simulation time against the wall clock,
for interactive viewers that want to watch cars move.
"""

import simpy
import time


class RealtimeEnvironment(simpy.Environment):
    """
    SimPy environment with real-time pacing.

    After each processed event the environment sleeps until the wall clock
    has caught up with simulated time scaled by speed_factor.

    Args:
        speed_factor (float): Speed multiplier for simulation
            - 1.0 = real-time (1 sim second = 1 real second)
            - 2.0 = double speed (1 sim second = 0.5 real seconds)
            - 0.0 = no pacing (plain SimPy behavior)

    Example:
        >>> env = RealtimeEnvironment(speed_factor=4.0)
    """

    def __init__(self, speed_factor=1.0, initial_time=0):
        super().__init__(initial_time=initial_time)
        self.speed_factor = speed_factor
        self.real_start_time = time.monotonic()
        self.sim_start_time = self.now

    def step(self):
        """
        Process the next event, then sleep if simulated time is ahead of
        the scaled wall clock.
        """
        result = super().step()

        if self.speed_factor > 0:
            sim_elapsed = self.now - self.sim_start_time
            target_real_time = self.real_start_time + (sim_elapsed / self.speed_factor)
            sleep_time = target_real_time - time.monotonic()
            if sleep_time > 0:
                time.sleep(sleep_time)

        return result

    def set_speed(self, speed_factor):
        """
        Change pacing during a run. Timing references restart from now so
        the change does not cause a catch-up burst.
        """
        self.speed_factor = speed_factor
        self.real_start_time = time.monotonic()
        self.sim_start_time = self.now

    def get_speed(self):
        return self.speed_factor

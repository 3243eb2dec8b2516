import random
import sys

# Configuration
from config import load_simulation_config

# Controller
from controller.simulation_controller import SimulationController

# Presentation
from simulator.implementations.console_sink import ConsoleSink

# Analyzer
from analyzer.travel_statistics import TravelStatistics


def run_simulation(sim_config_path="scenarios/simulation/small_office.yaml",
                   log_path="simulation_log.jsonl",
                   diagram_path="trajectory_diagram.png"):
    """
    Set up and run a whole scenario

    Args:
        sim_config_path: Path to simulation configuration YAML file
        log_path: Where to write the JSON Lines event log (None to skip)
        diagram_path: Where to write the travel diagram (None to skip)
    """
    print("--- Loading Configuration ---")
    sim_config = load_simulation_config(sim_config_path)
    print(f"Simulation Config: {sim_config_path}")

    rng = random.Random(sim_config.random_seed)
    if sim_config.random_seed is not None:
        print(f"Random seed fixed to {sim_config.random_seed} for reproducible results")
    else:
        print("Random seed not set - results will vary")

    print("\n--- Simulation Setup ---")
    controller = SimulationController()
    stats = TravelStatistics()
    controller.add_listener(stats.on_message)
    controller.attach_sink(ConsoleSink(clock=lambda: controller.now))

    controller.configure_from(sim_config)

    stats.set_simulation_metadata({
        'config_file': sim_config_path,
        **sim_config.to_dict()['simulation']
    })

    env = controller.env
    env.process(scripted_call_generator(controller, sim_config.traffic.calls))
    if sim_config.traffic.call_rate > 0:
        env.process(random_call_generator(controller, sim_config.traffic.call_rate, rng))

    print("\n--- Simulation Start ---")
    controller.run(until=sim_config.traffic.duration)
    print("--- Simulation End ---")

    if log_path:
        stats.save_event_log(log_path)

    stats.print_call_metrics_summary()

    if diagram_path:
        stats.plot_trajectory_diagram(diagram_path, end_time=sim_config.traffic.duration)

    return stats


def scripted_call_generator(controller, calls):
    """Replay the scenario's fixed calls at their scheduled times"""
    env = controller.env
    for call in sorted(calls, key=lambda c: c.time):
        if call.time > env.now:
            yield env.timeout(call.time - env.now)
        controller.request_pickup(call.floor, call.direction)


def random_call_generator(controller, call_rate, rng):
    """
    Continuous random hall calls

    Args:
        call_rate: Calls per second (exponential inter-arrival times)
        rng: random.Random instance
    """
    env = controller.env
    building = controller.building
    print(f"--- Continuous Call Generation (Rate: {call_rate} calls/sec) ---")

    while True:
        yield env.timeout(rng.expovariate(call_rate))

        floor = rng.randrange(building.num_floors)
        directions = building.available_directions(floor)
        if not directions:
            # Single-floor building: no call buttons
            continue
        controller.request_pickup(floor, rng.choice(directions))


if __name__ == '__main__':
    # Accept command line argument for config file
    sim_config_path = sys.argv[1] if len(sys.argv) > 1 else "scenarios/simulation/small_office.yaml"
    run_simulation(sim_config_path=sim_config_path)

# main.py
import os
import psutil # For memory monitoring
import logging
import cProfile
import argparse

from config import config, ConfigurationError # Use the global config instance
from initial_conditions import InitialConditions, describe, prompt_initial_conditions, sanitize
from physics_utils import Vector2D
from simulation import GravitySimulation
from visualization import Visualization


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interactive two-body gravity simulator.")
    parser.add_argument("--mu", type=float, help="Gravitational parameter of the central body.")
    parser.add_argument("--position", type=float, nargs=2, metavar=("X", "Y"), help="Initial position r0.")
    parser.add_argument("--velocity", type=float, nargs=2, metavar=("VX", "VY"), help="Initial velocity v0.")
    parser.add_argument(
        "--no-prompt",
        action="store_true",
        help="Do not ask for initial values on the console; use defaults for anything not given."
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Enable profiling. Statistics will be saved to 'simulation_profile.prof'."
    )
    return parser


def resolve_initial_conditions(args, input_func=input) -> InitialConditions:
    """Combines command line values, console prompts and defaults into sanitized initial conditions.

    If none of `--mu`, `--position`, `--velocity` is given and `--no-prompt` is not set,
    all three values are asked for interactively. Otherwise missing values fall back
    to the configured defaults.
    """
    if args.mu is None and args.position is None and args.velocity is None and not args.no_prompt:
        return prompt_initial_conditions(input_func)

    defaults = InitialConditions.default()
    conditions = InitialConditions(
        mu=args.mu if args.mu is not None else defaults.mu,
        position=Vector2D.from_iterable(args.position) if args.position is not None else defaults.position,
        velocity=Vector2D.from_iterable(args.velocity) if args.velocity is not None else defaults.velocity,
    )
    return sanitize(conditions)


def run(simulation: GravitySimulation, visualization: Visualization):
    """Main loop: events, physics sub-steps, render, periodic memory logging.

    Returns immediately if the window could not be created, and stops if the
    display is lost while running.
    """
    if not visualization.visualization_enabled:
        logging.error("Display is unavailable; the simulator window could not be opened. Exiting.")
        print("ERROR: could not open the simulator window. Check logs for details.")
        return

    process = psutil.Process(os.getpid())
    frames = 0
    while visualization.visualization_enabled:
        if not visualization.handle_events(simulation):
            break
        simulation.advance_frame()
        visualization.render(simulation)

        frames += 1
        if frames % config.Debug.MEMORY_CHECK_INTERVAL_FRAMES == 0:
            rss_mb = process.memory_info().rss / (1024 * 1024)
            logging.info(f"Frame {frames}: memory usage {rss_mb:.1f} MB, {simulation.hud_text()}")
    logging.info(f"Main loop finished after {frames} frames at t={simulation.state.elapsed_time:.3f}.")


def main(argv=None):
    """Entry point of the gravity simulator.

    1.  Parses command line arguments.
    2.  Obtains mu, r0 and v0 from the command line or the console, then sanitizes them
        (mu clamped to its valid range, degenerate r0 replaced by the default).
    3.  Creates the `GravitySimulation` session and the pygame `Visualization`.
    4.  Runs the loop until the window is closed.
    5.  If `--profile` was given, dumps cProfile statistics to `simulation_profile.prof`.

    `ConfigurationError` and unexpected errors are logged as critical and reported
    on the console.
    """
    args = build_arg_parser().parse_args(argv)

    profiler = None
    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        logging.info("cProfile profiling enabled. Output will be saved to simulation_profile.prof upon completion.")

    visualization = None
    try:
        conditions = resolve_initial_conditions(args)
        print(describe(conditions))
        simulation = GravitySimulation(conditions)
        visualization = Visualization()
        run(simulation, visualization)
    except ConfigurationError as e_config_main:
        logging.critical(f"Simulation could not be initialized or run due to a ConfigurationError: {e_config_main}", exc_info=True)
        print(f"FATAL CONFIGURATION ERROR: {e_config_main}. Simulation cannot start. Check logs for details.")
    except Exception as e_main:
        logging.critical(f"An unexpected critical error occurred in the main simulation execution block: {e_main}", exc_info=True)
        print(f"FATAL UNEXPECTED ERROR: {e_main}. Simulation terminated. Check logs for details.")
    finally:
        if visualization is not None:
            visualization.close()
        if profiler:
            profiler.disable()
            stats_file = "simulation_profile.prof"
            try:
                profiler.dump_stats(stats_file)
                logging.info(f"Profiling data successfully saved to {stats_file}")
            except OSError as e_profile_dump:
                logging.error(f"Failed to save profiling data to {stats_file}: {e_profile_dump}", exc_info=True)
        logging.info("Gravity simulator terminated.")


if __name__ == "__main__":
    main()

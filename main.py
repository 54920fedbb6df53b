# main.py
"""
Main entry point for the Dots visual.

This script orchestrates the whole lifecycle:
1. Loads the optional configuration from `config.json`.
2. Initializes the logging system.
3. Opens the window and sets up the particles, simulation and renderer.
4. Runs the update/draw loop.
5. Handles clean shutdown.
"""
import logging
import sys
from utils import setup_logging, load_config_or_defaults, validate_config, config_int, config_float
import cProfile
import pstats
import io

CONFIG_PATH = 'config.json'


def main() -> int:
    """
    Runs the visual. Returns the process exit code.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config_or_defaults(CONFIG_PATH)
    except Exception as e:
        print(f"FATAL: Could not load {CONFIG_PATH}. Error: {e}")
        return 1

    setup_logging(config)
    validate_config(config)

    logging.info("--- Dots Starting ---")

    sim_params = config.get('simulation_parameters', {})
    render_params = config.get('rendering', {})
    run_params = config.get('run_control', {})

    import pygame
    from constants import TICKS_PER_SECOND, QUIT_KEY, LOG_THROTTLE_TICKS
    from game import Game, run_game
    from particle import ParticleSystem
    from renderer import ProximityRenderer
    from simulation import Simulation
    from visualization import PygameHost

    # --- Component Initialization ---
    # 1. The host owns the window and decides the screen dimensions.
    try:
        host = PygameHost(render_params)
    except pygame.error as e:
        logging.critical(f"Could not create the window: {e}")
        return 1

    try:
        # 2. Build the core against the host's dimensions.
        particles = ParticleSystem(sim_params, host.width, host.height)
        sim = Simulation(particles, sim_params, host.width, host.height)
        renderer = ProximityRenderer.from_params(render_params)
        game = Game(host, particles, sim, renderer, quit_key=run_params.get('quit_key', QUIT_KEY))

        profiler = cProfile.Profile() if run_params.get('profile', True) else None

        if profiler:
            profiler.enable()
        run_game(
            game, host,
            ticks_per_second=config_float(run_params, 'ticks_per_second', TICKS_PER_SECOND),
            max_steps=config_int(run_params, 'max_steps', 0),
            log_throttle=config_int(run_params, 'log_throttle_ticks', LOG_THROTTLE_TICKS),
        )
        if profiler:
            profiler.disable()
    finally:
        host.close()
    logging.info("Game loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Dots Shutting Down ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())

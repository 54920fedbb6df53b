# game.py
"""
Update/draw pairing and the fixed-step loop that drives it.

The loop runs simulation ticks at a fixed rate independent of the frame
rate: each frame adds the elapsed wall time to an accumulator and runs
as many ticks as fit, then draws once. Drawing only ever reads the
latest state, so zero, one or several ticks between frames are all fine.
"""
import logging
from typing import TYPE_CHECKING

from constants import QUIT_KEY, TICKS_PER_SECOND, MAX_TICKS_PER_FRAME, LOG_THROTTLE_TICKS
from particle import ParticleSystem
from renderer import ProximityRenderer
from simulation import Simulation

if TYPE_CHECKING:
    from visualization import Host

# --- Data Contracts ---
#
# class Game:
#   - update(self) -> bool:
#     - Outputs: False when the quit key is pressed (termination), True
#       otherwise.
#     - Side Effects: Advances the simulation by one tick unless terminating.
#   - draw(self) -> None:
#     - Side Effects: Renders the current state through the host.
#
# run_game(game, host, ticks_per_second, max_steps=0, log_throttle=...) -> int:
#   - Outputs: number of ticks executed.
#   - Invariants: at most MAX_TICKS_PER_FRAME ticks between two draws.


class Game:
    """Binds the simulation and the renderer to a host."""

    def __init__(self, host: "Host", particles: ParticleSystem, simulation: Simulation,
                 renderer: ProximityRenderer, quit_key: str = QUIT_KEY):
        self.host = host
        self.particles = particles
        self.simulation = simulation
        self.renderer = renderer
        self.quit_key = quit_key

    def update(self) -> bool:
        if self.host.is_key_pressed(self.quit_key):
            logging.info(f"'{self.quit_key}' key pressed. Requesting termination.")
            return False
        self.simulation.step()
        return True

    def draw(self) -> None:
        self.renderer.draw(self.host, self.particles)


def run_game(game: Game, host, ticks_per_second: float = TICKS_PER_SECOND,
             max_steps: int = 0, log_throttle: int = LOG_THROTTLE_TICKS) -> int:
    """
    Runs the loop until termination, window close or `max_steps` ticks
    (0 means no limit).
    """
    if ticks_per_second <= 0:
        msg = f"Configuration error: ticks_per_second must be positive, got {ticks_per_second}."
        logging.critical(msg)
        raise ValueError(msg)
    if max_steps < 0:
        msg = f"Configuration error: max_steps must be >= 0, got {max_steps}."
        logging.critical(msg)
        raise ValueError(msg)

    tick_interval = 1.0 / ticks_per_second
    accumulator = 0.0
    step_num = 0

    logging.info(f"Game loop starting at {ticks_per_second} ticks per second.")
    while host.process_events():
        accumulator += host.tick()

        ticks_this_frame = 0
        while accumulator >= tick_interval and ticks_this_frame < MAX_TICKS_PER_FRAME:
            if not game.update():
                logging.info(f"Game loop terminated after {step_num} ticks.")
                return step_num
            host.record_tick()
            accumulator -= tick_interval
            ticks_this_frame += 1
            step_num += 1

            # Hot loops must throttle logs
            if log_throttle and step_num % log_throttle == 0:
                logging.info(
                    f"Tick {step_num} | FPS {host.actual_fps():.1f} | TPS {host.actual_tps():.1f}"
                )
                logging.debug(
                    f"Tick {step_num} | Lines: {game.renderer.last_pair_lines} between particles, "
                    f"{game.renderer.last_cursor_lines} to cursor"
                )

            if max_steps and step_num >= max_steps:
                logging.info(f"Reached max_steps ({max_steps}). Stopping.")
                return step_num

        if ticks_this_frame == MAX_TICKS_PER_FRAME and accumulator >= tick_interval:
            logging.debug(f"Dropping {accumulator:.3f}s of tick backlog.")
            accumulator = 0.0

        host.begin_frame()
        game.draw()
        host.present()

    logging.info(f"Window closed after {step_num} ticks.")
    return step_num

# simulation.py
"""
Handles the motion of the particles.

This module defines the Simulation class, which advances the particle
system by one tick: every particle moves along its heading at a constant
speed and reverses the heading component of any axis whose bound it has
crossed.
"""
import logging
import numpy as np
from typing import Dict, Any
from particle import ParticleSystem
from constants import SPEED
from utils import config_float
from vector import add

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, particles: ParticleSystem, params: Dict[str, Any],
#              width: int, height: int):
#     - Inputs:
#       - particles: An initialized ParticleSystem object.
#       - params: Dictionary of simulation parameters from config.json.
#         - "speed": float (optional, defaults to SPEED)
#       - width, height: bounds of the screen rectangle.
#     - Side Effects: Stores references to particles and parameters.
#
#   - step(self) -> None:
#     - Side Effects: Modifies particles.positions and particles.directions
#       in place. Increments self.tick.
#     - Invariants: Particle count and order remain constant. Direction
#       components only ever change sign. Positions are not clamped: a
#       particle may sit up to one step outside the rectangle for a single
#       tick, with its heading already reversed.


class Simulation:
    """
    Moves the particles and bounces them off the screen edges.
    """
    def __init__(self, particles: ParticleSystem, params: Dict[str, Any], width: int, height: int):
        self.particles = particles
        self.speed = config_float(params, 'speed', SPEED)
        self.bounds = np.array([width, height], dtype=np.float64)
        self.tick = 0

        if self.speed < 0:
            msg = f"Configuration error: speed must be >= 0, got {self.speed}."
            logging.critical(msg)
            raise ValueError(msg)

        logging.info(f"Simulation initialized: speed {self.speed}, bounds {width}x{height}.")

    def step(self):
        """
        Executes one tick of the simulation.
        """
        positions = self.particles.positions
        directions = self.particles.directions

        # 1. Move every particle along its heading
        positions[:] = add(positions, directions * self.speed)

        # 2. Reverse the heading on each axis whose bound was crossed.
        #    The check runs on the already-moved position, so the particle
        #    overshoots by at most one step and turns back on the next tick.
        outside = (positions < 0.0) | (positions > self.bounds)
        directions[outside] *= -1.0

        self.tick += 1

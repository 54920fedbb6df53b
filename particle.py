# particle.py
"""
Manages the state of all particles in the visual.

This module defines the ParticleSystem class, which is responsible for
initializing and storing particle data (position and heading) in
NumPy arrays.
"""
import logging
import numpy as np
from typing import Dict, Any, Optional

from constants import POINTS_COUNT
from utils import config_int
from vector import normalize

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, params: Dict[str, Any], width: int, height: int,
#              rng: Optional[np.random.Generator] = None):
#     - Inputs:
#       - params: Dictionary of simulation parameters from config.json.
#         - "particle_count": int (optional, defaults to POINTS_COUNT)
#         - "seed": Optional[int]
#       - width, height: int, size of the screen rectangle.
#       - rng: optional generator, overrides the seed.
#     - Side Effects: Initializes internal NumPy arrays for particle state.
#     - Invariants:
#       - self.positions is a NumPy array of shape (N, 2) of dtype float64.
#       - self.directions is a NumPy array of shape (N, 2) of dtype float64,
#         every row of unit length.
#
#   - from_arrays(positions, directions) -> ParticleSystem:
#     - Builds a system from explicit state, used for scripted scenes and tests.


def random_directions(rng: np.random.Generator, count: int) -> np.ndarray:
    """
    Samples `count` unit headings.

    Both components are drawn from [-1, 1] and the result is normalized.
    Sampling the square rather than the disk favours the diagonals.
    """
    raw = rng.uniform(low=-1.0, high=1.0, size=(count, 2))
    return normalize(raw) if count else raw


class ParticleSystem:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(self, params: Dict[str, Any], width: int, height: int,
                 rng: Optional[np.random.Generator] = None):
        self.particle_count = config_int(params, 'particle_count', POINTS_COUNT)
        self.seed = params.get('seed')

        if self.particle_count < 0:
            msg = f"Configuration error: particle_count must be >= 0, got {self.particle_count}."
            logging.critical(msg)
            raise ValueError(msg)
        if width <= 0 or height <= 0:
            msg = f"Configuration error: screen size must be positive, got {width}x{height}."
            logging.critical(msg)
            raise ValueError(msg)

        # All randomness comes from a single generator so a seed reproduces a run.
        self.rng = rng if rng is not None else np.random.default_rng(self.seed)

        # Whole pixel coordinates, stored as floats.
        self.positions = self.rng.integers(
            low=[0, 0],
            high=[width, height],
            size=(self.particle_count, 2)
        ).astype(np.float64)
        self.directions = random_directions(self.rng, self.particle_count)

        logging.info(f"ParticleSystem initialized with {self.particle_count} particles.")
        logging.debug(
            f"Particle data arrays created. "
            f"Positions shape: {self.positions.shape}, "
            f"Directions shape: {self.directions.shape}"
        )

    @classmethod
    def from_arrays(cls, positions, directions) -> "ParticleSystem":
        """Creates a system holding exactly the given positions and directions."""
        positions = np.array(positions, dtype=np.float64).reshape(-1, 2)
        directions = np.array(directions, dtype=np.float64).reshape(-1, 2)
        if positions.shape != directions.shape:
            raise ValueError(
                f"positions {positions.shape} and directions {directions.shape} must have the same shape."
            )
        system = cls.__new__(cls)
        system.particle_count = positions.shape[0]
        system.seed = None
        system.rng = np.random.default_rng()
        system.positions = positions
        system.directions = directions
        return system

    def __len__(self) -> int:
        return self.particle_count

# renderer.py
"""
Draws the particles and the lines that connect nearby ones.

The renderer only talks to the host through the `Host` interface, so it
can run against a real pygame window or a recording fake in tests. Which
pairs get tested and how thick each line is are both pluggable:

- Pair strategies decide which particle pairs are candidates.
- Stroke policies map a distance to a line width.
"""
import logging
import numpy as np
from numba import jit
from typing import Any, Callable, Dict, Optional, Tuple

from constants import (
    CONNECT_DISTANCE, CURSOR_EXTRA_DISTANCE, DOT_RADIUS, PAIR_WINDOW,
    PAIR_STRATEGY, STROKE_POLICY, LINEAR_FALLOFF_SCALE,
    LINEAR_FALLOFF_MAX_WIDTH, INVERSE_DISTANCE_FACTOR,
    INVERSE_DISTANCE_MAX_WIDTH, MIN_STROKE_DISTANCE, DOT_COLOR, LINE_COLOR,
    TEXT_POSITION
)
from particle import ParticleSystem
from utils import check_int, config_int, config_float
from vector import distance, length

# Forward reference for type hinting to avoid circular import
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from visualization import Host


# --- Data Contracts ---
#
# StrokePolicy = Callable[[np.ndarray, float], np.ndarray]
#   - Inputs: distances (any shape), connection threshold.
#   - Outputs: widths of the same shape, clamped to the policy's range.
#
# class ExhaustivePairs / WindowedPairs:
#   - find(self, positions: np.ndarray, threshold: float)
#       -> Tuple[np.ndarray, np.ndarray, np.ndarray]
#     - Outputs: (first, second, distances). first/second index rows of
#       `positions`; every returned distance is < threshold.
#
# class ProximityRenderer:
#   - draw(self, host: Host, particles: ParticleSystem) -> None:
#     - Side Effects: Issues draw calls on the host. Never modifies the
#       particle arrays. Updates last_pair_lines / last_cursor_lines.


# --- Stroke Policies ---

def linear_falloff_width(distances, threshold: float):
    """
    |d / 100 - 1|, capped at 0.5.

    Lines fade out as the pair separates; at the threshold the width is
    near zero. The threshold itself is not used.
    """
    distances = np.maximum(np.asarray(distances, dtype=np.float64), MIN_STROKE_DISTANCE)
    return np.minimum(np.abs(distances / LINEAR_FALLOFF_SCALE - 1.0), LINEAR_FALLOFF_MAX_WIDTH)


def inverse_distance_width(distances, threshold: float):
    """(threshold / d) * 0.2, capped at 1.0."""
    distances = np.maximum(np.asarray(distances, dtype=np.float64), MIN_STROKE_DISTANCE)
    return np.minimum(threshold / distances * INVERSE_DISTANCE_FACTOR, INVERSE_DISTANCE_MAX_WIDTH)


STROKE_POLICIES: Dict[str, Callable] = {
    "linear_falloff": linear_falloff_width,
    "inverse_distance": inverse_distance_width,
}


# --- Pair Search ---

@jit(nopython=True)
def _find_pairs_numba(positions, threshold, window):
    """
    Numba-jitted pair search.

    Tests every pair (i, j) with i < j < i + window, or every pair with
    i < j when window is 0. Returns the index pairs closer than
    `threshold` together with their distances.
    """
    n = positions.shape[0]
    max_pairs = n * (n - 1) // 2
    # Each particle tests at most window - 1 successors.
    if window > 0:
        max_pairs = min(max_pairs, n * (window - 1))
    first = np.empty(max_pairs, dtype=np.int64)
    second = np.empty(max_pairs, dtype=np.int64)
    distances = np.empty(max_pairs, dtype=np.float64)
    count = 0

    for i in range(n):
        stop = n
        if window > 0 and i + window < n:
            stop = i + window
        for j in range(i + 1, stop):
            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            dist = np.sqrt(dx * dx + dy * dy)
            if dist < threshold:
                first[count] = i
                second[count] = j
                distances[count] = dist
                count += 1

    return first[:count], second[:count], distances[:count]


class ExhaustivePairs:
    """Tests all N*(N-1)/2 pairs."""

    name = "exhaustive"

    def find(self, positions: np.ndarray, threshold: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        return _find_pairs_numba(np.ascontiguousarray(positions, dtype=np.float64), float(threshold), 0)


class WindowedPairs:
    """
    Tests each particle only against its next neighbours by distance to
    the origin.

    Particles are ordered by their distance to (0, 0) and particle i of
    that order is tested against particles i+1 .. i+window-1. Two
    particles that are close together but lie at very different
    distances from the origin (e.g. near opposite ends of the same arc)
    can be missed. This is an accepted approximation of the full search.

    The order is recomputed on every call and never written back to the
    particle arrays; returned indices refer to the caller's rows.
    """

    name = "windowed"

    def __init__(self, window: int = PAIR_WINDOW):
        window = check_int('pair_window', window)
        if window < 2:
            msg = f"Configuration error: pair window must be >= 2, got {window}."
            logging.critical(msg)
            raise ValueError(msg)
        self.window = window

    def order(self, positions: np.ndarray) -> np.ndarray:
        """Row indices sorted by distance to the origin."""
        return np.argsort(length(positions), kind="stable")

    def find(self, positions: np.ndarray, threshold: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        order = self.order(positions)
        sorted_positions = np.ascontiguousarray(positions[order], dtype=np.float64)
        first, second, distances = _find_pairs_numba(sorted_positions, float(threshold), self.window)
        return order[first], order[second], distances


def make_pair_strategy(name: str, window: int = PAIR_WINDOW):
    """Builds a pair strategy from its configuration name."""
    if name == ExhaustivePairs.name:
        return ExhaustivePairs()
    if name == WindowedPairs.name:
        return WindowedPairs(window)
    msg = f"Configuration error: unknown pair strategy '{name}'."
    logging.critical(msg)
    raise ValueError(msg)


def get_stroke_policy(name: str) -> Callable:
    try:
        return STROKE_POLICIES[name]
    except KeyError:
        msg = (
            f"Configuration error: unknown stroke policy '{name}'. "
            f"Expected one of {sorted(STROKE_POLICIES)}."
        )
        logging.critical(msg)
        raise ValueError(msg) from None


class ProximityRenderer:
    """
    Renders particles, their connections and the cursor connections.
    """
    def __init__(self, pair_strategy=None, stroke_policy: Optional[Callable] = None,
                 threshold: float = CONNECT_DISTANCE,
                 cursor_extra: float = CURSOR_EXTRA_DISTANCE,
                 dot_radius: float = DOT_RADIUS):
        self.pair_strategy = pair_strategy if pair_strategy is not None else make_pair_strategy(PAIR_STRATEGY)
        self.stroke_policy = stroke_policy if stroke_policy is not None else get_stroke_policy(STROKE_POLICY)
        self.threshold = float(threshold)
        self.cursor_extra = float(cursor_extra)
        self.dot_radius = float(dot_radius)
        self.last_pair_lines = 0
        self.last_cursor_lines = 0

        if self.threshold <= 0:
            msg = f"Configuration error: connect distance must be positive, got {self.threshold}."
            logging.critical(msg)
            raise ValueError(msg)

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> "ProximityRenderer":
        """Builds a renderer from the `rendering` section of config.json."""
        renderer = cls(
            pair_strategy=make_pair_strategy(
                params.get('pair_strategy', PAIR_STRATEGY),
                config_int(params, 'pair_window', PAIR_WINDOW)
            ),
            stroke_policy=get_stroke_policy(params.get('stroke_policy', STROKE_POLICY)),
            threshold=config_float(params, 'connect_distance', CONNECT_DISTANCE),
            cursor_extra=config_float(params, 'cursor_extra_distance', CURSOR_EXTRA_DISTANCE),
            dot_radius=config_float(params, 'dot_radius', DOT_RADIUS),
        )
        logging.info(
            f"ProximityRenderer initialized: strategy '{renderer.pair_strategy.name}', "
            f"stroke policy '{params.get('stroke_policy', STROKE_POLICY)}', "
            f"connect distance {renderer.threshold}."
        )
        return renderer

    def draw(self, host: "Host", particles: ParticleSystem) -> None:
        """
        Draws one frame of the current particle state.
        """
        positions = particles.positions

        # 1. Dots
        for x, y in positions:
            host.draw_circle((x, y), self.dot_radius, DOT_COLOR)

        # 2. Particle to particle lines
        first, second, distances = self.pair_strategy.find(positions, self.threshold)
        widths = self.stroke_policy(distances, self.threshold)
        for i, j, width in zip(first, second, widths):
            host.draw_line(tuple(positions[i]), tuple(positions[j]), float(width), LINE_COLOR)
        self.last_pair_lines = len(first)

        # 3. Particle to cursor lines, always tested for every particle
        self.last_cursor_lines = 0
        cursor = host.cursor_position()
        if cursor is not None and len(positions):
            cursor_pos = np.array(cursor, dtype=np.float64)
            cursor_distances = distance(positions, cursor_pos)
            near = np.nonzero(cursor_distances < self.threshold + self.cursor_extra)[0]
            widths = self.stroke_policy(cursor_distances[near], self.threshold)
            for i, width in zip(near, widths):
                host.draw_line(tuple(positions[i]), tuple(cursor_pos), float(width), LINE_COLOR)
            self.last_cursor_lines = len(near)

        # 4. Frame and tick rate readout
        host.draw_text(
            f"FPS: {int(host.actual_fps())}, TPS: {int(host.actual_tps())}",
            TEXT_POSITION
        )

"""Pytest fixtures for all tests."""

import os

# Pygame must pick the headless drivers before it is first imported.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from particle import ParticleSystem
from simulation import Simulation


class FakeHost:
    """Records draw calls and serves scripted input."""

    def __init__(self, width=200, height=100, cursor=None, pressed=(), frames=1, frame_time=1.0 / 60):
        self.width = width
        self.height = height
        self.cursor = cursor
        self.pressed = set(pressed)
        self.frames_left = frames
        self.frame_time = frame_time
        self.circles = []
        self.lines = []
        self.texts = []
        self.ticks_recorded = 0
        self.frames_presented = 0

    def is_key_pressed(self, name):
        return name in self.pressed

    def cursor_position(self):
        return self.cursor

    def draw_circle(self, center, radius, color):
        self.circles.append((center, radius, color))

    def draw_line(self, start, end, width, color):
        self.lines.append((start, end, width, color))

    def draw_text(self, text, position):
        self.texts.append((text, position))

    def actual_fps(self):
        return 59.7

    def actual_tps(self):
        return 60.2

    def process_events(self):
        if self.frames_left <= 0:
            return False
        self.frames_left -= 1
        return True

    def tick(self):
        return self.frame_time

    def record_tick(self):
        self.ticks_recorded += 1

    def begin_frame(self):
        self.circles.clear()
        self.lines.clear()
        self.texts.clear()

    def present(self):
        self.frames_presented += 1


@pytest.fixture
def fake_host():
    """Create a recording host with no cursor."""
    return FakeHost()


@pytest.fixture
def particles():
    """Create a seeded particle system."""
    return ParticleSystem({"particle_count": 50, "seed": 1234}, width=200, height=100)


@pytest.fixture
def simulation(particles):
    """Create a simulation over the seeded particles."""
    return Simulation(particles, {"speed": 0.3}, width=200, height=100)


def make_particles(positions, directions=None):
    """Build a particle system from explicit positions."""
    positions = np.array(positions, dtype=np.float64)
    if directions is None:
        directions = np.tile([1.0, 0.0], (len(positions), 1))
    return ParticleSystem.from_arrays(positions, directions)

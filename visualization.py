# visualization.py
"""
Host framework for the visual, backed by Pygame.

The rest of the program only depends on the `Host` protocol defined
here. `PygameHost` owns the window, input polling, the draw primitives
and the frame/tick rate counters.
"""
import logging
import time
from collections import deque
from typing import Optional, Protocol, Sequence, Tuple

import pygame

from constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, WINDOW_TITLE, VSYNC, MAX_FPS,
    BACKGROUND_COLOR, TEXT_COLOR, FONT_SIZE
)
from utils import config_int

Point = Tuple[float, float]
Color = Sequence[int]


# --- Data Contracts ---
#
# class Host (Protocol):
#   - width, height: int, size of the drawable surface.
#   - is_key_pressed(name: str) -> bool
#   - cursor_position() -> Optional[Point], None when the pointer is not
#     over the window.
#   - draw_circle / draw_line / draw_text: draw primitives.
#   - actual_fps() / actual_tps() -> float: instrumentation counters.
#   - process_events() -> bool: False once the window is closed.
#   - tick() -> float: waits for the frame cap, returns seconds elapsed.
#   - record_tick(), begin_frame(), present(): loop bookkeeping.
#
# class PygameHost:
#   - __init__(self, params: Optional[dict] = None):
#     - Inputs: the `rendering` section of config.json.
#     - Side Effects: Initializes Pygame and creates a display surface.
#       Raises pygame.error if no window can be created.


class Host(Protocol):
    width: int
    height: int

    def is_key_pressed(self, name: str) -> bool: ...

    def cursor_position(self) -> Optional[Point]: ...

    def draw_circle(self, center: Point, radius: float, color: Color) -> None: ...

    def draw_line(self, start: Point, end: Point, width: float, color: Color) -> None: ...

    def draw_text(self, text: str, position: Point) -> None: ...

    def actual_fps(self) -> float: ...

    def actual_tps(self) -> float: ...


class TickRateMeter:
    """Counts events over a rolling one second window."""

    def __init__(self, window: float = 1.0, clock=time.perf_counter):
        self.window = window
        self.clock = clock
        self._stamps = deque()

    def record(self) -> None:
        now = self.clock()
        self._stamps.append(now)
        self._trim(now)

    def rate(self) -> float:
        self._trim(self.clock())
        return len(self._stamps) / self.window

    def _trim(self, now: float) -> None:
        while self._stamps and now - self._stamps[0] > self.window:
            self._stamps.popleft()


def scale_color(color: Color, factor: float) -> Tuple[int, int, int]:
    """Darkens `color` toward black by `factor` in [0, 1]."""
    factor = min(max(factor, 0.0), 1.0)
    return tuple(int(round(channel * factor)) for channel in color[:3])


class PygameHost:
    """
    Window, input and drawing through Pygame.
    """
    def __init__(self, params: Optional[dict] = None):
        params = params if params is not None else {}
        self.width = config_int(params, 'screen_width', SCREEN_WIDTH)
        self.height = config_int(params, 'screen_height', SCREEN_HEIGHT)
        self.max_fps = config_int(params, 'max_fps', MAX_FPS)
        vsync = bool(params.get('vsync', VSYNC))

        pygame.init()
        pygame.font.init()

        # vsync is only honoured by pygame with the SCALED or OPENGL flags;
        # requesting it without them raises, so it is passed only when asked for.
        if vsync:
            self.screen = pygame.display.set_mode((self.width, self.height), pygame.SCALED, vsync=1)
        else:
            self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(params.get('window_title', WINDOW_TITLE))

        self.clock = pygame.time.Clock()
        self.tick_meter = TickRateMeter()
        self.font = pygame.font.SysFont(None, FONT_SIZE)
        self.background = pygame.Color(BACKGROUND_COLOR)

        logging.info(f"PygameHost initialized with Pygame display ({self.width}x{self.height}), vsync {vsync}.")

    # --- Input ---

    def process_events(self) -> bool:
        """Drains the event queue. Returns False once the window is closed."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down host.")
                return False
        return True

    def is_key_pressed(self, name: str) -> bool:
        return bool(pygame.key.get_pressed()[pygame.key.key_code(name)])

    def cursor_position(self) -> Optional[Point]:
        if not pygame.mouse.get_focused():
            return None
        x, y = pygame.mouse.get_pos()
        return float(x), float(y)

    # --- Timing ---

    def tick(self) -> float:
        return self.clock.tick(self.max_fps) / 1000.0

    def record_tick(self) -> None:
        self.tick_meter.record()

    def actual_fps(self) -> float:
        return self.clock.get_fps()

    def actual_tps(self) -> float:
        return self.tick_meter.rate()

    # --- Drawing ---

    def begin_frame(self) -> None:
        self.screen.fill(self.background)

    def present(self) -> None:
        pygame.display.flip()

    def draw_circle(self, center: Point, radius: float, color: Color) -> None:
        pygame.draw.circle(self.screen, color, center, radius)

    def draw_line(self, start: Point, end: Point, width: float, color: Color) -> None:
        """
        Draws a line of possibly fractional width.

        Pygame cannot rasterize lines thinner than a pixel, so those are
        drawn as one pixel anti-aliased lines dimmed by the width.
        """
        if width <= 0:
            return
        if width < 1.0:
            pygame.draw.aaline(self.screen, scale_color(color, width), start, end)
        else:
            pygame.draw.line(self.screen, color, start, end, int(round(width)))

    def draw_text(self, text: str, position: Point) -> None:
        surface = self.font.render(text, True, TEXT_COLOR)
        self.screen.blit(surface, position)

    def close(self):
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()

#!/usr/bin/env python3
"""
Simulation driver shared by the viewport and the control panel.

SimulationController owns one BodyCollection and is the only thing that
mutates it. The renderer thread calls tick() once per frame; the UI thread
calls the setters. Every access goes through a re-entrant lock, so physics
always runs on one thread at a time.
"""
import logging
import threading
from typing import List, NamedTuple, Optional, Tuple

from .constants import DEFAULT_SPEED, DEFAULT_TRAIL_LENGTH, MAX_SPEED
from .data_models import Body, BodySnapshot, BodyStyle, validate_trail_capacity
from .errors import InvalidArgument
from .physics import BodyCollection
from .presets import load_preset
from .vector_utils import Vector2

logger = logging.getLogger("gravsim")


class FrameState(NamedTuple):
    bodies: List[BodySnapshot]
    center_of_mass: Optional[Tuple[float, float]]
    selected_index: Optional[int]
    playing: bool
    speed: int
    frame: int


class SimulationController:
    """
    Shared state between UI thread (Dear PyGui) and rendering thread (Pygame).
    Includes thread-safe operations guarded by a lock.
    """

    def __init__(self, speed: int = DEFAULT_SPEED, trail_length: int = DEFAULT_TRAIL_LENGTH, rng=None):
        self.lock = threading.RLock()
        self.collection = BodyCollection(rng=rng)
        self.running = True  # app running
        self.playing = False  # simulation running
        self.speed = self._check_speed(speed)
        self.trail_length = validate_trail_capacity(trail_length)
        self.show_trails = True
        self.show_center_of_mass = True
        self.selected_index: Optional[int] = None
        self.frame = 0

    @staticmethod
    def _check_speed(n) -> int:
        if isinstance(n, bool) or not isinstance(n, int) or n < 0 or n > MAX_SPEED:
            raise InvalidArgument(f"Invalid speed {n!r} (allowed 0..{MAX_SPEED} steps per frame)")
        return n

    # -----------------------
    # Animation loop
    # -----------------------

    def set_speed(self, n: int) -> None:
        n = self._check_speed(n)
        with self.lock:
            self.speed = n

    def calculate(self) -> None:
        """Advance the collection by `speed` steps."""
        with self.lock:
            self.collection.run_steps(self.speed)

    def tick(self) -> bool:
        """One animation frame. Returns True when the simulation advanced."""
        with self.lock:
            if not self.playing:
                return False
            self.calculate()
            self.frame += 1
            return True

    def step_once(self) -> None:
        with self.lock:
            self.collection.step()

    def start(self) -> None:
        with self.lock:
            self.playing = True
        logger.info("Simulation started")

    def stop(self) -> None:
        with self.lock:
            self.playing = False
        logger.info("Simulation stopped")

    def toggle(self) -> bool:
        with self.lock:
            if self.playing:
                self.stop()
            else:
                self.start()
            return self.playing

    # -----------------------
    # Trails
    # -----------------------

    def set_trail_length(self, n: int) -> None:
        with self.lock:
            self.collection.set_trail_capacity(n)
            self.trail_length = n

    def clear_trails(self) -> None:
        with self.lock:
            for b in self.collection:
                b.trail.clear()

    # -----------------------
    # Bodies
    # -----------------------

    def add_body(self, mass: float, x: float, y: float, momentum_x: float = 0.0, momentum_y: float = 0.0) -> Body:
        with self.lock:
            body = self.collection.add_body(mass, (x, y), (momentum_x, momentum_y))
            body.set_trail_capacity(self.trail_length)
            self.selected_index = len(self.collection) - 1
            return body

    def delete_selected(self) -> Optional[Body]:
        with self.lock:
            if self.selected_index is None:
                return None
            body = self.collection.remove_body(self.selected_index)
            if not len(self.collection):
                self.selected_index = None
            else:
                self.selected_index = min(self.selected_index, len(self.collection) - 1)
            return body

    def select_body_at(self, world_pos: Tuple[float, float], pick_radius: float) -> Optional[int]:
        with self.lock:
            target = Vector2.of(world_pos)
            idx = None
            min_d = float("inf")
            for i, b in enumerate(self.collection):
                d = b.position.distance(target)
                # Use larger of visual radius and pick_radius for usability
                pr = max(b.radius, pick_radius)
                if d < pr and d < min_d:
                    min_d = d
                    idx = i
            self.selected_index = idx
            return idx

    def get_selected_body(self) -> Optional[Body]:
        with self.lock:
            if self.selected_index is not None and 0 <= self.selected_index < len(self.collection):
                return self.collection.body(self.selected_index)
            return None

    def get_selected_style(self) -> Optional[BodyStyle]:
        with self.lock:
            if self.selected_index is not None and 0 <= self.selected_index < len(self.collection):
                return self.collection.style(self.selected_index)
            return None

    def _require_selected(self) -> int:
        if self.get_selected_body() is None:
            raise InvalidArgument("No body selected")
        return self.selected_index

    def set_selected_color(self, i: int) -> None:
        with self.lock:
            self.collection.style(self._require_selected()).set_color_index(i)

    def set_selected_trail_thickness(self, pixels: float) -> None:
        with self.lock:
            self.collection.style(self._require_selected()).set_trail_thickness(pixels)

    def set_selected_position(self, x: float, y: float) -> None:
        with self.lock:
            self.collection.body(self._require_selected()).position = Vector2(x, y)

    def set_selected_momentum(self, mx: float, my: float) -> None:
        with self.lock:
            self.collection.body(self._require_selected()).momentum = Vector2(mx, my)

    def load_preset(self, name: str) -> int:
        """Replace every body with a built-in scene. Returns the body count."""
        seeds = load_preset(name)
        with self.lock:
            self.collection.clear()
            for seed in seeds:
                body = self.collection.add_body(seed.mass, seed.position, seed.momentum)
                body.set_trail_capacity(self.trail_length)
                if seed.color_index is not None:
                    self.collection.style_of(body).set_color_index(seed.color_index)
            self.selected_index = 0 if seeds else None
            self.frame = 0
        logger.info(f"Loaded preset {name!r} with {len(seeds)} bodies")
        return len(seeds)

    def body_labels(self) -> Tuple[List[str], Optional[int]]:
        """List-box labels and the selected index, without copying trails."""
        with self.lock:
            labels = [f"#{i}  m={b.mass:g}  ({b.x:.1f}, {b.y:.1f})" for i, b in enumerate(self.collection)]
            return labels, self.selected_index

    def frame_state(self) -> FrameState:
        """Copy of everything the renderer draws, taken under the lock."""
        with self.lock:
            com = self.collection.center_of_mass().as_tuple() if len(self.collection) else None
            return FrameState(
                bodies=self.collection.snapshot(),
                center_of_mass=com,
                selected_index=self.selected_index,
                playing=self.playing,
                speed=self.speed,
                frame=self.frame,
            )

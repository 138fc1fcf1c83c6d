#!/usr/bin/env python3
"""
Data models for Gravity Sim.

This module defines the Body physics entity, its separate presentation state
(BodyStyle), and the read-only BodySnapshot handed to renderers.

Units and usage
- position and momentum are in world units; a step adds momentum to position.
- mass is a float, conventionally in (0, 1]; radius is derived as mass * 10.
- trail stores pre-step positions, oldest first, to render motion paths.
- Bodies are owned by a BodyCollection, which is the only thing that steps them.
"""
import logging
import math
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Tuple

from .constants import (
    COLOR_OPTIONS,
    DEFAULT_TRAIL_THICKNESS,
    GRAVITY_DAMPING,
    MAX_TRAIL_LENGTH,
    RADIUS_PER_MASS,
)
from .errors import InvalidArgument
from .vector_utils import Vector2

logger = logging.getLogger("gravsim")


def validate_trail_capacity(n) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgument(f"Trail length must be an integer, got {n!r}")
    if n < 0 or n > MAX_TRAIL_LENGTH:
        raise InvalidArgument(f"Invalid trail length {n} (allowed 0..{MAX_TRAIL_LENGTH})")
    return n


@dataclass(eq=False)
class Body:
    """
    A gravitationally interacting point mass.

    Fields:
    - mass: Mass of the body, fixed after construction
    - position: Current location
    - momentum: Displacement applied to position on every step
    - trail: Deque of past positions; its maxlen is the trail capacity
    """
    mass: float
    position: Vector2
    momentum: Vector2 = field(default_factory=Vector2)
    trail: Deque[Vector2] = field(default_factory=lambda: deque(maxlen=0))

    def __setattr__(self, name, value):
        if name == "mass" and "mass" in self.__dict__:
            raise AttributeError("Body mass is fixed after construction")
        super().__setattr__(name, value)

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @property
    def radius(self) -> float:
        return self.mass * RADIUS_PER_MASS

    @property
    def trail_capacity(self) -> int:
        return self.trail.maxlen

    def set_trail_capacity(self, n: int) -> int:
        """Set how many past positions are kept; 0 disables the trail."""
        n = validate_trail_capacity(n)
        self.trail = deque(self.trail, maxlen=n)
        return n

    def gravitational_coefficient(self, other: "Body") -> float:
        """
        Strength of the attraction of this body to `other`: the product of the
        masses over the squared distance, scaled by GRAVITY_DAMPING. It is used
        as a coefficient on the position difference, so it is not normalised.

        Coincident bodies yield inf; the caller's momentum then becomes NaN.
        """
        r = self.position.distance(other.position)
        if r == 0:
            logger.warning(f"Coincident bodies at {self.position}; gravity is undefined")
            return math.inf
        return (self.mass * other.mass) / (r * r) * GRAVITY_DAMPING

    def apply_gravity(self, other: "Body") -> None:
        """Pull this body's momentum toward `other`. Positions are not touched."""
        c = self.gravitational_coefficient(other)
        d = self.position.difference(other.position)
        self.momentum = self.momentum.add(d.scale(c))

    def advance(self) -> None:
        """Record the current position in the trail, then move by momentum."""
        if self.trail.maxlen:
            self.trail.append(self.position)
        self.position = self.position.add(self.momentum)

    def __str__(self) -> str:
        return (
            "BODY SNAPSHOT\n"
            f"  Position: {self.position}\n"
            f"  Motion vector: {self.momentum}\n"
        )


@dataclass
class BodyStyle:
    """Cosmetic state for one body. Never read by the physics."""
    radius: float
    color_index: int = 0
    trail_thickness: float = DEFAULT_TRAIL_THICKNESS

    @property
    def color(self) -> str:
        return COLOR_OPTIONS[self.color_index]

    def set_color_index(self, i: int) -> int:
        if isinstance(i, bool) or not isinstance(i, int) or not 0 <= i < len(COLOR_OPTIONS):
            raise InvalidArgument(f"Invalid color index {i!r}")
        self.color_index = i
        return i

    def set_random_color(self, rng: Optional[random.Random] = None) -> int:
        rng = rng or random
        self.color_index = rng.randrange(len(COLOR_OPTIONS))
        return self.color_index

    def set_trail_thickness(self, pixels: float) -> float:
        if isinstance(pixels, bool) or not isinstance(pixels, (int, float)) or not 0 < pixels <= self.radius:
            raise InvalidArgument(f"Invalid trail thickness {pixels} (allowed (0, {self.radius}])")
        self.trail_thickness = pixels
        return pixels


@dataclass(frozen=True)
class BodySnapshot:
    """Everything a renderer needs to draw one body at one instant."""
    index: int
    mass: float
    position: Tuple[float, float]
    momentum: Tuple[float, float]
    radius: float
    trail: Tuple[Tuple[float, float], ...]
    color_index: int
    color: str
    trail_thickness: float

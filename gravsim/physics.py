#!/usr/bin/env python3
"""
Core Physics Engine for Gravity Sim

Responsibilities
- Own a small, capacity-bounded collection of bodies and their presentation styles.
- Advance the collection with a two-phase step: accumulate pairwise gravity into
  every momentum, then displace every body by its momentum.
- Provide aggregate queries (center of mass) and read-only snapshots for renderers.

Force law
- For each ordered pair (i, j), i != j:
      c = m_i * m_j / d^2 * 0.5
      momentum_i += c * (position_j - position_i)
  The 0.5 factor is a fixed damping constant of the model, not physical G.

Phase barrier
- Every momentum update of a step reads only pre-step positions. All of phase 1
  finishes for all bodies before any position changes in phase 2.

Complexity
- Accumulation is O(N^2) per step (direct summation); N is capped at MAX_BODIES.

Threading
- A collection is stepped by a single owner. SimulationController wraps it in a
  lock when it is shared between the renderer and UI threads.
"""

import logging
import math
import random
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .constants import MAX_BODIES
from .data_models import Body, BodySnapshot, BodyStyle, validate_trail_capacity
from .errors import CapacityExceeded, EmptyCollection, IndexOutOfRange, InvalidArgument
from .vector_utils import Vector2

logger = logging.getLogger("gravsim")

VectorLike = Union[Vector2, Sequence[float]]


class BodyCollection:
    """
    A set of at most MAX_BODIES bodies that attract one another.

    Each body is paired with a BodyStyle stored at the same index; removing a
    body removes its style.
    """

    MAX_BODIES = MAX_BODIES

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Args:
            rng: Random source for the initial color of new bodies
        """
        self._bodies: List[Body] = []
        self._styles: List[BodyStyle] = []
        self.rng = rng or random.Random()

    # -----------------------
    # Membership
    # -----------------------

    @property
    def bodies(self) -> Tuple[Body, ...]:
        return tuple(self._bodies)

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self) -> Iterator[Body]:
        return iter(list(self._bodies))

    def _check_index(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._bodies):
            raise IndexOutOfRange(f"No body at index {index!r} (collection holds {len(self._bodies)})")
        return index

    def body(self, index: int) -> Body:
        return self._bodies[self._check_index(index)]

    def style(self, index: int) -> BodyStyle:
        return self._styles[self._check_index(index)]

    def index_of(self, body: Body) -> int:
        for i, b in enumerate(self._bodies):
            if b is body:
                return i
        raise IndexOutOfRange("Body is not a member of this collection")

    def style_of(self, body: Body) -> BodyStyle:
        return self._styles[self.index_of(body)]

    def add_body(self, mass: float, position: VectorLike, momentum: Optional[VectorLike] = None) -> Body:
        """
        Add a body to the collection.

        Args:
            mass: The body's mass, some float in (0, 1] by convention
            position: Initial position, a Vector2 or (x, y)
            momentum: Initial momentum, zero when omitted

        Returns:
            The Body that was added, for further configuration
        """
        if len(self._bodies) >= self.MAX_BODIES:
            raise CapacityExceeded(f"Body count limit reached ({self.MAX_BODIES}).")
        if isinstance(mass, bool) or not isinstance(mass, (int, float)) or not math.isfinite(mass) or mass <= 0:
            raise InvalidArgument(f"Mass must be a positive finite number, got {mass!r}")

        pos = Vector2.of(position)
        mom = Vector2() if momentum is None else Vector2.of(momentum)
        for v in (pos, mom):
            if not (math.isfinite(v.x) and math.isfinite(v.y)):
                raise InvalidArgument(f"Position and momentum must be finite, got {v}")
        body = Body(mass=float(mass), position=pos, momentum=mom)
        style = BodyStyle(radius=body.radius)
        style.set_random_color(self.rng)

        self._bodies.append(body)
        self._styles.append(style)
        logger.info(f"Added body #{len(self._bodies) - 1}: mass={body.mass} at {pos}")
        return body

    def add_body_at(self, x: float = 0.0, y: float = 0.0) -> Body:
        """Add a unit-mass body at rest."""
        return self.add_body(1.0, (x, y))

    def remove_body(self, index: int) -> Body:
        self._check_index(index)
        del self._styles[index]
        body = self._bodies.pop(index)
        logger.info(f"Removed body #{index}")
        return body

    def clear(self) -> None:
        self._bodies.clear()
        self._styles.clear()

    def set_trail_capacity(self, n: int) -> None:
        """Apply one trail capacity to every body."""
        validate_trail_capacity(n)
        for b in self._bodies:
            b.set_trail_capacity(n)

    # -----------------------
    # Simulation
    # -----------------------

    def accumulate(self) -> None:
        """
        Phase 1: update every momentum from the gravity of every other body,
        using the positions as they stand before this step.
        """
        bodies = self._bodies
        n = len(bodies)
        for i in range(n):
            for j in range(n):
                if i == j:
                    continue  # Skip self-interaction
                bodies[i].apply_gravity(bodies[j])

    def displace(self) -> None:
        """Phase 2: move every body by its momentum, recording trails."""
        for b in self._bodies:
            b.advance()

    def step(self) -> None:
        """One full simulation step. Phase 1 completes for all bodies before phase 2."""
        self.accumulate()
        self.displace()

    def run_steps(self, n: int) -> None:
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise InvalidArgument(f"Step count must be a non-negative integer, got {n!r}")
        for _ in range(n):
            self.step()

    # -----------------------
    # Queries
    # -----------------------

    def center_of_mass(self) -> Vector2:
        """Mass-weighted average of all positions."""
        if not self._bodies:
            raise EmptyCollection("Center of mass of an empty collection is undefined")

        x_comp = 0.0
        y_comp = 0.0
        mass = 0.0
        for b in self._bodies:
            x_comp += b.x * b.mass
            y_comp += b.y * b.mass
            mass += b.mass
        return Vector2(x_comp / mass, y_comp / mass)

    def snapshot(self) -> List[BodySnapshot]:
        return [
            BodySnapshot(
                index=i,
                mass=b.mass,
                position=b.position.as_tuple(),
                momentum=b.momentum.as_tuple(),
                radius=b.radius,
                trail=tuple(p.as_tuple() for p in b.trail),
                color_index=s.color_index,
                color=s.color,
                trail_thickness=s.trail_thickness,
            )
            for i, (b, s) in enumerate(zip(self._bodies, self._styles))
        ]

    def log_state(self, level: int = logging.DEBUG) -> None:
        """Log the center of mass and every body's position and momentum."""
        if self._bodies:
            logger.log(level, f"CENTER OF MASS: {self.center_of_mass()}")
        logger.log(level, f"BODIES: {len(self._bodies)}")
        for b in self._bodies:
            logger.log(level, str(b))

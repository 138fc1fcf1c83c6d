#!/usr/bin/env python3
"""
Built-in scenes for Gravity Sim.

A scene is a list of BodySeed records; SimulationController turns them into
bodies. Orbit speeds are derived for this model's force law, where a body of
mass m_i pulled by m_j at distance d gains 0.5 * m_i * m_j / d per step.
"""
import math
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from .constants import GRAVITY_DAMPING
from .errors import InvalidArgument


class BodySeed(NamedTuple):
    mass: float
    position: Tuple[float, float]
    momentum: Tuple[float, float] = (0.0, 0.0)
    color_index: Optional[int] = None


def binary_orbit_speed(m1: float, m2: float) -> float:
    """
    Speed of each body of a pair circling their midpoint.

    Both bodies feel the same pull 0.5 * m1 * m2 / d, so each follows a circle
    of radius d / 2: v^2 / (d / 2) = 0.5 * m1 * m2 / d.
    """
    return math.sqrt(GRAVITY_DAMPING * m1 * m2 / 2.0)


def lagrange_orbit_speed(mass: float) -> float:
    """
    Speed of three equal masses on an equilateral triangle rotating about its
    centre. The pull toward the centre is mass^2 / (2R), independent of the
    side length, so v = mass / sqrt(2).
    """
    return math.sqrt(GRAVITY_DAMPING) * mass


def template_empty() -> List[BodySeed]:
    return []


def template_triangle() -> List[BodySeed]:
    """Three unit masses at rest, falling toward each other."""
    return [
        BodySeed(1.0, (-8.0, 3.0), color_index=1),
        BodySeed(1.0, (11.0, -14.0), color_index=6),
        BodySeed(1.0, (-32.0, 19.0), color_index=9),
    ]


def template_binary() -> List[BodySeed]:
    """Two unit masses on a shared circular orbit."""
    half_sep = 60.0
    v = binary_orbit_speed(1.0, 1.0)
    return [
        BodySeed(1.0, (-half_sep, 0.0), (0.0, -v), color_index=13),
        BodySeed(1.0, (half_sep, 0.0), (0.0, v), color_index=7),
    ]


def template_lagrange_triangle() -> List[BodySeed]:
    """Equal masses on an equilateral triangle, all rotating about the centre."""
    m = 0.8
    R = 120.0
    v = lagrange_orbit_speed(m)

    p1 = (R, 0.0)
    p2 = (-R / 2, +R * math.sqrt(3) / 2)
    p3 = (-R / 2, -R * math.sqrt(3) / 2)

    def tangent_velocity(pos):
        return (-pos[1] / R * v, pos[0] / R * v)

    return [
        BodySeed(m, p1, tangent_velocity(p1), color_index=1),
        BodySeed(m, p2, tangent_velocity(p2), color_index=9),
        BodySeed(m, p3, tangent_velocity(p3), color_index=6),
    ]


PRESETS: Dict[str, Callable[[], List[BodySeed]]] = {
    "Empty": template_empty,
    "Triangle": template_triangle,
    "Binary": template_binary,
    "Lagrange triangle": template_lagrange_triangle,
}


def list_presets() -> List[str]:
    return list(PRESETS)


def load_preset(name: str) -> List[BodySeed]:
    try:
        return PRESETS[name]()
    except KeyError:
        raise InvalidArgument(f"Unknown preset {name!r}") from None

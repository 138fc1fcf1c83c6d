#!/usr/bin/env python3
"""
Vector helpers for 2D operations.

Vector2 is a small immutable value used for both positions and momenta.
Operations always return new vectors, so a vector can be shared freely
without one body's update leaking into another.
"""
import math
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple, Union


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


@dataclass(frozen=True)
class Vector2:
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def of(cls, value: Union["Vector2", Sequence[float]]) -> "Vector2":
        """Accept a Vector2 or any (x, y) pair."""
        if isinstance(value, Vector2):
            return value
        x, y = value
        return cls(float(x), float(y))

    def difference(self, other: "Vector2") -> "Vector2":
        """
        Vector pointing from this one toward `other`, i.e. ``other - self``.

        Vector2(-5, 7).difference(Vector2(2, 3)) == Vector2(7, -4)
        """
        return Vector2(other.x - self.x, other.y - self.y)

    def distance(self, other: "Vector2") -> float:
        d = self.difference(other)
        return math.sqrt(d.x * d.x + d.y * d.y)

    def add(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def scale(self, s: float) -> "Vector2":
        return Vector2(self.x * s, self.y * s)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __add__(self, other: "Vector2") -> "Vector2":
        return self.add(other)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return self.scale(scalar)

    def __rmul__(self, scalar: float) -> "Vector2":
        return self.scale(scalar)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __str__(self) -> str:
        return f"[ {self.x}, {self.y} ]"

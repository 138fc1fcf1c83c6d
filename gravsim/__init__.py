"""
Gravity Sim engine: point masses that attract one another in the plane.

Re-exports the public API so callers can import from the package root.
"""

from .vector_utils import Vector2, clamp
from .errors import (
    GravSimError,
    InvalidArgument,
    CapacityExceeded,
    IndexOutOfRange,
    EmptyCollection,
)
from .data_models import Body, BodyStyle, BodySnapshot
from .physics import BodyCollection
from .presets import BodySeed, list_presets, load_preset
from .controller import SimulationController, FrameState
from .camera import Camera2D

__all__ = [
    "Vector2",
    "clamp",
    "GravSimError",
    "InvalidArgument",
    "CapacityExceeded",
    "IndexOutOfRange",
    "EmptyCollection",
    "Body",
    "BodyStyle",
    "BodySnapshot",
    "BodyCollection",
    "BodySeed",
    "list_presets",
    "load_preset",
    "SimulationController",
    "FrameState",
    "Camera2D",
]

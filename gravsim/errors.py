#!/usr/bin/env python3
"""
Exceptions raised by the Gravity Sim engine.

Every check happens before any state is touched, so an object that raised
one of these is left exactly as it was before the call.
"""


class GravSimError(Exception):
    """Base class for all engine errors."""


class InvalidArgument(GravSimError, ValueError):
    """A value is outside the range an operation accepts."""


class CapacityExceeded(GravSimError):
    """A body collection is already at its maximum size."""


class IndexOutOfRange(GravSimError, IndexError):
    """No body exists at the requested index."""


class EmptyCollection(GravSimError):
    """An aggregate was requested from a collection with no bodies."""

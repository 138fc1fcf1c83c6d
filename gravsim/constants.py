#!/usr/bin/env python3
"""
Shared constants for Gravity Sim.

World units are arbitrary "pixels at zoom 1"; one simulation step is one tick
of the engine. Keeping the model constants in one place keeps the engine,
the controller and the viewport in agreement.
"""

# Model limits
MAX_BODIES = 10
MAX_TRAIL_LENGTH = 100000

# Force law: c = m1 * m2 / d^2 * GRAVITY_DAMPING
GRAVITY_DAMPING = 0.5
RADIUS_PER_MASS = 10  # radius = mass * RADIUS_PER_MASS

# Presentation defaults
DEFAULT_TRAIL_THICKNESS = 2
COLOR_OPTIONS = (
    "#ffffff",  # White
    "#f44336",  # Red
    "#E91E63",  # Pink
    "#9C27B0",  # Purple
    "#673AB7",  # Deep Purple
    "#3F51B5",  # Indigo
    "#2196F3",  # Blue
    "#00BCD4",  # Cyan
    "#009688",  # Teal
    "#4CAF50",  # Green
    "#CDDC39",  # Lime
    "#FFEB3B",  # Yellow
    "#FFC107",  # Amber
    "#FF9800",  # Orange
    "#FF5722",  # Deep Orange
)

# Driver controls
DEFAULT_SPEED = 1  # simulation steps per rendered frame
MAX_SPEED = 200
DEFAULT_TRAIL_LENGTH = 250
TARGET_FPS = 60

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
BACKGROUND_COLOR = (10, 12, 18)
GRID_COLOR = (40, 45, 60)
SELECTION_COLOR = (255, 255, 0)
CENTER_OF_MASS_COLOR = (230, 230, 230)
HUD_TEXT_COLOR = (200, 200, 200)

# Camera zoom bounds (world units per pixel)
DEFAULT_UNITS_PER_PIXEL = 1.0
MIN_UNITS_PER_PIXEL = 0.01
MAX_UNITS_PER_PIXEL = 1000.0

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000

"""Animation constants for the breathing circle."""

from __future__ import annotations

# Circle scale range (multiplier of the idle circle size)
DEFAULT_MIN_SCALE = 1.0
DEFAULT_MAX_SCALE = 5.0

# Idle presentation
NEUTRAL_SCALE = 1.0
NEUTRAL_OPACITY = 1.0

# Opacity ramps: value at progress 0 and change over the phase
INHALE_OPACITY_START = 0.8
INHALE_OPACITY_DELTA = 0.2
EXHALE_OPACITY_START = 1.0
EXHALE_OPACITY_DELTA = 0.3
HOLD_OPACITY = 1.0

# Display refresh cadence used by the asyncio scheduler
DEFAULT_FPS = 60
DEFAULT_FRAME_INTERVAL_SEC = 1.0 / DEFAULT_FPS

STOPPED_INSTRUCTION = "Exercise stopped"


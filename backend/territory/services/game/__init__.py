"""Game domain services: grid, players, rounds and timers.

This package holds the authoritative game state and the rules that mutate
it. Socket handlers and HTTP routes import from here, keeping transport
concerns separated from core game mechanics.
"""

from .context import GameContext, now_ms  # noqa: F401
